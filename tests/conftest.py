"""Shared fixtures for the jsonrest test suite"""

import io
from typing import List, Optional

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from jsonrest import ClientConfig, RequestClient, disable_debug_output


class TrackingBody(io.BytesIO):
    """Response body that counts how often the connection was released"""

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        self.released = 0

    def release_conn(self) -> None:
        self.released += 1


class RecordingAdapter(BaseAdapter):
    """
    Transport stand-in mounted on a client's session

    Records every request it is asked to send and answers with a canned
    response, or raises ``error`` when one is configured.
    """

    def __init__(
        self,
        status: int = 200,
        body: bytes = b"",
        headers: Optional[dict] = None,
        error: Optional[Exception] = None,
    ) -> None:
        super().__init__()
        self.status = status
        self.body = body
        self.headers = headers or {"Content-Type": "application/json"}
        self.error = error
        self.sent: List[requests.PreparedRequest] = []
        self.send_kwargs: List[dict] = []
        self.bodies: List[TrackingBody] = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.send_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error

        raw = TrackingBody(self.body)
        self.bodies.append(raw)

        response = requests.Response()
        response.status_code = self.status
        response.headers = CaseInsensitiveDict(self.headers)
        response.raw = raw
        response.url = request.url
        response.request = request
        return response

    def close(self) -> None:
        pass


def mount(client: RequestClient, adapter: RecordingAdapter) -> RecordingAdapter:
    client._session.mount("http://", adapter)
    client._session.mount("https://", adapter)
    return adapter


@pytest.fixture
def client():
    with RequestClient(ClientConfig(base_address="http://localhost")) as c:
        yield c


@pytest.fixture
def debug_client():
    with RequestClient(ClientConfig(base_address="http://localhost", debug=True)) as c:
        yield c


@pytest.fixture
def recording(client: RequestClient) -> RecordingAdapter:
    return mount(client, RecordingAdapter())


@pytest.fixture
def mount_adapter():
    """Mount a RecordingAdapter built from keyword arguments on a client"""

    def _mount(client: RequestClient, **kwargs) -> RecordingAdapter:
        return mount(client, RecordingAdapter(**kwargs))

    return _mount


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep proxy settings and debug handlers from leaking between tests"""
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    yield
    disable_debug_output()
