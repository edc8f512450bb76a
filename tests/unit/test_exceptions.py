"""
Exception Hierarchy Unit Tests
"""

import json

import pytest
import requests

from jsonrest.exceptions import (
    ClientError,
    ConfigError,
    DecodeError,
    EncodeError,
    ErrorCategory,
    ParseError,
    RemoteError,
    TransportError,
    TransportErrorCode,
    ValidationError,
)


class TestClientError:
    """Tests for the base error"""

    def test_category_from_code(self):
        """Should derive the category from the code prefix"""
        assert ClientError("x", code="PARSE01").category == ErrorCategory.PARSE
        assert ClientError("x", code="NET01").category == ErrorCategory.TRANSPORT
        assert ClientError("x", code="CONFIG01").category == ErrorCategory.CONFIG
        assert ClientError("x").category == ErrorCategory.UNKNOWN

    def test_to_dict(self):
        """Should serialize the main attributes"""
        data = ClientError("boom", code="REMOTE01", status_code=500, url="http://x").to_dict()
        assert data["name"] == "ClientError"
        assert data["status_code"] == 500
        assert data["category"] == "REMOTE"
        assert data["url"] == "http://x"

    def test_get_description(self):
        """Should include code and status"""
        error = ClientError("boom", code="REMOTE01", status_code=500)
        assert error.get_description() == "[REMOTE01] boom (HTTP 500)"

    @pytest.mark.parametrize(
        "error",
        [
            ParseError("bad url"),
            EncodeError("bad payload"),
            TransportError("down"),
            RemoteError(500),
            DecodeError("bad json"),
            ValidationError("bad config"),
            ConfigError("bad config"),
        ],
    )
    def test_all_errors_share_base(self, error):
        """Should let callers catch every failure with one clause"""
        assert isinstance(error, ClientError)


class TestRemoteError:
    """Tests for RemoteError"""

    def test_message_format(self):
        """Should render status, code and description"""
        error = RemoteError(403, "auth", 12, "forbidden")
        assert str(error) == "403: [12] forbidden"
        assert error.is_category(ErrorCategory.REMOTE)

    def test_wire_shape_excludes_status(self):
        """Should serialize to the error wire shape only"""
        error = RemoteError(403, "auth", 12, "forbidden")
        assert json.loads(error.to_json()) == {
            "error_type": "auth",
            "error_code": 12,
            "error_description": "forbidden",
        }

    def test_defaults(self):
        """Should default to zero values"""
        error = RemoteError(502)
        assert error.status_code == 502
        assert error.to_wire() == {"error_type": "", "error_code": 0, "error_description": ""}


class TestTransportError:
    """Tests for TransportError"""

    def test_status_is_zero(self):
        assert TransportError.timeout().status_code == 0
        assert TransportError.connection_failed().status_code == 0

    def test_string_carries_context(self):
        """Should include timestamp, url and cause"""
        cause = requests.exceptions.ConnectionError("refused")
        error = TransportError.from_exception(cause, "http://x/y")
        text = str(error)
        assert "request failed at" in text
        assert "url=http://x/y" in text
        assert "refused" in text

    def test_body_read_failures(self):
        """Should classify broken response bodies"""
        error = TransportError.from_exception(
            requests.exceptions.ChunkedEncodingError("cut"), "http://x"
        )
        assert error.transport_code == TransportErrorCode.BODY_READ_FAILED
