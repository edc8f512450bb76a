"""
HTTP Client module
"""

from jsonrest.client.http_client import (
    RequestClient,
    HttpMethod,
    DiagnosticEntry,
    DiagnosticCallback,
)
from jsonrest.client.payload import (
    RawBody,
    JsonBody,
    EmptyBody,
    EMPTY,
    RequestBody,
    to_body,
)

__all__ = [
    "RequestClient",
    "HttpMethod",
    "DiagnosticEntry",
    "DiagnosticCallback",
    "RawBody",
    "JsonBody",
    "EmptyBody",
    "EMPTY",
    "RequestBody",
    "to_body",
]
