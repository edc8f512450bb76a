"""
jsonrest: a small JSON over HTTP client

Main entry point for the package
"""

import logging

from jsonrest.client import (
    RequestClient,
    HttpMethod,
    DiagnosticEntry,
    RawBody,
    JsonBody,
    EMPTY,
)
from jsonrest.exceptions import (
    ClientError,
    ErrorCategory,
    ParseError,
    EncodeError,
    TransportError,
    TransportErrorCode,
    RemoteError,
    DecodeError,
    ValidationError,
    ConfigError,
)

# Configuration
from jsonrest.config import (
    ClientConfig,
    ConfigLoader,
    ConfigValidator,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)

# Models
from jsonrest.models import Credentials, ErrorBody

from jsonrest.utils import (
    enable_debug_output,
    disable_debug_output,
    release_debug_output,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Client
    "RequestClient",
    "HttpMethod",
    "DiagnosticEntry",
    "RawBody",
    "JsonBody",
    "EMPTY",
    # Exceptions
    "ClientError",
    "ErrorCategory",
    "ParseError",
    "EncodeError",
    "TransportError",
    "TransportErrorCode",
    "RemoteError",
    "DecodeError",
    "ValidationError",
    "ConfigError",
    # Configuration
    "ClientConfig",
    "ConfigLoader",
    "ConfigValidator",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    # Models
    "Credentials",
    "ErrorBody",
    # Logging
    "enable_debug_output",
    "disable_debug_output",
    "release_debug_output",
]
