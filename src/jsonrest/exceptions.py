"""Exception classes for the jsonrest client"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from requests import exceptions as req_exceptions


class ErrorCategory(str, Enum):
    """Error category codes"""
    PARSE = "PARSE"
    ENCODE = "ENCODE"
    TRANSPORT = "NET"
    REMOTE = "REMOTE"
    DECODE = "DECODE"
    CONFIG = "CONFIG"
    UNKNOWN = "UNKNOWN"


class TransportErrorCode(str, Enum):
    """Transport error codes"""
    TIMEOUT = "NET01"
    CONNECTION_FAILED = "NET02"
    SSL_ERROR = "NET04"
    BODY_READ_FAILED = "NET06"
    UNKNOWN = "NET10"


class ClientError(Exception):
    """
    Base exception for client errors

    Every failure surfaced by RequestClient extends this class, so callers
    can catch it once and branch on the subclass or on ``category``.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: int = 0,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.url = url
        self.cause = cause
        self.details = details
        self.timestamp = datetime.now(timezone.utc)
        self.category = self._determine_category(code)

    def _determine_category(self, code: Optional[str]) -> ErrorCategory:
        """Determine error category from code"""
        if not code:
            return ErrorCategory.UNKNOWN

        if code.startswith("PARSE"):
            return ErrorCategory.PARSE
        if code.startswith("ENCODE"):
            return ErrorCategory.ENCODE
        if code.startswith("NET"):
            return ErrorCategory.TRANSPORT
        if code.startswith("REMOTE"):
            return ErrorCategory.REMOTE
        if code.startswith("DECODE"):
            return ErrorCategory.DECODE
        if code.startswith("CONFIG") or code == "VALIDATION_ERROR":
            return ErrorCategory.CONFIG

        return ErrorCategory.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "name": self.__class__.__name__,
            "message": str(self),
            "code": self.code,
            "status_code": self.status_code,
            "url": self.url,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }

    def has_code(self, code: str) -> bool:
        """Check if error has a specific code"""
        return self.code == code

    def is_category(self, category: ErrorCategory) -> bool:
        """Check if error belongs to a category"""
        return self.category == category

    def get_description(self) -> str:
        """Get human-readable error description"""
        parts = [self.message]

        if self.code:
            parts.insert(0, f"[{self.code}]")

        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")

        if self.url:
            parts.append(f"url={self.url}")

        return " ".join(parts)


class ParseError(ClientError):
    """Target URL could not be parsed; raised before any network I/O"""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code="PARSE01", url=url, cause=cause)


class EncodeError(ClientError):
    """Request payload could not be serialized to JSON"""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code="ENCODE01", url=url, cause=cause)


class TransportError(ClientError):
    """
    Connection level failure

    No HTTP status was obtained, so ``status_code`` is always 0.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        transport_code: TransportErrorCode = TransportErrorCode.UNKNOWN,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message,
            code=transport_code.value,
            status_code=0,
            url=url,
            cause=cause,
        )
        self.transport_code = transport_code

    def __str__(self) -> str:
        parts = [f"request failed at {self.timestamp.isoformat()}: {self.message}"]
        if self.url:
            parts.append(f"url={self.url}")
        if self.cause is not None:
            parts.append(f"cause={type(self.cause).__name__}: {self.cause}")
        return " | ".join(parts)

    @classmethod
    def timeout(
        cls, url: Optional[str] = None, cause: Optional[BaseException] = None
    ) -> "TransportError":
        """Create a timeout error"""
        return cls("Request timed out", url, TransportErrorCode.TIMEOUT, cause)

    @classmethod
    def connection_failed(
        cls, url: Optional[str] = None, cause: Optional[BaseException] = None
    ) -> "TransportError":
        """Create a connection error (DNS, refused, unreachable)"""
        return cls(
            "Connection failed", url, TransportErrorCode.CONNECTION_FAILED, cause
        )

    @classmethod
    def ssl_error(
        cls, url: Optional[str] = None, cause: Optional[BaseException] = None
    ) -> "TransportError":
        """Create an SSL/TLS error"""
        return cls("SSL/TLS error", url, TransportErrorCode.SSL_ERROR, cause)

    @classmethod
    def from_exception(
        cls, error: BaseException, url: Optional[str] = None
    ) -> "TransportError":
        """Map a requests exception onto a transport error"""
        if isinstance(error, req_exceptions.SSLError):
            return cls.ssl_error(url, error)
        if isinstance(error, req_exceptions.Timeout):
            return cls.timeout(url, error)
        if isinstance(error, req_exceptions.ConnectionError):
            return cls.connection_failed(url, error)
        if isinstance(
            error,
            (req_exceptions.ChunkedEncodingError, req_exceptions.ContentDecodingError),
        ):
            return cls(
                "Failed to read response body",
                url,
                TransportErrorCode.BODY_READ_FAILED,
                error,
            )
        return cls(f"Request error: {error}", url, TransportErrorCode.UNKNOWN, error)


class RemoteError(ClientError):
    """
    Non-200 response

    Carries the HTTP status plus whatever error fields the remote returned.
    Missing or malformed body fields are left at their zero values.
    """

    def __init__(
        self,
        status_code: int,
        error_type: str = "",
        error_code: int = 0,
        error_description: str = "",
        url: Optional[str] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"{status_code}: [{error_code}] {error_description}",
            code="REMOTE01",
            status_code=status_code,
            url=url,
        )
        self.error_type = error_type
        self.error_code = error_code
        self.error_description = error_description
        self.body = body

    def to_wire(self) -> Dict[str, Any]:
        """Error wire shape; the HTTP status is carried out-of-band"""
        return {
            "error_type": self.error_type,
            "error_code": self.error_code,
            "error_description": self.error_description,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to the error wire shape"""
        return json.dumps(self.to_wire(), indent=indent)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(self.to_wire())
        return data


class DecodeError(ClientError):
    """Response body could not be decoded into the requested target"""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        url: Optional[str] = None,
        body: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            message,
            code="DECODE01",
            status_code=status_code,
            url=url,
            cause=cause,
        )
        self.body = body


class ValidationError(ClientError):
    """Validation error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class ConfigError(ClientError):
    """Configuration error"""

    def __init__(
        self,
        message: str,
        code: str = "CONFIG01",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
