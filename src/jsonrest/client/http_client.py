"""
HTTP request client
Wraps one pooled requests.Session with JSON helpers per HTTP verb,
bearer/basic credential injection and typed errors for non-200 responses
"""

import threading
import time
import uuid
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter
from requests.auth import HTTPBasicAuth
from pydantic_core import PydanticSerializationError

from jsonrest.client.payload import (
    JsonBody,
    RawBody,
    RequestBody,
    check_target,
    decode_into,
    to_body,
)
from jsonrest.config.client_config import ClientConfig
from jsonrest.exceptions import (
    DecodeError,
    EncodeError,
    ParseError,
    RemoteError,
    TransportError,
)
from jsonrest.models.credentials import Credentials
from jsonrest.models.error_body import ErrorBody
from jsonrest.utils.logger import enable_debug_output, release_debug_output


logger = logging.getLogger(__name__)

# Bodies longer than this are cut in diagnostics and error details
BODY_PREVIEW_LIMIT = 2000


class HttpMethod(str, Enum):
    """HTTP method types supported"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


@dataclass
class DiagnosticEntry:
    """Diagnostic record for one request, built when debug is enabled"""
    timestamp: str
    request_id: str
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[Any] = None
    status: Optional[int] = None
    response_body: Optional[str] = None
    duration: int = 0  # milliseconds
    success: bool = False
    error: Optional[str] = None


# Sensitive fields that should be redacted in diagnostics
SENSITIVE_FIELDS = [
    "authorization",
    "x-api-key",
    "password",
    "token",
    "secret",
]


DiagnosticCallback = Callable[[DiagnosticEntry], None]


def _preview(raw: bytes) -> str:
    text = raw.decode("utf-8", errors="replace")
    if len(text) > BODY_PREVIEW_LIMIT:
        return text[:BODY_PREVIEW_LIMIT] + "..."
    return text


class RequestClient:
    """
    JSON over HTTP client

    Features:
    - One pooled session per client, reused by every call
    - Bearer token and HTTP Basic credential injection
    - JSON request encoding and response decoding into caller targets
    - Typed errors: ParseError, EncodeError, TransportError, RemoteError,
      DecodeError
    - Optional diagnostics with credential redaction

    Example:
        >>> client = RequestClient.create("https://api.example.com", debug=True)
        >>> client.set_bearer_token("secret")
        >>> user = client.get("https://api.example.com/users/1", User)
    """

    def __init__(self, config: Optional[ClientConfig] = None) -> None:
        """
        Create a new client instance

        Args:
            config: Resolved client configuration, defaults when omitted
        """
        self.config = config or ClientConfig()

        self._credentials = Credentials(
            bearer_token=self.config.bearer_token or "",
            username=self.config.basic_auth_username or "",
            password=self.config.basic_auth_password or "",
        )
        self._credentials_lock = threading.Lock()

        self._diagnostic_callback: Optional[DiagnosticCallback] = None

        self._holds_debug_output = self.config.debug
        if self._holds_debug_output:
            enable_debug_output()

        self._session = self._create_session()

    @classmethod
    def create(
        cls, base_address: str = "", debug: bool = False, **settings: Any
    ) -> "RequestClient":
        """
        Build a client from a base address and keyword settings

        Args:
            base_address: Informational base address
            debug: Emit request/response diagnostics
            settings: Any other ClientConfig field

        Raises:
            pydantic.ValidationError: If a setting is invalid
        """
        config = ClientConfig(base_address=base_address, debug=debug, **settings)
        return cls(config)

    def _create_session(self) -> requests.Session:
        """Create requests session with connection pooling"""
        session = requests.Session()
        # ignore netrc and proxy environment variables
        session.trust_env = False

        # no retries at this layer
        adapter = HTTPAdapter(
            pool_connections=self.config.pool_connections,
            pool_maxsize=self.config.pool_maxsize,
            max_retries=0,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        if self.config.insecure_skip_verify:
            logger.warning(
                f"TLS certificate verification is DISABLED for client "
                f"{self.config.base_address or '<no base address>'}"
            )
            session.verify = False
        elif self.config.ca_bundle:
            session.verify = self.config.ca_bundle

        if self.config.user_agent:
            session.headers["User-Agent"] = self.config.user_agent

        return session

    # credentials

    def set_bearer_token(self, token: str) -> None:
        """Set the bearer token; an empty string disables it"""
        with self._credentials_lock:
            self._credentials = self._credentials.with_bearer_token(token)

    def set_basic_auth(self, username: str, password: str) -> None:
        """Set HTTP Basic credentials; both empty disables them"""
        with self._credentials_lock:
            self._credentials = self._credentials.with_basic_auth(username, password)

    def clear_credentials(self) -> None:
        """Remove bearer and basic credentials"""
        with self._credentials_lock:
            self._credentials = Credentials()

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def bearer_token(self) -> str:
        return self._credentials.bearer_token

    @property
    def basic_auth(self) -> Optional[Tuple[str, str]]:
        return self._credentials.basic_auth

    @property
    def base_address(self) -> str:
        return self.config.base_address

    @property
    def debug(self) -> bool:
        return self.config.debug

    # diagnostics

    def set_diagnostic_callback(self, callback: Optional[DiagnosticCallback]) -> None:
        """Receive a DiagnosticEntry per request while debug is enabled"""
        self._diagnostic_callback = callback

    def _generate_request_id(self) -> str:
        """Generate unique request ID for traceability"""
        timestamp = hex(int(time.time() * 1000))[2:]
        unique_id = uuid.uuid4().hex[:8]
        return f"req-{timestamp}-{unique_id}"

    def _redact_sensitive_data(self, obj: Any) -> Any:
        """Redact sensitive data from object for logging"""
        if obj is None or isinstance(obj, str):
            return obj

        if isinstance(obj, list):
            return [self._redact_sensitive_data(item) for item in obj]

        if isinstance(obj, dict):
            redacted = {}
            for key, value in obj.items():
                lower_key = str(key).lower()
                if any(field in lower_key for field in SENSITIVE_FIELDS):
                    redacted[key] = "[REDACTED]"
                elif isinstance(value, (dict, list)):
                    redacted[key] = self._redact_sensitive_data(value)
                else:
                    redacted[key] = value
            return redacted

        return obj

    def _describe_body(self, body: RequestBody) -> Any:
        if isinstance(body, JsonBody):
            value = body.value
            if isinstance(value, (dict, list)):
                return self._redact_sensitive_data(value)
            return repr(value)
        if isinstance(body, RawBody):
            return f"<raw {type(body.data).__name__}>"
        return None

    def _emit_diagnostic(
        self,
        method: str,
        url: str,
        request_id: str,
        start_time: float,
        prepared: Optional[requests.PreparedRequest],
        body: RequestBody,
        status: Optional[int] = None,
        raw: Optional[bytes] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Build and deliver a diagnostic entry; never raises"""
        if not self.config.debug or self._diagnostic_callback is None:
            return

        entry = DiagnosticEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_id=request_id,
            method=method,
            url=url,
            headers=self._redact_sensitive_data(
                dict(prepared.headers) if prepared is not None else {}
            ),
            body=self._describe_body(body),
            status=status,
            response_body=_preview(raw) if raw is not None else None,
            duration=int((time.time() - start_time) * 1000),
            success=error is None,
            error=str(error) if error else None,
        )

        try:
            self._diagnostic_callback(entry)
        except Exception:
            logger.exception(f"Diagnostic callback failed for {request_id}")

    # request pipeline

    def _resolve_method(self, method: Any) -> HttpMethod:
        """Accept an HttpMethod or a method name in any case"""
        if isinstance(method, str):
            method = method.upper()
        try:
            return HttpMethod(method)
        except ValueError:
            supported = ", ".join(m.value for m in HttpMethod)
            raise ValueError(
                f"Unsupported HTTP method {method!r}; expected one of {supported}"
            ) from None

    def _parse_url(self, rawurl: str) -> str:
        """Validate an absolute http(s) URL"""
        if not isinstance(rawurl, str) or rawurl.strip() == "":
            raise ParseError("URL must be a non-empty string", url=str(rawurl))

        try:
            parts = urlsplit(rawurl)
            # port is parsed lazily and raises on garbage
            parts.port
        except ValueError as e:
            raise ParseError(f"Malformed URL: {e}", url=rawurl, cause=e) from e

        if parts.scheme.lower() not in ("http", "https"):
            raise ParseError(
                f"Unsupported URL scheme {parts.scheme!r}; expected http or https",
                url=rawurl,
            )
        if not parts.hostname:
            raise ParseError("URL has no host", url=rawurl)
        return rawurl

    def _prepare(
        self,
        method: HttpMethod,
        url: str,
        body: RequestBody,
        credentials: Credentials,
    ) -> requests.PreparedRequest:
        """Build the outbound request with credentials and encoded body"""
        headers: Dict[str, str] = {}
        data: Any = None

        if credentials.has_bearer:
            headers["Authorization"] = f"Bearer {credentials.bearer_token}"

        # Basic auth is applied after the header above, so it wins when both are set
        auth = None
        if credentials.has_basic_auth:
            auth = HTTPBasicAuth(credentials.username, credentials.password)

        if isinstance(body, JsonBody):
            try:
                data = body.encode()
            except PydanticSerializationError as e:
                raise EncodeError(
                    f"Request payload is not JSON serializable: {e}", url=url, cause=e
                ) from e
            headers["Content-Type"] = body.content_type
            headers["Content-Length"] = str(len(data))
            if self.config.debug:
                logger.debug(
                    f"Request {method.value} to {url} at "
                    f"{datetime.now(timezone.utc).isoformat()}, data: {_preview(data)}"
                )
        elif isinstance(body, RawBody):
            data = body.data
            headers["Content-Type"] = body.content_type
            if self.config.debug:
                logger.debug(
                    f"Request {method.value} to {url} at "
                    f"{datetime.now(timezone.utc).isoformat()}, raw body"
                )
        elif self.config.debug:
            logger.debug(
                f"Request {method.value} to {url} at "
                f"{datetime.now(timezone.utc).isoformat()}"
            )

        request = requests.Request(
            method=method.value,
            url=url,
            headers=headers,
            data=data,
            auth=auth,
        )
        try:
            return self._session.prepare_request(request)
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
        ) as e:
            raise ParseError(f"Malformed URL: {e}", url=url, cause=e) from e
        except requests.exceptions.InvalidHeader as e:
            raise EncodeError(f"Invalid request header: {e}", url=url, cause=e) from e

    def execute(
        self,
        url: str,
        method: HttpMethod,
        payload: Any = None,
        out: Any = None,
    ) -> Any:
        """
        Perform one request/response cycle

        Args:
            url: Absolute request URL
            method: HttpMethod or a method name in any case
            payload: None, bytes/stream (sent raw) or a JSON serializable value
            out: Where to decode a 200 response; None discards the body

        Returns:
            The decoded value (a new instance for type targets, ``out`` itself
            for instance targets) or None when ``out`` is None

        Raises:
            ValueError: unknown HTTP method
            TypeError: unsupported output target
            ParseError: malformed URL, before any network I/O
            EncodeError: payload not JSON serializable or a credential is not a
                valid header value, before any network I/O
            TransportError: no HTTP response was obtained
            RemoteError: any status other than 200
            DecodeError: 200 body does not decode into ``out``
        """
        method = self._resolve_method(method)
        url = self._parse_url(url)
        check_target(out)

        body = to_body(payload)
        credentials = self._credentials
        prepared = self._prepare(method, url, body, credentials)

        request_id = self._generate_request_id()
        start_time = time.time()

        try:
            response = self._session.send(
                prepared,
                timeout=self.config.timeout_tuple(),
                stream=True,
            )
        except requests.exceptions.RequestException as e:
            error = TransportError.from_exception(e, url)
            logger.warning(f"Response error at {error.timestamp.isoformat()}, error: {error}")
            self._emit_diagnostic(
                method.value, url, request_id, start_time, prepared, body, error=error
            )
            raise error from e

        with response:
            try:
                raw = response.content
            except requests.exceptions.RequestException as e:
                error = TransportError.from_exception(e, url)
                logger.warning(f"Response body reader: {error}")
                self._emit_diagnostic(
                    method.value, url, request_id, start_time, prepared, body,
                    status=response.status_code, error=error,
                )
                raise error from e

            if response.status_code != 200:
                error_body = ErrorBody.parse_lenient(raw, debug=self.config.debug)
                remote_error = RemoteError(
                    status_code=response.status_code,
                    error_type=error_body.error_type,
                    error_code=error_body.error_code,
                    error_description=error_body.error_description,
                    url=url,
                    body=_preview(raw) if raw else None,
                )
                if self.config.debug:
                    logger.debug(
                        f"Response http error status {response.status_code} from {url} "
                        f"at {datetime.now(timezone.utc).isoformat()}, "
                        f"httpError: {remote_error.to_json(indent=1)}"
                    )
                self._emit_diagnostic(
                    method.value, url, request_id, start_time, prepared, body,
                    status=response.status_code, raw=raw, error=remote_error,
                )
                raise remote_error

            if out is None:
                if self.config.debug:
                    logger.debug(
                        f"Response status {response.status_code} from {url} "
                        f"at {datetime.now(timezone.utc).isoformat()}"
                    )
                self._emit_diagnostic(
                    method.value, url, request_id, start_time, prepared, body,
                    status=response.status_code, raw=raw,
                )
                return None

            if self.config.debug:
                logger.debug(
                    f"Response status {response.status_code} from {url} "
                    f"at {datetime.now(timezone.utc).isoformat()}, data: {_preview(raw)}"
                )

            try:
                result = decode_into(raw, out)
            except ValueError as e:
                decode_error = DecodeError(
                    f"Response JSON decoding failed: {e}",
                    status_code=response.status_code,
                    url=url,
                    body=_preview(raw),
                    cause=e,
                )
                if self.config.debug:
                    logger.debug(
                        f"Response json decoding error data: {_preview(raw)} err: {e}"
                    )
                self._emit_diagnostic(
                    method.value, url, request_id, start_time, prepared, body,
                    status=response.status_code, raw=raw, error=decode_error,
                )
                raise decode_error from e

            self._emit_diagnostic(
                method.value, url, request_id, start_time, prepared, body,
                status=response.status_code, raw=raw,
            )
            return result

    def get(self, url: str, out: Any = None) -> Any:
        """
        Perform GET request

        Args:
            url: Absolute request URL
            out: Decode target for the response body

        Returns:
            Decoded response, or None when ``out`` is None
        """
        return self.execute(url, HttpMethod.GET, None, out)

    def post(self, url: str, payload: Any = None, out: Any = None) -> Any:
        """
        Perform POST request

        Args:
            url: Absolute request URL
            payload: Request body (raw bytes/stream or JSON serializable value)
            out: Decode target for the response body

        Returns:
            Decoded response, or None when ``out`` is None
        """
        return self.execute(url, HttpMethod.POST, payload, out)

    def put(self, url: str, payload: Any = None, out: Any = None) -> Any:
        """Perform PUT request"""
        return self.execute(url, HttpMethod.PUT, payload, out)

    def patch(self, url: str, payload: Any = None, out: Any = None) -> Any:
        """Perform PATCH request"""
        return self.execute(url, HttpMethod.PATCH, payload, out)

    def delete(self, url: str, payload: Any = None, out: Any = None) -> Any:
        """Perform DELETE request"""
        return self.execute(url, HttpMethod.DELETE, payload, out)

    def close(self) -> None:
        """Close the HTTP session and release debug output"""
        self._session.close()
        if self._holds_debug_output:
            self._holds_debug_output = False
            release_debug_output()

    def __enter__(self) -> "RequestClient":
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit"""
        self.close()
