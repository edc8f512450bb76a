"""
Client Configuration Types and Schema
Type-safe configuration objects for RequestClient
"""

from typing import Optional, Tuple
from pydantic import BaseModel, Field, field_validator, model_validator


class ConfigDefaults:
    """Default configuration values"""
    CONNECT_TIMEOUT = 30000
    READ_TIMEOUT = 10000
    POOL_CONNECTIONS = 10
    POOL_MAXSIZE = 10
    DEBUG = False
    INSECURE_SKIP_VERIFY = False


# Environment variable mapping
ENV_VAR_MAPPING = {
    "JSONREST_BASE_ADDRESS": "base_address",
    "JSONREST_DEBUG": "debug",
    "JSONREST_INSECURE_SKIP_VERIFY": "insecure_skip_verify",
    "JSONREST_CA_BUNDLE": "ca_bundle",
    "JSONREST_CONNECT_TIMEOUT": "connect_timeout",
    "JSONREST_READ_TIMEOUT": "read_timeout",
    "JSONREST_POOL_CONNECTIONS": "pool_connections",
    "JSONREST_POOL_MAXSIZE": "pool_maxsize",
    "JSONREST_BEARER_TOKEN": "bearer_token",
    "JSONREST_BASIC_AUTH_USERNAME": "basic_auth_username",
    "JSONREST_BASIC_AUTH_PASSWORD": "basic_auth_password",
    "JSONREST_USER_AGENT": "user_agent",
}

BOOLEAN_FIELDS = ("debug", "insecure_skip_verify")
INTEGER_FIELDS = ("connect_timeout", "read_timeout", "pool_connections", "pool_maxsize")


class ClientConfig(BaseModel):
    """
    Main client configuration class
    Replaces per-call options with named, documented fields
    """

    base_address: str = Field(
        default="",
        description="Informational base address; never joined with request URLs"
    )
    debug: bool = Field(
        default=ConfigDefaults.DEBUG,
        description="Emit request/response diagnostics"
    )

    # TLS
    insecure_skip_verify: bool = Field(
        default=ConfigDefaults.INSECURE_SKIP_VERIFY,
        description="Disable TLS certificate verification (opt-in only)"
    )
    ca_bundle: Optional[str] = Field(
        default=None,
        description="Path to a CA bundle used to verify servers"
    )

    # Transport
    connect_timeout: int = Field(
        default=ConfigDefaults.CONNECT_TIMEOUT,
        description="Connect timeout in milliseconds (covers the TLS handshake)",
        ge=1,
        le=300000
    )
    read_timeout: int = Field(
        default=ConfigDefaults.READ_TIMEOUT,
        description="Response timeout in milliseconds",
        ge=1,
        le=300000
    )
    pool_connections: int = Field(
        default=ConfigDefaults.POOL_CONNECTIONS,
        description="Number of host pools kept by the adapter",
        ge=1,
        le=100
    )
    pool_maxsize: int = Field(
        default=ConfigDefaults.POOL_MAXSIZE,
        description="Maximum connections kept per host pool",
        ge=1,
        le=100
    )
    user_agent: Optional[str] = Field(
        default=None,
        description="Override the User-Agent header"
    )

    # Initial credentials
    bearer_token: Optional[str] = Field(
        default=None,
        description="Bearer token sent as 'Authorization: Bearer <token>'"
    )
    basic_auth_username: Optional[str] = Field(
        default=None,
        description="HTTP Basic auth username"
    )
    basic_auth_password: Optional[str] = Field(
        default=None,
        description="HTTP Basic auth password"
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @field_validator("base_address")
    @classmethod
    def validate_base_address(cls, v: str) -> str:
        """Validate base_address is an HTTP/HTTPS URL when set"""
        if v != "" and not v.startswith(("http://", "https://")):
            raise ValueError("base_address must be a valid HTTP/HTTPS URL")
        return v

    @model_validator(mode="after")
    def check_tls_options(self) -> "ClientConfig":
        """A CA bundle is meaningless when verification is switched off"""
        if self.insecure_skip_verify and self.ca_bundle:
            raise ValueError("ca_bundle cannot be combined with insecure_skip_verify")
        return self

    @property
    def is_https(self) -> bool:
        return self.base_address.startswith("https")

    def timeout_tuple(self) -> Tuple[float, float]:
        """(connect, read) timeouts in seconds, as requests expects them"""
        return (self.connect_timeout / 1000.0, self.read_timeout / 1000.0)
