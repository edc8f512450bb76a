"""
Configuration Validator
Validates client configuration with clear error messages
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)


class ConfigValidator:
    """
    ConfigValidator class
    Checks a raw configuration dictionary before it becomes a ClientConfig
    """

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_formats(config)
        self._validate_ranges(config)
        self._validate_tls(config)
        self._validate_credentials(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Raises:
            ValidationError: If configuration is invalid
        """
        from jsonrest.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            error_messages = "; ".join(
                f"{e.field}: {e.message}" for e in result.errors
            )
            raise ValidationError(
                f"Configuration validation failed: {error_messages}",
                field=result.errors[0].field,
            )

    def _validate_formats(self, config: Dict[str, Any]) -> None:
        """Validate field formats"""
        base_address = config.get("base_address")
        if base_address is not None and base_address != "":
            if not isinstance(base_address, str) or not base_address.startswith(
                ("http://", "https://")
            ):
                self._errors.append(ValidationErrorDetail(
                    field="base_address",
                    message="base_address must be a valid HTTP/HTTPS URL",
                    value=base_address
                ))

        for bool_field in ("debug", "insecure_skip_verify"):
            value = config.get(bool_field)
            if value is not None and not isinstance(value, bool):
                self._errors.append(ValidationErrorDetail(
                    field=bool_field,
                    message=f"{bool_field} must be a boolean",
                    value=value
                ))

        for str_field in ("ca_bundle", "user_agent"):
            value = config.get(str_field)
            if value is not None and not isinstance(value, str):
                self._errors.append(ValidationErrorDetail(
                    field=str_field,
                    message=f"{str_field} must be a string",
                    value=value
                ))

    def _validate_ranges(self, config: Dict[str, Any]) -> None:
        """Validate numeric ranges"""
        for timeout_field in ("connect_timeout", "read_timeout"):
            timeout = config.get(timeout_field)
            if timeout is None:
                continue
            if (
                isinstance(timeout, bool)
                or not isinstance(timeout, (int, float))
                or timeout <= 0
            ):
                self._errors.append(ValidationErrorDetail(
                    field=timeout_field,
                    message=f"{timeout_field} must be a positive number (milliseconds)",
                    value=timeout
                ))
            elif timeout > 300000:
                self._errors.append(ValidationErrorDetail(
                    field=timeout_field,
                    message=f"{timeout_field} should not exceed 300000ms (5 minutes)",
                    value=timeout
                ))

        for pool_field in ("pool_connections", "pool_maxsize"):
            size = config.get(pool_field)
            if size is None:
                continue
            if isinstance(size, bool) or not isinstance(size, int) or size < 1:
                self._errors.append(ValidationErrorDetail(
                    field=pool_field,
                    message=f"{pool_field} must be a positive integer",
                    value=size
                ))
            elif size > 100:
                self._errors.append(ValidationErrorDetail(
                    field=pool_field,
                    message=f"{pool_field} should not exceed 100",
                    value=size
                ))

    def _validate_tls(self, config: Dict[str, Any]) -> None:
        """Validate TLS settings"""
        if config.get("insecure_skip_verify") is True and config.get("ca_bundle"):
            self._errors.append(ValidationErrorDetail(
                field="ca_bundle",
                message="ca_bundle cannot be combined with insecure_skip_verify",
                value=config.get("ca_bundle")
            ))

    def _validate_credentials(self, config: Dict[str, Any]) -> None:
        """Validate credential fields"""
        for cred_field in ("bearer_token", "basic_auth_username", "basic_auth_password"):
            value = config.get(cred_field)
            if value is not None and not isinstance(value, str):
                self._errors.append(ValidationErrorDetail(
                    field=cred_field,
                    message=f"{cred_field} must be a string",
                    value="[REDACTED]"
                ))
