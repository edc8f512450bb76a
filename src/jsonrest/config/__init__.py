"""
Configuration module
"""

from jsonrest.config.client_config import (
    ClientConfig,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from jsonrest.config.config_loader import ConfigLoader
from jsonrest.config.config_validator import (
    ConfigValidator,
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "ClientConfig",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
