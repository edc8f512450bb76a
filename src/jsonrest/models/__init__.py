"""Models module initialization"""

from jsonrest.models.credentials import Credentials
from jsonrest.models.error_body import ErrorBody

__all__ = [
    "Credentials",
    "ErrorBody",
]
