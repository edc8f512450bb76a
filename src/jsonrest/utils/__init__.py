"""Utilities module initialization"""

from jsonrest.utils.logger import (
    enable_debug_output,
    disable_debug_output,
    release_debug_output,
)

__all__ = ["enable_debug_output", "disable_debug_output", "release_debug_output"]
