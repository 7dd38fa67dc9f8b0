"""Auto-formatting and fix suggestions."""

from .auto_formatter import AutoFormatter

__all__ = ["AutoFormatter"]
