"""Console UI state helpers."""

from .menu import DropdownMenu

__all__ = ["DropdownMenu"]
