"""Domain policies package."""

from .symbols import is_valid_symbol

__all__ = ["is_valid_symbol"]
