"""Policies for ticker symbols."""


def is_valid_symbol(symbol: str | None) -> bool:
    """Return True if a symbol can identify a real holding.

    Blank symbols, the placeholder "X" and other single-character symbols
    are leftovers from abandoned entries.
    """
    if not isinstance(symbol, str):
        return False
    cleaned = symbol.strip()
    return len(cleaned) > 1


__all__ = ["is_valid_symbol"]
