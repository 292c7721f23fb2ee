from __future__ import annotations

__all__ = (
    "strip_prefix",
    "strip_suffix",
)


def strip_prefix(string: str, prefix: str) -> str:
    """Strips a given prefix from a provided string if it exists.

    Parameters
    ----------
    string: str
        the string to strip the prefix from
    prefix: str
        the prefix to strip

    Returns
    -------
    str
        the string with the prefix removed
    """
    if string.startswith(prefix):
        return string[len(prefix):]
    return string


def strip_suffix(string: str, suffix: str) -> str:
    """Strips a given suffix from a provided string if it exists."""
    if suffix and string.endswith(suffix):
        return string[:-len(suffix)]
    return string
