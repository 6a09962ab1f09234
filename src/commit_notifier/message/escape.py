"""Workflow output encoding helpers."""

from __future__ import annotations

# Order matters: "%" must be encoded first and decoded last.
_ENCODE = (("%", "%25"), ("\n", "%0A"), ("\r", "%0D"))


def escape_output(text: str) -> str:
    """Encode ``text`` so it survives as a single workflow output value.

    Only percent, newline and carriage return are encoded. Spaces and any
    other control characters are passed through untouched.
    """

    for raw, encoded in _ENCODE:
        text = text.replace(raw, encoded)
    return text


def unescape_output(text: str) -> str:
    """Inverse of :func:`escape_output`."""

    for raw, encoded in reversed(_ENCODE):
        text = text.replace(encoded, raw)
    return text


__all__ = ["escape_output", "unescape_output"]
