"""Deterministic avatar color assignment.

Sender addresses are hashed with a 32-bit rolling hash (``h * 31 + unit``,
wrapped to signed 32-bit after every step) over their UTF-16 code units, so the
same address always lands on the same palette entry, across runs and across
the list and detail views.
"""

from palm.constants import AVATAR_PALETTE

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _wrap_int32(value: int) -> int:
    value &= _INT32_MASK
    if value & _INT32_SIGN:
        return value - (_INT32_MASK + 1)
    return value


def _utf16_code_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for idx in range(0, len(data), 2):
        yield data[idx] | (data[idx + 1] << 8)


def string_hash(text: str) -> int:
    """Return the non-negative rolling hash of ``text``."""
    value = 0
    for unit in _utf16_code_units(text or ""):
        value = _wrap_int32(value * 31 + unit)
    return abs(value)


def palette_index_for(key: str | None, palette_size: int) -> int:
    if palette_size < 1:
        raise ValueError("Palette must contain at least one color.")
    if not key:
        return 0
    return string_hash(key) % palette_size


def color_for(key: str | None, palette=AVATAR_PALETTE) -> str:
    return palette[palette_index_for(key, len(palette))]


__all__ = ["color_for", "palette_index_for", "string_hash"]
