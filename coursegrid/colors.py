"""Deterministic course colors.

The hash must stay bit-for-bit stable: other clients derive the same color
from the same course name.
"""

HIGH_CONTRAST_COLORS = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#96CEB4",
    "#FFD93D",
    "#FF9E9E",
    "#A8D8EA",
    "#FF90EE",
    "#98FB98",
    "#FFA500",
    "#87CEEB",
    "#F08080",
    "#20B2AA",
    "#FFB6C1",
    "#3CB371",
    "#DDA0DD",
    "#F7DC6F",
    "#BB8FCE",
    "#85C1E9",
    "#F8B88B",
)

_UINT64_MASK = 0xFFFFFFFFFFFFFFFF


def djb2_hash(text: str) -> int:
    """DJB2 over the UTF-8 bytes of ``text``, wrapped to 64 bits, masked to 31."""
    value = 5381
    for byte in text.encode("utf-8"):
        value = (value * 33 + byte) & _UINT64_MASK
    return value & 0x7FFFFFFF


def color_for(text: str) -> str:
    """Return the palette color for ``text``."""
    return HIGH_CONTRAST_COLORS[djb2_hash(text) % len(HIGH_CONTRAST_COLORS)]
