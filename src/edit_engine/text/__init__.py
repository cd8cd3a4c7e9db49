"""Byte-level UTF-8 helpers shared by the buffer and viewport layers."""

from .codec import (
    REPLACEMENT,
    column_to_offset,
    decode_at,
    encode,
    iter_units,
    next_boundary,
    prev_boundary,
    trim_to_visual,
    visual_width,
    width_of,
)

__all__ = [
    "REPLACEMENT",
    "column_to_offset",
    "decode_at",
    "encode",
    "iter_units",
    "next_boundary",
    "prev_boundary",
    "trim_to_visual",
    "visual_width",
    "width_of",
]
