"""Luck — the deterministic pseudo-random function behind world generation.

Every procedural decision (does a cell hold a cache, how many coins does
it start with) is a pure function of a string key, so the world never has
to be stored up front: revisiting a cell reproduces the same draw.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geocoin.world.cell import Cell

# 52 bits fit exactly in a float64 mantissa
_MANTISSA_BITS = 52
_HEX_DIGITS = _MANTISSA_BITS // 4


def luck(key: str) -> float:
    """Map an arbitrary string to a reproducible value in ``[0, 1)``.

    The leading 52 bits of the key's SHA-256 digest are scaled into the
    unit interval, which gives bit-identical results on every platform.

    Args:
        key: Any string; callers build it from cell coordinates.

    Returns:
        A float ``0.0 <= x < 1.0``.
    """
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
    return int(digest[:_HEX_DIGITS], 16) / (1 << _MANTISSA_BITS)


def cache_key(cell: Cell) -> str:
    """Key for the cache-existence draw of ``cell``."""
    return cell.key


def coin_count_key(cell: Cell) -> str:
    """Key for the initial coin-count draw of ``cell``."""
    return f"{cell.key},initialValue"
