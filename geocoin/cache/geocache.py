"""Geocache — the mutable coin store attached to one cell.

A cache is a stack of coins: collecting takes the most recently added
coin, depositing pushes onto the top.  Its contents serialize to a
compact JSON *memento* that round-trips exactly, which is all the Board
keeps between visits.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from geocoin.cache.coin import Coin
from geocoin.world.cell import Cell


class MementoError(ValueError):
    """Raised when a memento string cannot be parsed."""


def decode_memento(memento: str) -> list[Coin]:
    """Parse a memento into its coin sequence.

    Args:
        memento: Output of :meth:`Geocache.to_memento`.

    Returns:
        Coins in stored order.

    Raises:
        MementoError: On invalid JSON or a malformed entry.
    """
    try:
        raw = json.loads(memento)
    except (TypeError, json.JSONDecodeError, RecursionError) as exc:
        msg = f"memento is not valid JSON: {exc}"
        raise MementoError(msg) from exc

    if not isinstance(raw, list):
        msg = f"memento must be a JSON array, got {type(raw).__name__}"
        raise MementoError(msg)

    coins: list[Coin] = []
    for entry in raw:
        if (
            not isinstance(entry, list)
            or len(entry) != 3
            or not all(type(v) is int for v in entry)
        ):
            msg = f"malformed memento entry {entry!r}"
            raise MementoError(msg)
        i, j, serial = entry
        coins.append(Coin(origin=Cell(i=i, j=j), serial=serial))
    return coins


@dataclass
class Geocache:
    """Coins currently stored at a cell.

    Attributes:
        cell: The cell this cache belongs to.
        coins: Coin stack; the last element is collected first.
    """

    cell: Cell
    coins: list[Coin] = field(default_factory=list)

    @classmethod
    def create(cls, cell: Cell, coin_count: int) -> Geocache:
        """Mint a fresh cache holding serials ``0 .. coin_count - 1``.

        Raises:
            ValueError: If ``coin_count`` is negative.
        """
        if coin_count < 0:
            msg = f"coin_count must be >= 0, got {coin_count}"
            raise ValueError(msg)
        coins = [Coin(origin=cell, serial=serial) for serial in range(coin_count)]
        return cls(cell=cell, coins=coins)

    @classmethod
    def restore(cls, cell: Cell, memento: str) -> Geocache:
        """Build a cache at ``cell`` from a saved memento."""
        cache = cls(cell=cell)
        cache.from_memento(memento)
        return cache

    @property
    def num_coins(self) -> int:
        """Number of coins currently in the cache."""
        return len(self.coins)

    def collect_coin(self) -> Coin | None:
        """Remove and return the top coin, or None if the cache is empty."""
        if not self.coins:
            return None
        return self.coins.pop()

    def deposit_coin(self, coin: Coin) -> None:
        """Push ``coin`` onto the top of the stack."""
        self.coins.append(coin)

    def to_memento(self) -> str:
        """Serialize the coin stack, bottom to top."""
        payload = [[c.origin.i, c.origin.j, c.serial] for c in self.coins]
        return json.dumps(payload, separators=(",", ":"))

    def from_memento(self, memento: str) -> None:
        """Replace the coin stack with the contents of ``memento``.

        The cache is left untouched if parsing fails.

        Raises:
            MementoError: If ``memento`` is malformed.
        """
        self.coins = decode_memento(memento)
