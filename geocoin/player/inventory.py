"""Inventory — the coins a player is carrying."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from geocoin.cache.coin import Coin


@dataclass
class Inventory:
    """A stack of held coins; the most recent coin is deposited first.

    Attributes:
        _coins: Held coins, bottom to top.
    """

    _coins: list[Coin] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self._coins)

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._coins)

    def __contains__(self, coin: object) -> bool:
        return coin in self._coins

    @property
    def coins(self) -> tuple[Coin, ...]:
        """Read-only view of held coins in stack order."""
        return tuple(self._coins)

    def push(self, coin: Coin) -> None:
        """Add ``coin`` to the top of the stack.

        Raises:
            ValueError: If the coin is already held.
        """
        if coin in self._coins:
            msg = f"coin {coin.identity} is already in the inventory"
            raise ValueError(msg)
        self._coins.append(coin)

    def pop(self) -> Coin | None:
        """Remove and return the most recent coin, or None if empty."""
        if not self._coins:
            return None
        return self._coins.pop()

    def peek(self) -> Coin | None:
        """Return the most recent coin without removing it."""
        return self._coins[-1] if self._coins else None

    def clear(self) -> None:
        """Drop every held coin."""
        self._coins.clear()
