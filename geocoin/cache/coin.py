"""Coin — a uniquely identified collectible."""

from __future__ import annotations

from dataclasses import dataclass

from geocoin.world.cell import Cell


@dataclass(frozen=True)
class Coin:
    """A coin minted in a cache.

    Coins are never duplicated or destroyed; they only move between a
    cache and a player's inventory.

    Attributes:
        origin: The cell whose cache first generated this coin.
        serial: Index unique within the origin cache.
    """

    origin: Cell
    serial: int

    @property
    def identity(self) -> str:
        """Globally unique ``"i:j#serial"`` label."""
        return f"{self.origin.i}:{self.origin.j}#{self.serial}"

    def to_dict(self) -> dict[str, int]:
        """Plain-data form used by save files."""
        return {"i": self.origin.i, "j": self.origin.j, "serial": self.serial}

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> Coin:
        """Rebuild a coin from :meth:`to_dict` output.

        Raises:
            KeyError: If a field is missing.
            TypeError: If a field is not an integer.
        """
        i, j, serial = data["i"], data["j"], data["serial"]
        for value in (i, j, serial):
            if not isinstance(value, int) or isinstance(value, bool):
                msg = f"coin fields must be integers, got {data!r}"
                raise TypeError(msg)
        return cls(origin=Cell(i=i, j=j), serial=serial)
