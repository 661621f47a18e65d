"""Cell — a single tile of the world grid.

Cells are immutable ``(i, j)`` pairs.  They carry no game state of their
own; caches and their coins are keyed by :attr:`Cell.key` and live in
the Board's sparse state map.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LatLng:
    """A continuous geographic point.

    Attributes:
        lat: Latitude in degrees.
        lng: Longitude in degrees.
    """

    lat: float
    lng: float


@dataclass(frozen=True)
class Cell:
    """A single tile in the world grid.

    Attributes:
        i: Row index (latitude axis).
        j: Column index (longitude axis).
    """

    i: int
    j: int

    @property
    def key(self) -> str:
        """Fixed-format composite key ``"i,j"``."""
        return f"{self.i},{self.j}"

    @classmethod
    def from_key(cls, key: str) -> Cell:
        """Parse a ``"i,j"`` key back into a cell.

        Raises:
            ValueError: If ``key`` is not in canonical ``"i,j"`` form.
        """
        parts = key.split(",")
        if len(parts) != 2:
            msg = f"malformed cell key {key!r}"
            raise ValueError(msg)
        cell = cls(i=int(parts[0]), j=int(parts[1]))
        if cell.key != key:
            msg = f"non-canonical cell key {key!r}"
            raise ValueError(msg)
        return cell


@dataclass(frozen=True)
class CellBounds:
    """Axis-aligned extent of a cell.

    Attributes:
        south_west: Minimum corner.
        north_east: Maximum corner.
    """

    south_west: LatLng
    north_east: LatLng

    def contains(self, point: LatLng) -> bool:
        """Return True if ``point`` lies inside the half-open bounds."""
        return (
            self.south_west.lat <= point.lat < self.north_east.lat
            and self.south_west.lng <= point.lng < self.north_east.lng
        )
