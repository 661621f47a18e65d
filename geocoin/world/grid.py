"""CellGrid — canonical cell identities for continuous coordinates.

The grid floors each coordinate by the tile width and hands back one
shared :class:`Cell` object per ``(i, j)`` for the lifetime of the grid,
so downstream code may use identity for deduplication.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from geocoin.world.cell import Cell, CellBounds, LatLng


@dataclass
class CellGrid:
    """Registry of canonical cells for a fixed tile width.

    Attributes:
        tile_width: Cell edge length in coordinate units.
    """

    tile_width: float
    _known: dict[str, Cell] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        if not self.tile_width > 0:
            msg = f"tile_width must be positive, got {self.tile_width}"
            raise ValueError(msg)

    @property
    def known_cells(self) -> int:
        """Number of distinct cells handed out so far."""
        return len(self._known)

    def canonicalize(self, i: int, j: int) -> Cell:
        """Return the single stored cell for ``(i, j)``, creating it once.

        Args:
            i: Row index.
            j: Column index.
        """
        cell = Cell(i=int(i), j=int(j))
        return self._known.setdefault(cell.key, cell)

    def cell_for_point(self, point: LatLng) -> Cell:
        """Return the canonical cell containing ``point``.

        ``math.floor`` rounds toward negative infinity, so cells stay
        contiguous across the origin.
        """
        i = math.floor(point.lat / self.tile_width)
        j = math.floor(point.lng / self.tile_width)
        return self.canonicalize(i, j)

    def cell_bounds(self, cell: Cell) -> CellBounds:
        """Return the south-west and north-east corners of ``cell``."""
        tw = self.tile_width
        return CellBounds(
            south_west=LatLng(cell.i * tw, cell.j * tw),
            north_east=LatLng((cell.i + 1) * tw, (cell.j + 1) * tw),
        )
