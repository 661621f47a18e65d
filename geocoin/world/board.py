"""Board — the deterministic world around the player.

The Board decides which cells hold caches, instantiates or restores a
:class:`Geocache` for each one on demand, and owns the sparse state map
of cache mementos.  Cells that were never visited have no entry; they
are regenerated from :func:`luck` on first visit, with the same initial
coin count they would have had at any earlier time.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from geocoin.cache.geocache import Geocache, decode_memento
from geocoin.world.cell import Cell, CellBounds, LatLng
from geocoin.world.grid import CellGrid
from geocoin.world.luck import cache_key, coin_count_key, luck

logger = logging.getLogger(__name__)

MAX_INITIAL_COINS = 100


@dataclass
class Board:
    """Procedural cache placement plus persisted cache contents.

    Attributes:
        tile_width: Cell edge length in coordinate units.
        visibility_radius: Neighbourhood half-width in cells.
        cache_spawn_probability: Chance that any given cell holds a cache.
        grid: Canonical cell registry.
    """

    tile_width: float
    visibility_radius: int
    cache_spawn_probability: float
    grid: CellGrid = field(init=False)
    _state: dict[str, str] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        """Validate parameters and build the cell registry."""
        if self.visibility_radius < 0:
            msg = f"visibility_radius must be >= 0, got {self.visibility_radius}"
            raise ValueError(msg)
        if not 0.0 <= self.cache_spawn_probability <= 1.0:
            msg = (
                "cache_spawn_probability must be within [0, 1], "
                f"got {self.cache_spawn_probability}"
            )
            raise ValueError(msg)
        self.grid = CellGrid(tile_width=self.tile_width)

    def cell_for_point(self, point: LatLng) -> Cell:
        """Return the canonical cell containing ``point``."""
        return self.grid.cell_for_point(point)

    def cell_bounds(self, cell: Cell) -> CellBounds:
        """Return the extent of ``cell``."""
        return self.grid.cell_bounds(cell)

    def has_cache(self, cell: Cell) -> bool:
        """Return True if ``cell`` is lucky enough to hold a cache."""
        return luck(cache_key(cell)) < self.cache_spawn_probability

    def initial_coin_count(self, cell: Cell) -> int:
        """Number of coins a freshly generated cache at ``cell`` starts with.

        Drawn from a separate key than :meth:`has_cache` so existence
        and size are independent.
        """
        return math.floor(luck(coin_count_key(cell)) * MAX_INITIAL_COINS) + 1

    def cells_near(self, point: LatLng) -> list[Geocache]:
        """Return the caches within the visibility radius of ``point``.

        Scans the square ``[-R, R] x [-R, R]`` (inclusive) around the
        point's cell in row-major order.

        Args:
            point: Centre of the neighbourhood, usually the player.

        Returns:
            One Geocache per cache-bearing cell, restored from saved
            state where an entry exists.
        """
        origin = self.cell_for_point(point)
        r = self.visibility_radius
        result: list[Geocache] = []
        for di in range(-r, r + 1):
            for dj in range(-r, r + 1):
                cell = self.grid.canonicalize(origin.i + di, origin.j + dj)
                if self.has_cache(cell):
                    result.append(self.get_or_create(cell))
        return result

    def get_or_create(self, cell: Cell) -> Geocache:
        """Return the cache at ``cell``, restoring or generating it.

        A freshly generated cache has its memento stored immediately so a
        repeat visit before any mutation sees the same coins.
        """
        memento = self._state.get(cell.key)
        if memento is not None:
            logger.debug("Restoring cache %s from saved state", cell.key)
            return Geocache.restore(cell, memento)

        cache = Geocache.create(cell, self.initial_coin_count(cell))
        self._state[cell.key] = cache.to_memento()
        logger.debug("Generated cache %s with %d coins", cell.key, cache.num_coins)
        return cache

    def save_cache_state(self, geocache: Geocache) -> None:
        """Overwrite the saved memento for ``geocache``'s cell."""
        self._state[geocache.cell.key] = geocache.to_memento()

    def export_state(self) -> list[tuple[str, str]]:
        """Snapshot the state map as ``(cell_key, memento)`` pairs."""
        return list(self._state.items())

    def import_state(self, pairs: Iterable[tuple[str, str]]) -> None:
        """Replace the state map with ``pairs``.

        Every entry is validated before anything is replaced, so a
        malformed import leaves the current state intact.

        Raises:
            MementoError: If any memento is malformed.
            ValueError: If any cell key is malformed.
        """
        state: dict[str, str] = {}
        for key, memento in pairs:
            Cell.from_key(key)
            decode_memento(memento)
            state[key] = memento
        self._state = state
        logger.debug("Imported state for %d caches", len(state))

    @property
    def visited_cells(self) -> int:
        """Number of cells with a saved memento."""
        return len(self._state)
