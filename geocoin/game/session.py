"""GameSession — all mutable state of one player's game.

Owns the board, the inventory, the player's location and trail, and
mediates every coin transfer so that a coin is always in exactly one
place: a cache or the inventory.  Each public method runs to completion;
the UI calls them in response to discrete events.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from geocoin.cache.coin import Coin
from geocoin.cache.geocache import Geocache
from geocoin.game.config import GameConfig
from geocoin.game.persistence import Snapshot
from geocoin.player.inventory import Inventory
from geocoin.world.board import Board
from geocoin.world.cell import LatLng

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Drives the game from user and sensor events.

    Attributes:
        config: Loaded game configuration.
        board: Cache placement and persisted cache contents.
        inventory: Coins the player carries.
        player_location: Current player position.
        movement_path: Every position the player has occupied, in order.
        status: Last user-facing message.
    """

    config: GameConfig
    board: Board = field(init=False)
    inventory: Inventory = field(init=False, default_factory=Inventory)
    player_location: LatLng = field(init=False)
    movement_path: list[LatLng] = field(init=False, default_factory=list)
    status: str = ""

    def __post_init__(self) -> None:
        """Build the board and place the player at the start."""
        self.reset()

    def reset(self) -> None:
        """Return to the starting location with an empty inventory and a fresh board."""
        self.board = Board(
            tile_width=self.config.tile_width,
            visibility_radius=self.config.visibility_radius,
            cache_spawn_probability=self.config.cache_spawn_probability,
        )
        self.inventory = Inventory()
        self.player_location = self.config.start_location
        self.movement_path = [self.player_location]
        self.status = "New game started."

    def visible_caches(self) -> list[Geocache]:
        """Return caches within the visibility radius of the player."""
        return self.board.cells_near(self.player_location)

    def cache_at_player(self) -> Geocache | None:
        """Return the cache in the player's cell, or None if there is none."""
        cell = self.board.cell_for_point(self.player_location)
        if not self.board.has_cache(cell):
            return None
        return self.board.get_or_create(cell)

    def set_player_location(self, point: LatLng) -> None:
        """Move the player to ``point`` and extend the trail."""
        self.player_location = point
        self.movement_path.append(point)

    def move(self, di: int, dj: int) -> LatLng:
        """Step the player by whole tiles.

        Args:
            di: Tiles to move north (negative for south).
            dj: Tiles to move east (negative for west).

        Returns:
            The new player location.
        """
        tw = self.config.tile_width
        point = LatLng(
            self.player_location.lat + di * tw,
            self.player_location.lng + dj * tw,
        )
        self.set_player_location(point)
        return point

    def collect(self, geocache: Geocache) -> Coin | None:
        """Move the top coin of ``geocache`` into the inventory.

        A stale cache handle whose top coin is already held is left
        untouched.

        Returns:
            The collected coin, or None if nothing was collected.
        """
        if not geocache.coins:
            self.status = f"Cache {geocache.cell.key} is empty."
            return None
        if geocache.coins[-1] in self.inventory:
            self.status = f"Coin {geocache.coins[-1].identity} is already yours."
            return None
        coin = geocache.collect_coin()
        self.inventory.push(coin)
        self.board.save_cache_state(geocache)
        self.status = f"Collected coin {coin.identity}."
        return coin

    def deposit(self, geocache: Geocache) -> Coin | None:
        """Move the most recent inventory coin into ``geocache``.

        Returns:
            The deposited coin, or None if the inventory was empty.
        """
        coin = self.inventory.pop()
        if coin is None:
            self.status = "You have no coins to deposit."
            return None
        geocache.deposit_coin(coin)
        self.board.save_cache_state(geocache)
        self.status = f"Deposited coin {coin.identity} in cache {geocache.cell.key}."
        return coin

    def snapshot(self) -> Snapshot:
        """Capture everything needed to resume this game."""
        return Snapshot(
            player_location=self.player_location,
            inventory=list(self.inventory),
            board_state=self.board.export_state(),
            movement_path=list(self.movement_path),
        )

    def restore(self, snapshot: Snapshot) -> None:
        """Replace the session state with ``snapshot``.

        Raises:
            MementoError: If the board state holds a malformed memento.
            ValueError: If the inventory holds the same coin twice.
        """
        inventory = Inventory()
        for coin in snapshot.inventory:
            inventory.push(coin)
        self.board.import_state(snapshot.board_state)
        self.inventory = inventory
        self.player_location = snapshot.player_location
        self.movement_path = list(snapshot.movement_path) or [self.player_location]
        self.status = f"Resumed with {len(self.inventory)} coins."
        logger.info(
            "Restored session: %d coins held, %d caches visited",
            len(self.inventory),
            self.board.visited_cells,
        )
