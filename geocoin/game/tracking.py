"""PositionTracker — feed geolocation updates into a game session.

The sensor itself belongs to the environment.  It is reached through a
``subscribe(on_position, on_error)`` callable that starts a watch and
returns a function to stop it.  Each delivered position is handled as
one complete turn: move the player, recompute the visible caches, and
save if a :class:`SaveManager` is attached.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from geocoin.world.cell import LatLng

if TYPE_CHECKING:
    from geocoin.cache.geocache import Geocache
    from geocoin.game.persistence import SaveManager
    from geocoin.game.session import GameSession

logger = logging.getLogger(__name__)

PositionCallback = Callable[[LatLng], None]
ErrorCallback = Callable[[str], None]
Unsubscribe = Callable[[], None]
Subscribe = Callable[[PositionCallback, ErrorCallback], Unsubscribe]


@dataclass
class PositionTracker:
    """Toggleable bridge from a position sensor to a session.

    Attributes:
        session: The session receiving location updates.
        subscribe: Starts a sensor watch, returns its unsubscribe handle.
        save_manager: Optional; when set, each update is persisted.
        on_update: Optional hook receiving the caches visible after a move.
    """

    session: GameSession
    subscribe: Subscribe
    save_manager: SaveManager | None = None
    on_update: Callable[[list[Geocache]], None] | None = None
    _unsubscribe: Unsubscribe | None = field(init=False, default=None, repr=False)

    @property
    def active(self) -> bool:
        """True while a sensor watch is running."""
        return self._unsubscribe is not None

    def enable(self) -> None:
        """Start watching the sensor; no-op if already watching."""
        if self.active:
            return
        self._unsubscribe = self.subscribe(self.handle_position, self.handle_error)
        self.session.status = "Location tracking on."
        logger.info("Position tracking enabled")

    def disable(self) -> None:
        """Stop watching the sensor; no-op if not watching."""
        if self._unsubscribe is None:
            return
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        unsubscribe()
        self.session.status = "Location tracking off."
        logger.info("Position tracking disabled")

    def toggle(self) -> bool:
        """Flip tracking on or off.

        Returns:
            Whether tracking is active afterwards.
        """
        if self.active:
            self.disable()
        else:
            self.enable()
        return self.active

    def handle_position(self, point: LatLng) -> list[Geocache]:
        """Apply one sensor reading as an atomic turn.

        Returns:
            Caches visible from the new location.
        """
        self.session.set_player_location(point)
        caches = self.session.visible_caches()
        if self.save_manager is not None:
            self.save_manager.save(self.session)
        if self.on_update is not None:
            self.on_update(caches)
        return caches

    def handle_error(self, message: str) -> None:
        """Report a sensor failure to the player."""
        logger.warning("Position sensor error: %s", message)
        self.session.status = f"Location unavailable: {message}"
