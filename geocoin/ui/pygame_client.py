"""Pygame 2D map for a Geocoin session.

Draws the neighbourhood around the player as a square of cells, shades
cache-bearing cells by how many coins they hold, and maps keys onto the
session: arrows walk one tile, ``C`` collects, ``D`` deposits.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pygame

if TYPE_CHECKING:
    from geocoin.game.persistence import SaveManager
    from geocoin.game.session import GameSession
    from geocoin.game.tracking import PositionTracker

from geocoin.world.board import MAX_INITIAL_COINS

# Colour palette
_BG = (20, 24, 30)
_GRID_LINE = (40, 46, 56)
_PLAYER = (240, 80, 80)
_TEXT = (200, 200, 200)

# Cache colour range (few coins -> many coins)
_CACHE_LO = np.array([60, 50, 20], dtype=np.float64)
_CACHE_HI = np.array([250, 200, 40], dtype=np.float64)

_MOVES: dict[int, tuple[int, int]] = {
    pygame.K_UP: (1, 0),
    pygame.K_DOWN: (-1, 0),
    pygame.K_LEFT: (0, -1),
    pygame.K_RIGHT: (0, 1),
}


def control_hints(*, has_tracker: bool) -> list[str]:
    """Key binding lines for the info panel.

    The sensor toggle is only listed when a tracker is attached.
    """
    lines = ["--- Controls ---", "Arrows: move", "C: collect  D: deposit"]
    if has_tracker:
        lines.append("G: toggle sensor")
    lines += ["R: reset", "ESC: quit"]
    return lines


class PygameRenderer:
    """Renders a GameSession into a Pygame window.

    Attributes:
        session: The game session to display and drive.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    def __init__(
        self,
        session: GameSession,
        cell_size: int = 24,
        save_manager: SaveManager | None = None,
        tracker: PositionTracker | None = None,
    ) -> None:
        """Initialise the renderer.

        Args:
            session: The session to render.
            cell_size: Pixel width/height per grid cell.
            save_manager: Persists the session after every action.
            tracker: Optional sensor bridge toggled with ``G``.
        """
        self.session = session
        self.cell_size = cell_size
        self.save_manager = save_manager
        self.tracker = tracker

        span = 2 * session.board.visibility_radius + 1
        self._map_px = span * cell_size
        self._panel_width = 280
        self._win_w = self._map_px + self._panel_width
        self._win_h = max(self._map_px, 320)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Geocoin")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.running = True

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            self._draw()

        if self.tracker is not None:
            self.tracker.disable()
        self._save()
        pygame.quit()

    def _save(self) -> None:
        if self.save_manager is not None:
            self.save_manager.save(self.session)

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key: int) -> None:
        session = self.session
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in _MOVES:
            session.move(*_MOVES[key])
            self._save()
        elif key == pygame.K_c:
            cache = session.cache_at_player()
            if cache is None:
                session.status = "There is no cache here."
            else:
                session.collect(cache)
                self._save()
        elif key == pygame.K_d:
            cache = session.cache_at_player()
            if cache is None:
                session.status = "There is no cache here."
            else:
                session.deposit(cache)
                self._save()
        elif key == pygame.K_g and self.tracker is not None:
            self.tracker.toggle()
        elif key == pygame.K_r:
            if self.save_manager is not None:
                self.save_manager.reset(session)
            else:
                session.reset()

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_caches()
        self._draw_grid()
        self._draw_player()
        self._draw_info_panel()
        pygame.display.flip()

    def _cell_rect(self, i: int, j: int) -> tuple[int, int, int, int]:
        """Screen rectangle for cell ``(i, j)``; north is up."""
        cs = self.cell_size
        origin = self.session.board.cell_for_point(self.session.player_location)
        r = self.session.board.visibility_radius
        col = j - origin.j + r
        row = r - (i - origin.i)
        return (col * cs, row * cs, cs, cs)

    def _draw_grid(self) -> None:
        """Outline every cell in view."""
        for px in range(0, self._map_px + 1, self.cell_size):
            pygame.draw.line(self.screen, _GRID_LINE, (px, 0), (px, self._map_px))
            pygame.draw.line(self.screen, _GRID_LINE, (0, px), (self._map_px, px))

    def _draw_caches(self) -> None:
        """Fill cache cells, brighter for more coins."""
        for cache in self.session.visible_caches():
            t = min(cache.num_coins / MAX_INITIAL_COINS, 1.0)
            colour = _CACHE_LO + t * (_CACHE_HI - _CACHE_LO)
            pygame.draw.rect(
                self.screen,
                colour.astype(int).tolist(),
                self._cell_rect(cache.cell.i, cache.cell.j),
            )

    def _draw_player(self) -> None:
        """Draw the player as a dot in the centre cell."""
        cs = self.cell_size
        r = self.session.board.visibility_radius
        centre = (r * cs + cs // 2, r * cs + cs // 2)
        pygame.draw.circle(self.screen, _PLAYER, centre, max(3, cs // 3))

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        session = self.session
        panel_x = self._map_px + 10
        y = 10

        cell = session.board.cell_for_point(session.player_location)
        here = session.cache_at_player()
        top = session.inventory.peek()
        lines = [
            f"Cell: {cell.key}",
            f"Lat: {session.player_location.lat:.6f}",
            f"Lng: {session.player_location.lng:.6f}",
            "",
            f"Coins held: {len(session.inventory)}",
            f"Top coin: {top.identity if top else '-'}",
            f"Cache here: {here.num_coins if here else '-'}",
            "",
            session.status,
            "",
            *control_hints(has_tracker=self.tracker is not None),
        ]

        for line in lines:
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (panel_x, y))
            y += 18
