"""Tests for geocoin.game.tracking."""

from __future__ import annotations

from geocoin.game.persistence import SaveManager
from geocoin.game.session import GameSession
from geocoin.game.tracking import ErrorCallback, PositionCallback, PositionTracker
from geocoin.world.cell import LatLng


class FakeSensor:
    """Records subscriptions and lets tests push readings."""

    def __init__(self) -> None:
        self.on_position: PositionCallback | None = None
        self.on_error: ErrorCallback | None = None
        self.subscriptions = 0
        self.unsubscriptions = 0

    def subscribe(self, on_position: PositionCallback, on_error: ErrorCallback):
        self.on_position = on_position
        self.on_error = on_error
        self.subscriptions += 1
        return self._unsubscribe

    def _unsubscribe(self) -> None:
        self.unsubscriptions += 1
        self.on_position = None


class TestPositionTracker:
    """Tests for sensor subscription and position turns."""

    def test_enable_is_idempotent(self, session: GameSession) -> None:
        sensor = FakeSensor()
        tracker = PositionTracker(session=session, subscribe=sensor.subscribe)
        tracker.enable()
        tracker.enable()
        assert tracker.active
        assert sensor.subscriptions == 1

    def test_disable_is_idempotent(self, session: GameSession) -> None:
        sensor = FakeSensor()
        tracker = PositionTracker(session=session, subscribe=sensor.subscribe)
        tracker.disable()
        tracker.enable()
        tracker.disable()
        tracker.disable()
        assert not tracker.active
        assert sensor.unsubscriptions == 1

    def test_toggle(self, session: GameSession) -> None:
        sensor = FakeSensor()
        tracker = PositionTracker(session=session, subscribe=sensor.subscribe)
        assert tracker.toggle() is True
        assert tracker.toggle() is False

    def test_position_turn(
        self,
        session: GameSession,
        save_manager: SaveManager,
    ) -> None:
        sensor = FakeSensor()
        seen: list[list[str]] = []
        tracker = PositionTracker(
            session=session,
            subscribe=sensor.subscribe,
            save_manager=save_manager,
            on_update=lambda caches: seen.append([c.cell.key for c in caches]),
        )
        tracker.enable()
        sensor.on_position(LatLng(1.5e-4, 1.5e-4))

        assert session.player_location == LatLng(1.5e-4, 1.5e-4)
        assert session.movement_path[-1] == session.player_location
        assert "1,1" in seen[-1]
        assert save_manager.store.get(save_manager.key) is not None

    def test_error_reported(self, session: GameSession) -> None:
        sensor = FakeSensor()
        tracker = PositionTracker(session=session, subscribe=sensor.subscribe)
        tracker.enable()
        before = session.snapshot()
        sensor.on_error("permission denied")
        assert "permission denied" in session.status
        assert session.snapshot() == before
