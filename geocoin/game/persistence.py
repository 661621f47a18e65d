"""Persistence — save files for a game session.

A save is one JSON blob stored under a single well-known key in a
key-value byte store.  The blob holds the player's location, inventory,
trail, and the Board's sparse ``(cell_key, memento)`` pairs.  Anything
that fails to parse is discarded and treated as a fresh game.
"""

from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from geocoin.cache.coin import Coin
from geocoin.cache.geocache import decode_memento
from geocoin.world.cell import Cell, LatLng

if TYPE_CHECKING:
    from geocoin.game.session import GameSession

logger = logging.getLogger(__name__)

DEFAULT_SAVE_KEY = "geocoin.save"


class SnapshotError(ValueError):
    """Raised when a save blob cannot be decoded."""


@dataclass
class Snapshot:
    """Everything needed to resume a game.

    Attributes:
        player_location: Where the player stands.
        inventory: Held coins in stack order.
        board_state: ``(cell_key, memento)`` pairs from ``Board.export_state``.
        movement_path: Visited points in order.
    """

    player_location: LatLng
    inventory: list[Coin] = field(default_factory=list)
    board_state: list[tuple[str, str]] = field(default_factory=list)
    movement_path: list[LatLng] = field(default_factory=list)


def _point_to_dict(point: LatLng) -> dict[str, float]:
    return {"lat": point.lat, "lng": point.lng}


def _point_from_dict(data: Any) -> LatLng:
    if not isinstance(data, dict):
        msg = f"expected a point object, got {data!r}"
        raise SnapshotError(msg)
    lat, lng = data.get("lat"), data.get("lng")
    for value in (lat, lng):
        if (
            not isinstance(value, (int, float))
            or isinstance(value, bool)
            or not math.isfinite(value)
        ):
            msg = f"point coordinates must be numbers, got {data!r}"
            raise SnapshotError(msg)
    return LatLng(float(lat), float(lng))


def _expect_list(data: dict[str, Any], name: str) -> list[Any]:
    value = data.get(name, [])
    if not isinstance(value, list):
        msg = f"{name} must be an array, got {type(value).__name__}"
        raise SnapshotError(msg)
    return value


def encode_snapshot(snapshot: Snapshot) -> bytes:
    """Serialize ``snapshot`` to the UTF-8 JSON save format."""
    payload = {
        "playerLocation": _point_to_dict(snapshot.player_location),
        "inventory": [coin.to_dict() for coin in snapshot.inventory],
        "boardState": [[key, memento] for key, memento in snapshot.board_state],
        "movementPath": [_point_to_dict(p) for p in snapshot.movement_path],
    }
    return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def decode_snapshot(blob: bytes) -> Snapshot:
    """Parse a save blob produced by :func:`encode_snapshot`.

    Every memento in the board state is validated here, so a decoded
    snapshot can be restored without further parse failures.

    Raises:
        SnapshotError: If the blob is not a well-formed save.
    """
    try:
        data = json.loads(blob)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        msg = f"save is not valid JSON: {exc}"
        raise SnapshotError(msg) from exc

    if not isinstance(data, dict):
        msg = "save must be a JSON object"
        raise SnapshotError(msg)
    if "playerLocation" not in data:
        msg = "save has no playerLocation"
        raise SnapshotError(msg)

    player_location = _point_from_dict(data["playerLocation"])

    inventory: list[Coin] = []
    for entry in _expect_list(data, "inventory"):
        if not isinstance(entry, dict):
            msg = f"malformed inventory entry {entry!r}"
            raise SnapshotError(msg)
        try:
            inventory.append(Coin.from_dict(entry))
        except (KeyError, TypeError) as exc:
            msg = f"malformed inventory entry {entry!r}"
            raise SnapshotError(msg) from exc

    board_state: list[tuple[str, str]] = []
    for entry in _expect_list(data, "boardState"):
        if (
            not isinstance(entry, list)
            or len(entry) != 2
            or not all(isinstance(v, str) for v in entry)
        ):
            msg = f"malformed board entry {entry!r}"
            raise SnapshotError(msg)
        key, memento = entry
        try:
            Cell.from_key(key)
            decode_memento(memento)
        except ValueError as exc:
            msg = f"malformed board entry for {key!r}: {exc}"
            raise SnapshotError(msg) from exc
        board_state.append((key, memento))

    movement_path = [_point_from_dict(p) for p in _expect_list(data, "movementPath")]

    return Snapshot(
        player_location=player_location,
        inventory=inventory,
        board_state=board_state,
        movement_path=movement_path,
    )


class KeyValueStore(Protocol):
    """A byte store keyed by strings, provided by the environment."""

    def get(self, key: str) -> bytes | None:
        """Return the value under ``key``, or None if absent."""
        ...

    def put(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``; a missing key is not an error."""
        ...


@dataclass
class MemoryStore:
    """In-process store, handy for tests and throwaway games."""

    data: dict[str, bytes] = field(default_factory=dict)

    def get(self, key: str) -> bytes | None:
        return self.data.get(key)

    def put(self, key: str, value: bytes) -> None:
        self.data[key] = bytes(value)

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


@dataclass
class FileStore:
    """Store each key as a file inside ``directory``.

    Attributes:
        directory: Folder holding one file per key; created on first write.
    """

    directory: Path

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            msg = f"invalid store key {key!r}"
            raise ValueError(msg)
        return self.directory / key

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def put(self, key: str, value: bytes) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file, then swap it in
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(value)
            Path(tmp_name).replace(path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


@dataclass
class SaveManager:
    """Loads and saves a :class:`GameSession` through a key-value store.

    Attributes:
        store: Backing byte store.
        key: Key the save blob lives under.
    """

    store: KeyValueStore
    key: str = DEFAULT_SAVE_KEY

    def save(self, session: GameSession) -> None:
        """Write the session's current snapshot to the store."""
        self.store.put(self.key, encode_snapshot(session.snapshot()))
        logger.info("Saved game under %r", self.key)

    def load(self, session: GameSession) -> bool:
        """Restore ``session`` from the store.

        A missing save is a normal fresh game.  A malformed save is
        logged and ignored, leaving the session as it was.

        Returns:
            True if a save was restored.
        """
        blob = self.store.get(self.key)
        if blob is None:
            logger.info("No saved game under %r, starting fresh", self.key)
            return False
        try:
            snapshot = decode_snapshot(blob)
            session.restore(snapshot)
        except ValueError as exc:
            logger.warning("Discarding unreadable save %r: %s", self.key, exc)
            return False
        return True

    def reset(self, session: GameSession) -> None:
        """Delete the save and restart ``session`` from the beginning."""
        self.store.delete(self.key)
        session.reset()
        logger.info("Reset game and deleted save %r", self.key)
