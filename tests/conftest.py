"""Shared fixtures for the Geocoin test suite."""

from __future__ import annotations

import pytest

from geocoin.game.config import GameConfig
from geocoin.game.persistence import MemoryStore, SaveManager
from geocoin.game.session import GameSession
from geocoin.world.board import Board
from geocoin.world.cell import LatLng


@pytest.fixture
def board() -> Board:
    """A board with the default game parameters."""
    return Board(tile_width=1e-4, visibility_radius=8, cache_spawn_probability=0.1)


@pytest.fixture
def small_board() -> Board:
    """A radius-3 board for pinned neighbourhood tests."""
    return Board(tile_width=1e-4, visibility_radius=3, cache_spawn_probability=0.1)


@pytest.fixture
def origin_point() -> LatLng:
    """The centre of cell (0, 0) at the default tile width."""
    return LatLng(0.5e-4, 0.5e-4)


@pytest.fixture
def default_config() -> GameConfig:
    """Default game config (no YAML file needed)."""
    return GameConfig()


@pytest.fixture
def origin_config() -> GameConfig:
    """A config starting at cell (0, 0) with a radius-3 view."""
    return GameConfig(visibility_radius=3, start_lat=0.5e-4, start_lng=0.5e-4)


@pytest.fixture
def session(origin_config: GameConfig) -> GameSession:
    """A fresh session at cell (0, 0)."""
    return GameSession(config=origin_config)


@pytest.fixture
def save_manager() -> SaveManager:
    """A save manager backed by an in-memory store."""
    return SaveManager(store=MemoryStore())
