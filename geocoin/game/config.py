"""Config — load game parameters from YAML files.

World generation constants (tile size, visibility, spawn odds) and the
player's starting location live in YAML and are parsed into a typed
dataclass here.  Values are read once at construction and never
reloaded.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from geocoin.world.cell import LatLng


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        tile_width: Cell edge length in degrees.
        visibility_radius: Neighbourhood half-width in cells.
        cache_spawn_probability: Chance a cell holds a cache.
        start_lat: Latitude of the starting location.
        start_lng: Longitude of the starting location.
        save_key: Key the snapshot is stored under.
        save_dir: Directory backing the file store.
    """

    tile_width: float = 1e-4
    visibility_radius: int = 8
    cache_spawn_probability: float = 0.1

    # Location of the classroom the game was first played in
    start_lat: float = 36.98949379578401
    start_lng: float = -122.06277128548504

    save_key: str = "geocoin.save"
    save_dir: str = ".geocoin"

    @property
    def start_location(self) -> LatLng:
        """The documented starting point for a fresh game."""
        return LatLng(self.start_lat, self.start_lng)

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            tile_width=float(data.get("tile_width", cls.tile_width)),
            visibility_radius=int(
                data.get("visibility_radius", cls.visibility_radius),
            ),
            cache_spawn_probability=float(
                data.get("cache_spawn_probability", cls.cache_spawn_probability),
            ),
            start_lat=float(data.get("start_lat", cls.start_lat)),
            start_lng=float(data.get("start_lng", cls.start_lng)),
            save_key=str(data.get("save_key", cls.save_key)),
            save_dir=str(data.get("save_dir", cls.save_dir)),
        )
