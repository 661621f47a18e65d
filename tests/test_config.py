"""Tests for geocoin.game.config."""

from pathlib import Path

from geocoin.game.config import GameConfig
from geocoin.world.cell import LatLng


class TestGameConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = GameConfig()
        assert cfg.tile_width == 1e-4
        assert cfg.visibility_radius == 8
        assert cfg.cache_spawn_probability == 0.1

    def test_start_location(self) -> None:
        cfg = GameConfig(start_lat=1.0, start_lng=-2.0)
        assert cfg.start_location == LatLng(1.0, -2.0)

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(
            "tile_width: 0.001\nvisibility_radius: 3\ncache_spawn_probability: 0.5\n",
        )
        cfg = GameConfig.from_yaml(yaml_file)
        assert cfg.tile_width == 0.001
        assert cfg.visibility_radius == 3
        assert cfg.cache_spawn_probability == 0.5
        assert cfg.save_key == "geocoin.save"

    def test_from_empty_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert GameConfig.from_yaml(yaml_file) == GameConfig()

    def test_bundled_default(self) -> None:
        path = Path(__file__).resolve().parent.parent / "config" / "default.yaml"
        assert GameConfig.from_yaml(path) == GameConfig()
