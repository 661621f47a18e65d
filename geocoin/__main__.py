"""Entry point for ``python -m geocoin``.

Loads the default YAML config, restores the saved game if there is one,
and opens a Pygame window to walk around and collect coins.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from geocoin.game.config import GameConfig
from geocoin.game.persistence import FileStore, SaveManager
from geocoin.game.session import GameSession
from geocoin.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for console output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main() -> None:
    """Parse CLI args, load the game, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="geocoin",
        description="Geocoin - walk the map, collect and deposit coins",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--save-dir",
        type=pathlib.Path,
        default=None,
        help="Directory for save files (default: save_dir from config)",
    )
    parser.add_argument(
        "--new-game",
        action="store_true",
        help="Delete any saved game and start fresh",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=24,
        help="Pixel size per grid cell (default: 24)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args()
    setup_logging(args.log_level)

    config = GameConfig.from_yaml(args.config)
    session = GameSession(config=config)

    store = FileStore(args.save_dir or pathlib.Path(config.save_dir))
    save_manager = SaveManager(store=store, key=config.save_key)
    if args.new_game:
        save_manager.reset(session)
    else:
        save_manager.load(session)

    renderer = PygameRenderer(
        session=session,
        cell_size=args.cell_size,
        save_manager=save_manager,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
