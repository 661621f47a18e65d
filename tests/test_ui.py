"""Smoke tests for the UI module (no display required)."""

from __future__ import annotations

from geocoin.ui.pygame_client import PygameRenderer


def test_pygame_renderer_importable() -> None:
    """PygameRenderer class is importable without initialising pygame."""
    assert PygameRenderer is not None


def test_main_module_importable() -> None:
    """The __main__ module is importable and exposes main()."""
    from geocoin.__main__ import main

    assert callable(main)


def test_sensor_hint_needs_tracker() -> None:
    """The sensor key is only advertised when a tracker is attached."""
    from geocoin.ui.pygame_client import control_hints

    assert "G: toggle sensor" not in control_hints(has_tracker=False)
    assert "G: toggle sensor" in control_hints(has_tracker=True)
