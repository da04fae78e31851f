from __future__ import annotations

from pathlib import Path

from core.arena import Arena
from core.simulation import Engine
from gui.frame_export import BACKGROUND, TOWER_COLORS, UNIT_COLORS, render_snapshot, save_frames


def _engine_with_unit() -> Engine:
    engine = Engine(Arena.default())
    engine.spawn_player_unit()
    return engine


def test_render_snapshot_draws_towers_and_units() -> None:
    engine = _engine_with_unit()

    img = render_snapshot(engine.snapshot(), (800, 500))

    assert img.size == (800, 500)
    assert img.getpixel((100, 250)) == TOWER_COLORS["player"]
    assert img.getpixel((700, 250)) == TOWER_COLORS["ai"]
    assert img.getpixel((130, 250)) == UNIT_COLORS["player"]
    assert img.getpixel((400, 450)) == BACKGROUND


def test_dead_units_are_not_drawn() -> None:
    engine = _engine_with_unit()
    engine.player.units[0].hp = 0

    img = render_snapshot(engine.snapshot(), (800, 500))

    assert img.getpixel((130, 250)) == BACKGROUND


def test_save_frames_writes_numbered_pngs(tmp_path: Path) -> None:
    engine = _engine_with_unit()
    snapshots = []
    for _ in range(3):
        engine.tick(0.1)
        snapshots.append(engine.snapshot())

    written = save_frames(snapshots, tmp_path / "frames", (800, 500))

    assert written == 3
    assert sorted(p.name for p in (tmp_path / "frames").iterdir()) == [
        "frame_00000.png",
        "frame_00001.png",
        "frame_00002.png",
    ]
