"""Draw match snapshots with Pillow so headless runs can be inspected."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Tuple, Union

from PIL import Image, ImageDraw

from core.rules import AI_SIDE, PLAYER_SIDE
from core.simulation import MatchResult, MatchSnapshot

BACKGROUND: Tuple[int, int, int] = (58, 58, 58)
HP_GREEN: Tuple[int, int, int] = (0, 128, 0)
TOWER_COLORS = {
    PLAYER_SIDE: (0, 0, 255),
    AI_SIDE: (255, 0, 0),
}
UNIT_COLORS = {
    PLAYER_SIDE: (0, 255, 255),
    AI_SIDE: (255, 165, 0),
}
TOWER_HALF = 15
HP_BAR_WIDTH = 40


def render_snapshot(snapshot: MatchSnapshot, size: Tuple[int, int]) -> Image.Image:
    img = Image.new("RGB", size, BACKGROUND)
    draw = ImageDraw.Draw(img)

    for tower in snapshot.towers:
        color = TOWER_COLORS.get(tower.owner, (128, 128, 128))
        draw.rectangle(
            (tower.x - TOWER_HALF, tower.y - TOWER_HALF, tower.x + TOWER_HALF, tower.y + TOWER_HALF),
            fill=color,
        )
        frac = max(0.0, min(1.0, tower.hp / tower.hp_max)) if tower.hp_max else 0.0
        if frac > 0.0:
            left = tower.x - HP_BAR_WIDTH / 2
            draw.rectangle((left, tower.y - 30, left + HP_BAR_WIDTH * frac, tower.y - 25), fill=HP_GREEN)

    for unit in snapshot.units:
        r = unit.radius
        draw.ellipse(
            (unit.x - r, unit.y - r, unit.x + r, unit.y + r),
            fill=UNIT_COLORS.get(unit.owner, (255, 255, 255)),
        )

    label = f"t={snapshot.time:.1f}s elixir={int(snapshot.player_elixir)}"
    if snapshot.result is MatchResult.PLAYER_WON:
        label += " WIN"
    elif snapshot.result is MatchResult.PLAYER_LOST:
        label += " LOSS"
    draw.text((8, 8), label, fill=(255, 255, 255))
    return img


def save_frames(
    snapshots: Iterable[MatchSnapshot],
    out_dir: Union[str, Path],
    size: Tuple[int, int],
    *,
    prefix: str = "frame",
) -> int:
    """Write each snapshot as ``<prefix>_00000.png``; returns the number written."""
    directory = Path(out_dir)
    directory.mkdir(parents=True, exist_ok=True)
    count = 0
    for idx, snap in enumerate(snapshots):
        render_snapshot(snap, size).save(directory / f"{prefix}_{idx:05d}.png")
        count += 1
    return count
