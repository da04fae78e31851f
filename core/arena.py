from __future__ import annotations

"""Battlefield dimensions and tower placement for the skirmish simulation."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from .geometry import Point
from .rules import (
    AI_SIDE,
    FIELD_ASPECT,
    FIELD_MAX_WIDTH,
    PLAYER_SIDE,
    SIDES,
    TOWER_DAMAGE,
    TOWER_HP,
    TOWER_MARGIN,
    TOWER_RANGE,
)

DEFAULT_ARENA_PATH = Path(__file__).resolve().parents[1] / "data" / "arena.json"

DEFAULT_TOWER_STATS: Dict[str, float] = {
    "hp": float(TOWER_HP),
    "range": TOWER_RANGE,
    "damage": float(TOWER_DAMAGE),
}


class ArenaError(Exception):
    """Raised when arena data is invalid or inconsistent."""


class Arena:
    """Field size plus one tower slot per side."""

    def __init__(self, path: Optional[str] = None, *, data: Optional[Dict[str, Any]] = None) -> None:
        if data is None:
            self._path: Optional[Path] = Path(path) if path else DEFAULT_ARENA_PATH
            data = self._load_file(self._path)
        else:
            self._path = None

        try:
            self.width = float(data["width"])
            self.height = float(data["height"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ArenaError(f"arena is missing a numeric width/height: {exc}") from exc
        if self.width <= 0 or self.height <= 0:
            raise ArenaError(f"arena dimensions must be positive, got {self.width}x{self.height}")

        raw_towers = data.get("towers")
        if not isinstance(raw_towers, dict):
            raise ArenaError("arena 'towers' must map side -> tower entry")
        self.towers: Dict[str, Dict[str, Any]] = {}
        for side in SIDES:
            if side not in raw_towers:
                raise ArenaError(f"arena has no tower for side {side!r}")
            self.towers[side] = self._load_tower(side, raw_towers[side])

    # ------------------------------------------------------------------
    @staticmethod
    def _load_file(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise ArenaError(f"missing arena file {path}")
        try:
            with path.open("r", encoding="utf-8") as fh:
                payload = json.load(fh)
        except json.JSONDecodeError as exc:
            raise ArenaError(f"arena file {path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise ArenaError(f"arena file {path} must contain an object")
        return payload

    def _load_tower(self, side: str, raw: Any) -> Dict[str, Any]:
        if not isinstance(raw, dict):
            raise ArenaError(f"tower entry for {side!r} must be an object")
        try:
            x = float(raw["x"])
            y = float(raw["y"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ArenaError(f"tower for {side!r} needs numeric x/y") from exc
        if not (0.0 <= x <= self.width and 0.0 <= y <= self.height):
            raise ArenaError(f"tower for {side!r} at ({x}, {y}) lies outside the field")
        try:
            hp = int(raw.get("hp", DEFAULT_TOWER_STATS["hp"]))
            rng = float(raw.get("range", DEFAULT_TOWER_STATS["range"]))
            damage = int(raw.get("damage", DEFAULT_TOWER_STATS["damage"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ArenaError(f"tower for {side!r} has a non-numeric hp/range/damage: {exc}") from exc
        if hp <= 0:
            raise ArenaError(f"tower for {side!r} must start with positive hp, got {hp}")
        if rng < 0:
            raise ArenaError(f"tower for {side!r} has negative range {rng}")
        return {"side": side, "x": x, "y": y, "hp": hp, "range": rng, "damage": damage}

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def default(cls) -> "Arena":
        """The bundled data/arena.json field."""
        return cls(str(DEFAULT_ARENA_PATH))

    @classmethod
    def from_viewport(cls, viewport_width: float) -> "Arena":
        """Size the field to the viewport, capped at 800 wide with a 16:10 ratio."""
        width = min(float(viewport_width), float(FIELD_MAX_WIDTH))
        height = width * FIELD_ASPECT
        data = {
            "width": width,
            "height": height,
            "towers": {
                PLAYER_SIDE: {"x": TOWER_MARGIN, "y": height / 2},
                AI_SIDE: {"x": width - TOWER_MARGIN, "y": height / 2},
            },
        }
        return cls(data=data)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def tower_position(self, side: str) -> Point:
        entry = self.tower_entry(side)
        return Point(entry["x"], entry["y"])

    def tower_entry(self, side: str) -> Dict[str, Any]:
        if side not in self.towers:
            raise ValueError(f"invalid side: {side!r}")
        return dict(self.towers[side])

    def summary(self) -> str:
        source = self._path.name if self._path else "<memory>"
        lines = [f"Arena {self.width:.0f}x{self.height:.0f} from {source}"]
        for side, tower in self.towers.items():
            lines.append(
                f"  {side} tower at ({tower['x']:.0f}, {tower['y']:.0f}): hp={tower['hp']} range={tower['range']:.0f} dmg={tower['damage']}"
            )
        return "\n".join(lines)


if __name__ == "__main__":
    print(Arena(str(DEFAULT_ARENA_PATH)).summary())
