from __future__ import annotations

import math
from typing import Any, NamedTuple, Tuple, Union


class Point(NamedTuple):
    x: float
    y: float


PointLike = Union[Point, Tuple[float, float], Any]


def _xy(obj: PointLike) -> Tuple[float, float]:
    if isinstance(obj, tuple):
        return float(obj[0]), float(obj[1])
    return float(obj.x), float(obj.y)


def distance(a: PointLike, b: PointLike) -> float:
    ax, ay = _xy(a)
    bx, by = _xy(b)
    return math.hypot(ax - bx, ay - by)


def bearing(origin: PointLike, target: PointLike) -> float:
    """Angle in radians from ``origin`` towards ``target``."""
    ox, oy = _xy(origin)
    tx, ty = _xy(target)
    return math.atan2(ty - oy, tx - ox)


def step_toward(origin: PointLike, target: PointLike, length: float) -> Point:
    """Move ``length`` units along the straight line to ``target``.

    There is no stopping at the target: a long enough step overshoots it.
    """
    ox, oy = _xy(origin)
    angle = bearing((ox, oy), target)
    return Point(ox + math.cos(angle) * length, oy + math.sin(angle) * length)
