from __future__ import annotations

import math

import pytest

from core.geometry import distance
from core.simulation import Tower, Unit


def _make_pair(x: float = 130.0, y: float = 250.0) -> tuple[Unit, Tower]:
    tower = Tower(owner="ai", x=700.0, y=250.0)
    unit = Unit(id=1, owner="player", x=x, y=y, target=tower)
    return unit, tower


def test_unit_defaults_match_rules() -> None:
    unit, _ = _make_pair()
    assert unit.hp == 50
    assert unit.damage == 10
    assert unit.speed == 40.0
    assert unit.range == 20.0
    assert unit.radius == 8.0
    assert unit._attack_cd == 0.0


def test_unit_walks_straight_at_target() -> None:
    unit, tower = _make_pair()
    before = distance(unit, tower)

    assert unit.update(0.5) is False

    assert unit.x == pytest.approx(150.0)
    assert unit.y == pytest.approx(250.0)
    assert distance(unit, tower) < before
    assert tower.hp == 200


def test_unit_follows_bearing_on_diagonal() -> None:
    tower = Tower(owner="ai", x=300.0, y=400.0)
    unit = Unit(id=1, owner="player", x=0.0, y=0.0, target=tower)

    unit.update(0.5)

    # 20 units along a 3-4-5 bearing.
    assert unit.x == pytest.approx(12.0)
    assert unit.y == pytest.approx(16.0)


def test_unit_keeps_approaching_every_tick() -> None:
    unit, tower = _make_pair()
    last = distance(unit, tower)
    for _ in range(20):
        unit.update(0.1)
        current = distance(unit, tower)
        assert current < last
        last = current


def test_unit_in_range_hits_once_and_resets_cooldown() -> None:
    unit, tower = _make_pair(x=690.0)

    assert unit.update(0.0) is True
    assert tower.hp == 190
    assert unit._attack_cd == 1.0
    assert (unit.x, unit.y) == (690.0, 250.0)


def test_unit_attack_waits_for_cooldown() -> None:
    unit, tower = _make_pair(x=690.0)
    unit.update(0.0)

    assert unit.update(0.5) is False
    assert unit.update(0.5) is False
    assert tower.hp == 190
    assert unit._attack_cd == pytest.approx(0.0)

    assert unit.update(0.1) is True
    assert tower.hp == 180


def test_unit_cooldown_runs_down_while_walking() -> None:
    unit, tower = _make_pair()
    unit._attack_cd = 0.5

    unit.update(1.0)

    assert unit._attack_cd == pytest.approx(-0.5)
    assert tower.hp == 200


def test_dead_unit_is_inert() -> None:
    unit, tower = _make_pair(x=690.0)
    unit.hp = -5

    assert unit.alive is False
    assert unit.update(1.0) is False
    assert (unit.x, unit.y) == (690.0, 250.0)
    assert unit._attack_cd == 0.0
    assert tower.hp == 200


def test_large_step_can_overshoot_target() -> None:
    unit, tower = _make_pair(x=650.0)

    unit.update(2.0)

    assert unit.x == pytest.approx(730.0)
    assert math.isclose(distance(unit, tower), 30.0)
