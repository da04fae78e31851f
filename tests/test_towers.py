from __future__ import annotations

from core.simulation import Tower, Unit


def _tower() -> Tower:
    return Tower(owner="player", x=100.0, y=250.0)


def _enemy(uid: int, x: float, target: Tower, hp: int = 50) -> Unit:
    return Unit(id=uid, owner="ai", x=x, y=250.0, target=target, hp=hp)


def test_tower_defaults_match_rules() -> None:
    tower = _tower()
    assert tower.hp == 200
    assert tower.range == 120.0
    assert tower.damage == 15


def test_tower_hits_first_unit_in_roster_order_not_nearest() -> None:
    tower = _tower()
    far = _enemy(1, 200.0, tower)
    near = _enemy(2, 110.0, tower)

    hit = tower.update(0.0, [far, near])

    assert hit is far
    assert far.hp == 35
    assert near.hp == 50
    assert tower._attack_cd == 1.0


def test_tower_skips_dead_and_out_of_range_units() -> None:
    tower = _tower()
    dead = _enemy(1, 110.0, tower, hp=0)
    outside = _enemy(2, 221.0, tower)
    edge = _enemy(3, 220.0, tower)

    hit = tower.update(0.0, [dead, outside, edge])

    assert hit is edge
    assert dead.hp == 0
    assert outside.hp == 50
    assert edge.hp == 35


def test_tower_without_target_still_counts_down() -> None:
    tower = _tower()

    assert tower.update(0.5, []) is None
    assert tower._attack_cd == -0.5


def test_tower_fires_at_most_once_per_second() -> None:
    tower = _tower()
    tank = _enemy(1, 150.0, tower, hp=1000)

    hits = 0
    elapsed = 0.0
    for _ in range(12):
        if tower.update(0.25, [tank]) is not None:
            hits += 1
        elapsed += 0.25

    assert hits == 3
    assert hits <= elapsed + 1
    assert tank.hp == 1000 - 3 * 15


def test_destroyed_tower_does_nothing() -> None:
    tower = _tower()
    tower.hp = 0
    enemy = _enemy(1, 110.0, tower)

    assert tower.update(1.0, [enemy]) is None
    assert enemy.hp == 50
    assert tower._attack_cd == 0.0
