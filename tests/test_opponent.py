from __future__ import annotations

import pytest

from core.arena import Arena
from core.opponent import ScriptedOpponent
from core.simulation import Engine


def test_opponent_waits_strictly_longer_than_interval() -> None:
    policy = ScriptedOpponent()

    assert policy.decide(3.0, 10.0) is False
    assert policy.decide(0.01, 10.0) is True
    assert policy.timer == 0.0


def test_opponent_defers_until_affordable() -> None:
    policy = ScriptedOpponent()

    assert policy.decide(3.01, 2.0) is False
    assert policy.timer == pytest.approx(3.01)
    assert policy.decide(1.0, 2.5) is False
    assert policy.timer == pytest.approx(4.01)

    assert policy.decide(0.5, 3.0) is True
    assert policy.timer == 0.0


def test_engine_runs_deferred_opponent_spawn() -> None:
    engine = Engine(Arena.default())
    engine.ai.elixir = 0.0

    engine.tick(3.01)
    assert engine.ai.units == []
    assert engine.opponent.timer == pytest.approx(3.01)

    engine.tick(1.0)
    assert engine.ai.units == []
    assert engine.opponent.timer == pytest.approx(4.01)

    engine.tick(2.0)
    assert len(engine.ai.units) == 1
    assert engine.opponent.timer == 0.0
    assert engine.ai.elixir == pytest.approx(0.005)

    decisions = engine.poll_decisions()
    assert [d.reason for d in decisions] == ["timer"]


def test_opponent_keeps_spawning_on_regen_alone() -> None:
    engine = Engine(Arena.default())
    for _ in range(600):
        engine.tick(0.05)

    spawn_times = [d.time for d in engine.decision_log if d.side == "ai"]
    assert len(spawn_times) >= 4
    gaps = [b - a for a, b in zip(spawn_times, spawn_times[1:])]
    assert all(gap > 3.0 for gap in gaps)
