from __future__ import annotations

"""Core skirmish loop: towers, marching units, elixir and the match outcome."""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .arena import Arena
from .geometry import distance, step_toward
from .opponent import ScriptedOpponent
from .rules import (
    AI_SIDE,
    ELIXIR_MAX,
    ELIXIR_REGEN,
    ELIXIR_START,
    PLAYER_SIDE,
    SPAWN_COST,
    SPAWN_OFFSET,
    TOWER_DAMAGE,
    TOWER_HIT_SPEED,
    TOWER_HP,
    TOWER_RANGE,
    UNIT_ATTACK_RANGE,
    UNIT_DAMAGE,
    UNIT_HIT_SPEED,
    UNIT_HP,
    UNIT_RADIUS,
    UNIT_SPEED,
)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class MatchResult(Enum):
    PLAYER_WON = "player_won"
    PLAYER_LOST = "player_lost"


@dataclass
class Tower:
    owner: str
    x: float
    y: float
    hp: int = TOWER_HP
    hp_max: int = TOWER_HP
    range: float = TOWER_RANGE
    damage: int = TOWER_DAMAGE
    hit_speed: float = TOWER_HIT_SPEED

    _attack_cd: float = 0.0

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def select_target(self, enemy_units: Sequence["Unit"]) -> Optional["Unit"]:
        """First living enemy in roster order that is inside range.

        Spawn order decides priority; the closest unit is not preferred.
        """
        for unit in enemy_units:
            if unit.hp > 0 and distance(self, unit) <= self.range:
                return unit
        return None

    def update(self, dt: float, enemy_units: Sequence["Unit"]) -> Optional["Unit"]:
        """Advance the tower by ``dt`` seconds and return the unit it hit, if any."""
        if self.hp <= 0:
            return None

        self._attack_cd -= dt

        target = self.select_target(enemy_units)
        if target is not None and self._attack_cd <= 0:
            target.hp -= self.damage
            self._attack_cd = self.hit_speed
            return target
        return None


@dataclass
class Unit:
    id: int
    owner: str
    x: float
    y: float
    target: Tower
    hp: int = UNIT_HP
    hp_max: int = UNIT_HP
    damage: int = UNIT_DAMAGE
    speed: float = UNIT_SPEED
    range: float = UNIT_ATTACK_RANGE
    hit_speed: float = UNIT_HIT_SPEED
    radius: float = UNIT_RADIUS

    _attack_cd: float = 0.0

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def update(self, dt: float) -> bool:
        """March on the target tower or strike it. Returns True when a hit lands."""
        if self.hp <= 0:
            return False

        struck = False
        if distance(self, self.target) > self.range:
            self.x, self.y = step_toward(self, self.target, self.speed * dt)
        elif self._attack_cd <= 0:
            self.target.hp -= self.damage
            self._attack_cd = self.hit_speed
            struck = True

        # Ticks down while walking too, so a unit can arrive with its first swing ready.
        self._attack_cd -= dt
        return struck


@dataclass
class Player:
    side: str
    tower: Tower
    elixir: float = ELIXIR_START
    units: List[Unit] = field(default_factory=list)

    def regenerate_elixir(self, dt: float) -> None:
        self.elixir = clamp(self.elixir + dt * ELIXIR_REGEN, 0.0, ELIXIR_MAX)

    def can_afford(self, cost: float = SPAWN_COST) -> bool:
        return self.elixir >= cost

    def live_units(self) -> List[Unit]:
        return [u for u in self.units if u.alive]


@dataclass
class SpawnRecord:
    '''A resolved spawn with the elixir it cost.'''

    time: float
    side: str
    unit_id: int
    elixir_before: float
    elixir_after: float
    reason: Optional[str] = None


@dataclass(frozen=True)
class TowerView:
    owner: str
    x: float
    y: float
    hp: int
    hp_max: int
    range: float


@dataclass(frozen=True)
class UnitView:
    id: int
    owner: str
    x: float
    y: float
    hp: int
    hp_max: int
    radius: float


@dataclass(frozen=True)
class MatchSnapshot:
    '''Read-only state handed to renderers after each tick.'''

    time: float
    towers: Tuple[TowerView, ...]
    units: Tuple[UnitView, ...]
    player_elixir: float
    opponent_elixir: float
    result: Optional[MatchResult] = None


class Engine:
    """Owns both sides and advances the match one tick at a time."""

    def __init__(
        self,
        arena: Optional[Arena] = None,
        *,
        max_delta_time: Optional[float] = None,
        opponent_factory: Callable[[], ScriptedOpponent] = ScriptedOpponent,
    ) -> None:
        if max_delta_time is not None and max_delta_time <= 0:
            raise ValueError(f"max_delta_time must be positive, got {max_delta_time}")
        self.arena = arena if arena is not None else Arena.default()
        self.max_delta_time = max_delta_time
        self._opponent_factory = opponent_factory
        self._event_listeners: Dict[str, List[Callable[[Dict[str, Any]], None]]] = defaultdict(list)
        self.decision_log: List[SpawnRecord] = []
        self._recent_decisions: List[SpawnRecord] = []
        self.event_log: List[Tuple[str, Dict[str, Any]]] = []
        self._recent_events: List[Tuple[str, Dict[str, Any]]] = []
        self.restart()

    def restart(self) -> None:
        """Rebuild both sides and the opponent from scratch.

        Event listeners survive a restart; logs do not.
        """
        self.time = 0.0
        self.over = False
        self.result: Optional[MatchResult] = None
        self._last_timestamp: Optional[float] = None
        self._unit_id_seq = 1

        self.player = Player(PLAYER_SIDE, self._build_tower(PLAYER_SIDE))
        self.ai = Player(AI_SIDE, self._build_tower(AI_SIDE))
        self.players: Dict[str, Player] = {PLAYER_SIDE: self.player, AI_SIDE: self.ai}
        self.opponent = self._opponent_factory()

        self.clear_decision_log()
        self.clear_event_log()

    def _build_tower(self, side: str) -> Tower:
        entry = self.arena.tower_entry(side)
        return Tower(
            owner=side,
            x=entry["x"],
            y=entry["y"],
            hp=entry["hp"],
            hp_max=entry["hp"],
            range=entry["range"],
            damage=entry["damage"],
        )

    # ------------------------------------------------------------------
    # Frame scheduling
    # ------------------------------------------------------------------

    def advance(self, timestamp: float) -> Optional[MatchResult]:
        """Tick using the time elapsed since the previous ``advance`` call.

        The first call only primes the clock and runs a zero-length tick.
        """
        if self._last_timestamp is None:
            dt = 0.0
        else:
            dt = timestamp - self._last_timestamp
        self._last_timestamp = timestamp
        return self.tick(dt)

    def _effective_delta(self, dt: float) -> float:
        dt = max(0.0, float(dt))
        if self.max_delta_time is not None:
            dt = min(dt, self.max_delta_time)
        return dt

    def tick(self, dt: float) -> Optional[MatchResult]:
        if self.over:
            return self.result
        dt = self._effective_delta(dt)
        # Everything logged during this tick carries the end-of-tick time.
        self.time += dt

        self.player.regenerate_elixir(dt)
        self.ai.regenerate_elixir(dt)

        for unit in self.player.units:
            self._update_unit(unit, dt)
        for unit in self.ai.units:
            self._update_unit(unit, dt)

        self._update_tower(self.player.tower, self.ai.units, dt)
        self._update_tower(self.ai.tower, self.player.units, dt)

        if self.opponent.decide(dt, self.ai.elixir):
            self.spawn(AI_SIDE, reason="timer")

        self._check_match_end()
        return self.result

    def _update_unit(self, unit: Unit, dt: float) -> None:
        if unit.update(dt):
            tower = unit.target
            self._dispatch_event(
                "tower_damaged",
                {"side": tower.owner, "hp": tower.hp, "amount": unit.damage, "by": unit.id},
            )

    def _update_tower(self, tower: Tower, enemy_units: Sequence[Unit], dt: float) -> None:
        victim = tower.update(dt, enemy_units)
        if victim is not None and not victim.alive:
            self._dispatch_event("unit_killed", {"side": victim.owner, "unit": victim.id, "by": tower.owner})

    def _check_match_end(self) -> None:
        # Loss wins the tie when both towers fall on the same tick.
        if self.player.tower.hp <= 0:
            self._finalize_match(MatchResult.PLAYER_LOST)
        elif self.ai.tower.hp <= 0:
            self._finalize_match(MatchResult.PLAYER_WON)

    def _finalize_match(self, result: MatchResult) -> None:
        self.over = True
        self.result = result
        self._dispatch_event("match_over", {"result": result.value})

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def player_for(self, side: str) -> Player:
        if side not in self.players:
            raise ValueError(f"invalid side: {side!r}")
        return self.players[side]

    def opponent_of(self, side: str) -> Player:
        return self.ai if self.player_for(side) is self.player else self.player

    def spawn(self, side: str, *, reason: Optional[str] = None) -> bool:
        """Buy a unit for ``side`` next to its tower. Returns False if it cannot pay."""
        owner = self.player_for(side)
        enemy = self.opponent_of(side)
        if self.over or not owner.can_afford(SPAWN_COST):
            return False

        elixir_before = owner.elixir
        owner.elixir -= SPAWN_COST
        offset = SPAWN_OFFSET if side == PLAYER_SIDE else -SPAWN_OFFSET
        unit = Unit(
            id=self._unit_id_seq,
            owner=side,
            x=owner.tower.x + offset,
            y=owner.tower.y,
            target=enemy.tower,
        )
        self._unit_id_seq += 1
        owner.units.append(unit)

        self._push_decision(
            SpawnRecord(
                time=self.time,
                side=side,
                unit_id=unit.id,
                elixir_before=elixir_before,
                elixir_after=owner.elixir,
                reason=reason,
            )
        )
        self._dispatch_event(
            "unit_spawned",
            {"side": side, "unit": unit.id, "x": unit.x, "y": unit.y, "elixir_after": owner.elixir},
        )
        return True

    def spawn_player_unit(self) -> bool:
        return self.spawn(PLAYER_SIDE, reason="manual")

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def list_units(self) -> List[Unit]:
        return self.player.live_units() + self.ai.live_units()

    def elixir_display(self) -> int:
        return int(math.floor(self.player.elixir))

    def snapshot(self) -> MatchSnapshot:
        towers = tuple(
            TowerView(owner=t.owner, x=t.x, y=t.y, hp=t.hp, hp_max=t.hp_max, range=t.range)
            for t in (self.player.tower, self.ai.tower)
        )
        units = tuple(
            UnitView(id=u.id, owner=u.owner, x=u.x, y=u.y, hp=u.hp, hp_max=u.hp_max, radius=u.radius)
            for u in self.list_units()
        )
        return MatchSnapshot(
            time=self.time,
            towers=towers,
            units=units,
            player_elixir=self.player.elixir,
            opponent_elixir=self.ai.elixir,
            result=self.result,
        )

    # ------------------------------------------------------------------
    # Decision history helpers
    # ------------------------------------------------------------------

    def poll_decisions(self, *, clear: bool = True) -> List[SpawnRecord]:
        '''Return spawns resolved since the last poll.'''

        recent = list(self._recent_decisions)
        if clear:
            self._recent_decisions.clear()
        return recent

    def clear_decision_log(self) -> None:
        self.decision_log.clear()
        self._recent_decisions.clear()

    def _push_decision(self, record: SpawnRecord) -> None:
        self.decision_log.append(record)
        self._recent_decisions.append(record)

    # ------------------------------------------------------------------
    # Event helpers
    # ------------------------------------------------------------------

    def add_event_listener(self, event_name: str, callback: Callable[[Dict[str, Any]], None]) -> None:
        self._event_listeners[event_name].append(callback)

    def remove_event_listener(self, event_name: str, callback: Callable[[Dict[str, Any]], None]) -> None:
        listeners = self._event_listeners.get(event_name)
        if not listeners:
            return
        try:
            listeners.remove(callback)
        except ValueError:
            return
        if not listeners:
            self._event_listeners.pop(event_name, None)

    def poll_events(self, *, clear: bool = True) -> List[Tuple[str, Dict[str, Any]]]:
        events = list(self._recent_events)
        if clear:
            self._recent_events.clear()
        return events

    def clear_event_log(self) -> None:
        self.event_log.clear()
        self._recent_events.clear()

    def _dispatch_event(self, event_name: str, payload: Dict[str, Any]) -> None:
        event_payload = dict(payload)
        event_payload.setdefault("time", self.time)
        record = (event_name, event_payload)
        self.event_log.append(record)
        self._recent_events.append(record)
        for callback in tuple(self._event_listeners.get(event_name, ())):
            try:
                callback(dict(event_payload))
            except Exception as exc:
                print(f"[!] {event_name} listener {getattr(callback, '__name__', callback)!r} failed: {exc}")


__all__ = ["Engine", "MatchResult", "MatchSnapshot", "Player", "SpawnRecord", "Tower", "Unit"]
