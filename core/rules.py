"""Gameplay constants for the tower skirmish simulation."""

from __future__ import annotations

PLAYER_SIDE = "player"
AI_SIDE = "ai"
SIDES: tuple[str, ...] = (PLAYER_SIDE, AI_SIDE)

# Towers
TOWER_HP = 200
TOWER_RANGE = 120.0
TOWER_DAMAGE = 15
TOWER_HIT_SPEED = 1.0
TOWER_MARGIN = 100.0

# Units
UNIT_HP = 50
UNIT_DAMAGE = 10
UNIT_SPEED = 40.0
UNIT_ATTACK_RANGE = 20.0
UNIT_HIT_SPEED = 1.0
UNIT_RADIUS = 8.0

# Elixir
ELIXIR_START = 5.0
ELIXIR_MAX = 10.0
ELIXIR_REGEN = 0.5
SPAWN_COST = 3.0
SPAWN_OFFSET = 30.0

# Scripted opponent
AI_SPAWN_INTERVAL = 3.0

# Field
FIELD_MAX_WIDTH = 800
FIELD_ASPECT = 0.625

# Frame scheduling
TICK_RATE: float = 30.0
TIME_STEP: float = 1.0 / TICK_RATE
MAX_DELTA_TIME = 0.25
