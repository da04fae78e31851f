from __future__ import annotations

"""Timer-gated spawn rule used by the scripted opponent."""

from dataclasses import dataclass

from .rules import AI_SPAWN_INTERVAL, SPAWN_COST


@dataclass
class ScriptedOpponent:
    """Fires once the interval has passed and a unit is affordable.

    If the side is short on elixir when the interval runs out, the timer keeps
    growing and fires on the first later tick where elixir allows it.
    """

    interval: float = AI_SPAWN_INTERVAL
    cost: float = SPAWN_COST
    timer: float = 0.0

    def decide(self, dt: float, elixir: float) -> bool:
        self.timer += dt
        if self.timer > self.interval and elixir >= self.cost:
            self.timer = 0.0
            return True
        return False
