from core.arena import Arena
from core.simulation import Engine

arena = Arena.default()
eng = Engine(arena)

# one player unit against whatever the scripted opponent sends
eng.spawn_player_unit()

for _ in range(600):
    if eng.tick(1 / 30) is not None:
        break

print("Player units:", len(eng.player.live_units()), "AI units:", len(eng.ai.live_units()))
print("Towers:", [(t.owner, t.hp) for t in (eng.player.tower, eng.ai.tower)])
print("Result:", eng.result)
