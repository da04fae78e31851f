#!/usr/bin/env python3
"""simulate_matches.py

Play headless skirmishes where the player side spawns on its own timer, then
write a per-match CSV and print a short win/loss summary. Optionally dump PNG
frames of the first match.
"""

from __future__ import annotations

import argparse
import csv
import os
import statistics
import sys
from typing import Dict, List, Optional

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(SCRIPT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.arena import Arena  # type: ignore
from core.opponent import ScriptedOpponent  # type: ignore
from core.rules import TIME_STEP  # type: ignore
from core.simulation import Engine, MatchSnapshot  # type: ignore

ARENA_PATH = os.path.join(PROJECT_ROOT, "data", "arena.json")
DEFAULT_OUT = os.path.join(PROJECT_ROOT, "data", "processed", "match_summary.csv")
FIELDNAMES = ["match", "result", "duration", "player_spawns", "ai_spawns", "player_tower_hp", "ai_tower_hp"]


def play_match(
    arena: Arena,
    *,
    dt: float,
    max_time: float,
    player_interval: float,
    frames: Optional[List[MatchSnapshot]] = None,
) -> Dict[str, object]:
    engine = Engine(arena)
    player_policy = ScriptedOpponent(interval=player_interval)
    result = None
    while engine.time < max_time:
        if player_policy.decide(dt, engine.player.elixir):
            engine.spawn_player_unit()
        result = engine.tick(dt)
        if frames is not None:
            frames.append(engine.snapshot())
        if result is not None:
            break

    spawns = [record.side for record in engine.decision_log]
    return {
        "result": result.value if result is not None else "timeout",
        "duration": round(engine.time, 3),
        "player_spawns": spawns.count(engine.player.side),
        "ai_spawns": spawns.count(engine.ai.side),
        "player_tower_hp": engine.player.tower.hp,
        "ai_tower_hp": engine.ai.tower.hp,
    }


def write_results(rows: List[Dict[str, object]], out_path: str) -> None:
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDNAMES)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def summarize(rows: List[Dict[str, object]], out_path: str) -> None:
    wins = sum(1 for row in rows if row["result"] == "player_won")
    losses = sum(1 for row in rows if row["result"] == "player_lost")
    timeouts = len(rows) - wins - losses
    durations = [float(row["duration"]) for row in rows if row["result"] != "timeout"]
    avg = statistics.mean(durations) if durations else 0.0

    print(f"{wins} wins / {losses} losses / {timeouts} timeouts over {len(rows)} matches")
    print(f"Average decided match length {avg:.1f}s")
    print(f"Detailed results written to {out_path}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run headless tower skirmish matches.")
    parser.add_argument("--arena", default=ARENA_PATH, help="arena JSON file")
    parser.add_argument("--matches", type=int, default=10)
    parser.add_argument("--dt", type=float, default=TIME_STEP, help="seconds per tick")
    parser.add_argument("--max-time", type=float, default=300.0, help="give up after this many simulated seconds")
    parser.add_argument("--player-interval", type=float, default=3.0, help="seconds between player spawn attempts")
    parser.add_argument("--frames-dir", default=None, help="dump PNG frames of the first match here")
    parser.add_argument("--out", default=DEFAULT_OUT, help="CSV output path")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if not os.path.exists(args.arena):
        raise SystemExit(f"Missing arena file at {args.arena}")
    if args.dt <= 0:
        raise SystemExit("--dt must be positive")
    arena = Arena(args.arena)

    rows: List[Dict[str, object]] = []
    for idx in range(args.matches):
        frames: Optional[List[MatchSnapshot]] = [] if (args.frames_dir and idx == 0) else None
        row = play_match(
            arena,
            dt=args.dt,
            max_time=args.max_time,
            player_interval=args.player_interval,
            frames=frames,
        )
        row["match"] = idx + 1
        rows.append(row)
        if frames:
            from gui.frame_export import save_frames  # type: ignore

            written = save_frames(frames, args.frames_dir, (int(arena.width), int(arena.height)))
            print(f"Wrote {written} frames to {args.frames_dir}")

    write_results(rows, args.out)
    summarize(rows, args.out)


if __name__ == "__main__":
    main()
