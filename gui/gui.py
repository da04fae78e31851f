import tkinter as tk
from tkinter import Canvas, StringVar, messagebox
import time
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.arena import Arena
from core.rules import AI_SIDE, MAX_DELTA_TIME, PLAYER_SIDE
from core.simulation import Engine, MatchResult

BACKGROUND = "#3a3a3a"
TOWER_COLORS = {PLAYER_SIDE: "blue", AI_SIDE: "red"}
UNIT_COLORS = {PLAYER_SIDE: "cyan", AI_SIDE: "orange"}
RESULT_TEXT = {
    MatchResult.PLAYER_WON: "You Win!",
    MatchResult.PLAYER_LOST: "You Lose!",
}


class SkirmishGUI:
    def __init__(self, root, arena=None):
        self.root = root
        self.root.title("Tower Skirmish")

        if arena is None:
            arena = Arena.from_viewport(self.root.winfo_screenwidth())
        self.arena = arena
        self.engine = Engine(self.arena, max_delta_time=MAX_DELTA_TIME)

        self.canvas = Canvas(root, width=int(self.arena.width), height=int(self.arena.height), bg=BACKGROUND)
        self.canvas.pack(side="top")

        panel = tk.Frame(root, bg="#333333")
        panel.pack(side="bottom", fill="x")

        self.elixir_var = StringVar(value=str(self.engine.elixir_display()))
        tk.Label(panel, text="Elixir:", fg="white", bg="#333333").pack(side="left", padx=(10, 2), pady=5)
        tk.Label(panel, textvariable=self.elixir_var, fg="#d070ff", bg="#333333").pack(side="left", pady=5)
        tk.Button(panel, text="Spawn Unit (3)", command=self.on_spawn).pack(side="right", padx=10, pady=5)

        self.root.bind("<space>", lambda _event: self.on_spawn())

        self._frame_job = None
        self.update_loop()

    def on_spawn(self):
        self.engine.spawn_player_unit()

    def update_loop(self):
        result = self.engine.advance(time.monotonic())
        self.render()
        self.elixir_var.set(str(self.engine.elixir_display()))

        if result is not None:
            self._frame_job = None
            self.root.after_idle(self.finish_match, result)
            return
        self._frame_job = self.root.after(16, self.update_loop)  # ~60 FPS

    def finish_match(self, result):
        messagebox.showinfo("Match over", RESULT_TEXT[result], parent=self.root)
        self.engine.restart()
        self.update_loop()

    def render(self):
        self.canvas.delete("all")
        snap = self.engine.snapshot()

        for t in snap.towers:
            self.canvas.create_rectangle(
                t.x - 15, t.y - 15, t.x + 15, t.y + 15,
                fill=TOWER_COLORS.get(t.owner, "grey"), outline=""
            )
            # HP bar
            frac = max(0.0, min(1.0, t.hp / t.hp_max))
            self.canvas.create_rectangle(
                t.x - 20, t.y - 30, t.x - 20 + 40 * frac, t.y - 25,
                fill="green", outline=""
            )

        for u in snap.units:
            r = u.radius
            self.canvas.create_oval(
                u.x - r, u.y - r, u.x + r, u.y + r,
                fill=UNIT_COLORS.get(u.owner, "white"), outline=""
            )

        self.canvas.create_text(8, 8, text=f"t={snap.time:.1f}", fill="white", anchor="nw")
        self.canvas.create_text(
            8, 24,
            text=f"Opponent elixir={snap.opponent_elixir:.1f}  units={sum(1 for u in snap.units if u.owner != PLAYER_SIDE)}",
            fill="white", anchor="nw"
        )


if __name__ == "__main__":
    root = tk.Tk()
    app = SkirmishGUI(root)
    root.mainloop()
