"""Project entry point providing a small CLI menu.

Option 1 opens the tkinter window where you spawn units against the scripted
opponent. Option 2 plays a batch of headless matches and prints the summary.
"""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def play_gui() -> None:
    try:
        subprocess.run([sys.executable, "-m", "gui.gui"], cwd=ROOT, check=False)
    except FileNotFoundError:
        print("[!] Unable to execute gui/gui.py. Ensure the file exists and tkinter is installed.")


def run_headless() -> None:
    try:
        raw = input("How many matches? [10]: ").strip()
    except (KeyboardInterrupt, EOFError):
        print()
        return
    try:
        matches = int(raw) if raw else 10
    except ValueError:
        print("[!] Not a number, using 10.")
        matches = 10

    from scripts.simulate_matches import main as simulate

    simulate(["--matches", str(max(1, matches))])


def main() -> None:
    MENU = (
        "\n=== Tower Skirmish Launcher ===\n"
        "1) Play against the scripted opponent\n"
        "2) Run headless matches\n"
        "3) Exit\n"
    )

    while True:
        print(MENU, end="")
        try:
            choice = input("Select an option [1-3]: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nExiting.")
            break

        if choice == "1":
            play_gui()
        elif choice == "2":
            run_headless()
        elif choice == "3":
            print("Goodbye!")
            break
        else:
            print("Invalid selection. Please choose 1, 2, or 3.")


if __name__ == "__main__":
    main()
