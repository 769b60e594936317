"""The simulation controller: playback, speed, presets and persistence."""

from __future__ import annotations

import argparse
import dataclasses
import os
import random
import sqlite3
from typing import Optional, Sequence, Union

from nealife.database import WorldDatabase, WorldState, WorldStateError
from nealife.grid import Grid
from nealife.preset import DEFAULT_PRESET, Preset, all_presets

DEFAULT_DB_PATH = "life_simulation.db"
DEFAULT_SPEED = 5
MIN_SPEED = 1
MAX_SPEED = 1000


class LifeSim:
    """Drives a grid: queues ticks, tracks speed and saves or loads worlds."""

    def __init__(
        self,
        db_path: Union[str, os.PathLike] = DEFAULT_DB_PATH,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._db = WorldDatabase(db_path)
        self._rng = random.Random() if rng is None else rng
        self.grid = Grid.from_preset(DEFAULT_PRESET, self._rng)
        self.is_playing = False
        self.queued_ticks = 0
        self.speed = DEFAULT_SPEED
        self.next_speed: Optional[int] = None
        self.version = 0

    def tick(self) -> bool:
        """Queue one tick and run the queue if the grid is free; returns whether it ran."""
        self.queued_ticks = min(self.queued_ticks + 1, self.speed)
        job = self.grid.tick(self.queued_ticks)
        if job is None:
            return False
        if self.next_speed is not None:
            self.speed = self.next_speed
            self.next_speed = None
        self.queued_ticks = 0
        job()
        return True

    def toggle_playback(self) -> None:
        self.is_playing = not self.is_playing

    def toggle_grid(self, show: bool) -> None:
        self.grid.toggle_lines(show)

    def clear(self) -> None:
        self.grid.clear()
        self.version += 1

    def change_speed(self, speed: float) -> None:
        """Set the speed now, or after the next tick while playing."""
        rounded = round(speed)
        if not MIN_SPEED <= rounded <= MAX_SPEED:
            raise ValueError(f"speed must be between {MIN_SPEED} and {MAX_SPEED}")
        if self.is_playing:
            self.next_speed = rounded
        else:
            self.speed = rounded

    def pick_preset(self, preset: Preset) -> None:
        self.grid = Grid.from_preset(preset, self._rng)
        self.version += 1

    def save_state(self) -> bool:
        """Store the current world; returns False if the store refused it."""
        life = self.grid.state.life
        owned = {cell for organism in life.organisms for cell in organism.cells}
        state = WorldState(
            organisms=[dataclasses.replace(o, cells=list(o.cells)) for o in life.organisms],
            free_cells=[cell for cell in life.cells if cell not in owned],
            version=self.version,
        )
        try:
            self._db.save_state(state)
        except sqlite3.Error:
            return False
        return True

    def load_state(self) -> bool:
        """Replace the world with the stored one; returns False if it could not be read."""
        try:
            state = self._db.load_latest_state()
        except (sqlite3.Error, WorldStateError):
            return False
        life = self.grid.state.life
        life.organisms = state.organisms
        life.cells = state.free_cells
        self.version = state.version
        return True

    def tick_interval_ms(self) -> Optional[int]:
        """Milliseconds between ticks while playing, None while paused."""
        if not self.is_playing:
            return None
        return 1000 // self.speed


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the simulation without a display and print its status."""
    presets = {preset.name.lower(): preset for preset in all_presets()}
    parser = argparse.ArgumentParser(description="Run the artificial life world.")
    parser.add_argument("--db", default=DEFAULT_DB_PATH, help="world database file")
    parser.add_argument("--preset", choices=sorted(presets), help="starting pattern")
    parser.add_argument("--ticks", type=int, default=10, help="generations to run")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--load", action="store_true", help="start from the saved world")
    parser.add_argument("--save", action="store_true", help="save the world when done")
    args = parser.parse_args(argv)

    if args.ticks < 0:
        parser.error("--ticks must not be negative")

    rng = random.Random(args.seed) if args.seed is not None else None
    sim = LifeSim(args.db, rng)
    if args.preset:
        sim.pick_preset(presets[args.preset])
    if args.load and not sim.load_state():
        print("could not load the saved world")
        return 1
    for _ in range(args.ticks):
        sim.tick()
    print(sim.grid.status_text())
    if args.save and not sim.save_state():
        print("could not save the world")
        return 1
    return 0