"""The interactive grid: a world plus the view onto it and pointer handling."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from nealife.cells import Cell, CellType, chance
from nealife.life import Life, find_all_organisms
from nealife.preset import DEFAULT_PRESET, Preset
from nealife.state import Region, State

MIN_SCALING = 0.1
MAX_SCALING = 2.0
CHANCE_OF_ALIVE_SEED = 90.0


class InteractionKind(Enum):
    """What a held pointer is currently doing."""

    NONE = "none"
    DRAWING = "drawing"
    ERASING = "erasing"
    PANNING = "panning"


@dataclass
class Interaction:
    """Pointer state kept between events; panning remembers where it began."""

    kind: InteractionKind = InteractionKind.NONE
    translation: tuple[float, float] = (0.0, 0.0)
    start: tuple[float, float] = (0.0, 0.0)


def _format_duration(seconds: float) -> str:
    nanos = round(seconds * 1e9)
    for unit, scale in (("s", 1e9), ("ms", 1e6), ("µs", 1e3)):
        if nanos >= scale:
            return f"{nanos / scale:g}{unit}"
    return f"{nanos}ns"


@dataclass
class Grid:
    """A world seeded from a preset, with pan, zoom and drawing controls."""

    state: State = field(default_factory=State)
    preset: Preset = Preset.CUSTOM
    translation: tuple[float, float] = (0.0, 0.0)
    scaling: float = 1.0
    show_lines: bool = True
    last_tick_duration: float = 0.0
    last_queued_ticks: int = 0

    @classmethod
    def from_preset(
        cls, preset: Preset = DEFAULT_PRESET, rng: Optional[random.Random] = None
    ) -> Grid:
        """Seed a world from ``preset``; most cells start alive, the rest as growers."""
        source = random.Random() if rng is None else rng
        cells = [
            Cell(
                i,
                j,
                CellType.ALIVE if chance(CHANCE_OF_ALIVE_SEED, source) else CellType.GROWER,
            )
            for i, j in preset.life()
        ]
        life = Life(cells=cells, organisms=find_all_organisms(cells), rng=source)
        return cls(state=State.with_life(life), preset=preset)

    def tick(self, amount: int) -> Optional[Callable[[], Life]]:
        """Start advancing the world by ``amount`` generations.

        Returns a job that computes the new world, installs it and returns it,
        or None while an earlier tick is still outstanding.
        """
        advance = self.state.tick(amount)
        if advance is None:
            return None
        self.last_queued_ticks = amount

        def job() -> Life:
            start = time.perf_counter()
            life = advance()
            elapsed = time.perf_counter() - start
            self.state.update(life)
            self.last_tick_duration = elapsed / max(amount, 1)
            return life

        return job

    def populate(self, cell: Cell) -> None:
        self.state.populate(cell)
        self.preset = Preset.CUSTOM

    def unpopulate(self, cell: Cell) -> None:
        self.state.unpopulate(cell)
        self.preset = Preset.CUSTOM

    def translate(self, dx: float, dy: float) -> None:
        self.translation = (dx, dy)

    def scale(
        self, scaling: float, translation: Optional[tuple[float, float]] = None
    ) -> None:
        self.scaling = scaling
        if translation is not None:
            self.translation = translation

    def clear(self) -> None:
        """Empty the world, keeping its random source."""
        self.state = State.with_life(Life(rng=self.state.life.rng))
        self.preset = Preset.CUSTOM

    def toggle_lines(self, enabled: bool) -> None:
        self.show_lines = enabled

    def visible_region(self, width: float, height: float) -> Region:
        """Return the part of the world shown in a view of the given size."""
        region_width = width / self.scaling
        region_height = height / self.scaling
        tx, ty = self.translation
        return Region(
            x=-tx - region_width / 2.0,
            y=-ty - region_height / 2.0,
            width=region_width,
            height=region_height,
        )

    def project(
        self, x: float, y: float, width: float, height: float
    ) -> tuple[float, float]:
        """Map a view position to world coordinates."""
        region = self.visible_region(width, height)
        return (x / self.scaling + region.x, y / self.scaling + region.y)

    def _cell_under(self, x: float, y: float, width: float, height: float) -> Cell:
        return Cell.at(*self.project(x, y, width, height))

    def press(
        self,
        interaction: Interaction,
        button: str,
        x: Optional[float],
        y: Optional[float],
        width: float,
        height: float,
    ) -> bool:
        """Handle a button press; returns whether the event was captured.

        The left button draws on an empty cell or erases a drawn one, the
        right button starts panning. ``x`` or ``y`` of None means the pointer
        is outside the view.
        """
        if x is None or y is None:
            return False
        if button == "left":
            cell = self._cell_under(x, y, width, height)
            if self.state.contains(cell):
                interaction.kind = InteractionKind.ERASING
                self.unpopulate(cell)
            else:
                interaction.kind = InteractionKind.DRAWING
                self.populate(cell)
        elif button == "right":
            interaction.kind = InteractionKind.PANNING
            interaction.translation = self.translation
            interaction.start = (x, y)
        return True

    def move_cursor(
        self,
        interaction: Interaction,
        x: Optional[float],
        y: Optional[float],
        width: float,
        height: float,
    ) -> bool:
        """Continue drawing, erasing or panning; returns whether the event was captured."""
        if x is None or y is None:
            return False
        kind = interaction.kind
        if kind is InteractionKind.DRAWING:
            cell = self._cell_under(x, y, width, height)
            if not self.state.contains(cell):
                self.populate(cell)
        elif kind is InteractionKind.ERASING:
            cell = self._cell_under(x, y, width, height)
            if self.state.contains(cell):
                self.unpopulate(cell)
        elif kind is InteractionKind.PANNING:
            tx, ty = interaction.translation
            sx, sy = interaction.start
            self.translate(
                tx + (x - sx) / self.scaling,
                ty + (y - sy) / self.scaling,
            )
        return kind is not InteractionKind.NONE

    def release(self, interaction: Interaction) -> None:
        """End whatever the pointer was doing."""
        interaction.kind = InteractionKind.NONE

    def scroll(
        self,
        delta: float,
        x: Optional[float],
        y: Optional[float],
        width: float,
        height: float,
    ) -> bool:
        """Zoom around the pointer; returns whether the event was captured."""
        if x is None or y is None:
            return False
        old = self.scaling
        if (delta < 0 and old > MIN_SCALING) or (delta > 0 and old < MAX_SCALING):
            scaling = min(max(old * (1.0 + delta / 30.0), MIN_SCALING), MAX_SCALING)
            factor = scaling - old
            cx = x - width / 2.0
            cy = y - height / 2.0
            tx, ty = self.translation
            self.scale(
                scaling,
                (tx - cx * factor / (old * old), ty - cy * factor / (old * old)),
            )
        return True

    def status_text(self) -> str:
        """Summarise organisms, cells and the last tick's timing."""
        cell_count = self.state.cell_count()
        organism_count = len(self.state.life.organisms)
        plural = "" if cell_count == 1 else "s"
        return (
            f"{organism_count} organisms, {cell_count} cell{plural} @ "
            f"{_format_duration(self.last_tick_duration)} ({self.last_queued_ticks})"
        )