"""The world as seen by the display: live state, pending births and visible regions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import chain
from typing import Callable, Iterable, Iterator, Optional

from nealife.cells import CELL_SIZE, Cell
from nealife.life import Life


@dataclass
class State:
    """The current world plus cells drawn while a tick is being computed."""

    life: Life = field(default_factory=Life)
    births: set[Cell] = field(default_factory=set)
    is_ticking: bool = False

    @classmethod
    def with_life(cls, life: Life) -> State:
        return cls(life=life)

    def cell_count(self) -> int:
        return len(self.life) + len(self.births)

    def contains(self, cell: Cell) -> bool:
        return self.life.contains(cell) or cell in self.births

    def cells(self) -> Iterator[Cell]:
        """Yield the world's cells followed by the pending births."""
        return chain(self.life, self.births)

    def populate(self, cell: Cell) -> None:
        if self.is_ticking:
            self.births.add(cell)
        else:
            self.life.populate(cell)

    def unpopulate(self, cell: Cell) -> None:
        if self.is_ticking:
            self.births.discard(cell)
        else:
            self.life.unpopulate(cell)

    def tick(self, amount: int) -> Optional[Callable[[], Life]]:
        """Start a tick of ``amount`` generations.

        Returns a job computing the advanced world on a copy, or None while an
        earlier tick is still outstanding.
        """
        if self.is_ticking:
            return None
        self.is_ticking = True
        life = self.life.copy()

        def advance() -> Life:
            for _ in range(amount):
                life.tick()
            return life

        return advance

    def update(self, life: Life) -> None:
        """Install a ticked world, folding in cells drawn meanwhile."""
        for cell in self.births:
            life.populate(cell)
        self.births.clear()
        self.life = life
        self.is_ticking = False


@dataclass
class Region:
    """A rectangle of the world in unscaled pixel coordinates."""

    x: float
    y: float
    width: float
    height: float

    def rows(self) -> range:
        first = math.floor(self.y / CELL_SIZE)
        visible = math.ceil(self.height / CELL_SIZE)
        return range(first, first + visible + 1)

    def columns(self) -> range:
        first = math.floor(self.x / CELL_SIZE)
        visible = math.ceil(self.width / CELL_SIZE)
        return range(first, first + visible + 1)

    def cull(self, cells: Iterable[Cell]) -> Iterator[Cell]:
        """Yield only the cells that fall inside this region."""
        rows = self.rows()
        columns = self.columns()
        return (cell for cell in cells if cell.i in rows and cell.j in columns)