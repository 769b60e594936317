"""Cells, their types and the organisms built from them."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass, field
from enum import Enum
from itertools import product
from typing import Iterable, Iterator, Optional

CELL_SIZE = 20
NEW_ORGANISM_ENERGY = 100

_MUTATION_TYPES = ("ALIVE", "GROWER")


class CellType(Enum):
    """What a cell on the grid is."""

    EMPTY = "Empty"
    ALIVE = "Alive"
    FOOD = "Food"
    GROWER = "Grower"
    MOVER = "Mover"


def chance(percentage: float, rng: Optional[random.Random] = None) -> bool:
    """Return True with the given probability, expressed in percent."""
    source = random if rng is None else rng
    return source.random() < percentage / 100.0


def random_cell_type(rng: Optional[random.Random] = None) -> CellType:
    """Pick one of the cell types that a mutation can produce."""
    source = random if rng is None else rng
    return CellType[source.choice(_MUTATION_TYPES)]


@dataclass(frozen=True)
class Cell:
    """A typed cell at row ``i`` and column ``j``."""

    i: int
    j: int
    cell_type: CellType = CellType.ALIVE

    @staticmethod
    def at(x: float, y: float) -> Cell:
        """Return the food cell under a point given in world coordinates."""
        i = math.ceil(y / CELL_SIZE) - 1
        j = math.ceil(x / CELL_SIZE) - 1
        return Cell(i, j, CellType.FOOD)

    def cluster(self) -> Iterator[Cell]:
        """Yield the 3x3 block centred on this cell, row by row."""
        rows = range(self.i - 1, self.i + 2)
        columns = range(self.j - 1, self.j + 2)
        for i, j in product(rows, columns):
            yield Cell(i, j, self.cell_type)

    def neighbors(self) -> Iterator[Cell]:
        """Yield the eight cells surrounding this one, with this cell's type."""
        return (candidate for candidate in self.cluster() if candidate != self)

    @property
    def position(self) -> tuple[int, int]:
        return (self.i, self.j)

    def is_food(self) -> bool:
        return self.cell_type is CellType.FOOD

    def with_type(self, cell_type: CellType) -> Cell:
        """Return the same position with a different type."""
        return dataclasses.replace(self, cell_type=cell_type)


@dataclass
class Organism:
    """A connected group of cells sharing an energy store."""

    cells: list[Cell] = field(default_factory=list)
    energy: int = NEW_ORGANISM_ENERGY
    able_to_move: bool = True
    id: Optional[int] = None

    @classmethod
    def spawn(cls, cells: Iterable[Cell]) -> Organism:
        """Create a fresh organism with the starting energy."""
        return cls(cells=list(cells), energy=NEW_ORGANISM_ENERGY, able_to_move=True)

    def has_mover(self) -> bool:
        return any(cell.cell_type is CellType.MOVER for cell in self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def contains(self, cell: Cell) -> bool:
        return cell in self.cells

    def populate(self, cell: Cell) -> None:
        if not self.contains(cell):
            self.cells.append(cell)

    def unpopulate(self, cell: Cell) -> None:
        self.cells = [c for c in self.cells if c != cell]

    def adjacent_food(self, world_cells: Iterable[Cell]) -> list[Cell]:
        """Return food cells of the world that touch this organism, without repeats."""
        world = set(world_cells)
        food: list[Cell] = []
        for cell in self.cells:
            for neighbor in cell.neighbors():
                if (
                    neighbor in world
                    and neighbor.is_food()
                    and not self.contains(neighbor)
                    and neighbor not in food
                ):
                    food.append(neighbor)
        return food

    def bounding_box(self) -> tuple[int, int, int, int]:
        """Return (min_j, max_j, min_i, max_i); all zero when there are no cells."""
        if not self.cells:
            return (0, 0, 0, 0)
        columns = [c.j for c in self.cells]
        rows = [c.i for c in self.cells]
        return (min(columns), max(columns), min(rows), max(rows))

    def is_valid(self) -> bool:
        """An organism is valid when it has cells and a positive stored id."""
        return bool(self.cells) and self.id is not None and self.id > 0