"""The simulated world: free cells, organisms and the rules that advance them."""

from __future__ import annotations

import dataclasses
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from nealife.cells import Cell, CellType, Organism, chance, random_cell_type

CHANCE_TO_EAT = 80.0
MUTATION_RATE = 50.0
CHANCE_TO_SKIP_REPRODUCTION = 60.0
CHANCE_TO_SKIP_MUTATING_REPRODUCTION = 70.0
CHANCE_TO_GROW_FOOD = 1.0
ENERGY_FROM_FOOD = 5
REPRODUCTION_COST = 200
REPRODUCTION_GAP = 1

# (dx, dy) steps: dx moves along columns (j), dy along rows (i).
_ORTHOGONAL = ((0, 1), (0, -1), (1, 0), (-1, 0))
_MOVES = ((1, 0), (-1, 0), (0, 1), (0, -1))
_MUTATION_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def _shift(cell: Cell, dx: int, dy: int, cell_type: Optional[CellType] = None) -> Cell:
    return Cell(
        cell.i + dy,
        cell.j + dx,
        cell.cell_type if cell_type is None else cell_type,
    )


def _flood(start: Cell, members: set[Cell], visited: set[Cell]) -> list[Cell]:
    """Breadth-first walk over orthogonal neighbours of the same type."""
    found: list[Cell] = []
    queue = deque([start])
    visited.add(start)
    while queue:
        current = queue.popleft()
        found.append(current)
        for dx, dy in _ORTHOGONAL:
            neighbor = _shift(current, dx, dy)
            if neighbor in members and neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return found


def organism_from_clump(cells: Iterable[Cell], start_cell: Cell) -> Organism:
    """Build an organism from the clump of same-typed cells connected to ``start_cell``."""
    return Organism.spawn(_flood(start_cell, set(cells), set()))


def find_all_organisms(cells: Iterable[Cell]) -> list[Organism]:
    """Split cells into organisms, one per orthogonally connected same-typed clump."""
    cells = list(cells)
    members = set(cells)
    visited: set[Cell] = set()
    organisms: list[Organism] = []
    for cell in cells:
        if cell in visited:
            continue
        organisms.append(Organism.spawn(_flood(cell, members, visited)))
    return organisms


@dataclass(repr=False)
class Life:
    """Every cell in the world together with the organisms made of them."""

    cells: list[Cell] = field(default_factory=list)
    organisms: list[Organism] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, compare=False)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __repr__(self) -> str:
        return f"Life(cells={len(self.cells)})"

    def contains(self, cell: Cell) -> bool:
        return cell in self.cells

    def populate(self, cell: Cell) -> None:
        if not self.contains(cell):
            self.cells.append(cell)

    def unpopulate(self, cell: Cell) -> None:
        self.cells = [c for c in self.cells if c != cell]

    def copy(self) -> Life:
        """Return an independent copy sharing only the random source."""
        return Life(
            cells=list(self.cells),
            organisms=[dataclasses.replace(o, cells=list(o.cells)) for o in self.organisms],
            rng=self.rng,
        )

    def grow_food(self) -> None:
        """Let each grower sprout one food cell on its first free orthogonal side.

        A rare failed roll abandons the whole growth phase.
        """
        occupied = {cell.position for cell in self.cells}
        new_food: list[Cell] = []
        for cell in self.cells:
            if cell.cell_type is not CellType.GROWER:
                continue
            for dx, dy in _ORTHOGONAL:
                target = _shift(cell, dx, dy, CellType.FOOD)
                if target.position in occupied:
                    continue
                if chance(CHANCE_TO_GROW_FOOD, self.rng):
                    return
                new_food.append(target)
                break
        self.cells.extend(new_food)

    def consume_food(self) -> None:
        """Let organisms eat orthogonally adjacent food, gaining energy."""
        new_cells = list(self.cells)
        for organism in self.organisms:
            eaten: list[int] = []
            for cell in organism.cells:
                for dx, dy in _ORTHOGONAL:
                    neighbor = _shift(cell, dx, dy, CellType.FOOD)
                    index = next(
                        (k for k, c in enumerate(new_cells) if c == neighbor), None
                    )
                    if index is not None and chance(CHANCE_TO_EAT, self.rng):
                        eaten.append(index)
                        organism.energy += ENERGY_FROM_FOOD
            for index in reversed(eaten):
                del new_cells[index]
        self.cells = new_cells

    def move_organisms(self) -> None:
        """Try to step every organism one cell in a random direction.

        Every organism loses one energy, whether it moved or not.
        """
        new_cells = list(self.cells)
        moved: list[Organism] = []
        for organism in self.organisms:
            dx, dy = _MOVES[self.rng.randrange(len(_MOVES))]
            shifted = [_shift(cell, dx, dy) for cell in organism.cells]
            blockers = {
                c.position
                for c in self.cells
                if not c.is_food() and not organism.contains(c)
            }
            if any(target.position in blockers for target in shifted):
                cells = list(organism.cells)
                for cell in cells:
                    if cell not in new_cells:
                        new_cells.append(cell)
            else:
                old = set(organism.cells)
                new_cells = [c for c in new_cells if c not in old]
                new_cells.extend(shifted)
                cells = shifted
            moved.append(
                Organism(
                    cells=cells,
                    energy=max(organism.energy - 1, 0),
                    able_to_move=organism.able_to_move,
                    id=None,
                )
            )
        self.organisms = moved
        self.cells = new_cells

    def cull_dead_organisms(self) -> None:
        """Remove organisms without energy and turn their cells into food."""
        dead = [o for o in self.organisms if o.energy <= 0]
        self.organisms = [o for o in self.organisms if o.energy > 0]
        food = [cell.with_type(CellType.FOOD) for o in dead for cell in o.cells]
        food_positions = {cell.position for cell in food}
        self.cells = [c for c in self.cells if c.position not in food_positions]
        self.cells.extend(food)

    def reproduce_organisms(self) -> None:
        """Place an exact copy beside each organism rich enough to reproduce."""
        self._reproduce(CHANCE_TO_SKIP_REPRODUCTION, mutate=False)

    def reproduce_with_mutation(self) -> None:
        """Place a possibly mutated copy beside each organism rich enough to reproduce."""
        self._reproduce(CHANCE_TO_SKIP_MUTATING_REPRODUCTION, mutate=True)

    def tick(self) -> None:
        """Advance the world by one generation."""
        self.grow_food()
        self.move_organisms()
        self.consume_food()
        self.cull_dead_organisms()
        self.reproduce_with_mutation()

    def _reproduce(self, skip_chance: float, *, mutate: bool) -> None:
        offspring: list[Organism] = []
        for organism in self.organisms:
            if organism.energy < REPRODUCTION_COST:
                continue
            if chance(skip_chance, self.rng):
                continue
            min_j, max_j, min_i, max_i = organism.bounding_box()
            step_x = max_j - min_j + 1 + REPRODUCTION_GAP
            step_y = max_i - min_i + 1 + REPRODUCTION_GAP
            world = set(self.cells)
            for dx, dy in ((step_x, 0), (-step_x, 0), (0, step_y), (0, -step_y)):
                child_cells = [self._child_cell(c, dx, dy, mutate) for c in organism.cells]
                if any(cell in world for cell in child_cells):
                    continue
                if mutate:
                    self._grow_mutant(child_cells, world)
                organism.energy -= REPRODUCTION_COST
                self.cells.extend(child_cells)
                offspring.append(Organism.spawn(child_cells))
                break
        self.organisms.extend(offspring)

    def _child_cell(self, cell: Cell, dx: int, dy: int, mutate: bool) -> Cell:
        child = _shift(cell, dx, dy)
        if mutate and chance(MUTATION_RATE, self.rng):
            child = child.with_type(random_cell_type(self.rng))
        return child

    def _grow_mutant(self, child_cells: list[Cell], world: set[Cell]) -> None:
        if not chance(MUTATION_RATE, self.rng) or not child_cells:
            return
        base = child_cells[self.rng.randrange(len(child_cells))]
        mx, my = _MUTATION_OFFSETS[self.rng.randrange(len(_MUTATION_OFFSETS))]
        extra = Cell(base.i + my, base.j + mx, random_cell_type(self.rng))
        if extra not in world:
            child_cells.append(extra)