import random

import pytest

from nealife.cells import Cell, CellType, Organism
from nealife.life import (
    ENERGY_FROM_FOOD,
    REPRODUCTION_COST,
    Life,
    find_all_organisms,
    organism_from_clump,
)


class StubRandom:
    """A random source with fixed answers."""

    def __init__(self, value=0.99, index=0):
        self.value = value
        self.index = index

    def random(self):
        return self.value

    def randrange(self, n):
        return self.index % n

    def choice(self, seq):
        return seq[0]


ALIVE = CellType.ALIVE
FOOD = CellType.FOOD
GROWER = CellType.GROWER


def test_find_all_organisms_separates_clumps():
    cells = [Cell(0, 0), Cell(0, 1), Cell(5, 5), Cell(6, 5)]
    organisms = find_all_organisms(cells)
    assert len(organisms) == 2
    assert set(organisms[0].cells) == {Cell(0, 0), Cell(0, 1)}
    assert set(organisms[1].cells) == {Cell(5, 5), Cell(6, 5)}
    assert all(o.energy == 100 for o in organisms)


def test_find_all_organisms_ignores_diagonals_and_type_changes():
    cells = [Cell(0, 0), Cell(1, 1), Cell(0, 1, GROWER)]
    organisms = find_all_organisms(cells)
    assert len(organisms) == 3
    assert sorted(len(o) for o in organisms) == [1, 1, 1]


def test_find_all_organisms_covers_every_cell_once():
    cells = [Cell(i, j) for i, j in random.Random(3).sample(
        [(i, j) for i in range(6) for j in range(6)], 15)]
    organisms = find_all_organisms(cells)
    gathered = [c for o in organisms for c in o.cells]
    assert sorted(gathered, key=lambda c: c.position) == sorted(cells, key=lambda c: c.position)


def test_organism_from_clump_starts_with_start_cell():
    cells = [Cell(0, 0), Cell(1, 0), Cell(0, 1), Cell(9, 9)]
    organism = organism_from_clump(cells, Cell(0, 0))
    assert organism.cells[0] == Cell(0, 0)
    assert set(organism.cells) == {Cell(0, 0), Cell(1, 0), Cell(0, 1)}


def test_populate_unpopulate_and_container_protocol():
    life = Life()
    life.populate(Cell(1, 2))
    life.populate(Cell(1, 2))
    assert len(life) == 1
    assert life.contains(Cell(1, 2))
    assert list(life) == [Cell(1, 2)]
    life.unpopulate(Cell(1, 2))
    assert len(life) == 0
    assert not life.contains(Cell(1, 2))


def test_repr_reports_cell_count():
    life = Life(cells=[Cell(0, 0), Cell(0, 1)])
    assert repr(life) == "Life(cells=2)"


def test_copy_is_independent():
    organism = Organism.spawn([Cell(0, 0)])
    life = Life(cells=[Cell(0, 0)], organisms=[organism])
    clone = life.copy()
    assert clone == life
    clone.cells.append(Cell(3, 3))
    clone.organisms[0].cells.append(Cell(0, 1))
    assert life.cells == [Cell(0, 0)]
    assert life.organisms[0].cells == [Cell(0, 0)]


def test_grow_food_uses_first_free_side():
    life = Life(cells=[Cell(0, 0, GROWER)], rng=StubRandom(0.99))
    life.grow_food()
    assert life.cells == [Cell(0, 0, GROWER), Cell(1, 0, FOOD)]


def test_grow_food_skips_occupied_side():
    life = Life(cells=[Cell(0, 0, GROWER), Cell(1, 0)], rng=StubRandom(0.99))
    life.grow_food()
    assert Cell(-1, 0, FOOD) in life.cells
    assert len(life) == 3


def test_grow_food_lucky_roll_abandons_growth():
    life = Life(cells=[Cell(0, 0, GROWER)], rng=StubRandom(0.0))
    life.grow_food()
    assert life.cells == [Cell(0, 0, GROWER)]


def test_consume_food_eats_adjacent_food():
    organism = Organism.spawn([Cell(0, 0)])
    life = Life(cells=[Cell(0, 0), Cell(0, 1, FOOD)], organisms=[organism], rng=StubRandom(0.0))
    life.consume_food()
    assert life.cells == [Cell(0, 0)]
    assert life.organisms[0].energy == 100 + ENERGY_FROM_FOOD


def test_consume_food_failed_roll_leaves_food():
    organism = Organism.spawn([Cell(0, 0)])
    life = Life(cells=[Cell(0, 0), Cell(0, 1, FOOD)], organisms=[organism], rng=StubRandom(0.99))
    life.consume_food()
    assert Cell(0, 1, FOOD) in life.cells
    assert life.organisms[0].energy == 100


def test_move_organisms_steps_and_spends_energy():
    organism = Organism.spawn([Cell(0, 0), Cell(0, 1)])
    life = Life(cells=[Cell(0, 0), Cell(0, 1)], organisms=[organism], rng=StubRandom(index=0))
    life.move_organisms()
    assert sorted(c.position for c in life.cells) == [(0, 1), (0, 2)]
    assert life.organisms[0].cells == [Cell(0, 1), Cell(0, 2)]
    assert life.organisms[0].energy == 99


def test_move_organisms_blocked_by_other_cell():
    organism = Organism.spawn([Cell(0, 0)])
    life = Life(cells=[Cell(0, 0), Cell(0, 1)], organisms=[organism], rng=StubRandom(index=0))
    life.move_organisms()
    assert life.organisms[0].cells == [Cell(0, 0)]
    assert life.organisms[0].energy == 99
    assert sorted(c.position for c in life.cells) == [(0, 0), (0, 1)]


def test_move_organisms_not_blocked_by_food():
    organism = Organism.spawn([Cell(0, 0)])
    life = Life(cells=[Cell(0, 0), Cell(0, 1, FOOD)], organisms=[organism], rng=StubRandom(index=0))
    life.move_organisms()
    assert life.organisms[0].cells == [Cell(0, 1)]
    assert Cell(0, 0) not in life.cells


def test_move_organisms_energy_never_negative():
    organism = Organism(cells=[Cell(0, 0)], energy=0)
    life = Life(cells=[Cell(0, 0)], organisms=[organism], rng=StubRandom(index=2))
    life.move_organisms()
    assert life.organisms[0].energy == 0
    assert life.organisms[0].cells == [Cell(1, 0)]


def test_cull_dead_organisms_turns_cells_into_food():
    dead = Organism(cells=[Cell(0, 0), Cell(0, 1)], energy=0)
    alive = Organism(cells=[Cell(5, 5)], energy=10)
    life = Life(cells=[Cell(0, 0), Cell(0, 1), Cell(5, 5)], organisms=[dead, alive])
    life.cull_dead_organisms()
    assert life.organisms == [alive]
    assert sorted(life.cells, key=lambda c: c.position) == [
        Cell(0, 0, FOOD), Cell(0, 1, FOOD), Cell(5, 5)]


def test_reproduce_organisms_places_copy_to_the_right():
    parent = Organism(cells=[Cell(0, 0)], energy=REPRODUCTION_COST + 50)
    life = Life(cells=[Cell(0, 0)], organisms=[parent], rng=StubRandom(0.99))
    life.reproduce_organisms()
    assert len(life.organisms) == 2
    assert life.organisms[0].energy == 50
    assert life.organisms[1].cells == [Cell(0, 2)]
    assert Cell(0, 2) in life.cells


def test_reproduce_organisms_falls_back_to_next_direction():
    parent = Organism(cells=[Cell(0, 0)], energy=REPRODUCTION_COST)
    life = Life(cells=[Cell(0, 0), Cell(0, 2)], organisms=[parent], rng=StubRandom(0.99))
    life.reproduce_organisms()
    assert life.organisms[1].cells == [Cell(0, -2)]
    assert life.organisms[0].energy == 0


def test_reproduce_organisms_needs_energy():
    parent = Organism(cells=[Cell(0, 0)], energy=REPRODUCTION_COST - 1)
    life = Life(cells=[Cell(0, 0)], organisms=[parent], rng=StubRandom(0.99))
    life.reproduce_organisms()
    assert len(life.organisms) == 1
    assert life.cells == [Cell(0, 0)]


def test_reproduce_with_mutation_without_mutations_copies_shape():
    parent = Organism(cells=[Cell(0, 0), Cell(0, 1, GROWER)], energy=REPRODUCTION_COST)
    life = Life(cells=list(parent.cells), organisms=[parent], rng=StubRandom(0.99))
    life.reproduce_with_mutation()
    child = life.organisms[1]
    assert [(c.i, c.j - 3, c.cell_type) for c in child.cells] == [
        (c.i, c.j, c.cell_type) for c in parent.cells]
    assert child.energy == 100


def test_reproduce_with_mutation_can_be_skipped():
    parent = Organism(cells=[Cell(0, 0)], energy=REPRODUCTION_COST)
    life = Life(cells=[Cell(0, 0)], organisms=[parent], rng=StubRandom(0.0))
    life.reproduce_with_mutation()
    assert len(life.organisms) == 1
    assert life.organisms[0].energy == REPRODUCTION_COST


def test_tick_spends_energy_until_organism_becomes_food():
    organism = Organism.spawn([Cell(0, 0)])
    life = Life(cells=[Cell(0, 0)], organisms=[organism], rng=random.Random(1))
    for _ in range(3):
        life.tick()
        assert all(c in life.cells for o in life.organisms for c in o.cells)
    assert life.organisms[0].energy == 97
    for _ in range(97):
        life.tick()
    assert life.organisms == []
    assert len(life.cells) == 1
    assert life.cells[0].is_food()


@pytest.mark.parametrize("seed", [0, 7, 42])
def test_tick_on_empty_world_stays_empty(seed):
    life = Life(rng=random.Random(seed))
    life.tick()
    assert life.cells == []
    assert life.organisms == []