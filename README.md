# nealife

nealife simulates organisms on an unbounded square grid. An organism is a
clump of same-typed cells that touch orthogonally. It starts with 100 energy.
Each generation runs these steps in order:

1. **Grow food.** Every grower cell sprouts one food cell on its first free
   orthogonal side. A rare failed roll (1%) cancels the whole growth step.
2. **Move.** Every organism tries to step one cell in a random direction. The
   step is blocked if a non-food cell that belongs to something else is in the
   way. The organism loses one energy whether or not it moves.
3. **Eat.** Organisms eat orthogonally adjacent food cells. Each one succeeds
   with an 80% chance and gains 5 energy.
4. **Cull.** Organisms with no energy die, and their cells turn into food.
5. **Reproduce.** An organism with at least 200 energy may place a copy of
   itself beside its bounding box, one gap away, if that space is free. This
   costs it 200 energy. The copy's cells may mutate into alive or grower
   cells, and one extra cell may be added.

The package depends on nothing outside the standard library.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## The `nealife` command

```
nealife [--db FILE] [--preset NAME] [--ticks N] [--seed N] [--load] [--save]
```

The command runs the world without a display and prints a status line such as
`3 organisms, 42 cells @ 1.2ms (1)`.

- `--db FILE`: the SQLite world file. The default is `life_simulation.db`.
- `--preset NAME`: the starting pattern. It is one of `acorn`, `custom`,
  `exploder`, `glider`, `glider_gun`, `lightweight_spaceship`,
  `small_exploder`, `ten_cell_row`, `tumbler` or `xkcd`. The default is
  `xkcd`.
- `--ticks N`: the number of ticks to run. The default is 10. Negative values
  are rejected.
- `--seed N`: a seed for the random source, so that runs are reproducible.
- `--load`: start from the world saved in the database.
- `--save`: save the world to the database when the run is done.

The command exits with status 1 if the saved world cannot be loaded or the
world cannot be saved.

## Using the library

```python
import random

from nealife.app import LifeSim
from nealife.grid import Grid
from nealife.preset import Preset

grid = Grid.from_preset(Preset.GLIDER, random.Random(1))
job = grid.tick(3)        # None while a tick is still outstanding
if job is not None:
    job()                 # advances three generations and installs the result
print(grid.status_text())

sim = LifeSim("life_simulation.db", random.Random(1))
sim.pick_preset(Preset.ACORN)
sim.tick()
sim.save_state()          # False if the database refused it
sim.load_state()          # False if the stored world could not be read
```

The modules are:

- `nealife.preset` holds `Preset`, the starting patterns, and `all_presets()`.
  `Preset.life()` gives a pattern's (row, column) positions centred on the
  origin. `str(preset)` gives its display label.
- `nealife.cells` holds `CellType`, `Cell` (an immutable typed position) and
  `Organism`, along with the helpers `chance()` and `random_cell_type()`.
- `nealife.life` holds `Life`, which is the world's cells and organisms and
  the generation rules above: `grow_food`, `move_organisms`, `consume_food`,
  `cull_dead_organisms`, `reproduce_organisms`, `reproduce_with_mutation` and
  `tick`. It also has `find_all_organisms()` and `organism_from_clump()`.
- `nealife.state` holds `State`, which keeps cells drawn during a tick and
  folds them in afterwards. It also holds `Region`, a visible rectangle of the
  grid.
- `nealife.grid` holds `Grid`. It seeds a world from a preset, where 90% of
  cells start alive and the rest as growers. It tracks pan and zoom and maps
  view positions to cells. It handles pointer presses, moves, releases and
  scrolls through `press`, `move_cursor`, `release` and `scroll`, with an
  `Interaction` record. It also builds the status line.
- `nealife.database` holds `WorldState` and `WorldDatabase`.
  `WorldDatabase.save_state()` replaces the stored world in one transaction.
  `load_latest_state()` reads it back. `WorldState.validate()` raises
  `WorldStateError` if a state is inconsistent. `WorldDatabase` can be used as
  a context manager.
- `nealife.app` holds `LifeSim`, the controller for playback, speed (1 to
  1000), presets, save and load. It also holds `main`, the command's entry
  point.

## What it does not do

The package has no graphical window. `Grid` provides the view and pointer
handling that a display would call, but nothing here draws the grid on
screen. Ticks run in the calling thread. The database keeps only the most
recently saved world, not a history.