"""Saving and loading whole worlds to an SQLite file."""

from __future__ import annotations

import json
import os
import sqlite3
from dataclasses import dataclass, field
from typing import Optional, Union

from nealife.cells import Cell, CellType, Organism

_SCHEMA = """
PRAGMA foreign_keys = ON;
BEGIN;
CREATE TABLE IF NOT EXISTS organisms (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    energy INTEGER NOT NULL,
    able_to_move BOOLEAN NOT NULL
);
CREATE TABLE IF NOT EXISTS cells (
    i INTEGER NOT NULL,
    j INTEGER NOT NULL,
    cell_type TEXT NOT NULL,
    organism_id INTEGER,
    PRIMARY KEY (i, j),
    FOREIGN KEY (organism_id) REFERENCES organisms(id) ON DELETE CASCADE
);
CREATE TABLE IF NOT EXISTS world_states (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    version INTEGER NOT NULL,
    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
);
COMMIT;
"""


class WorldStateError(ValueError):
    """Raised when a world state is inconsistent or cannot be decoded."""


@dataclass
class WorldState:
    """A snapshot of the world: organisms, cells owned by none, and a version."""

    organisms: list[Organism] = field(default_factory=list)
    free_cells: list[Cell] = field(default_factory=list)
    version: int = 0

    def validate(self) -> None:
        """Raise WorldStateError on invalid organisms, repeated ids or overlapping cells."""
        ids: set[int] = set()
        for organism in self.organisms:
            if not organism.is_valid():
                raise WorldStateError(f"Invalid organism: {organism!r}")
            if organism.id in ids:
                raise WorldStateError(f"Duplicate organism ID: {organism.id}")
            ids.add(organism.id)

        positions: set[tuple[int, int]] = set()
        for organism in self.organisms:
            for cell in organism.cells:
                if cell.position in positions:
                    raise WorldStateError(
                        f"Duplicate cell position: ({cell.i}, {cell.j})"
                    )
                positions.add(cell.position)

        for cell in self.free_cells:
            if cell.position in positions:
                raise WorldStateError(f"Cell conflict at: ({cell.i}, {cell.j})")
            positions.add(cell.position)


def _encode_type(cell_type: CellType) -> str:
    return json.dumps(cell_type.value)


def _decode_type(raw: object) -> CellType:
    try:
        return CellType(json.loads(raw))  # type: ignore[arg-type]
    except (ValueError, TypeError) as error:
        raise WorldStateError(f"Unreadable cell type: {raw!r}") from error


class WorldDatabase:
    """An SQLite store holding the most recently saved world."""

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        self._conn = sqlite3.connect(path)
        self._conn.executescript(_SCHEMA)

    def save_state(self, state: WorldState) -> None:
        """Replace the stored world with ``state`` in one transaction.

        Where several cells share a position, a free cell wins over organism
        cells, and a later organism wins over an earlier one.
        """
        with self._conn as conn:
            conn.execute("DELETE FROM cells")
            conn.execute("DELETE FROM organisms")
            conn.execute("DELETE FROM world_states")
            conn.execute(
                "INSERT INTO world_states (version) VALUES (?)", (state.version,)
            )

            placed: dict[tuple[int, int], tuple[Cell, Optional[int]]] = {}
            for organism in state.organisms:
                cursor = conn.execute(
                    "INSERT INTO organisms (energy, able_to_move) VALUES (?, ?)",
                    (organism.energy, organism.able_to_move),
                )
                organism_id = cursor.lastrowid
                for cell in organism.cells:
                    placed[cell.position] = (cell, organism_id)
            for cell in state.free_cells:
                placed[cell.position] = (cell, None)

            conn.executemany(
                "INSERT INTO cells (i, j, cell_type, organism_id) VALUES (?, ?, ?, ?)",
                [
                    (i, j, _encode_type(cell.cell_type), organism_id)
                    for (i, j), (cell, organism_id) in placed.items()
                ],
            )

    def load_latest_state(self) -> WorldState:
        """Read back the stored world; an empty store yields version 0 and no cells."""
        try:
            row = self._conn.execute(
                "SELECT version FROM world_states ORDER BY timestamp DESC LIMIT 1"
            ).fetchone()
        except sqlite3.Error:
            row = None
        version = row[0] if row else 0

        owned: dict[int, list[Cell]] = {}
        free_cells: list[Cell] = []
        for i, j, raw_type, organism_id in self._conn.execute(
            "SELECT i, j, cell_type, organism_id FROM cells"
        ):
            cell = Cell(i, j, _decode_type(raw_type))
            if organism_id is None:
                free_cells.append(cell)
            else:
                owned.setdefault(organism_id, []).append(cell)

        organisms = [
            Organism(
                cells=owned.pop(organism_id, []),
                energy=energy,
                able_to_move=bool(able_to_move),
                id=organism_id,
            )
            for organism_id, energy, able_to_move in self._conn.execute(
                "SELECT id, energy, able_to_move FROM organisms ORDER BY id"
            )
        ]

        return WorldState(organisms=organisms, free_cells=free_cells, version=version)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> WorldDatabase:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()