"""Starting patterns that a world can be seeded with."""

from __future__ import annotations

from enum import Enum


class Preset(Enum):
    """A named starting pattern; the value is its display label."""

    CUSTOM = "Custom"
    XKCD = "xkcd #2293"
    GLIDER = "Glider"
    SMALL_EXPLODER = "Small Exploder"
    EXPLODER = "Exploder"
    TEN_CELL_ROW = "10 Cell Row"
    LIGHTWEIGHT_SPACESHIP = "Lightweight spaceship"
    TUMBLER = "Tumbler"
    GLIDER_GUN = "Gosper Glider Gun"
    ACORN = "Acorn"

    def life(self) -> list[tuple[int, int]]:
        """Return the pattern's live positions as (row, column) pairs, centred on the origin."""
        rows = _PATTERNS[self]
        start_row = -(len(rows) // 2)
        positions: list[tuple[int, int]] = []
        for row_offset, line in enumerate(rows):
            start_column = -(len(line) // 2)
            positions.extend(
                (start_row + row_offset, start_column + column_offset)
                for column_offset, char in enumerate(line)
                if not char.isspace()
            )
        return positions

    def __str__(self) -> str:
        return self.value


DEFAULT_PRESET = Preset.XKCD


def all_presets() -> tuple[Preset, ...]:
    """Return every preset in menu order."""
    return tuple(Preset)


_PATTERNS: dict[Preset, tuple[str, ...]] = {
    Preset.CUSTOM: (),
    Preset.XKCD: (
        "  xxx  ",
        "  x x  ",
        "  x x  ",
        "   x   ",
        "x xxx  ",
        " x x x ",
        "   x  x",
        "  x x  ",
        "  x x  ",
    ),
    Preset.GLIDER: (
        " x ",
        "  x",
        "xxx",
    ),
    Preset.SMALL_EXPLODER: (
        " x ",
        "xxx",
        "x x",
        " x ",
    ),
    Preset.EXPLODER: (
        "x x x",
        "x   x",
        "x   x",
        "x   x",
        "x x x",
    ),
    Preset.TEN_CELL_ROW: ("xxxxxxxxxx",),
    Preset.LIGHTWEIGHT_SPACESHIP: (
        " xxxxx",
        "x    x",
        "     x",
        "x   x ",
    ),
    Preset.TUMBLER: (
        " xx xx ",
        " xx xx ",
        "  x x  ",
        "x x x x",
        "x x x x",
        "xx   xx",
    ),
    Preset.GLIDER_GUN: (
        "                        x           ",
        "                      x x           ",
        "            xx      xx            xx",
        "           x   x    xx            xx",
        "xx        x     x   xx              ",
        "xx        x   x xx    x x           ",
        "          x     x       x           ",
        "           x   x                    ",
        "            xx                      ",
    ),
    Preset.ACORN: (
        " x     ",
        "   x   ",
        "xx  xxx",
    ),
}