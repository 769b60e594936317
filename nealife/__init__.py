"""Grid-based artificial life: organisms that move, eat, reproduce and mutate, saved to SQLite."""

__version__ = "0.1.0"