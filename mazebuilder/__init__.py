"""Random perfect-maze generation with ASCII rendering."""

__version__ = "1.0.0"
