"""move-scaffold: create new Move packages wired to the Sui framework."""

__version__ = "0.1.0"
