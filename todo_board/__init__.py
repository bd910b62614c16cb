"""A keyboard-driven terminal todo board with backlog, ready and completed lists stored as JSON lines."""

__version__ = "0.1.0"