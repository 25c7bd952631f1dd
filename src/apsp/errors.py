from __future__ import annotations


class InvalidInputError(ValueError):
    """Malformed vertex count, edge, or policy value."""


class NegativeCycleError(RuntimeError):
    """A successor chain loops because of a negative cycle."""
