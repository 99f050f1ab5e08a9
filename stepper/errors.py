"""Exception hierarchy for trace generation failures."""

from __future__ import annotations


class SimulationError(ValueError):
    """Base class for every hard failure surfaced by trace generation."""


class UnsupportedLanguageError(SimulationError):
    """The requested language variant has no simulator."""


class UnsupportedShapeError(SimulationError):
    """The source text does not look like the supported bubble sort program."""


class StructuralMismatchError(SimulationError):
    """A construct the simulator depends on could not be located."""


class EvaluationError(SimulationError):
    """A load-bearing expression produced no usable value."""
