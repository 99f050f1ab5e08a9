"""Run configuration and statistics types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class Language(str, Enum):
    """Language variants a caller may request a trace for."""

    JAVASCRIPT = constants.LANGUAGE_JAVASCRIPT
    PYTHON = constants.LANGUAGE_PYTHON


@dataclass(frozen=True)
class TraceConfig:
    """Groups trace generation configuration."""

    language: str = constants.SUPPORTED_LANGUAGE
    simulated_latency: float = constants.DEFAULT_SIMULATED_LATENCY


@dataclass
class TraceStats:
    """Counters collected while replaying the sort."""

    array_length: int = 0
    outer_iterations: int = 0
    inner_iterations: int = 0
    comparisons: int = 0
    swaps: int = 0

    def report(self) -> str:
        return (
            f"n={self.array_length}, outer={self.outer_iterations}, "
            f"inner={self.inner_iterations}, comparisons={self.comparisons}, "
            f"swaps={self.swaps}"
        )
