"""Trace data types for step-by-step execution replay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from .run_types import TraceStats


@dataclass(frozen=True)
class ExecutionStep:
    """A single recorded event of the simulated run.

    ``variables`` is a deep copy of the scope at the moment the step was
    emitted and shares no structure with any other step. ``output`` is
    ``None`` when nothing was printed at this step, never an empty tuple.
    """

    line_number: int
    variables: dict[str, Any]
    description: str
    output: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ExecutionTrace:
    """Complete, ordered trace of one run.

    Supports ``len()``, indexing and iteration so a caller can scrub
    through the steps in any order.
    """

    steps: tuple[ExecutionStep, ...] = ()
    stats: TraceStats = field(default_factory=TraceStats)
    source_lines: int = 0

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> ExecutionStep:
        return self.steps[index]

    def __iter__(self) -> Iterator[ExecutionStep]:
        return iter(self.steps)

    @property
    def final_output(self) -> tuple[str, ...] | None:
        """Output of the last step that printed anything."""
        return next(
            (step.output for step in reversed(self.steps) if step.output),
            None,
        )
