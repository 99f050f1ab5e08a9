"""Headless playback cursor over an execution trace.

Mirrors what a visualiser does with a trace: step back and forth, jump
anywhere, play until a breakpoint line is reached, and pull the
array-shaped variables out of a step for charting.
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Optional

from . import constants
from .trace_types import ExecutionStep, ExecutionTrace

logger = logging.getLogger(__name__)


def array_variables(step: ExecutionStep) -> dict[str, list]:
    """Variables of *step* whose values are lists made only of numbers."""
    return {
        name: value
        for name, value in step.variables.items()
        if isinstance(value, list)
        and all(isinstance(v, Real) and not isinstance(v, bool) for v in value)
    }


class TracePlayer:
    def __init__(self, trace: ExecutionTrace, speed: float = constants.DEFAULT_PLAYBACK_SPEED):
        if speed <= 0:
            raise ValueError(f"Playback speed must be positive, got {speed}")
        self._trace = trace
        self._speed = speed
        self._position = 0
        self._breakpoints: set[int] = set()

    @property
    def position(self) -> int:
        return self._position

    @property
    def current(self) -> Optional[ExecutionStep]:
        if not self._trace.steps:
            return None
        return self._trace[self._position]

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._trace) - 1

    @property
    def interval(self) -> float:
        """Seconds between steps while playing."""
        return 1.0 / self._speed

    @property
    def breakpoints(self) -> frozenset[int]:
        return frozenset(self._breakpoints)

    def toggle_breakpoint(self, line_number: int) -> bool:
        """Flip the breakpoint on *line_number*; return whether it is now set."""
        if line_number in self._breakpoints:
            self._breakpoints.discard(line_number)
            return False
        self._breakpoints.add(line_number)
        return True

    def seek(self, index: int) -> Optional[ExecutionStep]:
        last = max(len(self._trace) - 1, 0)
        self._position = min(max(index, 0), last)
        return self.current

    def step_forward(self) -> Optional[ExecutionStep]:
        return self.seek(self._position + 1)

    def step_backward(self) -> Optional[ExecutionStep]:
        return self.seek(self._position - 1)

    def reset(self) -> None:
        self._position = 0

    def play(self) -> list[ExecutionStep]:
        """Advance until the end, or until a step on a breakpoint line is reached.

        Returns the steps passed through, the stopping step included.
        """
        visited: list[ExecutionStep] = []
        while not self.at_end:
            step = self.step_forward()
            visited.append(step)
            if step.line_number in self._breakpoints:
                logger.info("Paused at breakpoint line %d (step %d)", step.line_number, self._position)
                break
        return visited

    def array_variables(self, step: Optional[ExecutionStep] = None) -> dict[str, Any]:
        target = step if step is not None else self.current
        return array_variables(target) if target is not None else {}
