"""Bubble sort trace generator.

Locates the array initialisation in the source, then replays the bubble
sort over that array, recording one ``ExecutionStep`` per notable event.
Line numbers come from the pattern rules and fall back gracefully when a
construct is formatted differently.
"""

from __future__ import annotations

import copy
import logging
from numbers import Real
from typing import Any

from . import constants
from .errors import EvaluationError, StructuralMismatchError
from .evaluator import NO_VALUE, ExpressionEvaluator
from .locator import find_line
from .patterns import (
    COMPARISON,
    FINAL_ASSIGN,
    INNER_LOOP,
    LENGTH_INIT,
    OUTER_LOOP,
    PRINT,
    SWAP,
    match_array_init,
)
from .run_types import TraceStats
from .trace_types import ExecutionStep, ExecutionTrace

logger = logging.getLogger(__name__)


def format_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_array(values: list) -> str:
    return "[" + ", ".join(format_number(v) for v in values) + "]"


def _is_number_list(value: Any) -> bool:
    return isinstance(value, list) and all(
        isinstance(v, Real) and not isinstance(v, bool) for v in value
    )


class BubbleSortSimulator:
    """Replays bubble sort over the array found in one source text.

    Each instance owns its scope and output buffer; build a new one per run.
    """

    def __init__(self, source: str, evaluator: ExpressionEvaluator | None = None):
        self._lines = source.split("\n")
        self._source = source
        self._evaluator = evaluator or ExpressionEvaluator()
        self._steps: list[ExecutionStep] = []
        self._scope: dict[str, Any] = {}
        self._output: list[str] = []
        self._current_line = 1
        self._stats = TraceStats()

    def _emit(self, description: str, line_number: int | None = None) -> None:
        if line_number:
            self._current_line = line_number
        step = ExecutionStep(
            line_number=self._current_line,
            variables=copy.deepcopy(self._scope),
            description=description,
            output=tuple(self._output) if self._output else None,
        )
        logger.debug("step %d @ line %d: %s", len(self._steps), step.line_number, description)
        self._steps.append(step)
        self._output = []

    def _load_array(self) -> tuple[str, list, int]:
        init = match_array_init(self._source)
        if init is None:
            raise StructuralMismatchError(constants.NO_ARRAY_INIT_MESSAGE)

        value = self._evaluator.evaluate(init.literal, self._scope)
        if value is NO_VALUE:
            raise EvaluationError(
                f"Could not evaluate the initial value of '{init.name}': {init.literal}"
            )
        if not _is_number_list(value):
            raise EvaluationError(f"Array '{init.name}' must contain only numbers.")
        return init.name, value, find_line(self._lines, init.statement)

    def run(self) -> ExecutionTrace:
        name, values, init_line = self._load_array()
        n = len(values)
        self._stats.array_length = n

        self._scope[name] = values
        self._emit(f"Initialize array '{name}' with {n} elements.", init_line)

        self._scope[constants.LENGTH_VAR] = n
        self._emit(
            f"Initialize 'n' with the length of the array, which is {n}.",
            LENGTH_INIT.locate(self._lines, name),
        )

        arr = list(values)
        outer_line = OUTER_LOOP.locate(self._lines, name)
        inner_line = INNER_LOOP.locate(self._lines, name)
        compare_line = COMPARISON.locate(self._lines, name)
        swap_line = SWAP.locate(self._lines, name)

        # A single element is already sorted; neither loop is entered.
        outer_count = n if n > 1 else 0
        for i in range(outer_count):
            self._scope[constants.OUTER_INDEX_VAR] = i
            self._stats.outer_iterations += 1
            self._emit(f"Outer loop starts iteration. 'i' is now {i}.", outer_line)

            for j in range(n - i - 1):
                self._scope[constants.INNER_INDEX_VAR] = j
                self._stats.inner_iterations += 1
                self._emit(f"Inner loop starts iteration. 'j' is now {j}.", inner_line)

                left, right = arr[j], arr[j + 1]
                self._stats.comparisons += 1
                self._emit(
                    f"Comparing {name}[{j}] ({format_number(left)}) with "
                    f"{name}[{j + 1}] ({format_number(right)}).",
                    compare_line,
                )

                if left > right:
                    self._emit(
                        f"Condition true ({format_number(left)} > {format_number(right)}). "
                        "Swapping elements.",
                        swap_line,
                    )
                    arr[j], arr[j + 1] = arr[j + 1], arr[j]
                    self._stats.swaps += 1
                    self._scope[name] = list(arr)
                    self._emit(f"Array is now {format_array(arr)}.", swap_line)

        self._scope[constants.RESULT_VAR] = list(arr)
        self._emit(
            f"Sorting complete. Final array assigned to '{constants.RESULT_VAR}'.",
            FINAL_ASSIGN.locate(self._lines, name),
        )

        self._output = [format_array(arr)]
        self._emit(
            "Printing the final sorted array to the console.",
            PRINT.locate(self._lines, name),
        )

        logger.info("Generated %d steps (%s)", len(self._steps), self._stats.report())
        return ExecutionTrace(
            steps=tuple(self._steps),
            stats=self._stats,
            source_lines=len(self._lines),
        )
