"""Shared helpers for the trace simulator test suite."""

import logging

from stepper.samples import DEFAULT_SOURCES

logger = logging.getLogger(__name__)

DEFAULT_JS = DEFAULT_SOURCES["javascript"]
DEFAULT_ARRAY = [64, 34, 25, 12, 22, 11, 90]
DEFAULT_LITERAL = "[64, 34, 25, 12, 22, 11, 90]"

# 1-based lines of the default JavaScript program.
LINE_LENGTH_INIT = 2
LINE_OUTER_LOOP = 3
LINE_INNER_LOOP = 4
LINE_COMPARISON = 5
LINE_SWAP = 6
LINE_ARRAY_INIT = 13
LINE_FINAL_ASSIGN = 14
LINE_PRINT = 15


def make_source(literal: str) -> str:
    """The default program with its array literal replaced by *literal*."""
    return DEFAULT_JS.replace(DEFAULT_LITERAL, literal)


def count_swaps(values: list) -> int:
    """Number of swaps bubble sort performs on *values*."""
    arr = list(values)
    swaps = 0
    for i in range(len(arr)):
        for j in range(len(arr) - i - 1):
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swaps += 1
    return swaps


def expected_step_count(values: list) -> int:
    n = len(values)
    outer = n if n > 1 else 0
    inner = sum(n - i - 1 for i in range(outer))
    return 2 + outer + inner + inner + 2 * count_swaps(values) + 2
