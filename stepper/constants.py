"""Named constants shared across the simulator."""

from __future__ import annotations

LANGUAGE_JAVASCRIPT = "javascript"
LANGUAGE_PYTHON = "python"

SUPPORTED_LANGUAGE = LANGUAGE_JAVASCRIPT

# Grammar used to parse evaluator expressions.
EXPRESSION_GRAMMAR = LANGUAGE_JAVASCRIPT

MAX_EXPRESSION_DEPTH = 64
MAX_EXPONENT = 1024
MAX_SHIFT = 1024
MAX_INTEGER_BITS = 4096

DEFAULT_SIMULATED_LATENCY = 0.5
DEFAULT_PLAYBACK_SPEED = 2.0

ARRAY_NAME_PLACEHOLDER = "{array}"
LENGTH_VAR = "n"
OUTER_INDEX_VAR = "i"
INNER_INDEX_VAR = "j"
RESULT_VAR = "sortedArray"

SHAPE_TOKENS: tuple[str, ...] = ("bubbleSort", "arr.length")

UNSUPPORTED_LANGUAGE_MESSAGE = (
    "This non-AI demonstrator currently only supports the JavaScript bubble "
    "sort example. Please switch languages."
)
UNSUPPORTED_SHAPE_MESSAGE = (
    "The current non-AI simulator is a demonstration and only understands "
    "the default bubble sort code."
)
NO_ARRAY_INIT_MESSAGE = (
    "Could not find an array initialization like 'let myArray = [...]'. "
    "The simulator is not generic enough for this code."
)
SIMULATION_FAILED_PREFIX = "Simulation Failed: "
