"""Bubble sort step-by-step trace simulator."""

from .api import generate_trace, generate_trace_async, check_supported_shape  # noqa: F401
from .errors import SimulationError  # noqa: F401
from .evaluator import ExpressionEvaluator, NO_VALUE, evaluate  # noqa: F401
from .locator import find_line  # noqa: F401
from .playback import TracePlayer  # noqa: F401
from .run_types import Language, TraceConfig  # noqa: F401
from .trace_types import ExecutionStep, ExecutionTrace  # noqa: F401
