"""Public entry points for trace generation.

``generate_trace`` is the synchronous core; ``generate_trace_async`` wraps
it for hosts that want a small, simulated latency before the trace shows
up (the computation itself has no suspension points).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from . import constants
from .errors import SimulationError, UnsupportedLanguageError, UnsupportedShapeError
from .patterns import has_supported_shape
from .run_types import Language, TraceConfig
from .simulator import BubbleSortSimulator
from .trace_types import ExecutionTrace

logger = logging.getLogger(__name__)


def _language_name(language: Language | str) -> str:
    return language.value if isinstance(language, Language) else str(language)


def check_supported_shape(source: str, language: Language | str = Language.JAVASCRIPT) -> None:
    """Validate the language selector and the coarse source shape.

    Raises:
        UnsupportedLanguageError: For any language other than JavaScript.
        UnsupportedShapeError: If *source* is not the bubble sort program.
    """
    if _language_name(language) != constants.SUPPORTED_LANGUAGE:
        raise UnsupportedLanguageError(constants.UNSUPPORTED_LANGUAGE_MESSAGE)
    if not has_supported_shape(source):
        raise UnsupportedShapeError(constants.UNSUPPORTED_SHAPE_MESSAGE)


def generate_trace(
    source: str,
    language: Language | str | None = None,
    config: Optional[TraceConfig] = None,
) -> ExecutionTrace:
    """Generate the full execution trace for *source*.

    Args:
        source: The program text.
        language: Requested language variant. Only JavaScript is simulated.
            Defaults to the configured language.
        config: Optional configuration.

    Returns:
        An ExecutionTrace holding every recorded step.

    Raises:
        SimulationError: On any unsupported input or failed simulation. No
            partial trace is ever returned.
    """
    config = config or TraceConfig()
    language = language if language is not None else config.language
    logger.info("generate_trace: language=%s, %d chars", _language_name(language), len(source))
    check_supported_shape(source, language)

    try:
        return BubbleSortSimulator(source).run()
    except SimulationError as exc:
        raise SimulationError(f"{constants.SIMULATION_FAILED_PREFIX}{exc}") from exc


async def generate_trace_async(
    source: str,
    language: Language | str | None = None,
    config: Optional[TraceConfig] = None,
) -> ExecutionTrace:
    """Generate a trace, then wait ``config.simulated_latency`` seconds."""
    config = config or TraceConfig()
    trace = generate_trace(source, language, config)
    if config.simulated_latency > 0:
        await asyncio.sleep(config.simulated_latency)
    return trace
