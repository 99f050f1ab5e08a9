"""Tests for the public trace generation entry points."""

import asyncio

import pytest

from stepper import api
from stepper.api import check_supported_shape, generate_trace, generate_trace_async
from stepper.errors import (
    SimulationError,
    UnsupportedLanguageError,
    UnsupportedShapeError,
)
from stepper.run_types import Language, TraceConfig
from stepper.trace_types import ExecutionTrace

from tests.unit.conftest import DEFAULT_JS, make_source


class TestGenerateTrace:
    def test_default_program(self):
        trace = generate_trace(DEFAULT_JS)
        assert isinstance(trace, ExecutionTrace)
        assert trace[-1].output == ("[11, 12, 22, 25, 34, 64, 90]",)

    def test_accepts_enum_and_string_selectors(self):
        assert generate_trace(DEFAULT_JS, Language.JAVASCRIPT) == generate_trace(DEFAULT_JS, "javascript")

    def test_language_taken_from_config(self):
        with pytest.raises(UnsupportedLanguageError):
            generate_trace(DEFAULT_JS, config=TraceConfig(language="python"))

    def test_explicit_language_overrides_config(self):
        trace = generate_trace(DEFAULT_JS, "javascript", TraceConfig(language="python"))
        assert len(trace) > 0


class TestUnsupportedInput:
    @pytest.mark.parametrize("language", [Language.PYTHON, "python", "cobol", ""])
    def test_unsupported_language_fails_immediately(self, language):
        with pytest.raises(UnsupportedLanguageError) as excinfo:
            generate_trace(DEFAULT_JS, language)
        assert "Please switch languages" in str(excinfo.value)
        assert not str(excinfo.value).startswith("Simulation Failed")

    def test_language_checked_before_shape(self):
        with pytest.raises(UnsupportedLanguageError):
            generate_trace("print('hi')", "python")

    def test_shape_check(self):
        with pytest.raises(UnsupportedShapeError, match="only understands the default bubble sort"):
            generate_trace("let xs = [3, 1, 2];\nxs.sort();")

    def test_check_supported_shape_passes_default(self):
        check_supported_shape(DEFAULT_JS)


class TestSimulationFailures:
    def test_failures_are_prefixed(self):
        with pytest.raises(SimulationError) as excinfo:
            generate_trace(make_source("[1, missing]"))
        assert str(excinfo.value).startswith("Simulation Failed: ")

    def test_cause_is_chained(self):
        with pytest.raises(SimulationError) as excinfo:
            generate_trace(DEFAULT_JS.replace("let myArray = [", "let myArray = load(["))
        assert isinstance(excinfo.value.__cause__, SimulationError)

    def test_arithmetic_error_in_literal_is_simulation_error(self):
        with pytest.raises(SimulationError, match="Could not evaluate the initial value"):
            generate_trace(make_source("[0 ** -1, 2]"))

    def test_oversized_literal_fails_promptly(self):
        with pytest.raises(SimulationError):
            generate_trace(make_source("[9 ** 9 ** 9, 1]"))

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            generate_trace(DEFAULT_JS, "python")


class TestGenerateTraceAsync:
    def test_returns_same_trace(self):
        config = TraceConfig(simulated_latency=0)
        trace = asyncio.run(generate_trace_async(DEFAULT_JS, config=config))
        assert trace == generate_trace(DEFAULT_JS)

    def test_waits_configured_latency(self, monkeypatch):
        delays = []

        async def _fake_sleep(seconds):
            delays.append(seconds)

        monkeypatch.setattr(api.asyncio, "sleep", _fake_sleep)
        asyncio.run(generate_trace_async(DEFAULT_JS, config=TraceConfig(simulated_latency=0.25)))
        assert delays == [0.25]

    def test_failure_raised_without_waiting(self, monkeypatch):
        delays = []

        async def _fake_sleep(seconds):
            delays.append(seconds)

        monkeypatch.setattr(api.asyncio, "sleep", _fake_sleep)
        with pytest.raises(UnsupportedLanguageError):
            asyncio.run(generate_trace_async(DEFAULT_JS, "python"))
        assert delays == []
