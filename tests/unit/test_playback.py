"""Tests for the headless TracePlayer."""

import pytest

from stepper.api import generate_trace
from stepper.playback import TracePlayer, array_variables
from stepper.trace_types import ExecutionTrace

from tests.unit.conftest import DEFAULT_ARRAY, DEFAULT_JS, LINE_SWAP


@pytest.fixture
def trace() -> ExecutionTrace:
    return generate_trace(DEFAULT_JS)


class TestCursor:
    def test_starts_at_first_step(self, trace):
        player = TracePlayer(trace)
        assert player.position == 0
        assert player.current == trace[0]

    def test_step_forward_and_backward(self, trace):
        player = TracePlayer(trace)
        player.step_forward()
        player.step_forward()
        assert player.position == 2
        player.step_backward()
        assert player.position == 1

    def test_backward_is_clamped_at_start(self, trace):
        player = TracePlayer(trace)
        player.step_backward()
        assert player.position == 0

    def test_seek_is_clamped(self, trace):
        player = TracePlayer(trace)
        assert player.seek(10_000) == trace[-1]
        assert player.at_end
        assert player.seek(-3) == trace[0]

    def test_reset(self, trace):
        player = TracePlayer(trace)
        player.seek(10)
        player.reset()
        assert player.position == 0

    def test_empty_trace(self):
        player = TracePlayer(ExecutionTrace())
        assert player.current is None
        assert player.play() == []
        assert player.array_variables() == {}


class TestPlayback:
    def test_play_without_breakpoints_runs_to_end(self, trace):
        player = TracePlayer(trace)
        visited = player.play()
        assert len(visited) == len(trace) - 1
        assert player.at_end

    def test_play_pauses_on_breakpoint(self, trace):
        player = TracePlayer(trace)
        assert player.toggle_breakpoint(LINE_SWAP) is True
        visited = player.play()
        assert player.position == 5
        assert visited[-1].line_number == LINE_SWAP
        assert visited[-1].description.startswith("Condition true")

    def test_play_resumes_past_breakpoint(self, trace):
        player = TracePlayer(trace)
        player.toggle_breakpoint(LINE_SWAP)
        player.play()
        visited = player.play()
        assert len(visited) == 1
        assert visited[0].description.startswith("Array is now")

    def test_toggle_breakpoint_off(self, trace):
        player = TracePlayer(trace)
        player.toggle_breakpoint(LINE_SWAP)
        assert player.toggle_breakpoint(LINE_SWAP) is False
        assert player.breakpoints == frozenset()

    def test_interval_follows_speed(self, trace):
        assert TracePlayer(trace, speed=4).interval == 0.25
        assert TracePlayer(trace).interval == 0.5

    def test_speed_must_be_positive(self, trace):
        with pytest.raises(ValueError):
            TracePlayer(trace, speed=0)


class TestArrayVariables:
    def test_first_step_holds_only_the_array(self, trace):
        assert array_variables(trace[0]) == {"myArray": DEFAULT_ARRAY}

    def test_scalars_are_excluded(self, trace):
        chart = TracePlayer(trace).array_variables(trace[-1])
        assert set(chart) == {"myArray", "sortedArray"}
        assert "n" not in chart
