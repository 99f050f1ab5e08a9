"""JSON payload schema for handing a trace to a front end."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from .trace_types import ExecutionTrace


class StepPayload(BaseModel):
    lineNumber: int
    variables: dict[str, Any] = {}
    description: str
    output: list[str] | None = None


class StatsPayload(BaseModel):
    array_length: int = 0
    comparisons: int = 0
    swaps: int = 0


class TracePayload(BaseModel):
    steps: list[StepPayload] = []
    stats: StatsPayload = StatsPayload()


def to_payload(trace: ExecutionTrace) -> TracePayload:
    return TracePayload(
        steps=[
            StepPayload(
                lineNumber=step.line_number,
                variables=step.variables,
                description=step.description,
                output=list(step.output) if step.output is not None else None,
            )
            for step in trace.steps
        ],
        stats=StatsPayload(
            array_length=trace.stats.array_length,
            comparisons=trace.stats.comparisons,
            swaps=trace.stats.swaps,
        ),
    )


def dump_json(trace: ExecutionTrace, indent: int | None = 2) -> str:
    return to_payload(trace).model_dump_json(indent=indent)
