"""Named pattern rules, one per event of the simulated bubble sort.

The simulator is a narrow template matcher, not a parser: each rule lists
the text it expects to find on the line that produces its event.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from . import constants
from .locator import find_first_line


@dataclass(frozen=True)
class PatternRule:
    """Needles that locate one algorithmic event in the source."""

    name: str
    needles: tuple[str, ...]

    def resolve(self, array_name: str) -> tuple[str, ...]:
        return tuple(
            n.replace(constants.ARRAY_NAME_PLACEHOLDER, array_name)
            for n in self.needles
        )

    def locate(self, lines: Sequence[str], array_name: str = "", start_index: int = 0) -> int:
        return find_first_line(lines, self.resolve(array_name), start_index)


ARRAY_INIT_PATTERN = re.compile(r"(?:let|var|const)\s+([a-zA-Z0-9_]+)\s*=\s*(\[.*\])")

LENGTH_INIT = PatternRule("length_init", ("n =",))
OUTER_LOOP = PatternRule("outer_loop", ("for (let i",))
INNER_LOOP = PatternRule("inner_loop", ("for (let j",))
COMPARISON = PatternRule("comparison", ("if (arr[j]", "if ({array}[j]"))
SWAP = PatternRule("swap", ("[arr[j]", "[{array}[j]"))
FINAL_ASSIGN = PatternRule("final_assign", ("sortedArray =",))
PRINT = PatternRule("print", ("console.log",))


@dataclass(frozen=True)
class ArrayInit:
    """The matched ``<decl> <name> = [<elements>]`` statement."""

    name: str
    literal: str
    statement: str


def match_array_init(source: str) -> ArrayInit | None:
    match = ARRAY_INIT_PATTERN.search(source)
    if match is None:
        return None
    return ArrayInit(name=match.group(1), literal=match.group(2), statement=match.group(0))


def has_supported_shape(source: str) -> bool:
    """Coarse check that *source* is the bubble sort program we can replay."""
    return all(token in source for token in constants.SHAPE_TOKENS)
