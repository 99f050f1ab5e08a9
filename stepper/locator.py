"""Maps algorithmic events back to approximate source line numbers."""

from __future__ import annotations

from typing import Optional, Sequence


def _search(lines: Sequence[str], needle: str, start: int) -> Optional[int]:
    return next(
        (i + 1 for i in range(start, len(lines)) if needle in lines[i]),
        None,
    )


def _fallback(lines: Sequence[str], start: int) -> int:
    return min(start, max(len(lines) - 1, 0)) + 1


def find_line(lines: Sequence[str], needle: str, start_index: int = 0) -> int:
    """Return the 1-based line of the first line at or after *start_index*
    containing *needle*.

    When nothing matches, the line at *start_index* is assumed to be the
    right one and ``start_index + 1`` is returned. The result is always
    clamped to an existing line (``1`` for empty sources).
    """
    start = max(start_index, 0)
    found = _search(lines, needle, start)
    return found if found is not None else _fallback(lines, start)


def find_first_line(
    lines: Sequence[str], needles: Sequence[str], start_index: int = 0
) -> int:
    """Like :func:`find_line`, trying each needle in turn."""
    start = max(start_index, 0)
    return next(
        (
            found
            for needle in needles
            if (found := _search(lines, needle, start)) is not None
        ),
        _fallback(lines, start),
    )
