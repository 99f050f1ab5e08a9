"""Restricted expression evaluator.

Expressions are parsed with the tree-sitter JavaScript grammar and walked
over a closed set of node types: literals, scope lookups, unary/binary
operators, ternaries, ``.length`` and integer indexing into lists, and
array literals. Nothing is ever compiled or executed as code.

When the grammar strategy fails on text that looks like a bracketed array
literal, the text is normalised (single quotes become double quotes) and
decoded structurally as a JSON array. If both strategies fail, the
evaluator logs a warning and returns the ``NO_VALUE`` sentinel.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Callable, Mapping

from . import constants
from .parser import ExpressionSyntaxError, Parser, TreeSitterParserFactory

logger = logging.getLogger(__name__)


class _NoValue:
    """Sentinel returned when an expression could not be evaluated."""

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __bool__(self) -> bool:
        return False


NO_VALUE = _NoValue()


class _EvaluationFailure(Exception):
    """Internal signal: the current strategy cannot produce a value."""


def _truthy(value: Any) -> bool:
    if isinstance(value, list):
        return True
    return bool(value)


def _checked_divisor(op: str, b: Any) -> Any:
    if b == 0:
        raise _EvaluationFailure(f"division by zero in '{op}'")
    return b


def _js_mod(a: Any, b: Any) -> Any:
    """Remainder taking the sign of the dividend."""
    _checked_divisor("%", b)
    if isinstance(a, int) and isinstance(b, int):
        remainder = abs(a) % abs(b)
        return -remainder if a < 0 else remainder
    return math.fmod(a, b)


def _bounded_power(a: Any, b: Any) -> Any:
    if abs(b) > constants.MAX_EXPONENT:
        raise _EvaluationFailure(f"exponent {b} is too large")
    if isinstance(a, int) and isinstance(b, int) and b > 0:
        if a.bit_length() * b > constants.MAX_INTEGER_BITS:
            raise _EvaluationFailure("power result is too large")
    return a**b


def _bounded_shift(a: Any, b: Any) -> Any:
    if b > constants.MAX_SHIFT:
        raise _EvaluationFailure(f"shift count {b} is too large")
    if isinstance(a, int) and a.bit_length() + b > constants.MAX_INTEGER_BITS:
        raise _EvaluationFailure("shift result is too large")
    return a << b


class Operators:
    """Binary and unary operator tables for the restricted grammar."""

    BINOP_TABLE: dict[str, Callable[[Any, Any], Any]] = {
        "+": lambda a, b: a + b,
        "-": lambda a, b: a - b,
        "*": lambda a, b: a * b,
        "/": lambda a, b: a / _checked_divisor("/", b),
        "%": _js_mod,
        "**": _bounded_power,
        "==": lambda a, b: a == b,
        "===": lambda a, b: a == b,
        "!=": lambda a, b: a != b,
        "!==": lambda a, b: a != b,
        "<": lambda a, b: a < b,
        ">": lambda a, b: a > b,
        "<=": lambda a, b: a <= b,
        ">=": lambda a, b: a >= b,
        "&": lambda a, b: a & b,
        "|": lambda a, b: a | b,
        "^": lambda a, b: a ^ b,
        "<<": _bounded_shift,
        ">>": lambda a, b: a >> b,
    }

    UNOP_TABLE: dict[str, Callable[[Any], Any]] = {
        "-": lambda a: -a,
        "+": lambda a: +a,
        "!": lambda a: not _truthy(a),
        "~": lambda a: ~a,
    }

    SHORT_CIRCUIT: frozenset[str] = frozenset({"&&", "||"})

    @classmethod
    def eval_binop(cls, op: str, lhs: Any, rhs: Any) -> Any:
        fn = cls.BINOP_TABLE.get(op)
        if fn is None:
            raise _EvaluationFailure(f"unsupported operator '{op}'")
        try:
            return fn(lhs, rhs)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise _EvaluationFailure(f"cannot apply '{op}': {exc}") from exc

    @classmethod
    def eval_unop(cls, op: str, operand: Any) -> Any:
        fn = cls.UNOP_TABLE.get(op)
        if fn is None:
            raise _EvaluationFailure(f"unsupported unary operator '{op}'")
        try:
            return fn(operand)
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise _EvaluationFailure(f"cannot apply '{op}': {exc}") from exc


_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_ESCAPE_PATTERN = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)


def _decode_escape(match: re.Match) -> str:
    body = match.group(1)
    if body.startswith("u{"):
        return chr(int(body[2:-1], 16))
    if len(body) > 1 and body[0] in "ux":
        return chr(int(body[1:], 16))
    if body in ("\n", "\r\n", "\r"):
        return ""
    return _SIMPLE_ESCAPES.get(body, body)


def _parse_number(text: str) -> int | float:
    cleaned = text.replace("_", "")
    if cleaned[:2].lower() in ("0x", "0o", "0b"):
        return int(cleaned, 0)
    try:
        return int(cleaned)
    except ValueError:
        return float(cleaned)


def _nesting_depth(value: Any) -> int:
    if isinstance(value, list):
        return 1 + max((_nesting_depth(v) for v in value), default=0)
    return 0


def _is_literal_element(value: Any) -> bool:
    if isinstance(value, list):
        return all(_is_literal_element(v) for v in value)
    return isinstance(value, (int, float, str)) and not isinstance(value, bool)


def parse_array_literal(text: str, max_depth: int = constants.MAX_EXPRESSION_DEPTH) -> list:
    """Structurally decode a bracketed array literal.

    Raises:
        ValueError: If *text* is not a JSON-style array of numbers, strings
            or nested arrays, or nests deeper than *max_depth*.
    """
    normalised = text.strip().replace("'", '"')
    try:
        value = json.loads(normalised)
    except RecursionError as exc:
        raise ValueError("array literal nests too deeply") from exc
    if not isinstance(value, list):
        raise ValueError(f"not an array literal: {text!r}")
    if _nesting_depth(value) > max_depth:
        raise ValueError("array literal nests too deeply")
    if not _is_literal_element(value):
        raise ValueError(f"array literal holds unsupported elements: {text!r}")
    return value


class ExpressionEvaluator:
    """Evaluates restricted expressions against a name → value scope."""

    def __init__(
        self,
        parser: Parser | None = None,
        max_depth: int = constants.MAX_EXPRESSION_DEPTH,
    ):
        self._parser = parser or Parser(TreeSitterParserFactory())
        self._max_depth = max_depth
        self._source = b""
        self._DISPATCH: dict[str, Callable] = {
            "number": self._eval_number,
            "string": self._eval_string,
            "true": lambda node, scope, depth: True,
            "false": lambda node, scope, depth: False,
            "null": lambda node, scope, depth: None,
            "undefined": lambda node, scope, depth: None,
            "identifier": self._eval_identifier,
            "parenthesized_expression": self._eval_paren,
            "unary_expression": self._eval_unop,
            "binary_expression": self._eval_binop,
            "ternary_expression": self._eval_ternary,
            "subscript_expression": self._eval_subscript,
            "member_expression": self._eval_member,
            "array": self._eval_array,
        }

    # ── entry point ──────────────────────────────────────────────

    def evaluate(self, expression: str, scope: Mapping[str, Any]) -> Any:
        """Return the value *expression* denotes under *scope*, or ``NO_VALUE``."""
        try:
            return self._evaluate_grammar(expression, scope)
        except _EvaluationFailure as exc:
            failure = str(exc)

        if expression.strip().startswith("["):
            try:
                return parse_array_literal(expression, self._max_depth)
            except ValueError as exc:
                failure = f"{failure}; literal fallback: {exc}"

        logger.warning("Could not evaluate %r: %s", expression, failure)
        return NO_VALUE

    def _evaluate_grammar(self, expression: str, scope: Mapping[str, Any]) -> Any:
        try:
            parsed = self._parser.parse_expression(expression, constants.EXPRESSION_GRAMMAR)
        except ExpressionSyntaxError as exc:
            raise _EvaluationFailure(str(exc)) from exc
        self._source = parsed.source
        return self._eval(parsed.node, scope, 0)

    # ── dispatch ─────────────────────────────────────────────────

    def _node_text(self, node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def _eval(self, node, scope: Mapping[str, Any], depth: int) -> Any:
        if depth > self._max_depth:
            raise _EvaluationFailure("expression nests too deeply")
        handler = self._DISPATCH.get(node.type)
        if handler is None:
            raise _EvaluationFailure(f"unsupported construct '{node.type}'")
        return handler(node, scope, depth + 1)

    def _field(self, node, name: str):
        child = node.child_by_field_name(name)
        if child is None:
            raise _EvaluationFailure(f"'{node.type}' is missing its {name}")
        return child

    # ── handlers ─────────────────────────────────────────────────

    def _eval_number(self, node, scope, depth) -> int | float:
        text = self._node_text(node)
        try:
            return _parse_number(text)
        except ValueError as exc:
            raise _EvaluationFailure(f"bad number literal {text!r}") from exc

    def _eval_string(self, node, scope, depth) -> str:
        try:
            return _ESCAPE_PATTERN.sub(_decode_escape, self._node_text(node)[1:-1])
        except ValueError as exc:
            raise _EvaluationFailure(f"bad escape sequence: {exc}") from exc

    def _eval_identifier(self, node, scope, depth) -> Any:
        name = self._node_text(node)
        if name not in scope:
            raise _EvaluationFailure(f"'{name}' is not defined")
        return scope[name]

    def _eval_paren(self, node, scope, depth) -> Any:
        inner = next((c for c in node.named_children if c.type != "comment"), None)
        if inner is None:
            raise _EvaluationFailure("empty parentheses")
        return self._eval(inner, scope, depth)

    def _eval_unop(self, node, scope, depth) -> Any:
        op = self._field(node, "operator").type
        operand = self._eval(self._field(node, "argument"), scope, depth)
        return Operators.eval_unop(op, operand)

    def _eval_binop(self, node, scope, depth) -> Any:
        op = self._field(node, "operator").type
        lhs = self._eval(self._field(node, "left"), scope, depth)
        if op in Operators.SHORT_CIRCUIT:
            if (op == "&&") != _truthy(lhs):
                return lhs
            return self._eval(self._field(node, "right"), scope, depth)
        rhs = self._eval(self._field(node, "right"), scope, depth)
        return Operators.eval_binop(op, lhs, rhs)

    def _eval_ternary(self, node, scope, depth) -> Any:
        condition = self._eval(self._field(node, "condition"), scope, depth)
        branch = "consequence" if _truthy(condition) else "alternative"
        return self._eval(self._field(node, branch), scope, depth)

    def _eval_subscript(self, node, scope, depth) -> Any:
        container = self._eval(self._field(node, "object"), scope, depth)
        index = self._eval(self._field(node, "index"), scope, depth)
        if not isinstance(container, (list, str)):
            raise _EvaluationFailure("only arrays and strings can be indexed")
        if isinstance(index, float) and index.is_integer():
            index = int(index)
        if isinstance(index, bool) or not isinstance(index, int):
            raise _EvaluationFailure(f"index {index!r} is not an integer")
        if not 0 <= index < len(container):
            raise _EvaluationFailure(f"index {index} out of range")
        return container[index]

    def _eval_member(self, node, scope, depth) -> Any:
        prop = self._node_text(self._field(node, "property"))
        if prop != "length":
            raise _EvaluationFailure(f"unsupported property '{prop}'")
        container = self._eval(self._field(node, "object"), scope, depth)
        if not isinstance(container, (list, str)):
            raise _EvaluationFailure("'length' needs an array or string")
        return len(container)

    def _eval_array(self, node, scope, depth) -> list:
        return [
            self._eval(child, scope, depth)
            for child in node.named_children
            if child.type != "comment"
        ]


def evaluate(expression: str, scope: Mapping[str, Any]) -> Any:
    """Evaluate *expression* with a freshly built evaluator."""
    return ExpressionEvaluator().evaluate(expression, scope)
