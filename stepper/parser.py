"""Tree-Sitter Parsing Layer.

Source text is parsed with tree-sitter-language-pack grammars. The
evaluator only ever needs a single expression, so ``Parser`` also knows how
to peel a one-statement program down to its expression node.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from . import constants


class ExpressionSyntaxError(ValueError):
    """Text is not exactly one well-formed expression."""


class ParserFactory(ABC):
    """Abstract factory for obtaining a language parser."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Concrete factory that delegates to tree-sitter-language-pack.

    A fresh parser is handed out per call, so concurrent evaluations never
    share parser state.
    """

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


@dataclass(frozen=True)
class ParsedExpression:
    """An expression node together with the bytes its offsets refer to."""

    node: Any
    source: bytes

    def text(self, node: Any = None) -> str:
        target = node if node is not None else self.node
        return self.source[target.start_byte : target.end_byte].decode("utf-8")


def _significant(nodes) -> list:
    return [n for n in nodes if n.type != "comment"]


class Parser:
    """Thin wrapper around a parser factory."""

    def __init__(self, parser_factory: ParserFactory):
        self._factory = parser_factory

    def parse(self, source: str, language: str):
        parser = self._factory.get_parser(language)
        return parser.parse(source.encode("utf-8"))

    def parse_expression(
        self, text: str, language: str = constants.EXPRESSION_GRAMMAR
    ) -> ParsedExpression:
        """Parse *text* as a program holding exactly one expression statement.

        Raises:
            ExpressionSyntaxError: On a syntax error, or when *text* holds
                anything other than a single expression.
        """
        root = self.parse(text, language).root_node
        if root.has_error:
            raise ExpressionSyntaxError("syntax error")
        statements = _significant(root.named_children)
        if len(statements) != 1 or statements[0].type != "expression_statement":
            raise ExpressionSyntaxError("expected exactly one expression")
        exprs = _significant(statements[0].named_children)
        if len(exprs) != 1:
            raise ExpressionSyntaxError("expected exactly one expression")
        return ParsedExpression(node=exprs[0], source=text.encode("utf-8"))
