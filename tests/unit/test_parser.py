"""Tests for the tree-sitter parsing layer."""

import pytest

from stepper.parser import ExpressionSyntaxError, Parser, TreeSitterParserFactory


@pytest.fixture
def parser() -> Parser:
    return Parser(TreeSitterParserFactory())


class TestParseExpression:
    def test_returns_expression_node(self, parser):
        parsed = parser.parse_expression("arr[j] > arr[j + 1]")
        assert parsed.node.type == "binary_expression"
        assert parsed.text() == "arr[j] > arr[j + 1]"

    def test_array_literal(self, parser):
        parsed = parser.parse_expression("[1, 2, 3]")
        assert parsed.node.type == "array"

    def test_trailing_semicolon_allowed(self, parser):
        assert parser.parse_expression("n - 1;").node.type == "binary_expression"

    def test_syntax_error(self, parser):
        with pytest.raises(ExpressionSyntaxError):
            parser.parse_expression("n -")

    def test_rejects_declarations(self, parser):
        with pytest.raises(ExpressionSyntaxError):
            parser.parse_expression("let x = 1;")

    def test_rejects_multiple_statements(self, parser):
        with pytest.raises(ExpressionSyntaxError):
            parser.parse_expression("1; 2")
