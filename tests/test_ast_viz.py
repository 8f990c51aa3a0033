"""Tests for ast_viz: ensure a Digraph is produced with one node per AST node."""

from tests.utils import parse_text
from ast_viz import render_ast_dot


def test_ast_viz_dot_source():
    ast = parse_text("let add = fn(a, b) { a + b }; add(1, 2);")
    dot = render_ast_dot(ast)
    src = dot.source
    assert "Program" in src
    assert "Function" in src
    assert "(a, b)" in src
    assert "Infix" in src
    assert "Call" in src
    assert "arg[1]" in src
    assert "callee" in src


def test_ast_viz_escapes_operators():
    dot = render_ast_dot(parse_text("1 < 2;"))
    assert "&lt;" in dot.source


def test_ast_viz_node_count_matches_tree():
    # Program, ExpressionStatement, Infix, two Integers
    dot = render_ast_dot(parse_text("1 + 2;"))
    node_lines = [l for l in dot.body if "shape=plaintext" in l]
    edge_lines = [l for l in dot.body if "->" in l]
    assert len(node_lines) == 5
    assert len(edge_lines) == 4
