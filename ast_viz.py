"""Graphviz visualization helpers for ASTs.

Provides `render_ast_dot(node)` which returns a `graphviz.Digraph` object
(not rendered). Optionally `write_and_render` can write the file to disk.

Layout: every AST node becomes one graph node, drawn as an HTML-like table
whose header is the node kind and whose second row (when present) is the
node's payload: the operator, literal value, name or parameter list. Edges
run from parent to child and are labelled with the child's role
(`left`, `condition`, `arg[0]`, ...).
"""

from typing import List, Optional, Tuple
import html
from graphviz import Digraph
from ast_nodes import *


def _children(node: ASTNode) -> List[Tuple[str, ASTNode]]:
    """Return (role, child) pairs in source order."""
    match node:
        case ProgramNode(statements=stmts) | BlockNode(statements=stmts):
            return [(f"stmt[{i}]", s) for i, s in enumerate(stmts)]
        case LetStatementNode(value=value):
            return [("value", value)]
        case ReturnStatementNode(value=value):
            return [("value", value)]
        case ExpressionStatementNode(expression=expr):
            return [("expr", expr)]
        case PrefixNode(right=right):
            return [("right", right)]
        case InfixNode(left=left, right=right):
            return [("left", left), ("right", right)]
        case IfExpressionNode(condition=cond, consequence=cons, alternative=alt):
            kids = [("condition", cond), ("then", cons)]
            if alt is not None:
                kids.append(("else", alt))
            return kids
        case FunctionLiteralNode(body=body):
            return [("body", body)]
        case CallNode(function=func, arguments=args):
            return [("callee", func)] + [(f"arg[{i}]", a) for i, a in enumerate(args)]
    return []


def _payload(node: ASTNode) -> Optional[str]:
    match node:
        case IntLiteralNode(value=v):
            return str(v)
        case BoolLiteralNode(value=v):
            return "true" if v else "false"
        case IdentifierNode(name=n):
            return n
        case LetStatementNode(name=name):
            return name.name
        case PrefixNode(operator=op) | InfixNode(operator=op):
            return op
        case FunctionLiteralNode(parameters=params):
            return "(" + ", ".join(p.name for p in params) + ")"
    return None


_KIND_NAMES = {
    NodeType.INT_LITERAL: "Integer",
    NodeType.BOOL_LITERAL: "Boolean",
    NodeType.IDENTIFIER: "Identifier",
    NodeType.PREFIX: "Prefix",
    NodeType.INFIX: "Infix",
    NodeType.IF_EXPR: "If",
    NodeType.FUNC_LITERAL: "Function",
    NodeType.CALL: "Call",
    NodeType.LET_STMT: "Let",
    NodeType.RETURN_STMT: "Return",
    NodeType.EXPR_STMT: "ExpressionStatement",
    NodeType.BLOCK: "Block",
    NodeType.PROGRAM: "Program",
}


def _node_html(node: ASTNode) -> str:
    kind = html.escape(_KIND_NAMES.get(node.type, str(node.type)))
    rows = f"<TR><TD><B>{kind}</B></TD></TR>"
    payload = _payload(node)
    if payload is not None:
        # Avoid empty FONT elements which some Graphviz versions reject
        text = html.escape(payload) or "&nbsp;"
        rows += f'<TR><TD><FONT POINT-SIZE="10">{text}</FONT></TD></TR>'
    return f'<<TABLE BORDER="0" CELLBORDER="1" CELLSPACING="0">{rows}</TABLE>>'


def render_ast_dot(node: ASTNode) -> Digraph:
    """Return a graphviz.Digraph for the given AST.

    The caller may call `dot.source` to inspect the dot text, or call
    `dot.render(filename, format=...)` to write files (requires Graphviz installed).
    """
    dot = Digraph(format="svg")
    dot.attr("graph", rankdir="TB")

    counter = 0
    stack: List[Tuple[Optional[str], str, ASTNode]] = [(None, "", node)]
    while stack:
        parent_id, role, current = stack.pop()
        node_id = f"n{counter}"
        counter += 1
        dot.node(node_id, label=_node_html(current), shape="plaintext")
        if parent_id is not None:
            dot.edge(parent_id, node_id, label=role)
        # Reversed so children are emitted left to right.
        for child_role, child in reversed(_children(current)):
            stack.append((node_id, child_role, child))

    return dot


def write_and_render(node: ASTNode, out_path: str, fmt: str = "svg") -> None:
    """Write and render the AST to the given path (without extension).

    Example: write_and_render(program, 'out/ast', fmt='png') will create
    out/ast.png (requires Graphviz)."""
    dot = render_ast_dot(node)
    dot.format = fmt
    # Note: render will append extension automatically
    dot.render(out_path, cleanup=True)
