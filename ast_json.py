"""Convert AST nodes into JSON-serializable structures.

This module provides `ast_to_json(node)` which returns a nested structure
of dicts/lists/primitives describing the AST node. It encodes the node kind
under `node_type` plus the node's fields; source positions are left out.
"""

from typing import Any, Optional
from ast_nodes import *


def ast_to_json(node: Optional[ASTNode]) -> Any:
    if node is None:
        return None

    match node:
        case IntLiteralNode(value=v):
            return {"node_type": "IntLiteral", "value": v}
        case BoolLiteralNode(value=v):
            return {"node_type": "BoolLiteral", "value": v}
        case IdentifierNode(name=n):
            return {"node_type": "Identifier", "name": n}
        case PrefixNode(operator=op, right=right):
            return {
                "node_type": "Prefix",
                "operator": op,
                "right": ast_to_json(right),
            }
        case InfixNode(left=left, operator=op, right=right):
            return {
                "node_type": "Infix",
                "operator": op,
                "left": ast_to_json(left),
                "right": ast_to_json(right),
            }
        case IfExpressionNode(condition=cond, consequence=cons, alternative=alt):
            return {
                "node_type": "If",
                "condition": ast_to_json(cond),
                "consequence": ast_to_json(cons),
                "alternative": ast_to_json(alt),
            }
        case FunctionLiteralNode(parameters=params, body=body):
            return {
                "node_type": "FunctionLiteral",
                "parameters": [p.name for p in params],
                "body": ast_to_json(body),
            }
        case CallNode(function=func, arguments=args):
            return {
                "node_type": "Call",
                "function": ast_to_json(func),
                "arguments": [ast_to_json(a) for a in args],
            }
        case LetStatementNode(name=name, value=value):
            return {
                "node_type": "Let",
                "name": name.name,
                "value": ast_to_json(value),
            }
        case ReturnStatementNode(value=value):
            return {"node_type": "Return", "value": ast_to_json(value)}
        case ExpressionStatementNode(expression=expr):
            return {"node_type": "ExprStmt", "expression": ast_to_json(expr)}
        case BlockNode(statements=stmts):
            return {
                "node_type": "Block",
                "statements": [ast_to_json(s) for s in stmts],
            }
        case ProgramNode(statements=stmts):
            return {
                "node_type": "Program",
                "statements": [ast_to_json(s) for s in stmts],
            }

    raise TypeError(f"Cannot serialize {type(node).__name__}")
