"""AST node definitions for the Monkey-style expression language.

This module defines the concrete AST node dataclasses produced by the parser
and walked by the evaluator. Each node is represented by a dataclass that
carries the relevant information (an operator, child nodes, names). The
`NodeType` enum identifies node kinds.

Conventions:
- All AST node dataclasses inherit from `ASTNode` which records the node
    kind (`NodeType`) and optional source `line`/`column` information.
- Statement nodes are `LetStatementNode`, `ReturnStatementNode`,
    `ExpressionStatementNode` and `BlockNode`; everything else is an
    expression. Both sets are closed: consumers match on the concrete
    dataclass (or on `node.type`) and treat anything else as malformed.
- The tree is strict: every child is owned by exactly one parent and nodes
    are not mutated after parsing.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, List


class NodeType(Enum):
    INT_LITERAL = auto()
    BOOL_LITERAL = auto()
    IDENTIFIER = auto()
    PREFIX = auto()
    INFIX = auto()
    IF_EXPR = auto()
    FUNC_LITERAL = auto()
    CALL = auto()
    LET_STMT = auto()
    RETURN_STMT = auto()
    EXPR_STMT = auto()
    BLOCK = auto()
    PROGRAM = auto()

    def __str__(self) -> str:
        return self.name


PREFIX_OPERATORS = frozenset({"-", "!"})
INFIX_OPERATORS = frozenset({"+", "-", "*", "/", "==", "!=", "<", ">"})


# Base AST Node
@dataclass
class ASTNode:
    type: NodeType
    line: int = 0
    column: int = 0


# Expression Nodes
@dataclass
class IntLiteralNode(ASTNode):
    type: NodeType = NodeType.INT_LITERAL
    value: int = 0


@dataclass
class BoolLiteralNode(ASTNode):
    type: NodeType = NodeType.BOOL_LITERAL
    value: bool = False


@dataclass
class IdentifierNode(ASTNode):
    type: NodeType = NodeType.IDENTIFIER
    name: str = ""


@dataclass
class PrefixNode(ASTNode):
    type: NodeType = NodeType.PREFIX
    operator: str = ""
    right: ASTNode = field(default_factory=lambda: IntLiteralNode())


@dataclass
class InfixNode(ASTNode):
    type: NodeType = NodeType.INFIX
    left: ASTNode = field(default_factory=lambda: IntLiteralNode())
    operator: str = ""
    right: ASTNode = field(default_factory=lambda: IntLiteralNode())


@dataclass
class IfExpressionNode(ASTNode):
    type: NodeType = NodeType.IF_EXPR
    condition: ASTNode = field(default_factory=lambda: BoolLiteralNode())
    consequence: BlockNode = field(default_factory=lambda: BlockNode())
    alternative: Optional[BlockNode] = None


@dataclass
class FunctionLiteralNode(ASTNode):
    type: NodeType = NodeType.FUNC_LITERAL
    parameters: List[IdentifierNode] = field(default_factory=list)
    body: BlockNode = field(default_factory=lambda: BlockNode())


@dataclass
class CallNode(ASTNode):
    type: NodeType = NodeType.CALL
    # Any expression that evaluates to a function: an identifier, a function
    # literal, or another call.
    function: ASTNode = field(default_factory=lambda: IdentifierNode())
    arguments: List[ASTNode] = field(default_factory=list)


# Statement Nodes
@dataclass
class LetStatementNode(ASTNode):
    type: NodeType = NodeType.LET_STMT
    name: IdentifierNode = field(default_factory=lambda: IdentifierNode())
    value: ASTNode = field(default_factory=lambda: IntLiteralNode())


@dataclass
class ReturnStatementNode(ASTNode):
    type: NodeType = NodeType.RETURN_STMT
    value: ASTNode = field(default_factory=lambda: IntLiteralNode())


@dataclass
class ExpressionStatementNode(ASTNode):
    type: NodeType = NodeType.EXPR_STMT
    expression: ASTNode = field(default_factory=lambda: IntLiteralNode())


@dataclass
class BlockNode(ASTNode):
    type: NodeType = NodeType.BLOCK
    statements: List[ASTNode] = field(default_factory=list)


# Program Node
@dataclass
class ProgramNode(ASTNode):
    type: NodeType = NodeType.PROGRAM
    statements: List[ASTNode] = field(default_factory=list)


STATEMENT_NODES = (
    LetStatementNode,
    ReturnStatementNode,
    ExpressionStatementNode,
    BlockNode,
)
