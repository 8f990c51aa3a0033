"""Printers for the AST.

Two renderings are provided:

- `PrettyPrinter.render(node)` produces the canonical, source-like form with
  every prefix and infix expression fully parenthesized, e.g.
  `1 + 2 * 3;` renders as `(1 + (2 * 3));`. The output is deterministic
  and independent of the original whitespace, so tests compare against it
  directly. Function values use it for their display form as well.
- `PrettyPrinter.print_ast(node, indent, prefix)` renders an indented
  multi-line tree intended for debugging; its layout is not stable.

Examples:
    PrettyPrinter.render(program_node)
    PrettyPrinter.print_ast(program_node)
"""

from __future__ import annotations
from ast_nodes import *


class PrettyPrinter:
    @staticmethod
    def render(node: ASTNode) -> str:
        """Return the canonical source form of `node`."""
        r = PrettyPrinter.render

        match node:
            case ProgramNode(statements=stmts):
                return "".join(r(s) for s in stmts)
            case LetStatementNode(name=name, value=value):
                return f"let {r(name)} = {r(value)};"
            case ReturnStatementNode(value=value):
                return f"return {r(value)};"
            case ExpressionStatementNode(expression=expr):
                return f"{r(expr)};"
            case BlockNode(statements=stmts):
                inner = "".join(f" {r(s)}" for s in stmts)
                return f"{{{inner} }}"
            case IdentifierNode(name=n):
                return n
            case IntLiteralNode(value=v):
                return str(v)
            case BoolLiteralNode(value=v):
                return "true" if v else "false"
            case PrefixNode(operator=op, right=right):
                return f"({op}{r(right)})"
            case InfixNode(left=left, operator=op, right=right):
                return f"({r(left)} {op} {r(right)})"
            case IfExpressionNode(
                condition=cond, consequence=cons, alternative=alt
            ):
                text = f"if {r(cond)} {r(cons)}"
                if alt is not None:
                    text += f" else {r(alt)}"
                return text
            case FunctionLiteralNode(parameters=params, body=body):
                names = ", ".join(r(p) for p in params)
                return f"fn({names}) {r(body)}"
            case CallNode(function=func, arguments=args):
                return f"{r(func)}({', '.join(r(a) for a in args)})"
            case _:
                raise TypeError(f"Cannot render {type(node).__name__}")

    @staticmethod
    def print_ast(node: ASTNode, indent: int = 0, prefix: str = "") -> str:
        """Pretty print AST and return as string."""
        lines = []
        indent_str = " " * indent

        if not isinstance(node, ASTNode):
            lines.append(f"{indent_str}{prefix}{node}")
            return "\n".join(lines)

        match node:
            case IntLiteralNode(value=v):
                lines.append(f"{indent_str}{prefix}IntLiteral({v})")

            case BoolLiteralNode(value=v):
                lines.append(f"{indent_str}{prefix}BoolLiteral({v})")

            case IdentifierNode(name=n):
                lines.append(f"{indent_str}{prefix}Identifier({n})")

            case PrefixNode(operator=op, right=right):
                lines.append(f"{indent_str}{prefix}Prefix({op})")
                lines.append(PrettyPrinter.print_ast(right, indent + 2))

            case InfixNode(left=left, operator=op, right=right):
                lines.append(f"{indent_str}{prefix}Infix({op})")
                lines.append(PrettyPrinter.print_ast(left, indent + 2, "left: "))
                lines.append(PrettyPrinter.print_ast(right, indent + 2, "right: "))

            case IfExpressionNode(condition=cond, consequence=cons, alternative=alt):
                lines.append(f"{indent_str}{prefix}IfExpression")
                lines.append(PrettyPrinter.print_ast(cond, indent + 4, "condition: "))
                lines.append(PrettyPrinter.print_ast(cons, indent + 4, "then: "))
                if alt is not None:
                    lines.append(PrettyPrinter.print_ast(alt, indent + 4, "else: "))

            case FunctionLiteralNode(parameters=params, body=body):
                names = ", ".join(p.name for p in params)
                lines.append(f"{indent_str}{prefix}FunctionLiteral(params=[{names}])")
                lines.append(PrettyPrinter.print_ast(body, indent + 4, "body: "))

            case CallNode(function=func, arguments=args):
                func_name = (
                    func.name if isinstance(func, IdentifierNode) else "anonymous"
                )
                lines.append(f"{indent_str}{prefix}Call({func_name})")
                if not isinstance(func, IdentifierNode):
                    lines.append(PrettyPrinter.print_ast(func, indent + 4, "callee: "))
                for i, arg in enumerate(args):
                    lines.append(PrettyPrinter.print_ast(arg, indent + 4, f"arg[{i}]: "))

            case LetStatementNode(name=name, value=value):
                lines.append(f"{indent_str}{prefix}Let({name.name})")
                lines.append(PrettyPrinter.print_ast(value, indent + 2, "value: "))

            case ReturnStatementNode(value=value):
                lines.append(f"{indent_str}{prefix}Return")
                lines.append(PrettyPrinter.print_ast(value, indent + 2, "expr: "))

            case ExpressionStatementNode(expression=expr):
                lines.append(f"{indent_str}{prefix}ExpressionStatement")
                lines.append(PrettyPrinter.print_ast(expr, indent + 2))

            case BlockNode(statements=stmts):
                lines.append(f"{indent_str}{prefix}Block")
                for i, stmt in enumerate(stmts):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"stmt[{i}]: "))

            case ProgramNode(statements=stmts):
                lines.append(f"{indent_str}{prefix}Program")
                for i, stmt in enumerate(stmts):
                    lines.append(PrettyPrinter.print_ast(stmt, indent + 4, f"stmt[{i}]: "))

            case _:
                lines.append(f"{indent_str}{prefix}Unknown node type: {type(node)}")

        return "\n".join(line for line in lines if line)
