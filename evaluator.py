"""Tree-walking evaluator for parsed programs.

`Evaluator.eval_program(program, env)` runs the top-level statements in
`env` and returns the value of the last one, or the value of the first
`return` it hits. Statements and expressions are dispatched by matching on
the concrete AST dataclass.

Semantics worth knowing:
- Blocks do not open a scope; only function calls do. A call evaluates its
  arguments in the caller's environment and runs the body in a new frame
  enclosed by the environment the function *captured*, which is what makes
  closures lexical.
- `return` produces a `ReturnValue` marker that blocks (and any expression
  whose operand produced it) pass upward untouched until a call or the
  program boundary unwraps it.
- Operators applied to the wrong kinds of values evaluate to `null` instead
  of failing. Unbound names, calling a non-function, division by zero and
  32-bit overflow raise.
- `null` and `false` are falsy; everything else, `0` included, is truthy.

Calls bind parameters to arguments positionally and by default tolerate a
count mismatch (extra arguments are dropped, missing ones stay unbound).
`Evaluator(strict_arity=True)` turns a mismatch into `EvalTypeError`.
"""

from __future__ import annotations
from typing import List, Optional
from ast_nodes import *
from environment import Environment
from errors import (
    EvalError,
    EvalTypeError,
    EvalZeroDivisionError,
    IntegerOverflowError,
)
from recursion import recursion_limit
from objects import (
    Object,
    Integer,
    Boolean,
    ReturnValue,
    Function,
    NULL,
    FALSE,
    native_bool_to_boolean,
)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def _checked_int(value: int) -> Integer:
    if not INT32_MIN <= value <= INT32_MAX:
        raise IntegerOverflowError(f"integer overflow: {value}")
    return Integer(value)


def _truncating_div(left: int, right: int) -> int:
    if right == 0:
        raise EvalZeroDivisionError("division by zero")
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def is_truthy(obj: Object) -> bool:
    if obj is NULL or obj == FALSE:
        return False
    return True


class Evaluator:
    def __init__(self, strict_arity: bool = False):
        self.strict_arity = strict_arity

    def eval_program(self, program: ProgramNode, env: Environment) -> Object:
        """Evaluate every top-level statement and return the program's value."""
        result: Object = NULL
        try:
            with recursion_limit():
                for stmt in program.statements:
                    result = self.eval_statement(stmt, env)
                    if isinstance(result, ReturnValue):
                        return result.value
        except RecursionError as exc:
            raise EvalError("maximum call depth exceeded") from exc
        return result

    # Statements

    def eval_statement(self, stmt: ASTNode, env: Environment) -> Object:
        match stmt:
            case ExpressionStatementNode(expression=expr):
                return self.eval_expression(expr, env)
            case LetStatementNode(name=IdentifierNode(name=name), value=value):
                val = self.eval_expression(value, env)
                if isinstance(val, ReturnValue):
                    return val
                env.set(name, val)
                return NULL
            case ReturnStatementNode(value=value):
                return ReturnValue(self.eval_expression(value, env))
            case BlockNode():
                return self.eval_block(stmt, env)
            case _:
                raise EvalError(f"Unhandled statement node: {stmt}")

    def eval_block(self, block: BlockNode, env: Environment) -> Object:
        """Run a block in `env`; a `ReturnValue` stops it and is passed up as-is."""
        result: Object = NULL
        for stmt in block.statements:
            result = self.eval_statement(stmt, env)
            if isinstance(result, ReturnValue):
                return result
        return result

    # Expressions

    def eval_expression(self, node: ASTNode, env: Environment) -> Object:
        match node:
            case IntLiteralNode(value=v):
                return _checked_int(v)
            case BoolLiteralNode(value=v):
                return native_bool_to_boolean(v)
            case IdentifierNode(name=n):
                return env.get(n)
            case PrefixNode(operator=op, right=right):
                rv = self.eval_expression(right, env)
                if isinstance(rv, ReturnValue):
                    return rv
                return self.eval_prefix(op, rv)
            case InfixNode(left=left, operator=op, right=right):
                lv = self.eval_expression(left, env)
                if isinstance(lv, ReturnValue):
                    return lv
                rv = self.eval_expression(right, env)
                if isinstance(rv, ReturnValue):
                    return rv
                return self.eval_infix(op, lv, rv)
            case IfExpressionNode(condition=cond, consequence=cons, alternative=alt):
                cv = self.eval_expression(cond, env)
                if isinstance(cv, ReturnValue):
                    return cv
                if is_truthy(cv):
                    return self.eval_block(cons, env)
                if alt is not None:
                    return self.eval_block(alt, env)
                return NULL
            case FunctionLiteralNode(parameters=params, body=body):
                return Function([p.name for p in params], body, env)
            case CallNode(function=func, arguments=args):
                callee = self.eval_expression(func, env)
                if isinstance(callee, ReturnValue):
                    return callee
                if not isinstance(callee, Function):
                    raise EvalTypeError(f"not a function: {callee.inspect()}")
                evaled = []
                for arg in args:
                    av = self.eval_expression(arg, env)
                    # A `return` reached while evaluating an argument leaves
                    # the enclosing function, not the callee.
                    if isinstance(av, ReturnValue):
                        return av
                    evaled.append(av)
                return self.apply_function(callee, evaled)
            case _:
                raise EvalError(f"Unhandled expression node type: {node}")

    def eval_prefix(self, operator: str, right: Object) -> Object:
        match operator, right:
            case "-", Integer(value=v):
                return _checked_int(-v)
            case "!", Boolean(value=v):
                return native_bool_to_boolean(not v)
            case ("-" | "!"), _:
                return NULL
            case _:
                raise EvalError(f"Unsupported prefix operator: {operator}")

    def eval_infix(self, operator: str, left: Object, right: Object) -> Object:
        if operator not in INFIX_OPERATORS:
            raise EvalError(f"Unsupported infix operator: {operator}")

        match left, right:
            case Integer(value=lv), Integer(value=rv):
                match operator:
                    case "+":
                        return _checked_int(lv + rv)
                    case "-":
                        return _checked_int(lv - rv)
                    case "*":
                        return _checked_int(lv * rv)
                    case "/":
                        return _checked_int(_truncating_div(lv, rv))
                    case "<":
                        return native_bool_to_boolean(lv < rv)
                    case ">":
                        return native_bool_to_boolean(lv > rv)
                    case "==":
                        return native_bool_to_boolean(lv == rv)
                    case "!=":
                        return native_bool_to_boolean(lv != rv)
            case Boolean(value=lv), Boolean(value=rv):
                match operator:
                    case "==":
                        return native_bool_to_boolean(lv == rv)
                    case "!=":
                        return native_bool_to_boolean(lv != rv)
        return NULL

    def apply_function(self, func: Function, args: List[Object]) -> Object:
        """Call `func` with already-evaluated arguments."""
        if self.strict_arity and len(args) != len(func.parameters):
            raise EvalTypeError(
                f"wrong number of arguments: expected {len(func.parameters)}, "
                f"got {len(args)}"
            )

        call_env = Environment.new_enclosed(func.env)
        for name, value in zip(func.parameters, args):
            call_env.set(name, value)

        result = self.eval_block(func.body, call_env)
        if isinstance(result, ReturnValue):
            return result.value
        return result


def evaluate(
    program: ProgramNode,
    env: Optional[Environment] = None,
    strict_arity: bool = False,
) -> Object:
    """Evaluate `program`, in a fresh root environment unless one is given."""
    if env is None:
        env = Environment()
    return Evaluator(strict_arity=strict_arity).eval_program(program, env)
