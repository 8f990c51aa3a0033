"""
Parser for the Monkey-style expression language.

Overview and approach:
- This parser is a hand-written Pratt parser. Every token that can start an
    expression has a *prefix rule* (null denotation) in `self.prefix_rules`,
    and every token that can continue one has an *infix rule* (left
    denotation) in `self.infix_rules`. Binding power comes from the
    `PRECEDENCES` table.

Key points:
- Expression parsing (`parse_expression(min_precedence)`):
    1. Dispatch on the current token to its prefix rule to get the initial
        left expression.
    2. While the current token's precedence is strictly greater than
        `min_precedence`, dispatch to its infix rule, which combines the
        accumulated left expression with whatever follows.
    3. Binary operators parse their right operand at their own precedence,
        so chains of equal precedence nest to the left: `a + b + c` is
        `((a + b) + c)`.
    - A call `f(x)` is the infix rule for `(`, bound at `CALL` precedence.

- Statement parsing:
    - `let IDENT = EXPR`, `return EXPR`, or a bare expression statement. The
        trailing semicolon is optional and consumed when present.
    - A block `{ ... }` runs until the closing brace; hitting the end of input
        first is an error.

- Errors: every failure raises `ParseError` with what was expected, the token
    actually found, and its index/line/column. There is no recovery and no
    partial AST.

Examples:
    - `-a * b;` parses to `((-a) * b);`
    - `add(a, b * c) + d;` parses to `(add(a, (b * c)) + d);`
"""

from __future__ import annotations
from enum import IntEnum
from typing import Callable, Dict, List, Optional
from tokens import Token, TokenType
from ast_nodes import *
from errors import ParseError
from recursion import recursion_limit

INT32_MAX = 2**31 - 1


class Precedence(IntEnum):
    # Anything that cannot continue an expression binds below LOWEST, which
    # is what stops the Pratt loop at `;`, `)`, `,`, `}` and EOF.
    END = 0
    LOWEST = 1
    EQUALS = 2
    LESSGREATER = 3
    SUM = 4
    PRODUCT = 5
    PREFIX = 6
    CALL = 7


PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NEQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.STAR: Precedence.PRODUCT,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
}


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0] if tokens else Token(TokenType.EOF, None)

        self.prefix_rules: Dict[TokenType, Callable[[], ASTNode]] = {
            TokenType.IDENTIFIER: self.parse_identifier,
            TokenType.INTEGER: self.parse_integer,
            TokenType.TRUE: self.parse_boolean,
            TokenType.FALSE: self.parse_boolean,
            TokenType.LPAREN: self.parse_grouped_expression,
            TokenType.NOT: self.parse_prefix_expression,
            TokenType.MINUS: self.parse_prefix_expression,
            TokenType.IF: self.parse_if_expression,
            TokenType.FUNCTION: self.parse_function_literal,
        }

        binary = self.parse_infix_expression
        self.infix_rules: Dict[TokenType, Callable[[ASTNode], ASTNode]] = {
            TokenType.PLUS: binary,
            TokenType.MINUS: binary,
            TokenType.STAR: binary,
            TokenType.SLASH: binary,
            TokenType.EQ: binary,
            TokenType.NEQ: binary,
            TokenType.LT: binary,
            TokenType.GT: binary,
            TokenType.LPAREN: self.parse_call_expression,
        }

    def advance(self) -> Token:
        """Move to next token. Past the end the current token stays EOF."""
        self.pos += 1
        if self.pos < len(self.tokens):
            self.current = self.tokens[self.pos]
        else:
            self.current = Token(TokenType.EOF, None)
        return self.current

    def error(self, expected: str, message: str = "") -> ParseError:
        token = self.current
        return ParseError(
            message,
            expected=expected,
            actual=token.lexeme,
            position=self.pos,
            line=token.line,
            column=token.column,
        )

    def expect(self, expected_type: TokenType, what: Optional[str] = None) -> Token:
        """Expect and consume token of given type."""
        if self.current.type == expected_type:
            token = self.current
            self.advance()
            return token
        raise self.error(what or f"'{expected_type}'")

    def match(self, token_type: TokenType) -> bool:
        """Check if current token matches type, consume if true."""
        if self.current.type == token_type:
            self.advance()
            return True
        return False

    def current_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current.type, Precedence.END)

    # Expressions

    def parse_expression(self, min_precedence: Precedence = Precedence.LOWEST) -> ASTNode:
        """Parse an expression binding tighter than `min_precedence`."""
        prefix = self.prefix_rules.get(self.current.type)
        if prefix is None:
            raise self.error("an expression")
        left = prefix()

        while min_precedence < self.current_precedence():
            infix = self.infix_rules.get(self.current.type)
            if infix is None:
                raise self.error("an operator")
            left = infix(left)

        return left

    def parse_identifier(self) -> IdentifierNode:
        token = self.expect(TokenType.IDENTIFIER, "an identifier")
        return IdentifierNode(name=token.value, line=token.line, column=token.column)

    def parse_integer(self) -> IntLiteralNode:
        token = self.current
        if token.value > INT32_MAX:
            raise self.error(
                "a 32-bit integer literal",
                f"integer literal {token.value} is out of range",
            )
        self.advance()
        return IntLiteralNode(value=token.value, line=token.line, column=token.column)

    def parse_boolean(self) -> BoolLiteralNode:
        token = self.current
        self.advance()
        return BoolLiteralNode(
            value=token.type == TokenType.TRUE, line=token.line, column=token.column
        )

    def parse_grouped_expression(self) -> ASTNode:
        self.expect(TokenType.LPAREN)
        expr = self.parse_expression(Precedence.LOWEST)
        self.expect(TokenType.RPAREN, "')'")
        return expr

    def parse_prefix_expression(self) -> PrefixNode:
        token = self.current
        self.advance()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixNode(
            operator=token.value, right=right, line=token.line, column=token.column
        )

    def parse_infix_expression(self, left: ASTNode) -> InfixNode:
        token = self.current
        precedence = self.current_precedence()
        self.advance()
        # Same precedence on the right makes equal-precedence chains nest left.
        right = self.parse_expression(precedence)
        return InfixNode(
            left=left,
            operator=token.value,
            right=right,
            line=token.line,
            column=token.column,
        )

    def parse_if_expression(self) -> IfExpressionNode:
        """Parse `if (cond) { ... }` with an optional `else { ... }`."""
        token = self.expect(TokenType.IF)
        self.expect(TokenType.LPAREN, "'(' after 'if'")
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect(TokenType.RPAREN, "')' after if condition")

        consequence = self.parse_block()

        alternative = None
        if self.match(TokenType.ELSE):
            alternative = self.parse_block()

        return IfExpressionNode(
            condition=condition,
            consequence=consequence,
            alternative=alternative,
            line=token.line,
            column=token.column,
        )

    def parse_function_literal(self) -> FunctionLiteralNode:
        """Parse `fn(a, b) { ... }`."""
        token = self.expect(TokenType.FUNCTION)
        self.expect(TokenType.LPAREN, "'(' after 'fn'")

        parameters: List[IdentifierNode] = []
        if self.current.type != TokenType.RPAREN:
            parameters.append(self.parse_identifier())
            while self.match(TokenType.COMMA):
                parameters.append(self.parse_identifier())

        self.expect(TokenType.RPAREN, "',' or ')' in parameter list")
        body = self.parse_block()
        return FunctionLiteralNode(
            parameters=parameters, body=body, line=token.line, column=token.column
        )

    def parse_call_expression(self, function: ASTNode) -> CallNode:
        token = self.expect(TokenType.LPAREN)

        args: List[ASTNode] = []
        if self.current.type != TokenType.RPAREN:
            args.append(self.parse_expression(Precedence.LOWEST))
            while self.match(TokenType.COMMA):
                args.append(self.parse_expression(Precedence.LOWEST))

        self.expect(TokenType.RPAREN, "',' or ')' in argument list")
        return CallNode(
            function=function, arguments=args, line=token.line, column=token.column
        )

    # Statements

    def parse_block(self) -> BlockNode:
        """Parse a block of statements: { statement* }"""
        token = self.expect(TokenType.LBRACE, "'{'")
        statements: List[ASTNode] = []

        while (
            self.current.type != TokenType.RBRACE and self.current.type != TokenType.EOF
        ):
            statements.append(self.parse_statement())

        self.expect(TokenType.RBRACE, "'}' before end of input")
        return BlockNode(statements=statements, line=token.line, column=token.column)

    def parse_let_statement(self) -> LetStatementNode:
        """Parse `let IDENT = EXPR [;]`."""
        token = self.expect(TokenType.LET)
        name = self.parse_identifier()
        self.expect(TokenType.ASSIGN, "'=' after let binding name")
        value = self.parse_expression(Precedence.LOWEST)
        self.match(TokenType.SEMICOLON)
        return LetStatementNode(
            name=name, value=value, line=token.line, column=token.column
        )

    def parse_return_statement(self) -> ReturnStatementNode:
        """Parse `return EXPR [;]`."""
        token = self.expect(TokenType.RETURN)
        value = self.parse_expression(Precedence.LOWEST)
        self.match(TokenType.SEMICOLON)
        return ReturnStatementNode(value=value, line=token.line, column=token.column)

    def parse_expression_statement(self) -> ExpressionStatementNode:
        token = self.current
        expr = self.parse_expression(Precedence.LOWEST)
        self.match(TokenType.SEMICOLON)
        return ExpressionStatementNode(
            expression=expr, line=token.line, column=token.column
        )

    def parse_statement(self) -> ASTNode:
        """Parse a statement."""
        match self.current.type:
            case TokenType.LET:
                return self.parse_let_statement()
            case TokenType.RETURN:
                return self.parse_return_statement()
            case _:
                return self.parse_expression_statement()

    def parse_program(self) -> ProgramNode:
        """Parse a complete program (sequence of statements)."""
        statements: List[ASTNode] = []

        while self.current.type != TokenType.EOF:
            statements.append(self.parse_statement())

        return ProgramNode(statements=statements)

    def parse(self) -> ProgramNode:
        """Parse the whole token stream into a `ProgramNode`."""
        with recursion_limit():
            try:
                return self.parse_program()
            except RecursionError as exc:
                raise self.error(
                    "a shallower expression", "expression nested too deeply"
                ) from exc


def parse(tokens: List[Token]) -> ProgramNode:
    return Parser(tokens).parse()
