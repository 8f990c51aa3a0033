"""
Lexer for the Monkey-style expression language.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    transforms an input source string into a stream of `Token` objects defined
    in `tokens.py`.
- It recognizes the keywords `fn`, `let`, `return`, `if`, `else`, `true` and
    `false`, identifiers, integer literals, the operators `+ - * / ! = == !=
    < >`, punctuation (commas, semicolons, parentheses and braces) and skips
    whitespace and single-line comments starting with `//`.

Examples:
    Input:  "let add = fn(a, b) { a + b };"
    Tokens: [LET, IDENTIFIER('add'), ASSIGN, FUNCTION, LPAREN, ...]

Implementation notes:
- The lexer is a simple stateful scanner using `self.pos` and `self.current_char`.
- Two-character operators (`==`, `!=`) are looked up before the single-character
    table so they are never split in two.
- Identifiers are scanned and then mapped to keywords using `KEYWORDS`.
- Every token records the line/column it started at so parse errors can
    point back into the source.
"""

from __future__ import annotations
from typing import Optional, List
from tokens import Token, TokenType, KEYWORDS
from errors import LexError

TWO_CHAR_TOKENS = {
    "==": TokenType.EQ,
    "!=": TokenType.NEQ,
}

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "!": TokenType.NOT,
    "=": TokenType.ASSIGN,
    "<": TokenType.LT,
    ">": TokenType.GT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
}


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char = self.text[self.pos] if self.text else None

    def error(self, message: str = "") -> LexError:
        return LexError(message, line=self.line, column=self.column)

    def advance(self) -> None:
        """Advance to next character."""
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        self.pos += 1
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def peek_char(self) -> Optional[str]:
        """Look at next character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < len(self.text):
            return self.text[next_pos]
        return None

    def skip_whitespace(self) -> None:
        """Skip whitespace characters."""
        while self.current_char is not None and self.current_char.isspace():
            self.advance()

    def skip_comment(self) -> None:
        """Skip single-line comments (// ...)."""
        while self.current_char is not None and self.current_char != "\n":
            self.advance()

        if self.current_char == "\n":
            self.advance()

    def integer(self) -> int:
        """Parse a multi-digit integer."""
        result = []

        while self.current_char is not None and self.current_char in "0123456789":
            result.append(self.current_char)
            self.advance()

        if not result:
            raise self.error("Expected integer")

        return int("".join(result))

    def identifier(self) -> str:
        """Parse an identifier or keyword."""
        result = []

        if self.current_char is not None and (
            self.current_char.isalpha() or self.current_char == "_"
        ):
            result.append(self.current_char)
            self.advance()
        else:
            raise self.error("Expected identifier")

        while self.current_char is not None and (
            self.current_char.isalnum() or self.current_char == "_"
        ):
            result.append(self.current_char)
            self.advance()

        return "".join(result)

    def _make(self, token_type: TokenType, value, line: int, column: int) -> Token:
        return Token(token_type, value, line=line, column=column)

    def get_next_token(self) -> Token:
        """Lexical analyzer that returns tokens one at a time."""
        while self.current_char is not None:
            if self.current_char.isspace():
                self.skip_whitespace()
                continue

            if self.current_char == "/" and self.peek_char() == "/":
                self.skip_comment()
                continue

            line, column = self.line, self.column

            # `==` and `!=` must win over `=` and `!`.
            pair = self.current_char + (self.peek_char() or "")
            if pair in TWO_CHAR_TOKENS:
                self.advance()
                self.advance()
                return self._make(TWO_CHAR_TOKENS[pair], pair, line, column)

            single = SINGLE_CHAR_TOKENS.get(self.current_char)
            if single is not None:
                char = self.current_char
                self.advance()
                return self._make(single, char, line, column)

            if self.current_char in "0123456789":
                value = self.integer()
                return self._make(TokenType.INTEGER, value, line, column)

            if self.current_char.isalpha() or self.current_char == "_":
                ident = self.identifier()
                token_type = KEYWORDS.get(ident, TokenType.IDENTIFIER)
                return self._make(token_type, ident, line, column)

            raise self.error(f"Unexpected character '{self.current_char}'")

        return Token(TokenType.EOF, None, line=self.line, column=self.column)

    def tokenize(self) -> List[Token]:
        """Return all tokens from the input string."""
        tokens = []
        while True:
            token = self.get_next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        return tokens
