# lexer.py
"""Token stream builder.

Turns the raw input text into a fully materialized list of tokens, ending with
an EOF sentinel. The lexer never fails: characters it does not understand are
passed on as OTHER tokens and rejected by the parser with a positioned error.
"""

import re
import string
from dataclasses import dataclass
from typing import Any, List

# Identifiers longer than this are cut; the rest of the run starts a new token.
MAX_IDENT_LENGTH = 31

_OPERATOR_CHARS = set('+-*/^')
_IDENT_START = set(string.ascii_letters)
_IDENT_CHARS = set(string.ascii_letters + string.digits)
_DIGITS = set(string.digits)
# Whitespace as classified by isspace() in the C locale.
_WHITESPACE = set(' \t\n\v\f\r')

# Decimal literal with optional fraction and exponent. The exponent is only
# taken when at least one digit follows it, so "2e" lexes as 2 followed by "e".
_NUMBER_RE = re.compile(r'(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


class TokenType:
    """Enumeration of token types."""
    NUMBER = 'NUMBER'
    OPERATOR = 'OPERATOR'
    IDENT = 'IDENT'
    LPAREN = 'LPAREN'
    RPAREN = 'RPAREN'
    OTHER = 'OTHER'
    EOF = 'EOF'


@dataclass
class Token:
    """Represents a token with type, value, and character position."""
    type: str
    value: Any
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.pos})"

    def describe(self) -> str:
        """Return the token as the user typed it, for error messages."""
        if self.type == TokenType.NUMBER:
            return f"{self.value:g}"
        if self.type == TokenType.LPAREN:
            return '('
        if self.type == TokenType.RPAREN:
            return ')'
        if self.type == TokenType.EOF:
            return 'end of input'
        return str(self.value)


class Lexer:
    """Tokenizer for calculator expressions.

    Produces tokens: NUMBER, OPERATOR, IDENT, LPAREN, RPAREN, OTHER, EOF.
    '-' is always an operator; negative literals come from unary minus.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.len = len(text)

    def _peek(self, n: int = 0) -> str:
        i = self.pos + n
        return self.text[i] if i < self.len else ''

    def _advance(self, n: int = 1) -> None:
        self.pos += n

    def _skip_whitespace(self) -> None:
        while self._peek() in _WHITESPACE:
            self._advance()

    def _read_number(self) -> Token:
        start = self.pos
        m = _NUMBER_RE.match(self.text, start)
        if m is None:
            # A '.' that does not begin a number; keep moving.
            self._advance()
            return Token(TokenType.OTHER, self.text[start], start)
        self.pos = m.end()
        return Token(TokenType.NUMBER, float(m.group()), start)

    def _read_ident(self) -> Token:
        start = self.pos
        while self._peek() in _IDENT_CHARS and self.pos - start < MAX_IDENT_LENGTH:
            self._advance()
        return Token(TokenType.IDENT, self.text[start:self.pos], start)

    def _read_operator(self) -> Token:
        start = self.pos
        if self._peek() == '*' and self._peek(1) == '*':
            # '**' is an alias for '^'
            self._advance(2)
            return Token(TokenType.OPERATOR, '^', start)
        op = self._peek()
        self._advance()
        return Token(TokenType.OPERATOR, op, start)

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            self._skip_whitespace()
            ch = self._peek()
            if ch == '':
                break
            if ch in _DIGITS or ch == '.':
                tokens.append(self._read_number())
            elif ch == '(':
                tokens.append(Token(TokenType.LPAREN, None, self.pos))
                self._advance()
            elif ch == ')':
                tokens.append(Token(TokenType.RPAREN, None, self.pos))
                self._advance()
            elif ch in _OPERATOR_CHARS:
                tokens.append(self._read_operator())
            elif ch in _IDENT_START:
                tokens.append(self._read_ident())
            else:
                tokens.append(Token(TokenType.OTHER, ch, self.pos))
                self._advance()
        tokens.append(Token(TokenType.EOF, None, self.pos))
        return tokens


def tokenize(text: str) -> List[Token]:
    """Convenience wrapper around ``Lexer(text).tokenize()``."""
    return Lexer(text).tokenize()
