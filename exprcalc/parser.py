# parser.py
"""Recursive descent parser for calculator expressions.

Grammar, lowest binding power first:

    expr   : term (('+'|'-') term)*
    term   : factor (('*'|'/') factor)*
    factor : spow ('^' spow)*
    spow   : '-' spow | atom
    atom   : NUMBER | '(' expr ')' | IDENT

All binary operators are left-associative, '^' included, so 2^3^2 is
(2^3)^2. Unary minus binds tighter than '^', so -2^2 is (-2)^2.

IDENT is either a constant (parsed as a Number) or a function name, which must
be followed by a parenthesised expression.

Errors are raised as ParseError at the point of detection and are never
caught inside the parser, so the first error is the one reported.
"""

from typing import Dict, List, Optional

from .errors import ParseError
from .lexer import Token, TokenType
from .nodes import Function, Node, Number, Operator, OpType
from .registry import find_constant, find_function

_ADD_OPS: Dict[str, OpType] = {'+': OpType.PLUS, '-': OpType.MINUS}
_MUL_OPS: Dict[str, OpType] = {'*': OpType.TIMES, '/': OpType.DIV}

_EXPECTED_OPERAND = "Expected '(', number, constant or function"


class Parser:
    """Parses a token list (as produced by Lexer) into an AST.

    ``parse`` returns None when there is no expression at all, e.g. for blank
    input. With ``strict`` set, tokens left over after the top-level expression
    are an error; by default the parser stops at the first unmatched ')' and
    ignores the rest.
    """

    def __init__(self, tokens: List[Token], strict: bool = False):
        self.tokens = tokens
        self.pos = 0
        self.strict = strict

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        # The EOF sentinel is never consumed.
        if tok.type != TokenType.EOF:
            self.pos += 1
        return tok

    def _error(self, message: str, tok: Token) -> ParseError:
        position = None if tok.type == TokenType.EOF else tok.pos
        return ParseError(message, position)

    def _expect(self, typ: str, message: str) -> Token:
        tok = self._current()
        if tok.type != typ:
            raise self._error(message, tok)
        return self._advance()

    def _at_operator(self, ops) -> bool:
        tok = self._current()
        return tok.type == TokenType.OPERATOR and tok.value in ops

    def parse(self) -> Optional[Node]:
        """Parse one expression from the start of the token list."""
        try:
            node = self.expr()
        except RecursionError:
            raise self._error("Expression nested too deeply", self._current()) from None
        if self.strict and self._current().type != TokenType.EOF:
            tok = self._current()
            raise self._error(f"Unexpected token '{tok.describe()}'", tok)
        return node

    def expr(self) -> Optional[Node]:
        """
        expr : term (('+'|'-') term)*

        Returns None without consuming anything when the next token is
        EOF or ')'.
        """
        tok = self._current()
        if tok.type in (TokenType.EOF, TokenType.RPAREN):
            return None
        node = self.term()
        while True:
            tok = self._current()
            if tok.type in (TokenType.EOF, TokenType.RPAREN):
                return node
            if tok.type != TokenType.OPERATOR:
                raise self._error("Expected operator", tok)
            op = _ADD_OPS.get(tok.value)
            if op is None:
                raise self._error("Expected '+' or '-'", tok)
            self._advance()
            node = Operator(op, node, self.term())

    def term(self) -> Node:
        """
        term : factor (('*'|'/') factor)*
        """
        node = self.factor()
        while self._at_operator(_MUL_OPS):
            op = _MUL_OPS[self._advance().value]
            node = Operator(op, node, self.factor())
        return node

    def factor(self) -> Node:
        """
        factor : spow ('^' spow)*
        """
        node = self.spow()
        while self._at_operator('^'):
            self._advance()
            node = Operator(OpType.POW, node, self.spow())
        return node

    def spow(self) -> Node:
        """
        spow : '-' spow | atom
        """
        tok = self._current()
        if tok.type == TokenType.EOF:
            raise self._error(_EXPECTED_OPERAND, tok)
        if self._at_operator('-'):
            self._advance()
            return Operator(OpType.UMINUS, None, self.spow())
        return self.atom()

    def atom(self) -> Node:
        """
        atom : NUMBER | '(' expr ')' | IDENT
        """
        tok = self._current()
        if tok.type == TokenType.LPAREN:
            return self.parenthesized()
        if tok.type == TokenType.NUMBER:
            return self.number()
        if tok.type == TokenType.IDENT:
            self._advance()
            value = find_constant(tok.value)
            if value is not None:
                return Number(value)
            func = find_function(tok.value)
            if func is not None:
                return Function(func, self.parenthesized())
            raise self._error(f"Unknown identifier '{tok.value}'", tok)
        raise self._error(_EXPECTED_OPERAND, tok)

    def number(self) -> Number:
        tok = self._expect(TokenType.NUMBER, "Expected number")
        return Number(tok.value)

    def parenthesized(self) -> Node:
        """Parse '(' expr ')'; empty parentheses are an error."""
        lparen = self._expect(TokenType.LPAREN, "Expected '('")
        node = self.expr()
        if node is None:
            raise ParseError("Expected expression", lparen.pos + 1)
        self._expect(TokenType.RPAREN, "Expected ')'")
        return node
