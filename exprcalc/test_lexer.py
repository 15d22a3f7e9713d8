import math

import pytest

from exprcalc.lexer import MAX_IDENT_LENGTH, Lexer, Token, TokenType, tokenize


def types_of(text):
    return [t.type for t in tokenize(text)]


def test_lex_numbers():
    toks = tokenize("123 45.6 .5 1e3 2E-2 7.")
    assert [t.type for t in toks[:-1]] == [TokenType.NUMBER] * 6
    assert toks[0].value == 123.0
    assert math.isclose(toks[1].value, 45.6)
    assert toks[2].value == 0.5
    assert toks[3].value == 1000.0
    assert math.isclose(toks[4].value, 0.02)
    assert toks[5].value == 7.0
    assert all(isinstance(t.value, float) for t in toks[:-1])


def test_lex_exponent_needs_digits():
    # "2e" is the number 2 followed by the identifier e
    toks = tokenize("2e")
    assert toks[0].type == TokenType.NUMBER and toks[0].value == 2.0
    assert toks[1].type == TokenType.IDENT and toks[1].value == 'e'
    assert toks[1].pos == 1


def test_lex_operators_and_parentheses():
    toks = tokenize("(1-2)*3/4^5+6")
    assert [t.type for t in toks] == [
        TokenType.LPAREN, TokenType.NUMBER, TokenType.OPERATOR, TokenType.NUMBER,
        TokenType.RPAREN, TokenType.OPERATOR, TokenType.NUMBER, TokenType.OPERATOR,
        TokenType.NUMBER, TokenType.OPERATOR, TokenType.NUMBER, TokenType.OPERATOR,
        TokenType.NUMBER, TokenType.EOF,
    ]
    ops = [t.value for t in toks if t.type == TokenType.OPERATOR]
    assert ops == ['-', '*', '/', '^', '+']


def test_lex_double_star_is_power():
    toks = tokenize("2**3")
    assert [(t.type, t.value, t.pos) for t in toks] == [
        (TokenType.NUMBER, 2.0, 0),
        (TokenType.OPERATOR, '^', 1),
        (TokenType.NUMBER, 3.0, 3),
        (TokenType.EOF, None, 4),
    ]


def test_lex_triple_star():
    # '**' is taken first, the third '*' stands alone
    ops = [t.value for t in tokenize("2***3") if t.type == TokenType.OPERATOR]
    assert ops == ['^', '*']


def test_lex_skips_whitespace_and_records_positions():
    toks = tokenize("  1\t+\n 22  ")
    assert [(t.type, t.pos) for t in toks] == [
        (TokenType.NUMBER, 2),
        (TokenType.OPERATOR, 4),
        (TokenType.NUMBER, 7),
        (TokenType.EOF, 11),
    ]


def test_lex_empty_and_blank_input():
    assert types_of("") == [TokenType.EOF]
    assert types_of("   \t ") == [TokenType.EOF]


def test_lex_identifiers():
    toks = tokenize("sin log10 x2y")
    assert [(t.type, t.value) for t in toks[:-1]] == [
        (TokenType.IDENT, 'sin'),
        (TokenType.IDENT, 'log10'),
        (TokenType.IDENT, 'x2y'),
    ]


def test_lex_identifier_is_truncated_at_max_length():
    name = "a" * (MAX_IDENT_LENGTH + 5)
    toks = tokenize(name)
    assert toks[0].type == TokenType.IDENT
    assert toks[0].value == "a" * MAX_IDENT_LENGTH
    # The rest of the run becomes the next identifier
    assert toks[1].type == TokenType.IDENT
    assert toks[1].value == "a" * 5
    assert toks[1].pos == MAX_IDENT_LENGTH


def test_lex_underscore_is_not_part_of_identifier():
    toks = tokenize("foo_bar")
    assert [t.type for t in toks] == [
        TokenType.IDENT, TokenType.OTHER, TokenType.IDENT, TokenType.EOF
    ]


def test_lex_unknown_characters_become_other_tokens():
    toks = tokenize("1 $ 2")
    assert toks[1].type == TokenType.OTHER
    assert toks[1].value == '$'
    assert toks[1].pos == 2


def test_lex_lone_dot_makes_progress():
    toks = tokenize(". .")
    assert [(t.type, t.value, t.pos) for t in toks] == [
        (TokenType.OTHER, '.', 0),
        (TokenType.OTHER, '.', 2),
        (TokenType.EOF, None, 3),
    ]


def test_lex_vertical_tab_and_form_feed_are_whitespace():
    assert types_of("\v1\f") == [TokenType.NUMBER, TokenType.EOF]


@pytest.mark.parametrize("ch", ["\x1c", "\x85", "\u00a0", "\u2003", "\u3000"])
def test_lex_other_space_like_characters_are_not_whitespace(ch):
    toks = tokenize(ch + "1")
    assert (toks[0].type, toks[0].value, toks[0].pos) == (TokenType.OTHER, ch, 0)
    assert toks[1].type == TokenType.NUMBER


def test_lex_non_ascii_digits_are_not_numbers():
    toks = tokenize("٣")  # ARABIC-INDIC DIGIT THREE
    assert toks[0].type == TokenType.OTHER


def test_lexer_class_matches_helper():
    assert Lexer("1+2").tokenize() == tokenize("1+2")


def test_token_describe():
    assert Token(TokenType.NUMBER, 2.5, 0).describe() == '2.5'
    assert Token(TokenType.RPAREN, None, 0).describe() == ')'
    assert Token(TokenType.OTHER, '$', 0).describe() == '$'
    assert Token(TokenType.EOF, None, 0).describe() == 'end of input'
