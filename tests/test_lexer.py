'''
Expression lexer tests
'''

import regex

from scicalc.util import LexError
from scicalc.lexer import Lexer, Token, TokenKind
from scicalc.functions import Constant, Function

from pytest import raises


def kinds(tokens):
    return [token.kind for token in tokens]


def test_numbers():
    l = Lexer()
    tokens = l.tokenize('1 1.5 .25 3. 1_200 2.5e-3 1E3')
    assert [t.value for t in tokens] == [1, 1.5, .25, 3, 1200, 2.5e-3, 1000]
    assert set(kinds(tokens)) == {TokenKind.NUMBER}


def test_operators_and_punctuation():
    l = Lexer()
    tokens = l.tokenize('(1+2)*3-4/5^6%7,')
    assert kinds(tokens) == [
        TokenKind.LPAREN, TokenKind.NUMBER, TokenKind.OPERATOR,
        TokenKind.NUMBER, TokenKind.RPAREN, TokenKind.OPERATOR,
        TokenKind.NUMBER, TokenKind.OPERATOR, TokenKind.NUMBER,
        TokenKind.OPERATOR, TokenKind.NUMBER, TokenKind.OPERATOR,
        TokenKind.NUMBER, TokenKind.OPERATOR, TokenKind.NUMBER,
        TokenKind.COMMA,
    ]


def test_typographic_operators():
    l = Lexer()
    tokens = l.tokenize('6 × 2 ÷ 3 − 1')
    assert [t.value for t in tokens if t.kind is TokenKind.OPERATOR] == \
        ['*', '/', '-']


def test_identifiers_resolve_case_insensitively():
    l = Lexer()
    assert l.tokenize('SQRT Sin nPr NCR fact Pi π e') == [
        Token(TokenKind.IDENTIFIER, Function.SQRT),
        Token(TokenKind.IDENTIFIER, Function.SIN),
        Token(TokenKind.IDENTIFIER, Function.NPR),
        Token(TokenKind.IDENTIFIER, Function.NCR),
        Token(TokenKind.IDENTIFIER, Function.FACTORIAL),
        Token(TokenKind.IDENTIFIER, Constant.PI),
        Token(TokenKind.IDENTIFIER, Constant.PI),
        Token(TokenKind.IDENTIFIER, Constant.E),
    ]


def test_lone_e_is_the_constant():
    l = Lexer()
    assert l.tokenize('2e') == [Token(TokenKind.NUMBER, 2.0),
                                Token(TokenKind.IDENTIFIER, Constant.E)]


def test_whitespace_is_skipped():
    l = Lexer()
    assert l.tokenize('  1 \t+\n2 ') == l.tokenize('1+2')


def test_empty_line():
    assert Lexer().tokenize('') == []


def test_unknown_character():
    l = Lexer()
    with raises(LexError, match=regex.escape("Couldn't lex $")):
        l.tokenize('1 + $2')


def test_unknown_name():
    l = Lexer()
    with raises(LexError, match='Unknown name foo'):
        l.tokenize('foo(2)')
