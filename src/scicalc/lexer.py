from collections import namedtuple
from enum import Enum
from functools import reduce
import operator

import regex

from .util import LexError
from .functions import Constant, Function


class TokenKind(Enum):
    NUMBER = 'number'
    IDENTIFIER = 'identifier'
    OPERATOR = 'operator'
    LPAREN = 'lparen'
    RPAREN = 'rparen'
    COMMA = 'comma'


Token = namedtuple('Token', 'kind value')


class Lexer:
    '''
    Lexer for the infix expression *regular* grammar.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Run of digits, optionally split by underscores: 1, 12, 1_200.
    DIGITS = r'''
              (?:
                  \d+
                  (?:
                      _\d+
                  )*
              )
              '''
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              (?:
                  (?:
                      # 1, 1_200, 1. (notice trailing dot), 1.3
                      {DIGITS}
                      (?:
                          \.
                          {DIGITS}?
                      )?
                  )|(?:
                      # .2
                      \.
                      {DIGITS}
                  )
              )
              # 1e5, 2.5E-3; a lone e is the constant, not an exponent.
              (?:
                  [eE]
                  [+-]?
                  \d+
              )?
              '''.format(DIGITS=DIGITS)
    IDENTIFIER = r'\p{L}+'

    # Typographic operators, as pasted from elsewhere.
    OPERATOR_ALIASES = {
        '\N{MULTIPLICATION SIGN}': '*',
        '\N{DIVISION SIGN}': '/',
        '\N{MINUS SIGN}': '-',
    }
    OPERATORS = '+-*/^%'
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      [*OPERATORS, *OPERATOR_ALIASES])) + r')'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<lparen>\()|' \
             r'(?<rparen>\))|' \
             r'(?<comma>,)|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    # Identifiers, lowercased, to what they name.
    NAMES = {
        **{function.value: function for function in Function},
        **{constant.value: constant for constant in Constant},
        'fact': Function.FACTORIAL,
        '\N{GREEK SMALL LETTER PI}': Constant.PI,
    }

    def lex(self, line):
        '''
        Take a line and yield all lexeme matches.

        Raises LexError on the first character no lexeme matches.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            if match is None:
                raise LexError("Couldn't lex {0}".format(line[0]))
            yield match
            line = line[len(match.group(0)):]

    def isfeedable(self, match):
        '''
        Return True if lexeme becomes a token (i.e., isn't whitespace).
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the top-level groups the lexeme matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value and key in self._KINDS}

    def token(self, match):
        '''
        Convert a lexeme match into a Token.
        '''
        (kind, text), = self.matchedgroups(match).items()
        kind = TokenKind(kind)
        if kind is TokenKind.NUMBER:
            return Token(kind, float(text))
        elif kind is TokenKind.IDENTIFIER:
            try:
                return Token(kind, type(self).NAMES[text.lower()])
            except KeyError:
                raise LexError('Unknown name {}'.format(text)) from None
        elif kind is TokenKind.OPERATOR:
            return Token(kind, type(self).OPERATOR_ALIASES.get(text, text))
        return Token(kind, text)

    def tokenize(self, line):
        '''
        Take a line and return its tokens, whitespace dropped.
        '''
        return [self.token(match)
                for match
                in self.lex(line)
                if self.isfeedable(match)]

    _KINDS = {kind.value for kind in TokenKind} | {'space'}


def tokenize(text):
    return Lexer().tokenize(text)
