'''
Infix expression parser and evaluator.

Parsing is precedence climbing over the lexer's tokens; evaluation walks the
resulting tree. Button-driven arithmetic lives in the machine and does *not*
go through here: it is strictly left to right.
'''

from collections import namedtuple

from .util import ExpressionSyntaxError
from .lexer import TokenKind, tokenize
from .functions import AngleMode, Constant, arithmetic, call, finite


Literal = namedtuple('Literal', 'value')
UnaryOp = namedtuple('UnaryOp', 'op operand')
BinaryOp = namedtuple('BinaryOp', 'op left right')
Call = namedtuple('Call', 'function args')


class Parser:
    '''
    Precedence climbing parser, one instance per token sequence.
    '''

    # Binding strength of binary operators; unary minus and calls bind
    # tighter than all of these.
    PRECEDENCE = {
        '+': 1,
        '-': 1,
        '*': 2,
        '/': 2,
        '%': 2,
        '^': 3,
    }
    RIGHT_ASSOCIATIVE = {'^'}

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.position = 0

    def parse(self):
        '''
        Parse all tokens into a single expression tree.
        '''
        if not self.tokens:
            raise ExpressionSyntaxError('Empty expression')
        tree = self._expression(1)
        token = self._peek()
        if token is not None:
            if token.kind is TokenKind.RPAREN:
                raise ExpressionSyntaxError('Unbalanced parentheses')
            raise ExpressionSyntaxError('Unexpected {}'.format(
                getattr(token.value, 'value', token.value)))
        return tree

    def _peek(self):
        if self.position < len(self.tokens):
            return self.tokens[self.position]
        return None

    def _advance(self):
        token = self._peek()
        self.position += 1
        return token

    def _expect(self, kind, message):
        token = self._peek()
        if token is None or token.kind is not kind:
            raise ExpressionSyntaxError(message)
        return self._advance()

    def _implicit_product(self, token):
        '''
        Return True if token directly follows an operand it multiplies.

        2(3), (1)(2) and (2)3.
        '''
        previous = self.tokens[self.position - 1]
        if token.kind is TokenKind.LPAREN:
            return previous.kind in (TokenKind.NUMBER, TokenKind.RPAREN)
        return token.kind is TokenKind.NUMBER and \
            previous.kind is TokenKind.RPAREN

    def _expression(self, min_precedence):
        left = self._unary()
        while True:
            token = self._peek()
            if token is None:
                break
            if token.kind is TokenKind.OPERATOR:
                op, implicit = token.value, False
            elif self._implicit_product(token):
                op, implicit = '*', True
            else:
                break
            precedence = type(self).PRECEDENCE[op]
            if precedence < min_precedence:
                break
            if not implicit:
                self._advance()
            if op in type(self).RIGHT_ASSOCIATIVE:
                right = self._expression(precedence)
            else:
                right = self._expression(precedence + 1)
            left = BinaryOp(op, left, right)
        return left

    def _unary(self):
        token = self._peek()
        if token is not None and token.kind is TokenKind.OPERATOR \
           and token.value in '+-':
            self._advance()
            return UnaryOp(token.value, self._unary())
        return self._primary()

    def _primary(self):
        token = self._advance()
        if token is None:
            raise ExpressionSyntaxError('Missing operand')
        if token.kind is TokenKind.NUMBER:
            return Literal(token.value)
        if token.kind is TokenKind.LPAREN:
            inner = self._expression(1)
            self._expect(TokenKind.RPAREN, 'Unbalanced parentheses')
            return inner
        if token.kind is TokenKind.IDENTIFIER:
            if isinstance(token.value, Constant):
                return Literal(token.value.number)
            return self._call(token.value)
        raise ExpressionSyntaxError('Missing operand')

    def _call(self, function):
        self._expect(TokenKind.LPAREN,
                     "Missing '(' after {}".format(function.value))
        args = [self._expression(1)]
        while self._peek() is not None and \
                self._peek().kind is TokenKind.COMMA:
            self._advance()
            args.append(self._expression(1))
        self._expect(TokenKind.RPAREN, 'Unbalanced parentheses')
        if len(args) != function.arity:
            raise ExpressionSyntaxError('{} takes {} argument(s)'.format(
                function.value, function.arity))
        return Call(function, args)


class Evaluator:
    '''
    Walk an expression tree down to a float.
    '''

    def __init__(self, angle_mode=AngleMode.DEGREES):
        self.angle_mode = angle_mode

    def evaluate(self, node):
        return self._VISITORS[type(node)](self, node)

    def _literal(self, node):
        return node.value

    def _unary(self, node):
        operand = self.evaluate(node.operand)
        return -operand if node.op == '-' else operand

    def _binary(self, node):
        return arithmetic(node.op,
                          self.evaluate(node.left),
                          self.evaluate(node.right))

    def _call(self, node):
        args = [self.evaluate(arg) for arg in node.args]
        return call(node.function, args, angle_mode=self.angle_mode)

    _VISITORS = {
        Literal: _literal,
        UnaryOp: _unary,
        BinaryOp: _binary,
        Call: _call,
    }


def evaluate(tokens, angle_mode=AngleMode.DEGREES):
    '''
    Evaluate a token sequence, returning a finite float.

    :raises CalcError: on malformed expressions and numeric failures.
    '''
    tree = Parser(tokens).parse()
    return finite(Evaluator(angle_mode).evaluate(tree))


def evaluate_text(text, angle_mode=AngleMode.DEGREES):
    return evaluate(tokenize(text), angle_mode)


__all__ = 'Parser', 'Evaluator', 'evaluate', 'evaluate_text', \
    'Literal', 'UnaryOp', 'BinaryOp', 'Call'
