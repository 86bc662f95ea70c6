'''
Functions, constants and checked arithmetic shared by the expression evaluator
and the calculator buttons.
'''

from enum import Enum
import operator
import math

from .util import (DivisionByZero, DomainError, NumericOverflowError,
                   RangeError, wrap_user_errors)


# Largest n for which n! still fits a float.
FACTORIAL_LIMIT = 170


class AngleMode(Enum):
    DEGREES = 'DEG'
    RADIANS = 'RAD'


class Function(Enum):
    '''
    Every function the calculator knows, by canonical (lowercase) name.
    '''
    SQRT = 'sqrt'
    SIN = 'sin'
    COS = 'cos'
    TAN = 'tan'
    ASIN = 'asin'
    ACOS = 'acos'
    ATAN = 'atan'
    SINH = 'sinh'
    COSH = 'cosh'
    TANH = 'tanh'
    LOG = 'log'
    LN = 'ln'
    ABS = 'abs'
    FACTORIAL = 'factorial'
    NPR = 'npr'
    NCR = 'ncr'

    @property
    def arity(self):
        return 2 if self in (Function.NPR, Function.NCR) else 1


class Constant(Enum):
    PI = 'pi'
    E = 'e'

    @property
    def number(self):
        return _CONSTANTS[self]


_CONSTANTS = {
    Constant.PI: math.pi,
    Constant.E: math.e,
}


def finite(value):
    '''
    Return value, or raise if it is infinite or NaN.
    '''
    if math.isnan(value):
        raise DomainError('Invalid')
    if math.isinf(value):
        raise NumericOverflowError('Overflow')
    return value


def _integral(x, name):
    if not float(x).is_integer() or x < 0:
        raise DomainError('{} needs a non-negative integer'.format(name))
    return int(x)


def factorial(x):
    n = _integral(x, 'Factorial')
    if n > FACTORIAL_LIMIT:
        raise RangeError('Factorial limit is {}'.format(FACTORIAL_LIMIT))
    return float(math.factorial(n))


def _combinatorial_args(n, r, name):
    if not (float(n).is_integer() and float(r).is_integer()):
        raise DomainError('{} needs integers'.format(name))
    n, r = int(n), int(r)
    if not 0 <= r <= n <= FACTORIAL_LIMIT:
        raise RangeError('{} needs 0 <= r <= n <= {}'.format(
            name, FACTORIAL_LIMIT))
    return n, r


def permutation(n, r):
    '''
    nPr, as the exact ratio n! / (n - r)!.
    '''
    n, r = _combinatorial_args(n, r, 'nPr')
    return float(math.factorial(n) // math.factorial(n - r))


def combination(n, r):
    '''
    nCr, as the exact ratio n! / (r! (n - r)!).
    '''
    n, r = _combinatorial_args(n, r, 'nCr')
    return float(math.factorial(n) //
                 (math.factorial(r) * math.factorial(n - r)))


def sqrt(x):
    if x < 0:
        raise DomainError('Square root of negative')
    return math.sqrt(x)


def log10(x):
    if x <= 0:
        raise DomainError('Log of non-positive')
    return math.log10(x)


def ln(x):
    if x <= 0:
        raise DomainError('Log of non-positive')
    return math.log(x)


def divide(a, b):
    if b == 0:
        raise DivisionByZero('Division by zero')
    return a / b


def modulo(a, b):
    if b == 0:
        raise DivisionByZero('Division by zero')
    return math.fmod(a, b)


@wrap_user_errors('Invalid power')
def power(a, b):
    return math.pow(a, b)


@wrap_user_errors('Invalid root')
def root(a, b):
    '''
    The b-th root of a. Odd integral roots of negative numbers are real.
    '''
    if b == 0:
        raise DomainError('Zeroth root')
    if a < 0 and float(b).is_integer() and int(b) % 2:
        return -math.pow(-a, 1 / b)
    return math.pow(a, 1 / b)


def reciprocal(x):
    return divide(1.0, x)


# Binary arithmetic operators, by expression symbol.
ARITHMETIC = {
    '+': operator.__add__,
    '-': operator.__sub__,
    '*': operator.__mul__,
    '/': divide,
    '%': modulo,
    '^': power,
}


def _plain(f):
    '''
    Adapt an angle-agnostic function to the calling convention of IMPLEMENTATIONS.
    '''
    def wrapped(*args, angle_mode=None):
        return f(*args)
    wrapped.__name__ = f.__name__
    wrapped.__doc__ = f.__doc__
    return wrapped


def _trig(f):
    def wrapped(x, angle_mode=AngleMode.RADIANS):
        return f(math.radians(x) if angle_mode is AngleMode.DEGREES else x)
    wrapped.__name__ = f.__name__
    return wrapped


def _inv_trig(f):
    def wrapped(x, angle_mode=AngleMode.RADIANS):
        result = f(x)
        return math.degrees(result) if angle_mode is AngleMode.DEGREES \
            else result
    wrapped.__name__ = f.__name__
    return wrapped


IMPLEMENTATIONS = {
    Function.SQRT: _plain(sqrt),
    Function.SIN: _trig(math.sin),
    Function.COS: _trig(math.cos),
    Function.TAN: _trig(math.tan),
    Function.ASIN: _inv_trig(math.asin),
    Function.ACOS: _inv_trig(math.acos),
    Function.ATAN: _inv_trig(math.atan),
    Function.SINH: _plain(math.sinh),
    Function.COSH: _plain(math.cosh),
    Function.TANH: _plain(math.tanh),
    Function.LOG: _plain(log10),
    Function.LN: _plain(ln),
    Function.ABS: _plain(abs),
    Function.FACTORIAL: _plain(factorial),
    Function.NPR: _plain(permutation),
    Function.NCR: _plain(combination),
}


@wrap_user_errors('Invalid input for {0.value}')
def call(function, args, angle_mode=AngleMode.DEGREES):
    '''
    Apply function to args, honouring angle_mode for trigonometry.

    The result is always finite.
    '''
    return finite(IMPLEMENTATIONS[function](*args, angle_mode=angle_mode))


@wrap_user_errors('Invalid operands for {0}')
def arithmetic(symbol, a, b):
    '''
    Apply a binary arithmetic operator. The result is always finite.
    '''
    return finite(ARITHMETIC[symbol](a, b))
