'''
Exact 64-bit integer logic and number base rendering.

Values are Python ints kept in the signed 64-bit range; everything wraps
around like a machine register would.
'''

from enum import Enum
import math

from .util import NumericOverflowError, RangeError


WIDTH = 64
MASK = (1 << WIDTH) - 1
MIN = -(1 << (WIDTH - 1))
MAX = (1 << (WIDTH - 1)) - 1


class NumberBase(Enum):
    DEC = 10
    BIN = 2
    OCT = 8
    HEX = 16

    @property
    def digits(self):
        '''
        Characters that may be typed in this base.
        '''
        return '0123456789ABCDEF'[:self.value]

    @property
    def max_digits(self):
        '''
        Longest literal that still fits a register.
        '''
        return math.ceil(WIDTH / math.log2(self.value))


def signed(n):
    '''
    Wrap an arbitrary int into the signed 64-bit range.
    '''
    n &= MASK
    return n - (1 << WIDTH) if n > MAX else n


def to_int64(value):
    '''
    Truncate a number to a signed 64-bit int, refusing out-of-range values.

    Ints are taken as they are; floats lose their fraction.
    '''
    if isinstance(value, float) and not math.isfinite(value) or \
       not MIN <= value < MAX + 1:
        raise NumericOverflowError('Out of 64-bit range')
    return int(value)


def bit_not(x):
    return signed(~x)


def bit_and(x, y):
    return signed(x & y)


def bit_or(x, y):
    return signed(x | y)


def bit_xor(x, y):
    return signed(x ^ y)


def bit_nand(x, y):
    return bit_not(x & y)


def bit_nor(x, y):
    return bit_not(x | y)


def bit_xnor(x, y):
    return bit_not(x ^ y)


def shift_left(x):
    return signed(x << 1)


def shift_right(x):
    '''
    Arithmetic shift; the sign bit is kept.
    '''
    return x >> 1


def rotate_left(x):
    u = x & MASK
    return signed((u << 1) | (u >> (WIDTH - 1)))


def rotate_right(x):
    u = x & MASK
    return signed((u >> 1) | (u << (WIDTH - 1)))


def twos_complement(x):
    return signed(~x + 1)


def bit_count(x):
    return bin(x & MASK).count('1')


def ascii_char(x):
    if not 0 <= x <= 127:
        raise RangeError('ASCII is 0 to 127')
    return chr(x)


# Unary register operations, by key.
UNARY = {
    'NOT': bit_not,
    '<<': shift_left,
    '>>': shift_right,
    'ROL': rotate_left,
    'ROR': rotate_right,
    "2's": twos_complement,
    'BitCount': bit_count,
}

# Binary register operations, by key.
BINARY = {
    'AND': bit_and,
    'OR': bit_or,
    'XOR': bit_xor,
    'NAND': bit_nand,
    'NOR': bit_nor,
    'XNOR': bit_xnor,
}


def format_base(n, base):
    '''
    Render n in base: signed decimal, or the raw two's complement pattern.
    '''
    if base is NumberBase.DEC:
        return str(n)
    return format(n & MASK, {
        NumberBase.BIN: 'b',
        NumberBase.OCT: 'o',
        NumberBase.HEX: 'X',
    }[base])


def parse_base(text, base):
    '''
    Inverse of format_base.
    '''
    if base is NumberBase.DEC:
        n = int(text)
        if not MIN <= n <= MAX:
            raise NumericOverflowError('Out of 64-bit range')
        return n
    n = int(text, base.value)
    if n > MASK:
        raise NumericOverflowError('Out of 64-bit range')
    return signed(n)
