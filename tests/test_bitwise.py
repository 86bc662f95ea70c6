'''
64-bit register and base conversion tests
'''

from scicalc import bitwise
from scicalc.bitwise import NumberBase, format_base, parse_base, to_int64
from scicalc.util import NumericOverflowError, RangeError

from pytest import mark, raises


SAMPLES = [0, 1, -1, 2, 5, -5, 0x5555, bitwise.MAX, bitwise.MIN,
           0x0123456789ABCDEF, -0x7EDCBA9876543210]


@mark.parametrize('x', SAMPLES)
def test_rotations_invert(x):
    assert bitwise.rotate_left(bitwise.rotate_right(x)) == x
    assert bitwise.rotate_right(bitwise.rotate_left(x)) == x


@mark.parametrize('x', SAMPLES)
def test_not_inverts(x):
    assert bitwise.bit_not(bitwise.bit_not(x)) == x


@mark.parametrize('x', SAMPLES)
def test_bit_counts_complement(x):
    assert bitwise.bit_count(x) + bitwise.bit_count(bitwise.bit_not(x)) == 64


@mark.parametrize('x', SAMPLES)
def test_results_stay_signed_64_bit(x):
    for op in bitwise.UNARY.values():
        assert bitwise.MIN <= op(x) <= bitwise.MAX
    for op in bitwise.BINARY.values():
        assert bitwise.MIN <= op(x, -x) <= bitwise.MAX


def test_rotations_carry_around():
    assert bitwise.rotate_left(bitwise.MIN) == 1
    assert bitwise.rotate_right(1) == bitwise.MIN
    assert bitwise.rotate_left(-1) == -1


def test_shifts():
    assert bitwise.shift_left(5) == 10
    assert bitwise.shift_left(bitwise.MAX) == -2
    assert bitwise.shift_right(10) == 5
    assert bitwise.shift_right(-10) == -5
    assert bitwise.shift_right(-1) == -1


def test_logic():
    assert bitwise.bit_and(0b1100, 0b1010) == 0b1000
    assert bitwise.bit_or(0b1100, 0b1010) == 0b1110
    assert bitwise.bit_xor(0b1100, 0b1010) == 0b0110
    assert bitwise.bit_nand(0b1100, 0b1010) == ~0b1000
    assert bitwise.bit_nor(0b1100, 0b1010) == ~0b1110
    assert bitwise.bit_xnor(0b1100, 0b1010) == ~0b0110
    assert bitwise.bit_not(0) == -1


def test_twos_complement():
    assert bitwise.twos_complement(5) == -5
    assert bitwise.twos_complement(-5) == 5
    assert bitwise.twos_complement(bitwise.MIN) == bitwise.MIN


def test_bit_count():
    assert bitwise.bit_count(0) == 0
    assert bitwise.bit_count(0b1011) == 3
    assert bitwise.bit_count(-1) == 64


def test_ascii():
    assert bitwise.ascii_char(65) == 'A'
    assert bitwise.ascii_char(0) == '\0'
    with raises(RangeError):
        bitwise.ascii_char(128)
    with raises(RangeError):
        bitwise.ascii_char(-1)


def test_to_int64_truncates():
    assert to_int64(2.9) == 2
    assert to_int64(-2.9) == -2
    assert to_int64(-2.0 ** 63) == bitwise.MIN


def test_to_int64_keeps_ints_exact():
    assert to_int64(bitwise.MAX) == bitwise.MAX
    assert to_int64(bitwise.MIN) == bitwise.MIN
    with raises(NumericOverflowError):
        to_int64(bitwise.MAX + 1)
    with raises(NumericOverflowError):
        to_int64(10 ** 400)


@mark.parametrize('value', [2.0 ** 63, -2.0 ** 63 - 2 ** 11, 1e300,
                            float('inf'), float('nan')])
def test_to_int64_refuses_out_of_range(value):
    with raises(NumericOverflowError):
        to_int64(value)


@mark.parametrize('n, base, text', [
    (255, NumberBase.HEX, 'FF'),
    (255, NumberBase.OCT, '377'),
    (5, NumberBase.BIN, '101'),
    (-5, NumberBase.DEC, '-5'),
    (-1, NumberBase.HEX, 'F' * 16),
    (-1, NumberBase.BIN, '1' * 64),
    (bitwise.MIN, NumberBase.OCT, '1' + '0' * 21),
])
def test_format_base(n, base, text):
    assert format_base(n, base) == text
    assert parse_base(text, base) == n


@mark.parametrize('x', SAMPLES)
def test_base_round_trip(x):
    for base in NumberBase:
        assert parse_base(format_base(x, base), base) == x


def test_parse_base_refuses_wide_values():
    with raises(NumericOverflowError):
        parse_base('1' + '0' * 64, NumberBase.BIN)
    with raises(NumericOverflowError):
        parse_base(str(2 ** 63), NumberBase.DEC)


def test_digits_per_base():
    assert NumberBase.BIN.digits == '01'
    assert NumberBase.HEX.digits == '0123456789ABCDEF'
    assert NumberBase.BIN.max_digits == 64
    assert NumberBase.OCT.max_digits == 22
    assert NumberBase.HEX.max_digits == 16
