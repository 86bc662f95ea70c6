'''
Big factorial tests
'''

import math

from scicalc.bigfact import LIMIT, big_factorial, render
from scicalc.util import DomainError, RangeError

from pytest import mark, raises


def test_small():
    assert [big_factorial(n) for n in range(6)] == [1, 1, 2, 6, 24, 120]


def test_matches_math():
    assert big_factorial(500) == math.factorial(500)


def test_two_hundred():
    digits = str(big_factorial(200))
    assert len(digits) == 375
    assert digits.startswith('788657867364790503')


def test_accepts_integral_floats():
    assert big_factorial(10.0) == 3628800


@mark.parametrize('n', [-1, LIMIT + 1])
def test_out_of_range(n):
    with raises(RangeError):
        big_factorial(n)


def test_non_integer():
    with raises(DomainError):
        big_factorial(2.5)


def test_render_groups():
    assert render(big_factorial(10)) == '3,628,800'
    assert render(120) == '120'
    assert render(1) == '1'


def test_render_wraps_on_groups():
    text = render(big_factorial(200), groups_per_line=10)
    lines = text.split('\n')
    assert all(line.endswith(',') for line in lines[:-1])
    assert all(len(line.split(',')) <= 11 for line in lines)
    assert ''.join(lines).replace(',', '') == str(big_factorial(200))


def test_render_past_str_digit_limit():
    value = 10 ** 5000
    text = render(value, groups_per_line=1000)
    assert text.replace(',', '').replace('\n', '') == '1' + '0' * 5000


def test_limit_is_accepted():
    # Slow by nature: 100000! has 456574 digits, 24999 of them trailing zeros.
    value = big_factorial(LIMIT)
    assert value % 10 ** 24999 == 0
    assert value % 10 ** 25000 != 0
