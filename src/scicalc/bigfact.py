'''
Factorials too large for a float.
'''

from contextlib import contextmanager
import sys

from .util import DomainError, RangeError


LIMIT = 100000
GROUPS_PER_LINE = 20


def big_factorial(n):
    '''
    Return n! as an int, for 0 <= n <= LIMIT.

    A plain running product; Python ints never narrow. Near LIMIT this takes
    seconds, not milliseconds.
    '''
    if not float(n).is_integer():
        raise DomainError('Factorial needs an integer')
    n = int(n)
    if not 0 <= n <= LIMIT:
        raise RangeError('Factorial needs 0 to {}'.format(LIMIT))
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


@contextmanager
def _unlimited_digits():
    '''
    Lift the interpreter's int to str conversion limit for the block.
    '''
    limit = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(0)
    try:
        yield
    finally:
        sys.set_int_max_str_digits(limit)


def render(value, groups_per_line=GROUPS_PER_LINE):
    '''
    Thousands-separated digits of value, wrapped every groups_per_line groups.

    Lines break after a comma, so joining them back gives the grouped number.
    Converting the largest factorials to decimal takes a few seconds; the
    caller blocks until the whole text is ready.
    '''
    with _unlimited_digits():
        groups = format(value, ',').split(',')
    return ',\n'.join(','.join(groups[i:i + groups_per_line])
                      for i in range(0, len(groups), groups_per_line))
