'''
Statistics accumulator tests
'''

from scicalc.stats import Statistics
from scicalc.util import InsufficientDataError

from pytest import approx, raises


def filled(*values):
    statistics = Statistics()
    for value in values:
        statistics.add(value)
    return statistics


def test_summary():
    s = filled(2, 4, 4, 4, 5, 5, 7, 9)
    assert s.count() == 8
    assert s.sum() == 40
    assert s.mean() == 5.0
    assert s.variance() == approx(32 / 7)
    assert s.stddev() == approx(2.138, abs=1e-3)


def test_keeps_entry_order():
    assert filled(3, 1, 2).data == [3, 1, 2]


def test_one_value():
    s = filled(42)
    assert s.mean() == 42
    with raises(InsufficientDataError):
        s.stddev()
    with raises(InsufficientDataError):
        s.variance()


def test_empty():
    s = Statistics()
    assert s.count() == 0
    with raises(InsufficientDataError, match='No data'):
        s.sum()
    with raises(InsufficientDataError, match='No data'):
        s.mean()


def test_clear():
    s = filled(1, 2)
    s.clear()
    assert s.count() == 0
