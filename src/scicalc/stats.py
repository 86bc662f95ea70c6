import statistics
import math

from .util import InsufficientDataError


class Statistics:
    '''
    Dataset for the statistics keys, in entry order.

    Spread uses the sample (n - 1) formulas.
    '''

    def __init__(self):
        self.data = []

    def add(self, value):
        self.data.append(float(value))

    def clear(self):
        self.data.clear()

    def count(self):
        return len(self.data)

    def sum(self):
        if not self.data:
            raise InsufficientDataError('No data')
        return math.fsum(self.data)

    def mean(self):
        if not self.data:
            raise InsufficientDataError('No data')
        return statistics.fmean(self.data)

    def variance(self):
        if len(self.data) < 2:
            raise InsufficientDataError('Need 2+ values')
        return statistics.variance(self.data)

    def stddev(self):
        if len(self.data) < 2:
            raise InsufficientDataError('Need 2+ values')
        return statistics.stdev(self.data)
