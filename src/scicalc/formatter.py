'''
Render floats for the calculator display.

Formatting never fails: values a notation can't show degrade to an error
token.
'''

from decimal import Decimal, ROUND_HALF_EVEN
from enum import Enum
import math


OVERFLOW = 'Error: Overflow'
INVALID = 'Error: Invalid'

DEFAULT_PRECISION = 18
# Regular notation switches to scientific outside these magnitudes.
REGULAR_MAX = 1e15
REGULAR_MIN = 1e-9
FIXED_DIGITS = 6
SCIENTIFIC_DIGITS = 12
ENGINEERING_DIGITS = 9


class DisplayFormat(Enum):
    REGULAR = 'Regular'
    FIXED = 'Fixed'
    SCIENTIFIC = 'Scientific'
    ENGINEERING = 'Engineer'
    TRIADS = 'Triads'


def _strip_zeros(text):
    '''
    Drop insignificant trailing zeros (and a bare trailing point).
    '''
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def _shortest(value, precision):
    '''
    Shortest decimal string that reads back as value, to precision digits.
    '''
    if precision >= 17:
        # repr already is the shortest round-tripping form.
        return repr(value)
    return format(value, '.{}g'.format(precision))


def _regular(value, precision):
    number = Decimal(_shortest(value, precision))
    magnitude = abs(value)
    if magnitude >= REGULAR_MAX or 0 < magnitude < REGULAR_MIN:
        return format(number.normalize(), 'e')
    return _strip_zeros(format(number, 'f'))


def _fixed(value, precision, grouping=''):
    if abs(value) >= 10 ** precision:
        return OVERFLOW
    return format(value, '{}.{}f'.format(grouping, FIXED_DIGITS))


def _scientific(value, precision):
    return format(value, '.{}e'.format(SCIENTIFIC_DIGITS))


def _engineering(value, precision):
    '''
    Scientific notation with the exponent floored to a multiple of 3.
    '''
    if value == 0:
        return '0e0'
    number = Decimal(_shortest(abs(value), precision))
    exponent = number.adjusted() // 3 * 3
    quantum = Decimal(1).scaleb(-ENGINEERING_DIGITS)
    mantissa = number.scaleb(-exponent).quantize(quantum, ROUND_HALF_EVEN)
    if mantissa >= 1000:
        # Rounding carried into the next group: 999.9999999996e3
        exponent += 3
        mantissa = number.scaleb(-exponent).quantize(quantum, ROUND_HALF_EVEN)
    sign = '-' if value < 0 else ''
    return '{}{}e{}'.format(sign, _strip_zeros(format(mantissa, 'f')),
                            exponent)


def _triads(value, precision):
    return _fixed(value, precision, grouping=',')


_FORMATTERS = {
    DisplayFormat.REGULAR: _regular,
    DisplayFormat.FIXED: _fixed,
    DisplayFormat.SCIENTIFIC: _scientific,
    DisplayFormat.ENGINEERING: _engineering,
    DisplayFormat.TRIADS: _triads,
}


def format_number(value, mode=DisplayFormat.REGULAR,
                  precision=DEFAULT_PRECISION):
    '''
    Format value in the given display notation.

    >>> format_number(123456789.123, DisplayFormat.TRIADS)
    '123,456,789.123000'
    '''
    if math.isnan(value):
        return INVALID
    if math.isinf(value):
        return OVERFLOW
    if value == 0:
        # No negative zero on a calculator.
        value = 0.0
    return _FORMATTERS[mode](float(value), precision)
