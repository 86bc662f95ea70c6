'''
Calculator state machine.

Owns all calculator state and turns key events into display strings.
'''

from collections import namedtuple
from enum import Enum
from functools import partial, wraps
import logging

from .util import CalcError, NumericOverflowError
from .functions import (AngleMode, Constant, Function, FACTORIAL_LIMIT,
                        arithmetic, call, combination, finite, permutation,
                        reciprocal, root)
from .formatter import DisplayFormat, OVERFLOW, format_number
from .bitwise import NumberBase, ascii_char, format_base, parse_base, to_int64
from .bigfact import big_factorial, render
from .stats import Statistics
from .parser import evaluate_text
from . import bitwise


log = logging.getLogger(__name__)


class State(Enum):
    ENTERING = 'entering'
    HAVE_OPERATOR = 'have operator'
    SHOWING_RESULT = 'showing result'
    SHOWING_ERROR = 'showing error'


StatusFlags = namedtuple('StatusFlags',
                         'angle_mode number_base display_format memory error')


def _not_in_error(f):
    '''
    Make a key do nothing while an error is displayed.
    '''
    @wraps(f)
    def wrapper(self, *args):
        if self.state is State.SHOWING_ERROR:
            log.debug('Ignoring %s while showing an error', f.__name__)
            return None
        return f(self, *args)
    return wrapper


def _function_key(function):
    def wrapped(x, angle_mode):
        return call(function, [x], angle_mode=angle_mode)
    return wrapped


class Machine:
    '''
    Button-driven calculator (the engine behind the keypad).

    Binary operators chain strictly left to right, as on a pocket calculator;
    precedence only applies to text fed to evaluate_expression.
    '''

    DEFAULT_ANGLE_MODE = AngleMode.DEGREES
    DEFAULT_BASE = NumberBase.DEC
    DEFAULT_FORMAT = DisplayFormat.REGULAR
    PRECISION = 18
    # Significant digits accepted while typing a decimal literal.
    MAX_DIGITS = 18

    def __init__(self, angle_mode=None, number_base=None, display_format=None,
                 precision=None):
        '''
        Create a cleared calculator.

        Modes not given take the class defaults.
        '''
        cls = type(self)
        self.angle_mode = angle_mode or cls.DEFAULT_ANGLE_MODE
        self.number_base = number_base or cls.DEFAULT_BASE
        self.display_format = display_format or cls.DEFAULT_FORMAT
        self.precision = precision or cls.PRECISION
        self.memory = 0.0
        self.statistics = Statistics()
        self.last_valid_result = 0.0
        self._reset()

    def _reset(self):
        self.accumulator = 0.0
        # Left operand of the pending operator.
        self.operand = 0.0
        self.pending = None
        # True once a right operand was given for the pending operator.
        self.operand_ready = False
        # Literal being typed, as typed.
        self.entry = ''
        self.error = None
        # Non-numeric text shown instead of the accumulator.
        self.message = None
        self.state = State.ENTERING

    # External interface

    def submit_token(self, event):
        '''
        Run one key event and return the new display string.

        Calculation errors put the machine into its error state; unknown keys
        raise CalcError and change nothing.
        '''
        handler = self._lookup(event)
        try:
            handler()
        except CalcError as e:
            self._fail(e)
        return self.get_display_string()

    def evaluate_expression(self, text):
        '''
        Evaluate infix text, with precedence, into the current value.
        '''
        try:
            self._show(evaluate_text(text, self.angle_mode))
        except CalcError as e:
            self._fail(e)
        return self.get_display_string()

    def get_display_string(self):
        if self.state is State.SHOWING_ERROR:
            return 'Error: {}'.format(self.error)
        if self.message is not None:
            return self.message
        if self.entry:
            return self.entry
        return self._render(self.accumulator)

    def get_status_flags(self):
        return StatusFlags(angle_mode=self.angle_mode,
                           number_base=self.number_base,
                           display_format=self.display_format,
                           memory=self.memory != 0,
                           error=self.state is State.SHOWING_ERROR)

    @classmethod
    def keys(cls):
        '''
        All key names submit_token understands, digits aside.
        '''
        return sorted({*cls.OPERATORS, *bitwise.BINARY, *cls.FUNCTIONS,
                       *bitwise.UNARY, *cls.CONSTANTS, *cls.STATISTICS,
                       *cls.CONTROLS, *cls.BASES, *cls.FORMATS})

    # Plumbing

    def _lookup(self, event):
        cls = type(self)
        if self._isdigit(event):
            return partial(self._digit, event)
        if event in cls.OPERATORS or event in bitwise.BINARY:
            return partial(self._operator, event)
        for table, method in ((cls.FUNCTIONS, self._function),
                              (bitwise.UNARY, self._bitwise),
                              (cls.CONSTANTS, self._constant),
                              (cls.STATISTICS, self._statistic),
                              (cls.BASES, self._base_key),
                              (cls.FORMATS, self._format_key)):
            if event in table:
                return partial(method, event)
        if event in cls.CONTROLS:
            return partial(cls.CONTROLS[event], self)
        raise CalcError('No such key {!r}'.format(event))

    def _isdigit(self, event):
        if self.number_base is NumberBase.HEX and \
           event in type(self).HEX_LETTER_KEYS:
            return True
        return len(event) == 1 and event in type(self).DIGIT_KEYS

    def _render(self, value):
        if self.number_base is NumberBase.DEC:
            return format_number(value, self.display_format, self.precision)
        try:
            return format_base(to_int64(value), self.number_base)
        except NumericOverflowError:
            return OVERFLOW

    def _show(self, value):
        '''
        Make value the current result.

        Ints that fit the 64-bit register stay exact; everything else becomes
        a finite float.
        '''
        if not (isinstance(value, int) and
                bitwise.MIN <= value <= bitwise.MAX):
            value = finite(float(value))
        self.accumulator = value
        self.last_valid_result = value
        self.operand_ready = True
        self.entry = ''
        self.message = None
        self.error = None
        self.state = State.SHOWING_RESULT

    def _fail(self, error):
        log.debug('%s: %s', type(error).__name__, error)
        self.error = str(error) or type(error).__name__
        self.accumulator = self.last_valid_result
        self.pending = None
        self.operand_ready = False
        self.entry = ''
        self.message = None
        self.state = State.SHOWING_ERROR

    def _commit_entry(self):
        '''
        End the literal being typed; the next digit starts a new one.
        '''
        if self.entry:
            self.entry = ''
            if self.state is State.ENTERING:
                self.state = State.SHOWING_RESULT

    def _parse_entry(self, entry):
        if self.number_base is NumberBase.DEC:
            return float(entry)
        return parse_base(entry, self.number_base)

    def _max_digits(self):
        if self.number_base is NumberBase.DEC:
            return min(self.precision, type(self).MAX_DIGITS)
        return self.number_base.max_digits

    # Keys

    def _digit(self, digit):
        digit = digit.upper()
        if digit not in self.number_base.digits and \
           not (digit == '.' and self.number_base is NumberBase.DEC):
            log.debug('Ignoring %s in %s', digit, self.number_base.name)
            return
        if self.state is not State.ENTERING:
            self.entry = ''
            self.error = None
            self.state = State.ENTERING
        self.message = None
        entry = self.entry
        if digit == '.':
            if '.' in entry:
                return
            entry = (entry or '0') + '.'
        elif entry.lstrip('-') == '0':
            entry = entry[:-1] + digit
        elif sum(c != '.' for c in entry.lstrip('-')) >= self._max_digits():
            log.debug('Ignoring digit %s past %d digits', digit,
                      self._max_digits())
            return
        else:
            entry += digit
        self.entry = entry
        self.accumulator = self._parse_entry(entry)
        self.operand_ready = True

    @_not_in_error
    def _operator(self, key):
        if self.pending is not None and self.operand_ready:
            self._calculate()
        self.operand = self.accumulator
        self.last_valid_result = self.accumulator
        self.pending = key
        self.operand_ready = False
        self.entry = ''
        self.message = None
        self.state = State.HAVE_OPERATOR

    def _calculate(self):
        key, self.pending = self.pending, None
        if key in bitwise.BINARY:
            result = bitwise.BINARY[key](to_int64(self.operand),
                                         to_int64(self.accumulator))
        else:
            result = type(self).OPERATORS[key](self.operand, self.accumulator)
        self._show(result)

    @_not_in_error
    def _function(self, key):
        self._show(type(self).FUNCTIONS[key](self.accumulator,
                                             self.angle_mode))

    @_not_in_error
    def _bitwise(self, key):
        self._show(bitwise.UNARY[key](to_int64(self.accumulator)))

    def _constant(self, key):
        self._show(type(self).CONSTANTS[key].number)

    @_not_in_error
    def _statistic(self, key):
        self._show(type(self).STATISTICS[key](self.statistics))

    def _base_key(self, key):
        self.set_number_base(type(self).BASES[key])

    def _format_key(self, key):
        self.set_display_format(type(self).FORMATS[key])

    @_not_in_error
    def equals(self):
        '''
        Apply the pending operator, if any.
        '''
        if self.pending is not None:
            self._calculate()
        else:
            self._show(self.accumulator)

    def clear(self):
        '''
        Start over. Memory and statistics survive.
        '''
        self._reset()

    def clear_entry(self):
        '''
        Drop the literal being typed, or recover from an error.
        '''
        if self.state is State.SHOWING_ERROR:
            self.error = None
            self.accumulator = self.last_valid_result
            self.state = State.SHOWING_RESULT
            return
        self.entry = ''
        self.message = None
        self.accumulator = 0.0
        self.operand_ready = False
        self.state = State.ENTERING

    @_not_in_error
    def backspace(self):
        '''
        Remove the last typed character.
        '''
        if self.state is not State.ENTERING or not self.entry:
            return
        entry = self.entry[:-1]
        if entry in ('', '-'):
            self.entry = ''
            self.accumulator = 0.0
        else:
            self.entry = entry
            self.accumulator = self._parse_entry(entry)

    @_not_in_error
    def negate(self):
        '''
        Change sign: of the literal while typing, else of the current value.
        '''
        if self.state is State.ENTERING and self.entry:
            if self.entry.startswith('-'):
                self.entry = self.entry[1:]
            else:
                self.entry = '-' + self.entry
            self.accumulator = self._parse_entry(self.entry)
        else:
            self._show(-self.accumulator)

    def memory_clear(self):
        self.memory = 0.0

    def memory_recall(self):
        self._show(self.memory)

    def memory_add(self):
        self._commit_entry()
        self.memory += self.accumulator

    def memory_subtract(self):
        self._commit_entry()
        self.memory -= self.accumulator

    def set_angle_mode(self, angle_mode):
        self.angle_mode = angle_mode

    def toggle_angle_mode(self):
        self.angle_mode = AngleMode.RADIANS \
            if self.angle_mode is AngleMode.DEGREES else AngleMode.DEGREES

    def set_number_base(self, number_base):
        '''
        Re-render the current value in another base.

        A literal being typed is committed first; its value and any pending
        operation are unaffected.
        '''
        self._commit_entry()
        self.number_base = number_base

    def set_display_format(self, display_format):
        self.display_format = display_format

    @_not_in_error
    def show_ascii(self):
        n = to_int64(self.accumulator)
        self.message = '{} = {!r}'.format(n, ascii_char(n))
        self.entry = ''
        self.state = State.SHOWING_RESULT

    @_not_in_error
    def add_data(self):
        self.statistics.add(self.accumulator)
        self.entry = ''
        self.message = 'Data: {} items'.format(self.statistics.count())
        self.state = State.SHOWING_RESULT

    def clear_data(self):
        self.statistics.clear()
        self.message = 'Data cleared'

    @_not_in_error
    def show_big_factorial(self):
        '''
        Show every digit of n!, for n far beyond float range.
        '''
        value = big_factorial(self.accumulator)
        if self.accumulator <= FACTORIAL_LIMIT:
            self._show(value)
        self.entry = ''
        self.message = render(value)
        self.state = State.SHOWING_RESULT

    # Digit keys; those invalid in the current base are ignored. Hex letters
    # are lowercase so that C stays Clear, and are only digits in HEX, where
    # e is not the constant.
    DIGIT_KEYS = '0123456789.'
    HEX_LETTER_KEYS = ('a', 'b', 'c', 'd', 'e', 'f')

    # Pending binary operators for the keypad; bitwise ones live in
    # bitwise.BINARY.
    OPERATORS = {
        '+': partial(arithmetic, '+'),
        '-': partial(arithmetic, '-'),
        '*': partial(arithmetic, '*'),
        '/': partial(arithmetic, '/'),
        '^': partial(arithmetic, '^'),
        'mod': partial(arithmetic, '%'),
        'yroot': root,
        'nPr': permutation,
        'nCr': combination,
    }

    # Keys applied at once to the current value.
    FUNCTIONS = {
        **{function.value: _function_key(function)
           for function in Function
           if function.arity == 1 and function is not Function.FACTORIAL},
        'n!': _function_key(Function.FACTORIAL),
        'x²': lambda x, angle_mode: arithmetic('*', x, x),
        '1/x': lambda x, angle_mode: reciprocal(x),
    }

    CONSTANTS = {
        'pi': Constant.PI,
        '\N{GREEK SMALL LETTER PI}': Constant.PI,
        'e': Constant.E,
    }

    STATISTICS = {
        'Mean': Statistics.mean,
        'Sum': Statistics.sum,
        'Count': Statistics.count,
        'Std Dev': Statistics.stddev,
        'Variance': Statistics.variance,
    }

    BASES = {base.name: base for base in NumberBase}
    FORMATS = {display_format.value: display_format
               for display_format in DisplayFormat}

    CONTROLS = {
        '=': equals,
        'C': clear,
        'CE': clear_entry,
        'DEL': backspace,
        '±': negate,
        'MC': memory_clear,
        'MR': memory_recall,
        'M+': memory_add,
        'M-': memory_subtract,
        'DEG': partial(set_angle_mode, angle_mode=AngleMode.DEGREES),
        'RAD': partial(set_angle_mode, angle_mode=AngleMode.RADIANS),
        'DEG/RAD': toggle_angle_mode,
        'ASCII': show_ascii,
        'Add Data': add_data,
        'Clear Data': clear_data,
        'n!!': show_big_factorial,
    }
