from functools import wraps


class CalcError(Exception):
    '''
    Root of every error the engine reports to the user.

    The message is short enough to fit on the calculator display.
    '''


class LexError(CalcError):
    pass


class ExpressionSyntaxError(CalcError):
    pass


class DomainError(CalcError):
    pass


class DivisionByZero(CalcError, ZeroDivisionError):
    pass


class RangeError(CalcError):
    pass


class NumericOverflowError(CalcError, OverflowError):
    pass


class InsufficientDataError(CalcError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts Python's numeric exceptions to calculator errors.

    Passes through CalcErrors. The message is fmt formatted with the call
    arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except CalcError:
                raise
            except ZeroDivisionError as e:
                raise DivisionByZero(fmt.format(*args, **kwargs)) from e
            except OverflowError as e:
                raise NumericOverflowError('Overflow') from e
            except ValueError as e:
                raise DomainError(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
