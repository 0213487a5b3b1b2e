from decimal import Decimal
from enum import Enum
from inspect import signature as getsignature, Parameter
import math
import sys

from .lexer import Lexer, parse_number
from .stack import Stack
from .util import (RPNError, DivideByZeroError, BadCharacterError,
                   UnimplementedFeatureError, Reporter)


class Status(Enum):
    '''
    What the line source should do after a line has been evaluated.
    '''
    CONTINUE = 'continue'
    HALT = 'halt'


def format_value(value):
    '''
    Render a value for the result sink.

    Never in scientific notation: 2.0 prints as 2, 1e-05 as 0.00001 and
    -0.0 as -0. Digits are the shortest that round-trip.
    '''
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    if value == 0:
        return '-0' if math.copysign(1.0, value) < 0 else '0'
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), 'f')


def _truncate(value):
    if not math.isfinite(value):
        return value
    return float(math.trunc(value))


def _odd(value):
    return value.is_integer() and value % 2 == 1


def _fmod(left, right):
    # math.fmod refuses infinite dividends where IEEE says NaN.
    try:
        return math.fmod(left, right)
    except ValueError:
        return math.nan


def _check_divisor(right):
    if right == 0:
        raise DivideByZeroError()


# Arithmetic. Binary operators take (second from top, top), so "9 2 ^" is
# 9 ** 2.

def add(left, right):
    '''left + right'''
    return left + right


def subtract(left, right):
    '''left - right'''
    return left - right


def multiply(left, right):
    '''left * right'''
    return left * right


def divide(left, right):
    '''left / right'''
    _check_divisor(right)
    return left / right


def remainder(left, right):
    '''remainder of left / right, sign of left'''
    _check_divisor(right)
    return _fmod(left, right)


def divrem(left, right):
    '''quotient then remainder of left / right'''
    _check_divisor(right)
    return _truncate(left / right), _fmod(left, right)


def power(left, right):
    '''left raised to right'''
    try:
        return math.pow(left, right)
    except OverflowError:
        if left < 0 and _odd(right):
            return -math.inf
        return math.inf
    except ValueError:
        # 0 to a negative power, or a negative base to a fractional one.
        if left == 0:
            return math.copysign(math.inf, left) if _odd(right) else math.inf
        return math.nan


def negate(only):
    '''-only'''
    return -only


def sqrt(only):
    '''square root; NaN for negatives'''
    if only < 0:
        return math.nan
    return math.sqrt(only)


def absolute(only):
    '''absolute value'''
    return abs(only)


def truncate(only):
    '''truncate toward zero'''
    return _truncate(only)


# Comparisons push 1 for true and 0 for false.

def less(second, top):
    '''1 if top < second'''
    return float(top < second)


def greater(second, top):
    '''1 if top > second'''
    return float(top > second)


def less_equal(second, top):
    '''1 if top <= second'''
    return float(top <= second)


def greater_equal(second, top):
    '''1 if top >= second'''
    return float(top >= second)


def both(second, top):
    '''1 if both are nonzero'''
    return float(second != 0 and top != 0)


def either(second, top):
    '''1 if either is nonzero'''
    return float(second != 0 or top != 0)


def equal(second, top):
    '''1 if equal'''
    return float(second == top)


def logical_not(only):
    '''1 if zero, else 0'''
    return float(only == 0)


class Machine:
    '''
    Float stack machine (dc-style RPN calculator).

    Takes lines, lexes them, and runs each token against the stack. Errors
    are reported and skipped; they never abort a line.
    '''

    DEFAULT_PROG = 'rpndc'

    def __init__(self, prog=None, file=None, errfile=None, verbose=False):
        '''
        Create empty stack machine.

        :param prog: Program name diagnostics are prefixed with.
        :param file: Result sink. Defaults to stdout at print time.
        :param errfile: Diagnostic sink. Defaults to stderr at report time.
        :param verbose: Show stack traces on bad user commands.
        '''
        self.stack = Stack()
        self.lexer = Lexer()
        self.file = file
        self.reporter = Reporter(prog or type(self).DEFAULT_PROG,
                                 file=errfile,
                                 verbose=verbose)

    def evaluate(self, line):
        '''
        Run every token of a line.

        Returns Status.HALT as soon as quit is seen, ignoring the rest of the
        line, and Status.CONTINUE otherwise.
        '''
        for groups in self.lexer.lex(line):
            try:
                status = self.feed(groups)
            except RPNError as e:
                self.reporter.report(e)
                continue
            if status is Status.HALT:
                self.lexer.reset()
                return status
        return Status.CONTINUE

    def feed(self, groups):
        '''
        Stack or run a single token on machine.

        :param groups: Token from Lexer, {'number': text} or
            {'operator': char}.
        '''
        if self.isstackable(groups):
            self.stack.push(parse_number(groups['number']))
            return Status.CONTINUE
        return self.dispatch(groups['operator'])

    def isstackable(self, groups):
        '''
        Return true if stackable token (a number), rather than runnable.
        '''
        return 'number' in groups

    def dispatch(self, char):
        '''
        Run the operator named by char.
        '''
        ref = self.lookup(char)
        if ref in type(self).FUNCTIONS.values():
            return ref(self) or Status.CONTINUE
        self._apply(ref)
        return Status.CONTINUE

    def lookup(self, char):
        '''
        Return the callable for char, or raise the reason there isn't one.
        '''
        ref = type(self).OPERATORS.get(char)
        if ref is not None:
            return ref
        if char in type(self).UNIMPLEMENTED:
            raise UnimplementedFeatureError(char)
        raise BadCharacterError(char)

    def classify(self, char):
        '''
        Return 'implemented', 'unimplemented' or 'unknown' for char.
        '''
        if char in type(self).OPERATORS:
            return 'implemented'
        elif char in type(self).UNIMPLEMENTED:
            return 'unimplemented'
        return 'unknown'

    def arity(self, char):
        '''
        Return number of operands an arithmetic operator pops, if any.
        '''
        ref = type(self).BUILTINS.get(char)
        if ref is None:
            return None
        return self._arity(ref)

    def _arity(self, f):
        '''
        Return number of non-default positional arguments.
        '''
        parameters = getsignature(f).parameters.values()
        return len([parameter
                    for parameter
                    in parameters
                    if parameter.kind == Parameter.POSITIONAL_OR_KEYWORD and
                       parameter.default == Parameter.empty])

    def _apply(self, f):
        '''
        Apply arithmetic f to the stack, popping its operands.

        Operands are put back if f fails, so a failed operator never changes
        the stack.
        '''
        # Bottom-most first, so "9 2 ^" is 9 ** 2 and not 2 ** 9.
        args = self.stack.popn(self._arity(f))
        try:
            res = f(*args)
        except RPNError:
            self.stack.push(*args)
            raise
        if isinstance(res, tuple):
            self.stack.push(*res)
        else:
            self.stack.push(res)

    def print(self, *values):
        '''
        Format values and print them one per line to the result sink.
        '''
        file = self.file if self.file is not None else sys.stdout
        for value in values:
            print(format_value(value), file=file)

    def printtop(self):
        '''
        print top
        '''
        self.print(self.stack.peek())

    def popstack(self):
        '''
        print and remove top
        '''
        self.print(self.stack.pop())

    def printstack(self):
        '''
        print whole stack, top first
        '''
        self.print(*self.stack)

    def dupstack(self):
        '''
        duplicate top
        '''
        self.stack.push(self.stack.peek())

    def revstack(self):
        '''
        swap top two
        '''
        second, top = self.stack.pop_two()
        self.stack.push(top, second)

    def dropstack(self):
        '''
        discard top
        '''
        self.stack.pop()

    def clrstack(self):
        '''
        clear stack
        '''
        self.stack.clear()

    def depth(self):
        '''
        push stack depth
        '''
        self.stack.size()

    def quit(self):
        '''
        quit
        '''
        return Status.HALT

    # Pure arithmetic on operands popped off the stack.
    BUILTINS = {
        # Arithmetic
        '+': add,
        '-': subtract,
        '*': multiply,
        '/': divide,
        '%': remainder,
        '~': divrem,
        '^': power,
        '_': negate,
        'v': sqrt,
        'b': absolute,
        '$': truncate,

        # Comparison and logic
        '(': less,
        ')': greater,
        '{': less_equal,
        '}': greater_equal,
        'M': both,
        'm': either,
        'G': equal,
        'N': logical_not,
    }

    # Stack manipulation and printing, run against the machine itself.
    FUNCTIONS = {
        'p': printtop,
        'n': popstack,
        'f': printstack,
        'd': dupstack,
        'r': revstack,
        'R': dropstack,
        'c': clrstack,
        'z': depth,
        'q': quit,
    }

    # dc commands for registers, macros, strings, radix and precision.
    # Recognized so they are not mistaken for garbage, but not supported.
    UNIMPLEMENTED = frozenset('slSLxX[]<>=!?:;aPkKiIoOZQY#')

    # All operators, arithmetic or not.
    OPERATORS = dict()
    for namespace in BUILTINS, FUNCTIONS:
        OPERATORS.update(namespace)
    assert not OPERATORS.keys() & UNIMPLEMENTED
    assert not [char for char in OPERATORS if len(char) != 1]
