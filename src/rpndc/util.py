from functools import wraps
import sys
import traceback


class RPNError(Exception):
    '''
    Base of every error reported back to the user.

    Never fatal. Raised inside a single operator or literal commit, caught by
    the machine, reported, and discarded.
    '''
    message = 'error'

    def __str__(self):
        return self.message


class RPNArithmeticError(RPNError):
    pass


class DivideByZeroError(RPNArithmeticError):
    message = 'divide by zero'


class ParserError(RPNError):
    pass


class FloatParseError(ParserError):
    def __init__(self, text):
        super().__init__(text)
        self.text = text

    @property
    def message(self):
        return 'cannot parse number {}'.format(repr(self.text))


def _describe(char):
    return '{} (0{:o})'.format(repr(char), ord(char))


class BadCharacterError(ParserError):
    def __init__(self, char):
        super().__init__(char)
        self.char = char

    @property
    def message(self):
        return '{} unknown character'.format(_describe(self.char))


class StackError(RPNError):
    pass


class FewElementsError(StackError):
    def __init__(self, needed, depth):
        super().__init__(needed, depth)
        self.needed = needed
        self.depth = depth

    @property
    def message(self):
        if not self.depth:
            return 'stack empty'
        return 'stack has {} element(s), needs {}'.format(self.depth,
                                                          self.needed)


class UnimplementedFeatureError(RPNError):
    def __init__(self, char):
        super().__init__(char)
        self.char = char

    @property
    def message(self):
        return '{} unimplemented'.format(_describe(self.char))


def wrap_user_errors(error_class):
    '''
    Decorator that converts stray exceptions into error_class.

    Passes through RPNErrors. error_class is built from the wrapped call's
    positional arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise error_class(*args) from e
        return wrapper
    return decorator


class Reporter:
    '''
    Render errors to the diagnostic sink, prefixed with the program name.
    '''

    def __init__(self, prog, file=None, verbose=False):
        '''
        :param prog: Program name to prefix every diagnostic with.
        :param file: Diagnostic sink. Defaults to stderr at report time.
        :param verbose: Also show the traceback of each reported error.
        '''
        self.prog = prog
        self.file = file
        self.verbose = verbose

    def report(self, error):
        file = self.file if self.file is not None else sys.stderr
        print('{}: {}'.format(self.prog, error), file=file)
        if self.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__, file=file)
