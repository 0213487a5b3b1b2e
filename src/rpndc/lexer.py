from functools import reduce
import operator

import regex

from .util import FloatParseError, wrap_user_errors


class Idle:
    '''
    No literal in progress.
    '''

    def __repr__(self):
        return 'Idle()'


class Accumulating:
    '''
    Literal in progress. Owns the characters collected since the last commit.
    '''

    def __init__(self):
        self.buffer = []

    def __repr__(self):
        return 'Accumulating({})'.format(repr(''.join(self.buffer)))

    def last(self):
        return self.buffer[-1]

    def text(self):
        return ''.join(self.buffer)


class Lexer:
    '''
    Lexer for the calculator's character-at-a-time grammar.

    Every non-space character outside a numeric literal is an operator token
    on its own; whether it means anything is the machine's business. Numeric
    literals are accumulated and only validated when committed.
    '''
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, 123
                    [0-9]+
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                  (?:
                      # The 5 in 1.5 or .5
                      [0-9]+
                  )
                  '''
    # Scientific notation suffix
    EXPONENT = r'''
                (?:
                    # e3, E3, e+3, e-3
                    [eE]
                    [+-]?
                    [0-9]+
                )
                '''
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    NUMBER = r'''
              (?:
                  (?:
                      # 1, 12, 1. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                  )|(?:
                      # .2
                      \.
                      {FRACTIONAL}
                  )
              )
              (?:
                  {EXPONENT}
              )?
              '''.format(INTEGRAL=INTEGRAL,
                         FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)
    # Default regex flags for matching literals
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    # Always start or extend a literal
    DIGITS = frozenset('0123456789.')
    # Extend a literal already in progress
    EXPONENTS = frozenset('eE')
    # Extend a literal only right after an exponent marker
    SIGNS = frozenset('+-')
    # Separators; commit a pending literal, nothing else
    SPACE = frozenset(' \t\r\n')

    def __init__(self):
        self.state = Idle()

    @property
    def pending(self):
        '''
        Return True if a literal is in progress.
        '''
        return isinstance(self.state, Accumulating)

    def feed(self, char):
        '''
        Feed a single character, yielding any tokens it completes.

        A token is either {'number': text} or {'operator': char}. A
        character terminating a literal yields the literal first.
        '''
        state = self.state
        if char in type(self).DIGITS:
            if not isinstance(state, Accumulating):
                state = self.state = Accumulating()
            state.buffer.append(char)
            return
        if isinstance(state, Accumulating):
            if char in type(self).EXPONENTS or \
               char in type(self).SIGNS and \
               state.last() in type(self).EXPONENTS:
                state.buffer.append(char)
                return
            yield from self.flush()
        if char not in type(self).SPACE:
            yield {'operator': char}

    def flush(self):
        '''
        Commit the literal in progress, if any, and go idle.
        '''
        state = self.state
        self.state = Idle()
        if isinstance(state, Accumulating):
            yield {'number': state.text()}

    def reset(self):
        '''
        Drop the literal in progress, if any.
        '''
        self.state = Idle()

    def lex(self, line):
        '''
        Take a line and yield all tokens.

        A literal still in progress at the end of the line is committed.
        '''
        for char in line:
            yield from self.feed(char)
        yield from self.flush()


@wrap_user_errors(FloatParseError)
def parse_number(text):
    '''
    Convert a committed literal to a float.

    Raises FloatParseError unless the whole text matches Lexer.NUMBER.
    '''
    if regex.fullmatch(Lexer.NUMBER, text, flags=Lexer.FLAGS) is None:
        raise ValueError(text)
    return float(text)
