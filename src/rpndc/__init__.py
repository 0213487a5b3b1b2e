'''
dc-style RPN calculator on floats.

Reads lines, turns runs of digits (with optional decimal point and exponent)
into numbers, and runs single character operators against a stack. Mistakes
are reported and skipped, never fatal; only q ends a session.

Deliberately a small subset of dc: no registers, macros, strings, or
arbitrary precision. Those commands are recognized and reported as
unimplemented rather than as garbage.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine, Status
from .stack import Stack


__all__ = 'Machine', 'Lexer', 'Stack', 'Status', 'CLI'
