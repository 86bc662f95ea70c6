'''
Scientific calculator engine.

Evaluates infix expressions with the usual precedence, runs a keypad-style
state machine (memory, statistics, angle modes, number bases), does exact
64-bit bitwise logic, formats results in five notations, and computes
factorials far past float range.

The engine is a library: a front end submits key events and renders
Machine.get_display_string() and Machine.get_status_flags().
'''

from .cli import CLI
from .lexer import Lexer, tokenize
from .machine import Machine
from .parser import evaluate, evaluate_text


__all__ = 'Machine', 'Lexer', 'CLI', 'tokenize', 'evaluate', 'evaluate_text'
