'''Dice notation interpreter.

Parses requests such as "4d6h3 + 2, damage: 1d8 + 4", rolls the dice,
evaluates the arithmetic and renders a trace of every roll.

'''

from dicenotation.compiler import compile_tree
from dicenotation.config import Limits
from dicenotation.engine import RollResult, handle_dice_string
from dicenotation.errors import (
    ArithmeticOverflow, DiceError, DivisionByZero, EvaluationError,
    InvalidSyntax, LimitExceeded,
)
from dicenotation.evaluator import evaluate
from dicenotation.grammar import parse
from dicenotation.renderer import render, render_expression

__all__ = [
    'ArithmeticOverflow', 'DiceError', 'DivisionByZero', 'EvaluationError',
    'InvalidSyntax', 'LimitExceeded', 'Limits', 'RollResult',
    'compile_tree', 'evaluate', 'handle_dice_string', 'parse', 'render',
    'render_expression',
]
