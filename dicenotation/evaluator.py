'''Reduces a resolved tree to its integer total.'''

import logging
import operator

from typing import Callable, Dict, Optional

from dicenotation import tree
from dicenotation.config import DEFAULT_LIMITS, Limits
from dicenotation.errors import ArithmeticOverflow, DivisionByZero

logger = logging.getLogger(__name__)


def truncating_div(x: int, y: int) -> int:
    '''Integer division that rounds toward zero, unlike //.'''
    if y == 0:
        raise DivisionByZero(f"Can't divide {x} by zero")
    quotient = abs(x) // abs(y)
    if (x < 0) != (y < 0):
        return -quotient
    return quotient

op_dict: Dict[tree.Operator, Callable[[int, int], int]] = {
    tree.Operator.ADD: operator.add,
    tree.Operator.SUB: operator.sub,
    tree.Operator.MUL: operator.mul,
    tree.Operator.DIV: truncating_div,
}

def check_range(value: int, limits: Limits) -> int:
    if not limits.in_range(value):
        raise ArithmeticOverflow(f'{value} is outside [{limits.min_value}, {limits.max_value}]')
    return value

def evaluate(node: tree.ResolvedTree, limits: Optional[Limits] = None) -> int:
    '''Return the total of a resolved tree.

    A roll totals its kept dice. A node evaluates its left branch,
    then its right branch, then applies its operator. The tree is
    evaluated exactly as shaped, so "10 - 3 - 2" as parsed comes to 9.

    Raises DivisionByZero, or ArithmeticOverflow when any intermediate
    value leaves the range allowed by 'limits'.

    '''
    if limits is None:
        limits = DEFAULT_LIMITS
    if isinstance(node, tree.ResolvedRoll):
        return check_range(sum(node.kept), limits)
    elif isinstance(node, tree.ResolvedNode):
        left = evaluate(node.left, limits)
        if node.right is None:
            return left
        right = evaluate(node.right, limits)
        result = check_range(op_dict[node.op](left, right), limits)
        logger.debug(f'{left} {node.op} {right} = {result}')
        return result
    else:
        raise TypeError(f'Cannot evaluate node of type {type(node).__name__}')
