'''Rolls the dice of a parse tree, producing a resolved tree.

This is the only module that consumes randomness. Everything
downstream of compile_tree() is a pure function of its result.

'''

import logging
from random import SystemRandom

from typing import List, Optional

from dicenotation import tree
from dicenotation.config import DEFAULT_LIMITS, Limits
from dicenotation.errors import LimitExceeded

logger = logging.getLogger(__name__)

# Any object with a randint(low, high) method can stand in for this,
# e.g. random.Random(seed) in tests.
sysrand = SystemRandom()


def roll_dice(count: int, die: int, sampler=None) -> List[int]:
    '''Roll 'count' dice with 'die' sides each.'''
    if sampler is None:
        sampler = sysrand
    return [ sampler.randint(1, die) for i in range(count) ]

def compile_term(term: tree.DiceTerm, sampler=None, limits: Limits = DEFAULT_LIMITS) -> tree.ResolvedRoll:
    if term.is_constant:
        # A constant is a single pre-decided face
        return tree.ResolvedRoll(values=[term.count])
    if term.count > limits.max_dice:
        raise LimitExceeded(f"Can't roll {term.count} dice at once (limit is {limits.max_dice})")
    values = roll_dice(term.count, term.die, sampler)
    logger.debug(f'Rolled {term.count}d{term.die}: {values!r}')
    return tree.ResolvedRoll(values=values, die=term.die)

def compile_filtered(term: tree.FilteredDiceTerm, sampler=None, limits: Limits = DEFAULT_LIMITS) -> tree.ResolvedRoll:
    roll = compile_term(term.dice, sampler, limits)
    if term.keep is None:
        return roll
    keep_high = term.keep.direction is tree.Direction.HIGHEST
    # Kept dice go first; a keep count past the end keeps everything
    values = sorted(roll.values, reverse=keep_high)
    return tree.ResolvedRoll(values=values, keep=term.keep.count, die=roll.die)

def compile_tree(node, sampler=None, limits: Optional[Limits] = None) -> tree.ResolvedTree:
    '''Resolve every dice term below 'node'.

    'node' can be any parse tree node. Binary nodes keep their shape
    and operator; a binary node without a right operand is replaced
    by its compiled left operand.

    '''
    if limits is None:
        limits = DEFAULT_LIMITS
    if isinstance(node, tree.NamedExpression):
        return compile_tree(node.expression, sampler, limits)
    elif isinstance(node, (tree.AdditiveExpr, tree.MultiplicativeExpr)):
        left = compile_tree(node.left, sampler, limits)
        if node.right is None:
            return left
        right = compile_tree(node.right, sampler, limits)
        return tree.ResolvedNode(left=left, op=node.op, right=right)
    elif isinstance(node, tree.ParenExpr):
        return tree.ResolvedNode(left=compile_tree(node.expression, sampler, limits), grouped=True)
    elif isinstance(node, tree.FilteredDiceTerm):
        return compile_filtered(node, sampler, limits)
    elif isinstance(node, tree.DiceTerm):
        return compile_term(node, sampler, limits)
    else:
        raise TypeError(f'Cannot compile node of type {type(node).__name__}')
