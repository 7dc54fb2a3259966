'''Entry point tying parsing, rolling, evaluation and rendering together.'''

import logging

import attr

from typing import List, Optional

from dicenotation.compiler import compile_tree
from dicenotation.config import DEFAULT_LABEL, RESULT_SEPARATOR, Limits
from dicenotation.evaluator import evaluate
from dicenotation.grammar import parse, too_deep
from dicenotation.renderer import render, render_expression

logger = logging.getLogger(__name__)


@attr.s(frozen=True)
class RollResult(object):
    '''Outcome of one expression of a request.

    Iterates as the (label, text) pair shown to the user.

    '''
    label: str = attr.ib()
    text: str = attr.ib()
    total: int = attr.ib()
    expression: str = attr.ib(default='')

    def __iter__(self):
        return iter((self.label, self.text))


def handle_dice_string(dice_string: str, sampler=None, limits: Optional[Limits] = None) -> List[RollResult]:
    '''Roll every expression of a request such as "hit: 1d20 + 5, damage: 1d8 + 4".

    Returns one RollResult per expression, in request order. Unlabeled
    expressions are labeled "Roll <n>" by their 1-based position.

    Any failure fails the whole request: InvalidSyntax if the text does
    not parse, LimitExceeded for oversized rolls and EvaluationError
    subclasses for arithmetic faults. Requests nested or chained too
    deeply to process also raise LimitExceeded. No partial results are
    returned.

    '''
    named_list, _remaining = parse(dice_string)
    results = []
    for idx, item in enumerate(named_list, start=1):
        try:
            resolved = compile_tree(item.expression, sampler, limits)
            total = evaluate(resolved, limits)
            rendered = render(resolved)
            expression = render_expression(item.expression)
        except RecursionError as exc:
            raise too_deep(dice_string) from exc
        label = item.label if item.label else DEFAULT_LABEL.format(idx)
        results.append(RollResult(
            label=label,
            text=f'{rendered}{RESULT_SEPARATOR}{total}',
            total=total,
            expression=expression,
        ))
        logger.debug(f'{label}: {results[-1].text}')
    return results
