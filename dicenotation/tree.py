'''Node types for parsed and resolved dice expressions.

Parse tree nodes are produced by dicenotation.grammar and mirror the
grammar productions. Resolved nodes are produced by
dicenotation.compiler once every die has been rolled; from then on
everything is deterministic.

All nodes are frozen. A parent owns its children and nothing refers
back up the tree.

'''

import enum

import attr

from typing import Tuple, Union
from typing import Optional as OptionalType


class Operator(enum.Enum):
    ADD = '+'
    SUB = '-'
    MUL = '*'
    DIV = '/'

    def __str__(self) -> str:
        return self.value


class Direction(enum.Enum):
    HIGHEST = 'h'
    LOWEST = 'l'

    @classmethod
    def from_letter(cls, letter: str) -> 'Direction':
        return cls(letter.lower())


def _check_operands(node, attribute, value):
    if (node.op is None) != (value is None):
        raise ValueError('Operator and right operand must be given together')


@attr.s(frozen=True)
class DiceTerm(object):
    '''A count of dice of one size, or a plain integer when die is None.'''
    count: int = attr.ib()
    die: OptionalType[int] = attr.ib(default=None)
    @die.validator
    def validate_die(self, attribute, value):
        if value is not None and value < 1:
            raise ValueError(f"Can't roll a {value}-sided die")

    @property
    def is_constant(self) -> bool:
        return self.die is None


@attr.s(frozen=True)
class Filter(object):
    '''Keep the 'count' highest or lowest dice of a roll.'''
    count: int = attr.ib()
    direction: Direction = attr.ib(validator=attr.validators.instance_of(Direction))


@attr.s(frozen=True)
class FilteredDiceTerm(object):
    dice: DiceTerm = attr.ib()
    keep: OptionalType[Filter] = attr.ib(default=None)


@attr.s(frozen=True)
class ParenExpr(object):
    expression: 'AdditiveExpr' = attr.ib()


Operand = Union[FilteredDiceTerm, ParenExpr]


@attr.s(frozen=True)
class MultiplicativeExpr(object):
    left: Operand = attr.ib()
    op: OptionalType[Operator] = attr.ib(default=None)
    right: OptionalType[Union['MultiplicativeExpr', Operand]] = attr.ib(
        default=None, validator=_check_operands)


@attr.s(frozen=True)
class AdditiveExpr(object):
    left: MultiplicativeExpr = attr.ib()
    op: OptionalType[Operator] = attr.ib(default=None)
    right: OptionalType[Union['AdditiveExpr', MultiplicativeExpr]] = attr.ib(
        default=None, validator=_check_operands)


@attr.s(frozen=True)
class NamedExpression(object):
    expression: AdditiveExpr = attr.ib()
    label: OptionalType[str] = attr.ib(default=None)


@attr.s(frozen=True)
class NamedList(object):
    expressions: Tuple[NamedExpression, ...] = attr.ib(converter=tuple)

    def __len__(self) -> int:
        return len(self.expressions)

    def __iter__(self):
        return iter(self.expressions)


@attr.s(frozen=True)
class ResolvedRoll(object):
    '''Concrete faces for one dice term.

    When 'keep' is set the values are already sorted so that the kept
    dice come first.

    '''
    values: Tuple[int, ...] = attr.ib(converter=tuple)
    keep: OptionalType[int] = attr.ib(default=None)
    die: OptionalType[int] = attr.ib(default=None)

    @property
    def kept(self) -> Tuple[int, ...]:
        if self.keep is None:
            return self.values
        return self.values[:self.keep]

    @property
    def dropped(self) -> Tuple[int, ...]:
        if self.keep is None:
            return ()
        return self.values[self.keep:]


@attr.s(frozen=True)
class ResolvedNode(object):
    left: 'ResolvedTree' = attr.ib()
    op: OptionalType[Operator] = attr.ib(default=None)
    right: OptionalType['ResolvedTree'] = attr.ib(default=None, validator=_check_operands)
    grouped: bool = attr.ib(default=False)


ResolvedTree = Union[ResolvedRoll, ResolvedNode]
