'''Text rendering of resolved trees and of parsed expressions.

render() shows the dice that were actually rolled, in the order they
are summed. render_expression() turns a parse tree back into dice
notation, which is handy for echoing a request.

'''

from typing import Iterable

from dicenotation import tree
from dicenotation.config import CRITICAL_MARKER, KEEP_SEPARATOR


def format_face(value: int, die) -> str:
    '''Format one die face, highlighting critical faces.

    A face is critical when it is a 1 or the highest face of its die.
    Constants (die is None) are never highlighted.

    '''
    if die is not None and (value == 1 or value == die):
        return f'{CRITICAL_MARKER}{value}{CRITICAL_MARKER}'
    return str(value)

def format_faces(values: Iterable[int], die) -> str:
    return ', '.join(format_face(v, die) for v in values)

def render_roll(roll: tree.ResolvedRoll) -> str:
    text = format_faces(roll.kept, roll.die)
    if roll.dropped:
        text += KEEP_SEPARATOR + format_faces(roll.dropped, roll.die)
    if len(roll.values) != 1:
        return f'[{text}]'
    return text

def render(node: tree.ResolvedTree) -> str:
    '''Render a resolved tree, e.g. "[**6**, 4, 3 | 2] + 2".'''
    if isinstance(node, tree.ResolvedRoll):
        return render_roll(node)
    elif isinstance(node, tree.ResolvedNode):
        text = render(node.left)
        if node.right is not None:
            text = f'{text} {node.op} {render(node.right)}'
        if node.grouped:
            text = f'({text})'
        return text
    else:
        raise TypeError(f'Cannot render node of type {type(node).__name__}')

def render_expression(node) -> str:
    '''Render a parse tree node back into dice notation.'''
    if isinstance(node, tree.NamedList):
        return ', '.join(render_expression(expr) for expr in node)
    elif isinstance(node, tree.NamedExpression):
        text = render_expression(node.expression)
        if node.label:
            text = f'{node.label}: {text}'
        return text
    elif isinstance(node, (tree.AdditiveExpr, tree.MultiplicativeExpr)):
        text = render_expression(node.left)
        if node.right is not None:
            text = f'{text} {node.op} {render_expression(node.right)}'
        return text
    elif isinstance(node, tree.ParenExpr):
        return f'({render_expression(node.expression)})'
    elif isinstance(node, tree.FilteredDiceTerm):
        text = render_expression(node.dice)
        if node.keep is not None:
            text += f'{node.keep.direction.value}{node.keep.count}'
        return text
    elif isinstance(node, tree.DiceTerm):
        if node.is_constant:
            return str(node.count)
        return f'{node.count}d{node.die}'
    else:
        raise TypeError(f'Cannot render node of type {type(node).__name__}')
