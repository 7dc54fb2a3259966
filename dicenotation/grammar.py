'''Grammar for dice requests such as "4d6h3 + 2, damage: 1d8 + 4".

The grammar is written for arpeggio's Python notation: every rule is a
function returning its parsing expression. TreeBuilder turns the
resulting parse tree into the nodes defined in dicenotation.tree.

Operands on the right of an operator try the same precedence level
before the next one, so "10 - 3 - 2" parses as 10 - (3 - 2) and is
evaluated that way.

'''

import logging
import threading

from arpeggio import ParserPython, RegExMatch, Optional, ZeroOrMore, EOF, NoMatch, PTNodeVisitor, visit_parse_tree

from typing import Tuple

from dicenotation import tree
from dicenotation.errors import InvalidSyntax, LimitExceeded

logger = logging.getLogger(__name__)

# Whitespace parsing
def Whitespace(): return RegExMatch(r'\s+')
def OpWS(): return Optional(Whitespace)

# Number parsing
def Digits(): return RegExMatch('[0-9]+')
def NonzeroDigits():
    '''Digits with at least one nonzero number.'''
    return RegExMatch('0*[1-9][0-9]*')

# Dice terms
def DieSize(): return 'd', NonzeroDigits
def DiceTerm(): return Digits, Optional(DieSize)
def FilterType(): return RegExMatch('[hHlL]')
def KeepFilter(): return FilterType, Digits
def Term(): return DiceTerm, Optional(KeepFilter)

# Arithmetic expression parsing
def ParenExpr(): return '(', OpWS, AdditiveExpr, OpWS, ')'
def FilteredTerm(): return [Term, ParenExpr]
def MulOp(): return ['*', '/']
def MulRight(): return OpWS, MulOp, OpWS, [MultiplicativeExpr, FilteredTerm]
def MultiplicativeExpr(): return FilteredTerm, Optional(MulRight)
def AddOp(): return ['+', '-']
def AddRight(): return OpWS, AddOp, OpWS, [AdditiveExpr, MultiplicativeExpr]
def AdditiveExpr(): return MultiplicativeExpr, Optional(AddRight)

# Labelled expressions
def Label(): return RegExMatch(r'[A-Za-z \t]+')
def LabelPrefix(): return Label, ':'
def NamedExpr(): return Optional(LabelPrefix), OpWS, AdditiveExpr
def NamedList(): return NamedExpr, ZeroOrMore(OpWS, ',', OpWS, NamedExpr)

# Whole requests
def Remainder(): return RegExMatch(r'(?s).+')
def Request(): return OpWS, NamedList, OpWS, EOF
def PartialRequest(): return OpWS, NamedList, Optional(Remainder)


class TreeBuilder(PTNodeVisitor):
    '''Builds dicenotation.tree nodes from an arpeggio parse tree.'''

    def visit_Whitespace(self, node, children):
        '''Remove whitespace nodes'''
        return None
    def visit_OpWS(self, node, children):
        return None
    def visit_EOF(self, node, children):
        return None
    def visit_Digits(self, node, children):
        return int(node.value)
    def visit_NonzeroDigits(self, node, children):
        return int(node.value)
    def visit_DieSize(self, node, children):
        return children[-1]
    def visit_DiceTerm(self, node, children):
        numbers = [c for c in children if isinstance(c, int)]
        if len(numbers) == 2:
            return tree.DiceTerm(count=numbers[0], die=numbers[1])
        return tree.DiceTerm(count=numbers[0])
    def visit_FilterType(self, node, children):
        return tree.Direction.from_letter(node.value)
    def visit_KeepFilter(self, node, children):
        direction, count = children
        return tree.Filter(count=count, direction=direction)
    def visit_Term(self, node, children):
        keep = children[1] if len(children) > 1 else None
        return tree.FilteredDiceTerm(dice=children[0], keep=keep)
    def visit_ParenExpr(self, node, children):
        inner = [c for c in children if isinstance(c, tree.AdditiveExpr)]
        return tree.ParenExpr(expression=inner[0])
    def visit_FilteredTerm(self, node, children):
        return children[0]
    def visit_MulOp(self, node, children):
        return tree.Operator(node.flat_str())
    def visit_AddOp(self, node, children):
        return tree.Operator(node.flat_str())
    # Each of these returns a tuple of (operator, right operand)
    def visit_MulRight(self, node, children):
        return (children[0], children[-1])
    def visit_AddRight(self, node, children):
        return (children[0], children[-1])
    def visit_MultiplicativeExpr(self, node, children):
        if len(children) == 1:
            return tree.MultiplicativeExpr(left=children[0])
        op, right = children[1]
        return tree.MultiplicativeExpr(left=children[0], op=op, right=right)
    def visit_AdditiveExpr(self, node, children):
        if len(children) == 1:
            return tree.AdditiveExpr(left=children[0])
        op, right = children[1]
        return tree.AdditiveExpr(left=children[0], op=op, right=right)
    def visit_Label(self, node, children):
        return node.value.strip()
    def visit_LabelPrefix(self, node, children):
        return children[0]
    def visit_NamedExpr(self, node, children):
        if len(children) == 2:
            return tree.NamedExpression(label=children[0], expression=children[1])
        return tree.NamedExpression(expression=children[0])
    def visit_NamedList(self, node, children):
        return tree.NamedList(c for c in children if isinstance(c, tree.NamedExpression))
    def visit_Remainder(self, node, children):
        return node.value
    def visit_Request(self, node, children):
        return (children[0], '')
    def visit_PartialRequest(self, node, children):
        remaining = children[1] if len(children) > 1 else ''
        return (children[0], remaining)


def build_parser(language_def, **kwargs) -> ParserPython:
    kwargs.setdefault('skipws', False)
    kwargs.setdefault('memoization', True)
    return ParserPython(language_def, **kwargs)

def FullParserPython(language_def, **kwargs) -> ParserPython:
    '''Like build_parser, but auto-adds EOF to the end of the parser.'''
    def TempFullParser(): return (language_def, EOF)
    return build_parser(TempFullParser, **kwargs)

# arpeggio parsers keep per-parse state, so each thread gets its own.
_local = threading.local()

def _get_parser(strict: bool) -> ParserPython:
    attr_name = 'strict_parser' if strict else 'partial_parser'
    parser = getattr(_local, attr_name, None)
    if parser is None:
        parser = build_parser(Request if strict else PartialRequest)
        setattr(_local, attr_name, parser)
    return parser

def _discard_parser(strict: bool) -> None:
    setattr(_local, 'strict_parser' if strict else 'partial_parser', None)

def too_deep(text: str) -> LimitExceeded:
    return LimitExceeded(f'Expression is nested or chained too deeply: {text[:40]!r}')

def parse(text: str, strict: bool = True) -> Tuple[tree.NamedList, str]:
    '''Parse a dice request.

    Returns a tuple of the parsed NamedList and the text left over
    after it. With strict=True (the default) the whole text must be a
    valid request, so the left over text is always empty. With
    strict=False the longest valid prefix is parsed and the rest is
    returned as is.

    Raises InvalidSyntax if no request can be parsed, and LimitExceeded
    if the request is nested or chained too deeply to parse.

    '''
    parser = _get_parser(strict)
    try:
        parse_tree = parser.parse(text)
    except NoMatch as exc:
        logger.debug(f'Parse failure for {text!r}: {exc}')
        raise InvalidSyntax(text, position=exc.position, message=str(exc)) from exc
    except RecursionError as exc:
        # The parser may be left mid-parse, so start over with a fresh one
        _discard_parser(strict)
        raise too_deep(text) from exc
    try:
        named_list, remaining = visit_parse_tree(parse_tree, TreeBuilder())
    except RecursionError as exc:
        raise too_deep(text) from exc
    logger.debug(f'Parsed {text!r} into {len(named_list)} expression(s), {remaining!r} left over')
    return named_list, remaining

def parse_rule(rule, text):
    '''Parse text (or a list of texts) with a single grammar rule.

    The rule must match the whole text. Raises NoMatch otherwise.

    '''
    if isinstance(text, str):
        return FullParserPython(rule).parse(text)
    else:
        return [ parse_rule(rule, x) for x in text ]
