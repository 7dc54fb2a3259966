'''Exceptions raised while parsing, rolling or evaluating dice requests.'''

from typing import Optional


class DiceError(Exception):
    '''Base class for every failure of a dice request.'''
    pass


class InvalidSyntax(DiceError, ValueError):
    '''The request does not match the dice grammar.

    'position' is the character offset where parsing failed, or None
    when it is not known.

    '''
    def __init__(self, text: str, position: Optional[int] = None, message: Optional[str] = None):
        self.text = text
        self.position = position
        if message is None:
            if position is None:
                message = f'Could not parse {text!r}'
            else:
                message = f'Could not parse {text!r} at position {position}'
        self.message = message
        super().__init__(message)


class LimitExceeded(DiceError, ValueError):
    pass


class EvaluationError(DiceError, ArithmeticError):
    pass


class DivisionByZero(EvaluationError, ZeroDivisionError):
    pass


class ArithmeticOverflow(EvaluationError, OverflowError):
    pass
