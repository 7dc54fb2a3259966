import attr

# Display settings
CRITICAL_MARKER = '**'
KEEP_SEPARATOR = ' | '
RESULT_SEPARATOR = ' => '
DEFAULT_LABEL = 'Roll {}'

# Terminal colors used by the command line interface
EXPR_COLOR = "green"
RESULT_COLOR = "red"
DETAIL_COLOR = "yellow"

DEBUG_ENV_VAR = 'ROLL_DEBUG'

MAX_DICE = 10000
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


@attr.s(frozen=True)
class Limits(object):
    '''Bounds applied while rolling and evaluating a request.'''
    max_dice: int = attr.ib(default=MAX_DICE)
    @max_dice.validator
    def validate_max_dice(self, attribute, value):
        if value < 1:
            raise ValueError(f'max_dice must be positive, got {value!r}')
    min_value: int = attr.ib(default=INT64_MIN)
    max_value: int = attr.ib(default=INT64_MAX)
    @max_value.validator
    def validate_max_value(self, attribute, value):
        if value < self.min_value:
            raise ValueError(f'Empty value range: [{self.min_value}, {value}]')

    def in_range(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value


DEFAULT_LIMITS = Limits()
