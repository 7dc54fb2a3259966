'''Command line dice roller.

With arguments, rolls the joined arguments once. Without arguments,
reads requests interactively until 'quit' or end of input.

'''

import logging
import os
import re
import sys
import readline
import traceback

import colorama
from arpeggio import Combine, NoMatch, PTNodeVisitor, visit_parse_tree
from colors import color

from typing import List, Optional, TextIO

from dicenotation.config import DEBUG_ENV_VAR, DETAIL_COLOR, EXPR_COLOR, RESULT_COLOR
from dicenotation.engine import RollResult, handle_dice_string
from dicenotation.errors import DiceError
from dicenotation.grammar import FullParserPython

logFormatter = logging.Formatter('%(asctime)s %(levelname)s: %(message)s', '%Y-%m-%d %H:%M:%S')
logger = logging.getLogger('dicenotation')

def setup_logging(debug: bool = False) -> None:
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.handlers = []
    logger.addHandler(logging.StreamHandler())
    for handler in logger.handlers:
        handler.setFormatter(logFormatter)

# Commands
def HelpCommand(): return Combine(['help', 'h', '?'])
def QuitCommand(): return Combine(['quit', 'exit', 'q'])
def Command(): return [HelpCommand, QuitCommand]

command_parser = FullParserPython(Command)

class QuitRequested(BaseException):
    pass

def print_interactive_help(handle: Optional[TextIO] = None) -> None:
    print('\n' + '''

To make a roll, type in the roll in dice notation, e.g. '4d6 + 4'.

- 'NdM' rolls N dice with M sides; a bare number is a constant.
- 'NdMhK' keeps the K highest dice, 'NdMlK' the K lowest.
- Combine rolls with +, -, * and / (integer division), and group
  them with parentheses.
- Roll several things at once by separating them with commas, and
  label them with 'name:', e.g. 'hit: 1d20 + 5, damage: 1d8 + 4'.

Rolls of 1 and of the highest face are shown in **bold**.

Special commands:

- To show this help text, type 'help'.
- To quit, type 'quit'.

    '''.strip() + '\n', file=handle)

class CommandHandler(PTNodeVisitor):
    def visit_HelpCommand(self, node, children):
        print_interactive_help()
    def visit_QuitCommand(self, node, children):
        raise QuitRequested()

def format_result(result: RollResult) -> str:
    return '{label}: {text}'.format(
        label=color(result.label, EXPR_COLOR),
        text=color(result.text, RESULT_COLOR),
    )

def roll_and_print(expr_string: str, handle: Optional[TextIO] = None) -> List[RollResult]:
    results = handle_dice_string(expr_string)
    for result in results:
        logger.debug(f'Rolled {result.expression}')
        print(format_result(result), file=handle)
    return results

def handle_input(input_string: str) -> None:
    '''Run a command, or else roll the input as a dice request.'''
    if not re.search("\\S", input_string):
        return
    try:
        command = command_parser.parse(input_string.strip())
    except NoMatch:
        roll_and_print(input_string)
    else:
        visit_parse_tree(command, CommandHandler())

def read_input(handle: Optional[TextIO] = None) -> str:
    if handle is None or handle is sys.stdin:
        return input("Enter roll> ")
    else:
        line = handle.readline()
        if not line:
            raise EOFError()
        return line.rstrip('\n')

def interactive_loop(handle: Optional[TextIO] = None) -> None:
    while True:
        input_string = ''
        try:
            input_string = read_input(handle)
            handle_input(input_string)
        except KeyboardInterrupt:
            print('')
        except (EOFError, QuitRequested):
            print('')
            logger.info('Quitting.')
            break
        except DiceError as exc:
            logger.error('Error while rolling {expr!r}: {err}'.format(
                expr=input_string,
                err=color(str(exc), DETAIL_COLOR),
            ))
        except Exception:
            logger.error('Error while evaluating {expr!r}:\n{tb}'.format(
                expr=input_string,
                tb=traceback.format_exc(),
            ))

def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    colorama.init()
    setup_logging(bool(os.environ.get(DEBUG_ENV_VAR)))
    expr_string = " ".join(argv)
    if re.search("\\S", expr_string):
        try:
            roll_and_print(expr_string)
        except DiceError as exc:
            logger.error("Error while rolling: %s", exc)
            return 1
    else:
        interactive_loop()
    return 0

if __name__ == '__main__':
    sys.exit(main())
