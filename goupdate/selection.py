"""
Ask the operator which version to install
"""
import sys
from typing import Optional, List

from .errors import InvalidSelection
import logging
logger = logging.getLogger(__name__)

PROMPT = 'Which version?'


class ConsolePrompt(object):
    """
    Reads answers from a text stream (stdin by default).

    Any object with a prompt_line(message) method returning the raw line
    read, and raising EOFError when input is exhausted, can stand in for it.
    """
    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin
        self.stdout = stdout

    def prompt_line(self, message: str) -> str:
        stdin = self.stdin or sys.stdin
        stdout = self.stdout or sys.stdout
        stdout.write(message + '\n')
        stdout.flush()

        line = stdin.readline()
        if not line:
            raise EOFError('input closed')
        return line


def ask_for_version(prompt) -> str:
    """
    Keep asking until the operator types something other than whitespace.

    There is no limit on the number of attempts. Raises InvalidSelection if
    the input stream closes first.
    """
    while True:
        try:
            answer = prompt.prompt_line(PROMPT)
        except EOFError as e:
            raise InvalidSelection('no version selected: input closed') from e

        answer = answer.strip()
        if answer:
            return answer
        logger.debug('Empty answer, asking again')


def select_version(versions: List[str], prompt=None, requested: Optional[str] = None) -> str:
    """
    Pick the version to install

    Parameters:
        versions: Versions available from the catalog
        prompt: Source of operator input (defaults to ConsolePrompt())
        requested: Version given up front (eg on the command line); skips the prompt

    Returns:
        The chosen version, guaranteed to be one of versions
    """
    if requested is not None:
        selection = requested.strip()
    else:
        selection = ask_for_version(prompt or ConsolePrompt())

    if selection not in versions:
        raise InvalidSelection(f'Invalid version selected: {selection}')
    return selection


def is_installed(selection: str, current: Optional[str]) -> bool:
    return current is not None and selection == current
