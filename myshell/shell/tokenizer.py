"""
Command Line Tokenizer

Splits a raw input line into words, resolving quoting and escaping.

Handles:
- Single quotes (everything literal until the closing quote)
- Double quotes (backslash escapes only \\ " $ ` and newline)
- Backslash escapes outside quotes (any one character)
- Adjacent quoted pieces joining into a single word

Unterminated quotes are not an error: the open quote simply runs to the
end of the line.

Author: YSNRFD
Version: 1.0.0
"""

from enum import Enum, auto
from typing import List

from myshell.logger import get_logger


class TokenizerState(Enum):
    """States of the tokenizer state machine."""
    UNQUOTED = auto()
    UNQUOTED_ESCAPED = auto()
    SINGLE_QUOTED = auto()
    DOUBLE_QUOTED = auto()
    DOUBLE_QUOTED_ESCAPED = auto()


# Characters a backslash may escape inside double quotes.
DOUBLE_QUOTE_ESCAPABLE = frozenset('"$`\\\n')


class Tokenizer:
    """
    Single-pass, character-by-character word splitter.

    Example:
        >>> Tokenizer().tokenize('echo \\'a b\\' "c d"')
        ['echo', 'a b', 'c d']
        >>> Tokenizer().tokenize('a"b"\\'c\\'')
        ['abc']
    """

    def __init__(self):
        self._logger = get_logger('tokenizer')

    def tokenize(self, line: str) -> List[str]:
        """
        Convert a line into words.

        Args:
            line: Raw input line

        Returns:
            Decoded words, possibly empty
        """
        words: List[str] = []
        current: List[str] = []
        state = TokenizerState.UNQUOTED

        for char in line.strip():
            if state is TokenizerState.UNQUOTED:
                if char == '"':
                    state = TokenizerState.DOUBLE_QUOTED
                elif char == "'":
                    state = TokenizerState.SINGLE_QUOTED
                elif char == '\\':
                    state = TokenizerState.UNQUOTED_ESCAPED
                elif char == ' ':
                    if current:
                        words.append(''.join(current))
                        current = []
                else:
                    current.append(char)

            elif state is TokenizerState.UNQUOTED_ESCAPED:
                current.append(char)
                state = TokenizerState.UNQUOTED

            elif state is TokenizerState.SINGLE_QUOTED:
                if char == "'":
                    state = TokenizerState.UNQUOTED
                else:
                    current.append(char)

            elif state is TokenizerState.DOUBLE_QUOTED:
                if char == '\\':
                    state = TokenizerState.DOUBLE_QUOTED_ESCAPED
                elif char == '"':
                    state = TokenizerState.UNQUOTED
                else:
                    current.append(char)

            elif state is TokenizerState.DOUBLE_QUOTED_ESCAPED:
                if char not in DOUBLE_QUOTE_ESCAPABLE:
                    current.append('\\')
                current.append(char)
                state = TokenizerState.DOUBLE_QUOTED

        # A dangling backslash inside double quotes is kept literally.
        if state is TokenizerState.DOUBLE_QUOTED_ESCAPED:
            current.append('\\')

        if current:
            words.append(''.join(current))

        self._logger.debug("Tokenized line", context={'words': len(words)})
        return words


def tokenize(line: str) -> List[str]:
    """Split ``line`` into words with a fresh Tokenizer."""
    return Tokenizer().tokenize(line)
