"""
Command Segmenter

Groups a word sequence into command segments. A word ending in '>' is a
redirection marker: it closes the segment being built and starts the
next one, so every segment after the first begins with its marker.

Author: YSNRFD
Version: 1.0.0
"""

from typing import List, Sequence

REDIRECT_MARKER = '>'


def is_redirect_marker(word: str) -> bool:
    """True for '>', '1>', '2>', '>>' and any other word ending in '>'."""
    return word.endswith(REDIRECT_MARKER)


def segment(words: Sequence[str]) -> List[List[str]]:
    """
    Split words into segments at redirection markers.

    There is always one more segment than there are markers, and joining
    the segments back together gives the original words. Segments may be
    empty (for a line that starts with a marker, the first one is).

    Example:
        >>> segment(['echo', 'hi', '>', 'out.txt'])
        [['echo', 'hi'], ['>', 'out.txt']]
    """
    segments: List[List[str]] = []
    current: List[str] = []

    for word in words:
        if is_redirect_marker(word):
            segments.append(current)
            current = []
        current.append(word)

    segments.append(current)
    return segments
