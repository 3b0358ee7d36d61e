"""
myshell - A small interactive command shell

Reads command lines, splits them into words honoring quotes and escapes,
runs builtins or programs found on PATH, and writes output to files with
'>' redirection. Implemented in Python 3.10+ using only the standard
library.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .shell.engine import ExecutionEngine
from .shell.shell import Shell, create_shell
from .shell.tokenizer import tokenize
from .shell.segmenter import segment

__all__ = [
    'ExecutionEngine',
    'Shell',
    'create_shell',
    'tokenize',
    'segment',
]
