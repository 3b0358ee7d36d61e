"""
myshell Shell Module

Provides the interactive command-line shell:
- Tokenizing and segmenting command lines
- Command resolution
- Built-in commands
- Output redirection
- Line execution
"""

from .tokenizer import Tokenizer, TokenizerState, tokenize
from .segmenter import segment, is_redirect_marker
from .context import ExecutionContext
from .resolver import CommandResolver, CommandType, Resolution
from .builtins import BuiltinCommands
from .redirect import RedirectHandler, RedirectMode
from .engine import ExecutionEngine
from .shell import Shell, create_shell

__all__ = [
    'Tokenizer',
    'TokenizerState',
    'tokenize',
    'segment',
    'is_redirect_marker',
    'ExecutionContext',
    'CommandResolver',
    'CommandType',
    'Resolution',
    'BuiltinCommands',
    'RedirectHandler',
    'RedirectMode',
    'ExecutionEngine',
    'Shell',
    'create_shell',
]
