"""
myshell Core Module

Components shared by every shell subsystem:
- Configuration Loader
- Environment (variables, working directory, filesystem queries)
"""

from .config_loader import (
    ConfigLoader,
    Config,
    ShellConfig,
    ExecutionConfig,
    LoggingConfig,
    get_config,
)
from .environment import Environment

__all__ = [
    # Configuration
    'ConfigLoader',
    'Config',
    'ShellConfig',
    'ExecutionConfig',
    'LoggingConfig',
    'get_config',
    # Environment
    'Environment',
]
