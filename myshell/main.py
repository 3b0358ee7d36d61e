#!/usr/bin/env python3
"""
myshell - A small interactive command shell

This is the main entry point for myshell.

Usage:
    myshell               Start the interactive shell
    myshell SCRIPT        Run each line of SCRIPT, exit with the last status

Configuration is read from the file named by $MYSHELL_CONFIG, or from
config.json next to this module when that variable is unset.

Author: YSNRFD
Version: 1.0.0
"""

import os
import sys
from typing import List, Optional

from myshell.core.config_loader import ConfigLoader
from myshell.exceptions import ConfigError
from myshell.logger import Logger, LogLevel
from myshell.shell.shell import create_shell

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'config.json')


def load_configuration() -> None:
    """
    Load configuration and initialize logging.

    Raises:
        ConfigError: If an explicitly requested file cannot be loaded
    """
    loader = ConfigLoader()
    config_path = os.environ.get('MYSHELL_CONFIG')

    if config_path:
        config = loader.load(config_path)
    elif os.path.exists(DEFAULT_CONFIG_PATH):
        config = loader.load(DEFAULT_CONFIG_PATH)
    else:
        config = loader.config

    Logger.initialize(
        level=LogLevel.from_name(config.logging.level),
        log_file=config.logging.log_file,
        console_output=config.logging.console_output,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for myshell.

    Startup sequence:
    1. Load configuration
    2. Initialize logging
    3. Run a script, or start the interactive loop
    """
    args = sys.argv[1:] if argv is None else argv

    try:
        load_configuration()
    except (ConfigError, ValueError) as e:
        print(f"myshell: {e}", file=sys.stderr)
        return 1

    shell = create_shell()

    if args:
        script_path = args[0]
        try:
            with open(script_path, 'r', encoding='utf-8') as f:
                script = f.read()
        except OSError as e:
            print(f"myshell: {script_path}: {e.strerror}", file=sys.stderr)
            return 127
        return shell.run_script(script)

    return shell.run()


if __name__ == '__main__':
    sys.exit(main())
