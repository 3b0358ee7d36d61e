"""
Execution Context

The per-segment record of arguments, captured output, error text and
status that flows through the execution engine.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import List, Optional

STATUS_SUCCESS = 0
STATUS_FAILURE = 1


@dataclass
class ExecutionContext:
    """
    State of one command segment.

    A fresh context starts out failed (status 1) with empty streams. The
    handler that executes the segment sets the final status together with
    the stream that carries its result.
    """
    command_name: str = ''
    args: List[str] = field(default_factory=list)
    status: int = STATUS_FAILURE
    stdout: str = ''
    stderr: str = ''

    @classmethod
    def for_segment(cls, words: List[str]) -> 'ExecutionContext':
        """Build a context whose args are the segment's words."""
        return cls(command_name=words[0] if words else '', args=list(words))

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_SUCCESS

    def succeed(self, output: str = '') -> 'ExecutionContext':
        self.status = STATUS_SUCCESS
        self.stdout = output
        return self

    def fail(self, message: str, status: Optional[int] = None) -> 'ExecutionContext':
        self.status = STATUS_FAILURE if status is None else status
        self.stderr = message
        return self
