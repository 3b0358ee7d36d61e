"""
myshell Process Module

Launching external programs found on PATH.
"""

from .spawner import ProcessSpawner, ProcessResult

__all__ = [
    'ProcessSpawner',
    'ProcessResult',
]
