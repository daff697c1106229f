"""
Command pattern interfaces for the CLI harness.
"""

from .command import Command
from .command_context import CommandContext
from .errors import ConfigError, ExecutionError, ExecutionErrorKind, FormatError

__all__ = [
    "Command",
    "CommandContext",
    "ConfigError",
    "ExecutionError",
    "ExecutionErrorKind",
    "FormatError",
]
