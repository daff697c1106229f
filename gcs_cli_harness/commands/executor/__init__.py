"""
Subprocess execution for CLI commands with timeout handling and
combined output capture.
"""

from .cli_executor import CLIExecutor
from .interface import ExecutionRequest, ExecutionResult, ExecutorInterface

__all__ = ["CLIExecutor", "ExecutionRequest", "ExecutionResult", "ExecutorInterface"]
