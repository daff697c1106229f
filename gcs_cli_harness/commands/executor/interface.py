from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ExecutionRequest:
    """A single command line and the longest we are willing to wait for its output"""

    command_line: str
    timeout_seconds: float

    def __post_init__(self) -> None:
        if not self.command_line or not self.command_line.strip():
            raise ValueError("command_line is required")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")


@dataclass(frozen=True)
class ExecutionResult:
    """Combined stdout/stderr of a finished command, trimmed"""

    command_line: str
    output: str
    exit_code: int = 0
    duration_ms: float = 0.0

    def is_empty(self) -> bool:
        return not self.output


class ExecutorInterface(ABC):
    """
    Runs shell command lines on behalf of commands.

    Commands never spawn processes themselves; they hand a command line to an
    executor and work only with the text it returns. Tests substitute a fake
    implementation to drive commands without a live backend.
    """

    @abstractmethod
    async def run(
        self, command_line: str, timeout_seconds: Optional[float] = None
    ) -> ExecutionResult:
        """
        Run a command line to completion.

        Args:
            command_line: Shell-interpretable command line
            timeout_seconds: Maximum wait for output; executor default when None

        Returns:
            ExecutionResult with the trimmed, merged output

        Raises:
            ExecutionError: On timeout, non-zero exit, or spawn failure
        """
        pass
