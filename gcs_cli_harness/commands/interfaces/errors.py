from enum import Enum
from typing import Optional


class ExecutionErrorKind(str, Enum):
    """Failure modes of a single CLI invocation"""

    TIMEOUT = "timeout"
    NON_ZERO_EXIT = "non_zero_exit"
    SPAWN_FAILED = "spawn_failed"


class ExecutionError(Exception):
    """
    Raised by an executor when a command line could not be run to a clean exit.

    The captured output is kept for non-zero exits so callers can inspect
    what the tool printed before failing. Timeouts never carry output.
    """

    def __init__(
        self,
        kind: ExecutionErrorKind,
        command_line: str,
        exit_code: Optional[int] = None,
        output: str = "",
        timeout_seconds: Optional[float] = None,
        message: Optional[str] = None,
    ):
        self.kind = kind
        self.command_line = command_line
        self.exit_code = exit_code
        self.output = output
        self.timeout_seconds = timeout_seconds

        if message is None:
            if kind == ExecutionErrorKind.TIMEOUT:
                message = (
                    f"Command timed out after {timeout_seconds}s: {command_line}"
                )
            elif kind == ExecutionErrorKind.NON_ZERO_EXIT:
                message = (
                    f"Command failed: {command_line}\n"
                    f"Exit Code: {exit_code}\nOutput: {output}"
                )
            else:
                message = f"Command could not be started: {command_line}"
        super().__init__(message)

    def is_timeout(self) -> bool:
        return self.kind == ExecutionErrorKind.TIMEOUT


class FormatError(Exception):
    """Raised when captured CLI output does not match a command's expected grammar"""

    def __init__(self, reason: str, raw_output: Optional[str]):
        self.reason = reason
        self.raw_output = raw_output
        super().__init__(reason)


class ConfigError(Exception):
    """Raised when required configuration or credentials are missing or malformed"""

    pass
