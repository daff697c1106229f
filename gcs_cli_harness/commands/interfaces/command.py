from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
import logging
import shlex
import time
from .command_context import CommandContext


T = TypeVar("T")


class Command(ABC, Generic[T]):
    """
    Base interface for all CLI commands in the harness.

    A command turns one or more storage paths into a command line, hands it to
    the context executor, checks the captured text against its grammar and
    converts it into a typed result. Commands never touch the network or the
    filesystem themselves.

    All commands must implement:
    - get_command_name(): Registry key for the command
    - build_command_line(): The exact shell line to run
    - validate_format(): Grammar check on raw output, raising FormatError
    - execute(): Run, validate, then parse
    """

    def __init__(self, context: CommandContext):
        self.context = context
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def get_command_name(self) -> str:
        """
        Return unique identifier for this command.

        Used as the registry key and in log messages. Lowercase with
        underscores (e.g., 'sign_url').
        """
        pass

    @abstractmethod
    def build_command_line(self, *paths: str) -> str:
        """Render the shell command line for the given paths"""
        pass

    @abstractmethod
    def validate_format(self, output: Optional[str]) -> None:
        """
        Check raw command output against the expected grammar.

        Must be called before any parsing; must not modify state.

        Args:
            output: Raw text returned by the executor

        Raises:
            FormatError: When the output does not match the grammar
        """
        pass

    @abstractmethod
    async def execute(self, path: str) -> T:
        """
        Execute the command for a single path.

        Returns:
            The typed, validated result

        Raises:
            ExecutionError: When the executor fails
            FormatError: When output validation fails
        """
        pass

    @property
    def bucket_name(self) -> str:
        return self.context.bucket_name

    @staticmethod
    def quote(path: str) -> str:
        """Shell-quote a storage path"""
        return shlex.quote(path)

    async def run_cli(self, command_line: str) -> str:
        """Run a command line through the context executor and return its output"""
        await self.pre_execute_hook(command_line)
        start_time = time.time()

        result = await self.context.executor.run(
            command_line, self.context.timeout_seconds
        )

        execution_time_ms = (time.time() - start_time) * 1000
        await self.post_execute_hook(command_line, execution_time_ms)
        return result.output

    async def pre_execute_hook(self, command_line: str) -> None:
        """
        Hook called before the command line is handed to the executor.

        Override to add setup such as credential checks.
        """
        self.logger.info(
            f"Executing command '{self.get_command_name()}' "
            f"on bucket {self.bucket_name}: {command_line}"
        )

    async def post_execute_hook(
        self, command_line: str, execution_time_ms: float
    ) -> None:
        """Hook called after the executor returned successfully"""
        self.logger.info(
            f"Command '{self.get_command_name()}' completed "
            f"in {execution_time_ms:.2f}ms"
        )

    def __str__(self) -> str:
        """String representation of the command"""
        return f"{self.__class__.__name__}(name='{self.get_command_name()}')"

    def __repr__(self) -> str:
        """Detailed string representation of the command"""
        return (
            f"{self.__class__.__name__}("
            f"name='{self.get_command_name()}', "
            f"bucket='{self.bucket_name}', "
            f"timeout={self.context.timeout_seconds}s"
            f")"
        )
