import asyncio
import logging
import os
import signal
import time
from typing import Any, Dict, Optional, Tuple

from gcs_cli_harness.commands.executor.interface import (
    ExecutionRequest,
    ExecutionResult,
    ExecutorInterface,
)
from gcs_cli_harness.commands.interfaces.errors import (
    ExecutionError,
    ExecutionErrorKind,
)
from gcs_cli_harness.config.constants import DEFAULT_COMMAND_TIMEOUT_SECONDS


logger = logging.getLogger(__name__)


class CLIExecutor(ExecutorInterface):
    """
    Executes command lines through the host shell with a bounded wait.

    Standard error is merged into standard output, so diagnostics and payload
    text interleave in the captured result. Draining the output and waiting
    for exit share one timeout, so neither a process that never closes its
    output nor one that closes it early and keeps running can block the
    caller.

    On timeout the whole process group is killed and reaped before the error
    is raised, so no child outlives the call.
    """

    def __init__(
        self,
        default_timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
        shell_executable: Optional[str] = None,
    ):
        """
        Initialize the executor.

        Args:
            default_timeout_seconds: Timeout used when run() is not given one
            shell_executable: Shell to use instead of the platform default
                (e.g. "/bin/bash"); None keeps /bin/sh or cmd.exe
        """
        if default_timeout_seconds <= 0:
            raise ValueError("default_timeout_seconds must be positive")

        self._default_timeout_seconds = default_timeout_seconds
        self._shell_executable = shell_executable

    @property
    def default_timeout_seconds(self) -> float:
        return self._default_timeout_seconds

    @property
    def shell_executable(self) -> Optional[str]:
        return self._shell_executable

    async def run(
        self, command_line: str, timeout_seconds: Optional[float] = None
    ) -> ExecutionResult:
        request = ExecutionRequest(
            command_line=command_line,
            timeout_seconds=(
                self._default_timeout_seconds
                if timeout_seconds is None
                else timeout_seconds
            ),
        )
        return await self.run_request(request)

    async def run_request(self, request: ExecutionRequest) -> ExecutionResult:
        """Run an already-built ExecutionRequest"""
        logger.info(
            f"Executing: {request.command_line} (timeout: {request.timeout_seconds}s)"
        )
        start_time = time.time()

        process = await self._spawn(request.command_line)
        try:
            raw_output, exit_code = await asyncio.wait_for(
                self._communicate(process), timeout=request.timeout_seconds
            )
        except asyncio.TimeoutError:
            await self._terminate(process)
            logger.error(
                f"Command timed out after {request.timeout_seconds}s "
                f"and was killed: {request.command_line}"
            )
            raise ExecutionError(
                ExecutionErrorKind.TIMEOUT,
                command_line=request.command_line,
                timeout_seconds=request.timeout_seconds,
            )
        except asyncio.CancelledError:
            await self._terminate(process)
            raise

        output = raw_output.decode("utf-8", errors="replace").strip()
        duration_ms = (time.time() - start_time) * 1000

        if exit_code != 0:
            logger.warning(
                f"Command exited with code {exit_code} after {duration_ms:.2f}ms: "
                f"{request.command_line}"
            )
            raise ExecutionError(
                ExecutionErrorKind.NON_ZERO_EXIT,
                command_line=request.command_line,
                exit_code=exit_code,
                output=output,
            )

        logger.debug(
            f"Command completed in {duration_ms:.2f}ms "
            f"({len(output)} chars): {request.command_line}"
        )
        return ExecutionResult(
            command_line=request.command_line,
            output=output,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    async def _spawn(self, command_line: str) -> asyncio.subprocess.Process:
        kwargs: Dict[str, Any] = {
            "stdin": asyncio.subprocess.DEVNULL,
            "stdout": asyncio.subprocess.PIPE,
            "stderr": asyncio.subprocess.STDOUT,
        }
        if self._shell_executable:
            kwargs["executable"] = self._shell_executable
        if os.name == "posix":
            # Own process group so a timeout can take down grandchildren too
            kwargs["start_new_session"] = True

        try:
            return await asyncio.create_subprocess_shell(command_line, **kwargs)
        except OSError as e:
            logger.error(f"Failed to start command '{command_line}': {e}")
            raise ExecutionError(
                ExecutionErrorKind.SPAWN_FAILED,
                command_line=command_line,
                message=f"Command could not be started: {command_line}: {e}",
            ) from e

    @staticmethod
    async def _communicate(
        process: asyncio.subprocess.Process,
    ) -> Tuple[bytes, int]:
        """Drain merged output, then wait for exit; both count against the timeout"""
        assert process.stdout is not None
        raw_output = await process.stdout.read()
        exit_code = await process.wait()
        return raw_output, exit_code

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process) -> None:
        """Kill the process (and its group on POSIX) and reap it"""
        try:
            if os.name == "posix":
                os.killpg(process.pid, signal.SIGKILL)
            elif process.returncode is None:
                process.kill()
        except ProcessLookupError:
            pass

        await process.wait()
        logger.debug(f"Process {process.pid} terminated")
