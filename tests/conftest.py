import shlex
from collections import deque
from typing import Deque, List, Optional, Tuple, Union

import pytest

from gcs_cli_harness.commands.executor.interface import (
    ExecutionResult,
    ExecutorInterface,
)
from gcs_cli_harness.commands.interfaces.command_context import CommandContext
from gcs_cli_harness.commands.interfaces.errors import (
    ExecutionError,
    ExecutionErrorKind,
)
from gcs_cli_harness.core.identity.interface import StaticIdentityProvider
from gcs_cli_harness.core.storage.memory import MemoryStorage


TEST_BUCKET = "b"
TEST_SERVICE_ACCOUNT = "harness@test-project.iam.gserviceaccount.com"


class FakeExecutor(ExecutorInterface):
    """Executor that replays queued outputs or errors and records every call"""

    def __init__(self) -> None:
        self._responses: Deque[Union[str, ExecutionError]] = deque()
        self.calls: List[Tuple[str, Optional[float]]] = []

    def queue_output(self, output: str) -> None:
        self._responses.append(output)

    def queue_error(self, error: ExecutionError) -> None:
        self._responses.append(error)

    @property
    def command_lines(self) -> List[str]:
        return [command_line for command_line, _ in self.calls]

    async def run(
        self, command_line: str, timeout_seconds: Optional[float] = None
    ) -> ExecutionResult:
        self.calls.append((command_line, timeout_seconds))
        response = self._responses.popleft() if self._responses else ""
        if isinstance(response, ExecutionError):
            raise response
        # Mirror the real executor, which trims captured output
        return ExecutionResult(command_line=command_line, output=response.strip())


class GsutilEmulator(ExecutorInterface):
    """
    Answers gsutil / gcloud storage command lines from a MemoryStorage bucket.

    Only the subcommands the harness wraps are understood. Failures are
    reported the way gsutil reports them: non-zero exit with a
    CommandException in the merged output.
    """

    def __init__(self, storage: MemoryStorage) -> None:
        self.storage = storage
        self.calls: List[str] = []

    async def run(
        self, command_line: str, timeout_seconds: Optional[float] = None
    ) -> ExecutionResult:
        self.calls.append(command_line)
        argv = shlex.split(command_line)
        tool, subcommand, args = argv[0], argv[1], argv[2:]

        if tool == "gsutil" and subcommand == "du":
            output = await self._du(command_line, args)
        elif tool == "gsutil" and subcommand == "cat":
            output = await self._cat(command_line, args)
        elif tool == "gsutil" and subcommand == "rm":
            output = await self._rm(command_line, args)
        elif tool == "gcloud" and subcommand == "storage" and args[0] == "sign-url":
            output = await self._sign_url(command_line, args[1:])
        else:
            raise ExecutionError(
                ExecutionErrorKind.NON_ZERO_EXIT,
                command_line=command_line,
                exit_code=127,
                output=f"{tool}: unsupported command",
            )

        return ExecutionResult(command_line=command_line, output=output.strip())

    def _no_match(self, command_line: str, uri: str) -> ExecutionError:
        return ExecutionError(
            ExecutionErrorKind.NON_ZERO_EXIT,
            command_line=command_line,
            exit_code=1,
            output=f"CommandException: No URLs matched: {uri}",
        )

    def _object_name(self, command_line: str, uri: str) -> str:
        bucket_uri = self.storage.get_gs_uri()
        if uri != bucket_uri and not uri.startswith(bucket_uri + "/"):
            raise self._no_match(command_line, uri)
        return uri[len(bucket_uri):].lstrip("/")

    async def _existing_object(self, command_line: str, uri: str) -> str:
        name = self._object_name(command_line, uri)
        if not name or not await self.storage.object_exists(name):
            raise self._no_match(command_line, uri)
        return name

    async def _matching_objects(self, command_line: str, uri: str) -> List[str]:
        name = self._object_name(command_line, uri)
        if name and await self.storage.object_exists(name):
            return [name]

        prefix = name.rstrip("/") + "/" if name else ""
        names = sorted(
            n for n in await self.storage.list_objects() if n.startswith(prefix)
        )
        if not names:
            raise self._no_match(command_line, uri)
        return names

    async def _du(self, command_line: str, args: List[str]) -> str:
        summarize = "-s" in args
        lines = []
        for uri in [a for a in args if a != "-s"]:
            names = await self._matching_objects(command_line, uri)
            sizes = [(n, await self.storage.get_size(n)) for n in names]
            if summarize:
                lines.append(f"{sum(size for _, size in sizes)}  {uri}")
            else:
                lines.extend(
                    f"{size}  {self.storage.get_gs_uri(n)}" for n, size in sizes
                )
        return "\n".join(lines)

    async def _cat(self, command_line: str, args: List[str]) -> str:
        chunks = []
        for uri in args:
            name = await self._existing_object(command_line, uri)
            chunks.append(await self.storage.get_bytes(name))
        return b"".join(chunks).decode("utf-8")

    async def _rm(self, command_line: str, args: List[str]) -> str:
        uri = args[0]
        name = await self._existing_object(command_line, uri)
        await self.storage.delete_object(name)
        return (
            f"Removing {uri}...\n"
            "/ [1 objects]\n"
            "Operation completed over 1 objects."
        )

    async def _sign_url(self, command_line: str, args: List[str]) -> str:
        options = dict(a[2:].split("=", 1) for a in args if a.startswith("--"))
        uri = [a for a in args if not a.startswith("--")][0]
        name = await self._existing_object(command_line, uri)
        return (
            "---\n"
            "expiration: '2026-10-17 12:10:00'\n"
            "http_verb: GET\n"
            f"resource: {uri}\n"
            f"signed_url: https://storage.googleapis.com/{self.storage.bucket_name}/{name}"
            f"?X-Goog-Expires={options['duration']}"
            f"&X-Goog-Credential={options['impersonate-service-account']}"
            "&X-Goog-Signature=abc123"
        )


@pytest.fixture
def fake_executor() -> FakeExecutor:
    """Executor returning canned output"""
    return FakeExecutor()


@pytest.fixture
def identity_provider() -> StaticIdentityProvider:
    return StaticIdentityProvider(TEST_SERVICE_ACCOUNT)


@pytest.fixture
def command_context(
    fake_executor: FakeExecutor, identity_provider: StaticIdentityProvider
) -> CommandContext:
    """Command context backed by the fake executor"""
    return CommandContext(
        executor=fake_executor,
        bucket_name=TEST_BUCKET,
        timeout_seconds=30.0,
        identity_provider=identity_provider,
        sign_duration="10m",
    )


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Fixture for memory storage"""
    return MemoryStorage(bucket_name=TEST_BUCKET)


@pytest.fixture
def gsutil_emulator(memory_storage: MemoryStorage) -> GsutilEmulator:
    return GsutilEmulator(memory_storage)


@pytest.fixture
def emulated_context(
    gsutil_emulator: GsutilEmulator, identity_provider: StaticIdentityProvider
) -> CommandContext:
    """Command context whose executor answers from an in-memory bucket"""
    return CommandContext(
        executor=gsutil_emulator,
        bucket_name=TEST_BUCKET,
        identity_provider=identity_provider,
        sign_duration="10m",
    )
