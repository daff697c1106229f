from enum import Enum
from typing import Optional

from gcs_cli_harness.commands.interfaces.command import Command
from gcs_cli_harness.commands.interfaces.errors import ExecutionError, FormatError
from gcs_cli_harness.config.constants import RM_NOT_FOUND_MARKERS


class RmCommandStatus(Enum):
    """Outcome of a `gsutil rm` invocation"""

    NO_OUTPUT = 0  # Command succeeded silently
    REMOVED = 1  # Command succeeded and reported what it removed
    NOT_FOUND = 2  # Nothing matched the target


class RmCommand(Command[RmCommandStatus]):
    """
    Deletes an object from Google Cloud Storage with `gsutil rm`.

    gsutil exits non-zero when the target does not exist, so a failed
    invocation whose output carries a not-found marker is reported as
    NOT_FOUND. Any other transport failure is folded into NOT_FOUND as well
    unless the context disables fold_transport_errors, in which case the
    ExecutionError propagates.
    """

    def get_command_name(self) -> str:
        return "rm"

    def build_command_line(self, *paths: str) -> str:
        if len(paths) != 1:
            raise ValueError("rm takes exactly one path")
        return f"{self.context.gsutil_binary} rm {self.quote(paths[0])}"

    def validate_format(self, output: Optional[str]) -> None:
        # Any text is acceptable, including none at all
        if output is None:
            raise FormatError("rm output is null", output)

    @staticmethod
    def is_not_found(output: str) -> bool:
        return any(marker in output for marker in RM_NOT_FOUND_MARKERS)

    def classify(self, output: str) -> RmCommandStatus:
        if self.is_not_found(output):
            return RmCommandStatus.NOT_FOUND
        if not output:
            return RmCommandStatus.NO_OUTPUT
        return RmCommandStatus.REMOVED

    async def execute(self, path: str) -> RmCommandStatus:
        command_line = self.build_command_line(path)

        try:
            output = await self.run_cli(command_line)
        except ExecutionError as e:
            if self.is_not_found(e.output):
                self.logger.warning(f"File not found: {path}")
                return RmCommandStatus.NOT_FOUND
            if not self.context.fold_transport_errors:
                raise
            self.logger.warning(
                f"rm of {path} failed ({e.kind.value}); treating as not found: {e}"
            )
            return RmCommandStatus.NOT_FOUND

        self.validate_format(output)
        status = self.classify(output)
        if status == RmCommandStatus.NOT_FOUND:
            self.logger.warning(f"File not found: {path}")
        return status
