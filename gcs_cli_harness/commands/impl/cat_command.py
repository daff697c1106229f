from typing import Optional

from gcs_cli_harness.commands.interfaces.command import Command
from gcs_cli_harness.commands.interfaces.errors import FormatError


class CatCommand(Command[str]):
    """
    Reads object contents from Google Cloud Storage with `gsutil cat`.

    Multiple objects are passed in a single invocation; gsutil writes them
    back to back in argument order with no separator.
    """

    def get_command_name(self) -> str:
        return "cat"

    def build_command_line(self, *paths: str) -> str:
        if not paths:
            raise ValueError("At least one file path must be provided.")
        files = " ".join(self.quote(p) for p in paths)
        return f"{self.context.gsutil_binary} cat {files}"

    def validate_format(self, output: Optional[str]) -> None:
        if not output:
            raise FormatError("cat output is empty or null", output)

    async def execute(self, path: str) -> str:
        return await self.execute_many(path)

    async def execute_many(self, *paths: str) -> str:
        """
        Fetch and concatenate the content of one or more objects.

        Raises:
            ValueError: If no paths are given (before anything is executed)
        """
        command_line = self.build_command_line(*paths)
        output = await self.run_cli(command_line)
        self.validate_format(output)
        return output
