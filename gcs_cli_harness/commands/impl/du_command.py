import re
from typing import Dict, Optional, Tuple

from gcs_cli_harness.commands.interfaces.command import Command
from gcs_cli_harness.commands.interfaces.errors import FormatError


class DuCommand(Command[Dict[str, str]]):
    """
    Retrieves object sizes from Google Cloud Storage with `gsutil du`.

    Each output line has the form "<size> <path>". The whole output is
    rejected if any single line is malformed or reports a negative size;
    no partial mapping is ever returned.
    """

    # ASCII digits only; optional sign so negative sizes are reported as such
    DU_LINE_PATTERN = re.compile(r"^(-?[0-9]+)\s+(\S.*)$")

    def get_command_name(self) -> str:
        return "du"

    def build_command_line(self, *paths: str, summarize: bool = False) -> str:
        if not paths:
            raise ValueError("At least one path must be provided.")
        flags = " -s" if summarize else ""
        quoted = " ".join(self.quote(p) for p in paths)
        return f"{self.context.gsutil_binary} du{flags} {quoted}"

    def _parse_line(self, line: str, output: str) -> Tuple[str, str]:
        match = self.DU_LINE_PATTERN.match(line.strip())
        if not match:
            raise FormatError(f"Invalid du output format: {line!r}", output)

        size_str, path = match.group(1), match.group(2).rstrip()
        if int(size_str) < 0:
            raise FormatError(f"Negative file size found: {size_str}", output)
        return path, size_str

    def validate_format(self, output: Optional[str]) -> None:
        if output is None:
            raise FormatError("du output is null", output)

        for line in output.splitlines():
            self._parse_line(line, output)

    def parse_output(self, output: str) -> Dict[str, str]:
        """Map each reported path to its size string, verbatim"""
        file_sizes: Dict[str, str] = {}
        for line in output.splitlines():
            path, size_str = self._parse_line(line, output)
            file_sizes[path] = size_str
        return file_sizes

    async def execute(self, path: str) -> Dict[str, str]:
        return await self.execute_many(path)

    async def execute_many(
        self, *paths: str, summarize: bool = False
    ) -> Dict[str, str]:
        """
        Report sizes for one or more paths.

        Args:
            paths: gs:// object, prefix or bucket URIs
            summarize: Pass -s so each argument reports a single total

        Returns:
            Mapping of path to size in bytes, as the strings gsutil printed
        """
        output = await self.run_cli(
            self.build_command_line(*paths, summarize=summarize)
        )
        self.validate_format(output)
        return self.parse_output(output)
