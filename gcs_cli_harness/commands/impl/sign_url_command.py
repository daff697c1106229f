import re
from typing import Optional

from gcs_cli_harness.commands.interfaces.command import Command
from gcs_cli_harness.commands.interfaces.command_context import CommandContext
from gcs_cli_harness.commands.interfaces.errors import ConfigError, FormatError
from gcs_cli_harness.config.constants import SIGNED_URL_LABEL, SIGNED_URL_PREFIX


class SignUrlCommand(Command[str]):
    """
    Generates a signed URL with `gcloud storage sign-url`.

    Signing impersonates the service account supplied by the context's
    identity provider, for the duration fixed in the context (e.g. "10m").
    gcloud prints a small YAML document; the URL is taken from its last
    non-empty line after stripping the "signed_url:" label.
    """

    SIGNED_URL_PATTERN = re.compile(re.escape(SIGNED_URL_PREFIX) + r"\S+")

    def __init__(self, context: CommandContext):
        super().__init__(context)
        if not context.sign_duration:
            raise ValueError("sign_duration is required for sign-url")

    def get_command_name(self) -> str:
        return "sign_url"

    @property
    def duration(self) -> str:
        return self.context.sign_duration

    def get_service_account_email(self) -> str:
        """
        Identity to impersonate while signing.

        Raises:
            ConfigError: If no identity provider is configured or it cannot resolve one
        """
        if self.context.identity_provider is None:
            raise ConfigError("No identity provider configured for sign-url")
        return self.context.identity_provider.get_identity_email()

    def build_command_line(self, *paths: str) -> str:
        if len(paths) != 1:
            raise ValueError("sign-url takes exactly one path")
        service_account_email = self.get_service_account_email()
        return (
            f"{self.context.gcloud_binary} storage sign-url "
            f"--duration={self.duration} "
            f"--impersonate-service-account={service_account_email} "
            f"{self.quote(paths[0])}"
        )

    def validate_format(self, output: Optional[str]) -> None:
        if not output:
            raise FormatError("sign-url output is empty or null", output)

        if not self.SIGNED_URL_PATTERN.search(output):
            raise FormatError(
                f"Failed to extract Signed URL from output: {output}", output
            )

    def extract_signed_url(self, output: str) -> str:
        """Pull the signed URL out of validated sign-url output"""
        lines = [line.strip() for line in output.splitlines() if line.strip()]
        last_line = lines[-1] if lines else ""
        if last_line.startswith(SIGNED_URL_LABEL):
            last_line = last_line[len(SIGNED_URL_LABEL):].strip()

        match = self.SIGNED_URL_PATTERN.search(last_line)
        if match is None:
            match = self.SIGNED_URL_PATTERN.search(output)
        if match is None:
            raise FormatError(
                f"Failed to extract Signed URL from output: {output}", output
            )
        return match.group(0)

    async def execute(self, path: str) -> str:
        """
        Sign a single object URI.

        Args:
            path: Full gs:// URI of the object (e.g. gs://my-bucket/file.txt)

        Returns:
            The signed URL
        """
        command_line = self.build_command_line(path)
        self.logger.info(f"Signing {path} for {self.duration}")

        output = await self.run_cli(command_line)
        self.validate_format(output)
        return self.extract_signed_url(output)
