"""
Harness settings from environment variables.

A .env file is loaded first (path from GCS_HARNESS_ENV_FILE, else ./.env) so
local runs can keep bucket and credential settings out of the shell profile.
Variables already set in the environment win over the file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from gcs_cli_harness.commands.executor.cli_executor import CLIExecutor
from gcs_cli_harness.commands.interfaces.command_context import CommandContext
from gcs_cli_harness.commands.interfaces.errors import ConfigError
from gcs_cli_harness.config.constants import (
    CREDENTIALS_ENV_VAR,
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DEFAULT_ENV_FILE,
    DEFAULT_SIGN_DURATION,
    ENV_FILE_ENV_VAR,
)
from gcs_cli_harness.core.identity.service_account import (
    ServiceAccountFileIdentityProvider,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HarnessSettings:
    """Runtime configuration for commands, scripts and live tests"""

    bucket_name: Optional[str] = None
    command_timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS
    shell_executable: Optional[str] = None
    sign_duration: str = DEFAULT_SIGN_DURATION
    fold_rm_errors: bool = True
    log_level: str = "INFO"
    credentials_path: Optional[str] = None

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "HarnessSettings":
        """
        Load settings from environment variables.

        Args:
            load_env_file: Read a .env file before consulting os.environ

        Returns:
            HarnessSettings instance with values from environment
        """
        if load_env_file:
            load_env()

        return cls(
            bucket_name=os.getenv("GCS_HARNESS_BUCKET") or None,
            command_timeout_seconds=cls._get_float(
                "GCS_HARNESS_COMMAND_TIMEOUT", DEFAULT_COMMAND_TIMEOUT_SECONDS
            ),
            shell_executable=os.getenv("GCS_HARNESS_SHELL") or None,
            sign_duration=os.getenv("GCS_HARNESS_SIGN_DURATION") or DEFAULT_SIGN_DURATION,
            fold_rm_errors=cls._get_bool("GCS_HARNESS_FOLD_RM_ERRORS", True),
            log_level=os.getenv("GCS_HARNESS_LOG_LEVEL", "INFO").upper(),
            credentials_path=os.getenv(CREDENTIALS_ENV_VAR) or None,
        )

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default

        try:
            parsed = float(value)
        except ValueError:
            logger.warning("Invalid number for %s: %s, using default %s", key, value, default)
            return default

        if parsed <= 0:
            logger.warning("Non-positive value for %s: %s, using default %s", key, value, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default

        normalized = value.strip().lower()
        if normalized in ("1", "true", "yes", "on"):
            return True
        if normalized in ("0", "false", "no", "off"):
            return False

        logger.warning("Invalid boolean for %s: %s, using default %s", key, value, default)
        return default

    def require_bucket(self) -> str:
        if not self.bucket_name:
            raise ConfigError("GCS_HARNESS_BUCKET is not set")
        return self.bucket_name


def load_env(env_file: Optional[str] = None) -> bool:
    """
    Load a .env file into os.environ without overriding existing variables.

    Returns:
        True if a file was found and loaded
    """
    path = env_file or os.getenv(ENV_FILE_ENV_VAR) or DEFAULT_ENV_FILE
    if not os.path.exists(path):
        logger.debug(f"No .env file found at {path}, using system environment variables")
        return False

    load_dotenv(path, override=False)
    logger.debug(f"Loaded environment from {path}")
    return True


def build_command_context(
    settings: HarnessSettings, bucket_name: Optional[str] = None
) -> CommandContext:
    """
    Wire executor, identity provider and settings into a CommandContext.

    Args:
        settings: Harness settings
        bucket_name: Overrides settings.bucket_name when given

    Raises:
        ConfigError: If no bucket is configured
    """
    bucket = bucket_name or settings.require_bucket()
    executor = CLIExecutor(
        default_timeout_seconds=settings.command_timeout_seconds,
        shell_executable=settings.shell_executable,
    )
    return CommandContext(
        executor=executor,
        bucket_name=bucket,
        timeout_seconds=settings.command_timeout_seconds,
        identity_provider=ServiceAccountFileIdentityProvider(settings.credentials_path),
        sign_duration=settings.sign_duration,
        fold_transport_errors=settings.fold_rm_errors,
    )
