from typing import Optional
from dataclasses import dataclass
from gcs_cli_harness.commands.executor.interface import ExecutorInterface
from gcs_cli_harness.core.identity.interface import IdentityProvider
from gcs_cli_harness.config.constants import (
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DEFAULT_SIGN_DURATION,
    GCLOUD_BINARY,
    GSUTIL_BINARY,
)


@dataclass(frozen=True)
class CommandContext:
    """
    Construction-time configuration shared by every command.

    Commands receive the context once when they are built and never mutate
    it, so a single context can back any number of concurrent commands.
    """

    # Core execution parameters
    executor: ExecutorInterface
    bucket_name: str

    timeout_seconds: float = DEFAULT_COMMAND_TIMEOUT_SECONDS

    # Signing (only sign-url needs these)
    identity_provider: Optional[IdentityProvider] = None
    sign_duration: str = DEFAULT_SIGN_DURATION

    # rm: report transport failures as NOT_FOUND instead of raising
    fold_transport_errors: bool = True

    # Tool binaries, overridable for wrappers such as `gcloud storage`
    gsutil_binary: str = GSUTIL_BINARY
    gcloud_binary: str = GCLOUD_BINARY

    def __post_init__(self) -> None:
        """Validate context after initialization"""
        if self.executor is None:
            raise ValueError("executor is required")
        if not self.bucket_name:
            raise ValueError("bucket_name is required")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    def bucket_uri(self, object_name: str = "") -> str:
        """gs:// URI for the context bucket, optionally for an object inside it"""
        base = f"gs://{self.bucket_name}"
        if not object_name:
            return base
        return f"{base}/{object_name.lstrip('/')}"
