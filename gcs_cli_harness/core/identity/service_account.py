import logging
import os
from typing import Optional

from pydantic import ValidationError

from gcs_cli_harness.commands.interfaces.errors import ConfigError
from gcs_cli_harness.config.constants import CREDENTIALS_ENV_VAR
from gcs_cli_harness.core.identity.interface import IdentityProvider
from gcs_cli_harness.models.credentials import ServiceAccountKey


logger = logging.getLogger(__name__)


class ServiceAccountFileIdentityProvider(IdentityProvider):
    """
    Reads the service-account identity from a JSON key file.

    The key path is taken from the constructor or, when omitted, from the
    GOOGLE_APPLICATION_CREDENTIALS environment variable at lookup time. The
    file is parsed on every call so rotated keys are picked up.
    """

    def __init__(
        self,
        key_file_path: Optional[str] = None,
        env_var: str = CREDENTIALS_ENV_VAR,
    ):
        self._key_file_path = key_file_path
        self._env_var = env_var

    @property
    def key_file_path(self) -> Optional[str]:
        """Explicit path if given, otherwise the current environment value"""
        return self._key_file_path or os.environ.get(self._env_var) or None

    def load_key(self) -> ServiceAccountKey:
        """
        Load and validate the key file.

        Raises:
            ConfigError: When the path is unset, unreadable or the JSON is invalid
        """
        path = self.key_file_path
        if not path:
            raise ConfigError(f"{self._env_var} is not set in the environment")

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise ConfigError(f"Cannot read service account key file {path}: {e}") from e

        try:
            key = ServiceAccountKey.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigError(
                f"Service account key file {path} is malformed or has no client_email: "
                f"{e.error_count()} validation error(s)"
            ) from e

        logger.debug(f"Loaded service account key for {key.client_email}")
        return key

    def get_identity_email(self) -> str:
        return self.load_key().client_email

    def get_project_id(self) -> str:
        """Project id recorded in the key file"""
        project_id = self.load_key().project_id
        if not project_id:
            raise ConfigError("Service account key file has no project_id")
        return project_id
