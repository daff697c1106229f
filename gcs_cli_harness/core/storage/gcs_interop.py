import logging
import os
from typing import List, Optional, Tuple

import obstore as obs
from obstore.store import S3Store

from gcs_cli_harness.config.constants import GCS_ENDPOINT
from gcs_cli_harness.core.storage.interface import StorageInterface


logger = logging.getLogger(__name__)

# HMAC key variables, checked in order
ACCESS_KEY_ENV_VARS = ("S3_ACCESS_KEY_ID", "GCP_ACCESS_KEY_ID")
SECRET_KEY_ENV_VARS = ("S3_SECRET_ACCESS_KEY", "GCP_SECRET_ACCESS_KEY")


def _first_env(names: Tuple[str, ...]) -> Optional[str]:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


class GCSInteropStorage(StorageInterface):
    """
    Provisions objects in a real GCS bucket through the S3 interoperability API.

    The CLIs under test talk to GCS natively; fixtures only need to put objects
    in place and remove them, which obstore's S3Store does with HMAC keys and
    no Google client libraries.
    """

    def __init__(
        self,
        bucket_name: str,
        endpoint: str = GCS_ENDPOINT,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        region: str = "auto",
        secure: bool = True,
    ):
        """
        Args:
            bucket_name: Existing bucket to provision into
            endpoint: Interoperability host (default: storage.googleapis.com)
            access_key: HMAC access id; falls back to S3_ACCESS_KEY_ID / GCP_ACCESS_KEY_ID
            secret_key: HMAC secret; falls back to S3_SECRET_ACCESS_KEY / GCP_SECRET_ACCESS_KEY
            region: Signing region, "auto" for GCS
            secure: Use HTTPS
        """
        access_key = access_key or _first_env(ACCESS_KEY_ENV_VARS)
        secret_key = secret_key or _first_env(SECRET_KEY_ENV_VARS)
        if not access_key or not secret_key:
            raise ValueError(
                "Access key and secret key must be provided either as arguments "
                f"or through {ACCESS_KEY_ENV_VARS} / {SECRET_KEY_ENV_VARS}"
            )

        self._bucket_name = bucket_name
        self._endpoint = endpoint
        scheme = "https" if secure else "http"

        self._store = S3Store(
            bucket_name,
            endpoint=f"{scheme}://{endpoint}",
            access_key_id=access_key,
            secret_access_key=secret_key,
            region=region,
            virtual_hosted_style_request=False,
            client_options={} if secure else {"allow_http": True},
        )
        logger.debug(f"GCS interop storage ready for {self.get_gs_uri()} via {endpoint}")

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def upload_bytes(self, data: bytes, object_name: str) -> str:
        await obs.put_async(self._store, object_name, data)
        logger.debug(f"Uploaded {len(data)} bytes to {self.get_gs_uri(object_name)}")
        return self.get_gs_uri(object_name)

    async def object_exists(self, object_name: str) -> bool:
        try:
            await obs.head_async(self._store, object_name)
        except FileNotFoundError:
            return False
        return True

    async def delete_object(self, object_name: str) -> bool:
        # S3 deletes succeed for missing keys, so existence is checked first
        if not await self.object_exists(object_name):
            return False
        await obs.delete_async(self._store, object_name)
        return True

    async def list_objects(self, prefix: str = "") -> List[str]:
        stream = obs.list(self._store, prefix=prefix or None)
        return [meta["path"] for meta in await stream.collect_async()]
