from typing import List
import obstore as obs
from obstore.store import MemoryStore

from gcs_cli_harness.core.storage.interface import StorageInterface


class MemoryStorage(StorageInterface):
    """
    In-memory implementation of StorageInterface for unit tests and
    environments without bucket credentials
    """

    def __init__(self, bucket_name: str = "memory-bucket"):
        """
        Initialize in-memory storage

        Args:
            bucket_name: Name reported in gs:// URIs
        """
        self._store = MemoryStore()
        self._bucket_name = bucket_name

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    async def upload_bytes(self, data: bytes, object_name: str) -> str:
        await obs.put_async(self._store, object_name, data)
        return self.get_gs_uri(object_name)

    async def get_bytes(self, object_name: str) -> bytes:
        """Get binary data from in-memory storage"""
        try:
            result = await obs.get_async(self._store, object_name)
            return bytes(await result.bytes_async())
        except FileNotFoundError:
            raise FileNotFoundError(
                f"Object not found in memory storage: {object_name}"
            )

    async def get_size(self, object_name: str) -> int:
        """Size in bytes of a stored object"""
        try:
            meta = await obs.head_async(self._store, object_name)
        except FileNotFoundError:
            raise FileNotFoundError(
                f"Object not found in memory storage: {object_name}"
            )
        return int(meta["size"])

    async def object_exists(self, object_name: str) -> bool:
        try:
            await obs.head_async(self._store, object_name)
        except FileNotFoundError:
            return False
        return True

    async def delete_object(self, object_name: str) -> bool:
        if not await self.object_exists(object_name):
            return False
        await obs.delete_async(self._store, object_name)
        return True

    async def list_objects(self, prefix: str = "") -> List[str]:
        stream = obs.list(self._store, prefix=prefix or None)
        return [meta["path"] for meta in await stream.collect_async()]
