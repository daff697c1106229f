from abc import ABC, abstractmethod
import os
from pathlib import Path
from typing import List, Union


class StorageInterface(ABC):
    """
    Abstract interface for provisioning test objects in a bucket.

    Used by fixtures and scripts to put objects in place before CLI commands
    run and to clean them up afterwards. Commands themselves never use it.
    """

    @abstractmethod
    async def upload_bytes(self, data: bytes, object_name: str) -> str:
        """
        Upload binary data as an object

        Args:
            data: Binary data to save
            object_name: Object name inside the bucket (e.g., "run-1/testfile1.txt")

        Returns:
            gs:// URI of the uploaded object
        """
        pass

    @abstractmethod
    async def delete_object(self, object_name: str) -> bool:
        """
        Delete an object

        Returns:
            True if the object existed and was deleted, False otherwise
        """
        pass

    @abstractmethod
    async def object_exists(self, object_name: str) -> bool:
        """Return whether an object with this name exists"""
        pass

    @abstractmethod
    async def list_objects(self, prefix: str = "") -> List[str]:
        """
        List object names with given prefix

        Args:
            prefix: Name prefix to list

        Returns:
            List of object names
        """
        pass

    @property
    @abstractmethod
    def bucket_name(self) -> str:
        pass

    async def upload_file(
        self, local_path: Union[str, os.PathLike], object_name: str
    ) -> str:
        """
        Upload a local file as an object

        Raises:
            FileNotFoundError: If the local file does not exist
        """
        path = Path(local_path)
        if not path.exists():
            raise FileNotFoundError(f"Local file does not exist: {path}")
        return await self.upload_bytes(path.read_bytes(), object_name)

    def get_gs_uri(self, object_name: str = "") -> str:
        """gs:// URI for an object (or the bucket itself) as the CLI expects it"""
        if not object_name:
            return f"gs://{self.bucket_name}"
        return f"gs://{self.bucket_name}/{object_name.lstrip('/')}"

    async def cleanup(self, prefix: str) -> int:
        """
        Delete every object under a prefix

        Returns:
            Number of objects deleted
        """
        removed_count = 0
        for object_name in await self.list_objects(prefix):
            if await self.delete_object(object_name):
                removed_count += 1
        return removed_count
