from typing import Any
from gcs_cli_harness.core.storage.interface import StorageInterface
from gcs_cli_harness.core.storage.gcs_interop import GCSInteropStorage
from gcs_cli_harness.core.storage.memory import MemoryStorage
from gcs_cli_harness.config.constants import GCS_ENDPOINT


def get_storage(storage_type: str = "gcs", **kwargs: Any) -> StorageInterface:
    """
    Factory function to get the appropriate storage implementation

    Args:
        storage_type: Type of storage ('gcs', or 'memory')
        **kwargs: Additional arguments for the storage implementation

    Returns:
        StorageInterface implementation
    """
    if storage_type.lower() == "gcs":
        bucket_name = kwargs.get("bucket_name")
        if not bucket_name:
            raise ValueError("bucket_name is required for GCS storage")

        return GCSInteropStorage(
            bucket_name=bucket_name,
            endpoint=kwargs.get("endpoint") or GCS_ENDPOINT,
            access_key=kwargs.get("access_key"),
            secret_key=kwargs.get("secret_key"),
            region=kwargs.get("region", "auto"),
            secure=kwargs.get("secure", True),
        )

    elif storage_type.lower() == "memory":
        return MemoryStorage(bucket_name=kwargs.get("bucket_name") or "memory-bucket")

    else:
        raise ValueError(f"Unknown storage type: {storage_type}")
