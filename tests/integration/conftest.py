"""
Fixtures for live tests against a real bucket with the real gsutil / gcloud CLIs.

Every test gets a fresh uuid prefix inside GCS_HARNESS_BUCKET, so parallel
runs never see each other's objects, and the prefix is removed afterwards.
Tests are skipped unless the CLIs, the bucket, a service account key and
HMAC interoperability keys are all available.
"""

import os
import shutil
import uuid
from typing import AsyncIterator

import pytest
import pytest_asyncio

from gcs_cli_harness.commands.interfaces.command_context import CommandContext
from gcs_cli_harness.config.settings import HarnessSettings, build_command_context
from gcs_cli_harness.core.storage.gcs_interop import GCSInteropStorage


@pytest.fixture(scope="session")
def harness_settings() -> HarnessSettings:
    return HarnessSettings.from_env()


@pytest.fixture(scope="session")
def live_available(harness_settings: HarnessSettings) -> bool:
    """Check if a live bucket and the CLIs are available"""
    has_tools = shutil.which("gsutil") and shutil.which("gcloud")
    has_keys = os.environ.get("S3_ACCESS_KEY_ID") and os.environ.get(
        "S3_SECRET_ACCESS_KEY"
    )
    return bool(
        has_tools
        and has_keys
        and harness_settings.bucket_name
        and harness_settings.credentials_path
    )


@pytest.fixture
def live_context(
    live_available: bool, harness_settings: HarnessSettings
) -> CommandContext:
    if not live_available:
        pytest.skip("gsutil, gcloud or bucket credentials not available for testing")
    return build_command_context(harness_settings)


@pytest.fixture
def live_storage(
    live_available: bool, harness_settings: HarnessSettings
) -> GCSInteropStorage:
    if not live_available:
        pytest.skip("gsutil, gcloud or bucket credentials not available for testing")
    return GCSInteropStorage(bucket_name=harness_settings.require_bucket())


@pytest_asyncio.fixture
async def run_prefix(live_storage: GCSInteropStorage) -> AsyncIterator[str]:
    """Unique object prefix for one test, cleaned up afterwards"""
    prefix = f"harness_tests/{uuid.uuid4()}"
    yield prefix
    await live_storage.cleanup(prefix)
