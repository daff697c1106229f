"""
Live checks of each command against a real bucket.

Mirrors the manual workflow the harness automates: create local files,
upload them, run the CLI through the command layer and compare what comes
back with what was uploaded.
"""

from pathlib import Path

import pytest

from gcs_cli_harness.commands.impl.cat_command import CatCommand
from gcs_cli_harness.commands.impl.du_command import DuCommand
from gcs_cli_harness.commands.impl.rm_command import RmCommand, RmCommandStatus
from gcs_cli_harness.commands.impl.sign_url_command import SignUrlCommand
from gcs_cli_harness.commands.interfaces.command_context import CommandContext
from gcs_cli_harness.core.storage.gcs_interop import GCSInteropStorage
from gcs_cli_harness.util.local_files import create_sized_file, create_text_file
from gcs_cli_harness.util.signed_url_download import download_signed_url


pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_du_reports_uploaded_sizes(
    live_context: CommandContext,
    live_storage: GCSInteropStorage,
    run_prefix: str,
    tmp_path: Path,
) -> None:
    first = create_sized_file(tmp_path / "testfile1.txt", 1024 * 1024)
    second = create_sized_file(tmp_path / "testfile2.txt", 2 * 1024 * 1024)
    uri1 = await live_storage.upload_file(first, f"{run_prefix}/testfile1.txt")
    uri2 = await live_storage.upload_file(second, f"{run_prefix}/testfile2.txt")

    sizes = await DuCommand(live_context).execute_many(uri1, uri2)

    assert sizes == {uri1: str(1024 * 1024), uri2: str(2 * 1024 * 1024)}


@pytest.mark.asyncio
async def test_du_summarize_prefix(
    live_context: CommandContext,
    live_storage: GCSInteropStorage,
    run_prefix: str,
) -> None:
    await live_storage.upload_bytes(b"x" * 100, f"{run_prefix}/a.txt")
    await live_storage.upload_bytes(b"y" * 200, f"{run_prefix}/b.txt")
    prefix_uri = live_storage.get_gs_uri(run_prefix)

    sizes = await DuCommand(live_context).execute_many(prefix_uri, summarize=True)

    assert list(sizes.values()) == ["300"]


@pytest.mark.asyncio
async def test_cat_concatenates(
    live_context: CommandContext,
    live_storage: GCSInteropStorage,
    run_prefix: str,
    tmp_path: Path,
) -> None:
    create_text_file(tmp_path / "testfile1.txt", "Sample content ")
    create_text_file(tmp_path / "testfile2.txt", "and more")
    uri1 = await live_storage.upload_file(
        tmp_path / "testfile1.txt", f"{run_prefix}/testfile1.txt"
    )
    uri2 = await live_storage.upload_file(
        tmp_path / "testfile2.txt", f"{run_prefix}/testfile2.txt"
    )

    content = await CatCommand(live_context).execute_many(uri1, uri2)

    assert content == "Sample content and more"


@pytest.mark.asyncio
async def test_rm_then_rm_again(
    live_context: CommandContext,
    live_storage: GCSInteropStorage,
    run_prefix: str,
) -> None:
    object_name = f"{run_prefix}/testfile1.txt"
    uri = await live_storage.upload_bytes(b"Sample content", object_name)
    command = RmCommand(live_context)

    first = await command.execute(uri)
    second = await command.execute(uri)

    assert first in (RmCommandStatus.REMOVED, RmCommandStatus.NO_OUTPUT)
    assert second == RmCommandStatus.NOT_FOUND
    assert not await live_storage.object_exists(object_name)


@pytest.mark.asyncio
async def test_signed_url_downloads_object(
    live_context: CommandContext,
    live_storage: GCSInteropStorage,
    run_prefix: str,
) -> None:
    uri = await live_storage.upload_bytes(
        b"Sample content", f"{run_prefix}/testfile1.txt"
    )

    url = await SignUrlCommand(live_context).execute(uri)
    downloaded = await download_signed_url(url)

    assert url.startswith("https://storage.googleapis.com/")
    assert downloaded.is_success()
    assert downloaded.content == b"Sample content"
    assert downloaded.suggested_filename == "testfile1.txt"
