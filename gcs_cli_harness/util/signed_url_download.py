from dataclasses import dataclass
import logging
import re
from typing import Optional
from urllib.parse import unquote, urlparse

import aiohttp


logger = logging.getLogger(__name__)

_FILENAME_PATTERN = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.IGNORECASE)


@dataclass
class DownloadedObject:
    """What a signed URL served when fetched"""

    status: int
    content: bytes
    suggested_filename: str
    content_type: Optional[str] = None

    def is_success(self) -> bool:
        return self.status == 200


def suggested_filename(url: str, content_disposition: Optional[str] = None) -> str:
    """
    Filename a browser would propose for a download.

    Prefers the Content-Disposition header, falls back to the last path
    segment of the URL.
    """
    if content_disposition:
        match = _FILENAME_PATTERN.search(content_disposition)
        if match:
            return unquote(match.group(1))
    return unquote(urlparse(url).path.rsplit("/", 1)[-1])


async def download_signed_url(url: str, timeout_seconds: float = 60.0) -> DownloadedObject:
    """
    Fetch a signed URL and report what came back

    Args:
        url: Signed URL produced by `gcloud storage sign-url`
        timeout_seconds: Total request timeout

    Returns:
        DownloadedObject with status, body and suggested filename
    """
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.get(url) as response:
            content = await response.read()
            if response.status != 200:
                logger.warning(f"Signed URL download returned {response.status}")

            return DownloadedObject(
                status=response.status,
                content=content,
                suggested_filename=suggested_filename(
                    url, response.headers.get("Content-Disposition")
                ),
                content_type=response.headers.get("Content-Type"),
            )
