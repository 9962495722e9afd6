"""
Image downloader.

Fetches a generated image and saves it locally under a name derived from its
prompt. Each download is independent: failures are raised to the caller and
never touch the session or gallery.
"""

import logging
import tempfile
from pathlib import Path
from typing import Optional

import httpx

from .filenames import download_filename

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 60.0


class DownloadError(Exception):
    """Raised when an image could not be fetched or saved."""


async def download_image(
    url: str,
    prompt: str,
    target_dir: Path,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DOWNLOAD_TIMEOUT,
) -> Path:
    """Download `url` into its own folder under `target_dir`.

    Each call writes to a fresh subfolder, so concurrent downloads of images
    with the same prompt never overwrite each other.

    Returns:
        Path to the saved image file
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
        content = response.content
    except httpx.HTTPError as e:
        raise DownloadError(f"Could not fetch image: {e}") from e

    try:
        target_dir = Path(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        folder = Path(tempfile.mkdtemp(prefix="download_", dir=target_dir))
        output_path = folder / download_filename(prompt)
        output_path.write_bytes(content)
    except OSError as e:
        raise DownloadError(f"Could not save image: {e}") from e

    logger.info(f"Saved download to: {output_path}")
    return output_path
