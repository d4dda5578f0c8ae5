"""Chunking a document served over http(s).

The page is fetched once; the stylesheets, scripts and images it links to by
relative path are resolved against the page URL and downloaded into the
output directory, mirroring what ``files.copy_relative_files`` does for a
local input file.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable
from urllib.parse import urljoin

import httpx

from asciidoctor_chunker.config import (
    CHUNKER_FETCH_RETRIES,
    CHUNKER_FETCH_TIMEOUT_S,
    CHUNKER_USER_AGENT,
)
from asciidoctor_chunker.exceptions import FetchError, SourceNotAvailableError

logger = logging.getLogger(__name__)


def make_client() -> httpx.AsyncClient:
    """Client used for the page and its resources.

    Connection failures are retried by the transport; HTTP error statuses are
    not, since a static page either exists or it does not.
    """
    return httpx.AsyncClient(
        transport=httpx.AsyncHTTPTransport(retries=CHUNKER_FETCH_RETRIES),
        timeout=httpx.Timeout(CHUNKER_FETCH_TIMEOUT_S),
        headers={"User-Agent": CHUNKER_USER_AGENT},
        follow_redirects=True,
    )


async def fetch_document(url: str, client: httpx.AsyncClient) -> tuple[str, str]:
    """Fetch the single-page document.

    Returns:
        The markup and the final URL after redirects, which is the base that
        relative resources resolve against.

    Raises:
        SourceNotAvailableError: If the server answers 404.
        FetchError: On any other HTTP error status or transport failure.
    """
    try:
        response = await client.get(url)
    except httpx.RequestError as exc:
        raise FetchError(f"Could not reach {url}: {exc}") from exc
    if response.status_code == 404:
        raise SourceNotAvailableError(f"No document found at {url}")
    if response.is_error:
        raise FetchError(f"HTTP {response.status_code} from {url}")
    return response.text, str(response.url)


def resource_target(outdir: Path, relative: str) -> Path | None:
    """Where a relative resource goes under ``outdir``, or None if it would escape it."""
    target = (outdir / relative).resolve()
    if not target.is_relative_to(outdir.resolve()):
        return None
    return target


async def _download(
    client: httpx.AsyncClient, base_url: str, outdir: Path, relative: str
) -> Path | None:
    target = resource_target(outdir, relative)
    if target is None:
        logger.warning("Skipping resource outside the output directory: %s", relative)
        return None
    url = urljoin(base_url, relative)
    try:
        response = await client.get(url)
    except httpx.RequestError as exc:
        logger.warning("Could not download %s: %s", url, exc)
        return None
    if response.is_error:
        logger.warning("Linked resource is missing: %s (HTTP %d)", url, response.status_code)
        return None
    await asyncio.to_thread(target.parent.mkdir, parents=True, exist_ok=True)
    await asyncio.to_thread(target.write_bytes, response.content)
    return target


async def download_resources(
    client: httpx.AsyncClient, base_url: str, outdir: Path, files: Iterable[str]
) -> list[Path]:
    """Download every relative resource next to the chunked pages.

    Resources that cannot be fetched are logged and skipped.

    Returns:
        The paths written, in the order of ``files``.
    """
    targets = await asyncio.gather(
        *(_download(client, base_url, outdir, relative) for relative in dict.fromkeys(files))
    )
    return [target for target in targets if target is not None]
