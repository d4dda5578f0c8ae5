"""Load the single-page HTML document to chunk, with the files it links to."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from asciidoctor_chunker.dom import Node
from asciidoctor_chunker.exceptions import SourceNotAvailableError
from asciidoctor_chunker.files import copy_relative_files, get_local_files, mkdir_async, read_text_async
from asciidoctor_chunker.remote import download_resources, fetch_document, make_client

logger = logging.getLogger(__name__)

_REMOTE_SCHEMES = ("http://", "https://")


def is_remote(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(_REMOTE_SCHEMES)


@dataclass
class LoadedSource:
    """Parsed input document and the resource files placed next to the output."""

    document: Node
    resources: list[Path] = field(default_factory=list)


async def load_source(source: str | Path, outdir: Path) -> LoadedSource:
    """Parse the input and bring its relative resources into ``outdir``.

    ``source`` is a local path or an http(s) URL. Local resources are copied
    when newer; remote ones are resolved against the page URL and downloaded.
    ``outdir`` is created once the document has been read.

    Raises:
        SourceNotAvailableError: If the file does not exist or the URL
            returns 404.
        FetchError: If the remote page cannot be fetched.
    """
    if is_remote(source):
        logger.info("Fetching %s", source)
        async with make_client() as client:
            html, base_url = await fetch_document(str(source), client)
            document = Node.from_html(html)
            await mkdir_async(outdir, parents=True, exist_ok=True)
            resources = await download_resources(
                client, base_url, outdir, get_local_files(document)
            )
        return LoadedSource(document=document, resources=resources)

    path = Path(source)
    if not path.is_file():
        raise SourceNotAvailableError(f"Input HTML file not found: {path}")
    document = Node.from_html(await read_text_async(path))
    await mkdir_async(outdir, parents=True, exist_ok=True)
    resources = await asyncio.to_thread(
        copy_relative_files, path, outdir, get_local_files(document)
    )
    return LoadedSource(document=document, resources=resources)
