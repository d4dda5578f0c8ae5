"""Chunking pipeline: single-page Asciidoctor HTML -> linked pages."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from asciidoctor_chunker.config import CHUNKER_OUTDIR, CHUNKER_TITLE_PAGE
from asciidoctor_chunker.css import DEFAULT_STYLESHEET, extract_css, insert_css, install_stylesheets
from asciidoctor_chunker.dom import FOOTNOTES_SELECTOR, Node
from asciidoctor_chunker.exceptions import WriteError
from asciidoctor_chunker.files import write_text_async
from asciidoctor_chunker.footnotes import get_footnote_def_ids
from asciidoctor_chunker.id_index import IdIndex, build_id_index
from asciidoctor_chunker.links import rewrite_links
from asciidoctor_chunker.naming import INDEX_BASENAME, PREAMBLE_BASENAME, page_filename, part_basename
from asciidoctor_chunker.page import PageAssembler, make_container
from asciidoctor_chunker.partition import SectionSlice, chapter_processor
from asciidoctor_chunker.schemas import DepthPolicy
from asciidoctor_chunker.source import load_source
from asciidoctor_chunker.toc import add_titlepage_toc, check_toc_links
from asciidoctor_chunker.walker import ContentProcessors, part_nodes, process_contents

logger = logging.getLogger(__name__)

Printer = Callable[[str, str], None]


@dataclass
class ChunkerOptions:
    """Options for chunking a document.

    Attributes:
        depth: How deep each chapter is split into pages.
        outdir: Directory the pages are written to.
        css: Stylesheets linked from every page. The bundled
            ``asciidoctor-chunker.css`` is written out; other paths are copied.
        strict_mode: If True, drop unknown blocks under ``div#content``
            instead of repeating them on every page.
        title_page: Label of the TOC entry for the first page.
    """

    depth: DepthPolicy = field(default_factory=DepthPolicy)
    outdir: Path = CHUNKER_OUTDIR
    css: list[str] = field(default_factory=lambda: [DEFAULT_STYLESHEET])
    strict_mode: bool = True
    title_page: str = CHUNKER_TITLE_PAGE


@dataclass
class ChunkResult:
    """Outcome of a chunking run.

    Attributes:
        pages: Basenames handed to the printer, in page order.
        failed: Basenames whose assembly or printing raised; the run carried on past them.
        stylesheets: ``(filename, css)`` pairs extracted from inline styles.
        resources: Linked files copied or downloaded into the output directory.
    """

    pages: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    stylesheets: list[tuple[str, str]] = field(default_factory=list)
    resources: list[Path] = field(default_factory=list)


def prepare_skeleton(
    document: Node, id_index: IdIndex, options: ChunkerOptions
) -> tuple[Node, list[tuple[str, str]]]:
    """Build the page template shared by every chunk.

    Returns:
        The skeleton and the stylesheets extracted from its inline styles.
    """
    skeleton = make_container(document, strict_mode=options.strict_mode)
    check_toc_links(skeleton)
    rewrite_links(skeleton, id_index)
    stylesheets = extract_css(skeleton)
    insert_css(skeleton, options.css)
    add_titlepage_toc(skeleton, options.title_page)
    return skeleton, stylesheets


def make_chunks(document: Node, options: ChunkerOptions, printer: Printer) -> ChunkResult:
    """Split ``document`` into pages and hand each one to ``printer``.

    The first pass indexes every id to its page; the second assembles the
    pages against that index. ``printer`` receives ``(basename, markup)``.
    A page that fails to assemble or print is logged and listed in
    ``ChunkResult.failed``; the remaining pages are still produced.

    Raises:
        MalformedInputError: If the document has no content container. Nothing
            is printed in that case.
    """
    id_index = build_id_index(document, options.depth)
    skeleton, stylesheets = prepare_skeleton(document, id_index, options)
    footnote_def_ids = get_footnote_def_ids(document.find_first(FOOTNOTES_SELECTOR))
    assembler = PageAssembler(skeleton, id_index, footnote_def_ids)
    result = ChunkResult(stylesheets=stylesheets)

    def emit(basename: str, contents: Callable[[], list[Node]], is_first_page: bool) -> None:
        try:
            fragment = assembler.assemble(basename, *contents(), is_first_page=is_first_page)
            printer(basename, fragment.serialize())
        except Exception:
            logger.exception("Failed to emit page %s", basename)
            result.failed.append(basename)
            return
        result.pages.append(basename)

    def preamble(node: Node, is_first_page: bool) -> None:
        basename = INDEX_BASENAME if is_first_page else PREAMBLE_BASENAME
        emit(basename, lambda: [node], is_first_page)

    def part(node: Node, part_number: int, is_first_page: bool) -> None:
        basename = INDEX_BASENAME if is_first_page else part_basename(part_number)
        emit(basename, lambda: part_nodes(node), is_first_page)

    def section(section_slice: SectionSlice) -> None:
        emit(section_slice.basename, lambda: [section_slice.materialize()], section_slice.is_first_page)

    process_contents(
        document,
        options.depth,
        ContentProcessors(preamble=preamble, part=part, chapter=chapter_processor(section)),
    )
    logger.debug("Assembled %d pages (%d failed)", len(result.pages), len(result.failed))
    return result


class FilePrinter:
    """Printer that writes each page to ``<outdir>/<basename>.html`` in the background.

    Must be called from inside a running event loop. Each scheduled write holds
    its markup until it completes, and pass 2 does not yield to the loop, so
    every page of a run is in memory by the time ``wait`` is reached. ``wait``
    collects the outcome of every write; ``cancel`` drops the pending ones.
    """

    def __init__(self, outdir: Path) -> None:
        self.outdir = outdir
        self._writes: list[tuple[Path, asyncio.Task[None]]] = []

    def __call__(self, basename: str, markup: str) -> None:
        self.write(page_filename(basename), markup)

    def write(self, filename: str, text: str) -> None:
        path = self.outdir / filename
        self._writes.append((path, asyncio.create_task(write_text_async(path, text))))

    async def wait(self) -> list[Path]:
        """Wait for all scheduled writes and return the paths that failed."""
        outcomes = await asyncio.gather(
            *(task for _, task in self._writes), return_exceptions=True
        )
        failed: list[Path] = []
        for (path, _), outcome in zip(self._writes, outcomes):
            if isinstance(outcome, Exception):
                logger.error("File write error: %s (%s)", path, outcome)
                failed.append(path)
        self._writes.clear()
        return failed

    async def cancel(self) -> None:
        """Cancel writes that have not finished and wait until they settle."""
        tasks = [task for _, task in self._writes]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._writes.clear()


async def chunk_document(
    source: str | Path, options: ChunkerOptions | None = None
) -> ChunkResult:
    """Load a single-page document, chunk it, and write the pages to disk.

    Args:
        source: Path to the Asciidoctor HTML file, or an http(s) URL.
        options: Chunking options. Uses defaults if None.

    Returns:
        The run result.

    Raises:
        SourceNotAvailableError: If the input cannot be found.
        MalformedInputError: If the input is not Asciidoctor single-page HTML.
        WriteError: If any page or stylesheet could not be written.
    """
    opts = options or ChunkerOptions()
    outdir = Path(opts.outdir)

    loaded = await load_source(source, outdir)

    printer = FilePrinter(outdir)
    try:
        result = make_chunks(loaded.document, opts, printer)
        result.resources = loaded.resources
        for filename, css_text in result.stylesheets:
            printer.write(filename, css_text)
    except BaseException:
        await printer.cancel()
        raise
    failed = await printer.wait()
    await asyncio.to_thread(install_stylesheets, opts.css, outdir)

    if failed:
        raise WriteError(f"Failed to write {len(failed)} file(s): {', '.join(map(str, failed))}")
    return result
