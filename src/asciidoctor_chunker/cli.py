"""Command-line entry point for asciidoctor-chunker."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Sequence

from asciidoctor_chunker import __version__
from asciidoctor_chunker.chunker import ChunkerOptions, chunk_document
from asciidoctor_chunker.config import CHUNKER_DEPTH, CHUNKER_OUTDIR, CHUNKER_TITLE_PAGE
from asciidoctor_chunker.css import DEFAULT_STYLESHEET
from asciidoctor_chunker.depth import parse_depth
from asciidoctor_chunker.exceptions import ChunkerError
from asciidoctor_chunker.naming import INDEX_BASENAME, page_filename

logger = logging.getLogger("asciidoctor_chunker")

_DEPTH_HELP = (
    "Splitting depth. A bare number sets the default level (1 = chapters only, "
    "2 = sections, ...); 'c:l' sets level l for chapter c; 'a-b:l' for chapters a..b. "
    "Example: '2,1:1,3-5:3'. Defaults to 1."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asciidoctor-chunker",
        description="Split Asciidoctor single-page HTML into chunked pages.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("source", help="Asciidoctor single-page HTML file, or an http(s) URL")
    parser.add_argument(
        "-o",
        "--outdir",
        type=Path,
        default=CHUNKER_OUTDIR,
        help=f"Output directory (default: {CHUNKER_OUTDIR})",
    )
    parser.add_argument("--depth", default=CHUNKER_DEPTH, help=_DEPTH_HELP)
    parser.add_argument(
        "--css",
        default=DEFAULT_STYLESHEET,
        help=f"Comma-separated stylesheets linked from every page (default: {DEFAULT_STYLESHEET})",
    )
    parser.add_argument(
        "--no-strict-mode",
        dest="strict_mode",
        action="store_false",
        help="Keep non-Asciidoc contents under div#content on every page",
    )
    parser.add_argument(
        "--title-page",
        default=CHUNKER_TITLE_PAGE,
        help=f"Label of the title page entry in the TOC (default: {CHUNKER_TITLE_PAGE})",
    )
    parser.add_argument(
        "--scoped-depth",
        action="store_true",
        help="Apply per-chapter depth only to that chapter's own sections",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        depth = parse_depth(args.depth, chapter_scoped=args.scoped_depth)
    except ChunkerError as exc:
        parser.error(str(exc))

    css = [name.strip() for name in args.css.split(",") if name.strip()]
    options = ChunkerOptions(
        depth=depth,
        outdir=args.outdir,
        css=css,
        strict_mode=args.strict_mode,
        title_page=args.title_page,
    )

    try:
        result = asyncio.run(chunk_document(args.source, options))
    except ChunkerError as exc:
        logger.error("%s", exc)
        return 1

    if result.failed:
        logger.error("Failed to assemble %d page(s): %s", len(result.failed), ", ".join(result.failed))
        return 1

    logger.info("Successfully chunked! => %s", args.outdir / page_filename(INDEX_BASENAME))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
