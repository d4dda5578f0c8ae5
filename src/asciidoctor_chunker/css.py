"""Stylesheet handling for chunked pages."""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import Iterable

from asciidoctor_chunker.dom import Node
from asciidoctor_chunker.files import copy_if_newer

logger = logging.getLogger(__name__)

DEFAULT_STYLESHEET = "asciidoctor-chunker.css"

_LINK_TEMPLATE = '<link rel="stylesheet" href="{href}" type="text/css">'


def extract_css(document: Node) -> list[tuple[str, str]]:
    """Move inline ``<style>`` blocks out into ``style<i>.css`` files.

    Each block is replaced with a link to its file. The caller writes the
    returned ``(filename, css)`` pairs into the output directory.
    """
    sheets: list[tuple[str, str]] = []
    for index, style in enumerate(document.find("style")):
        filename = f"style{index}.css"
        sheets.append((filename, style.text))
        style.replace_with_html(_LINK_TEMPLATE.format(href=filename))
    return sheets


def insert_css(document: Node, css_files: Iterable[str]) -> Node:
    """Link each configured stylesheet, by file name, from the page head."""
    head = document.find_first("head")
    if head is None:
        logger.warning("Document has no <head>; stylesheets not linked")
        return document
    for css_file in css_files:
        head.append_html(_LINK_TEMPLATE.format(href=Path(css_file).name))
    return document


def default_stylesheet() -> str:
    """Return the stylesheet bundled with the package."""
    return (
        resources.files("asciidoctor_chunker")
        .joinpath("resources")
        .joinpath(DEFAULT_STYLESHEET)
        .read_text(encoding="utf-8")
    )


def install_stylesheets(css_files: Iterable[str], outdir: Path) -> list[Path]:
    """Put every configured stylesheet into ``outdir``.

    The bundled stylesheet is written out; other files are copied when newer.
    Missing files are logged and skipped.
    """
    installed: list[Path] = []
    for css_file in css_files:
        target = outdir / Path(css_file).name
        if css_file == DEFAULT_STYLESHEET:
            target.write_text(default_stylesheet(), encoding="utf-8")
            installed.append(target)
            continue
        try:
            copy_if_newer(Path(css_file), target)
        except FileNotFoundError:
            logger.warning("Stylesheet not found: %s", css_file)
            continue
        installed.append(target)
    return installed
