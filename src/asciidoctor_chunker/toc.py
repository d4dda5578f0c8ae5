"""Table of contents adjustments for chunked pages."""

from __future__ import annotations

import html
import logging

from asciidoctor_chunker.dom import TOC_SELECTOR, Node
from asciidoctor_chunker.naming import INDEX_BASENAME, page_filename

logger = logging.getLogger(__name__)

CURRENT_CLASS = "current"


def add_titlepage_toc(document: Node, title: str) -> Node:
    """Prepend a TOC entry linking to the first page."""
    entry = f'<li><a href="{page_filename(INDEX_BASENAME)}">{html.escape(title)}</a></li>'
    first_item = document.find_first(f"{TOC_SELECTOR} > ul > li:first-child")
    if first_item is not None:
        first_item.insert_html_before(entry)
        return document
    top_list = document.find_first(f"{TOC_SELECTOR} > ul")
    if top_list is not None:
        top_list.append_html(entry)
    return document


def check_toc_links(document: Node) -> bool:
    """Return whether the TOC links into the document, logging when it does not."""
    if document.find(f'{TOC_SELECTOR} a[href^="#"]'):
        return True
    logger.info("Your TOC has no in-document links.")
    return False


def set_current_to_toc(document: Node, basename: str) -> int:
    """Mark the TOC entries of ``basename``'s page with the ``current`` class.

    Every anchor whose href starts with ``"<basename>.html"`` marks its
    parent list item.

    Returns:
        The number of marked entries.
    """
    prefix = page_filename(basename)
    marked = 0
    for anchor in document.find(f"{TOC_SELECTOR} a[href]"):
        if not (anchor.get_attr("href") or "").startswith(prefix):
            continue
        item = anchor.parent()
        if item is not None:
            item.add_class(CURRENT_CLASS)
            marked += 1
    return marked
