"""Page skeleton and per-page assembly."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet

from asciidoctor_chunker.dom import Node, get_content_node
from asciidoctor_chunker.footnotes import update_footnotes
from asciidoctor_chunker.id_index import IdIndex
from asciidoctor_chunker.links import rewrite_links
from asciidoctor_chunker.navigation import add_page_navigation, insert_script
from asciidoctor_chunker.toc import set_current_to_toc

logger = logging.getLogger(__name__)

_CHUNKED_BLOCKS = (
    "#content > #preamble, #content > .partintro, "
    "#content > .sect1, #content > .sect0"
)


@dataclass
class Fragment:
    """One chunked page ready to be written."""

    basename: str
    document: Node
    is_first_page: bool = False

    def serialize(self) -> str:
        return self.document.serialize()


def make_container(root: Node, *, strict_mode: bool = True) -> Node:
    """Clone the document with every chunked block taken out of ``div#content``.

    In strict mode anything else left under ``div#content`` is reported and
    dropped as well; otherwise it stays and shows up on every page. The
    source document is not modified.

    Raises:
        MalformedInputError: If the document has no content container.
    """
    container = root.clone()
    content = get_content_node(container)
    content.remove_matching(_CHUNKED_BLOCKS)
    if strict_mode and content.children():
        _report_strict_mode(content)
        content.empty()
    return container


def _report_strict_mode(content: Node) -> None:
    logger.info("Non-Asciidoc contents encountered under <div id='content'>.")
    logger.info("They are ignored and not included in chunked html by default.")
    logger.info("If you want them to be included, use the '--no-strict-mode' option.")
    for line in content.inner_html().strip().splitlines():
        if line.strip():
            logger.info("Found content => %s", line)


class PageAssembler:
    """Build chunked pages from a prepared skeleton.

    The skeleton, index and footnote ids are shared read-only; every page
    starts from its own clone of the skeleton.
    """

    def __init__(
        self, skeleton: Node, id_index: IdIndex, footnote_def_ids: AbstractSet[str]
    ) -> None:
        self._skeleton = skeleton
        self._id_index = id_index
        self._footnote_def_ids = footnote_def_ids

    def assemble(self, basename: str, *contents: Node, is_first_page: bool = False) -> Fragment:
        document = self._skeleton.clone()
        content = get_content_node(document)
        for node in contents:
            content.append_child(rewrite_links(node.clone(), self._id_index), copy_node=False)
        update_footnotes(document, self._footnote_def_ids)
        add_page_navigation(document, basename, self._id_index.navigation)
        set_current_to_toc(document, basename)
        insert_script(document)
        return Fragment(basename=basename, document=document, is_first_page=is_first_page)
