"""Rewrite in-document anchors into cross-page links."""

from __future__ import annotations

import logging
from typing import Mapping

from asciidoctor_chunker.dom import Node
from asciidoctor_chunker.footnotes import FOOTNOTE_DEF_PREFIX, FOOTNOTE_REF_PREFIX

logger = logging.getLogger(__name__)

TARGET_MISSING_CLASS = "target-missing"

_FOOTNOTE_HASHES = (f"#{FOOTNOTE_DEF_PREFIX}", f"#{FOOTNOTE_REF_PREFIX}")


def rewrite_links(node: Node, id_index: Mapping[str, str]) -> Node:
    """Point every ``href="#id"`` under ``node`` at the page that now holds ``id``.

    Footnote links are left alone because footnotes stay on the referring
    page. A hash with no known target keeps its href and gets the
    ``target-missing`` class. ``node`` is modified in place and returned.
    """
    for anchor in node.find('a[href^="#"]'):
        href = anchor.get_attr("href", "")
        if href.startswith(_FOOTNOTE_HASHES):
            continue
        target = id_index.get(href[1:])
        if target:
            anchor.set_attr("href", target)
        else:
            logger.debug("Cross reference target missing: %s", href)
            anchor.add_class(TARGET_MISSING_CLASS)
    return node
