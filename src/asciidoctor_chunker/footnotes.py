"""Keep only the footnotes a page refers to, with working back-links.

Asciidoctor renders a footnote definition as
``<div class="footnote" id="_footnotedef_4">`` inside ``div#footnotes``.
The first referer in the source document carries the back-link target::

    <a id="_footnoteref_4" class="footnote" href="#_footnotedef_4">4</a>

later referers to the same footnote have no id. After chunking, each page
must hold exactly the definitions it refers to, and the first referer on the
page must carry the back-link id.
"""

from __future__ import annotations

from typing import AbstractSet, Sequence

from asciidoctor_chunker.dom import FOOTNOTES_SELECTOR, Node, get_content_node

FOOTNOTE_DEF_PREFIX = "_footnotedef_"
FOOTNOTE_REF_PREFIX = "_footnoteref_"

_DEFINITION_SELECTOR = "div.footnote"
_REFERER_SELECTOR = "a.footnote"


def get_footnote_def_ids(footnotes_node: Node | None) -> frozenset[str]:
    """Collect every footnote definition id in the document's footnotes container."""
    if footnotes_node is None:
        return frozenset()
    return frozenset(
        definition.id
        for definition in footnotes_node.find(_DEFINITION_SELECTOR)
        if definition.id
    )


def find_footnote_referers(content_node: Node) -> list[Node]:
    return content_node.find(_REFERER_SELECTOR)


def make_footnote_ref_id(def_url: str) -> str:
    """Turn ``"#_footnotedef_4"`` (or ``"_footnotedef_4"``) into ``"_footnoteref_4"``."""
    return f"{FOOTNOTE_REF_PREFIX}{def_url[def_url.rfind('_') + 1:]}"


def keep_referred_footnotes(
    def_ids: AbstractSet[str], footnotes_node: Node, referers: Sequence[Node]
) -> Node:
    """Delete the definitions in ``footnotes_node`` that no referer points at.

    With no referers at all the container is emptied.
    """
    if not referers:
        return footnotes_node.empty()
    referred = {(referer.get_attr("href") or "").lstrip("#") for referer in referers}
    removing = set(def_ids) - referred
    for definition in footnotes_node.find(_DEFINITION_SELECTOR):
        if definition.id in removing:
            definition.remove()
    return footnotes_node


def update_referer_ids(referers: Sequence[Node]) -> Sequence[Node]:
    """Give the first referer of each footnote the back-link id.

    A referer that already has an id claims its footnote, so later referers
    to the same definition stay without one.
    """
    claimed: set[str] = set()
    for referer in referers:
        href = referer.get_attr("href") or ""
        if referer.id:
            claimed.add(href)
            continue
        if href in claimed:
            continue
        claimed.add(href)
        referer.set_attr("id", make_footnote_ref_id(href))
    return referers


def update_footnotes(document: Node, def_ids: AbstractSet[str]) -> Node:
    """Scope the footnotes of a chunked page to the referers in its content."""
    referers = find_footnote_referers(get_content_node(document))
    footnotes_node = document.find_first(FOOTNOTES_SELECTOR)
    if footnotes_node is not None:
        keep_referred_footnotes(def_ids, footnotes_node, referers)
    update_referer_ids(referers)
    return document
