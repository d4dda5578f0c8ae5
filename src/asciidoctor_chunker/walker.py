"""Dispatch the top-level blocks under ``div#content`` to page processors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from asciidoctor_chunker.dom import (
    PART_CLASS,
    PART_INTRO_CLASS,
    PREAMBLE_ID,
    Node,
    get_content_node,
    section_class,
)
from asciidoctor_chunker.naming import BasenameMaker, make_basename
from asciidoctor_chunker.schemas import DepthPolicy

logger = logging.getLogger(__name__)

PreambleProcessor = Callable[[Node, bool], None]
PartProcessor = Callable[[Node, int, bool], None]
ChapterProcessor = Callable[[DepthPolicy, Node, int, int, int, bool, BasenameMaker], None]

_CHAPTER_CLASS = section_class(1)


@dataclass(frozen=True)
class ContentProcessors:
    """Callbacks for the three kinds of top-level block.

    Attributes:
        preamble: Called as ``preamble(node, is_first_page)``.
        part: Called as ``part(node, part_number, is_first_page)``.
        chapter: Called as ``chapter(policy, node, level, chapter_number,
            position, is_first_page, basename_maker)``.
    """

    preamble: PreambleProcessor
    part: PartProcessor
    chapter: ChapterProcessor


@dataclass
class WalkState:
    """Counters accumulated over one walk of the content container."""

    chapters: int = 0
    parts: int = 0
    first_page_taken: bool = False
    unrecognized: list[Node] = field(default_factory=list)

    def claim_first_page(self) -> bool:
        """Return True exactly once: for the first classified block."""
        if self.first_page_taken:
            return False
        self.first_page_taken = True
        return True


def process_contents(
    root: Node,
    policy: DepthPolicy,
    processors: ContentProcessors,
    basename_maker: BasenameMaker = make_basename,
) -> WalkState:
    """Walk the children of ``div#content`` in order and dispatch each one.

    Part intros are skipped here because the part processor picks them up
    from the part title's next sibling. Blocks that are not a preamble, part
    or chapter are logged and ignored.

    Raises:
        MalformedInputError: If the document has no content container.
    """
    state = WalkState()
    for node in get_content_node(root).children():
        if node.has_class(PART_INTRO_CLASS):
            continue
        if node.has_class(_CHAPTER_CLASS):
            state.chapters += 1
            processors.chapter(
                policy,
                node,
                1,
                state.chapters,
                state.chapters,
                state.claim_first_page(),
                basename_maker,
            )
        elif node.has_class(PART_CLASS):
            state.parts += 1
            processors.part(node, state.parts, state.claim_first_page())
        elif node.id == PREAMBLE_ID:
            processors.preamble(node, state.claim_first_page())
        else:
            logger.debug("Skipping unrecognized content block (%s)", node.describe())
            state.unrecognized.append(node)
    return state


def part_nodes(part: Node) -> list[Node]:
    """Return the part title plus its intro block when one follows it."""
    sibling = part.next_element_sibling()
    if sibling is not None and sibling.has_class(PART_INTRO_CLASS):
        return [part, sibling]
    return [part]
