"""Split a chapter's section tree into page-sized slices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator

from asciidoctor_chunker.depth import is_terminal, max_level_for
from asciidoctor_chunker.dom import Node, section_selector
from asciidoctor_chunker.naming import INDEX_BASENAME, BasenameMaker, make_basename
from asciidoctor_chunker.schemas import DepthPolicy


@dataclass
class SectionSlice:
    """One visited chapter or section node and the part of it that is its page.

    The node still lives in the source tree. ``split_children`` are the
    ``div.sect<level+1>`` descendants that get pages of their own and are
    therefore not part of this slice.
    """

    node: Node
    level: int
    chapter: int
    position: int
    path: tuple[int, ...]
    basename: str
    is_first_page: bool = False
    split_children: list[Node] = field(default_factory=list)

    @property
    def top_id(self) -> str | None:
        """Id of the section heading, which is the node's first child."""
        first = self.node.first_child()
        return first.id if first is not None else None

    def iter_ids(self) -> Iterator[Node]:
        """Id-bearing elements on this page, read from the source tree."""
        return self.node.iter_id_elements(exclude=self.split_children)

    def materialize(self) -> Node:
        """Return an independent copy of the slice content."""
        if not self.split_children:
            return self.node.clone()
        return self.node.without(section_selector(self.level + 1))


SliceHandler = Callable[[SectionSlice], None]


def partition(
    policy: DepthPolicy,
    node: Node,
    level: int,
    chapter: int,
    position: int,
    is_first_page: bool,
    *,
    on_slice: SliceHandler,
    basename_maker: BasenameMaker = make_basename,
) -> int:
    """Visit ``node`` and the sections below it, one slice per page.

    A node whose resolved depth says it is terminal becomes a single slice
    holding its whole subtree. Any other node becomes a slice without its
    ``level + 1`` sections, which are then visited in order. The walk uses an
    explicit stack and produces slices in pre-order.

    Returns:
        The number of slices handed to ``on_slice``.
    """
    stack: list[tuple[Node, int, int, tuple[int, ...], bool]] = [
        (node, level, position, (), is_first_page)
    ]
    visited = 0
    while stack:
        current, current_level, current_position, path, first = stack.pop()
        basename = INDEX_BASENAME if first else basename_maker(chapter, path)
        max_level = max_level_for(policy, chapter=chapter, position=current_position)
        visited += 1

        if is_terminal(policy, current_level, max_level):
            on_slice(
                SectionSlice(
                    node=current,
                    level=current_level,
                    chapter=chapter,
                    position=current_position,
                    path=path,
                    basename=basename,
                    is_first_page=first,
                )
            )
            continue

        children = current.find(section_selector(current_level + 1))
        on_slice(
            SectionSlice(
                node=current,
                level=current_level,
                chapter=chapter,
                position=current_position,
                path=path,
                basename=basename,
                is_first_page=first,
                split_children=children,
            )
        )
        for index in range(len(children), 0, -1):
            stack.append(
                (children[index - 1], current_level + 1, index, (*path, index), False)
            )
    return visited


def chapter_processor(
    on_slice: SliceHandler,
) -> Callable[[DepthPolicy, Node, int, int, int, bool, BasenameMaker], None]:
    """Adapt a slice handler to the walker's chapter callback."""

    def _process(
        policy: DepthPolicy,
        node: Node,
        level: int,
        chapter: int,
        position: int,
        is_first_page: bool,
        basename_maker: BasenameMaker,
    ) -> None:
        partition(
            policy,
            node,
            level,
            chapter,
            position,
            is_first_page,
            on_slice=on_slice,
            basename_maker=basename_maker,
        )

    return _process
