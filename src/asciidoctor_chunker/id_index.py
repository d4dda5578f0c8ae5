"""First pass: map every element id to the page it ends up on."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterable, Iterator

from asciidoctor_chunker.dom import Node
from asciidoctor_chunker.footnotes import FOOTNOTE_DEF_PREFIX
from asciidoctor_chunker.naming import (
    INDEX_BASENAME,
    PREAMBLE_BASENAME,
    page_filename,
    part_basename,
)
from asciidoctor_chunker.partition import SectionSlice, chapter_processor
from asciidoctor_chunker.schemas import DepthPolicy, NavigationTable
from asciidoctor_chunker.walker import ContentProcessors, part_nodes, process_contents


class IdIndex(Mapping[str, str]):
    """Read-only map of element id to destination URL, plus page order.

    The URL is ``"<basename>.html#<id>"``, except for the id at the top of a
    page, which maps to ``"<basename>.html"`` so following it does not scroll.
    """

    def __init__(self, urls: Mapping[str, str], navigation: NavigationTable) -> None:
        self._urls = MappingProxyType(dict(urls))
        self.navigation = navigation

    def __getitem__(self, element_id: str) -> str:
        return self._urls[element_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def __repr__(self) -> str:
        return f"IdIndex({len(self)} ids, {len(self.navigation.pages)} pages)"


class _IdRecorder:
    def __init__(self) -> None:
        self.urls: dict[str, str] = {}
        self.pages: list[str] = []

    def record(self, basename: str, elements: Iterable[Node], top_id: str | None) -> None:
        filename = page_filename(basename)
        self.pages.append(basename)
        for element in elements:
            element_id = element.id
            if element_id is None or element_id.startswith(FOOTNOTE_DEF_PREFIX):
                continue
            self.urls[element_id] = f"{filename}#{element_id}"
        if top_id:
            self.urls[top_id] = filename

    def preamble(self, node: Node, is_first_page: bool) -> None:
        basename = INDEX_BASENAME if is_first_page else PREAMBLE_BASENAME
        self.record(basename, node.iter_id_elements(), node.id)

    def part(self, node: Node, part_number: int, is_first_page: bool) -> None:
        basename = INDEX_BASENAME if is_first_page else part_basename(part_number)
        nodes = part_nodes(node)
        elements = [
            element
            for index, block in enumerate(nodes)
            for element in block.iter_id_elements(include_self=index > 0)
        ]
        self.record(basename, elements, node.id)

    def section(self, section: SectionSlice) -> None:
        self.record(section.basename, section.iter_ids(), section.top_id)


def build_id_index(root: Node, policy: DepthPolicy) -> IdIndex:
    """Walk the document exactly as chunking will and record where ids land.

    The source tree is only read. Footnote definition ids are left out since
    footnotes always stay on the page that references them.

    Raises:
        MalformedInputError: If the document has no content container.
    """
    recorder = _IdRecorder()
    process_contents(
        root,
        policy,
        ContentProcessors(
            preamble=recorder.preamble,
            part=recorder.part,
            chapter=chapter_processor(recorder.section),
        ),
    )
    return IdIndex(recorder.urls, NavigationTable(pages=recorder.pages))
