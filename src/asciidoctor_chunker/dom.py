"""Tree facade over BeautifulSoup for Asciidoctor single-page HTML.

The rest of the package only talks to :class:`Node`; nothing outside this
module imports BeautifulSoup.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Iterable, Iterator

from asciidoctor_chunker.exceptions import MalformedInputError

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


_DOCUMENT_PARSER = "lxml"
_FRAGMENT_PARSER = "html.parser"

CONTENT_SELECTOR = "#content"
FOOTNOTES_SELECTOR = "#footnotes"
TOC_SELECTOR = "#toc"
PREAMBLE_ID = "preamble"
PART_CLASS = "sect0"
PART_INTRO_CLASS = "partintro"


class Node:
    """One element of a parsed document, or the document itself.

    ``clone`` and ``without`` hand out independent copies. The mutating
    methods (``set_attr``, ``add_class``, ``remove_matching``, ``append_child``,
    ``empty`` and the ``insert_*`` family) change the tree this node belongs
    to, so callers clone first when the source must stay untouched.
    """

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    @classmethod
    def from_html(cls, html: str | bytes) -> Node:
        """Parse a complete HTML document."""
        return cls(BeautifulSoup(html, _DOCUMENT_PARSER))

    @classmethod
    def from_file(cls, path: Path | str) -> Node:
        return cls.from_html(Path(path).read_bytes())

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Node) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"<Node {self.describe()}>"

    # -- reading -----------------------------------------------------------

    @property
    def tag_name(self) -> str:
        return self._tag.name

    @property
    def id(self) -> str | None:
        return self.get_attr("id") or None

    @property
    def classes(self) -> list[str]:
        value = self._tag.get("class")
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        return list(value)

    @property
    def text(self) -> str:
        return self._tag.get_text()

    def get_attr(self, name: str, default: str | None = None) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return " ".join(value)
        return value

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def describe(self) -> str:
        """Short tag/id/class summary used in log messages."""
        return f"tag={self.tag_name} id={self.id} class={self.get_attr('class')}"

    # -- querying ----------------------------------------------------------

    def find(self, selector: str) -> list[Node]:
        """Return every descendant matching the CSS selector, in document order."""
        return [Node(tag) for tag in self._tag.select(selector)]

    def find_first(self, selector: str) -> Node | None:
        tag = self._tag.select_one(selector)
        return Node(tag) if tag is not None else None

    def children(self) -> list[Node]:
        return [Node(child) for child in self._tag.children if isinstance(child, Tag)]

    def first_child(self) -> Node | None:
        for child in self._tag.children:
            if isinstance(child, Tag):
                return Node(child)
        return None

    def next_element_sibling(self) -> Node | None:
        sibling = self._tag.find_next_sibling()
        return Node(sibling) if sibling is not None else None

    def parent(self) -> Node | None:
        parent = self._tag.parent
        return Node(parent) if parent is not None else None

    def iter_id_elements(
        self, *, include_self: bool = False, exclude: Iterable[Node] = ()
    ) -> Iterator[Node]:
        """Yield id-bearing elements in document order.

        Subtrees rooted at any node in ``exclude`` are skipped entirely. The
        tree is read in place; nothing is copied.
        """
        skipped = {id(node._tag) for node in exclude}
        if include_self and self._tag.get("id"):
            yield self
        stack = _element_children(self._tag)
        stack.reverse()
        while stack:
            tag = stack.pop()
            if id(tag) in skipped:
                continue
            if tag.get("id"):
                yield Node(tag)
            children = _element_children(tag)
            children.reverse()
            stack.extend(children)

    # -- copying -----------------------------------------------------------

    def clone(self) -> Node:
        """Return an independent deep copy detached from this node's tree."""
        return Node(copy.copy(self._tag))

    def without(self, selector: str) -> Node:
        """Return a clone with every descendant matching ``selector`` removed."""
        clone = self.clone()
        clone.remove_matching(selector)
        return clone

    # -- mutating ----------------------------------------------------------

    def set_attr(self, name: str, value: str) -> Node:
        self._tag[name] = value
        return self

    def add_class(self, name: str) -> Node:
        classes = self.classes
        if name not in classes:
            self._tag["class"] = [*classes, name]
        return self

    def remove(self) -> None:
        """Detach this node from its tree."""
        self._tag.extract()

    def remove_matching(self, selector: str) -> int:
        """Remove every descendant matching ``selector``; return how many matched."""
        matches = self._tag.select(selector)
        for tag in matches:
            tag.extract()
        return len(matches)

    def empty(self) -> Node:
        self._tag.clear()
        return self

    def append_child(self, node: Node, *, copy_node: bool = True) -> Node:
        """Append ``node`` as the last child and return the appended node.

        A copy is appended unless ``copy_node`` is false, in which case the
        node itself is moved here.
        """
        tag = copy.copy(node._tag) if copy_node else node._tag
        self._tag.append(tag)
        return Node(tag)

    def append_html(self, html: str) -> Node:
        for tag in _parse_fragment(html):
            self._tag.append(tag)
        return self

    def insert_html_before(self, html: str) -> Node:
        for tag in _parse_fragment(html):
            self._tag.insert_before(tag)
        return self

    def insert_html_after(self, html: str) -> Node:
        anchor = self._tag
        for tag in _parse_fragment(html):
            anchor.insert_after(tag)
            anchor = tag
        return self

    def replace_with_html(self, html: str) -> None:
        self.insert_html_before(html)
        self._tag.extract()

    # -- output ------------------------------------------------------------

    def inner_html(self) -> str:
        return self._tag.decode_contents()

    def serialize(self) -> str:
        return str(self._tag)


def _element_children(tag: Tag) -> list[Tag]:
    return [child for child in tag.children if isinstance(child, Tag)]


def _parse_fragment(html: str) -> list[Tag]:
    fragment = BeautifulSoup(html.strip(), _FRAGMENT_PARSER)
    return [child for child in list(fragment.contents) if isinstance(child, Tag)]


def get_content_node(root: Node) -> Node:
    """Find ``div#content``, the container every chunk is cut from.

    Raises:
        MalformedInputError: If the document has no content container.
    """
    content = root.find_first(CONTENT_SELECTOR)
    if content is None:
        raise MalformedInputError(
            "No <div id=\"content\"> found; the input does not look like "
            "Asciidoctor single-page HTML."
        )
    return content


def section_class(level: int) -> str:
    return f"sect{level}"


def section_selector(level: int) -> str:
    """Selector for section containers at ``level`` (1 = chapter)."""
    return f"div.{section_class(level)}"
