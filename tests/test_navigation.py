"""Tests for prev/next navigation, the page script and the TOC."""

from __future__ import annotations

import logging

import pytest

from asciidoctor_chunker.dom import Node
from asciidoctor_chunker.navigation import add_page_navigation, insert_script, render_nav
from asciidoctor_chunker.schemas import NavigationTable
from asciidoctor_chunker.toc import (
    CURRENT_CLASS,
    add_titlepage_toc,
    check_toc_links,
    set_current_to_toc,
)

_TABLE = NavigationTable(pages=["index", "chap1", "chap2"])


class TestRenderNav:
    """Tests for render_nav function."""

    def test_both_links(self) -> None:
        """Middle pages link both ways."""
        nav = Node.from_html(render_nav("index", "chap2"))
        assert nav.find_first("a.nav-prev").get_attr("href") == "index.html"  # type: ignore[union-attr]
        assert nav.find_first("a.nav-next").get_attr("href") == "chap2.html"  # type: ignore[union-attr]

    def test_first_page_has_no_prev(self) -> None:
        """The first page only links forward."""
        nav = Node.from_html(render_nav(None, "chap1"))
        assert nav.find_first("a.nav-prev") is None
        assert nav.find_first("a.nav-next") is not None


class TestAddPageNavigation:
    """Tests for add_page_navigation function."""

    def test_nav_goes_before_footer(self, make_document) -> None:
        """With a footer last, the nav sits right before it."""
        doc = make_document("<p>x</p>")
        add_page_navigation(doc, "chap1", _TABLE)
        body_children = doc.find_first("body").children()  # type: ignore[union-attr]
        assert [child.tag_name for child in body_children][-2:] == ["nav", "div"]
        assert body_children[-1].id == "footer"

    def test_nav_goes_after_last_div_without_footer(self, make_document) -> None:
        """Without a footer, the nav follows the last div."""
        doc = make_document("<p>x</p>", footer=False)
        add_page_navigation(doc, "chap1", _TABLE)
        body_children = doc.find_first("body").children()  # type: ignore[union-attr]
        assert body_children[-1].tag_name == "nav"
        assert body_children[-2].id == "content"

    def test_unknown_page_warns(self, make_document, caplog: pytest.LogCaptureFixture) -> None:
        """Pages missing from the table get a nav without links and a warning."""
        doc = make_document("<p>x</p>")
        with caplog.at_level(logging.WARNING):
            add_page_navigation(doc, "nowhere", _TABLE)
        assert "missing from the navigation table" in caplog.text
        assert doc.find("nav a") == []

    def test_insert_script_appends_to_body(self, make_document) -> None:
        """The page script is the last child of the body."""
        doc = make_document("<p>x</p>")
        insert_script(doc)
        assert doc.find_first("body").children()[-1].tag_name == "script"  # type: ignore[union-attr]


class TestToc:
    """Tests for TOC adjustments."""

    def test_add_titlepage_toc_is_first(self, sample_document: Node) -> None:
        """The title page entry is inserted before every other entry."""
        add_titlepage_toc(sample_document, "Cover & Title")
        first = sample_document.find_first("#toc > ul > li")
        assert first is not None
        anchor = first.find_first("a")
        assert anchor is not None
        assert anchor.get_attr("href") == "index.html"
        assert anchor.text == "Cover & Title"

    def test_check_toc_links(self, sample_document: Node, make_document) -> None:
        """Reports whether the TOC has in-document links."""
        assert check_toc_links(sample_document)
        assert not check_toc_links(make_document("<p>x</p>"))

    def test_set_current_to_toc(self, make_document) -> None:
        """Entries pointing at the page are marked current."""
        doc = make_document(
            "<p>x</p>",
            toc=(
                '<li><a href="chap1.html">1</a>'
                '<ul class="sectlevel2"><li><a href="chap1.html#_s">1.1</a></li></ul></li>'
                '<li><a href="chap10.html">10</a></li>'
            ),
        )
        assert set_current_to_toc(doc, "chap1") == 2
        current = [li.find_first("a").get_attr("href") for li in doc.find(f"li.{CURRENT_CLASS}")]  # type: ignore[union-attr]
        assert current == ["chap1.html", "chap1.html#_s"]
