"""Tests for the page skeleton and page assembly."""

from __future__ import annotations

import logging

import pytest

from asciidoctor_chunker.chunker import ChunkerOptions, prepare_skeleton
from asciidoctor_chunker.dom import Node, get_content_node
from asciidoctor_chunker.footnotes import get_footnote_def_ids
from asciidoctor_chunker.id_index import build_id_index
from asciidoctor_chunker.links import TARGET_MISSING_CLASS
from asciidoctor_chunker.page import PageAssembler, make_container
from asciidoctor_chunker.schemas import DepthPolicy


def _assembler(document: Node) -> PageAssembler:
    id_index = build_id_index(document, DepthPolicy())
    skeleton, _ = prepare_skeleton(document, id_index, ChunkerOptions())
    return PageAssembler(
        skeleton, id_index, get_footnote_def_ids(document.find_first("#footnotes"))
    )


class TestMakeContainer:
    """Tests for make_container function."""

    def test_content_is_emptied(self, sample_document: Node) -> None:
        """Chunked blocks are removed from the container."""
        container = make_container(sample_document)
        assert get_content_node(container).children() == []
        assert container.find_first("#toc") is not None
        assert container.find_first("#footer") is not None

    def test_source_is_untouched(self, sample_document: Node) -> None:
        """The input document keeps its content."""
        make_container(sample_document)
        assert len(sample_document.find("#content > div.sect1")) == 3

    def test_strict_mode_drops_stray_content(
        self, make_document, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Unknown blocks are reported and dropped in strict mode."""
        doc = make_document('<div class="sect1"><h2 id="_a">A</h2></div><div id="stray">x</div>')
        with caplog.at_level(logging.INFO):
            container = make_container(doc)
        assert get_content_node(container).children() == []
        assert "--no-strict-mode" in caplog.text

    def test_non_strict_mode_keeps_stray_content(self, make_document) -> None:
        """Unknown blocks stay when strict mode is off."""
        doc = make_document('<div class="sect1"><h2 id="_a">A</h2></div><div id="stray">x</div>')
        container = make_container(doc, strict_mode=False)
        assert [n.id for n in get_content_node(container).children()] == ["stray"]


class TestPrepareSkeleton:
    """Tests for prepare_skeleton function."""

    def test_skeleton_links_and_styles(self, sample_document: Node) -> None:
        """TOC links are rewritten and inline styles become stylesheet links."""
        id_index = build_id_index(sample_document, DepthPolicy())
        skeleton, stylesheets = prepare_skeleton(sample_document, id_index, ChunkerOptions())

        assert [name for name, _ in stylesheets] == ["style0.css"]
        assert ".hidden" in stylesheets[0][1]
        assert skeleton.find("style") == []
        hrefs = [link.get_attr("href") for link in skeleton.find("head link")]
        assert hrefs == ["css/site.css", "style0.css", "asciidoctor-chunker.css"]

        toc_hrefs = [a.get_attr("href") for a in skeleton.find("#toc a")]
        assert toc_hrefs[:3] == ["index.html", "part1.html", "chap1.html"]
        assert "chap2.html#_chap2_sec_2_1" in toc_hrefs


class TestPageAssembler:
    """Tests for PageAssembler.assemble."""

    def test_chapter_page(self, sample_document: Node) -> None:
        """A chapter page holds its content, nav, footnotes and current TOC entries."""
        chapter = sample_document.find("div.sect1")[1]
        page = _assembler(sample_document).assemble("chap2", chapter).document

        content = get_content_node(page)
        assert [n.id for n in content.find("h2")] == ["_second_chapter"]
        assert content.find_first('a[href="chap1.html#_chap1_sec_1"]') is not None
        assert [d.id for d in page.find("#footnotes div.footnote")] == [
            "_footnotedef_2",
            "_footnotedef_3",
            "_footnotedef_4",
        ]
        shared = [a.id for a in content.find('a.footnote[href="#_footnotedef_4"]')]
        assert shared == ["_footnoteref_4", None]
        assert page.find_first("nav a.nav-prev").get_attr("href") == "chap1.html"  # type: ignore[union-attr]
        assert page.find_first("nav a.nav-next").get_attr("href") == "part2.html"  # type: ignore[union-attr]
        assert len(page.find(f"#toc li.current")) == 7
        assert page.find_first("body").children()[-1].tag_name == "script"  # type: ignore[union-attr]

    def test_page_without_footnotes(self, sample_document: Node) -> None:
        """A page with no referers has an empty footnotes container."""
        part = sample_document.find_first("h1.sect0")
        assert part is not None
        page = _assembler(sample_document).assemble("part1", part).document
        assert page.find("#footnotes div.footnote") == []

    def test_missing_target_is_marked(self, sample_document: Node) -> None:
        """Links to ids that do not exist get the target-missing class."""
        chapter = sample_document.find("div.sect1")[2]
        page = _assembler(sample_document).assemble("chap3", chapter).document
        missing = page.find(f"a.{TARGET_MISSING_CLASS}")
        assert [a.get_attr("href") for a in missing] == ["#chap4"]
        assert page.find_first('a[href="chap3.html"]') is not None

    def test_assembly_does_not_touch_inputs(self, sample_document: Node) -> None:
        """Neither the source nor the skeleton change between pages."""
        before = sample_document.serialize()
        assembler = _assembler(sample_document)
        chapter = sample_document.find("div.sect1")[0]
        first = assembler.assemble("chap1", chapter).serialize()
        second = assembler.assemble("chap1", chapter).serialize()
        assert first == second
        assert sample_document.serialize() == before
