"""Test setup for asciidoctor-chunker."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from asciidoctor_chunker.dom import Node  # noqa: E402

RESOURCES = Path(__file__).resolve().parent / "resources"

DocumentFactory = Callable[..., Node]


def build_document(
    content: str,
    *,
    toc: str = "",
    footnotes: str = "",
    footer: bool = True,
    head: str = "",
) -> str:
    """Wrap ``content`` in the page layout Asciidoctor emits for a book."""
    toc_html = f'<div id="toc" class="toc2"><ul class="sectlevel1">{toc}</ul></div>' if toc else ""
    footnotes_html = f'<div id="footnotes"><hr>{footnotes}</div>' if footnotes else ""
    footer_html = '<div id="footer"><div id="footer-text">Last updated</div></div>' if footer else ""
    return (
        "<!DOCTYPE html><html><head><title>Doc</title>"
        f"{head}</head><body>"
        f'<div id="header"><h1>Doc</h1>{toc_html}</div>'
        f'<div id="content">{content}</div>'
        f"{footnotes_html}{footer_html}</body></html>"
    )


@pytest.fixture
def sample_path() -> Path:
    """Path to the sample Asciidoctor book."""
    return RESOURCES / "sample.html"


@pytest.fixture
def sample_document(sample_path: Path) -> Node:
    """Freshly parsed sample book."""
    return Node.from_file(sample_path)


@pytest.fixture
def make_document() -> DocumentFactory:
    """Factory parsing a synthetic document built by ``build_document``."""

    def factory(content: str, **kwargs: object) -> Node:
        return Node.from_html(build_document(content, **kwargs))

    return factory
