"""Prev/next page links and the page behaviour script."""

from __future__ import annotations

import logging

from asciidoctor_chunker.dom import Node
from asciidoctor_chunker.naming import page_filename
from asciidoctor_chunker.schemas import NavigationTable

logger = logging.getLogger(__name__)

_FOOTER_ID = "footer"

_PREV_LINK = """<a rel="prev" href="{href}" class="nav nav-prev"
   title="Previous page" aria-label="Previous page" aria-keyshortcuts="Left">
   <i class="fa fa-angle-left"></i>
</a>"""

_NEXT_LINK = """<a rel="next" href="{href}" class="nav nav-next"
   title="Next page" aria-label="Next page" aria-keyshortcuts="Right">
   <i class="fa fa-angle-right"></i>
</a>"""

# Scrolls the TOC to the current entry and binds the arrow keys to prev/next.
PAGE_SCRIPT = """<script>
function isInViewport(ele) {
  const rect = ele.getBoundingClientRect();
  return rect.top >= 0 &&
    rect.bottom <= (window.innerHeight || document.documentElement.clientHeight);
}
function yPosition(ele) {
  return ele.getBoundingClientRect().top - 20;
}
const curr = document.getElementsByClassName('current');
const toc = document.getElementById('toc');
if (toc && curr.length > 0 && !isInViewport(curr[curr.length - 1])) {
  toc.scrollTo({ top: yPosition(curr[0]), left: 0, behavior: 'smooth' });
}
function gotoPage(selector) {
  const button = document.querySelector(selector);
  if (button) window.location.href = button.href;
}
document.addEventListener('keydown', e => {
  switch (e.key) {
    case 'ArrowRight':
      e.preventDefault();
      gotoPage('.nav-next');
      break;
    case 'ArrowLeft':
      e.preventDefault();
      gotoPage('.nav-prev');
      break;
  }
});
</script>"""


def render_nav(prev: str | None, next_: str | None) -> str:
    """Render the ``<nav>`` block linking to the neighbouring pages."""
    links = []
    if prev:
        links.append(_PREV_LINK.format(href=page_filename(prev)))
    if next_:
        links.append(_NEXT_LINK.format(href=page_filename(next_)))
    links.append('<div style="clear: both"></div>')
    return "<nav>\n" + "\n".join(links) + "\n</nav>"


def add_page_navigation(document: Node, basename: str, navigation: NavigationTable) -> Node:
    """Insert prev/next links into a chunked page.

    The ``<nav>`` goes right before ``div#footer`` when the footer is the
    last ``div`` of the body, otherwise right after that last ``div``.
    """
    if navigation.page_number(basename) is None:
        logger.warning("Page %s is missing from the navigation table", basename)
    prev, next_ = navigation.neighbours(basename)
    html = render_nav(prev, next_)

    last_div = document.find_first("body > div:last-of-type")
    if last_div is not None:
        if last_div.id == _FOOTER_ID:
            last_div.insert_html_before(html)
        else:
            last_div.insert_html_after(html)
        return document

    body = document.find_first("body")
    (body or document).append_html(html)
    return document


def insert_script(document: Node) -> Node:
    body = document.find_first("body")
    (body or document).append_html(PAGE_SCRIPT)
    return document
