"""Output page basenames."""

from __future__ import annotations

from typing import Callable, Sequence

INDEX_BASENAME = "index"
PREAMBLE_BASENAME = "preamble"

BasenameMaker = Callable[[int, Sequence[int]], str]


def make_basename(chapter: int, path: Sequence[int] = ()) -> str:
    """Name a chapter or section page from its position.

    ``path`` holds the 1-based sibling indices below the chapter, so
    ``(2,)`` is the second section and ``(2, 1)`` its first subsection::

        make_basename(3)          -> "chap3"
        make_basename(3, (2,))    -> "chap3_sec2"
        make_basename(3, (2, 1))  -> "chap3_sec2-1"
    """
    name = f"chap{chapter}"
    if not path:
        return name
    return f"{name}_sec{'-'.join(str(index) for index in path)}"


def part_basename(part: int) -> str:
    return f"part{part}"


def page_filename(basename: str) -> str:
    return f"{basename}.html"
