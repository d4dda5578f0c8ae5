"""Depth specifier parsing and per-position depth resolution."""

from __future__ import annotations

import re

from pydantic import ValidationError

from asciidoctor_chunker.exceptions import DepthSpecError
from asciidoctor_chunker.schemas import DepthPolicy

_TERM_RE = re.compile(r"^(\d+)(?:-(\d+))?:(\d+)$")


def parse_depth(spec: str, *, chapter_scoped: bool = False) -> DepthPolicy:
    """Parse a depth specifier such as ``"1,3-5:2,8:4"``.

    Terms are comma separated. A bare number sets the default level; ``c:l``
    sets level ``l`` for chapter ``c``; ``a-b:l`` sets it for chapters ``a``
    through ``b``. Later terms override earlier ones and the default is 1
    when no bare number is given.

    Raises:
        DepthSpecError: If a term is malformed or a level is below 1.
    """
    default = 1
    overrides: dict[int, int] = {}
    for raw_term in spec.split(","):
        term = re.sub(r"\s+", "", raw_term)
        if term.isdigit():
            default = int(term)
            continue
        match = _TERM_RE.match(term)
        if not match:
            raise DepthSpecError(f"Invalid depth specifier term: {raw_term.strip()!r}")
        first, last, level = match.groups()
        start = int(first)
        stop = int(last) if last else start
        if stop < start:
            raise DepthSpecError(f"Chapter range runs backwards in {raw_term.strip()!r}")
        for chapter in range(start, stop + 1):
            overrides[chapter] = int(level)

    try:
        return DepthPolicy(default=default, overrides=overrides, chapter_scoped=chapter_scoped)
    except ValidationError as exc:
        raise DepthSpecError(f"Invalid depth specifier {spec!r}: {exc}") from exc


def max_level_for(policy: DepthPolicy, *, chapter: int, position: int) -> int:
    """Return the deepest level to split at this walk position.

    With the default flat keying the lookup key is ``position``: the chapter
    number for a chapter, the sibling index for a section. A key that matches
    a chapter override therefore also fires for any section sitting at that
    sibling index.
    """
    if policy.chapter_scoped:
        return policy.resolve(chapter)
    return policy.resolve(position)


def is_terminal(policy: DepthPolicy, level: int, max_level: int) -> bool:
    """Whether a node at ``level`` is emitted whole, without further splitting."""
    if policy.chapter_scoped:
        return level >= max_level
    return level == max_level
