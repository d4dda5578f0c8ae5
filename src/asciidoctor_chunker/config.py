"""Local configuration for asciidoctor-chunker."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_OUTDIR = "html_chunks"
DEFAULT_DEPTH = "1"
DEFAULT_TITLE_PAGE = "Titlepage"
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_RETRIES = 2
DEFAULT_USER_AGENT = "asciidoctor-chunker/0.1"

# Output directory used when no -o/--outdir is given.
CHUNKER_OUTDIR = Path(os.getenv("ASCIIDOCTOR_CHUNKER_OUTDIR", DEFAULT_OUTDIR)).expanduser()
CHUNKER_DEPTH = os.getenv("ASCIIDOCTOR_CHUNKER_DEPTH", DEFAULT_DEPTH)
CHUNKER_TITLE_PAGE = os.getenv("ASCIIDOCTOR_CHUNKER_TITLE_PAGE", DEFAULT_TITLE_PAGE)
CHUNKER_FETCH_TIMEOUT_S = float(os.getenv("ASCIIDOCTOR_CHUNKER_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
CHUNKER_FETCH_RETRIES = int(os.getenv("ASCIIDOCTOR_CHUNKER_FETCH_RETRIES", str(DEFAULT_FETCH_RETRIES)))
CHUNKER_USER_AGENT = os.getenv("ASCIIDOCTOR_CHUNKER_USER_AGENT", DEFAULT_USER_AGENT)
