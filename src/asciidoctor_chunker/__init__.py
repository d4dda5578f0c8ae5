"""asciidoctor-chunker: split Asciidoctor single-page HTML into linked pages."""

__version__ = "0.1.0"

from asciidoctor_chunker.chunker import ChunkerOptions, ChunkResult, chunk_document, make_chunks
from asciidoctor_chunker.depth import parse_depth
from asciidoctor_chunker.exceptions import (
    ChunkerError,
    ConfigError,
    DepthSpecError,
    FetchError,
    MalformedInputError,
    SourceNotAvailableError,
    WriteError,
)
from asciidoctor_chunker.schemas import DepthPolicy, NavigationTable

__all__ = [
    "ChunkResult",
    "ChunkerError",
    "ChunkerOptions",
    "ConfigError",
    "DepthPolicy",
    "DepthSpecError",
    "FetchError",
    "MalformedInputError",
    "NavigationTable",
    "SourceNotAvailableError",
    "WriteError",
    "__version__",
    "chunk_document",
    "make_chunks",
    "parse_depth",
]
