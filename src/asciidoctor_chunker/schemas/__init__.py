"""Shared schemas for asciidoctor-chunker."""

from asciidoctor_chunker.schemas.depth import DepthPolicy
from asciidoctor_chunker.schemas.navigation import NavigationTable

__all__ = ["DepthPolicy", "NavigationTable"]
