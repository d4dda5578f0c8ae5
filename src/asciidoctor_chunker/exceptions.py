"""Custom exceptions for asciidoctor-chunker."""


class ChunkerError(Exception):
    """Base exception for asciidoctor-chunker operations."""


class MalformedInputError(ChunkerError):
    """Input document lacks the structure required to chunk it."""


class ConfigError(ChunkerError):
    """Invalid chunking options."""


class DepthSpecError(ConfigError):
    """Depth specifier could not be parsed."""


class FetchError(ChunkerError):
    """Error while loading the input document."""


class SourceNotAvailableError(FetchError):
    """Input document does not exist locally or remotely."""


class WriteError(ChunkerError):
    """One or more chunked pages could not be written."""
