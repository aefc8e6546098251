"""
Error kinds raised along the upload -> extract pipeline.
"""


class ScribeTableError(Exception):
    """Base class for all errors surfaced to the user."""


class UnsupportedFormatError(ScribeTableError):
    """The uploaded file's media type is not in the allow-list."""


class FileTooLargeError(ScribeTableError):
    """The uploaded file exceeds the configured raw size cap."""


class CompressionError(ScribeTableError):
    """The image could not be decoded or re-encoded."""


class ExtractionError(ScribeTableError):
    """The model returned nothing, or something that is not a table."""


class NoDataDetectedError(ExtractionError):
    """The model returned a well-formed but empty table."""
