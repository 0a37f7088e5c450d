class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class UnsupportedInputError(ProcessorError):
    """Raised when an uploaded file has a media type the digitizer cannot read."""


class FileReadError(ProcessorError):
    """Raised when a file cannot be read from disk."""
