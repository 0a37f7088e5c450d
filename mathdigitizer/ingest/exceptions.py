class DocxConversionError(Exception):
    """Raised when a Word document cannot be opened or converted."""
