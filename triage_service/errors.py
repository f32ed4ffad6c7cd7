class TriageError(Exception):
    """Base class for errors reported back to the caller."""


class UploadValidationError(TriageError):
    """Uploaded file is missing, has the wrong type, or has no usable rows."""


class ChatValidationError(TriageError):
    """Chat message is missing or too short to interpret."""
