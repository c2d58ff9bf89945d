"""Error taxonomy for the review pipeline.

Every failure carries a human-readable ``message`` and the HTTP status it
maps to. Validation-class errors (including an empty model reply) are 400;
extraction, configuration and upstream errors are 500.
"""


class AdvisorError(Exception):
    """Base class for errors surfaced to the client as ``{"message": ...}``."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ── Validation (400) ─────────────────────────────────────────────────


class ValidationError(AdvisorError):
    status_code = 400


class MissingFile(ValidationError):
    def __init__(self, message: str = "No resume file provided"):
        super().__init__(message)


class MissingField(ValidationError):
    def __init__(self, message: str = "Job description is required"):
        super().__init__(message)


class UnsupportedMediaType(ValidationError):
    def __init__(self, message: str = "Only PDF files are supported"):
        super().__init__(message)


class FileTooLarge(ValidationError):
    def __init__(self, max_bytes: int):
        super().__init__(f"File too large. Max size is {max_bytes // (1024 * 1024)}MB")


class UploadRejected(ValidationError):
    """Multipart violations other than the size cap (too many files/fields)."""

    def __init__(self, reason: str):
        super().__init__(f"Upload error: {reason}")


class EmptyExtraction(ValidationError):
    def __init__(self, message: str = "Could not extract text from PDF"):
        super().__init__(message)


class EmptyJobDescription(ValidationError):
    def __init__(self, message: str = "Job description cannot be empty"):
        super().__init__(message)


class EmptySuggestions(ValidationError):
    """The completion came back without content; same class as EmptyExtraction."""

    def __init__(self, message: str = "The AI service returned no suggestions"):
        super().__init__(message)


# ── Processing (500) ─────────────────────────────────────────────────


class ExtractionFailed(AdvisorError):
    pass


class ConfigurationError(AdvisorError):
    pass


class UpstreamError(AdvisorError):
    """Any failure talking to the completion API.

    ``status`` is the upstream HTTP status, or None for transport errors.
    """

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


class AuthenticationFailed(UpstreamError):
    pass


class BillingOrAccessIssue(UpstreamError):
    pass


class ModelNotFound(UpstreamError):
    pass
