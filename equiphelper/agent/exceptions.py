"""Answer service exceptions."""


class AnswerServiceError(Exception):
    """Base exception for failures while producing an answer."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class UpstreamTimeoutError(AnswerServiceError):
    """Raised when reference data or the model did not answer before the deadline."""


class UpstreamError(AnswerServiceError):
    """Raised when reference data or the model call failed."""
