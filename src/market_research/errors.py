"""Exceptions raised by the research session and its collaborators."""


class ResearchError(Exception):
    """Base class for market research failures."""


class ValidationError(ResearchError):
    """Raised when a research request is missing required fields."""

    def __init__(self, fields: list[str]):
        self.fields = fields
        names = " and ".join(fields)
        super().__init__(f"Please provide {names}")


class ServiceError(ResearchError):
    """Raised when the generative service call fails.

    ``status_code`` is the HTTP status of the failed response, or None when
    the request never got a response (connection error, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(ResearchError):
    """Raised when a response body lacks the expected content blocks."""
