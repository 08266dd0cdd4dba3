class GameGrindException(Exception):
    """Base exception for all GameGrind lookup errors."""


class NetworkError(GameGrindException):
    """Raised when a low-level network error occurs (DNS, Connection Refused, Timeout)."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class GameNotFound(GameGrindException):
    """Raised when the metadata API answers 404 for a game or platform."""

    def __init__(self, identifier: str, source: str = "MobyGames"):
        super().__init__(f"'{identifier}' not found on {source}.")
        self.identifier = identifier
        self.source = source


class RateLimitExceeded(GameGrindException):
    """Raised when the API quota is hit (429). Never retried."""

    def __init__(self, source: str = "MobyGames", retry_after: float | None = None):
        msg = f"Rate limit exceeded for {source}."
        if retry_after:
            msg += f" Retry after {retry_after}s."
        super().__init__(msg)
        self.source = source
        self.retry_after = retry_after


class APIError(GameGrindException):
    """Raised when the API returns an unexpected status or an empty body."""

    def __init__(self, source: str = "MobyGames", status_code: int | None = None, message: str = "Unknown error"):
        msg = f"{source} API Error"
        if status_code:
            msg += f" ({status_code})"
        msg += f": {message}"
        super().__init__(msg)
        self.source = source
        self.status_code = status_code


class ParsingError(GameGrindException):
    """Raised when a response body is not the JSON object we expected."""

    def __init__(self, url: str, details: str):
        super().__init__(f"Failed to parse response from {url}: {details}")
        self.url = url
        self.details = details


# Failures of the transport itself, as opposed to payloads we could not read.
TRANSPORT_ERRORS = (NetworkError, GameNotFound, RateLimitExceeded, APIError)
