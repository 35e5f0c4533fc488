import enum

import httpx


class UpstreamFailure(str, enum.Enum):
    CONNECTION_REFUSED = "connection_refused"
    RATE_LIMITED = "rate_limited"
    BAD_REQUEST = "bad_request"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


FAILURE_RESPONSES: dict[UpstreamFailure, tuple[int, str]] = {
    UpstreamFailure.CONNECTION_REFUSED: (503, "Generation service unavailable"),
    UpstreamFailure.RATE_LIMITED: (429, "Too many requests, please try again shortly"),
    UpstreamFailure.BAD_REQUEST: (400, "Invalid request to the generation service"),
    UpstreamFailure.TIMEOUT: (504, "Generation service timed out"),
    UpstreamFailure.UNKNOWN: (500, "Internal error while generating the response"),
}


class ServiceError(Exception):
    """Error rendered by the app-level handler as an ErrorResponse envelope."""

    def __init__(self, status_code: int, error: str, details: str | None = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


class ChatRelayError(ServiceError):
    """Error raised by the chat relay."""


def classify_failure(exc: BaseException) -> UpstreamFailure:
    # ConnectTimeout is both a timeout and a connect failure; report it as a timeout.
    if isinstance(exc, httpx.TimeoutException):
        return UpstreamFailure.TIMEOUT
    if isinstance(exc, httpx.ConnectError):
        return UpstreamFailure.CONNECTION_REFUSED
    if isinstance(exc, httpx.HTTPStatusError):
        if exc.response.status_code == 429:
            return UpstreamFailure.RATE_LIMITED
        if exc.response.status_code == 400:
            return UpstreamFailure.BAD_REQUEST
    return UpstreamFailure.UNKNOWN


def failure_response(failure: UpstreamFailure) -> tuple[int, str]:
    return FAILURE_RESPONSES[failure]


def describe_failure(exc: BaseException) -> str:
    """Short human-readable description of an upstream failure, including the error body when present."""
    if isinstance(exc, httpx.HTTPStatusError):
        body = exc.response.text.strip()
        status = exc.response.status_code
        return f"Upstream returned {status}: {body[:500]}" if body else f"Upstream returned {status}"
    return str(exc) or exc.__class__.__name__
