"""Errors raised by the chat-completion client."""

import httpx


class CoachError(Exception):
    """Base class for every error the LLM layer surfaces."""


class TransportError(CoachError):
    """The provider could not be reached, or the connection broke mid-read."""


class ApiError(CoachError):
    """The provider answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error {status_code}: {message}")


class AuthError(ApiError):
    """The credential is missing or was rejected (401/403)."""


class ProtocolError(CoachError):
    """A 2xx body that does not have the expected shape."""


def from_request_error(exc: httpx.RequestError, context: str) -> CoachError:
    """Translate an httpx request failure.

    An undecodable body (bad Content-Encoding) is a ProtocolError; every
    other request failure, redirects included, is a TransportError.
    """
    if isinstance(exc, httpx.DecodingError):
        return ProtocolError(f"{context}: undecodable body: {exc}")
    return TransportError(f"{context}: {exc}")
