"""
Error types and translation helpers for HubFetch.

Transport exceptions raised by httpx are translated into the package's own
error hierarchy so callers only need to handle ``DownloadError``.
"""

import functools
import inspect
from typing import Callable, Optional

import httpx


####
##      EXCEPTION HIERARCHY
#####
class DownloadError(Exception):
    """Base error for every failure raised by HubFetch."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        if self.original_error is not None:
            return f"{self.message} (Original: {self.original_error})"
        return self.message


class NetworkError(DownloadError):
    """Transport or connectivity failure, including timeouts."""


class ProtocolError(DownloadError):
    """Unexpected status code or malformed response body."""

    def __init__(
        self,
        message: str,
        original_error: Optional[BaseException] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, original_error)
        self.status_code = status_code


class AuthenticationError(ProtocolError):
    """The hub refused anonymous access (401/403)."""


class RepositoryNotFoundError(ProtocolError):
    """Repository or path does not exist on the hub (404)."""


class RateLimitError(ProtocolError):
    """The hub is throttling requests (429)."""


class TransferError(DownloadError):
    """A single file fetch failed."""


class FilesystemError(DownloadError):
    """Local directory creation or finalization failed."""


class MissingFileError(DownloadError):
    """An expected model is not present in the local repository."""


class CorruptModelError(DownloadError):
    """A local model is present but structurally invalid."""


def error_for_status(status_code: int, message: str) -> ProtocolError:
    """Pick the ``ProtocolError`` subclass matching an HTTP status."""

    if status_code in (401, 403):
        return AuthenticationError(message, status_code=status_code)
    if status_code == 404:
        return RepositoryNotFoundError(message, status_code=status_code)
    if status_code == 429:
        return RateLimitError(message, status_code=status_code)
    return ProtocolError(message, status_code=status_code)


def raise_for_status(response: httpx.Response, what: str) -> None:
    """Raise a ``ProtocolError`` unless ``response`` is a 2xx."""

    if not response.is_success:
        raise error_for_status(
            response.status_code,
            f"Unexpected status {response.status_code} for {what}"
        )


def _translate(e: Exception) -> DownloadError:
    if isinstance(e, DownloadError):
        return e
    if isinstance(e, httpx.HTTPStatusError):
        translated = error_for_status(e.response.status_code, f"HTTP error: {e}")
        translated.original_error = e
        return translated
    if isinstance(e, (httpx.TimeoutException, httpx.TransportError)):
        return NetworkError(f"Network error: {type(e).__name__}", e)
    if isinstance(e, OSError):
        return FilesystemError(f"Filesystem error: {e.strerror or e}", e)
    return DownloadError(f"Unexpected error: {type(e).__name__}", e)


def handle_api_error(func: Callable) -> Callable:
    """
    Decorator translating exceptions raised by ``func`` into ``DownloadError``s.

    Works for both plain functions and coroutine functions.
    """

    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except DownloadError:
                raise
            except Exception as e:
                raise _translate(e) from e

        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DownloadError:
            raise
        except Exception as e:
            raise _translate(e) from e

    return wrapper


__all__ = [
    "DownloadError",
    "NetworkError",
    "ProtocolError",
    "AuthenticationError",
    "RepositoryNotFoundError",
    "RateLimitError",
    "TransferError",
    "FilesystemError",
    "MissingFileError",
    "CorruptModelError",
    "error_for_status",
    "raise_for_status",
    "handle_api_error",
]
