import httpx
import pytest

from hubfetch.infrastructure.error_handler import (
    AuthenticationError,
    DownloadError,
    FilesystemError,
    NetworkError,
    ProtocolError,
    RateLimitError,
    RepositoryNotFoundError,
    TransferError,
    error_for_status,
    handle_api_error,
    raise_for_status,
)


# ---- Exception classes -----------------------------------------------------

def test_download_error_message_and_original():
    original = ValueError("boom")
    err = DownloadError("failed", original)
    assert err.message == "failed"
    assert err.original_error is original
    assert "failed" in str(err)
    assert "Original: boom" in str(err)


@pytest.mark.parametrize("exc_cls", [NetworkError, TransferError, FilesystemError, ProtocolError])
def test_specific_errors_store_message(exc_cls):
    err = exc_cls("msg")
    assert err.message == "msg"
    assert str(err) == "msg"
    assert isinstance(err, DownloadError)


@pytest.mark.parametrize("status, expected", [
    (401, AuthenticationError),
    (403, AuthenticationError),
    (404, RepositoryNotFoundError),
    (429, RateLimitError),
    (500, ProtocolError),
])
def test_error_for_status(status, expected):
    err = error_for_status(status, "bad")
    assert type(err) is expected
    assert err.status_code == status


def test_raise_for_status_passes_success():
    raise_for_status(httpx.Response(200), "listing")


def test_raise_for_status_raises_protocol_error():
    with pytest.raises(RepositoryNotFoundError, match="listing"):
        raise_for_status(httpx.Response(404), "listing")


# ---- handle_api_error decorator -------------------------------------------

def test_handle_api_error_transport_error():
    @handle_api_error
    def fn():
        raise httpx.ConnectError("conn reset")

    with pytest.raises(NetworkError) as info:
        fn()
    assert isinstance(info.value.original_error, httpx.ConnectError)


def test_handle_api_error_timeout():
    @handle_api_error
    def fn():
        raise httpx.ReadTimeout("too slow")

    with pytest.raises(NetworkError):
        fn()


def test_handle_api_error_http_status():
    request = httpx.Request("GET", "https://hub.test/x")
    response = httpx.Response(429, request=request)

    @handle_api_error
    def fn():
        raise httpx.HTTPStatusError("429 Too Many Requests", request=request, response=response)

    with pytest.raises(RateLimitError):
        fn()


def test_handle_api_error_os_error():
    @handle_api_error
    def fn():
        raise PermissionError(13, "Permission denied")

    with pytest.raises(FilesystemError):
        fn()


def test_handle_api_error_unexpected():
    @handle_api_error
    def fn():
        raise RuntimeError("boom")

    with pytest.raises(DownloadError):
        fn()


def test_handle_api_error_lets_download_errors_through():
    original = ProtocolError("bad body")

    @handle_api_error
    def fn():
        raise original

    with pytest.raises(ProtocolError) as info:
        fn()
    assert info.value is original


@pytest.mark.asyncio
async def test_handle_api_error_wraps_coroutines():
    @handle_api_error
    async def fn():
        raise httpx.ConnectError("down")

    with pytest.raises(NetworkError):
        await fn()


@pytest.mark.asyncio
async def test_handle_api_error_returns_coroutine_result():
    @handle_api_error
    async def fn():
        return "ok"

    assert await fn() == "ok"
