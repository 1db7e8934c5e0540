"""
Shared transport client for HubFetch.

The client is built once at startup from an explicit proxy configuration and
handed to every service, rather than being looked up as global state.
"""

import os
from typing import Dict, Mapping, Optional
from urllib.parse import urlsplit

import httpx

from ..models import DownloadConfig, ProxyConfig
from .logger import logger


USER_AGENT = "hubfetch/0.1"


def _parse_proxy_url(value: str, scheme: str) -> Optional[str]:
    """Return ``value`` if it names a usable proxy, else log and return None."""

    try:
        parsed = urlsplit(value)
        port = parsed.port
    except ValueError:
        port = None
        parsed = None

    if parsed is None or not parsed.hostname or port is None:
        logger.warning(f"Invalid {scheme} proxy URL: {value}")
        return None

    logger.info(f"Configured {scheme} proxy: {parsed.hostname}:{port}")
    return value


def resolve_proxy_config(environ: Optional[Mapping[str, str]] = None) -> Optional[ProxyConfig]:
    """
    Resolve proxy settings from environment variables.

    Lower-case variable names take precedence over upper-case ones.

    Args:
        environ: Environment mapping, ``os.environ`` when omitted

    Returns:
        ProxyConfig, or None if no usable proxy is configured
    """
    env = os.environ if environ is None else environ

    def lookup(name: str) -> Optional[str]:
        return env.get(name.lower()) or env.get(name.upper())

    https_proxy = lookup("https_proxy")
    http_proxy = lookup("http_proxy")

    proxy = ProxyConfig(
        https=_parse_proxy_url(https_proxy, "HTTPS") if https_proxy else None,
        http=_parse_proxy_url(http_proxy, "HTTP") if http_proxy else None,
    )
    return None if proxy.is_empty else proxy


def _proxy_mounts(proxy: Optional[ProxyConfig]) -> Dict[str, httpx.AsyncBaseTransport]:
    mounts: Dict[str, httpx.AsyncBaseTransport] = {}
    if proxy is None:
        return mounts
    if proxy.https:
        mounts["https://"] = httpx.AsyncHTTPTransport(proxy=proxy.https)
    if proxy.http:
        mounts["http://"] = httpx.AsyncHTTPTransport(proxy=proxy.http)
    return mounts


def create_client(
    config: Optional[DownloadConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> httpx.AsyncClient:
    """
    Build the process-wide async HTTP client.

    Proxy configuration is resolved exactly once, here, and stays fixed for
    the lifetime of the client.
    """
    config = config or DownloadConfig()
    proxy = resolve_proxy_config(environ)

    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        timeout=httpx.Timeout(config.list_timeout),
        follow_redirects=True,
        trust_env=False,
        transport=transport,
        mounts=_proxy_mounts(proxy) if transport is None else None,
    )


__all__ = [
    "USER_AGENT",
    "resolve_proxy_config",
    "create_client",
]
