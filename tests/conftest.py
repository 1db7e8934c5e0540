"""
Shared fixtures: an in-process fake model hub served through httpx.MockTransport.
"""

import re
from typing import Dict, List, Optional, Union
from urllib.parse import unquote

import httpx
import pytest

from hubfetch.models import DownloadConfig


ENDPOINT = "https://hub.test"

_TREE_RE = re.compile(r"^/api/models/(?P<repo>[^/]+/[^/]+)/tree/main(?:/(?P<path>.*))?$")
_RESOLVE_RE = re.compile(r"^/(?P<repo>[^/]+/[^/]+)/resolve/main/(?P<path>.+)$")


class FakeHub:
    """Minimal hub: tree listings and raw file downloads for any repository."""

    def __init__(self):
        self.trees: Dict[str, List[dict]] = {}
        self.files: Dict[str, bytes] = {}
        self.listing_failures: Dict[str, Union[int, Exception]] = {}
        self.file_failures: Dict[str, Union[int, Exception]] = {}
        self.file_failures_once: Dict[str, int] = {}
        self.listed: List[str] = []
        self.downloaded: List[str] = []
        self.requests: List[httpx.Request] = []

    @staticmethod
    def file_row(path: str, size: int, lfs_size: Optional[int] = None) -> dict:
        row = {"type": "file", "path": path, "size": size, "oid": "abc"}
        if lfs_size is not None:
            row["lfs"] = {"size": lfs_size, "oid": "def", "pointer_size": size}
        return row

    @staticmethod
    def dir_row(path: str) -> dict:
        return {"type": "directory", "path": path, "size": 0, "oid": "abc"}

    def add_file(self, path: str, content: bytes, lfs: bool = False) -> dict:
        """Register a file and return its listing row."""
        self.files[path] = content
        if lfs:
            return self.file_row(path, 134, lfs_size=len(content))
        return self.file_row(path, len(content))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url_path = unquote(request.url.path)

        match = _TREE_RE.match(url_path)
        if match:
            path = match.group("path") or ""
            self.listed.append(path)
            failure = self.listing_failures.get(path)
            if isinstance(failure, Exception):
                raise failure
            if failure is not None:
                return httpx.Response(failure, json={"error": "failure"})
            if path not in self.trees:
                return httpx.Response(404, json={"error": "Entry not found"})
            return httpx.Response(200, json=self.trees[path])

        match = _RESOLVE_RE.match(url_path)
        if match:
            path = match.group("path")
            self.downloaded.append(path)
            once = self.file_failures_once.pop(path, None)
            if once is not None:
                return httpx.Response(once, content=b"transient error")
            failure = self.file_failures.get(path)
            if isinstance(failure, Exception):
                raise failure
            if failure is not None:
                return httpx.Response(failure, content=b"error")
            if path not in self.files:
                return httpx.Response(404, content=b"Entry not found")
            return httpx.Response(200, content=self.files[path])

        return httpx.Response(400, content=b"unknown route")


@pytest.fixture
def hub():
    return FakeHub()


@pytest.fixture
def config():
    return DownloadConfig(endpoint=ENDPOINT, chunk_size=4)


@pytest.fixture
def client(hub):
    return httpx.AsyncClient(transport=httpx.MockTransport(hub.handler))
