"""
Service for listing remote repository trees on the model hub.
"""

from typing import List
from urllib.parse import quote

import httpx

from ..infrastructure.error_handler import ProtocolError, handle_api_error, raise_for_status
from ..infrastructure.logger import logger
from ..models import DownloadConfig, RemoteEntry


class HubAPIService:
    """Reads one level of a repository tree per call. Nothing is cached."""

    def __init__(self, client: httpx.AsyncClient, config: DownloadConfig):
        self.client = client
        self.config = config
        self.api_calls = 0

    def tree_url(self, repo_id: str, path: str = "") -> str:
        """Listing URL; an empty path maps to the branch root."""

        url = f"{self.config.base_url}/api/models/{repo_id}/tree/{quote(self.config.revision, safe='')}"
        path = path.strip("/")
        if path:
            url = f"{url}/{quote(path, safe='/')}"
        return url

    @handle_api_error
    async def list_tree(self, repo_id: str, path: str = "") -> List[RemoteEntry]:
        """
        List the entries directly under ``path`` in a repository.

        Args:
            repo_id: Repository identifier (``owner/name``)
            path: Path relative to the repository root, empty for the root

        Returns:
            List of RemoteEntry objects for this level only

        Raises:
            NetworkError: On transport failure or timeout
            ProtocolError: On a non-200 status or malformed body
        """
        url = self.tree_url(repo_id, path)
        logger.debug(f"Listing {repo_id}:{path or '/'}")

        self.api_calls += 1
        response = await self.client.get(url, timeout=self.config.list_timeout)
        raise_for_status(response, f"listing of {repo_id}:{path or '/'}")
        if response.status_code != 200:
            raise ProtocolError(
                f"Unexpected status {response.status_code} for listing of {repo_id}",
                status_code=response.status_code
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ProtocolError(f"Listing of {repo_id}:{path or '/'} is not valid JSON", e)

        if not isinstance(payload, list):
            raise ProtocolError(f"Listing of {repo_id}:{path or '/'} is not a JSON array")

        try:
            entries = [RemoteEntry.from_api(row) for row in payload]
        except ValueError as e:
            raise ProtocolError(f"Malformed entry in listing of {repo_id}:{path or '/'}", e)

        logger.debug(f"Listed {len(entries)} entries under {repo_id}:{path or '/'}")
        return entries


__all__ = [
    "HubAPIService",
]
