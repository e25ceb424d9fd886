"""Client for the GitHub repository contents API."""

import base64
from typing import TYPE_CHECKING
from urllib.parse import quote

from loguru import logger

from domain.models import RemoteDocument
from infrastructure.errors import (
    ContentStoreError,
    HTTPClientError,
    HTTPStatusError,
    VersionConflictError,
)

if TYPE_CHECKING:
    from infrastructure.http_client import AsyncHTTPClient

API_BASE = "https://api.github.com"


class GitHubContentsClient:
    """Reads and writes single files of a repository, versioned by blob SHA."""

    def __init__(
        self,
        http_client: "AsyncHTTPClient",
        *,
        token: str,
        repo: str,
        branch: str = "main",
    ):
        """
        Initialize client.

        Args:
            http_client: Async HTTP client instance
            token: Personal access token with contents write permission
            repo: Repository as ``owner/name``
            branch: Branch receiving the commits
        """
        self.http_client = http_client
        self.repo = repo
        self.branch = branch
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def _contents_url(self, path: str) -> str:
        return f"{API_BASE}/repos/{self.repo}/contents/{quote(path)}"

    async def get_file(self, path: str) -> RemoteDocument:
        """
        Fetch a file and its SHA.

        A missing file is returned as an empty document without SHA.

        Raises:
            ContentStoreError: If the file exists but cannot be read
        """
        url = self._contents_url(path)
        try:
            data = await self.http_client.get_json(url, headers=self.headers, params={"ref": self.branch})
        except HTTPStatusError as e:
            if e.status_code == 404:
                logger.info(f"{path} not found in {self.repo}, starting fresh")
                return RemoteDocument(path=path, content="")
            raise ContentStoreError(f"Failed to read {path}: {e}") from e
        except HTTPClientError as e:
            raise ContentStoreError(f"Failed to read {path}: {e}") from e

        try:
            content = base64.b64decode(data["content"]).decode("utf-8")
            return RemoteDocument(path=path, content=content, sha=data["sha"])
        except (KeyError, TypeError, ValueError) as e:
            raise ContentStoreError(f"Unexpected contents payload for {path}: {e}") from e

    async def put_file(self, path: str, content: str, message: str, sha: str | None = None) -> str | None:
        """
        Create or update a file and return its new SHA.

        Raises:
            VersionConflictError: If ``sha`` no longer matches the remote file
            ContentStoreError: On any other failure
        """
        payload = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": self.branch,
        }
        if sha:
            payload["sha"] = sha

        url = self._contents_url(path)
        try:
            data = await self.http_client.put_json(url, payload, headers=self.headers)
        except HTTPStatusError as e:
            if e.status_code in (409, 422):
                raise VersionConflictError(path, sha) from e
            raise ContentStoreError(f"Failed to write {path}: {e}") from e
        except HTTPClientError as e:
            raise ContentStoreError(f"Failed to write {path}: {e}") from e

        logger.debug(f"Committed {path} to {self.repo}@{self.branch}")
        return ((data or {}).get("content") or {}).get("sha")

    async def upsert_file(self, path: str, content: str, message: str) -> str | None:
        """Write a file whatever its current version is."""
        current = await self.get_file(path)
        return await self.put_file(path, content, message, sha=current.sha)
