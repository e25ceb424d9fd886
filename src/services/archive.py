"""Service keeping the published archive index in sync with new records."""

from collections.abc import Sequence
from typing import Protocol

from loguru import logger

from domain.archive_index import ArchiveIndexMerger, group_by_section
from domain.models import RemoteDocument, SubmissionRecord
from infrastructure.errors import ContentStoreError, IndexPublishError, IndexWriteConflictError, VersionConflictError

COMMIT_MESSAGE = "Update archive index"


class ContentStoreProtocol(Protocol):
    """Versioned single-file storage."""

    async def get_file(self, path: str) -> RemoteDocument:
        ...

    async def put_file(self, path: str, content: str, message: str, sha: str | None = None) -> str | None:
        ...


class ArchiveIndexService:
    """Fetch, merge and write back the archive index."""

    def __init__(
        self,
        *,
        store: ContentStoreProtocol,
        merger: ArchiveIndexMerger,
        path: str = "README.md",
        max_attempts: int = 3,
    ):
        """
        Initialize service.

        Args:
            store: Content store holding the index
            merger: Index merger
            path: Index path inside the store
            max_attempts: Fetch-merge-write cycles before giving up on conflicts
        """
        self.store = store
        self.merger = merger
        self.path = path
        self.max_attempts = max(1, max_attempts)

    async def update(self, records: Sequence[SubmissionRecord]) -> bool:
        """
        Merge ``records`` into the remote index.

        A write rejected because the index changed in between is retried on a
        freshly fetched copy, so concurrent writers never lose entries.

        Returns:
            True if a new version was written, False if nothing changed

        Raises:
            IndexWriteConflictError: If every attempt hit a concurrent change
            IndexPublishError: If the index cannot be read or written
        """
        grouped = group_by_section(records)

        for attempt in range(1, self.max_attempts + 1):
            try:
                current = await self.store.get_file(self.path)
                merged = self.merger.merge(current.content, grouped)

                if merged == current.content:
                    logger.info(f"{self.path} already up to date")
                    return False

                await self.store.put_file(self.path, merged, COMMIT_MESSAGE, sha=current.sha)
                logger.info(f"Updated {self.path} with {len(records)} record(s)")
                return True

            except VersionConflictError:
                logger.warning(
                    f"{self.path} changed remotely (attempt {attempt}/{self.max_attempts}), re-merging"
                )
            except ContentStoreError as e:
                raise IndexPublishError(f"Failed to update {self.path}: {e}") from e

        raise IndexWriteConflictError(self.path, self.max_attempts)
