"""Service handing rendered records to their downstream destinations."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from loguru import logger

from domain.models import SubmissionRecord


class DocumentStoreProtocol(Protocol):
    async def upsert_file(self, path: str, content: str, message: str) -> str | None:
        ...


class PageStoreProtocol(Protocol):
    async def create_page(self, handoff: Mapping[str, Any]) -> None:
        ...


class PublishingService:
    """Publishes each record as a document and, optionally, as a page."""

    def __init__(
        self,
        *,
        documents: DocumentStoreProtocol | None = None,
        pages: PageStoreProtocol | None = None,
    ):
        self.documents = documents
        self.pages = pages

    async def publish(self, records: Sequence[SubmissionRecord]) -> list[SubmissionRecord]:
        """
        Publish records one by one.

        A failing record is logged and skipped; it does not stop the others.

        Returns:
            Records whose document was written (all of them when no
            document store is configured)
        """
        published = []
        for record in records:
            if await self._publish_one(record):
                published.append(record)

        logger.info(f"Published {len(published)}/{len(records)} record(s)")
        return published

    async def _publish_one(self, record: SubmissionRecord) -> bool:
        if self.documents is not None:
            try:
                await self.documents.upsert_file(record.destination_path, record.body, record.summary)
                logger.info(f"Pushed {record.destination_path}")
            except Exception as e:
                logger.error(f"Failed to push {record.destination_path}: {e}")
                return False

        if self.pages is not None:
            try:
                await self.pages.create_page(record.to_handoff())
            except Exception as e:
                logger.error(f"Failed to add '{record.title}' to Notion: {e}")

        return True
