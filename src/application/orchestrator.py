"""Async orchestrator for one daily archiving run."""

from collections.abc import Sequence
from typing import Optional

from loguru import logger

from domain.models import JudgeIdentity, SubmissionRecord
from domain.rendering import RecordRenderer
from infrastructure.adapters import PlatformAdapter
from infrastructure.parsers import SourceBrowserProtocol
from services.archive import ArchiveIndexService
from services.publishing import PublishingService


class SubmissionArchiveOrchestrator:
    """Collect, render, publish and index the previous day's submissions."""

    def __init__(
        self,
        *,
        adapters: Sequence[tuple[PlatformAdapter, Optional[JudgeIdentity]]],
        publishing: PublishingService,
        archive: Optional[ArchiveIndexService] = None,
        renderer: Optional[RecordRenderer] = None,
        browser: Optional[SourceBrowserProtocol] = None,
    ):
        """
        Initialize orchestrator with dependency injection.

        Args:
            adapters: Judge adapters paired with the user's identity there;
                a ``None`` identity means the judge is not configured
            publishing: Per-record publishing service
            archive: Archive index service; without it the index is left alone
            renderer: Record renderer
            browser: Browser session to release when the run ends
        """
        self.adapters = list(adapters)
        self.publishing = publishing
        self.archive = archive
        self.renderer = renderer or RecordRenderer()
        self.browser = browser

    async def run(self) -> list[SubmissionRecord]:
        """
        Run the pipeline once.

        Returns:
            Records that were published

        Raises:
            IndexPublishError: If the archive index cannot be updated
        """
        try:
            logger.info("Step 1: Collecting accepted submissions")
            records = await self._collect()

            if not records:
                logger.info("No new submissions in the target window")
                return []

            logger.info(f"Step 2: Publishing {len(records)} record(s)")
            published = await self.publishing.publish(records)

            if self.archive is None:
                logger.warning("No content store configured, archive index not updated")
            elif published:
                logger.info("Step 3: Updating archive index")
                await self.archive.update(published)

            return published
        finally:
            if self.browser is not None:
                self.browser.close()

    async def _collect(self) -> list[SubmissionRecord]:
        records: list[SubmissionRecord] = []

        for adapter, identity in self.adapters:
            if identity is None:
                logger.warning(f"No credentials for {adapter.platform}, skipping")
                continue

            for candidate in await adapter.fetch_accepted(identity):
                try:
                    records.append(self.renderer.render(candidate))
                except Exception as e:
                    logger.error(f"Failed to render {adapter.platform} problem {candidate.problem_key}: {e}")

        return records
