"""Common contract for judge adapters."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from loguru import logger

from domain.models import CandidateSubmission, JudgeIdentity, Platform
from domain.selection import select_best

if TYPE_CHECKING:
    from infrastructure.http_client import AsyncHTTPClient


class PlatformAdapter(ABC):
    """
    Fetches a user's accepted submissions from one judge.

    Subclasses implement two steps: ``list_candidates`` returns every accepted
    submission in the target window with enough detail to compare siblings,
    and ``enrich`` completes one selected candidate with statement, tags and
    source. ``fetch_accepted`` ties them together with best-submission
    selection and keeps failures scoped: a broken listing yields no
    submissions for this platform, a broken problem yields no record for
    that problem only.
    """

    platform: Platform

    def __init__(
        self,
        http_client: "AsyncHTTPClient",
        *,
        author: str | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.http_client = http_client
        self.author = author
        self.clock = clock

    @abstractmethod
    async def list_candidates(self, identity: JudgeIdentity) -> list[CandidateSubmission]:
        """List accepted submissions; raises when the listing itself fails."""
        ...

    @abstractmethod
    async def enrich(self, candidate: CandidateSubmission, identity: JudgeIdentity) -> CandidateSubmission:
        """Attach statement, tags and source, substituting placeholders on failure."""
        ...

    async def fetch_accepted(self, identity: JudgeIdentity) -> list[CandidateSubmission]:
        logger.info(f"Fetching accepted {self.platform} submissions for {identity}")

        try:
            candidates = await self.list_candidates(identity)
        except Exception as e:
            logger.error(f"Failed to list {self.platform} submissions for {identity}: {e}")
            return []

        selected = select_best(candidates)
        logger.debug(f"{len(candidates)} candidate(s) reduced to {len(selected)} problem(s)")

        results = []
        for candidate in selected:
            try:
                results.append(await self.enrich(candidate, identity))
            except Exception:
                logger.exception(f"Failed to process {self.platform} problem {candidate.problem_key}")

        logger.info(f"Collected {len(results)} {self.platform} submission(s)")
        return results

    def author_for(self, identity: JudgeIdentity) -> str:
        return self.author or identity.handle
