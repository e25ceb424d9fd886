"""Codeforces adapter: REST status listing, scraped statements, browser-read sources."""

import re
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from loguru import logger

from domain.models import UNKNOWN_DIFFICULTY, CandidateSubmission, JudgeIdentity, Platform
from domain.parsers.url_parser import URLParser
from domain.time_window import is_in_target_window
from infrastructure.errors import HTTPClientError
from infrastructure.parsers import (
    STATEMENT_UNAVAILABLE,
    CodeforcesPageParser,
    CodeforcesPageParserProtocol,
    SourceBrowserProtocol,
)
from infrastructure.schemas import CodeforcesStatusResponse, CodeforcesSubmission

from .base import PlatformAdapter

if TYPE_CHECKING:
    from infrastructure.http_client import AsyncHTTPClient

SOURCE_UNAVAILABLE = "(Source unavailable: login required)"
ACCEPTED = "OK"


def safe_name(name: str) -> str:
    """Problem name usable in a file name: punctuation dropped, spaces dashed."""
    cleaned = re.sub(r"[^\w\s]", "", name, flags=re.ASCII)
    return re.sub(r"\s+", "-", cleaned.strip())


class CodeforcesAdapter(PlatformAdapter):
    """Accepted submissions from ``user.status``, one record per problem."""

    platform = Platform.CODEFORCES

    def __init__(
        self,
        http_client: "AsyncHTTPClient",
        *,
        page_parser: Optional[CodeforcesPageParserProtocol] = None,
        browser: Optional[SourceBrowserProtocol] = None,
        author: str | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize adapter.

        Args:
            http_client: Async HTTP client instance
            page_parser: Statement parser (built on ``http_client`` by default)
            browser: Authenticated browser session; without it sources are placeholders
            author: Name shown in rendered documents (defaults to the handle)
            clock: Source of "now" for the target window
        """
        super().__init__(http_client, author=author, clock=clock)
        self.page_parser = page_parser or CodeforcesPageParser(http_client)
        self.browser = browser

    async def list_candidates(self, identity: JudgeIdentity) -> list[CandidateSubmission]:
        payload = await self.http_client.get_json(URLParser.codeforces_status_url(identity.handle))
        response = CodeforcesStatusResponse.model_validate(payload)
        if response.status != "OK":
            raise HTTPClientError(f"Codeforces API error: {response.comment or response.status}")

        now = self.clock()
        return [
            self._to_candidate(sub, identity)
            for sub in response.result
            if sub.verdict == ACCEPTED
            and sub.contest_id is not None
            and is_in_target_window(sub.creationTimeSeconds, now)
        ]

    def _to_candidate(self, sub: CodeforcesSubmission, identity: JudgeIdentity) -> CandidateSubmission:
        problem = sub.problem
        contest_id = sub.contest_id

        return CandidateSubmission(
            platform=self.platform,
            problem_key=f"{contest_id}-{problem.index}-{safe_name(problem.name)}",
            submission_id=str(sub.id),
            title=problem.name,
            timestamp=sub.creationTimeSeconds,
            problem_url=URLParser.codeforces_problem_url(contest_id, problem.index),
            submission_url=URLParser.codeforces_submission_url(contest_id, sub.id),
            language=sub.programmingLanguage,
            metric=float(sub.timeConsumedMillis),
            runtime=f"{sub.timeConsumedMillis} ms",
            memory=f"{sub.memoryConsumedBytes / 1024:.1f} KB",
            difficulty=str(problem.rating) if problem.rating else UNKNOWN_DIFFICULTY,
            tags=list(problem.tags),
            author=self.author_for(identity),
            verdict=sub.verdict,
        )

    async def enrich(self, candidate: CandidateSubmission, identity: JudgeIdentity) -> CandidateSubmission:
        contest_id, index = URLParser.parse_codeforces_problem(candidate.problem_url)

        try:
            statement_data = await self.page_parser.fetch_statement(contest_id, index)
            statement = statement_data.statement if statement_data.is_usable else STATEMENT_UNAVAILABLE
        except Exception as e:
            logger.warning(f"Failed to fetch statement for {contest_id}/{index}: {e}")
            statement = STATEMENT_UNAVAILABLE

        code = None
        if self.browser is not None:
            try:
                code = await self.browser.fetch_source(candidate.submission_url)
            except Exception as e:
                logger.warning(f"Browser failed on {candidate.submission_url}: {e}")

        if not code:
            logger.warning(f"Source unavailable for {candidate.submission_url}")
            code = SOURCE_UNAVAILABLE

        return replace(candidate, statement=statement, code=code)
