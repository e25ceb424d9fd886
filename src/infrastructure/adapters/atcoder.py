"""AtCoder adapter using the AtCoder Problems API and scraped task pages."""

import math
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from loguru import logger

from domain.models import UNKNOWN_DIFFICULTY, CandidateSubmission, JudgeIdentity, Platform
from domain.parsers.url_parser import URLParser
from infrastructure.parsers import (
    AtCoderPageParser,
    AtCoderPageParserProtocol,
    clean_converted_markdown,
    strip_scaffold,
)
from infrastructure.parsers.atcoder_page_parser import STATEMENT_MISSING
from infrastructure.schemas import AtCoderSubmission

from .base import PlatformAdapter

if TYPE_CHECKING:
    from infrastructure.http_client import AsyncHTTPClient

SUBMISSIONS_API = "https://kenkoooo.com/atcoder/atcoder-api/v3/user/submissions"
SOURCE_PRIVATE = "***ERROR: Code is private. Login required.***"
ACCEPTED = "AC"
LOOKBACK_SECONDS = 24 * 60 * 60


class AtCoderAdapter(PlatformAdapter):
    """Accepted submissions from the trailing day, filtered server-side."""

    platform = Platform.ATCODER

    def __init__(
        self,
        http_client: "AsyncHTTPClient",
        *,
        page_parser: Optional[AtCoderPageParserProtocol] = None,
        author: str | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        super().__init__(http_client, author=author, clock=clock)
        self.page_parser = page_parser or AtCoderPageParser(http_client)

    async def list_candidates(self, identity: JudgeIdentity) -> list[CandidateSubmission]:
        from_second = int(self.clock().timestamp()) - LOOKBACK_SECONDS
        payload = await self.http_client.get_json(
            SUBMISSIONS_API,
            params={"user": identity.handle, "from_second": from_second},
        )

        submissions = [AtCoderSubmission.model_validate(item) for item in payload or []]
        accepted = [sub for sub in submissions if sub.result == ACCEPTED]
        logger.debug(f"Found {len(accepted)} accepted AtCoder submission(s)")

        return [self._to_candidate(sub, identity) for sub in accepted]

    def _to_candidate(self, sub: AtCoderSubmission, identity: JudgeIdentity) -> CandidateSubmission:
        runtime = f"{sub.execution_time}ms" if sub.execution_time is not None else "N/A"
        memory = f"{sub.memory / 1024 / 1024:.2f}MB" if sub.memory else "N/A"
        difficulty = f"{sub.difficulty:.0f}" if sub.difficulty is not None else UNKNOWN_DIFFICULTY

        return CandidateSubmission(
            platform=self.platform,
            problem_key=f"{sub.contest_id}-{sub.problem_id}",
            submission_id=str(sub.id),
            title=sub.problem_id,
            timestamp=sub.epoch_second,
            problem_url=URLParser.atcoder_task_url(sub.contest_id, sub.problem_id),
            submission_url=URLParser.atcoder_submission_url(sub.contest_id, sub.id),
            language=sub.language.split("(")[0].strip(),
            metric=float(sub.execution_time) if sub.execution_time is not None else math.inf,
            runtime=runtime,
            memory=memory,
            difficulty=difficulty,
            author=self.author_for(identity),
            verdict=sub.result,
        )

    async def enrich(self, candidate: CandidateSubmission, identity: JudgeIdentity) -> CandidateSubmission:
        contest_id, problem_id = self._split_key(candidate)
        title = candidate.title

        try:
            task = await self.page_parser.fetch_task(contest_id, problem_id)
            title = task.title or title
            statement = task.statement
        except Exception as e:
            logger.warning(f"Failed to fetch task {contest_id}/{problem_id}: {e}")
            statement = STATEMENT_MISSING

        try:
            code = await self.page_parser.fetch_source(contest_id, candidate.submission_id)
        except Exception as e:
            logger.warning(f"Failed to fetch source of submission {candidate.submission_id}: {e}")
            code = None

        if code:
            code = strip_scaffold(code)
        else:
            logger.warning(f"Source of submission {candidate.submission_id} is not public")
            code = SOURCE_PRIVATE

        return replace(
            candidate,
            title=title,
            statement=clean_converted_markdown(statement),
            code=code,
        )

    @staticmethod
    def _split_key(candidate: CandidateSubmission) -> tuple[str, str]:
        """Contest and task id, read back from the task URL."""
        parts = candidate.problem_url.rstrip("/").split("/")
        return parts[-3], parts[-1]
