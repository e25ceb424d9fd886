"""LeetCode adapter backed by the public GraphQL endpoint."""

import asyncio
import re
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any

from loguru import logger

from domain.models import UNKNOWN_DIFFICULTY, CandidateSubmission, JudgeIdentity, Platform
from domain.parsers.url_parser import URLParser
from domain.time_window import is_in_target_window
from infrastructure.errors import HTTPClientError
from infrastructure.parsers.markdown import html_to_markdown
from infrastructure.schemas import LeetCodeQuestion, RecentAcceptedSubmission, SubmissionDetails

from .base import PlatformAdapter

if TYPE_CHECKING:
    from infrastructure.http_client import AsyncHTTPClient

GRAPHQL_URL = "https://leetcode.com/graphql"
STATEMENT_UNAVAILABLE = "Problem statement unavailable"

RECENT_AC_QUERY = """
query recentACSubmissions($username: String!) {
  recentAcSubmissionList(username: $username, limit: 50) {
    id
    title
    titleSlug
    timestamp
    lang
  }
}"""

DETAIL_QUERY = """
query submissionDetails($id: Int!) {
  submissionDetails(submissionId: $id) {
    runtime
    runtimeDisplay
    memory
    memoryDisplay
    code
    lang { name verboseName }
  }
}"""

QUESTION_QUERY = """
query questionContent($titleSlug: String!) {
  question(titleSlug: $titleSlug) {
    content
    difficulty
    questionFrontendId
    topicTags { name slug }
  }
}"""


def _runtime_ms(details: SubmissionDetails) -> float | None:
    if details.runtime is not None:
        return float(details.runtime)
    match = re.search(r"\d+(?:\.\d+)?", details.runtimeDisplay or "")
    return float(match.group()) if match else None


class LeetCodeAdapter(PlatformAdapter):
    """Recent accepted submissions, their details and question metadata."""

    platform = Platform.LEETCODE

    def __init__(
        self,
        http_client: "AsyncHTTPClient",
        *,
        author: str | None = None,
        clock: Callable[[], datetime] = datetime.now,
        question_cache: dict[str, LeetCodeQuestion] | None = None,
    ):
        """
        Initialize adapter.

        Args:
            http_client: Async HTTP client instance
            author: Name shown in rendered documents (defaults to the handle)
            clock: Source of "now" for the target window
            question_cache: Already known question metadata keyed by title slug
        """
        super().__init__(http_client, author=author, clock=clock)
        self.question_cache = question_cache if question_cache is not None else {}

    async def _graphql(self, query: str, variables: dict[str, Any], identity: JudgeIdentity) -> dict[str, Any]:
        headers = {"Referer": "https://leetcode.com/"}
        if identity.session_token:
            headers["Cookie"] = f"LEETCODE_SESSION={identity.session_token}"

        response = await self.http_client.post_json(
            GRAPHQL_URL, {"query": query, "variables": variables}, headers=headers
        )
        response = response or {}
        if response.get("errors"):
            raise HTTPClientError(f"GraphQL errors: {response['errors']}")
        return response.get("data") or {}

    async def list_candidates(self, identity: JudgeIdentity) -> list[CandidateSubmission]:
        data = await self._graphql(RECENT_AC_QUERY, {"username": identity.handle}, identity)
        recent = [
            RecentAcceptedSubmission.model_validate(item)
            for item in data.get("recentAcSubmissionList") or []
        ]

        now = self.clock()
        recent = [sub for sub in recent if is_in_target_window(sub.timestamp, now)]
        if not recent:
            return []

        groups: dict[str, list[RecentAcceptedSubmission]] = {}
        for sub in recent:
            groups.setdefault(sub.titleSlug, []).append(sub)

        candidates = []
        for title_slug, subs in groups.items():
            logger.debug(f"Fetching {len(subs)} submission detail(s) for {title_slug}")
            detailed = await asyncio.gather(*(self._fetch_detail(sub, identity) for sub in subs))
            candidates.extend(detailed)

        return candidates

    async def _fetch_detail(self, sub: RecentAcceptedSubmission, identity: JudgeIdentity) -> CandidateSubmission:
        """Candidate for one submission; its metric stays ``None`` if details fail."""
        candidate = CandidateSubmission(
            platform=self.platform,
            problem_key=sub.titleSlug,
            submission_id=sub.id,
            title=sub.title,
            timestamp=sub.timestamp,
            problem_url=URLParser.leetcode_problem_url(sub.titleSlug),
            submission_url=URLParser.leetcode_submission_url(sub.id),
            language=sub.lang or "Unknown",
            author=self.author_for(identity),
        )

        try:
            data = await self._graphql(DETAIL_QUERY, {"id": int(sub.id)}, identity)
            details = SubmissionDetails.model_validate(data.get("submissionDetails") or {})
        except Exception as e:
            logger.error(f"Failed to fetch details for {sub.titleSlug} ({sub.id}): {e}")
            return candidate

        candidate.metric = _runtime_ms(details)
        candidate.runtime = details.runtimeDisplay or (f"{details.runtime:g} ms" if details.runtime is not None else "N/A")
        candidate.memory = details.memoryDisplay or (f"{details.memory:g}" if details.memory is not None else "N/A")
        candidate.code = details.code
        candidate.language = details.language_name
        return candidate

    async def _question(self, title_slug: str, identity: JudgeIdentity) -> LeetCodeQuestion | None:
        if title_slug in self.question_cache:
            return self.question_cache[title_slug]

        try:
            data = await self._graphql(QUESTION_QUERY, {"titleSlug": title_slug}, identity)
            question = LeetCodeQuestion.model_validate(data["question"])
        except Exception as e:
            logger.warning(f"Could not fetch question metadata for {title_slug}, tags unknown: {e}")
            return None

        self.question_cache[title_slug] = question
        return question

    async def enrich(self, candidate: CandidateSubmission, identity: JudgeIdentity) -> CandidateSubmission:
        title_slug = candidate.problem_key
        question = await self._question(title_slug, identity)

        if question is None:
            return replace(
                candidate,
                problem_key=f"NA-{title_slug}",
                statement=STATEMENT_UNAVAILABLE,
                difficulty=UNKNOWN_DIFFICULTY,
                tags=[],
            )

        statement = html_to_markdown(question.content) if question.content else ""
        return replace(
            candidate,
            problem_key=f"{question.questionFrontendId or 'NA'}-{title_slug}",
            statement=statement or STATEMENT_UNAVAILABLE,
            difficulty=question.difficulty or UNKNOWN_DIFFICULTY,
            tags=question.tags,
        )
