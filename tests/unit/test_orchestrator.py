"""Unit tests for the run orchestrator and entry point."""

from unittest.mock import AsyncMock, MagicMock

import pytest

import application.main as main_module
from application.config import Settings
from application.orchestrator import SubmissionArchiveOrchestrator
from domain.models import CandidateSubmission, JudgeIdentity, Platform
from infrastructure.errors import IndexWriteConflictError


def _candidate(platform: Platform, key: str) -> CandidateSubmission:
    return CandidateSubmission(
        platform=platform,
        problem_key=key,
        submission_id="1",
        title=key,
        timestamp=1709236800,
        problem_url="https://example.com/p",
        submission_url="https://example.com/s",
        metric=1.0,
        tags=["dp"],
    )


def _adapter(platform: Platform, candidates):
    adapter = MagicMock()
    adapter.platform = platform
    adapter.fetch_accepted = AsyncMock(return_value=candidates)
    return adapter


@pytest.fixture
def publishing():
    publishing = AsyncMock()
    publishing.publish.side_effect = lambda records: records
    return publishing


@pytest.mark.asyncio
async def test_run_publishes_then_updates_index(publishing):
    leetcode = _adapter(Platform.LEETCODE, [_candidate(Platform.LEETCODE, "1-two-sum")])
    atcoder = _adapter(Platform.ATCODER, [_candidate(Platform.ATCODER, "abc300-abc300_a")])
    archive = AsyncMock()
    browser = MagicMock()

    orchestrator = SubmissionArchiveOrchestrator(
        adapters=[(leetcode, JudgeIdentity("alice")), (atcoder, JudgeIdentity("alice"))],
        publishing=publishing,
        archive=archive,
        browser=browser,
    )

    records = await orchestrator.run()

    assert [r.destination_path for r in records] == ["leetcode/1-two-sum.md", "atcoder/abc300-abc300_a.md"]
    archive.update.assert_awaited_once_with(records)
    browser.close.assert_called_once()


@pytest.mark.asyncio
async def test_unconfigured_platform_is_skipped(publishing):
    codeforces = _adapter(Platform.CODEFORCES, [])
    leetcode = _adapter(Platform.LEETCODE, [_candidate(Platform.LEETCODE, "1-two-sum")])

    orchestrator = SubmissionArchiveOrchestrator(
        adapters=[(codeforces, None), (leetcode, JudgeIdentity("alice"))],
        publishing=publishing,
    )

    records = await orchestrator.run()

    codeforces.fetch_accepted.assert_not_awaited()
    assert len(records) == 1


@pytest.mark.asyncio
async def test_nothing_collected_leaves_index_alone(publishing):
    archive = AsyncMock()
    orchestrator = SubmissionArchiveOrchestrator(
        adapters=[(_adapter(Platform.LEETCODE, []), JudgeIdentity("alice"))],
        publishing=publishing,
        archive=archive,
    )

    assert await orchestrator.run() == []
    publishing.publish.assert_not_awaited()
    archive.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_index_failure_propagates_and_browser_is_closed(publishing):
    archive = AsyncMock()
    archive.update.side_effect = IndexWriteConflictError("README.md", 3)
    browser = MagicMock()

    orchestrator = SubmissionArchiveOrchestrator(
        adapters=[(_adapter(Platform.LEETCODE, [_candidate(Platform.LEETCODE, "1-two-sum")]), JudgeIdentity("a"))],
        publishing=publishing,
        archive=archive,
        browser=browser,
    )

    with pytest.raises(IndexWriteConflictError):
        await orchestrator.run()
    browser.close.assert_called_once()


@pytest.mark.asyncio
async def test_entry_point_exit_codes(monkeypatch):
    orchestrator = MagicMock()
    orchestrator.run = AsyncMock(return_value=[])
    monkeypatch.setattr(main_module, "build_orchestrator", lambda settings: orchestrator)

    assert await main_module.run(Settings()) == 0

    orchestrator.run.side_effect = IndexWriteConflictError("README.md", 3)
    assert await main_module.run(Settings()) == 1


def test_build_orchestrator_skips_unconfigured_judges():
    settings = Settings(leetcode_username="alice", atcoder_username="bob")

    orchestrator = main_module.build_orchestrator(settings)

    identities = {adapter.platform: identity for adapter, identity in orchestrator.adapters}
    assert identities[Platform.LEETCODE].handle == "alice"
    assert identities[Platform.CODEFORCES] is None
    assert identities[Platform.ATCODER].handle == "bob"
    assert orchestrator.archive is None
    assert orchestrator.browser is None
