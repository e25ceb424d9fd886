"""Unit tests for per-record publishing."""

from unittest.mock import AsyncMock

import pytest

from domain.models import Platform, SubmissionRecord
from infrastructure.errors import ContentStoreError, PublisherError
from services.publishing import PublishingService


def _record(key: str) -> SubmissionRecord:
    return SubmissionRecord(
        platform=Platform.LEETCODE,
        problem_key=key,
        title=key,
        difficulty="Easy",
        metric=1.0,
        tags=("Array",),
        problem_url="https://leetcode.com/problems/x/",
        submission_url="https://leetcode.com/submissions/detail/1/",
        destination_path=f"leetcode/{key}.md",
        body=f"# {key}\n",
        summary="Time: 1 ms, Space: 2 MB",
    )


@pytest.mark.asyncio
async def test_publishes_documents_and_pages():
    documents, pages = AsyncMock(), AsyncMock()
    records = [_record("1-two-sum"), _record("2-add-two-numbers")]

    published = await PublishingService(documents=documents, pages=pages).publish(records)

    assert published == records
    documents.upsert_file.assert_any_await("leetcode/1-two-sum.md", "# 1-two-sum\n", "Time: 1 ms, Space: 2 MB")
    assert pages.create_page.await_count == 2
    assert pages.create_page.await_args.args[0]["destinationPath"] == "leetcode/2-add-two-numbers.md"


@pytest.mark.asyncio
async def test_failed_document_is_skipped_and_run_continues():
    documents, pages = AsyncMock(), AsyncMock()
    documents.upsert_file.side_effect = [ContentStoreError("HTTP 500"), "sha"]
    records = [_record("1-two-sum"), _record("2-add-two-numbers")]

    published = await PublishingService(documents=documents, pages=pages).publish(records)

    assert published == [records[1]]
    assert pages.create_page.await_count == 1


@pytest.mark.asyncio
async def test_page_failure_does_not_drop_record():
    documents, pages = AsyncMock(), AsyncMock()
    pages.create_page.side_effect = PublisherError("rejected")

    published = await PublishingService(documents=documents, pages=pages).publish([_record("1-two-sum")])

    assert len(published) == 1


@pytest.mark.asyncio
async def test_without_publishers_everything_passes_through():
    records = [_record("1-two-sum")]
    assert await PublishingService().publish(records) == records
