"""Unit tests for the Codeforces adapter."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from domain.models import JudgeIdentity, StatementData
from infrastructure.adapters import CodeforcesAdapter
from infrastructure.adapters.codeforces import SOURCE_UNAVAILABLE, safe_name
from infrastructure.parsers import STATEMENT_UNAVAILABLE

NOW = datetime(2024, 3, 1, 9, 0)


def _ts(*args) -> int:
    return int(datetime(*args).timestamp())


def _submission(sub_id, when, verdict="OK", time_ms=15, index="A", name="Cover in Water"):
    return {
        "id": sub_id,
        "contestId": 1900,
        "creationTimeSeconds": _ts(*when),
        "problem": {
            "contestId": 1900,
            "index": index,
            "name": name,
            "rating": 800,
            "tags": ["constructive algorithms", "greedy"],
        },
        "programmingLanguage": "GNU C++17",
        "verdict": verdict,
        "timeConsumedMillis": time_ms,
        "memoryConsumedBytes": 8192,
    }


STATUS = {
    "status": "OK",
    "result": [
        _submission(101, (2024, 2, 29, 20, 0), time_ms=31),
        _submission(102, (2024, 2, 29, 21, 0), time_ms=15),
        _submission(103, (2024, 2, 29, 22, 0), verdict="WRONG_ANSWER", time_ms=1),
        _submission(104, (2024, 2, 28, 22, 0), index="B", name="Old"),
    ],
}


@pytest.fixture
def identity():
    return JudgeIdentity(handle="tourist")


@pytest.fixture
def http_client():
    client = AsyncMock()
    client.get_json.return_value = STATUS
    return client


@pytest.fixture
def page_parser():
    parser = AsyncMock()
    parser.fetch_statement.return_value = StatementData(
        url="https://codeforces.com/problemset/problem/1900/A", statement="Fill the cells."
    )
    return parser


@pytest.fixture
def browser():
    browser = MagicMock()
    browser.fetch_source = AsyncMock(return_value="int main() {}")
    return browser


def _adapter(http_client, page_parser, browser=None):
    return CodeforcesAdapter(http_client, page_parser=page_parser, browser=browser, clock=lambda: NOW)


def test_safe_name():
    assert safe_name("Cover in Water") == "Cover-in-Water"
    assert safe_name("A+B Problem!") == "AB-Problem"
    assert safe_name("  Trailing  spaces ") == "Trailing-spaces"


@pytest.mark.asyncio
async def test_accepted_submission_is_collected(http_client, page_parser, browser, identity):
    results = await _adapter(http_client, page_parser, browser).fetch_accepted(identity)

    http_client.get_json.assert_awaited_once_with(
        "https://codeforces.com/api/user.status?handle=tourist&from=1&count=100"
    )
    assert len(results) == 1
    result = results[0]
    assert result.submission_id == "102"
    assert result.problem_key == "1900-A-Cover-in-Water"
    assert result.runtime == "15 ms"
    assert result.memory == "8.0 KB"
    assert result.difficulty == "800"
    assert result.tags == ["constructive algorithms", "greedy"]
    assert result.statement == "Fill the cells."
    assert result.code == "int main() {}"
    assert result.submission_url == "https://codeforces.com/contest/1900/submission/102"

    page_parser.fetch_statement.assert_awaited_once_with("1900", "A")
    browser.fetch_source.assert_awaited_once_with(result.submission_url)


@pytest.mark.asyncio
async def test_unusable_statement_gets_placeholder(http_client, page_parser, browser, identity):
    page_parser.fetch_statement.return_value = StatementData(url="x", statement="")

    results = await _adapter(http_client, page_parser, browser).fetch_accepted(identity)

    assert results[0].statement == STATEMENT_UNAVAILABLE


@pytest.mark.asyncio
async def test_missing_source_gets_placeholder(http_client, page_parser, browser, identity):
    browser.fetch_source.return_value = None

    results = await _adapter(http_client, page_parser, browser).fetch_accepted(identity)

    assert results[0].code == SOURCE_UNAVAILABLE


@pytest.mark.asyncio
async def test_without_browser_source_is_placeholder(http_client, page_parser, identity):
    results = await _adapter(http_client, page_parser).fetch_accepted(identity)

    assert results[0].code == SOURCE_UNAVAILABLE


@pytest.mark.asyncio
async def test_api_failure_status_yields_nothing(http_client, page_parser, identity):
    http_client.get_json.return_value = {"status": "FAILED", "comment": "handle: User not found"}

    assert await _adapter(http_client, page_parser).fetch_accepted(identity) == []
    page_parser.fetch_statement.assert_not_awaited()
