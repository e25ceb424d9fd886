"""Unit tests for the GitHub contents client."""

import base64
from unittest.mock import AsyncMock

import pytest

from infrastructure.errors import ContentStoreError, HTTPClientError, HTTPStatusError, VersionConflictError
from infrastructure.github_client import GitHubContentsClient

CONTENTS_URL = "https://api.github.com/repos/alice/solutions/contents/README.md"


@pytest.fixture
def http_client():
    return AsyncMock()


@pytest.fixture
def client(http_client):
    return GitHubContentsClient(http_client, token="t0ken", repo="alice/solutions", branch="main")


@pytest.mark.asyncio
async def test_get_file_decodes_content(client, http_client):
    http_client.get_json.return_value = {
        "content": base64.b64encode("# Coding Submissions\n".encode()).decode(),
        "sha": "abc123",
    }

    document = await client.get_file("README.md")

    assert document.content == "# Coding Submissions\n"
    assert document.sha == "abc123"
    assert document.exists
    http_client.get_json.assert_awaited_once()
    assert http_client.get_json.await_args.args[0] == CONTENTS_URL
    assert http_client.get_json.await_args.kwargs["params"] == {"ref": "main"}
    assert http_client.get_json.await_args.kwargs["headers"]["Authorization"] == "Bearer t0ken"


@pytest.mark.asyncio
async def test_missing_file_is_empty_document(client, http_client):
    http_client.get_json.side_effect = HTTPStatusError(404, CONTENTS_URL)

    document = await client.get_file("README.md")

    assert document.content == ""
    assert document.sha is None
    assert not document.exists


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [HTTPStatusError(401, CONTENTS_URL), HTTPClientError("timeout")])
async def test_other_read_failures_raise(client, http_client, error):
    http_client.get_json.side_effect = error

    with pytest.raises(ContentStoreError):
        await client.get_file("README.md")


@pytest.mark.asyncio
async def test_put_file_sends_sha_and_returns_new_one(client, http_client):
    http_client.put_json.return_value = {"content": {"sha": "def456"}}

    sha = await client.put_file("README.md", "body", "Update archive index", sha="abc123")

    assert sha == "def456"
    payload = http_client.put_json.await_args.args[1]
    assert payload["sha"] == "abc123"
    assert payload["branch"] == "main"
    assert base64.b64decode(payload["content"]).decode() == "body"


@pytest.mark.asyncio
async def test_put_without_sha_creates_file(client, http_client):
    http_client.put_json.return_value = {"content": {"sha": "new"}}

    await client.put_file("leetcode/1-two-sum.md", "body", "Time: 1 ms, Space: 2 MB")

    assert "sha" not in http_client.put_json.await_args.args[1]


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [409, 422])
async def test_stale_sha_is_a_version_conflict(client, http_client, status):
    http_client.put_json.side_effect = HTTPStatusError(status, CONTENTS_URL)

    with pytest.raises(VersionConflictError):
        await client.put_file("README.md", "body", "msg", sha="stale")


@pytest.mark.asyncio
async def test_other_write_failures_raise_store_error(client, http_client):
    http_client.put_json.side_effect = HTTPStatusError(403, CONTENTS_URL)

    with pytest.raises(ContentStoreError) as exc_info:
        await client.put_file("README.md", "body", "msg")

    assert not isinstance(exc_info.value, VersionConflictError)


@pytest.mark.asyncio
async def test_upsert_uses_current_sha(client, http_client):
    http_client.get_json.return_value = {"content": base64.b64encode(b"old").decode(), "sha": "cur"}
    http_client.put_json.return_value = {"content": {"sha": "next"}}

    assert await client.upsert_file("README.md", "new", "msg") == "next"
    assert http_client.put_json.await_args.args[1]["sha"] == "cur"
