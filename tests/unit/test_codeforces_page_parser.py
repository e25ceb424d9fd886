"""Unit tests for Codeforces statement scraping and its fallback URL."""

from unittest.mock import AsyncMock

import pytest

from infrastructure.errors import HTTPClientError
from infrastructure.parsers import CodeforcesPageParser, format_samples

STATEMENT_HTML = """
<html><body>
<div class="problem-statement">
  <div class="header">
    <div class="title">A. Cover in Water</div>
    <div class="time-limit"><div class="property-title">time limit per test</div>1 second</div>
  </div>
  <div><p>Filip has a row of $$$n$$$ cells.</p></div>
  <div class="input-specification">
    <div class="section-title">Input</div>
    <p>The first line contains one integer $$$t$$$.</p>
  </div>
  <div class="output-specification">
    <div class="section-title">Output</div>
    <p>Print the minimum number of actions.</p>
  </div>
  <div class="sample-tests">
    <div class="section-title">Example</div>
    <div class="sample-test">
      <div class="input"><div class="title">Input</div><pre>1
3
...</pre></div>
      <div class="output"><div class="title">Output</div><pre>2</pre></div>
    </div>
  </div>
  <div class="note">
    <div class="section-title">Note</div>
    <p>Two actions suffice.</p>
  </div>
</div>
</body></html>
"""

ERROR_HTML = "<html><body><div class='error'>No such problem</div></body></html>"

PRIMARY_URL = "https://codeforces.com/problemset/problem/1900/A"
FALLBACK_URL = "https://codeforces.com/contest/1900/problem/A"


@pytest.fixture
def http_client():
    return AsyncMock()


def test_parse_statement_sections():
    data = CodeforcesPageParser().parse_statement(STATEMENT_HTML, PRIMARY_URL)

    assert data.title == "A. Cover in Water"
    assert data.samples == [("1\n3\n...", "2")]
    assert data.statement.startswith("Filip has a row of $n$ cells.")
    assert "### Input\nThe first line contains one integer $t$." in data.statement
    assert "### Output\nPrint the minimum number of actions." in data.statement
    assert "### Sample Input\n```\n1\n3\n...\n```" in data.statement
    assert data.statement.endswith("### Note\nTwo actions suffice.")
    assert "time limit" not in data.statement


@pytest.mark.asyncio
async def test_primary_page_used_when_usable(http_client):
    http_client.get_text.return_value = STATEMENT_HTML

    data = await CodeforcesPageParser(http_client).fetch_statement(1900, "A")

    assert data.url == PRIMARY_URL
    assert data.is_usable
    http_client.get_text.assert_awaited_once_with(PRIMARY_URL)


@pytest.mark.asyncio
async def test_falls_back_to_contest_page_when_primary_has_no_statement(http_client):
    http_client.get_text.side_effect = [ERROR_HTML, STATEMENT_HTML]

    data = await CodeforcesPageParser(http_client).fetch_statement("1900", "A")

    assert data.url == FALLBACK_URL
    assert data.is_usable
    assert [call.args[0] for call in http_client.get_text.await_args_list] == [PRIMARY_URL, FALLBACK_URL]


@pytest.mark.asyncio
async def test_falls_back_when_primary_request_fails(http_client):
    http_client.get_text.side_effect = [HTTPClientError("timeout"), STATEMENT_HTML]

    data = await CodeforcesPageParser(http_client).fetch_statement("1900", "A")

    assert data.url == FALLBACK_URL
    assert data.title == "A. Cover in Water"


@pytest.mark.asyncio
async def test_both_pages_failing_yields_unusable_statement(http_client):
    http_client.get_text.side_effect = [ERROR_HTML, HTTPClientError("503")]

    data = await CodeforcesPageParser(http_client).fetch_statement("1900", "A")

    assert not data.is_usable
    assert data.url == PRIMARY_URL


def test_format_samples_numbers_multiple_tests():
    result = format_samples([("1", "2"), ("3", "4")])

    assert "### Sample Input 1\n```\n1\n```" in result
    assert "### Sample Output 2\n```\n4\n```" in result
