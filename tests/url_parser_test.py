# tests/url_parser_test.py
import pytest
from domain.exceptions import URLParsingError
from domain.parsers.url_parser import URLParser

@pytest.mark.parametrize(
    "url, expected_contest, expected_problem",
    [
        ("https://codeforces.com/problemset/problem/500/A", "500", "A"),
        ("https://codeforces.ru/problemset/problem/1234/C", "1234", "C"),
        ("https://codeforces.com/problemset/problem/1350/B1", "1350", "B1"),
        ("https://codeforces.com/contest/1900/problem/A", "1900", "A"),
    ],
)
def test_parse_valid_urls(url, expected_contest, expected_problem) -> None:
    contest_id, index = URLParser.parse_codeforces_problem(url)

    assert contest_id == expected_contest
    assert index == expected_problem

@pytest.mark.parametrize(
    "url",
    [
        "codeforces.com/problemset/problem/500/A",
        "https://codeforces.com/blog/entry/123",
        "https://leetcode.com/problems/two-sum/",
    ],
)
def test_parse_invalid_urls(url) -> None:
    with pytest.raises(URLParsingError):
        URLParser.parse_codeforces_problem(url)

def test_build_codeforces_urls() -> None:
    assert URLParser.codeforces_problem_url(1234, "A") == "https://codeforces.com/problemset/problem/1234/A"
    assert URLParser.codeforces_contest_problem_url(1234, "A") == "https://codeforces.com/contest/1234/problem/A"
    assert URLParser.codeforces_submission_url(1234, 99) == "https://codeforces.com/contest/1234/submission/99"
    assert URLParser.codeforces_status_url("tourist") == (
        "https://codeforces.com/api/user.status?handle=tourist&from=1&count=100"
    )

def test_build_leetcode_urls() -> None:
    assert URLParser.leetcode_problem_url("two-sum") == "https://leetcode.com/problems/two-sum/"
    assert URLParser.leetcode_submission_url("42") == "https://leetcode.com/submissions/detail/42/"

def test_build_atcoder_urls() -> None:
    assert URLParser.atcoder_task_url("abc300", "abc300_a") == "https://atcoder.jp/contests/abc300/tasks/abc300_a"
    assert URLParser.atcoder_submission_url("abc300", 7) == "https://atcoder.jp/contests/abc300/submissions/7"

@pytest.mark.parametrize(
    "src, expected",
    [
        ("/img/a.png", "https://atcoder.jp/img/a.png"),
        ("img/a.png", "https://atcoder.jp/img/a.png"),
        ("//cdn.example.com/a.png", "https://cdn.example.com/a.png"),
        ("HTTPS://example.com/a.png", "HTTPS://example.com/a.png"),
    ],
)
def test_absolutize(src, expected) -> None:
    assert URLParser.absolutize(src, "https://atcoder.jp") == expected
