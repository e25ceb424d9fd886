"""URL construction and parsing for the supported judges."""

import re
from urllib.parse import urlparse

from loguru import logger

from domain.exceptions import URLParsingError


class URLParser:
    """Builds and parses problem and submission URLs for every judge."""

    CODEFORCES_BASE = "https://codeforces.com"
    LEETCODE_BASE = "https://leetcode.com"
    ATCODER_BASE = "https://atcoder.jp"

    # Matches problemset/problem/1234/A and contest/1234/problem/A
    CODEFORCES_PATTERN = (
        r"codeforces\.(?:com|ru)/(?:problemset/problem/(\d+)/([A-Z]\d*)"
        r"|contest/(\d+)/problem/([A-Z]\d*))"
    )

    @classmethod
    def parse_codeforces_problem(cls, url: str) -> tuple[str, str]:
        """
        Parse Codeforces problem URL into ``(contest_id, index)``.
        """
        logger.debug(f"Parsing URL: {url}")

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise URLParsingError(f"Invalid URL format: {url}")

        match = re.search(cls.CODEFORCES_PATTERN, url)
        if not match:
            raise URLParsingError(
                f"Unrecognized Codeforces URL format: {url}. "
                "Expected format: https://codeforces.com/problemset/problem/<contest_id>/<index>"
            )

        contest_id = match.group(1) or match.group(3)
        index = match.group(2) or match.group(4)
        return contest_id, index

    @classmethod
    def codeforces_problem_url(cls, contest_id: int | str, index: str) -> str:
        return f"{cls.CODEFORCES_BASE}/problemset/problem/{contest_id}/{index}"

    @classmethod
    def codeforces_contest_problem_url(cls, contest_id: int | str, index: str) -> str:
        """Contest-scoped URL, used as a fallback when the problemset page is empty."""
        return f"{cls.CODEFORCES_BASE}/contest/{contest_id}/problem/{index}"

    @classmethod
    def codeforces_submission_url(cls, contest_id: int | str, submission_id: int | str) -> str:
        return f"{cls.CODEFORCES_BASE}/contest/{contest_id}/submission/{submission_id}"

    @classmethod
    def codeforces_status_url(cls, handle: str, count: int = 100) -> str:
        return f"{cls.CODEFORCES_BASE}/api/user.status?handle={handle}&from=1&count={count}"

    @classmethod
    def leetcode_problem_url(cls, title_slug: str) -> str:
        return f"{cls.LEETCODE_BASE}/problems/{title_slug}/"

    @classmethod
    def leetcode_submission_url(cls, submission_id: int | str) -> str:
        return f"{cls.LEETCODE_BASE}/submissions/detail/{submission_id}/"

    @classmethod
    def atcoder_task_url(cls, contest_id: str, problem_id: str) -> str:
        return f"{cls.ATCODER_BASE}/contests/{contest_id}/tasks/{problem_id}"

    @classmethod
    def atcoder_submission_url(cls, contest_id: str, submission_id: int | str) -> str:
        return f"{cls.ATCODER_BASE}/contests/{contest_id}/submissions/{submission_id}"

    @classmethod
    def absolutize(cls, src: str, base: str) -> str:
        """Turn a site-relative link into an absolute one."""
        if re.match(r"^https?://", src, flags=re.IGNORECASE):
            return src
        if src.startswith("//"):
            return f"https:{src}"
        return f"{base}{src if src.startswith('/') else '/' + src}"
