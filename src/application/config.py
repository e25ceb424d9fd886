"""Run settings read from the environment (and a local ``.env`` file)."""

import base64
import binascii
import json
import os
from dataclasses import dataclass, field
from typing import Any

from dotenv import load_dotenv
from loguru import logger

from domain.models import JudgeIdentity, Platform


def _flag(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _number(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={raw!r}, using {default}")
        return default


def decode_cookies(encoded: str | None) -> tuple[dict[str, Any], ...]:
    """
    Decode a base64 JSON array of exported browser cookies.

    Args:
        encoded: Base64 text, typically ``COOKIES_BASE64``

    Returns:
        Tuple of cookie mappings, empty when absent or malformed
    """
    if not encoded:
        return ()

    try:
        cookies = json.loads(base64.b64decode(encoded).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not decode browser cookies: {e}")
        return ()

    if not isinstance(cookies, list):
        logger.warning("Browser cookies must be a JSON array, ignoring")
        return ()

    return tuple(cookie for cookie in cookies if isinstance(cookie, dict))


@dataclass(frozen=True)
class Settings:
    """Everything one archiving run needs to know."""

    leetcode_username: str | None = None
    leetcode_session: str | None = None
    codeforces_handle: str | None = None
    codeforces_cookies: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    atcoder_username: str | None = None

    github_token: str | None = None
    github_repo: str | None = None
    github_branch: str = "main"

    notion_token: str | None = None
    notion_database_id: str | None = None

    author_name: str | None = None
    index_path: str = "README.md"
    index_title: str = "Coding Submissions"
    http_timeout: float = 30
    http_retries: int = 2
    index_write_attempts: int = 3
    browser_headless: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from environment variables."""
        if dotenv:
            load_dotenv()

        return cls(
            leetcode_username=os.getenv("LEETCODE_USERNAME") or None,
            leetcode_session=os.getenv("LEETCODE_SESSION") or None,
            codeforces_handle=os.getenv("CODEFORCES_HANDLE") or os.getenv("CODEFORCE_USERNAME") or None,
            codeforces_cookies=decode_cookies(os.getenv("COOKIES_BASE64")),
            atcoder_username=os.getenv("ATCODER_USERNAME") or None,
            github_token=os.getenv("PERSONAL_GITHUB_TOKEN") or None,
            github_repo=os.getenv("PERSONAL_GITHUB_REPO") or None,
            github_branch=os.getenv("PERSONAL_GITHUB_BRANCH") or "main",
            notion_token=os.getenv("NOTION_TOKEN") or None,
            notion_database_id=os.getenv("NOTION_DATABASE_ID") or None,
            author_name=os.getenv("AUTHOR_NAME") or None,
            index_path=os.getenv("INDEX_PATH") or "README.md",
            index_title=os.getenv("INDEX_TITLE") or "Coding Submissions",
            http_timeout=_number("HTTP_TIMEOUT", 30),
            http_retries=int(_number("HTTP_RETRIES", 2)),
            index_write_attempts=int(_number("INDEX_WRITE_ATTEMPTS", 3)),
            browser_headless=_flag(os.getenv("BROWSER_HEADLESS"), True),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def github_enabled(self) -> bool:
        return bool(self.github_token and self.github_repo)

    @property
    def notion_enabled(self) -> bool:
        return bool(self.notion_token and self.notion_database_id)

    def identity_for(self, platform: Platform) -> JudgeIdentity | None:
        """Credentials for one judge, ``None`` when the judge is not configured."""
        if platform is Platform.LEETCODE:
            if not self.leetcode_username:
                return None
            return JudgeIdentity(handle=self.leetcode_username, session_token=self.leetcode_session)

        if platform is Platform.CODEFORCES:
            if not self.codeforces_handle:
                return None
            return JudgeIdentity(handle=self.codeforces_handle, cookies=self.codeforces_cookies)

        if platform is Platform.ATCODER:
            if not self.atcoder_username:
                return None
            return JudgeIdentity(handle=self.atcoder_username)

        return None
