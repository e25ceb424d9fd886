"""Value objects for platform and user identification."""

from dataclasses import dataclass, field
from enum import Enum


class Platform(str, Enum):
    """Supported online judges. The value doubles as the destination folder."""

    LEETCODE = "leetcode"
    CODEFORCES = "codeforces"
    ATCODER = "atcoder"

    @property
    def display_name(self) -> str:
        """Human readable name, also used as the archive index section heading."""
        return _DISPLAY_NAMES[self]

    def __str__(self) -> str:
        return self.display_name


_DISPLAY_NAMES = {
    Platform.LEETCODE: "LeetCode",
    Platform.CODEFORCES: "Codeforces",
    Platform.ATCODER: "AtCoder",
}


@dataclass(frozen=True)
class JudgeIdentity:
    """Credentials identifying the user on one judge."""

    handle: str
    session_token: str | None = None
    cookies: tuple[dict, ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        """String representation (never exposes credentials)."""
        return self.handle
