"""Pydantic models validating upstream judge payloads."""

from .atcoder import AtCoderSubmission
from .codeforces import CodeforcesProblem, CodeforcesStatusResponse, CodeforcesSubmission
from .leetcode import LeetCodeQuestion, RecentAcceptedSubmission, SubmissionDetails

__all__ = [
    "AtCoderSubmission",
    "CodeforcesProblem",
    "CodeforcesStatusResponse",
    "CodeforcesSubmission",
    "LeetCodeQuestion",
    "RecentAcceptedSubmission",
    "SubmissionDetails",
]
