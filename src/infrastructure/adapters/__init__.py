"""Adapters turning judge APIs and pages into candidate submissions."""

from .atcoder import AtCoderAdapter
from .base import PlatformAdapter
from .codeforces import CodeforcesAdapter
from .leetcode import LeetCodeAdapter

__all__ = [
    "AtCoderAdapter",
    "CodeforcesAdapter",
    "LeetCodeAdapter",
    "PlatformAdapter",
]
