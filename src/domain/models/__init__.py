"""Domain models package."""

from .archive import TagTable
from .identifiers import JudgeIdentity, Platform
from .parsing import RemoteDocument, StatementData
from .submission import UNKNOWN_DIFFICULTY, CandidateSubmission, SubmissionRecord

__all__ = [
    "CandidateSubmission",
    "JudgeIdentity",
    "Platform",
    "RemoteDocument",
    "StatementData",
    "SubmissionRecord",
    "TagTable",
    "UNKNOWN_DIFFICULTY",
]
