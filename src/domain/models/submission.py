"""Submission models flowing through the archive pipeline."""

from dataclasses import dataclass, field
from typing import Any

from .identifiers import Platform

UNKNOWN_DIFFICULTY = "Unknown"


@dataclass
class CandidateSubmission:
    """Raw accepted submission as produced by a platform adapter.

    ``metric`` stays ``None`` until the adapter has fetched enough detail to
    compare the submission with its siblings; such candidates never survive
    selection.
    """

    platform: Platform
    problem_key: str
    submission_id: str
    title: str
    timestamp: int
    problem_url: str
    submission_url: str
    language: str = "Unknown"
    metric: float | None = None
    runtime: str = "N/A"
    memory: str = "N/A"
    code: str = ""
    statement: str = ""
    difficulty: str = UNKNOWN_DIFFICULTY
    tags: list[str] = field(default_factory=list)
    author: str = ""
    verdict: str | None = None

    @property
    def group_key(self) -> tuple[Platform, str]:
        """Identity of the problem this submission solves."""
        return self.platform, self.problem_key


@dataclass(frozen=True)
class SubmissionRecord:
    """Rendered submission ready to be handed to publishers and the index."""

    platform: Platform
    problem_key: str
    title: str
    difficulty: str
    metric: float | None
    tags: tuple[str, ...]
    problem_url: str
    submission_url: str
    destination_path: str
    body: str
    summary: str

    @property
    def link(self) -> str:
        """Markdown link used inside the archive index."""
        title = self.title.replace("|", "\\|")
        return f"[{title}]({self.destination_path})"

    def to_handoff(self) -> dict[str, Any]:
        """Mapping consumed verbatim by downstream publishers."""
        return {
            "destinationPath": self.destination_path,
            "body": self.body,
            "summary": self.summary,
            "tags": list(self.tags),
            "problemUrl": self.problem_url,
            "submissionUrl": self.submission_url,
            "difficulty": self.difficulty,
            "platform": self.platform.display_name,
            "title": self.title,
        }
