"""Rendering of selected submissions into markdown records."""

import re
from datetime import datetime

from domain.models import CandidateSubmission, SubmissionRecord

LANGUAGE_ALIASES = {
    "c#": "csharp",
    "gnu c": "c",
    "golang": "go",
    "node.js": "javascript",
    "js": "javascript",
    "pypy": "python",
    "cpython": "python",
    "py": "python",
    "ts": "typescript",
}


def code_fence_language(language: str) -> str:
    """
    Derive a fenced code block tag from a judge's language name.

    The name is cut at the first ``(`` or ``,``, lower-cased and stripped of
    trailing version numbers, e.g. ``java24`` -> ``java``,
    ``Python 3 (CPython 3.11)`` -> ``python``, ``GNU C++17`` -> ``cpp``.
    """
    name = re.split(r"[(,]", language or "", maxsplit=1)[0].strip().lower()
    name = re.sub(r"\b\d+\s*-?bit\b", "", name)
    name = re.sub(r"[\s\d.\-]+$", "", name).strip()

    if not name:
        return "text"
    if "c++" in name or "g++" in name:
        return "cpp"
    if "c#" in name:
        return "csharp"
    return LANGUAGE_ALIASES.get(name, name)


def format_timestamp(epoch_seconds: int) -> str:
    """Local time as ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.fromtimestamp(int(epoch_seconds)).strftime("%Y-%m-%d %H:%M:%S")


class RecordRenderer:
    """Turns a selected candidate into a canonical markdown record."""

    def render(self, candidate: CandidateSubmission) -> SubmissionRecord:
        return SubmissionRecord(
            platform=candidate.platform,
            problem_key=candidate.problem_key,
            title=candidate.title,
            difficulty=str(candidate.difficulty),
            metric=candidate.metric,
            tags=tuple(candidate.tags),
            problem_url=candidate.problem_url,
            submission_url=candidate.submission_url,
            destination_path=self.destination_path(candidate),
            body=self.render_body(candidate),
            summary=self.render_summary(candidate),
        )

    @staticmethod
    def destination_path(candidate: CandidateSubmission) -> str:
        key = candidate.problem_key.strip("/")
        return f"{candidate.platform.value}/{key}.md"

    @staticmethod
    def render_summary(candidate: CandidateSubmission) -> str:
        return f"Time: {candidate.runtime}, Space: {candidate.memory}"

    def render_body(self, candidate: CandidateSubmission) -> str:
        metadata = [
            ("Platform", candidate.platform.display_name),
            ("Author", candidate.author or "Unknown"),
            ("Submitted at", format_timestamp(candidate.timestamp)),
            ("Language", candidate.language),
            ("Runtime", candidate.runtime),
            ("Memory", candidate.memory),
            ("Problem URL", f"[{candidate.problem_url}]({candidate.problem_url})"),
            ("Submission URL", f"[{candidate.submission_url}]({candidate.submission_url})"),
        ]

        parts = [f"# {candidate.title} ({candidate.difficulty})"]
        parts.extend(f"**{label}:** {value}" for label, value in metadata)
        parts.append("---")
        parts.append(f"## Problem Statement\n{candidate.statement.strip()}")
        parts.append("---")
        parts.append(
            "## Submitted Code\n"
            f"```{code_fence_language(candidate.language)}\n"
            f"{candidate.code.rstrip()}\n"
            "```"
        )

        if candidate.tags:
            tag_lines = "\n".join(f"- {tag}" for tag in candidate.tags)
            parts.append("---")
            parts.append(f"## Problem Tags\n{tag_lines}")

        return "\n\n".join(parts) + "\n"
