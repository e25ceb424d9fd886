"""LeetCode GraphQL payloads."""

from pydantic import BaseModel, Field


class RecentAcceptedSubmission(BaseModel):
    id: str
    title: str
    titleSlug: str
    timestamp: int
    lang: str | None = None


class SubmissionLanguage(BaseModel):
    name: str | None = None
    verboseName: str | None = None


class SubmissionDetails(BaseModel):
    runtime: float | None = None
    runtimeDisplay: str | None = None
    memory: float | None = None
    memoryDisplay: str | None = None
    code: str = ""
    lang: SubmissionLanguage | None = None

    @property
    def language_name(self) -> str:
        if self.lang is None:
            return "Unknown"
        return self.lang.verboseName or self.lang.name or "Unknown"


class TopicTag(BaseModel):
    name: str
    slug: str | None = None


class LeetCodeQuestion(BaseModel):
    content: str | None = None
    difficulty: str | None = None
    questionFrontendId: str | None = None
    topicTags: list[TopicTag] = Field(default_factory=list)

    @property
    def tags(self) -> list[str]:
        return [tag.name for tag in self.topicTags]
