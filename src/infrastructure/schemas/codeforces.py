"""Codeforces API payloads."""

from pydantic import BaseModel, Field


class CodeforcesProblem(BaseModel):
    contestId: int | None = None
    index: str
    name: str
    rating: int | None = None
    tags: list[str] = Field(default_factory=list)


class CodeforcesSubmission(BaseModel):
    id: int
    contestId: int | None = None
    creationTimeSeconds: int
    problem: CodeforcesProblem
    programmingLanguage: str
    verdict: str | None = None
    timeConsumedMillis: int = 0
    memoryConsumedBytes: int = 0

    @property
    def contest_id(self) -> int | None:
        return self.problem.contestId or self.contestId


class CodeforcesStatusResponse(BaseModel):
    """Envelope of ``user.status``."""

    status: str
    comment: str | None = None
    result: list[CodeforcesSubmission] = Field(default_factory=list)
