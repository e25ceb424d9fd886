"""AtCoder Problems (kenkoooo) API payloads."""

from pydantic import BaseModel


class AtCoderSubmission(BaseModel):
    id: int
    epoch_second: int
    problem_id: str
    contest_id: str
    user_id: str | None = None
    language: str
    result: str
    execution_time: int | None = None
    memory: int | None = None
    difficulty: float | None = None
