"""Protocol interfaces for parsers and page sources."""

from typing import Any, Protocol

from domain.models import StatementData


class ParsingError(ValueError):
    """Error parsing HTML content."""

    pass


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def get_text(self, url: str, **kwargs: Any) -> str:
        """Get text content from URL."""
        ...

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        """Get decoded JSON from URL."""
        ...

    async def post_json(self, url: str, payload: Any, **kwargs: Any) -> Any:
        """Post JSON and decode the JSON answer."""
        ...


class CodeforcesPageParserProtocol(Protocol):
    """Protocol for Codeforces problem pages."""

    async def fetch_statement(self, contest_id: int | str, index: str) -> StatementData:
        """Fetch the statement, falling back to the contest-scoped page."""
        ...


class AtCoderPageParserProtocol(Protocol):
    """Protocol for AtCoder task and submission pages."""

    async def fetch_task(self, contest_id: str, problem_id: str) -> StatementData:
        """Fetch title and statement of a task."""
        ...

    async def fetch_source(self, contest_id: str, submission_id: int | str) -> str | None:
        """Fetch the submitted source, ``None`` when hidden."""
        ...


class SourceBrowserProtocol(Protocol):
    """Protocol for the authenticated browser session."""

    async def fetch_source(self, submission_url: str) -> str | None:
        """Load a submission page and return its source, ``None`` if unavailable."""
        ...

    def close(self) -> None:
        """Release the browser."""
        ...
