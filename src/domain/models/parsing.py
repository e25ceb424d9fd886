"""Value objects for parsed page data."""

from dataclasses import dataclass, field


@dataclass
class StatementData:
    """Problem statement extracted from a judge's problem page."""

    url: str
    statement: str
    title: str | None = None
    samples: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_usable(self) -> bool:
        return bool(self.statement.strip())


@dataclass
class RemoteDocument:
    """Text document fetched from a versioned store."""

    path: str
    content: str
    sha: str | None = None

    @property
    def exists(self) -> bool:
        return self.sha is not None
