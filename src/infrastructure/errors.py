"""Infrastructure-level exceptions."""

from domain.exceptions import SubmissionArchiveError


class HTTPClientError(SubmissionArchiveError):
    """Network failure or unusable response from a remote service."""

    pass


class HTTPStatusError(HTTPClientError):
    """Remote service answered with an error status code."""

    def __init__(self, status_code: int, url: str, body: str = ""):
        self.status_code = status_code
        self.url = url
        self.body = body
        super().__init__(f"HTTP {status_code} for {url}")

    @property
    def is_transient(self) -> bool:
        return self.status_code >= 500 or self.status_code == 429


class BrowserUnavailableError(SubmissionArchiveError):
    """Browser automation session could not be started or used."""

    pass


class PublisherError(SubmissionArchiveError):
    """A downstream publisher rejected a record."""

    pass


class ContentStoreError(SubmissionArchiveError):
    """Versioned content store could not read or write a file."""

    pass


class VersionConflictError(ContentStoreError):
    """Write rejected because the supplied version token is stale."""

    def __init__(self, path: str, sha: str | None):
        self.path = path
        self.sha = sha
        super().__init__(f"Stale version token {sha!r} when writing {path}")


class IndexPublishError(SubmissionArchiveError):
    """Archive index could not be read or written."""

    pass


class IndexWriteConflictError(IndexPublishError):
    """Archive index kept changing remotely until the write attempts ran out."""

    def __init__(self, path: str, attempts: int):
        self.path = path
        self.attempts = attempts
        super().__init__(f"Archive index {path} still conflicting after {attempts} attempt(s)")
