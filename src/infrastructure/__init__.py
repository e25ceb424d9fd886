from .errors import (
    BrowserUnavailableError,
    ContentStoreError,
    HTTPClientError,
    HTTPStatusError,
    IndexPublishError,
    IndexWriteConflictError,
    PublisherError,
    VersionConflictError,
)
from .http_client import AsyncHTTPClient

__all__ = [
    "AsyncHTTPClient",
    "BrowserUnavailableError",
    "ContentStoreError",
    "HTTPClientError",
    "HTTPStatusError",
    "IndexPublishError",
    "IndexWriteConflictError",
    "PublisherError",
    "VersionConflictError",
]
