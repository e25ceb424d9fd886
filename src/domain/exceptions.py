"""Domain-level exceptions."""


class SubmissionArchiveError(Exception):
    """Base error for the submission archive pipeline."""

    pass


class URLParsingError(SubmissionArchiveError, ValueError):
    """Invalid URL format or unable to parse URL."""

    pass
