"""Parsers for extracting data from judge web pages."""

from .atcoder_page_parser import AtCoderPageParser
from .codeforces_page_parser import STATEMENT_UNAVAILABLE, CodeforcesPageParser, format_samples
from .interfaces import (
    AtCoderPageParserProtocol,
    CodeforcesPageParserProtocol,
    HTTPClientProtocol,
    ParsingError,
    SourceBrowserProtocol,
)
from .markdown import clean_converted_markdown, html_to_markdown, strip_scaffold

__all__ = [
    "AtCoderPageParser",
    "AtCoderPageParserProtocol",
    "CodeforcesPageParser",
    "CodeforcesPageParserProtocol",
    "HTTPClientProtocol",
    "ParsingError",
    "STATEMENT_UNAVAILABLE",
    "SourceBrowserProtocol",
    "clean_converted_markdown",
    "format_samples",
    "html_to_markdown",
    "strip_scaffold",
]
