"""Parser for AtCoder task and submission pages."""

from typing import TYPE_CHECKING, Optional

from bs4 import BeautifulSoup
from loguru import logger

from domain.models import StatementData
from domain.parsers.url_parser import URLParser
from infrastructure.errors import HTTPClientError

from .interfaces import AtCoderPageParserProtocol, ParsingError
from .markdown import clean_converted_markdown, html_to_markdown

if TYPE_CHECKING:
    from infrastructure.http_client import AsyncHTTPClient

STATEMENT_MISSING = "Problem statement could not be scraped or selector changed."


class AtCoderPageParser(AtCoderPageParserProtocol):
    """Scrapes AtCoder task statements and public submission sources."""

    def __init__(self, http_client: Optional["AsyncHTTPClient"] = None):
        self.http_client = http_client

    async def fetch_task(self, contest_id: str, problem_id: str) -> StatementData:
        """
        Fetch a task page.

        Raises:
            ParsingError: If the page cannot be loaded
        """
        url = URLParser.atcoder_task_url(contest_id, problem_id)
        logger.debug(f"Parsing task page: {url}")

        if not self.http_client:
            raise ParsingError(f"HTTP client not initialized for {url}")

        try:
            html = await self.http_client.get_text(url)
        except HTTPClientError as e:
            raise ParsingError(f"Failed to load task page {url}: {e}") from e

        return self.parse_task(html, url)

    async def fetch_source(self, contest_id: str, submission_id: int | str) -> str | None:
        """Fetch submitted source; ``None`` when the page hides it or cannot load."""
        url = URLParser.atcoder_submission_url(contest_id, submission_id)
        logger.debug(f"Parsing submission page: {url}")

        if not self.http_client:
            raise ParsingError(f"HTTP client not initialized for {url}")

        try:
            html = await self.http_client.get_text(url)
        except HTTPClientError as e:
            logger.warning(f"Failed to load submission page {url}: {e}")
            return None

        return self.parse_source(html)

    def parse_task(self, html: str, url: str) -> StatementData:
        soup = BeautifulSoup(html, "lxml")

        title = None
        title_tag = soup.select_one("span.h2") or soup.find("h2")
        if title_tag:
            for link in title_tag.find_all("a"):
                link.decompose()
            title = title_tag.get_text(strip=True) or None

        task_statement = soup.find(id="task-statement")
        if not task_statement:
            logger.warning(f"Task statement block not found on {url}")
            return StatementData(url=url, statement=STATEMENT_MISSING, title=title)

        # Bilingual pages carry one block per language
        english = task_statement.select_one("span.lang-en")
        statement = html_to_markdown(english or task_statement, URLParser.ATCODER_BASE)
        statement = clean_converted_markdown(statement)

        return StatementData(url=url, statement=statement or STATEMENT_MISSING, title=title)

    def parse_source(self, html: str) -> str | None:
        soup = BeautifulSoup(html, "lxml")
        code = soup.find(id="submission-code")
        if not code:
            return None
        text = code.get_text().strip()
        return text or None
