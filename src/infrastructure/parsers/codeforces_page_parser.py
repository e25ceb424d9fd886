"""Parser for extracting problem statements from Codeforces HTML pages."""

from typing import TYPE_CHECKING, Optional

from bs4 import BeautifulSoup, Tag
from loguru import logger

from domain.models import StatementData
from domain.parsers.url_parser import URLParser
from infrastructure.errors import HTTPClientError

from .interfaces import CodeforcesPageParserProtocol, ParsingError
from .markdown import html_to_markdown

if TYPE_CHECKING:
    from infrastructure.http_client import AsyncHTTPClient

STATEMENT_UNAVAILABLE = "(Could not fetch problem statement)"


def format_samples(samples: list[tuple[str, str]]) -> str:
    """Render sample tests as fenced blocks, numbered when there are several."""
    multi = len(samples) > 1
    blocks = []
    for number, (sample_input, sample_output) in enumerate(samples, 1):
        suffix = f" {number}" if multi else ""
        blocks.append(
            f"### Sample Input{suffix}\n```\n{sample_input.strip()}\n```\n\n"
            f"### Sample Output{suffix}\n```\n{sample_output.strip()}\n```"
        )
    return "\n\n".join(blocks)


class CodeforcesPageParser(CodeforcesPageParserProtocol):
    """Parser for extracting statements from Codeforces problem pages."""

    def __init__(self, http_client: Optional["AsyncHTTPClient"] = None):
        """
        Initialize parser.

        Args:
            http_client: Async HTTP client instance
        """
        self.http_client = http_client

    async def fetch_statement(self, contest_id: int | str, index: str) -> StatementData:
        """
        Fetch a problem statement.

        The problemset page is tried first; when it fails or holds no usable
        statement the contest-scoped page is tried. If both fail the statement
        is a placeholder rather than an error.
        """
        if not self.http_client:
            raise ParsingError(f"HTTP client not initialized for {contest_id}/{index}")

        urls = [
            URLParser.codeforces_problem_url(contest_id, index),
            URLParser.codeforces_contest_problem_url(contest_id, index),
        ]

        for url in urls:
            logger.debug(f"Parsing problem page: {url}")
            try:
                html = await self.http_client.get_text(url)
            except HTTPClientError as e:
                logger.warning(f"Failed to load problem page {url}: {e}")
                continue

            data = self.parse_statement(html, url)
            if data.is_usable:
                logger.debug(f"Successfully parsed problem: {contest_id}/{index}")
                return data

            logger.warning(f"No usable statement on {url}")

        logger.error(f"Could not fetch statement for {contest_id}/{index}")
        return StatementData(url=urls[0], statement="")

    def parse_statement(self, html: str, url: str) -> StatementData:
        """Extract title, statement sections and samples from a problem page."""
        soup = BeautifulSoup(html, "lxml")
        problem_statement = soup.find("div", class_="problem-statement")
        if not problem_statement:
            return StatementData(url=url, statement="")

        title = self._extract_title(problem_statement)
        samples = self._extract_samples(problem_statement)

        parts = []
        legend = self._extract_legend(problem_statement)
        if legend:
            parts.append(legend)

        for section_class, heading in (
            ("input-specification", "Input"),
            ("output-specification", "Output"),
        ):
            section = self._extract_section(problem_statement, section_class)
            if section:
                parts.append(f"### {heading}\n{section}")

        if samples:
            parts.append(format_samples(samples))

        note = self._extract_section(problem_statement, "note")
        if note:
            parts.append(f"### Note\n{note}")

        return StatementData(url=url, statement="\n\n".join(parts), title=title, samples=samples)

    def _extract_title(self, problem_statement: Tag) -> Optional[str]:
        header = problem_statement.find("div", class_="header")
        if not header:
            return None
        title_div = header.find("div", class_="title")
        return title_div.get_text(strip=True) if title_div else None

    def _extract_legend(self, problem_statement: Tag) -> Optional[str]:
        """Extract the first unclassed block, which holds the problem legend."""
        try:
            for div in problem_statement.find_all("div", recursive=False):
                if not div.get("class") or div.get("class") == [""]:
                    return html_to_markdown(div, URLParser.CODEFORCES_BASE) or None
            return None
        except Exception as e:
            logger.warning(f"Failed to extract legend: {e}")
            return None

    def _extract_section(self, problem_statement: Tag, section_class: str) -> Optional[str]:
        try:
            section = problem_statement.find("div", class_=section_class)
            if not section:
                return None

            section_title = section.find("div", class_="section-title")
            if section_title:
                section_title.decompose()

            return html_to_markdown(section, URLParser.CODEFORCES_BASE) or None
        except Exception as e:
            logger.warning(f"Failed to extract {section_class}: {e}")
            return None

    def _extract_samples(self, problem_statement: Tag) -> list[tuple[str, str]]:
        samples = []
        for sample_test in problem_statement.find_all("div", class_="sample-test"):
            inputs = [self._pre_text(pre) for pre in sample_test.select(".input pre")]
            outputs = [self._pre_text(pre) for pre in sample_test.select(".output pre")]

            for i in range(max(len(inputs), len(outputs))):
                samples.append(
                    (
                        inputs[i] if i < len(inputs) else "",
                        outputs[i] if i < len(outputs) else "",
                    )
                )
        return samples

    @staticmethod
    def _pre_text(pre: Tag) -> str:
        """Text of a sample block; newer pages put every line in its own div."""
        lines = pre.find_all("div", class_="test-example-line")
        if lines:
            return "\n".join(line.get_text() for line in lines).strip()
        return pre.get_text("\n").strip()
