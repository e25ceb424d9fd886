"""Client creating one Notion database page per archived submission."""

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from loguru import logger

from infrastructure.errors import HTTPClientError, PublisherError

if TYPE_CHECKING:
    from infrastructure.http_client import AsyncHTTPClient

PAGES_URL = "https://api.notion.com/v1/pages"
NOTION_VERSION = "2022-06-28"

MAX_TEXT_CHARS = 2000
MAX_SAFE_CODE_CHARS = 16000
MAX_CHILDREN = 100

NOTION_LANGUAGES = {
    "c": "c",
    "cpp": "c++",
    "csharp": "c#",
    "go": "go",
    "java": "java",
    "javascript": "javascript",
    "kotlin": "kotlin",
    "python": "python",
    "ruby": "ruby",
    "rust": "rust",
    "scala": "scala",
    "swift": "swift",
    "typescript": "typescript",
}

_CODE_BLOCK = re.compile(r"## Submitted Code\s*```(\w*)\n(.*?)```", re.DOTALL)
_STATEMENT = re.compile(r"## Problem Statement(.*?)(?=\n---\n|## Submitted Code)", re.DOTALL)


def chunk_text(text: str, size: int = MAX_TEXT_CHARS) -> list[str]:
    return [text[i : i + size] for i in range(0, len(text), size)]


def _rich_text(content: str) -> dict[str, Any]:
    return {"type": "text", "text": {"content": content}}


def heading_block(text: str) -> dict[str, Any]:
    return {"object": "block", "type": "heading_2", "heading_2": {"rich_text": [_rich_text(text)]}}


def paragraph_blocks(text: str) -> list[dict[str, Any]]:
    """One paragraph block per markdown paragraph, split to Notion's size limit."""
    blocks = []
    for paragraph in re.split(r"\n{2,}", text.strip()):
        for part in chunk_text(paragraph.strip()):
            if part:
                blocks.append(
                    {"object": "block", "type": "paragraph", "paragraph": {"rich_text": [_rich_text(part)]}}
                )
    return blocks


def code_blocks(code: str, language: str) -> list[dict[str, Any]]:
    """
    Code as one block of several rich-text segments when small enough,
    otherwise as consecutive blocks marked as continuations.
    """
    language = NOTION_LANGUAGES.get(language, "plain text")

    if len(code) <= MAX_SAFE_CODE_CHARS:
        segments = [_rich_text(part) for part in chunk_text(code)] or [_rich_text("")]
        return [{"object": "block", "type": "code", "code": {"language": language, "rich_text": segments}}]

    blocks = []
    for number, part in enumerate(chunk_text(code, MAX_TEXT_CHARS - 20)):
        prefix = "" if number == 0 else "⤷ continued\n"
        blocks.append(
            {
                "object": "block",
                "type": "code",
                "code": {"language": language, "rich_text": [_rich_text(prefix + part)]},
            }
        )
    return blocks


def build_page(handoff: Mapping[str, Any], database_id: str) -> dict[str, Any]:
    """Notion page payload for a record handoff mapping."""
    body = handoff.get("body", "")

    code_match = _CODE_BLOCK.search(body)
    language = code_match.group(1) if code_match and code_match.group(1) else "text"
    code = code_match.group(2).strip() if code_match else ""

    statement_match = _STATEMENT.search(body)
    statement = statement_match.group(1).strip() if statement_match else "No problem statement available."

    code_children = code_blocks(code, language)
    statement_budget = max(MAX_CHILDREN - 2 - len(code_children), 0)
    statement_children = paragraph_blocks(statement)[:statement_budget]

    properties: dict[str, Any] = {
        "Title": {"title": [{"text": {"content": handoff.get("title", "")}}]},
        "Platform": {"select": {"name": handoff.get("platform", "Unknown")}},
        "Difficulty": {"select": {"name": str(handoff.get("difficulty", "Unknown"))}},
        "Runtime": {"rich_text": [{"text": {"content": handoff.get("summary", "")}}]},
        "Tags": {"multi_select": [{"name": tag} for tag in handoff.get("tags", [])]},
    }
    if handoff.get("problemUrl"):
        properties["Problem URL"] = {"url": handoff["problemUrl"]}
    if handoff.get("submissionUrl"):
        properties["Submission URL"] = {"url": handoff["submissionUrl"]}

    return {
        "parent": {"database_id": database_id},
        "properties": properties,
        "children": [
            heading_block("Problem Statement"),
            *statement_children,
            heading_block("Submitted Code"),
            *code_children,
        ],
    }


class NotionPageClient:
    """Creates pages in a Notion database."""

    def __init__(self, http_client: "AsyncHTTPClient", *, token: str, database_id: str):
        self.http_client = http_client
        self.database_id = database_id
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        }

    async def create_page(self, handoff: Mapping[str, Any]) -> None:
        """
        Create a page for one record.

        Raises:
            PublisherError: If Notion rejects the page
        """
        payload = build_page(handoff, self.database_id)
        try:
            await self.http_client.post_json(PAGES_URL, payload, headers=self.headers)
        except HTTPClientError as e:
            raise PublisherError(f"Notion rejected page '{handoff.get('title')}': {e}") from e

        logger.debug(f"Added to Notion: {handoff.get('title')}")
