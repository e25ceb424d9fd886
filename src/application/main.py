"""Command line entry point: archive yesterday's accepted submissions."""

import asyncio
import sys

from loguru import logger

from application.config import Settings
from application.orchestrator import SubmissionArchiveOrchestrator
from domain.models import Platform
from infrastructure.errors import IndexPublishError


def build_orchestrator(settings: Settings) -> SubmissionArchiveOrchestrator:
    """Wire adapters, publishers and the index service from settings."""
    from infrastructure.adapters import AtCoderAdapter, CodeforcesAdapter, LeetCodeAdapter
    from infrastructure.browser import CodeforcesSourceBrowser
    from infrastructure.http_client import AsyncHTTPClient
    from services import create_archive_index_service, create_publishing_service

    http_client = AsyncHTTPClient(timeout=settings.http_timeout, retries=settings.http_retries)
    author = settings.author_name

    codeforces_identity = settings.identity_for(Platform.CODEFORCES)
    browser = None
    if codeforces_identity is not None:
        browser = CodeforcesSourceBrowser(codeforces_identity.cookies, headless=settings.browser_headless)

    adapters = [
        (LeetCodeAdapter(http_client, author=author), settings.identity_for(Platform.LEETCODE)),
        (CodeforcesAdapter(http_client, browser=browser, author=author), codeforces_identity),
        (AtCoderAdapter(http_client, author=author), settings.identity_for(Platform.ATCODER)),
    ]

    publishing = create_publishing_service(
        http_client,
        github_token=settings.github_token,
        github_repo=settings.github_repo,
        github_branch=settings.github_branch,
        notion_token=settings.notion_token,
        notion_database_id=settings.notion_database_id,
    )

    archive = None
    if settings.github_enabled:
        archive = create_archive_index_service(
            http_client,
            token=settings.github_token,
            repo=settings.github_repo,
            branch=settings.github_branch,
            path=settings.index_path,
            title=settings.index_title,
            max_attempts=settings.index_write_attempts,
        )

    return SubmissionArchiveOrchestrator(
        adapters=adapters,
        publishing=publishing,
        archive=archive,
        browser=browser,
    )


async def run(settings: Settings) -> int:
    orchestrator = build_orchestrator(settings)
    try:
        records = await orchestrator.run()
    except IndexPublishError as e:
        logger.error(f"Archive index update failed: {e}")
        return 1

    logger.info(f"Done: {len(records)} submission(s) archived")
    return 0


def main() -> None:
    """Main entry point."""
    settings = Settings.from_env()

    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)

    if not settings.github_enabled:
        logger.warning("PERSONAL_GITHUB_TOKEN/PERSONAL_GITHUB_REPO not set, documents will not be pushed")
    if not settings.notion_enabled:
        logger.info("Notion not configured, skipping page creation")

    sys.exit(asyncio.run(run(settings)))


if __name__ == "__main__":
    main()
