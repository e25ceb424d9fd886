from domain.archive_index import ArchiveIndexMerger
from domain.models import Platform
from services.archive import ArchiveIndexService
from services.publishing import PublishingService


def create_archive_index_service(
    http_client,
    *,
    token: str,
    repo: str,
    branch: str = "main",
    path: str = "README.md",
    title: str = "Coding Submissions",
    max_attempts: int = 3,
) -> ArchiveIndexService:
    """Factory function to create the archive index service backed by GitHub."""
    from infrastructure.github_client import GitHubContentsClient

    store = GitHubContentsClient(http_client, token=token, repo=repo, branch=branch)
    merger = ArchiveIndexMerger(
        root_title=title,
        sections=[platform.display_name for platform in Platform],
    )

    return ArchiveIndexService(store=store, merger=merger, path=path, max_attempts=max_attempts)


def create_publishing_service(
    http_client,
    *,
    github_token: str | None = None,
    github_repo: str | None = None,
    github_branch: str = "main",
    notion_token: str | None = None,
    notion_database_id: str | None = None,
) -> PublishingService:
    """Factory function to create the publishing service with configured publishers."""
    from infrastructure.github_client import GitHubContentsClient
    from infrastructure.notion_client import NotionPageClient

    documents = None
    if github_token and github_repo:
        documents = GitHubContentsClient(http_client, token=github_token, repo=github_repo, branch=github_branch)

    pages = None
    if notion_token and notion_database_id:
        pages = NotionPageClient(http_client, token=notion_token, database_id=notion_database_id)

    return PublishingService(documents=documents, pages=pages)


__all__ = [
    "ArchiveIndexService",
    "PublishingService",
    "create_archive_index_service",
    "create_publishing_service",
]
