"""Archive index value objects."""

from dataclasses import dataclass, field


@dataclass
class TagTable:
    """Links grouped by tag for one platform section of the archive index."""

    columns: dict[str, list[str]] = field(default_factory=dict)
    untagged: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.columns and not self.untagged

    @property
    def row_count(self) -> int:
        return max((len(links) for links in self.columns.values()), default=0)

    def add(self, link: str, tags) -> None:
        """Append ``link`` under every tag, skipping exact duplicates."""
        tags = [tag.strip() for tag in tags if tag and tag.strip()]
        if not tags:
            if link not in self.untagged:
                self.untagged.append(link)
            return

        for tag in tags:
            column = self.columns.setdefault(tag, [])
            if link not in column:
                column.append(link)
