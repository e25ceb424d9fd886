"""Round-trip of the tag-indexed archive index markdown document.

The index is a markdown document with one ``## <Platform>`` section per judge.
Each section holds a pipe table whose columns are tags and whose cells are
links to per-problem documents:

    # Coding Submissions

    ## Codeforces

    | dp | greedy |
    | --- | --- |
    | [A](codeforces/1-A-A.md) | [B](codeforces/2-B-B.md) |
    |  | [C](codeforces/3-C-C.md) |

Submissions without tags are listed as bullets after the table. Parsing a
rendered section and rendering it again yields the same text.
"""

import re
from collections.abc import Iterable, Mapping

from loguru import logger

from domain.models import SubmissionRecord, TagTable

ROOT_TITLE = "Coding Submissions"
EMPTY_SECTION = "_No submissions yet._"

_CELL_SPLIT = re.compile(r"(?<!\\)\|")
_SEPARATOR_CELL = re.compile(r"^:?-{3,}:?$")
_BULLET = re.compile(r"^[-*]\s+(\[.*\]\(.*\))$")
_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


def _split_row(line: str) -> list[str]:
    """Split a pipe table row into stripped cells, honouring escaped pipes."""
    body = line.strip()
    if body.startswith("|"):
        body = body[1:]
    if body.endswith("|") and not body.endswith("\\|"):
        body = body[:-1]
    return [cell.strip() for cell in _CELL_SPLIT.split(body)]


def _is_separator(line: str) -> bool:
    stripped = line.strip()
    if not stripped.startswith("|"):
        return False
    cells = [cell for cell in _split_row(stripped) if cell]
    return bool(cells) and all(_SEPARATOR_CELL.match(cell) for cell in cells)


def _fenced_lines(lines: list[str]) -> list[bool]:
    """Mark lines that belong to a fenced code block, fences included."""
    fenced = []
    fence: str | None = None

    for line in lines:
        marker = _FENCE.match(line)
        if fence is None:
            if marker:
                fence = marker.group(1)
            fenced.append(fence is not None)
            continue

        fenced.append(True)
        # a closing fence repeats the opening character at least as many times
        if marker and marker.group(1).startswith(fence) and not marker.group(2).strip():
            fence = None

    return fenced


def _find_section(lines: list[str], name: str) -> tuple[int, int] | None:
    """Line span ``[start, end)`` of the ``## name`` section, if present."""
    heading = re.compile(rf"^##\s+{re.escape(name.strip())}\s*$", re.IGNORECASE)
    fenced = _fenced_lines(lines)

    for start, line in enumerate(lines):
        if not fenced[start] and heading.match(line.rstrip()):
            end = start + 1
            while end < len(lines) and (fenced[end] or not lines[end].startswith("## ")):
                end += 1
            return start, end

    return None


def parse_table(lines: Iterable[str]) -> TagTable:
    """
    Rebuild a TagTable from the body lines of one section.

    The first pipe table (header row followed by a separator row) provides the
    tagged links; cells are matched to header tags by position and empty cells
    are skipped. Bullet links anywhere in the section are untagged entries.
    Anything else is ignored, so a malformed section yields an empty table.
    """
    table = TagTable()
    lines = [line.rstrip() for line in lines]
    header: list[str] | None = None

    i = 0
    while i < len(lines):
        line = lines[i].strip()

        if header is None and line.startswith("|") and i + 1 < len(lines) and _is_separator(lines[i + 1]):
            header = [cell.replace("\\|", "|") for cell in _split_row(line)]
            for tag in header:
                if tag:
                    table.columns.setdefault(tag, [])

            i += 2
            while i < len(lines) and lines[i].strip().startswith("|"):
                for position, cell in enumerate(_split_row(lines[i])):
                    if position < len(header) and header[position] and cell:
                        table.columns[header[position]].append(cell)
                i += 1
            continue

        bullet = _BULLET.match(line)
        if bullet:
            table.untagged.append(bullet.group(1))
        i += 1

    return table


def parse_section(document: str, name: str) -> TagTable:
    """Parse the ``## name`` section of ``document``; missing sections are empty."""
    lines = (document or "").split("\n")
    bounds = _find_section(lines, name)
    if bounds is None:
        logger.debug(f"No '{name}' section in archive index, starting fresh")
        return TagTable()

    start, end = bounds
    table = parse_table(lines[start + 1 : end])
    if table.is_empty:
        logger.debug(f"Section '{name}' holds no table, treating it as empty")
    return table


def render_section(name: str, table: TagTable) -> str:
    """Serialize a section: sorted columns, rectangular rows, untagged bullets."""
    lines = [f"## {name}", ""]

    if table.columns:
        tags = sorted(table.columns)
        lines.append("| " + " | ".join(tag.replace("|", "\\|") for tag in tags) + " |")
        lines.append("| " + " | ".join("---" for _ in tags) + " |")

        for row in range(table.row_count):
            cells = []
            for tag in tags:
                links = table.columns[tag]
                cells.append(links[row] if row < len(links) else "")
            lines.append("| " + " | ".join(cells) + " |")

    if table.untagged:
        if table.columns:
            lines.append("")
        lines.extend(f"- {link}" for link in table.untagged)

    if table.is_empty:
        lines.append(EMPTY_SECTION)

    return "\n".join(lines)


def normalize_document(document: str) -> str:
    """Blank out whitespace-only lines, collapse blank runs, end with one newline."""
    lines = [line if line.strip() else "" for line in document.split("\n")]
    text = re.sub(r"\n{3,}", "\n\n", "\n".join(lines))
    return text.strip() + "\n"


def group_by_section(records: Iterable[SubmissionRecord]) -> dict[str, list[SubmissionRecord]]:
    """Group records under their platform's section heading."""
    grouped: dict[str, list[SubmissionRecord]] = {}
    for record in records:
        grouped.setdefault(record.platform.display_name, []).append(record)
    return grouped


class ArchiveIndexMerger:
    """Merges freshly rendered records into a previously published index."""

    def __init__(self, root_title: str = ROOT_TITLE, sections: Iterable[str] = ()):
        """
        Initialize merger.

        Args:
            root_title: Document title, inserted at the top when the document
                has no leading H1
            sections: Section names that are always re-rendered, in order
        """
        self.root_title = root_title
        self.sections = list(sections)

    def merge(
        self,
        old_document: str,
        new_records_by_section: Mapping[str, Iterable[SubmissionRecord]],
    ) -> str:
        """
        Merge new records into ``old_document`` and return the new document.

        Content outside the recognised sections is preserved verbatim.
        Merging the result again with no new records returns it unchanged.
        """
        document = self._ensure_title(old_document or "")

        names = list(self.sections)
        for name in new_records_by_section:
            if name not in names:
                names.append(name)

        for name in names:
            table = parse_section(document, name)
            added = 0
            for record in new_records_by_section.get(name, ()):
                table.add(record.link, record.tags)
                added += 1

            if added:
                logger.info(f"Merged {added} record(s) into '{name}' section")
            document = self._splice(document, name, render_section(name, table))

        return normalize_document(document)

    def _ensure_title(self, document: str) -> str:
        title = f"# {self.root_title}"
        if any(line.rstrip() == title for line in document.split("\n")):
            return document

        # an existing leading H1 is the document's own title
        first = next((line for line in document.split("\n") if line.strip()), "")
        if first.startswith("# "):
            return document

        return f"{title}\n\n{document.lstrip()}"

    @staticmethod
    def _splice(document: str, name: str, section: str) -> str:
        """Replace the ``## name`` region, or append the section at the end."""
        lines = document.split("\n")
        bounds = _find_section(lines, name)

        if bounds is None:
            return "\n".join(lines + ["", section, ""])

        start, end = bounds
        return "\n".join(lines[:start] + section.split("\n") + [""] + lines[end:])
