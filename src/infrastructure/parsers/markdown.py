"""HTML to markdown conversion and cleanup of conversion artifacts."""

import re

from bs4 import BeautifulSoup, Tag
from markdownify import markdownify

from domain.parsers.url_parser import URLParser

SCAFFOLD_MARKER = "// ======== FastScanner ========"

# Codeforces wraps display math in six dollars and inline math in three
_CODEFORCES_DISPLAY_MATH = re.compile(r"\$\$\$\$\$\$(.+?)\$\$\$\$\$\$", re.DOTALL)
_CODEFORCES_MATH = re.compile(r"\$\$\$(.+?)\$\$\$", re.DOTALL)


def html_to_markdown(fragment: Tag | str, base_url: str | None = None) -> str:
    """
    Convert an HTML fragment to markdown.

    Relative image sources are made absolute against ``base_url`` and
    ``<var>`` elements become inline math.
    """
    if isinstance(fragment, Tag):
        soup = BeautifulSoup(str(fragment), "lxml")
    else:
        soup = BeautifulSoup(fragment or "", "lxml")

    for img in soup.find_all("img"):
        src = img.get("src")
        if base_url and isinstance(src, str) and src:
            img["src"] = URLParser.absolutize(src, base_url)

    for var in soup.find_all("var"):
        var.replace_with(f"${var.get_text()}$")

    text = markdownify(
        str(soup),
        heading_style="ATX",
        escape_underscores=False,
        escape_asterisks=False,
        escape_misc=False,
        strip=["script", "style", "svg", "iframe"],
    )
    text = _CODEFORCES_DISPLAY_MATH.sub(lambda m: f"$${m.group(1).strip()}$$", text)
    text = _CODEFORCES_MATH.sub(lambda m: f"${m.group(1).strip()}$", text)
    return collapse_blank_lines(text)


def collapse_blank_lines(text: str) -> str:
    text = re.sub(r"[ \t]+\n", "\n", text)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def strip_scaffold(code: str) -> str:
    """
    Drop the boilerplate the judge template appends after the solution.

    Everything from the scaffold marker on is removed and the enclosing class
    is closed again.
    """
    position = code.find(SCAFFOLD_MARKER)
    if position == -1:
        return code
    return code[:position].rstrip() + "\n}"


def clean_converted_markdown(text: str) -> str:
    """Collapse heading and divider artifacts left over from HTML conversion."""
    # "##" / "<h3>Title</h3>" / "##" triplets become a single heading
    text = re.sub(
        r"^##\s*\n\s*<h3>(.*?)</h3>\s*\n\s*##\s*$",
        lambda m: f"## {m.group(1).strip()}",
        text,
        flags=re.MULTILINE | re.DOTALL,
    )
    text = re.sub(r"^[ \t]*#{1,6}[ \t]*$", "", text, flags=re.MULTILINE)
    text = re.sub(r'<div\s+class="io-style">\s*\n?', "", text)
    text = re.sub(r"</div>\s*\n?", "", text)
    text = re.sub(r"^(---\s*\n\s*)+---\s*$", "---", text, flags=re.MULTILINE)
    return collapse_blank_lines(text)
