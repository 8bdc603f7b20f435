"""README parsing for the imported MovieLens archive.

This module splits plain-text READMEs into headed sections. Setext
headings (text underlined by ``=`` or ``-``) and ATX headings (``#``
prefixes) are recognised.
"""

from __future__ import annotations

import re

from core.errors import ReadmeMissingError
from core.types import ReadmeDocument, ReadmeSection
from store.dataset_cache import DatasetCache

_ATX_HEADING = re.compile(r"^(#{1,6})\s+(.*?)\s*#*\s*$")
_SETEXT_UNDERLINE = re.compile(r"^\s*(=+|-+)\s*$")


def load_readme(cache: DatasetCache) -> ReadmeDocument:
    """Read and parse the cached MovieLens README.

    Args:
        cache: Dataset cache holding the README.

    Returns:
        Parsed README document.

    Raises:
        ReadmeMissingError: If the MovieLens import has not run yet.
    """
    readme_path = cache.readme_path
    if not readme_path.is_file():
        raise ReadmeMissingError(
            f"No README found at {readme_path}. "
            "Run the MovieLens import before reading its README."
        )
    return parse_readme(readme_path.read_text(encoding="utf-8"))


def parse_readme(text: str) -> ReadmeDocument:
    """Parse README text into a title and headed sections.

    Text before the first heading becomes a level-0 section with an
    empty heading.
    """
    lines = text.splitlines()
    sections: list[ReadmeSection] = []
    heading, level = "", 0
    body: list[str] = []
    index = 0
    while index < len(lines):
        parsed = _heading_at(lines, index)
        if parsed is None:
            body.append(lines[index])
            index += 1
            continue
        _append_section(sections, heading, level, body)
        heading, level, consumed = parsed
        body = []
        index += consumed
    _append_section(sections, heading, level, body)
    return ReadmeDocument(title=_title(sections), sections=tuple(sections), raw_text=text)


def _heading_at(lines: list[str], index: int) -> tuple[str, int, int] | None:
    """Return (heading, level, lines consumed) when a heading starts here."""
    line = lines[index]
    atx_match = _ATX_HEADING.match(line)
    if atx_match:
        return atx_match.group(2), len(atx_match.group(1)), 1
    if not line.strip() or index + 1 >= len(lines):
        return None
    underline = _SETEXT_UNDERLINE.match(lines[index + 1])
    if underline is None:
        return None
    return line.strip(), 1 if underline.group(1).startswith("=") else 2, 2


def _append_section(
    sections: list[ReadmeSection],
    heading: str,
    level: int,
    body: list[str],
) -> None:
    content = "\n".join(body).strip("\n")
    if not heading and not content.strip():
        return
    sections.append(ReadmeSection(heading=heading, level=level, body=content))


def _title(sections: list[ReadmeSection]) -> str:
    for section in sections:
        if section.heading:
            return section.heading
    for section in sections:
        for line in section.body.splitlines():
            if line.strip():
                return line.strip()
    return ""
