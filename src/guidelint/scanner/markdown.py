"""
Markdown document scanning.

Style guides are Markdown documents with embedded code snippets. This
module extracts the structure the document rules need: ATX headings and
fenced code blocks. Headings inside fences are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

_FENCE_OPEN = re.compile(r"^ {0,3}(?P<marker>`{3,}|~{3,})\s*(?P<info>[^`]*?)\s*$")
_HEADING = re.compile(r"^ {0,3}(?P<hashes>#{1,6})(?:[ \t]+(?P<title>.*?))?[ \t]*#*[ \t]*$")

DOC_EXTENSIONS = (".md", ".markdown")


@dataclass(frozen=True)
class Heading:
    level: int
    title: str
    line: int


@dataclass
class Fence:
    """A fenced code block."""
    marker: str
    info: str
    line: int
    end_line: Optional[int] = None
    body: list[str] = field(default_factory=list)

    @property
    def language(self) -> str:
        return self.info.split()[0].lower() if self.info else ""

    @property
    def closed(self) -> bool:
        return self.end_line is not None

    @property
    def code(self) -> str:
        return "\n".join(self.body)

    def closes_with(self, line: str) -> bool:
        stripped = line.strip()
        return (
            len(line) - len(line.lstrip(" ")) <= 3
            and len(stripped) >= len(self.marker)
            and set(stripped) == {self.marker[0]}
        )


@dataclass
class DocumentUnit:
    """Structural representation of one Markdown document."""
    path: str
    text: str
    lines: list[str]
    headings: list[Heading] = field(default_factory=list)
    fences: list[Fence] = field(default_factory=list)

    def get_line(self, line_no: int) -> str:
        if line_no <= 0 or line_no > len(self.lines):
            return ""
        return self.lines[line_no - 1]

    def section_body(self, heading: Heading) -> list[str]:
        """
        Lines between a heading and the next heading of the same or higher
        level. Subsection headings are part of the body.
        """
        end = len(self.lines) + 1
        for other in self.headings:
            if other.line > heading.line and other.level <= heading.level:
                end = other.line
                break
        return self.lines[heading.line:end - 1]


def scan_document(text: str, path: str = "<unknown>") -> DocumentUnit:
    """Scan Markdown text into headings and fences."""
    lines = text.splitlines()
    unit = DocumentUnit(path=path, text=text, lines=lines)

    open_fence: Optional[Fence] = None
    for line_no, line in enumerate(lines, start=1):
        if open_fence is not None:
            if open_fence.closes_with(line):
                open_fence.end_line = line_no
                open_fence = None
            else:
                open_fence.body.append(line)
            continue

        m = _FENCE_OPEN.match(line)
        if m:
            open_fence = Fence(marker=m.group("marker"), info=m.group("info"), line=line_no)
            unit.fences.append(open_fence)
            continue

        m = _HEADING.match(line)
        if m:
            unit.headings.append(Heading(
                level=len(m.group("hashes")),
                title=(m.group("title") or "").strip(),
                line=line_no,
            ))

    return unit
