"""
Markdown to Google Docs Converter

This module provides the `MarkdownToDocumentConverter` class that parses note
Markdown into Google Docs structural elements (`DocumentContent`). It is the
reverse of `gdocs/markdown_renderer.py`; `gdocs/request_builder.py` turns the
result into `batchUpdate` requests.

The parser is line based and makes a single forward pass:
    - `# ..` to `###### ..` become HEADING_1..HEADING_6 paragraphs
    - `- `, `* `, `+ ` and `N. ` lines become bulleted paragraphs (two spaces
      of indentation per nesting level)
    - Consecutive `|` lines become one table (separator rows dropped)
    - Anything else is a plain paragraph; blank lines become empty paragraphs

Inline formatting (`***`, `**`, `*`, backticks, `~~`, `[text](url)`) becomes flat
styled text runs. Nested markers are not combined: the first marker wins.

Example:
    >>> content = convert_markdown_to_document("# Hello\\n\\nThis is **bold** text.")
    >>> [e.paragraph.paragraph_style.named_style_type for e in content.content]
    ['HEADING_1', None, None]
"""

from __future__ import annotations

import logging
import re

from gdocs.models import (
    Bullet,
    DocumentContent,
    Link,
    Paragraph,
    ParagraphElement,
    ParagraphStyle,
    StructuralElement,
    Table,
    TableCell,
    TableRow,
    TextRun,
    TextStyle,
    WeightedFontFamily,
)

logger = logging.getLogger(__name__)

# Named style mappings for headings (level 1 -> HEADING_1, etc.)
HEADING_STYLE_MAP: dict[int, str] = {
    1: "HEADING_1",
    2: "HEADING_2",
    3: "HEADING_3",
    4: "HEADING_4",
    5: "HEADING_5",
    6: "HEADING_6",
}

# Lists are not grouped on parse; every list item points at this id
PLACEHOLDER_LIST_ID = "list-id"

# Spaces of indentation per list nesting level
LIST_INDENT_WIDTH = 2

# Inline code font
CODE_FONT_FAMILY = "Courier New"

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
BULLET_ITEM_PATTERN = re.compile(r"^(\s*)[-*+]\s+(.+)$")
NUMBERED_ITEM_PATTERN = re.compile(r"^(\s*)\d+\.\s+(.+)$")
TABLE_SEPARATOR_PATTERN = re.compile(r"^\s*\|[\s\-|]+\|\s*$")

# Inline patterns in priority order; group 1 is the styled text
INLINE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\*\*\*(.*?)\*\*\*"), "bold_italic"),
    (re.compile(r"\*\*(.*?)\*\*"), "bold"),
    (re.compile(r"\*(.*?)\*"), "italic"),
    (re.compile(r"`(.*?)`"), "code"),
    (re.compile(r"~~(.*?)~~"), "strikethrough"),
    (re.compile(r"\[([^\]]+)\]\(([^)]+)\)"), "link"),
]


def _style_for(kind: str, match: re.Match[str]) -> TextStyle:
    if kind == "bold_italic":
        return TextStyle(bold=True, italic=True)
    elif kind == "bold":
        return TextStyle(bold=True)
    elif kind == "italic":
        return TextStyle(italic=True)
    elif kind == "code":
        return TextStyle(weighted_font_family=WeightedFontFamily(font_family=CODE_FONT_FAMILY))
    elif kind == "strikethrough":
        return TextStyle(strikethrough=True)
    elif kind == "link":
        return TextStyle(link=Link(url=match.group(2)))
    raise ValueError(f"Unknown inline style: {kind}")


class MarkdownToDocumentConverter:
    """
    Converts Markdown text into Google Docs structural elements.

    The converter is stateless; `convert()` can be called repeatedly on the
    same instance.

    Example:
        >>> converter = MarkdownToDocumentConverter()
        >>> content = converter.convert("- one\\n  - two", title="Notes")
        >>> [e.paragraph.bullet.nesting_level for e in content.content]
        [0, 1]
    """

    def convert(self, markdown_text: str, title: str | None = None) -> DocumentContent:
        """
        Parse Markdown into a `DocumentContent`.

        Args:
            markdown_text: The Markdown string to convert.
            title: Optional document title carried through to the result.

        Returns:
            The parsed structural elements, one per block.
        """
        lines = [line.removesuffix("\r") for line in markdown_text.split("\n")]
        content: list[StructuralElement] = []

        index = 0
        while index < len(lines):
            element, index = self._process_line(lines, index)
            if element is not None:
                content.append(element)

        logger.debug(f"Parsed {len(lines)} line(s) into {len(content)} element(s)")
        return DocumentContent(title=title, content=content)

    def _process_line(self, lines: list[str], index: int) -> tuple[StructuralElement | None, int]:
        """Parse the block starting at `index`; return it with the index of the next unread line."""
        line = lines[index]

        if not line.strip():
            return self._create_paragraph(""), index + 1

        heading_match = HEADING_PATTERN.match(line)
        if heading_match:
            level = len(heading_match.group(1))
            return self._create_heading(heading_match.group(2), level), index + 1

        list_match = BULLET_ITEM_PATTERN.match(line) or NUMBERED_ITEM_PATTERN.match(line)
        if list_match:
            indent = len(list_match.group(1))
            return self._create_list_item(list_match.group(2), indent), index + 1

        if line.strip().startswith("|"):
            return self._process_table(lines, index)

        return self._create_paragraph(line), index + 1

    def _process_table(self, lines: list[str], start: int) -> tuple[StructuralElement, int]:
        """Collect consecutive `|` lines into one table, skipping separator rows."""
        table_lines: list[str] = []
        index = start
        while index < len(lines) and "|" in lines[index]:
            table_lines.append(lines[index])
            index += 1

        rows = [line for line in table_lines if not TABLE_SEPARATOR_PATTERN.match(line)]
        logger.debug(f"Table block: {len(table_lines)} line(s), {len(rows)} row(s)")
        return self._create_table(rows), index

    def _create_paragraph(self, text: str) -> StructuralElement:
        return StructuralElement(
            paragraph=Paragraph(
                elements=self._parse_inline(text),
                paragraph_style=ParagraphStyle(),
            )
        )

    def _create_heading(self, text: str, level: int) -> StructuralElement:
        return StructuralElement(
            paragraph=Paragraph(
                elements=self._parse_inline(text),
                paragraph_style=ParagraphStyle(named_style_type=HEADING_STYLE_MAP[level]),
            )
        )

    def _create_list_item(self, text: str, indent: int) -> StructuralElement:
        return StructuralElement(
            paragraph=Paragraph(
                elements=self._parse_inline(text),
                bullet=Bullet(list_id=PLACEHOLDER_LIST_ID, nesting_level=indent // LIST_INDENT_WIDTH),
                paragraph_style=ParagraphStyle(),
            )
        )

    def _create_table(self, rows: list[str]) -> StructuralElement:
        table_rows: list[TableRow] = []
        for line in rows:
            cells = line.split("|")[1:-1]
            table_cells = [TableCell(content=[self._create_paragraph(cell.strip())]) for cell in cells]
            table_rows.append(TableRow(table_cells=table_cells))

        columns = len(table_rows[0].table_cells) if table_rows else 0
        return StructuralElement(table=Table(rows=len(table_rows), columns=columns, table_rows=table_rows))

    def _parse_inline(self, text: str) -> list[ParagraphElement]:
        """
        Split a line into flat text runs.

        Matches of every inline pattern are collected and ordered by position
        (pattern priority breaks ties). Walking left to right, a match that
        starts inside text already emitted, or that captures nothing, is
        skipped; the text between matches becomes plain runs.
        """
        if not text.strip():
            return [ParagraphElement(text_run=TextRun(content="\n", text_style=TextStyle()))]

        matches: list[tuple[int, int, re.Match[str], str]] = []
        for priority, (pattern, kind) in enumerate(INLINE_PATTERNS):
            for match in pattern.finditer(text):
                matches.append((match.start(), priority, match, kind))
        matches.sort(key=lambda item: (item[0], item[1]))

        if not matches:
            return [self._text_run(text, TextStyle())]

        elements: list[ParagraphElement] = []
        last_end = 0
        for start, _, match, kind in matches:
            if start < last_end or not match.group(1):
                continue
            if start > last_end:
                elements.append(self._text_run(text[last_end:start], TextStyle()))
            elements.append(self._text_run(match.group(1), _style_for(kind, match)))
            last_end = match.end()

        if last_end < len(text):
            elements.append(self._text_run(text[last_end:], TextStyle()))

        return elements

    @staticmethod
    def _text_run(content: str, style: TextStyle) -> ParagraphElement:
        return ParagraphElement(text_run=TextRun(content=content, text_style=style))


def convert_markdown_to_document(markdown_text: str, title: str | None = None) -> DocumentContent:
    """Parse Markdown into Google Docs structural elements."""
    return MarkdownToDocumentConverter().convert(markdown_text, title)
