"""
Structural elements to Google Docs batchUpdate requests.

This module provides the `DocsRequestBuilder` class that turns the structural
elements produced by `gdocs/markdown_parser.py` into the request list for
`documents().batchUpdate()`, tracking the insertion cursor as it goes.

Text is written in segments. A segment is a run of consecutive paragraphs that
are either all list items or all plain paragraphs. Each segment is inserted with
a single `insertText`, and its styles are applied afterwards as ranges. Text
inserted piecewise would otherwise inherit the style of the text before it.

Per segment the requests are, in order:
    1. `insertText` with the whole segment text
    2. `updateTextStyle` per styled range (identical ranges merged)
    3. `updateParagraphStyle` for headings
    4. `createParagraphBullets` (list segments) or `deleteParagraphBullets`
       (the first paragraph after a list)

Tables end the current segment and are written with `insertTable` followed by
one `insertText` per non-empty cell.

Example:
    >>> content = convert_markdown_to_document("# Title\\n\\n**Bold** text")
    >>> requests = build_requests(content.content)
    >>> [next(iter(r)) for r in requests]
    ['insertText', 'updateTextStyle', 'updateParagraphStyle']
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gdocs.models import DocumentContent, Paragraph, StructuralElement, Table, TableCell, TextStyle

logger = logging.getLogger(__name__)

# Bullet preset applied to every list; nesting comes from leading TABs
BULLET_PRESET = "BULLET_DISC_CIRCLE_SQUARE"

# Boolean TextStyle fields copied into updateTextStyle requests
BOOLEAN_STYLE_FIELDS = ("bold", "italic", "underline", "strikethrough")


def text_style_to_request(style: TextStyle | None) -> dict:
    """Build the `textStyle` body of an updateTextStyle request; empty when nothing is set."""
    if style is None:
        return {}

    request_style: dict = {}
    for field in BOOLEAN_STYLE_FIELDS:
        if getattr(style, field):
            request_style[field] = True
    if style.font_family:
        request_style["weightedFontFamily"] = {"fontFamily": style.font_family}
    if style.link_url:
        request_style["link"] = {"url": style.link_url}
    return request_style


def _cell_text(cell: TableCell) -> str:
    paragraphs: list[str] = []
    for element in cell.content:
        if element.paragraph is None:
            continue
        text = "".join(pe.text_run.content for pe in element.paragraph.elements if pe.text_run is not None)
        paragraphs.append(text.strip("\n"))
    return " ".join(p for p in paragraphs if p).strip()


class DocsRequestBuilder:
    """
    Builds Google Docs API batchUpdate requests from structural elements.

    This class maintains state during a build to track:
    - `cursor_index`: Current insertion point in the document
    - `requests`: Generated API requests, in execution order

    Attributes:
        requests: List of generated Google Docs API request dictionaries.
        cursor_index: Start of the current segment (1-based, as per Google Docs API).

    Example:
        >>> builder = DocsRequestBuilder()
        >>> builder.build(content.content, start_index=25)
    """

    def __init__(self) -> None:
        self.requests: list[dict] = []
        self.cursor_index: int = 1
        # Current segment, positions relative to the segment start
        self._text_buffer: str = ""
        self._segment_is_list: bool = False
        self._deferred_styles: list[tuple[int, int, dict]] = []  # (start, end, textStyle)
        self._heading_ranges: list[tuple[int, int, str]] = []  # (start, end, namedStyleType)
        self._delete_bullet_range: tuple[int, int] | None = None
        # Google Docs paragraphs inherit bullets from the paragraph before them
        self._just_exited_list: bool = False

    def build(self, elements: Iterable[StructuralElement], start_index: int = 1) -> list[dict]:
        """
        Convert structural elements to Google Docs API requests.

        Args:
            elements: Structural elements, typically `DocumentContent.content`.
            start_index: The index at which content is inserted (1-based).

        Returns:
            A list of request dictionaries ready for batchUpdate; empty for no content.

        Note:
            This method resets the builder state, so an instance can be reused.
        """
        self.requests = []
        self.cursor_index = start_index
        self._reset_segment()
        self._just_exited_list = False

        for element in elements:
            variant = element.variant
            if isinstance(variant, Paragraph):
                self._handle_paragraph(variant)
            elif isinstance(variant, Table):
                self._flush_segment()
                self._handle_table(variant)
            else:
                logger.debug(f"Skipping unsupported element for write: {type(variant).__name__}")

        self._flush_segment()
        logger.debug(f"Built {len(self.requests)} request(s), cursor at {self.cursor_index}")
        return self.requests

    def _reset_segment(self) -> None:
        self._text_buffer = ""
        self._segment_is_list = False
        self._deferred_styles = []
        self._heading_ranges = []
        self._delete_bullet_range = None

    def _handle_paragraph(self, paragraph: Paragraph) -> None:
        is_list_item = paragraph.bullet is not None
        if self._text_buffer and is_list_item != self._segment_is_list:
            self._flush_segment()
        self._segment_is_list = is_list_item

        paragraph_start = len(self._text_buffer)

        # List nesting via leading TABs; createParagraphBullets removes them
        if is_list_item:
            nesting_level = paragraph.bullet.nesting_level or 0
            self._text_buffer += "\t" * nesting_level

        for element in paragraph.elements:
            run = element.text_run
            if run is None or not run.content:
                continue
            run_start = len(self._text_buffer)
            self._text_buffer += run.content
            style = text_style_to_request(run.text_style)
            if style:
                self._deferred_styles.append((run_start, len(self._text_buffer), style))

        if not self._text_buffer.endswith("\n") or len(self._text_buffer) == paragraph_start:
            self._text_buffer += "\n"
        paragraph_end = len(self._text_buffer)

        named_style = paragraph.paragraph_style.named_style_type if paragraph.paragraph_style else None
        if named_style:
            self._heading_ranges.append((paragraph_start, paragraph_end, named_style))

        if not is_list_item and self._just_exited_list:
            self._delete_bullet_range = (paragraph_start, paragraph_end)
            self._just_exited_list = False

    def _flush_segment(self) -> None:
        """Emit the requests for the buffered segment and advance the cursor past it."""
        if not self._text_buffer:
            self._reset_segment()
            return

        start = self.cursor_index
        self.requests.append({"insertText": {"text": self._text_buffer, "location": {"index": start}}})

        for rel_start, rel_end, style in self._merge_deferred_styles():
            self.requests.append(
                {
                    "updateTextStyle": {
                        "range": {"startIndex": start + rel_start, "endIndex": start + rel_end},
                        "textStyle": style,
                        "fields": ",".join(style.keys()),
                    }
                }
            )

        for rel_start, rel_end, named_style in self._heading_ranges:
            self.requests.append(
                {
                    "updateParagraphStyle": {
                        "range": {"startIndex": start + rel_start, "endIndex": start + rel_end},
                        "paragraphStyle": {"namedStyleType": named_style},
                        "fields": "namedStyleType",
                    }
                }
            )

        end = start + len(self._text_buffer)
        if self._segment_is_list:
            self.requests.append(
                {
                    "createParagraphBullets": {
                        "range": {"startIndex": start, "endIndex": end},
                        "bulletPreset": BULLET_PRESET,
                    }
                }
            )
            tabs_removed = self._text_buffer.count("\t")
            end -= tabs_removed
            self._just_exited_list = True
            logger.debug(f"List segment [{start}, {end}): {tabs_removed} TAB(s) removed by the API")
        elif self._delete_bullet_range is not None:
            rel_start, rel_end = self._delete_bullet_range
            self.requests.append(
                {"deleteParagraphBullets": {"range": {"startIndex": start + rel_start, "endIndex": start + rel_end}}}
            )

        logger.debug(f"Flushed segment: {len(self._text_buffer)} chars at index {start}")
        self.cursor_index = end
        self._reset_segment()

    def _merge_deferred_styles(self) -> list[tuple[int, int, dict]]:
        """Merge style ranges with identical start/end into single requests."""
        range_to_style: dict[tuple[int, int], dict] = {}
        for start, end, style in self._deferred_styles:
            range_to_style.setdefault((start, end), {}).update(style)
        return [(start, end, style) for (start, end), style in range_to_style.items()]

    def _handle_table(self, table: Table) -> None:
        """
        Generate insertTable + cell population requests.

        Google Docs Table Index Math:
        - Table starts at index `I`
        - First cell (0,0) content starts at: `I + 3`
        - Each column adds 2 indices: cell content(1) + cell boundary(1)
        - Each row adds (2 * cols + 1) indices: cells(2*cols) + row end(1)

        Cells are filled last-cell-first so every insertion point is the
        unshifted base index.
        """
        self._just_exited_list = False
        table_data = [[_cell_text(cell) for cell in row.table_cells] for row in table.table_rows]
        table_data = [row for row in table_data if row]

        rows = len(table_data)
        cols = max((len(row) for row in table_data), default=0)
        if rows == 0 or cols == 0:
            logger.warning(f"Skipping table with invalid dimensions: {rows}x{cols}")
            return

        for row in table_data:
            row.extend([""] * (cols - len(row)))

        table_start = self.cursor_index
        logger.debug(f"Table: generating {rows}x{cols} table at index {table_start}")
        self.requests.append({"insertTable": {"location": {"index": table_start}, "rows": rows, "columns": cols}})

        cells = [(r, c, text) for r, row in enumerate(table_data) for c, text in enumerate(row) if text]
        for r, c, text in reversed(cells):
            index = table_start + 3 + r * (2 * cols + 1) + c * 2
            self.requests.append({"insertText": {"text": text, "location": {"index": index}}})

        self._apply_header_bold_style(table_start, table_data[0])

        text_length = sum(len(text) for _, _, text in cells)
        self.cursor_index = table_start + 2 + rows * (2 * cols + 1) + text_length
        logger.debug(f"Table complete: {text_length} chars inserted, cursor at {self.cursor_index}")

    def _apply_header_bold_style(self, table_start: int, header: list[str]) -> None:
        """Apply bold formatting to each cell in the first table row."""
        header_offset = 0
        for c, cell_text in enumerate(header):
            if not cell_text:
                continue
            cell_start = table_start + 3 + c * 2 + header_offset
            self.requests.append(
                {
                    "updateTextStyle": {
                        "range": {"startIndex": cell_start, "endIndex": cell_start + len(cell_text)},
                        "textStyle": {"bold": True},
                        "fields": "bold",
                    }
                }
            )
            header_offset += len(cell_text)


def build_requests(elements: DocumentContent | Iterable[StructuralElement], start_index: int = 1) -> list[dict]:
    """Build batchUpdate requests for `elements` inserted at `start_index`."""
    if isinstance(elements, DocumentContent):
        elements = elements.content
    return DocsRequestBuilder().build(elements, start_index)
