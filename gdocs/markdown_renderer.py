"""
Google Docs to Markdown Converter

This module provides the `DocumentToMarkdownConverter` class that renders a
Google Docs API `Document` into Markdown suitable for storing as note content.
It is the reverse of `gdocs/markdown_parser.py`.

The converter walks the document body once:
    - Paragraphs become plain lines, headings (`#`..`######`) or aligned `<div>`s
    - Bulleted paragraphs become `- ` / `N. ` list lines, numbered through a
      `ListNumberingTracker`
    - Tables become pipe tables with a header separator after the first row
    - Section breaks, page breaks and horizontal rules become `---`
    - Tag-like text (hashtags, mentions, dates, highlighted runs) becomes `[[tag]]`

Conversion never raises: missing or unrecognised nodes render as empty text.

Example:
    >>> converter = DocumentToMarkdownConverter()
    >>> converter.convert(document)
    '# Title\\n\\nMeet **Alice** at [[2024-01-15]]'

See Also:
    - `gdocs/styles.py` for text run decoration
    - `gdocs/tags.py` for tag detection
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError

from gdocs.list_tracker import ListNumberingTracker
from gdocs.models import (
    Document,
    Equation,
    FootnoteReference,
    HorizontalRule,
    InlineObjectElement,
    PageBreak,
    Paragraph,
    ParagraphElement,
    ParagraphStyle,
    SectionBreak,
    StructuralElement,
    Table,
    TableOfContents,
    TextRun,
)
from gdocs.styles import render_text_run
from gdocs.tags import convert_tags

logger = logging.getLogger(__name__)

# Named paragraph styles rendered as Markdown headings
HEADING_PREFIX_MAP: dict[str, str] = {
    "HEADING_1": "#",
    "HEADING_2": "##",
    "HEADING_3": "###",
    "HEADING_4": "####",
    "HEADING_5": "#####",
    "HEADING_6": "######",
    "TITLE": "#",
    "SUBTITLE": "##",
}

# Paragraph alignment -> HTML align attribute (START is the default and is not wrapped)
ALIGNMENT_MAP: dict[str, str] = {
    "CENTER": "center",
    "END": "right",
    "JUSTIFIED": "justify",
}

TOC_PLACEHOLDER = "\n[TOC]\n"
SECTION_BREAK_MARKDOWN = "\n---\n"
PAGE_BREAK_MARKDOWN = "\n\n---\n\n"
EQUATION_PLACEHOLDER = "`[Math Equation]`"
DEFAULT_IMAGE_TITLE = "Image"
DEFAULT_EMBEDDED_OBJECT_TITLE = "Embedded Object"

LIST_INDENT = "  "
LINE_BREAK_TAG = "<br>"

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class DocumentToMarkdownConverter:
    """
    Converts a Google Docs `Document` into a Markdown string.

    The converter holds no per-document state: the document and the list
    numbering tracker are passed down the traversal, so one instance can be
    shared freely. Each `convert()` call creates its own tracker, and every
    table cell gets a fresh one.

    Example:
        >>> DocumentToMarkdownConverter().convert({"body": {"content": []}})
        ''
    """

    def convert(self, document: Document | dict[str, Any]) -> str:
        """
        Render a document (model or raw API dict) as Markdown.

        Args:
            document: A `Document`, or the JSON returned by `documents().get()`.

        Returns:
            The Markdown text; empty for an empty or unreadable document.
        """
        if not isinstance(document, Document):
            try:
                document = Document.model_validate(document)
            except ValidationError as e:
                logger.warning(f"Document does not match the Docs schema, rendering as empty: {e}")
                return ""

        if not document.content:
            return ""

        tracker = ListNumberingTracker()
        lines: list[str] = []
        for element in document.content:
            markdown = self._convert_structural_element(element, tracker, document)
            if markdown:
                lines.append(markdown)

        result = "\n".join(lines).strip()
        return self._collapse_newlines(result)

    @staticmethod
    def _collapse_newlines(text: str) -> str:
        """Keep two newlines of any longer run and turn the rest into <br> tags."""
        return _EXCESS_NEWLINES.sub(lambda m: "\n\n" + LINE_BREAK_TAG * (len(m.group(0)) - 2), text)

    def _convert_structural_element(
        self,
        element: StructuralElement,
        tracker: ListNumberingTracker,
        document: Document,
    ) -> str:
        variant = element.variant
        if isinstance(variant, Paragraph):
            return self._convert_paragraph(variant, tracker, document)
        elif isinstance(variant, Table):
            return self._convert_table(variant, document)
        elif isinstance(variant, TableOfContents):
            return TOC_PLACEHOLDER
        elif isinstance(variant, SectionBreak):
            return SECTION_BREAK_MARKDOWN

        logger.debug("Skipping unrecognised structural element")
        return ""

    def _convert_paragraph(self, paragraph: Paragraph, tracker: ListNumberingTracker, document: Document) -> str:
        if not paragraph.elements:
            return ""

        if paragraph.bullet is not None:
            return self._convert_list_item(paragraph, tracker, document)

        # Any non-list paragraph ends the current list run
        tracker.reset()

        content = self._convert_inline_content(paragraph, document)
        if not content:
            return ""

        # Trailing newline: joined with "\n", paragraphs end up separated by a blank line
        return self._apply_paragraph_style(content, paragraph.paragraph_style) + "\n"

    def _convert_list_item(self, paragraph: Paragraph, tracker: ListNumberingTracker, document: Document) -> str:
        bullet = paragraph.bullet
        nesting_level = (bullet.nesting_level or 0) if bullet else 0
        list_id = (bullet.list_id or "") if bullet else ""

        doc_list = document.lists.get(list_id) if list_id else None
        level_props = doc_list.nesting_level(nesting_level) if doc_list else None
        is_numbered = level_props is not None and level_props.is_numbered
        indent = LIST_INDENT * nesting_level

        content = self._convert_inline_content(paragraph, document)
        if not content:
            return ""

        if is_numbered:
            number = tracker.next_number(list_id, nesting_level)
            logger.debug(f"List item: list={list_id!r}, level={nesting_level}, number={number}")
            return f"{indent}{number}. {content}"
        return f"{indent}- {content}"

    def _convert_inline_content(self, paragraph: Paragraph, document: Document) -> str:
        """Render, trim and tag the paragraph's inline elements."""
        content = "".join(self._convert_paragraph_element(pe, document) for pe in paragraph.elements).strip()
        if not content:
            return ""
        return convert_tags(content)

    def _convert_paragraph_element(self, element: ParagraphElement, document: Document) -> str:
        variant = element.variant
        if isinstance(variant, TextRun):
            return render_text_run(variant)
        elif isinstance(variant, InlineObjectElement):
            return self._convert_inline_object(variant, document)
        elif isinstance(variant, (PageBreak, HorizontalRule)):
            return PAGE_BREAK_MARKDOWN
        elif isinstance(variant, FootnoteReference):
            return f"[^{variant.footnote_id or ''}]"
        elif isinstance(variant, Equation):
            return EQUATION_PLACEHOLDER

        return ""

    def _convert_inline_object(self, element: InlineObjectElement, document: Document) -> str:
        if not element.inline_object_id:
            return ""

        inline_object = document.inline_objects.get(element.inline_object_id)
        embedded = inline_object.embedded_object if inline_object else None
        if embedded is None:
            logger.debug(f"Unresolved inline object: {element.inline_object_id}")
            return ""

        if embedded.image_properties is not None:
            title = embedded.title or DEFAULT_IMAGE_TITLE
            content_uri = embedded.image_properties.content_uri
            return f"![{title}]({content_uri})" if content_uri else f"[{title}]"

        return f"[{embedded.title or DEFAULT_EMBEDDED_OBJECT_TITLE}]"

    def _convert_table(self, table: Table, document: Document) -> str:
        markdown_rows: list[str] = []

        for row in table.table_rows:
            if not row.table_cells:
                continue

            cells: list[str] = []
            for cell in row.table_cells:
                # Lists inside a cell are numbered independently of the outer document
                cell_tracker = ListNumberingTracker()
                cell_content = "".join(
                    self._convert_structural_element(element, cell_tracker, document) for element in cell.content
                )
                cell_content = cell_content.replace("\n", " ").strip()
                cells.append(cell_content or " ")

            markdown_rows.append(f"| {' | '.join(cells)} |")

            if len(markdown_rows) == 1:
                markdown_rows.append("|" + " --- |" * len(cells))

        if not markdown_rows:
            return ""
        return "\n" + "\n".join(markdown_rows) + "\n"

    @staticmethod
    def _apply_paragraph_style(content: str, style: ParagraphStyle | None) -> str:
        if style is None:
            return content

        prefix = HEADING_PREFIX_MAP.get(style.named_style_type or "")
        if prefix:
            return f"{prefix} {content}"

        if style.alignment and style.alignment != "START":
            alignment = ALIGNMENT_MAP.get(style.alignment)
            if alignment:
                return f'<div align="{alignment}">{content}</div>'

        return content


def convert_document_to_markdown(document: Document | dict[str, Any]) -> str:
    """Render a Google Docs document (model or raw API dict) as Markdown."""
    return DocumentToMarkdownConverter().convert(document)
