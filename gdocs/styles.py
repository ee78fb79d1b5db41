"""
Inline style rendering for Google Docs text runs.

Turns a `TextRun` and its `TextStyle` into Markdown-decorated text. Markers are
applied per physical line so that emphasis never straddles a line break, and
in a fixed order: emphasis, underline, strikethrough, code, then link, so a
link always wraps everything else (`[**text**](url)`).
"""

from __future__ import annotations

import logging

from gdocs.models import TextRun, TextStyle
from gdocs.tags import convert_tags, is_tag_formatting, tag_run_text

logger = logging.getLogger(__name__)

# Font families rendered as inline code
CODE_FONT_FAMILIES: frozenset[str] = frozenset({"Courier New", "Consolas", "Monaco"})


def _ends_with_unescaped_star(text: str) -> bool:
    return text.endswith("*") and (len(text) < 2 or text[-2] != "\\")


def apply_inline_styles(segment: str, style: TextStyle) -> str:
    """
    Decorate a single line of text with the Markdown markers for `style`.

    A trailing `*` is escaped before single-style emphasis is added, otherwise
    `**done***` would be read as a different marker sequence.
    """
    if not segment:
        return segment

    text = segment
    single_emphasis = style.bold != style.italic
    if single_emphasis and _ends_with_unescaped_star(text):
        text = text[:-1] + "\\*"

    if style.bold and style.italic:
        text = f"***{text}***"
    elif style.bold:
        text = f"**{text}**"
    elif style.italic:
        text = f"*{text}*"

    if style.underline:
        text = f"<u>{text}</u>"
    if style.strikethrough:
        text = f"~~{text}~~"
    if style.font_family in CODE_FONT_FAMILIES:
        text = f"`{text}`"

    url = style.link_url
    if url:
        text = f"[{text}]({url})"

    return text


def render_text_run(text_run: TextRun) -> str:
    """Render a text run as Markdown, tagging it first if its colors mark it as a tag."""
    if not text_run.content:
        return ""

    style = text_run.text_style
    text = text_run.content

    if is_tag_formatting(style):
        logger.debug(f"Tag-styled run: {text!r}")
        # Docs colors every hyperlink blue, so a linked run is never wrapped whole
        text = convert_tags(text) if style.link_url else tag_run_text(text)

    if style is None:
        return text

    return "\n".join(apply_inline_styles(line, style) for line in text.split("\n"))
