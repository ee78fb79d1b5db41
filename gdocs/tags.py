"""
Tag heuristics for Google Docs text.

Notes use `[[tag]]` wiki-link syntax. Google Docs has no such concept, so tags
are recovered two ways when a document is rendered to Markdown:

- Pattern rewriting: `#word`, `@word` and common date formats in plain text
  become `[[word]]` / `[[date]]`.
- Visual hints: a run that is highlighted (yellow/green/blue background) or
  written in blue/purple text is treated as a tag.

The color thresholds are fixed; changing them changes which runs are tagged.
"""

from __future__ import annotations

import re

from gdocs.models import RgbColor, TextStyle

# Background highlight detection: "strong" channels must exceed the minimum,
# "weak" channels must stay below the maximum.
HIGHLIGHT_MIN_CHANNEL = 0.8
HIGHLIGHT_MAX_CHANNEL = 0.3

# Foreground (text color) detection for blue/purple tag text
TAG_TEXT_MIN_BLUE = 0.6
TAG_TEXT_MAX_RED_GREEN = 0.4

_WORD = r"[a-zA-Z0-9_-]+"

_LONG_MONTHS = "January|February|March|April|May|June|July|August|September|October|November|December"
_SHORT_MONTHS = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"

# Applied in order; each pattern's group 1 is wrapped in [[...]]
TAG_PATTERNS: list[re.Pattern[str]] = [
    re.compile(rf"#({_WORD})"),
    re.compile(rf"@({_WORD})"),
    re.compile(r"\b(\d{4}-\d{2}-\d{2})\b"),
    re.compile(r"\b(\d{1,2}/\d{1,2}/\d{4})\b"),
    re.compile(r"\b(\d{1,2}-\d{1,2}-\d{4})\b"),
    re.compile(rf"\b((?:{_LONG_MONTHS})\s+\d{{1,2}},?\s+\d{{4}})\b", re.IGNORECASE),
    re.compile(rf"\b((?:{_SHORT_MONTHS})\s+\d{{1,2}},?\s+\d{{4}})\b", re.IGNORECASE),
]

# Spans the rewriter must not touch: existing tags and link targets
_PROTECTED_SPAN = re.compile(r"\[\[.*?\]\]|\]\([^)]*\)")


def _is_highlight(bg: RgbColor) -> bool:
    strong = HIGHLIGHT_MIN_CHANNEL
    weak = HIGHLIGHT_MAX_CHANNEL
    if bg.red > strong and bg.green > strong and bg.blue < weak:  # yellow
        return True
    if bg.red < weak and bg.green > strong and bg.blue < weak:  # green
        return True
    if bg.red < weak and bg.green < weak and bg.blue > strong:  # blue
        return True
    return False


def _is_tag_text_color(fg: RgbColor) -> bool:
    return fg.blue > TAG_TEXT_MIN_BLUE and fg.red < TAG_TEXT_MAX_RED_GREEN and fg.green < TAG_TEXT_MAX_RED_GREEN


def is_tag_formatting(style: TextStyle | None) -> bool:
    """Return True if the run's highlight or text color marks it as a tag."""
    if style is None:
        return False

    bg = style.background_color.rgb if style.background_color else None
    if bg is not None and _is_highlight(bg):
        return True

    fg = style.foreground_color.rgb if style.foreground_color else None
    if fg is not None and _is_tag_text_color(fg):
        return True

    return False


def _sub_unprotected(pattern: re.Pattern[str], text: str) -> str:
    pieces: list[str] = []
    last_end = 0
    for match in _PROTECTED_SPAN.finditer(text):
        pieces.append(pattern.sub(r"[[\1]]", text[last_end : match.start()]))
        pieces.append(match.group(0))
        last_end = match.end()
    pieces.append(pattern.sub(r"[[\1]]", text[last_end:]))
    return "".join(pieces)


def convert_tags(text: str) -> str:
    """
    Rewrite hashtags, mentions and dates in `text` into `[[tag]]` syntax.

    Existing `[[...]]` tags and Markdown link targets are left untouched, so the
    rewrite can be applied more than once to the same text.

    Example:
        >>> convert_tags("Meet @alice on 2024-01-15 #planning")
        'Meet [[alice]] on [[2024-01-15]] [[planning]]'
    """
    if not text:
        return text

    for pattern in TAG_PATTERNS:
        text = _sub_unprotected(pattern, text)
    return text


def wrap_as_tag(text: str) -> str:
    """Wrap the non-whitespace part of each line in `[[...]]`, keeping surrounding whitespace."""
    lines = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped or (stripped.startswith("[[") and stripped.endswith("]]")):
            lines.append(line)
            continue
        start = line.index(stripped)
        lines.append(f"{line[:start]}[[{stripped}]]{line[start + len(stripped) :]}")
    return "\n".join(lines)


def tag_run_text(text: str) -> str:
    """
    Tag the text of a run styled as a tag.

    Recognised patterns are rewritten in place; a run with no recognised pattern
    is a tag in its own right and is wrapped whole.
    """
    rewritten = convert_tags(text)
    if rewritten != text:
        return rewritten
    return wrap_as_tag(text)
