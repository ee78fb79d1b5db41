"""
Google Docs document model.

Pydantic models mirroring the subset of the Google Docs API `Document` JSON that
the Markdown converters read and write. Field names are snake_case in Python and
camelCase on the wire (`textRun`, `namedStyleType`, ...).

Every field is optional and unknown fields are ignored. A `null` value counts as
an absent field, so one null node degrades to its default instead of failing the
whole document. A raw `documents().get()` response validates as-is and sparsely
populated fixtures validate too.

Two node kinds are tagged unions in the API: `StructuralElement` (paragraph,
table, table of contents, section break) and `ParagraphElement` (text run,
inline object, page break, footnote reference, horizontal rule, equation).
Exactly one field is populated per node; the `variant` property returns it.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class DocsModel(BaseModel):
    """Base model: camelCase aliases, extra fields ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat a JSON `null` like an absent field, so the field default applies."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# =============================================================================
# Text styling
# =============================================================================


class RgbColor(DocsModel):
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0


class Color(DocsModel):
    rgb_color: RgbColor | None = None


class OptionalColor(DocsModel):
    color: Color | None = None

    @property
    def rgb(self) -> RgbColor | None:
        return self.color.rgb_color if self.color else None


class WeightedFontFamily(DocsModel):
    font_family: str | None = None
    weight: int | None = None


class Link(DocsModel):
    url: str | None = None


class TextStyle(DocsModel):
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    weighted_font_family: WeightedFontFamily | None = None
    link: Link | None = None
    background_color: OptionalColor | None = None
    foreground_color: OptionalColor | None = None

    @property
    def font_family(self) -> str | None:
        return self.weighted_font_family.font_family if self.weighted_font_family else None

    @property
    def link_url(self) -> str | None:
        return self.link.url if self.link else None


# =============================================================================
# Paragraph elements
# =============================================================================


class TextRun(DocsModel):
    content: str = ""
    text_style: TextStyle | None = None


class InlineObjectElement(DocsModel):
    inline_object_id: str | None = None


class PageBreak(DocsModel):
    pass


class FootnoteReference(DocsModel):
    footnote_id: str | None = None


class HorizontalRule(DocsModel):
    pass


class Equation(DocsModel):
    pass


ParagraphElementVariant = TextRun | InlineObjectElement | PageBreak | FootnoteReference | HorizontalRule | Equation


class ParagraphElement(DocsModel):
    start_index: int | None = None
    end_index: int | None = None
    text_run: TextRun | None = None
    inline_object_element: InlineObjectElement | None = None
    page_break: PageBreak | None = None
    footnote_reference: FootnoteReference | None = None
    horizontal_rule: HorizontalRule | None = None
    equation: Equation | None = None

    @property
    def variant(self) -> ParagraphElementVariant | None:
        """The populated variant, or None for an unrecognised element."""
        for value in (
            self.text_run,
            self.inline_object_element,
            self.page_break,
            self.footnote_reference,
            self.horizontal_rule,
            self.equation,
        ):
            if value is not None:
                return value
        return None


# =============================================================================
# Paragraphs and structural elements
# =============================================================================


class Bullet(DocsModel):
    list_id: str | None = None
    nesting_level: int | None = None


class ParagraphStyle(DocsModel):
    named_style_type: str | None = None
    alignment: str | None = None


class Paragraph(DocsModel):
    elements: list[ParagraphElement] = Field(default_factory=list)
    bullet: Bullet | None = None
    paragraph_style: ParagraphStyle | None = None


class TableCell(DocsModel):
    content: list[StructuralElement] = Field(default_factory=list)


class TableRow(DocsModel):
    table_cells: list[TableCell] = Field(default_factory=list)


class Table(DocsModel):
    rows: int | None = None
    columns: int | None = None
    table_rows: list[TableRow] = Field(default_factory=list)


class TableOfContents(DocsModel):
    content: list[StructuralElement] = Field(default_factory=list)


class SectionBreak(DocsModel):
    pass


StructuralElementVariant = Paragraph | Table | TableOfContents | SectionBreak


class StructuralElement(DocsModel):
    start_index: int | None = None
    end_index: int | None = None
    paragraph: Paragraph | None = None
    table: Table | None = None
    table_of_contents: TableOfContents | None = None
    section_break: SectionBreak | None = None

    @property
    def variant(self) -> StructuralElementVariant | None:
        """The populated variant, or None for an unrecognised element."""
        for value in (self.paragraph, self.table, self.table_of_contents, self.section_break):
            if value is not None:
                return value
        return None


# =============================================================================
# Lists and inline objects
# =============================================================================

# Glyph types the Docs API renders as ordinals; everything else is a bullet
NUMBERED_GLYPH_TYPES: frozenset[str] = frozenset(
    {
        "DECIMAL",
        "DECIMAL_NESTED",
        "UPPER_ALPHA",
        "ALPHA",
        "UPPER_ROMAN",
        "ROMAN",
        "ZERO_DECIMAL",
    }
)


class NestingLevel(DocsModel):
    glyph_type: str | None = None
    glyph_symbol: str | None = None

    @property
    def is_numbered(self) -> bool:
        return self.glyph_type in NUMBERED_GLYPH_TYPES


class ListProperties(DocsModel):
    nesting_levels: list[NestingLevel] = Field(default_factory=list)


class DocumentList(DocsModel):
    list_properties: ListProperties | None = None

    def nesting_level(self, level: int) -> NestingLevel | None:
        if self.list_properties is None:
            return None
        levels = self.list_properties.nesting_levels
        if 0 <= level < len(levels):
            return levels[level]
        return None


class ImageProperties(DocsModel):
    content_uri: str | None = None
    source_uri: str | None = None


class EmbeddedObject(DocsModel):
    title: str | None = None
    description: str | None = None
    image_properties: ImageProperties | None = None


class InlineObjectProperties(DocsModel):
    embedded_object: EmbeddedObject | None = None


class InlineObject(DocsModel):
    object_id: str | None = None
    inline_object_properties: InlineObjectProperties | None = None

    @property
    def embedded_object(self) -> EmbeddedObject | None:
        props = self.inline_object_properties
        return props.embedded_object if props else None


# =============================================================================
# Documents
# =============================================================================


class Body(DocsModel):
    content: list[StructuralElement] = Field(default_factory=list)


class Document(DocsModel):
    document_id: str | None = None
    title: str | None = None
    revision_id: str | None = None
    body: Body | None = None
    lists: dict[str, DocumentList] = Field(default_factory=dict)
    inline_objects: dict[str, InlineObject] = Field(default_factory=dict)

    @property
    def content(self) -> list[StructuralElement]:
        return self.body.content if self.body else []

    @property
    def end_index(self) -> int:
        """Largest `endIndex` in the body, or 1 for an empty body."""
        return max((element.end_index or 0 for element in self.content), default=0) or 1


class DocumentContent(DocsModel):
    """Structural elements parsed from Markdown, ready to be written to a document."""

    title: str | None = None
    content: list[StructuralElement] = Field(default_factory=list)

    def to_api_payload(self) -> dict[str, Any]:
        """Dump as camelCase JSON, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


for _model in (TableCell, TableRow, Table, TableOfContents, StructuralElement, Body, Document, DocumentContent):
    _model.model_rebuild()
