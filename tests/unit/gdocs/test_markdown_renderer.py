"""
Unit tests for DocumentToMarkdownConverter.

Documents are built as raw Docs API JSON, the same shape `documents().get()`
returns, so the tests also exercise model validation.
"""

import pytest

from gdocs.markdown_parser import convert_markdown_to_document
from gdocs.markdown_renderer import DocumentToMarkdownConverter, convert_document_to_markdown
from gdocs.models import Document

NUMBERED_LIST = {"listProperties": {"nestingLevels": [{"glyphType": "DECIMAL"}] * 3}}
BULLETED_LIST = {"listProperties": {"nestingLevels": [{"glyphSymbol": "●"}] * 3}}

YELLOW = {"color": {"rgbColor": {"red": 1.0, "green": 1.0}}}
BLUE_TEXT = {"color": {"rgbColor": {"red": 0.1, "green": 0.2, "blue": 0.9}}}


def run(content, **style):
    return {"textRun": {"content": content, "textStyle": style}}


def para(*elements, style=None, bullet=None):
    paragraph = {"elements": list(elements)}
    if style:
        paragraph["paragraphStyle"] = style
    if bullet:
        paragraph["bullet"] = bullet
    return {"paragraph": paragraph}


def item(text, list_id="l1", level=None):
    bullet = {"listId": list_id}
    if level is not None:
        bullet["nestingLevel"] = level
    return para(run(f"{text}\n"), bullet=bullet)


def table(*rows):
    return {
        "table": {
            "rows": len(rows),
            "columns": len(rows[0]) if rows else 0,
            "tableRows": [{"tableCells": [{"content": cell} for cell in row]} for row in rows],
        }
    }


def doc(*content, lists=None, inline_objects=None):
    return {
        "documentId": "doc123",
        "title": "Test",
        "body": {"content": list(content)},
        "lists": lists or {},
        "inlineObjects": inline_objects or {},
    }


@pytest.fixture
def converter():
    return DocumentToMarkdownConverter()


class TestConverterBasics:
    def test_empty_document_returns_empty_string(self, converter):
        assert converter.convert({}) == ""
        assert converter.convert(doc()) == ""

    def test_invalid_document_returns_empty_string(self, converter):
        assert converter.convert({"body": {"content": "not a list"}}) == ""

    def test_null_lists_keep_the_document(self, converter):
        data = doc(para(run("keep me\n")))
        data["lists"] = None
        data["inlineObjects"] = None
        assert converter.convert(data) == "keep me"

    def test_null_node_only_drops_that_node(self, converter):
        data = doc({"paragraph": {"elements": None}}, para(run("keep me\n")))
        assert converter.convert(data) == "keep me"

    def test_null_text_style_renders_plain(self, converter):
        data = doc(para({"textRun": {"content": "plain\n", "textStyle": None}}))
        assert converter.convert(data) == "plain"

    def test_accepts_document_model(self, converter):
        document = Document.model_validate(doc(para(run("Hello world\n"))))
        assert converter.convert(document) == "Hello world"

    def test_module_function_matches_converter(self):
        data = doc(para(run("Hello world\n")))
        assert convert_document_to_markdown(data) == DocumentToMarkdownConverter().convert(data)

    def test_unknown_structural_element_is_skipped(self, converter):
        data = doc({"startIndex": 1, "endIndex": 2}, para(run("Text\n")))
        assert converter.convert(data) == "Text"

    def test_converter_is_reusable(self, converter):
        data = doc(item("one"), item("two"), lists={"l1": NUMBERED_LIST})
        assert converter.convert(data) == converter.convert(data) == "1. one\n2. two"


class TestParagraphs:
    def test_plain_paragraphs_are_separated_by_blank_line(self, converter):
        data = doc(para(run("First\n")), para(run("Second\n")))
        assert converter.convert(data) == "First\n\nSecond"

    def test_empty_paragraphs_are_skipped(self, converter):
        data = doc(para(run("First\n")), para(run("\n")), para(run("Second\n")))
        assert converter.convert(data) == "First\n\nSecond"

    def test_heading_levels(self, converter):
        for level in range(1, 7):
            data = doc(para(run("Heading\n"), style={"namedStyleType": f"HEADING_{level}"}))
            assert converter.convert(data) == f"{'#' * level} Heading"

    def test_title_and_subtitle(self, converter):
        data = doc(
            para(run("Doc\n"), style={"namedStyleType": "TITLE"}),
            para(run("Sub\n"), style={"namedStyleType": "SUBTITLE"}),
        )
        assert converter.convert(data) == "# Doc\n\n## Sub"

    def test_normal_text_style_is_plain(self, converter):
        data = doc(para(run("Body\n"), style={"namedStyleType": "NORMAL_TEXT"}))
        assert converter.convert(data) == "Body"

    @pytest.mark.parametrize(
        ("alignment", "expected"),
        [("CENTER", "center"), ("END", "right"), ("JUSTIFIED", "justify")],
    )
    def test_alignment_wraps_in_div(self, converter, alignment, expected):
        data = doc(para(run("Text\n"), style={"alignment": alignment}))
        assert converter.convert(data) == f'<div align="{expected}">Text</div>'

    def test_start_alignment_is_not_wrapped(self, converter):
        data = doc(para(run("Text\n"), style={"alignment": "START"}))
        assert converter.convert(data) == "Text"

    def test_heading_wins_over_alignment(self, converter):
        data = doc(para(run("Title\n"), style={"namedStyleType": "HEADING_2", "alignment": "CENTER"}))
        assert converter.convert(data) == "## Title"

    def test_excess_newlines_become_line_breaks(self, converter):
        data = doc(para(run("a\n\n\n\n\nb\n")))
        assert converter.convert(data) == "a\n\n<br><br><br>b"

    def test_three_newlines_become_one_line_break(self, converter):
        data = doc(para(run("a\n\n\nb\n")))
        assert converter.convert(data) == "a\n\n<br>b"


class TestInlineStyles:
    def test_end_to_end_bold_and_date_tag(self, converter):
        data = doc(para(run("Meet "), run("Alice", bold=True), run(" at 2024-01-15\n")))
        assert converter.convert(data) == "Meet **Alice** at [[2024-01-15]]"

    def test_bold_italic(self, converter):
        assert converter.convert(doc(para(run("both", bold=True, italic=True)))) == "***both***"

    def test_italic(self, converter):
        assert converter.convert(doc(para(run("it", italic=True)))) == "*it*"

    def test_trailing_star_is_escaped(self, converter):
        assert converter.convert(doc(para(run("done*", bold=True)))) == "**done\\***"

    def test_link_wraps_other_styles(self, converter):
        data = doc(para(run("text", bold=True, link={"url": "https://example.com"})))
        assert converter.convert(data) == "[**text**](https://example.com)"

    def test_underline_and_strikethrough(self, converter):
        data = doc(para(run("x", underline=True, strikethrough=True)))
        assert converter.convert(data) == "~~<u>x</u>~~"

    @pytest.mark.parametrize("font", ["Courier New", "Consolas", "Monaco"])
    def test_code_fonts_become_backticks(self, converter, font):
        data = doc(para(run("code", weightedFontFamily={"fontFamily": font})))
        assert converter.convert(data) == "`code`"

    def test_other_fonts_are_plain(self, converter):
        data = doc(para(run("text", weightedFontFamily={"fontFamily": "Arial"})))
        assert converter.convert(data) == "text"

    def test_styles_apply_per_line(self, converter):
        data = doc(para(run("a\nb\n", bold=True)))
        assert converter.convert(data) == "**a**\n**b**"


class TestTags:
    def test_hashtags_and_mentions(self, converter):
        data = doc(para(run("Ping @bob about #launch\n")))
        assert converter.convert(data) == "Ping [[bob]] about [[launch]]"

    def test_highlighted_run_is_wrapped_whole(self, converter):
        data = doc(para(run("foo", backgroundColor=YELLOW)))
        assert converter.convert(data) == "[[foo]]"

    def test_highlighted_date_is_tagged_once(self, converter):
        data = doc(para(run("May 5, 2024", backgroundColor=YELLOW)))
        assert converter.convert(data) == "[[May 5, 2024]]"

    def test_blue_text_hashtag(self, converter):
        data = doc(para(run("Topic "), run("#project", foregroundColor=BLUE_TEXT)))
        assert converter.convert(data) == "Topic [[project]]"

    def test_link_target_is_not_rewritten(self, converter):
        data = doc(para(run("see", link={"url": "https://example.com/#anchor"})))
        assert converter.convert(data) == "[see](https://example.com/#anchor)"


class TestLists:
    def test_numbered_items_are_renumbered(self, converter):
        data = doc(item("one"), item("two"), item("three"), lists={"l1": NUMBERED_LIST})
        assert converter.convert(data) == "1. one\n2. two\n3. three"

    def test_plain_paragraph_restarts_numbering(self, converter):
        data = doc(item("one"), item("two"), para(run("Break\n")), item("again"), lists={"l1": NUMBERED_LIST})
        assert converter.convert(data) == "1. one\n2. two\nBreak\n\n1. again"

    def test_empty_line_paragraph_restarts_numbering(self, converter):
        data = doc(item("one"), para(run("\n")), item("again"), lists={"l1": NUMBERED_LIST})
        assert converter.convert(data) == "1. one\n1. again"

    def test_paragraph_without_elements_keeps_numbering(self, converter):
        data = doc(item("one"), para(), item("two"), lists={"l1": NUMBERED_LIST})
        assert converter.convert(data) == "1. one\n2. two"

    def test_nested_levels_restart_under_new_parent(self, converter):
        data = doc(
            item("a", level=0),
            item("b", level=1),
            item("c", level=1),
            item("d", level=0),
            item("e", level=1),
            lists={"l1": NUMBERED_LIST},
        )
        assert converter.convert(data) == "1. a\n  1. b\n  2. c\n2. d\n  1. e"

    def test_bulleted_list(self, converter):
        data = doc(item("x", "b1"), item("y", "b1", level=1), lists={"b1": BULLETED_LIST})
        assert converter.convert(data) == "- x\n  - y"

    def test_unknown_list_is_bulleted(self, converter):
        assert converter.convert(doc(item("x", "missing"))) == "- x"

    def test_separate_lists_count_independently(self, converter):
        data = doc(item("a", "l1"), item("b", "l2"), item("c", "l1"), lists={"l1": NUMBERED_LIST, "l2": NUMBERED_LIST})
        assert converter.convert(data) == "1. a\n1. b\n2. c"

    def test_list_item_content_is_tagged(self, converter):
        data = doc(item("review #launch", "b1"), lists={"b1": BULLETED_LIST})
        assert converter.convert(data) == "- review [[launch]]"


class TestTables:
    def test_table_with_header_separator(self, converter):
        data = doc(
            table(
                [[para(run("Name\n"))], [para(run("Age\n"))]],
                [[para(run("Ann\n"))], [para(run("30\n"))]],
            )
        )
        assert converter.convert(data) == "| Name | Age |\n| --- | --- |\n| Ann | 30 |"

    def test_empty_cell_renders_as_space(self, converter):
        data = doc(table([[para(run("\n"))], [para(run("x\n"))]]))
        assert converter.convert(data) == "|   | x |\n| --- | --- |"

    def test_multi_paragraph_cell_is_one_line(self, converter):
        data = doc(table([[para(run("one\n")), para(run("two\n"))]]))
        assert converter.convert(data) == "| one two |\n| --- |"

    def test_cell_lists_number_independently(self, converter):
        data = doc(
            item("a"),
            table([[item("x")]]),
            item("b"),
            lists={"l1": NUMBERED_LIST},
        )
        assert converter.convert(data) == "1. a\n\n| 1. x |\n| --- |\n\n2. b"

    def test_table_without_rows_is_skipped(self, converter):
        data = doc(para(run("Text\n")), {"table": {"rows": 0, "columns": 0, "tableRows": []}})
        assert converter.convert(data) == "Text"


class TestOtherElements:
    def test_section_break(self, converter):
        data = doc({"endIndex": 1, "sectionBreak": {}}, para(run("Hello\n")))
        assert converter.convert(data) == "---\n\nHello"

    def test_table_of_contents(self, converter):
        assert converter.convert(doc({"tableOfContents": {"content": []}})) == "[TOC]"

    def test_page_break(self, converter):
        data = doc(para(run("Before"), {"pageBreak": {}}, run("After\n")))
        assert converter.convert(data) == "Before\n\n---\n\nAfter"

    def test_horizontal_rule(self, converter):
        data = doc(para(run("Above"), {"horizontalRule": {}}, run("Below\n")))
        assert converter.convert(data) == "Above\n\n---\n\nBelow"

    def test_footnote_reference(self, converter):
        data = doc(para(run("Claim"), {"footnoteReference": {"footnoteId": "fn1"}}))
        assert converter.convert(data) == "Claim[^fn1]"

    def test_equation(self, converter):
        data = doc(para(run("E = "), {"equation": {}}))
        assert converter.convert(data) == "E = `[Math Equation]`"


class TestInlineObjects:
    def _doc_with_object(self, embedded):
        return doc(
            para({"inlineObjectElement": {"inlineObjectId": "obj1"}}),
            inline_objects={"obj1": {"objectId": "obj1", "inlineObjectProperties": {"embeddedObject": embedded}}},
        )

    def test_image_with_uri(self, converter):
        data = self._doc_with_object({"title": "Chart", "imageProperties": {"contentUri": "https://img/1"}})
        assert converter.convert(data) == "![Chart](https://img/1)"

    def test_image_default_title(self, converter):
        data = self._doc_with_object({"imageProperties": {"contentUri": "https://img/1"}})
        assert converter.convert(data) == "![Image](https://img/1)"

    def test_image_without_uri(self, converter):
        data = self._doc_with_object({"imageProperties": {}})
        assert converter.convert(data) == "[Image]"

    def test_non_image_object(self, converter):
        assert converter.convert(self._doc_with_object({"title": "Drawing"})) == "[Drawing]"
        assert converter.convert(self._doc_with_object({})) == "[Embedded Object]"

    def test_unresolved_object_renders_nothing(self, converter):
        data = doc(para(run("Before "), {"inlineObjectElement": {"inlineObjectId": "missing"}}))
        assert converter.convert(data) == "Before"


class TestRoundTrip:
    def _round_trip(self, markdown):
        content = convert_markdown_to_document(markdown).to_api_payload()["content"]
        return convert_document_to_markdown({"body": {"content": content}})

    def test_table_round_trip(self):
        markdown = "| Name | Age |\n| --- | --- |\n| Ann | 30 |"
        assert self._round_trip(markdown) == markdown

    def test_styled_paragraph_round_trip(self):
        markdown = "Meet **Alice** at [[2024-01-15]]"
        assert self._round_trip(markdown) == markdown

    def test_heading_round_trip(self):
        assert self._round_trip("## Plans") == "## Plans"
