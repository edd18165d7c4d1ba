# tests/unit/utilities/test_markdown_builder.py

import pytest

from blackduck_report.utilities.markdown_builder import (
    BulletList,
    CheckListItem,
    Document,
    Emphasis,
    Header,
    HorizontalRule,
    InlineCode,
    Paragraph,
    Table,
    TableHeader,
    TableHeaderCell,
    TableRow,
    TableTextAlignment,
    Text,
)


# --- Inline elements ---
def test_text_concatenates_fragments():
    text = Text("Critical: ").append(Emphasis("high", "_")).append(InlineCode(3))
    assert str(text) == "Critical: _high_`3`"


def test_emphasis_rejects_unknown_char():
    with pytest.raises(ValueError):
        Emphasis("x", "~")


# --- Headers ---
@pytest.mark.parametrize("level", [1, 3, 6])
def test_header_levels(level):
    assert str(Header("Title", level)) == "#" * level + " Title\n"


@pytest.mark.parametrize("level", [0, 7])
def test_header_level_out_of_range(level):
    with pytest.raises(ValueError):
        Header("Title", level)


# --- Tables ---
def test_table_renders_header_alignment_and_rows_in_order():
    table = Table(
        TableHeader(
            TableHeaderCell("Name"),
            TableHeaderCell("Left", TableTextAlignment.LEFT),
            TableHeaderCell("Center", TableTextAlignment.CENTER),
            TableHeaderCell("Right", TableTextAlignment.RIGHT),
        ),
        [TableRow("a", "b", "c", "d"), TableRow("e", "f", "g", "h")],
    )
    assert str(table) == (
        "| Name | Left | Center | Right |\n"
        "| --- | :--- | :---: | ---: |\n"
        "| a | b | c | d |\n"
        "| e | f | g | h |\n"
    )


def test_table_row_cell_count_mismatch_fails_construction():
    header = TableHeader("A", "B")
    with pytest.raises(ValueError, match="same number of cells"):
        Table(header, [TableRow("only one")])
    with pytest.raises(ValueError, match="same number of cells"):
        Table(header).add_row(TableRow("1", "2", "3"))


def test_table_add_rows_is_all_or_nothing():
    table = Table(TableHeader("A"))
    with pytest.raises(ValueError):
        table.add_rows([TableRow("ok"), TableRow("too", "many")])
    assert table.rows == []


def test_table_header_needs_a_cell():
    with pytest.raises(ValueError):
        TableHeader()


def test_table_cell_escapes_pipes():
    table = Table(TableHeader("A"), [TableRow("a|b")])
    assert "| a\\|b |" in str(table)


# --- Lists, rules and paragraphs ---
def test_bullet_list_nesting():
    nested = BulletList(["child"], char="*")
    bullets = BulletList(["first", nested, CheckListItem(True, "done"), CheckListItem(False, "todo")])
    assert str(bullets) == "- first\n  * child\n- [x] done\n- [ ] todo\n"


def test_bullet_list_rejects_unknown_char():
    with pytest.raises(ValueError):
        BulletList(char="#")


def test_horizontal_rule():
    assert str(HorizontalRule("*")) == "***\n"
    with pytest.raises(ValueError):
        HorizontalRule("=")


# --- Document ---
def test_document_joins_blocks_with_blank_line():
    document = Document([Header("Title", 1), Paragraph("Body")])
    assert str(document) == "# Title\n\nBody\n"


def test_document_editing():
    first, second, third = Paragraph("1"), Paragraph("2"), Paragraph("3")
    document = Document().append(first).append(third).insert(1, second)
    assert [str(b) for b in document] == ["1\n", "2\n", "3\n"]

    replacement = Paragraph("two")
    document.replace(second, replacement).remove(0)
    assert len(document) == 2
    assert document[0] is replacement

    document.remove(third)
    assert len(document) == 1
