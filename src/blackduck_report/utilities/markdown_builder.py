"""
Minimal Markdown document model used to render the security report.

A ``Document`` is an ordered list of block elements (headers, paragraphs,
tables, lists, horizontal rules). Each block renders to one or more lines
ending in a newline; the document separates blocks with a blank line.

Tables are strict: every row must have exactly as many cells as the header,
otherwise construction fails with ``ValueError``.
"""

from enum import Enum
from typing import Iterator, List, Optional, Sequence, Union


# --- Inline elements ---

class InlineElement:
    """Base class for elements rendered inside a line."""

    def __str__(self) -> str:
        raise NotImplementedError


class Text(InlineElement):
    """Plain text made of one or more fragments (strings or inline elements)."""

    def __init__(self, text: Union[str, InlineElement] = ""):
        self._fragments: List[Union[str, InlineElement]] = [text]

    def append(self, fragment: Union[str, InlineElement]) -> "Text":
        self._fragments.append(fragment)
        return self

    def __str__(self) -> str:
        return "".join(str(fragment) for fragment in self._fragments)


class Emphasis(InlineElement):
    def __init__(self, text: Union[str, InlineElement], char: str = "*"):
        if char not in ("*", "_"):
            raise ValueError("Emphasis character must be either '*' or '_'.")
        self.text = text
        self.char = char

    def __str__(self) -> str:
        return f"{self.char}{self.text}{self.char}"


class InlineCode(InlineElement):
    def __init__(self, text: Union[str, InlineElement]):
        self.text = text

    def __str__(self) -> str:
        return f"`{self.text}`"


Inline = Union[str, InlineElement]


# --- Block elements ---

class BlockElement:
    """Base class for top level document elements."""

    def __str__(self) -> str:
        raise NotImplementedError


class Header(BlockElement):
    def __init__(self, text: Inline, level: int = 1):
        if level < 1 or level > 6:
            raise ValueError("Header level must be between 1 and 6.")
        self.text = text
        self.level = level

    def __str__(self) -> str:
        return f"{'#' * self.level} {str(self.text).strip()}\n"


class Paragraph(BlockElement):
    def __init__(self, text: Inline):
        self.text = text

    def __str__(self) -> str:
        return f"{self.text}\n"


class HorizontalRule(BlockElement):
    def __init__(self, char: str = "-"):
        if char not in ("-", "*", "_"):
            raise ValueError("Horizontal rule character must be either '-', '*', or '_'.")
        self.char = char

    def __str__(self) -> str:
        return self.char * 3 + "\n"


class TableTextAlignment(Enum):
    DEFAULT = "---"
    LEFT = ":---"
    CENTER = ":---:"
    RIGHT = "---:"


class TableHeaderCell:
    def __init__(self, text: Inline, alignment: TableTextAlignment = TableTextAlignment.DEFAULT):
        self.text = text
        self.alignment = alignment


def _cell_text(cell: Inline) -> str:
    # A raw pipe would split the cell
    return str(cell).replace("|", "\\|")


class TableHeader:
    def __init__(self, *cells: Union[TableHeaderCell, str]):
        if not cells:
            raise ValueError("Table header cells length must be greater than 0.")
        self.cells = tuple(c if isinstance(c, TableHeaderCell) else TableHeaderCell(c) for c in cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __str__(self) -> str:
        texts = "".join(f"| {_cell_text(cell.text)} " for cell in self.cells) + "|"
        alignments = "".join(f"| {cell.alignment.value} " for cell in self.cells) + "|"
        return f"{texts}\n{alignments}"


class TableRow:
    def __init__(self, *cells: Inline):
        self.cells = tuple(cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __str__(self) -> str:
        return "".join(f"| {_cell_text(cell)} " for cell in self.cells) + "|"


class Table(BlockElement):
    def __init__(self, header: TableHeader, rows: Optional[Sequence[TableRow]] = None):
        if header is None:
            raise ValueError("Table header must not be None.")
        self.header = header
        self._rows: List[TableRow] = []
        for row in rows or ():
            self.add_row(row)

    @property
    def column_count(self) -> int:
        return len(self.header)

    @property
    def rows(self) -> List[TableRow]:
        return list(self._rows)

    def add_row(self, row: TableRow) -> "Table":
        self._check_row(row)
        self._rows.append(row)
        return self

    def add_rows(self, rows: Sequence[TableRow]) -> "Table":
        # Validate everything first so a bad row leaves the table untouched
        for row in rows:
            self._check_row(row)
        self._rows.extend(rows)
        return self

    def _check_row(self, row: TableRow) -> None:
        if row is None:
            raise ValueError("Table row must not be None.")
        if len(row) != self.column_count:
            raise ValueError(
                f"Rows must have the same number of cells as headers "
                f"(expected {self.column_count}, got {len(row)})."
            )

    def __str__(self) -> str:
        lines = [str(self.header)] + [str(row) for row in self._rows]
        return "\n".join(lines) + "\n"


class CheckListItem(InlineElement):
    def __init__(self, checked: bool, text: Inline):
        self.checked = checked
        self.text = text

    def __str__(self) -> str:
        return f"[{'x' if self.checked else ' '}] {self.text}"


class BulletList(BlockElement):
    def __init__(self, items: Optional[Sequence[Union[Inline, "BulletList"]]] = None, char: str = "-"):
        if char not in ("-", "*", "+"):
            raise ValueError("Bullet point character must be either '-', '*', or '+'.")
        self.char = char
        self.items: List[Union[Inline, BulletList]] = list(items or [])

    def add_item(self, item: Union[Inline, "BulletList"]) -> "BulletList":
        self.items.append(item)
        return self

    def _render(self, level: int) -> str:
        lines = []
        for item in self.items:
            if isinstance(item, BulletList):
                lines.append(item._render(level + 1))
            else:
                lines.append(f"{'  ' * level}{self.char} {item}\n")
        return "".join(lines)

    def __str__(self) -> str:
        return self._render(0)


# --- Document ---

class Document:
    def __init__(self, blocks: Optional[Sequence[BlockElement]] = None):
        self._blocks: List[BlockElement] = list(blocks or [])

    def append(self, block: BlockElement) -> "Document":
        self._blocks.append(block)
        return self

    def insert(self, index: int, block: BlockElement) -> "Document":
        self._blocks.insert(index, block)
        return self

    def remove(self, block_or_index: Union[BlockElement, int]) -> "Document":
        if isinstance(block_or_index, int):
            del self._blocks[block_or_index]
        else:
            self._blocks.remove(block_or_index)
        return self

    def replace(self, old: BlockElement, new: BlockElement) -> "Document":
        self._blocks = [new if block is old else block for block in self._blocks]
        return self

    def clear(self) -> "Document":
        self._blocks.clear()
        return self

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[BlockElement]:
        return iter(self._blocks)

    def __getitem__(self, index: int) -> BlockElement:
        return self._blocks[index]

    def __str__(self) -> str:
        return "\n".join(str(block) for block in self._blocks)
