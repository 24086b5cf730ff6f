"""Document node types shared by parsed comments and generated pages.

Every node is a small dataclass tagged with a ``DocNodeKind``. Container
nodes keep their children in ``nodes``; which kinds may appear there is
decided by ``api_documenter.doc_node_grammar``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union


class DocNodeKind(str, Enum):
    """Tags for every node kind the builder and emitter know about."""

    SECTION = "Section"
    PARAGRAPH = "Paragraph"
    PLAIN_TEXT = "PlainText"
    ESCAPED_TEXT = "EscapedText"
    CODE_SPAN = "CodeSpan"
    FENCED_CODE = "FencedCode"
    LINK_TAG = "LinkTag"
    SOFT_BREAK = "SoftBreak"
    HEADING = "Heading"
    LIST = "List"
    NOTE_BOX = "NoteBox"
    TABLE = "Table"
    TABLE_ROW = "TableRow"
    TABLE_CELL = "TableCell"
    ANCHOR = "Anchor"
    EMPHASIS_SPAN = "EmphasisSpan"


@dataclass
class DocPlainText:
    """Literal text; escaped on output."""

    kind: ClassVar[DocNodeKind] = DocNodeKind.PLAIN_TEXT
    text: str


@dataclass
class DocEscapedText:
    """Text written with an escape sequence in the source comment."""

    kind: ClassVar[DocNodeKind] = DocNodeKind.ESCAPED_TEXT
    encoded_text: str
    decoded_text: str


@dataclass
class DocCodeSpan:
    kind: ClassVar[DocNodeKind] = DocNodeKind.CODE_SPAN
    code: str


@dataclass
class DocFencedCode:
    kind: ClassVar[DocNodeKind] = DocNodeKind.FENCED_CODE
    code: str
    language: str = ""


@dataclass
class DocLinkTag:
    """A link to a declaration reference, a URL, or just link text."""

    kind: ClassVar[DocNodeKind] = DocNodeKind.LINK_TAG
    code_destination: str | None = None
    url_destination: str | None = None
    link_text: str | None = None


@dataclass
class DocSoftBreak:
    kind: ClassVar[DocNodeKind] = DocNodeKind.SOFT_BREAK


@dataclass
class DocParagraph:
    kind: ClassVar[DocNodeKind] = DocNodeKind.PARAGRAPH
    nodes: list[DocNode] = field(default_factory=list)


@dataclass
class DocSection:
    kind: ClassVar[DocNodeKind] = DocNodeKind.SECTION
    nodes: list[DocNode] = field(default_factory=list)


@dataclass
class DocHeading:
    """A section header similar to an HTML ``<h1>`` or ``<h2>`` element."""

    kind: ClassVar[DocNodeKind] = DocNodeKind.HEADING
    title: str
    level: int = 1

    def __post_init__(self) -> None:
        if self.level < 1 or self.level > 5:
            msg = f"Heading level must be between 1 and 5, got {self.level}"
            raise ValueError(msg)


@dataclass
class DocList:
    kind: ClassVar[DocNodeKind] = DocNodeKind.LIST
    nodes: list[DocNode] = field(default_factory=list)


@dataclass
class DocNoteBox:
    """A bordered box of informational text."""

    kind: ClassVar[DocNodeKind] = DocNodeKind.NOTE_BOX
    content: DocSection = field(default_factory=DocSection)


@dataclass
class DocTableCell:
    kind: ClassVar[DocNodeKind] = DocNodeKind.TABLE_CELL
    content: DocSection = field(default_factory=DocSection)


@dataclass
class DocTableRow:
    kind: ClassVar[DocNodeKind] = DocNodeKind.TABLE_ROW
    cells: list[DocTableCell] = field(default_factory=list)


@dataclass
class DocTable:
    """A table with one header row and any number of data rows."""

    kind: ClassVar[DocNodeKind] = DocNodeKind.TABLE
    header: DocTableRow = field(default_factory=DocTableRow)
    rows: list[DocTableRow] = field(default_factory=list)

    @classmethod
    def with_titles(cls, titles: list[str]) -> DocTable:
        """Create a table whose header cells hold plain text titles."""
        header = DocTableRow([plain_text_cell(title) for title in titles])
        return cls(header=header)


@dataclass
class DocAnchor:
    kind: ClassVar[DocNodeKind] = DocNodeKind.ANCHOR
    id: str


@dataclass
class DocEmphasisSpan:
    """Text styled bold, italic, or both."""

    kind: ClassVar[DocNodeKind] = DocNodeKind.EMPHASIS_SPAN
    nodes: list[DocNode] = field(default_factory=list)
    bold: bool = False
    italic: bool = False


DocNode = Union[
    DocSection,
    DocParagraph,
    DocPlainText,
    DocEscapedText,
    DocCodeSpan,
    DocFencedCode,
    DocLinkTag,
    DocSoftBreak,
    DocHeading,
    DocList,
    DocNoteBox,
    DocTable,
    DocTableRow,
    DocTableCell,
    DocAnchor,
    DocEmphasisSpan,
]


def plain_text_cell(text: str) -> DocTableCell:
    """Create a table cell holding a single paragraph of plain text."""
    return DocTableCell(DocSection([DocParagraph([DocPlainText(text)])]))
