"""Serialize document node trees to Markdown text.

Emphasis is written as ``<b>``/``<i>`` so it survives inside table cells.
Code inside tables becomes ``<pre>`` with ``&#010;`` line breaks, because
pipe tables cannot hold literal newlines.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import cast

from api_documenter.api_item import ApiItem
from api_documenter.doc_nodes import (
    DocAnchor,
    DocCodeSpan,
    DocEmphasisSpan,
    DocEscapedText,
    DocFencedCode,
    DocHeading,
    DocLinkTag,
    DocList,
    DocNode,
    DocNodeKind,
    DocNoteBox,
    DocParagraph,
    DocPlainText,
    DocSection,
    DocTable,
    DocTableCell,
)
from api_documenter.exceptions import ApiDocumenterError
from api_documenter.indented_writer import IndentedWriter
from api_documenter.resolve_declaration_reference import ReferenceResult
from api_documenter.trim_spaces import trim_spaces_in_paragraph

logger = logging.getLogger(__name__)

SPECIAL_CHARS_RE = re.compile(r"[*#\[\]_|`~]")
HYPHEN_RUN_RE = re.compile(r"-{3,}")
NEWLINE_SPLIT_RE = re.compile(r"\r?\n")
WHITESPACE_RE = re.compile(r"\s+")
# Characters after which an escaped symbol cannot merge with a previous run.
SAFE_PRECEDING = ("", "\n", " ", "[", ">")


def get_escaped_text(text: str) -> str:
    """Escape Markdown syntax and HTML special characters in ``text``."""
    text = text.replace("\\", "\\\\")
    text = SPECIAL_CHARS_RE.sub(lambda m: "\\" + m.group(0), text)
    text = HYPHEN_RUN_RE.sub(lambda m: "\\-" * len(m.group(0)), text)
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


@dataclass(frozen=True)
class EmitterOptions:
    """Per-page hooks for links whose destination is a declaration reference."""

    context_item: ApiItem | None = None
    resolve_reference: Callable[[str, ApiItem | None], ReferenceResult] | None = None
    filename_for_item: Callable[[ApiItem], str | None] | None = None


@dataclass
class _EmitterContext:
    writer: IndentedWriter
    options: EmitterOptions
    inside_table: bool = False
    list_level: int = 0


class MarkdownEmitter:
    """Walks a node tree once, writing Markdown into an ``IndentedWriter``."""

    def emit(self, node: DocNode, options: EmitterOptions | None = None) -> str:
        context = _EmitterContext(IndentedWriter(), options or EmitterOptions())
        self._write_node(node, context, has_next_sibling=False)
        context.writer.ensure_new_line()
        return context.writer.get_text()

    def _write_nodes(self, nodes: Sequence[DocNode], context: _EmitterContext) -> None:
        for index, node in enumerate(nodes):
            self._write_node(node, context, index < len(nodes) - 1)

    def _write_node(
        self, node: DocNode, context: _EmitterContext, has_next_sibling: bool
    ) -> None:
        writer = context.writer
        kind = node.kind

        if kind == DocNodeKind.PLAIN_TEXT:
            node = cast(DocPlainText, node)
            self._write_plain_text(node.text, context)
        elif kind == DocNodeKind.ESCAPED_TEXT:
            node = cast(DocEscapedText, node)
            self._write_plain_text(node.decoded_text, context)
        elif kind == DocNodeKind.CODE_SPAN:
            node = cast(DocCodeSpan, node)
            self._write_code_span(node, context)
        elif kind == DocNodeKind.FENCED_CODE:
            node = cast(DocFencedCode, node)
            self._write_fenced_code(node, context)
        elif kind == DocNodeKind.LINK_TAG:
            node = cast(DocLinkTag, node)
            self._write_link_tag(node, context)
        elif kind == DocNodeKind.SOFT_BREAK:
            if not re.match(r"^\s?$", writer.peek_last_character()):
                writer.write(" ")
        elif kind == DocNodeKind.PARAGRAPH:
            node = cast(DocParagraph, node)
            trimmed = trim_spaces_in_paragraph(node)
            self._write_nodes(trimmed.nodes, context)
            if context.inside_table:
                # Separate this block from the next one in the same cell.
                if has_next_sibling:
                    writer.write("<br><br>")
            else:
                writer.ensure_new_line()
                writer.write_line()
        elif kind == DocNodeKind.SECTION:
            node = cast(DocSection, node)
            self._write_nodes(node.nodes, context)
        elif kind == DocNodeKind.ANCHOR:
            node = cast(DocAnchor, node)
            writer.ensure_skipped_line()
            writer.write_line(f'<a id="{node.id}"></a>')
            writer.write_line()
        elif kind == DocNodeKind.HEADING:
            node = cast(DocHeading, node)
            writer.ensure_skipped_line()
            prefix = "#" * min(node.level, 4)
            writer.write_line(f"{prefix} {get_escaped_text(node.title)}")
            writer.write_line()
        elif kind == DocNodeKind.LIST:
            node = cast(DocList, node)
            self._write_list(node, context)
        elif kind == DocNodeKind.NOTE_BOX:
            node = cast(DocNoteBox, node)
            writer.ensure_new_line()
            writer.increase_indent("> ")
            self._write_node(node.content, context, has_next_sibling=False)
            writer.ensure_new_line()
            writer.decrease_indent()
            writer.write_line()
        elif kind == DocNodeKind.TABLE:
            node = cast(DocTable, node)
            self._write_table(node, context)
        elif kind == DocNodeKind.EMPHASIS_SPAN:
            node = cast(DocEmphasisSpan, node)
            if node.bold:
                writer.write("<b>")
            if node.italic:
                writer.write("<i>")
            self._write_nodes(node.nodes, context)
            if node.italic:
                writer.write("</i>")
            if node.bold:
                writer.write("</b>")
        else:
            msg = f"Unsupported element kind: {kind.value}"
            raise ApiDocumenterError(msg)

    def _write_plain_text(self, text: str, context: _EmitterContext) -> None:
        writer = context.writer
        middle = text.strip()
        leading = text[: len(text) - len(text.lstrip())] if middle else text
        trailing = text[len(text.rstrip()) :] if middle else ""
        writer.write(leading)
        if middle:
            if writer.peek_last_character() not in SAFE_PRECEDING:
                # Keeps "**one**<!-- -->*two*" from parsing as "**one***two*".
                writer.write("<!-- -->")
            writer.write(get_escaped_text(middle))
        writer.write(trailing)

    def _write_code_span(self, node: DocCodeSpan, context: _EmitterContext) -> None:
        writer = context.writer
        if not context.inside_table:
            writer.write(f"`{node.code}`")
            return
        parts = NEWLINE_SPLIT_RE.split(node.code.replace("|", "\\|"))
        if len(parts) > 1:
            writer.write(f"<pre>{'&#010;'.join(parts)}</pre>")
        else:
            writer.write(f"`{parts[0]}`")

    def _write_fenced_code(self, node: DocFencedCode, context: _EmitterContext) -> None:
        writer = context.writer
        code = node.code.rstrip("\r\n")
        if context.inside_table:
            parts = NEWLINE_SPLIT_RE.split(code.replace("|", "\\|"))
            writer.write(f'<pre lang="{node.language}">{"&#010;".join(parts)}</pre>')
            return
        writer.ensure_new_line()
        writer.write("```")
        writer.write(node.language)
        writer.write_line()
        writer.write(code)
        writer.write_line()
        writer.write_line("```")

    def _write_link_tag(self, node: DocLinkTag, context: _EmitterContext) -> None:
        if node.code_destination:
            self._write_link_with_code_destination(node, context)
        elif node.url_destination:
            text = node.link_text if node.link_text is not None else node.url_destination
            self._write_link(text, node.url_destination, context)
        elif node.link_text:
            self._write_plain_text(node.link_text, context)

    def _write_link_with_code_destination(
        self, node: DocLinkTag, context: _EmitterContext
    ) -> None:
        options = context.options
        if options.resolve_reference is None or options.filename_for_item is None:
            logger.warning(
                "Unable to resolve reference %s: no resolver configured",
                node.code_destination,
            )
            return
        result = options.resolve_reference(
            node.code_destination or "", options.context_item
        )
        if result.item is None:
            logger.warning("Unable to resolve reference: %s", result.error_message)
            return
        filename = options.filename_for_item(result.item)
        if not filename:
            return
        text = node.link_text or result.item.get_scoped_name_within_package()
        if not text:
            logger.warning("Unable to determine link text for %s", node.code_destination)
            return
        self._write_link(text, filename, context)

    def _write_link(self, text: str, destination: str, context: _EmitterContext) -> None:
        writer = context.writer
        writer.write("[")
        writer.write(get_escaped_text(WHITESPACE_RE.sub(" ", text)))
        writer.write(f"]({destination})")

    def _write_list(self, node: DocList, context: _EmitterContext) -> None:
        writer = context.writer
        context.list_level += 1
        if context.list_level == 1:
            writer.ensure_skipped_line()
        for child in node.nodes:
            if child.kind == DocNodeKind.LIST:
                self._write_node(child, context, has_next_sibling=False)
            else:
                writer.ensure_new_line()
                writer.write("  " * ((context.list_level - 1) * 2) + "- ")
                self._write_node(child, context, has_next_sibling=False)
        context.list_level -= 1
        if context.list_level == 0:
            writer.ensure_skipped_line()

    def _write_table(self, node: DocTable, context: _EmitterContext) -> None:
        writer = context.writer
        writer.ensure_skipped_line()
        context.inside_table = True

        column_count = max(
            [len(node.header.cells), *(len(row.cells) for row in node.rows)]
        )

        writer.write("| ")
        for index in range(column_count):
            writer.write(" ")
            self._write_cell(_cell_at(node.header.cells, index), context)
            writer.write(" |")
        writer.write_line()

        writer.write("| ")
        for _ in range(column_count):
            writer.write(" --- |")
        writer.write_line()

        for row in node.rows:
            writer.write("| ")
            for index in range(column_count):
                writer.write(" ")
                self._write_cell(_cell_at(row.cells, index), context)
                writer.write(" |")
            writer.write_line()
        writer.write_line()

        context.inside_table = False

    def _write_cell(self, cell: DocTableCell | None, context: _EmitterContext) -> None:
        if cell is not None:
            self._write_node(cell.content, context, has_next_sibling=False)


def _cell_at(cells: list[DocTableCell], index: int) -> DocTableCell | None:
    return cells[index] if index < len(cells) else None

