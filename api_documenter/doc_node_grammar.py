"""Allow-list of which document node kinds may nest inside which."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from api_documenter.doc_nodes import (
    DocEmphasisSpan,
    DocList,
    DocNode,
    DocNodeKind,
    DocParagraph,
    DocSection,
)
from api_documenter.exceptions import DocNodeGrammarError

Container = DocSection | DocParagraph | DocList | DocEmphasisSpan

_INLINE = frozenset(
    {
        DocNodeKind.PLAIN_TEXT,
        DocNodeKind.ESCAPED_TEXT,
        DocNodeKind.CODE_SPAN,
        DocNodeKind.LINK_TAG,
        DocNodeKind.SOFT_BREAK,
    }
)

DEFAULT_ALLOWED_CHILDREN: Mapping[DocNodeKind, frozenset[DocNodeKind]] = (
    MappingProxyType(
        {
            DocNodeKind.SECTION: frozenset(
                {
                    DocNodeKind.PARAGRAPH,
                    DocNodeKind.FENCED_CODE,
                    DocNodeKind.ANCHOR,
                    DocNodeKind.HEADING,
                    DocNodeKind.LIST,
                    DocNodeKind.NOTE_BOX,
                    DocNodeKind.TABLE,
                }
            ),
            DocNodeKind.PARAGRAPH: _INLINE
            | {DocNodeKind.EMPHASIS_SPAN, DocNodeKind.LIST},
            DocNodeKind.EMPHASIS_SPAN: frozenset(
                {
                    DocNodeKind.LINK_TAG,
                    DocNodeKind.PLAIN_TEXT,
                    DocNodeKind.SOFT_BREAK,
                    DocNodeKind.EMPHASIS_SPAN,
                }
            ),
            DocNodeKind.LIST: frozenset(
                {
                    DocNodeKind.LINK_TAG,
                    DocNodeKind.PLAIN_TEXT,
                    DocNodeKind.EMPHASIS_SPAN,
                    DocNodeKind.LIST,
                }
            ),
        }
    )
)


@dataclass(frozen=True)
class DocNodeGrammar:
    """Immutable allowed-children table consulted by tree builders."""

    allowed_children: Mapping[DocNodeKind, frozenset[DocNodeKind]] = field(
        default_factory=lambda: DEFAULT_ALLOWED_CHILDREN
    )

    def allows(self, parent: DocNodeKind, child: DocNodeKind) -> bool:
        """Check whether ``child`` may be a direct child of ``parent``."""
        return child in self.allowed_children.get(parent, frozenset())

    def append(self, container: Container, node: DocNode) -> None:
        """Append ``node`` to ``container`` after checking the grammar."""
        if not self.allows(container.kind, node.kind):
            msg = f"{node.kind.value} is not allowed inside {container.kind.value}"
            raise DocNodeGrammarError(msg)
        container.nodes.append(node)

    def extend(self, container: Container, nodes: Iterable[DocNode]) -> None:
        """Append several nodes in order."""
        for node in nodes:
            self.append(container, node)

    def append_in_paragraph(self, section: DocSection, node: DocNode) -> None:
        """Append to the trailing paragraph of ``section``, creating it if needed."""
        last = section.nodes[-1] if section.nodes else None
        if not isinstance(last, DocParagraph):
            last = DocParagraph()
            self.append(section, last)
        self.append(last, node)

    def validate(self, node: DocNode) -> None:
        """Raise ``DocNodeGrammarError`` if any container in the tree breaks the grammar."""
        children: list[DocNode] = []
        if node.kind in self.allowed_children:
            for child in node.nodes:  # type: ignore[union-attr]
                if not self.allows(node.kind, child.kind):
                    msg = (
                        f"{child.kind.value} is not allowed inside {node.kind.value}"
                    )
                    raise DocNodeGrammarError(msg)
            children = list(node.nodes)  # type: ignore[union-attr]
        elif node.kind in (DocNodeKind.NOTE_BOX, DocNodeKind.TABLE_CELL):
            children = [node.content]  # type: ignore[union-attr]
        elif node.kind == DocNodeKind.TABLE:
            children = [node.header, *node.rows]  # type: ignore[union-attr]
        elif node.kind == DocNodeKind.TABLE_ROW:
            children = list(node.cells)  # type: ignore[union-attr]
        for child in children:
            self.validate(child)


DEFAULT_GRAMMAR = DocNodeGrammar()
