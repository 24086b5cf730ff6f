"""Whitespace normalization for paragraphs before they are emitted."""

import re

from api_documenter.doc_nodes import DocNode, DocNodeKind, DocParagraph, DocPlainText

WHITESPACE_RE = re.compile(r"\s+")


def trim_spaces_in_paragraph(paragraph: DocParagraph) -> DocParagraph:
    """Collapse whitespace runs and soft breaks, and trim the paragraph edges.

    Adjacent plain text and soft breaks are merged into a single text node.
    Other nodes are kept as they are and separate the merged runs.
    """
    nodes: list[DocNode] = []
    chunks: list[str] = []
    pending_space = False
    started = False

    for node in paragraph.nodes:
        if node.kind == DocNodeKind.PLAIN_TEXT:
            text = node.text  # type: ignore[union-attr]
            collapsed = WHITESPACE_RE.sub(" ", text).strip()
            if text[:1].isspace() and started:
                pending_space = True
            if collapsed:
                if pending_space:
                    chunks.append(" ")
                    pending_space = False
                chunks.append(collapsed)
                started = True
            if text[-1:].isspace() and started:
                pending_space = True
        elif node.kind == DocNodeKind.SOFT_BREAK:
            if started:
                pending_space = True
        else:
            if pending_space:
                chunks.append(" ")
                pending_space = False
            if chunks:
                nodes.append(DocPlainText("".join(chunks)))
                chunks.clear()
            nodes.append(node)
            started = True

    if chunks:
        nodes.append(DocPlainText("".join(chunks)))
    return DocParagraph(nodes)
