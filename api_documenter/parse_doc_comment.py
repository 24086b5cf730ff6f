"""Parse raw ``/** ... */`` doc comments into ``DocComment`` trees.

This is a deliberately small TSDoc reader: it understands block tags
(``@remarks``, ``@param``, ``@example`` ...), modifier tags (``@beta``,
``@eventProperty`` ...), fenced code, ``{@link}`` inline tags, backtick code
spans and backslash escapes. Anything it does not understand is kept as
plain text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from api_documenter.doc_comment import DocBlock, DocComment, DocParamBlock
from api_documenter.doc_nodes import (
    DocCodeSpan,
    DocEscapedText,
    DocFencedCode,
    DocLinkTag,
    DocNode,
    DocParagraph,
    DocPlainText,
    DocSection,
    DocSoftBreak,
)
from api_documenter.load_config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)

TAG_RE = re.compile(r"^@([A-Za-z][\w]*)\b\s*")
FENCE_RE = re.compile(r"^```\s*([\w+-]*)\s*$")
INLINE_RE = re.compile(
    r"(?P<tag>\{@(?P<tag_name>\w+)(?:\s+(?P<tag_body>[^}]*))?\})"
    r"|(?P<code>`(?P<code_body>[^`]+)`)"
    r"|(?P<escape>\\(?P<escaped>[\\`*_{}\[\]()#+\-.!@|<>~]))"
)
PARAM_RE = re.compile(r"^([\w$.]+)\s*(?:-\s*)?(.*)$")


@dataclass
class _RawBlock:
    tag_name: str
    lines: list[str] = field(default_factory=list)


def strip_comment_framing(text: str) -> list[str]:
    """Remove ``/**``, ``*/`` and leading ``*`` decorations."""
    body = text.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]
    lines = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:]
            if stripped.startswith(" "):
                stripped = stripped[1:]
        lines.append(stripped.rstrip())
    return lines


def parse_doc_comment(text: str, config: dict[str, Any] | None = None) -> DocComment:
    """Parse a raw doc comment into summary, blocks and modifiers."""
    comment_config = (config or DEFAULT_CONFIG)["comment"]
    block_tags = {t.upper() for t in comment_config["block_tags"]}
    modifier_tags = {t.upper(): t for t in comment_config["modifier_tags"]}

    comment = DocComment()
    summary = _RawBlock("summary")
    blocks: list[_RawBlock] = []
    current = summary
    in_fence = False

    for line in strip_comment_framing(text):
        if line.strip().startswith("```"):
            in_fence = not in_fence
            current.lines.append(line)
            continue
        if in_fence:
            current.lines.append(line)
            continue

        rest = line.strip()
        while True:
            m = TAG_RE.match(rest)
            if not m:
                break
            name = m.group(1)
            upper = name.upper()
            if upper in modifier_tags:
                comment.modifier_tags.add(modifier_tags[upper])
                rest = rest[m.end() :]
                continue
            if upper not in block_tags:
                logger.debug("Keeping unknown tag @%s as text", name)
                break
            current = _RawBlock(name)
            blocks.append(current)
            rest = rest[m.end() :]
            break
        if rest or not line.strip():
            current.lines.append(rest)

    comment.summary_section = parse_section(summary.lines)
    for raw in blocks:
        _attach_block(comment, raw)
    return comment


def _attach_block(comment: DocComment, raw: _RawBlock) -> None:
    tag = raw.tag_name
    upper = tag.upper()
    if upper == "PARAM":
        first = raw.lines[0] if raw.lines else ""
        m = PARAM_RE.match(first.strip())
        name = m.group(1) if m else ""
        lines = [m.group(2) if m else first, *raw.lines[1:]]
        comment.params.append(
            DocParamBlock(tag, parse_section(lines), parameter_name=name)
        )
        return

    block = DocBlock(tag, parse_section(raw.lines))
    if upper == "REMARKS":
        comment.remarks_block = block
    elif upper == "DEPRECATED":
        comment.deprecated_block = block
    elif upper in ("RETURNS", "RETURN"):
        comment.returns_block = block
    else:
        comment.custom_blocks.append(block)


def parse_section(lines: list[str]) -> DocSection:
    """Split lines into paragraphs and fenced code blocks."""
    section = DocSection()
    paragraph: list[str] = []

    def flush() -> None:
        if paragraph:
            section.nodes.append(parse_paragraph(paragraph))
            paragraph.clear()

    i = 0
    while i < len(lines):
        line = lines[i]
        fence = FENCE_RE.match(line.strip())
        if fence:
            flush()
            code_lines = []
            i += 1
            while i < len(lines) and not lines[i].strip().startswith("```"):
                code_lines.append(lines[i])
                i += 1
            section.nodes.append(
                DocFencedCode(code="\n".join(code_lines) + "\n", language=fence.group(1))
            )
        elif not line.strip():
            flush()
        else:
            paragraph.append(line)
        i += 1
    flush()
    return section


def parse_paragraph(lines: list[str]) -> DocParagraph:
    """Parse the lines of one paragraph, joining them with soft breaks."""
    paragraph = DocParagraph()
    for index, line in enumerate(lines):
        if index > 0:
            paragraph.nodes.append(DocSoftBreak())
        paragraph.nodes.extend(parse_inline(line))
    return paragraph


def parse_inline(text: str) -> list[DocNode]:
    """Parse inline tags, code spans and escapes within one line."""
    nodes: list[DocNode] = []
    pos = 0
    for m in INLINE_RE.finditer(text):
        if m.start() > pos:
            nodes.append(DocPlainText(text[pos : m.start()]))
        pos = m.end()
        if m.group("tag"):
            link = _parse_inline_tag(m.group("tag_name"), m.group("tag_body") or "")
            if link is not None:
                nodes.append(link)
        elif m.group("code"):
            nodes.append(DocCodeSpan(m.group("code_body")))
        else:
            nodes.append(DocEscapedText(m.group("escape"), m.group("escaped")))
    if pos < len(text):
        nodes.append(DocPlainText(text[pos:]))
    return nodes


def _parse_inline_tag(tag_name: str, body: str) -> DocLinkTag | None:
    if tag_name.lower() != "link":
        # {@inheritDoc}, {@label} and friends carry no renderable content
        return None
    destination, _, link_text = body.partition("|")
    destination = destination.strip()
    text = link_text.strip() or None
    if "://" in destination:
        return DocLinkTag(url_destination=destination, link_text=text)
    if destination:
        return DocLinkTag(code_destination=destination, link_text=text)
    return DocLinkTag(link_text=text)
