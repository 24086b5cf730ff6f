"""Assemble the document node tree of each declaration's page."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from api_documenter.api_item import ApiItem, Parameter
from api_documenter.api_item_kind import (
    METHOD_KINDS,
    PROPERTY_KINDS,
    RETURN_TYPE_KINDS,
    ApiItemKind,
    ReleaseTag,
)
from api_documenter.concise_signature import concise_signature
from api_documenter.doc_node_grammar import DEFAULT_GRAMMAR, DocNodeGrammar
from api_documenter.doc_nodes import (
    DocAnchor,
    DocCodeSpan,
    DocEmphasisSpan,
    DocFencedCode,
    DocHeading,
    DocLinkTag,
    DocList,
    DocNode,
    DocNoteBox,
    DocParagraph,
    DocPlainText,
    DocSection,
    DocTable,
    DocTableCell,
    DocTableRow,
)
from api_documenter.exceptions import UnsupportedItemKindError
from api_documenter.page import Page
from api_documenter.page_context import PageContext
from api_documenter.page_router import PageRouter
from api_documenter.resolve_members import get_resolved_members, inheritance_label
from api_documenter.resolve_type import resolve_type
from api_documenter.signature_text import get_signature, prettify_code_block
from api_documenter.type_tree import TreeNode, class_hierarchy_tree, generate_child_tree

logger = logging.getLogger(__name__)

BETA_WARNING = (
    "This API is provided as a preview for developers and may change"
    " based on feedback that we receive.  Do not use this API in a production"
    " environment."
)
DEPRECATED_PREFIX = "Warning: This API is now obsolete. "

HEADING_PREFIXES = {
    ApiItemKind.CLASS: "Class",
    ApiItemKind.ENUM: "Enum",
    ApiItemKind.INTERFACE: "Interface",
    ApiItemKind.METHOD: "Method",
    ApiItemKind.METHOD_SIGNATURE: "Method",
    ApiItemKind.FUNCTION: "Function",
    ApiItemKind.NAMESPACE: "Namespace",
    ApiItemKind.PROPERTY: "Property",
    ApiItemKind.PROPERTY_SIGNATURE: "Property",
    ApiItemKind.TYPE_ALIAS: "Type",
    ApiItemKind.VARIABLE: "Variable",
}

# Member tables of packages and namespaces, in page order.
CONTAINER_TABLES = (
    (ApiItemKind.CLASS, "Classes", "Class"),
    (ApiItemKind.ENUM, "Enumerations", "Enumeration"),
    (ApiItemKind.FUNCTION, "Functions", "Function"),
    (ApiItemKind.INTERFACE, "Interfaces", "Interface"),
    (ApiItemKind.NAMESPACE, "Namespaces", "Namespace"),
    (ApiItemKind.VARIABLE, "Variables", "Variable"),
    (ApiItemKind.TYPE_ALIAS, "Type Aliases", "Type Alias"),
)

# Kinds whose body ends without any table.
NO_TABLE_KINDS = frozenset(
    {
        ApiItemKind.PROPERTY,
        ApiItemKind.PROPERTY_SIGNATURE,
        ApiItemKind.TYPE_ALIAS,
        ApiItemKind.VARIABLE,
    }
)

MAX_HEADING_LEVEL = 5


@dataclass
class _MemberGroup:
    """A members table and the detail section that goes with it."""

    title: str
    details_title: str
    table: DocTable
    details: DocSection


class PageBuilder:
    """Build ``Page`` objects for a declaration and everything it lists.

    Building a package or namespace page also builds the pages of its
    members, so ``context.pages`` ends up holding child pages before their
    parent.
    """

    def __init__(
        self,
        router: PageRouter,
        grammar: DocNodeGrammar = DEFAULT_GRAMMAR,
        signature_language: str = "typescript",
    ) -> None:
        self.router = router
        self.grammar = grammar
        self.signature_language = signature_language

    def build_page(self, item: ApiItem, base_context: PageContext) -> Page:
        """Build the page for ``item`` and append it to ``base_context.pages``."""
        path = self.router.path_for(item).path
        context = replace(base_context, filename=path, level=1)
        output = DocSection()

        self._append_breadcrumb(context, output, item)
        self.grammar.append(output, DocHeading(self._heading_title(item), context.level))
        self.grammar.extend(output, self.build_body(context, item).nodes)
        self.grammar.validate(output)

        page = Page(item, path, output)
        context.pages.append(page)
        return page

    def build_body(
        self,
        context: PageContext,
        item: ApiItem,
        parents: list[ApiItem] | None = None,
    ) -> DocSection:
        """Build the content shared by pages and member detail sections."""
        chain = [item, *(parents or [])]
        output = DocSection()

        if item.release_tag == ReleaseTag.BETA:
            self.grammar.append(
                output,
                DocNoteBox(DocSection([DocParagraph([DocPlainText(BETA_WARNING)])])),
            )

        comment = item.doc_comment
        if comment is not None and comment.deprecated_block is not None:
            content = DocSection([DocParagraph([DocPlainText(DEPRECATED_PREFIX)])])
            self.grammar.extend(content, comment.deprecated_block.content.nodes)
            self.grammar.append(output, DocNoteBox(content))

        for source in chain:
            if source.doc_comment and source.doc_comment.summary_section.nodes:
                self.grammar.extend(output, source.doc_comment.summary_section.nodes)
                break

        note = self._inheritance_note(context, item, parents or [])
        if note is not None:
            self.grammar.append(output, note)

        for source in chain:
            if source.doc_comment and source.doc_comment.remarks_block:
                self.grammar.extend(output, source.doc_comment.remarks_block.content.nodes)
                break

        if item.excerpt:
            self.grammar.append(output, _bold_paragraph("Signature:"))
            self.grammar.append(
                output, DocFencedCode(get_signature(item), self.signature_language)
            )

        self._append_default_value(output, chain)

        if item.kind == ApiItemKind.CLASS:
            self._append_class_hierarchy(context, output, item)
            self._append_tree_diagram(
                context, output, item, "parent_interfaces", "Implements Interfaces"
            )
        elif item.kind == ApiItemKind.INTERFACE:
            self._append_tree_diagram(
                context, output, item, "parent_interfaces", "Implements Interfaces"
            )
            self._append_tree_diagram(
                context, output, item, "child_interfaces", "Implemented By"
            )

        self._append_examples(context, output, item)

        if item.kind in (ApiItemKind.PACKAGE, ApiItemKind.NAMESPACE):
            self._append_container_tables(context, output, item)
        elif item.kind in (ApiItemKind.CLASS, ApiItemKind.INTERFACE):
            self._append_member_tables(context, output, item)
        elif item.kind in METHOD_KINDS or item.kind == ApiItemKind.FUNCTION:
            self._append_parameter_tables(context, output, item)
        elif item.kind == ApiItemKind.ENUM:
            self._append_enum_tables(context, output, item)
        elif item.kind not in NO_TABLE_KINDS:
            raise UnsupportedItemKindError(item.kind.value)
        return output

    def _heading_title(self, item: ApiItem) -> str:
        if item.kind == ApiItemKind.PACKAGE:
            return item.display_name
        prefix = HEADING_PREFIXES.get(item.kind)
        if prefix is None:
            raise UnsupportedItemKindError(item.kind.value)
        return f"{prefix} {item.get_scoped_name_within_package()}"

    def _heading(self, context: PageContext, title: str, depth: int = 1) -> DocHeading:
        return DocHeading(title, min(context.level + depth, MAX_HEADING_LEVEL))

    def _link(self, context: PageContext, target: ApiItem, text: str) -> DocLinkTag:
        return DocLinkTag(
            url_destination=self.router.link_from(context.filename, target),
            link_text=text,
        )

    def _append_breadcrumb(
        self, context: PageContext, output: DocSection, item: ApiItem
    ) -> None:
        first = True
        for ancestor in item.get_hierarchy():
            if ancestor.kind in (ApiItemKind.MODEL, ApiItemKind.ENTRY_POINT):
                continue
            text = "Home" if ancestor.kind == ApiItemKind.PACKAGE else ancestor.display_name
            if not first:
                self.grammar.append_in_paragraph(output, DocPlainText(" > "))
            first = False
            self.grammar.append_in_paragraph(output, self._link(context, ancestor, text))

    def _inheritance_note(
        self, context: PageContext, item: ApiItem, parents: list[ApiItem]
    ) -> DocParagraph | None:
        if not parents:
            return None
        parent = parents[0]
        label = inheritance_label(item, parent)
        return DocParagraph(
            [
                DocEmphasisSpan(
                    [DocPlainText(label), self._link(context, parent, parent.display_name)],
                    italic=True,
                )
            ]
        )

    def _append_default_value(self, output: DocSection, chain: list[ApiItem]) -> None:
        for source in chain:
            if source.doc_comment is None:
                continue
            blocks = source.doc_comment.find_custom_blocks("defaultValue")
            if not blocks:
                continue
            header = DocEmphasisSpan([DocPlainText("Default Value:")], bold=True)
            nodes = blocks[0].content.nodes
            if len(nodes) == 1 and isinstance(nodes[0], DocParagraph):
                paragraph = DocParagraph([header, DocPlainText(" "), *nodes[0].nodes])
                self.grammar.append(output, paragraph)
            else:
                self.grammar.append(output, DocParagraph([header]))
                self.grammar.extend(output, nodes)
            return

    def _append_class_hierarchy(
        self, context: PageContext, output: DocSection, item: ApiItem
    ) -> None:
        if item not in context.inheritance_map:
            return
        tree = class_hierarchy_tree(item, context.inheritance_map)
        if not tree.children:
            return
        self.grammar.append(output, self._heading(context, "Class Hierarchy"))
        self.grammar.append(output, self._type_tree_list(context, item, [tree]))

    def _append_tree_diagram(
        self,
        context: PageContext,
        output: DocSection,
        item: ApiItem,
        walk_key: str,
        title: str,
    ) -> None:
        if item not in context.inheritance_map:
            return
        tree = generate_child_tree(item, context.inheritance_map, walk_key)  # type: ignore[arg-type]
        if not tree.children:
            return
        self.grammar.append(output, self._heading(context, title))
        self.grammar.append(output, self._type_tree_list(context, item, [tree]))

    def _type_tree_list(
        self, context: PageContext, current: ApiItem, nodes: list[TreeNode]
    ) -> DocList:
        result = DocList()
        for node in nodes:
            text: DocNode
            if isinstance(node.item, str):
                text = DocPlainText(node.item)
            elif node.item is current:
                text = DocEmphasisSpan(
                    [DocPlainText(node.item.get_scoped_name_within_package())], bold=True
                )
            else:
                text = self._link(
                    context, node.item, node.item.get_scoped_name_within_package()
                )
            self.grammar.append(result, text)
            if node.children:
                self.grammar.append(
                    result, self._type_tree_list(context, current, node.children)
                )
        return result

    def _append_examples(
        self, context: PageContext, output: DocSection, item: ApiItem
    ) -> None:
        if item.doc_comment is None:
            return
        examples = item.doc_comment.find_custom_blocks("example")
        for number, block in enumerate(examples, start=1):
            title = f"Example {number}" if len(examples) > 1 else "Example"
            self.grammar.append(output, self._heading(context, title))
            self.grammar.extend(output, block.content.nodes)

    def _append_container_tables(
        self, context: PageContext, output: DocSection, container: ApiItem
    ) -> None:
        tables = {
            kind: DocTable.with_titles([column, "Description"])
            for kind, _, column in CONTAINER_TABLES
        }
        for member in container.entry_point_members:
            table = tables.get(member.kind)
            if table is None:
                continue
            table.rows.append(
                DocTableRow(
                    [
                        self._title_cell(context, member),
                        self._description_cell(context, member),
                    ]
                )
            )
            self.build_page(member, context)

        for kind, title, _ in CONTAINER_TABLES:
            if tables[kind].rows:
                self.grammar.append(output, self._heading(context, title))
                self.grammar.append(output, tables[kind])

    def _append_member_tables(
        self, context: PageContext, output: DocSection, item: ApiItem
    ) -> None:
        def group(title: str, details_title: str, columns: list[str]) -> _MemberGroup:
            return _MemberGroup(
                title, details_title, DocTable.with_titles(columns), DocSection()
            )

        property_columns = ["Property", "Type", "Description"]
        method_columns = ["Method", "Description"]
        groups = {
            "static_events": group("Static Events", "Static Event Details", property_columns),
            "events": group("Events", "Event Details", property_columns),
            "static_properties": group(
                "Static Properties", "Static Property Details", property_columns
            ),
            "properties": group("Properties", "Property Details", property_columns),
            "static_methods": group("Static Methods", "Static Method Details", method_columns),
            "methods": group("Methods", "Method Details", method_columns),
        }

        for resolved in get_resolved_members(item, context.inheritance_map):
            for member in resolved.own_members or [resolved.member]:
                if member.kind in METHOD_KINDS:
                    key = "methods"
                    cells = [
                        self._title_cell(context, member),
                        self._description_cell(context, member, resolved.parents),
                    ]
                elif member.kind in PROPERTY_KINDS:
                    key = "events" if member.is_event_property else "properties"
                    cells = [
                        self._title_cell(context, member),
                        self._type_cell(context, member, member.value_type),
                        self._description_cell(context, member, resolved.parents),
                    ]
                else:
                    continue
                if member.is_static:
                    key = f"static_{key}"
                target = groups[key]
                target.table.rows.append(DocTableRow(cells))

                if member in resolved.own_members:
                    self._append_member_details(
                        context, target.details, member, resolved.parents
                    )

        for target in groups.values():
            if target.table.rows:
                self.grammar.append(output, self._heading(context, target.title))
                self.grammar.append(output, target.table)
        for target in groups.values():
            if target.details.nodes:
                self.grammar.append(output, self._heading(context, target.details_title))
                self.grammar.extend(output, target.details.nodes)

    def _append_member_details(
        self,
        context: PageContext,
        details: DocSection,
        member: ApiItem,
        parents: list[ApiItem],
    ) -> None:
        anchor = self.router.anchor_for(member)
        self.grammar.append(details, DocAnchor(anchor or ""))
        self.grammar.append(details, self._heading(context, concise_signature(member), 2))
        deeper = replace(context, level=min(context.level + 2, MAX_HEADING_LEVEL))
        self.grammar.extend(details, self.build_body(deeper, member, parents).nodes)

    def _append_parameter_tables(
        self, context: PageContext, output: DocSection, item: ApiItem
    ) -> None:
        table = DocTable.with_titles(["Parameter", "Type", "Description"])
        for parameter in item.parameters:
            description = DocSection()
            block = item.doc_comment.find_param_block(parameter.name) if item.doc_comment else None
            if block is not None:
                self.grammar.extend(description, block.content.nodes)
            table.rows.append(
                DocTableRow(
                    [
                        DocTableCell(DocSection([DocParagraph([DocPlainText(parameter.name)])])),
                        self._parameter_type_cell(context, item, parameter),
                        DocTableCell(description),
                    ]
                )
            )
        if table.rows:
            self.grammar.append(output, self._heading(context, "Parameters"))
            self.grammar.append(output, table)

        if item.kind not in RETURN_TYPE_KINDS:
            return
        self.grammar.append(output, _bold_paragraph("Returns:"))
        return_type = item.return_type.strip()
        if return_type:
            self.grammar.append(output, DocParagraph([DocCodeSpan(return_type)]))
        else:
            self.grammar.append(
                output, DocParagraph([DocEmphasisSpan([DocPlainText("(not declared)")])])
            )
        if item.doc_comment and item.doc_comment.returns_block:
            self.grammar.extend(output, item.doc_comment.returns_block.content.nodes)

    def _append_enum_tables(
        self, context: PageContext, output: DocSection, item: ApiItem
    ) -> None:
        table = DocTable.with_titles(["Member", "Value", "Description"])
        for member in item.members:
            table.rows.append(
                DocTableRow(
                    [
                        DocTableCell(
                            DocSection([DocParagraph([DocPlainText(concise_signature(member))])])
                        ),
                        DocTableCell(
                            DocSection([DocParagraph([DocCodeSpan(member.initializer)])])
                        ),
                        self._description_cell(context, member),
                    ]
                )
            )
        if table.rows:
            self.grammar.append(output, self._heading(context, "Enumeration Members"))
            self.grammar.append(output, table)

    def _title_cell(self, context: PageContext, item: ApiItem) -> DocTableCell:
        link = self._link(context, item, concise_signature(item))
        return DocTableCell(DocSection([DocParagraph([link])]))

    def _description_cell(
        self,
        context: PageContext,
        item: ApiItem,
        parents: list[ApiItem] | None = None,
    ) -> DocTableCell:
        section = DocSection()
        if item.release_tag == ReleaseTag.BETA:
            self.grammar.append_in_paragraph(
                section,
                DocEmphasisSpan([DocPlainText("(BETA)")], bold=True, italic=True),
            )
            self.grammar.append_in_paragraph(section, DocPlainText(" "))

        for source in [item, *(parents or [])]:
            if source.doc_comment and source.doc_comment.summary_section.nodes:
                self._append_and_merge_section(section, source.doc_comment.summary_section)
                break

        note = self._inheritance_note(context, item, parents or [])
        if note is not None:
            self.grammar.append(section, note)
        return DocTableCell(section)

    def _append_and_merge_section(self, output: DocSection, source: DocSection) -> None:
        """Append ``source``, merging its first paragraph into the last one of ``output``."""
        for index, node in enumerate(source.nodes):
            if index == 0 and isinstance(node, DocParagraph):
                for child in node.nodes:
                    self.grammar.append_in_paragraph(output, child)
            else:
                self.grammar.append(output, node)

    def _type_cell(self, context: PageContext, origin: ApiItem, type_text: str) -> DocTableCell:
        section = DocSection()
        text = prettify_code_block(type_text)
        if not text:
            return DocTableCell(section)
        target = resolve_type(origin, text, context.type_map)
        if target is not None:
            self.grammar.append_in_paragraph(section, self._link(context, target, text))
        else:
            logger.debug("Type %r used by %s is not linkable", text, origin.display_name)
            self.grammar.append_in_paragraph(section, DocCodeSpan(text))
        return DocTableCell(section)

    def _parameter_type_cell(
        self, context: PageContext, item: ApiItem, parameter: Parameter
    ) -> DocTableCell:
        return self._type_cell(context, item, parameter.type_text)


def _bold_paragraph(text: str) -> DocParagraph:
    return DocParagraph([DocEmphasisSpan([DocPlainText(text)], bold=True)])
