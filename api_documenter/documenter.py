"""Generate Markdown pages for every package of an API model."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

from api_documenter.api_item import ApiItem, ApiModel
from api_documenter.build_inheritance_map import build_inheritance_map
from api_documenter.build_type_map import build_type_map
from api_documenter.doc_node_grammar import DEFAULT_GRAMMAR, DocNodeGrammar
from api_documenter.load_config import DEFAULT_CONFIG
from api_documenter.markdown_emitter import EmitterOptions, MarkdownEmitter
from api_documenter.page import Page
from api_documenter.page_builder import PageBuilder
from api_documenter.page_context import PageContext
from api_documenter.page_router import PageRouter
from api_documenter.resolve_declaration_reference import resolve_declaration_reference

logger = logging.getLogger(__name__)


class MarkdownDocumenter:
    """Resolve each package's types, build its pages and emit their text."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        grammar: DocNodeGrammar = DEFAULT_GRAMMAR,
    ) -> None:
        config = config or DEFAULT_CONFIG
        self.router = PageRouter(config["output"]["extension"])
        self.builder = PageBuilder(
            self.router, grammar, config["signature"]["language"]
        )
        self.emitter = MarkdownEmitter()

    def generate(self, model: ApiModel) -> list[Page]:
        """Return the pages of all packages, one package at a time."""
        pages: list[Page] = []
        for package in model.packages:
            pages.extend(self.generate_package(package))
        return pages

    def generate_package(self, package: ApiItem) -> list[Page]:
        """Return the pages of one package, child pages before their parents."""
        type_map = build_type_map(package)
        inheritance_map = build_inheritance_map(package, type_map)
        context = PageContext(type_map, inheritance_map)

        self.builder.build_page(package, context)
        for page in context.pages:
            options = EmitterOptions(
                context_item=page.item,
                resolve_reference=partial(
                    resolve_declaration_reference, type_map=type_map
                ),
                filename_for_item=partial(self.router.link_from, page.path),
            )
            page.text = self.emitter.emit(page.body, options)
        logger.info("Built %d pages for %s", len(context.pages), package.display_name)
        return context.pages
