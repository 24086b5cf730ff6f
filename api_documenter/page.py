"""Data model for one generated output page."""

from dataclasses import dataclass

from api_documenter.api_item import ApiItem
from api_documenter.doc_nodes import DocSection


@dataclass
class Page:
    """A declaration's page: output path, node tree and emitted text."""

    item: ApiItem
    path: str
    body: DocSection
    text: str = ""
