"""State threaded through the recursive page builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from api_documenter.api_item import ApiItem
from api_documenter.inheritance_refs import InheritanceMap

if TYPE_CHECKING:
    from api_documenter.page import Page


@dataclass(frozen=True)
class PageContext:
    """Lookup tables of one package plus the page currently being built.

    ``level`` is the heading level of the body being built; member detail
    sections get a copy with a deeper level via ``dataclasses.replace``.
    """

    type_map: dict[str, ApiItem]
    inheritance_map: InheritanceMap
    filename: str = ""
    level: int = 1
    pages: list[Page] = field(default_factory=list)
