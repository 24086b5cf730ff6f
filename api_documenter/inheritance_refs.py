"""Data model for the parent and child links of one class or interface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from api_documenter.api_item import ApiItem

# A resolved declaration, or the bare name of a type outside the package.
TypeRef = Union[ApiItem, str]


@dataclass
class InheritanceRefs:
    parent_class: TypeRef | None = None
    child_classes: list[TypeRef] = field(default_factory=list)
    parent_interfaces: list[TypeRef] = field(default_factory=list)
    child_interfaces: list[TypeRef] = field(default_factory=list)

    def parents(self) -> list[TypeRef]:
        """Return the parent class (if any) followed by the parent interfaces."""
        head = [self.parent_class] if self.parent_class is not None else []
        return [*head, *self.parent_interfaces]


InheritanceMap = dict[ApiItem, InheritanceRefs]
