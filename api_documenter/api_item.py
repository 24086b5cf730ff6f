"""Data models for representing declarations of an API package."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from api_documenter.api_item_kind import ROOT_KINDS, ApiItemKind, ReleaseTag

if TYPE_CHECKING:
    from collections.abc import Iterator

    from api_documenter.doc_comment import DocComment


@dataclass
class Parameter:
    """Represents one parameter of a function-like declaration."""

    name: str
    type_text: str = ""


# Identity semantics: the inheritance graph and type tree key on the object.
@dataclass(eq=False)
class ApiItem:
    """Represents a declaration (package, class, method, etc.)."""

    kind: ApiItemKind
    display_name: str
    members: list[ApiItem] = field(default_factory=list)
    doc_comment: DocComment | None = None
    release_tag: ReleaseTag = ReleaseTag.NONE
    is_static: bool = False
    overload_index: int = 1
    excerpt: str = ""
    extends_types: list[str] = field(default_factory=list)
    implements_types: list[str] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)
    return_type: str = ""
    value_type: str = ""  # property, variable or type alias type
    initializer: str = ""
    is_event_property: bool = False
    parent: ApiItem | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for member in self.members:
            member.parent = self

    def add_member(self, member: ApiItem) -> ApiItem:
        """Attach a child declaration and return it."""
        member.parent = self
        self.members.append(member)
        return member

    def get_hierarchy(self) -> list[ApiItem]:
        """Return the containment chain, outermost container first."""
        chain: list[ApiItem] = []
        current: ApiItem | None = self
        while current is not None:
            chain.append(current)
            current = current.parent
        chain.reverse()
        return chain

    def get_scoped_name_within_package(self) -> str:
        """Return the dotted name, e.g. ``MyNamespace.MyClass.myMethod``."""
        return ".".join(
            item.display_name
            for item in self.get_hierarchy()
            if item.kind not in ROOT_KINDS
        )

    def get_associated_package(self) -> ApiItem | None:
        """Return the package that contains this declaration."""
        for item in self.get_hierarchy():
            if item.kind == ApiItemKind.PACKAGE:
                return item
        return None

    @property
    def entry_point_members(self) -> list[ApiItem]:
        """Members exported from the package's (single) entry point."""
        for member in self.members:
            if member.kind == ApiItemKind.ENTRY_POINT:
                return member.members
        return self.members

    def get_excerpt_with_modifiers(self) -> str:
        """Declaration text including the ``static`` modifier when present."""
        text = self.excerpt.strip()
        if self.is_static and not re.match(r"^static\b", text):
            text = f"static {text}"
        return text

    def walk(self) -> Iterator[ApiItem]:
        """Iterate over this declaration and all nested declarations."""
        yield self
        for member in self.members:
            yield from member.walk()


@dataclass
class ApiModel:
    """Holds every package loaded for one documentation run."""

    packages: list[ApiItem] = field(default_factory=list)

    def add_package(self, package: ApiItem) -> ApiItem:
        """Register a loaded package."""
        self.packages.append(package)
        return package
