"""Map declarations to output files, in-page anchors and relative links."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass

from api_documenter.api_item import ApiItem
from api_documenter.api_item_kind import (
    METHOD_KINDS,
    PARAMETER_KINDS,
    PROPERTY_KINDS,
    ROOT_KINDS,
    ApiItemKind,
)

KIND_FOLDERS = {
    ApiItemKind.CLASS: "classes",
    ApiItemKind.ENUM: "enums",
    ApiItemKind.INTERFACE: "interfaces",
    ApiItemKind.NAMESPACE: "namespaces",
    ApiItemKind.TYPE_ALIAS: "types",
    ApiItemKind.FUNCTION: "variables",
    ApiItemKind.VARIABLE: "variables",
}


@dataclass(frozen=True)
class PageLocation:
    """Output file of a page plus the anchor of a member on that page."""

    path: str
    anchor: str | None = None

    @property
    def href(self) -> str:
        return f"{self.path}#{self.anchor}" if self.anchor else self.path


class PageRouter:
    """Deterministic naming scheme for generated pages."""

    def __init__(self, extension: str = ".md") -> None:
        self.extension = extension

    def anchor_for(self, item: ApiItem) -> str | None:
        """Return the in-page anchor of a method, property or event."""
        if item.kind in METHOD_KINDS:
            anchor = f"{item.display_name}-method"
        elif item.kind in PROPERTY_KINDS:
            suffix = "event" if item.is_event_property else "property"
            anchor = f"{item.display_name}-{suffix}"
        else:
            return None
        if item.is_static:
            anchor += "-static"
        if item.kind in PARAMETER_KINDS and item.overload_index > 1:
            anchor += f"-{item.overload_index}"
        return anchor

    def path_for(self, item: ApiItem) -> PageLocation:
        """Return the page that documents ``item``."""
        segments: list[str] = []
        anchor = None
        for ancestor in item.get_hierarchy():
            if ancestor.kind in ROOT_KINDS:
                continue
            if ancestor.kind in METHOD_KINDS or ancestor.kind in PROPERTY_KINDS:
                anchor = self.anchor_for(ancestor)
                continue
            name = ancestor.display_name
            if ancestor.kind in PARAMETER_KINDS and ancestor.overload_index > 1:
                name += f"_{ancestor.overload_index}"
            folder = KIND_FOLDERS.get(ancestor.kind)
            segments.append(f"{folder}/{name}" if folder else name)
        path = ("/".join(segments).lower() or "index") + self.extension
        return PageLocation(path, anchor)

    def link_from(self, origin_path: str, target: ApiItem) -> str:
        """Return the link to ``target`` relative to the page at ``origin_path``."""
        location = self.path_for(target)
        start = posixpath.dirname(origin_path) or "."
        relative = posixpath.relpath(location.path, start)
        if not relative.startswith(("./", "../")):
            relative = f"./{relative}"
        return PageLocation(relative, location.anchor).href
