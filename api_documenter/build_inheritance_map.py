"""Logic for building the class and interface inheritance graph."""

from api_documenter.api_item import ApiItem
from api_documenter.api_item_kind import ApiItemKind
from api_documenter.extract_base_type import extract_base_type
from api_documenter.inheritance_refs import InheritanceMap, InheritanceRefs

INHERITING_KINDS = (ApiItemKind.CLASS, ApiItemKind.INTERFACE)


def build_inheritance_map(
    package: ApiItem, type_map: dict[str, ApiItem]
) -> InheritanceMap:
    """Compute parent links for every class and interface, then child links."""
    inheritance_map: InheritanceMap = {
        item: InheritanceRefs()
        for item in package.walk()
        if item.kind in INHERITING_KINDS
    }

    for item, refs in inheritance_map.items():
        if item.kind == ApiItemKind.CLASS:
            for text in item.extends_types[:1]:
                refs.parent_class = extract_base_type(item, text, type_map)
            for text in item.implements_types:
                parent = extract_base_type(item, text, type_map)
                if parent is not None:
                    refs.parent_interfaces.append(parent)
        else:
            for text in item.extends_types:
                parent = extract_base_type(item, text, type_map)
                if parent is not None:
                    refs.parent_interfaces.append(parent)

    # Reverse edges go into the bucket matching the child's own kind.
    for item, refs in inheritance_map.items():
        for parent in refs.parents():
            parent_refs = (
                inheritance_map.get(parent) if isinstance(parent, ApiItem) else None
            )
            if parent_refs is None:
                continue
            children = (
                parent_refs.child_classes
                if item.kind == ApiItemKind.CLASS
                else parent_refs.child_interfaces
            )
            if not any(child is item for child in children):
                children.append(item)
    return inheritance_map
