"""Build the nested trees shown in hierarchy diagrams."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from api_documenter.api_item import ApiItem
from api_documenter.inheritance_refs import InheritanceMap, TypeRef

WalkKey = Literal["child_classes", "child_interfaces", "parent_interfaces"]


@dataclass
class TreeNode:
    item: TypeRef
    children: list[TreeNode] = field(default_factory=list)


def generate_child_tree(
    item: TypeRef,
    inheritance_map: InheritanceMap,
    walk_key: WalkKey,
    _seen: frozenset[int] = frozenset(),
) -> TreeNode:
    """Follow ``walk_key`` links from ``item`` to build a subtree."""
    if isinstance(item, str):
        return TreeNode(item)
    refs = inheritance_map.get(item)
    seen = _seen | {id(item)}
    children = [
        generate_child_tree(child, inheritance_map, walk_key, seen)
        for child in (getattr(refs, walk_key) if refs else [])
        if isinstance(child, str) or id(child) not in seen
    ]
    return TreeNode(item, children)


def generate_parent_tree(
    item: TypeRef, inheritance_map: InheritanceMap, child_node: TreeNode
) -> TreeNode:
    """Graft ``child_node`` below the chain of parent classes of ``item``."""
    seen: set[int] = set()
    node = child_node
    current: TypeRef | None = item
    while current is not None:
        if isinstance(current, str):
            return TreeNode(current, [node])
        if id(current) in seen:
            break
        seen.add(id(current))
        refs = inheritance_map.get(current)
        children = [
            node if child is node.item else TreeNode(child)
            for child in (refs.child_classes if refs else [])
        ]
        if not any(child is node for child in children):
            children.append(node)
        node = TreeNode(current, children)
        current = refs.parent_class if refs else None
    return node


def class_hierarchy_tree(item: ApiItem, inheritance_map: InheritanceMap) -> TreeNode:
    """Return the full root-to-descendants class tree around ``item``."""
    tree = generate_child_tree(item, inheritance_map, "child_classes")
    refs = inheritance_map.get(item)
    if refs and refs.parent_class is not None:
        return generate_parent_tree(refs.parent_class, inheritance_map, tree)
    return tree
