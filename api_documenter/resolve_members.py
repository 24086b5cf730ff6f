"""Merge the own and inherited members of a class or interface.

The inherited side is collected by walking the inheritance graph upward one
level at a time: first the direct parents, then their parents, and so on.
Every member name keeps a chain of the same-named members found on the way,
nearest ancestor first. Overloads at one level are kept together as a set of
alternates; no attempt is made to pair individual overloads across levels.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from api_documenter.api_item import ApiItem
from api_documenter.api_item_kind import ApiItemKind
from api_documenter.inheritance_refs import InheritanceMap, TypeRef

_IMPLEMENTS = {
    (ApiItemKind.METHOD, ApiItemKind.METHOD_SIGNATURE),
    (ApiItemKind.PROPERTY, ApiItemKind.PROPERTY_SIGNATURE),
}


@dataclass
class ResolvedMember:
    """One member name of a type, with its own declarations and ancestors."""

    name: str
    own_members: list[ApiItem] = field(default_factory=list)
    parents: list[ApiItem] = field(default_factory=list)

    @property
    def own_member(self) -> ApiItem | None:
        return self.own_members[0] if self.own_members else None

    @property
    def member(self) -> ApiItem:
        """The declaration shown for this name: own if present, else inherited."""
        if self.own_members:
            return self.own_members[0]
        return self.parents[0]


@dataclass
class _LevelEntry:
    level: int
    alternates: list[ApiItem]


def get_inherited_members(
    item: ApiItem, inheritance_map: InheritanceMap
) -> dict[str, list[ApiItem]]:
    """Collect ancestor members by name, nearest level first."""
    members: dict[str, list[_LevelEntry]] = {}
    refs = inheritance_map.get(item)
    current: list[TypeRef] = refs.parents() if refs else []
    visited: set[int] = {id(item)}
    level = 1

    while current:
        upcoming: list[TypeRef] = []
        for ancestor in current:
            # Labels have no members; revisits would loop on cyclic input.
            if isinstance(ancestor, str) or id(ancestor) in visited:
                continue
            visited.add(id(ancestor))
            for member in ancestor.members:
                entries = members.setdefault(member.display_name, [])
                if entries and entries[-1].level == level:
                    entries[-1].alternates.append(member)
                else:
                    entries.append(_LevelEntry(level, [member]))
            ancestor_refs = inheritance_map.get(ancestor)
            if ancestor_refs:
                upcoming.extend(ancestor_refs.parents())
        current = upcoming
        level += 1

    return {
        name: [m for entry in entries for m in entry.alternates]
        for name, entries in members.items()
    }


def get_resolved_members(
    item: ApiItem, inheritance_map: InheritanceMap
) -> list[ResolvedMember]:
    """Return one entry per distinct member name, ordered by name."""
    own: dict[str, list[ApiItem]] = {}
    for member in sorted(item.members, key=lambda m: m.display_name):
        own.setdefault(member.display_name, []).append(member)
    own_names = sorted(own)
    inherited = get_inherited_members(item, inheritance_map)
    inherited_names = sorted(inherited)

    resolved: list[ResolvedMember] = []
    i = j = 0
    while i < len(own_names) or j < len(inherited_names):
        own_name = own_names[i] if i < len(own_names) else None
        inherited_name = inherited_names[j] if j < len(inherited_names) else None
        if own_name is None or (
            inherited_name is not None and inherited_name < own_name
        ):
            resolved.append(
                ResolvedMember(inherited_name, parents=inherited[inherited_name])
            )
            j += 1
        elif inherited_name is None or own_name < inherited_name:
            resolved.append(ResolvedMember(own_name, own_members=own[own_name]))
            i += 1
        else:
            resolved.append(
                ResolvedMember(
                    own_name, own_members=own[own_name], parents=inherited[own_name]
                )
            )
            i += 1
            j += 1
    return resolved


def inheritance_label(member: ApiItem, parent: ApiItem) -> str:
    """Return the annotation prefix relating ``member`` to its nearest ancestor."""
    if member is parent:
        return "Inherited from "
    if (member.kind, parent.kind) in _IMPLEMENTS:
        return "Implements "
    return "Overrides "
