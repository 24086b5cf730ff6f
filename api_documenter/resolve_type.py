"""Logic for resolving type names against the enclosing scopes of an item."""

import re

from api_documenter.api_item import ApiItem

NAMED_TYPE_RE = re.compile(r"^[\w_]")


def type_name_candidates(origin: ApiItem, type_name: str) -> list[str]:
    """Return scoped candidates for ``type_name``, nearest scope first."""
    candidates: list[str] = []
    for item in reversed(origin.get_hierarchy()):
        scope = item.get_scoped_name_within_package()
        name = f"{scope}.{type_name}" if scope else type_name
        if name not in candidates:
            candidates.append(name)
    return candidates


def resolve_type(
    origin: ApiItem, type_name: str, type_map: dict[str, ApiItem]
) -> ApiItem | None:
    """Find the declaration ``type_name`` refers to when used inside ``origin``."""
    if not NAMED_TYPE_RE.match(type_name):
        return None
    for name in type_name_candidates(origin, type_name):
        if name in type_map:
            return type_map[name]
    return None
