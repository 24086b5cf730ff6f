"""Logic for turning ``extends``/``implements`` text into a type reference."""

from __future__ import annotations

import logging
import re

from api_documenter.api_item import ApiItem
from api_documenter.inheritance_refs import TypeRef
from api_documenter.resolve_type import resolve_type

logger = logging.getLogger(__name__)

# A (possibly qualified) type name with optional generic arguments.
TYPE_REFERENCE_RE = re.compile(
    r"^(?P<name>[A-Za-z_$][\w$]*(?:\s*\.\s*[A-Za-z_$][\w$]*)*)\s*(?:<.*>)?$",
    re.DOTALL,
)


def extract_base_type(
    origin: ApiItem, text: str, type_map: dict[str, ApiItem]
) -> TypeRef | None:
    """Resolve a base type clause to a declaration or a plain-text label.

    Returns ``None`` only for empty text.
    """
    text = text.strip()
    if not text:
        return None
    match = TYPE_REFERENCE_RE.match(text)
    if match is None:
        logger.debug("Cannot parse base type %r of %s", text, origin.display_name)
        return text
    name = re.sub(r"\s+", "", match.group("name"))
    resolved = resolve_type(origin, name, type_map)
    if resolved is None:
        logger.debug(
            "Base type %s of %s is not declared in this package",
            name,
            origin.get_scoped_name_within_package(),
        )
        return name
    return resolved
