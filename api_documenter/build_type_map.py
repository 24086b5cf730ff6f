"""Logic for building the scoped-name lookup table of a package."""

import logging
from collections import deque

from api_documenter.api_item import ApiItem
from api_documenter.api_item_kind import TYPE_KINDS

logger = logging.getLogger(__name__)


def build_type_map(package: ApiItem) -> dict[str, ApiItem]:
    """Map scoped names to classes, interfaces, enums and type aliases.

    Declarations are visited breadth-first. When two declarations share a
    scoped name the later one replaces the earlier one.
    """
    type_map: dict[str, ApiItem] = {}
    queue: deque[ApiItem] = deque([package])
    while queue:
        item = queue.popleft()
        if item.kind in TYPE_KINDS:
            name = item.get_scoped_name_within_package()
            if name in type_map:
                logger.warning("Duplicate type for %s", name)
            type_map[name] = item
        queue.extend(item.members)
    return type_map
