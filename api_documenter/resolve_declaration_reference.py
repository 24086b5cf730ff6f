"""Resolve ``{@link}`` declaration references to declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass

from api_documenter.api_item import ApiItem
from api_documenter.resolve_type import resolve_type

# ":instance", ":static", ":1" and friends
SELECTOR_RE = re.compile(r":\w+")
# "bar()" becomes "bar", "(bar)" becomes "bar"
GROUP_RE = re.compile(r"\(\s*([\w$]*)\s*\)")
PACKAGE_NAME_RE = re.compile(r"[@/-]")


@dataclass(frozen=True)
class ReferenceResult:
    item: ApiItem | None = None
    error_message: str | None = None


def _split_reference(reference: str, context_item: ApiItem | None) -> list[str]:
    text = reference.strip()
    if "#" in text:
        prefix, _, rest = text.partition("#")
        package = context_item.get_associated_package() if context_item else None
        is_package = PACKAGE_NAME_RE.search(prefix) or (
            package is not None and prefix == package.display_name
        )
        # "Foo#bar" is TSDoc member navigation, "pkg#Foo" names a package.
        text = rest if is_package else f"{prefix}.{rest}"
    text = SELECTOR_RE.sub("", text.replace("~", "."))
    text = GROUP_RE.sub(r"\1", text)
    return [segment.strip() for segment in text.split(".") if segment.strip()]


def _find_member(container: ApiItem, name: str) -> ApiItem | None:
    for member in container.entry_point_members:
        if member.display_name == name:
            return member
    return None


def resolve_declaration_reference(
    reference: str, context_item: ApiItem | None, type_map: dict[str, ApiItem]
) -> ReferenceResult:
    """Resolve ``reference`` as seen from ``context_item``; never raises."""
    segments = _split_reference(reference, context_item)
    if not segments:
        return ReferenceResult(error_message=f"Empty declaration reference {reference!r}")

    item: ApiItem | None = None
    consumed = 0
    for count in range(len(segments), 0, -1):
        name = ".".join(segments[:count])
        if context_item is not None:
            item = resolve_type(context_item, name, type_map)
        else:
            item = type_map.get(name)
        if item is not None:
            consumed = count
            break

    if item is None and context_item is not None:
        package = context_item.get_associated_package()
        if package is not None:
            item = _find_member(package, segments[0])
            consumed = 1

    if item is None:
        return ReferenceResult(
            error_message=f"The package does not have an export {segments[0]!r}"
        )

    for segment in segments[consumed:]:
        member = _find_member(item, segment)
        if member is None:
            return ReferenceResult(
                error_message=(
                    f"{item.get_scoped_name_within_package()} has no member "
                    f"{segment!r}"
                )
            )
        item = member
    return ReferenceResult(item=item)
