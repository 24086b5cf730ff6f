"""Logic for loading api-extractor ``*.api.json`` package descriptions."""

import json
import logging
from pathlib import Path
from typing import Any, cast

from api_documenter.api_item import ApiItem, Parameter
from api_documenter.api_item_kind import ApiItemKind, ReleaseTag
from api_documenter.excerpt import excerpt_text, excerpt_tokens
from api_documenter.exceptions import ApiModelLoadError
from api_documenter.parse_doc_comment import parse_doc_comment

logger = logging.getLogger(__name__)

_KINDS = {kind.value: kind for kind in ApiItemKind}
_RELEASE_TAGS = {tag.value: tag for tag in ReleaseTag}
_MODIFIER_RELEASE_TAGS = (
    ("beta", ReleaseTag.BETA),
    ("alpha", ReleaseTag.ALPHA),
    ("internal", ReleaseTag.INTERNAL),
    ("public", ReleaseTag.PUBLIC),
)


def load_api_package(path: Path, config: dict[str, Any] | None = None) -> ApiItem:
    """Load one package description file into a tree of ``ApiItem``."""
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Could not parse {path}: {exc}"
        raise ApiModelLoadError(msg, str(path)) from exc

    if not isinstance(doc, dict) or doc.get("kind") != ApiItemKind.PACKAGE.value:
        msg = f"Expected a Package document in {path}"
        raise ApiModelLoadError(msg, str(path))

    # The root kind was checked above, so a package is always built.
    return cast(ApiItem, _build_item(doc, config, str(path)))


def _build_item(
    data: dict[str, Any], config: dict[str, Any] | None, path: str
) -> ApiItem | None:
    kind = _KINDS.get(str(data.get("kind")))
    if kind is None:
        logger.warning(
            "Skipping %r with unknown kind %r in %s",
            data.get("name"),
            data.get("kind"),
            path,
        )
        return None

    tokens = excerpt_tokens(data)
    item = ApiItem(
        kind=kind,
        display_name=str(data.get("name") or ""),
        release_tag=_RELEASE_TAGS.get(str(data.get("releaseTag")), ReleaseTag.NONE),
        is_static=bool(data.get("isStatic", False)),
        overload_index=int(data.get("overloadIndex") or 1),
        excerpt="".join(tokens).strip(),
    )

    raw_comment = data.get("docComment")
    if raw_comment:
        item.doc_comment = parse_doc_comment(raw_comment, config)
        if item.doc_comment.has_modifier("eventProperty"):
            item.is_event_property = True
        if item.release_tag == ReleaseTag.NONE:
            for tag, release_tag in _MODIFIER_RELEASE_TAGS:
                if item.doc_comment.has_modifier(tag):
                    item.release_tag = release_tag
                    break

    _read_type_references(item, data, tokens)

    for member_data in data.get("members") or []:
        if not isinstance(member_data, dict):
            msg = f"Malformed member of {item.display_name!r}"
            raise ApiModelLoadError(msg, path)
        member = _build_item(member_data, config, path)
        if member is not None:
            item.add_member(member)
    return item


def _read_type_references(
    item: ApiItem, data: dict[str, Any], tokens: tuple[str, ...]
) -> None:
    if item.kind == ApiItemKind.CLASS:
        extends = excerpt_text(tokens, data.get("extendsTokenRange"))
        if extends:
            item.extends_types.append(extends)
    elif item.kind == ApiItemKind.INTERFACE:
        for token_range in data.get("extendsTokenRanges") or []:
            extends = excerpt_text(tokens, token_range)
            if extends:
                item.extends_types.append(extends)
    for token_range in data.get("implementsTokenRanges") or []:
        implements = excerpt_text(tokens, token_range)
        if implements:
            item.implements_types.append(implements)

    for param in data.get("parameters") or []:
        item.parameters.append(
            Parameter(
                name=str(param.get("parameterName", "")),
                type_text=excerpt_text(tokens, param.get("parameterTypeTokenRange")),
            )
        )

    item.return_type = excerpt_text(tokens, data.get("returnTypeTokenRange"))
    for key in ("propertyTypeTokenRange", "variableTypeTokenRange", "typeTokenRange"):
        if key in data:
            item.value_type = excerpt_text(tokens, data[key])
            break
    item.initializer = excerpt_text(tokens, data.get("initializerTokenRange"))
