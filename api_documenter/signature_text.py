"""Text clean-up for declaration signatures and type excerpts."""

import re

from api_documenter.api_item import ApiItem

LEADING_MODIFIERS = ("export ", "default ", "declare ")


def get_signature(item: ApiItem) -> str:
    """Declaration text without ``export``/``default``/``declare`` keywords."""
    text = item.get_excerpt_with_modifiers()
    for modifier in LEADING_MODIFIERS:
        if text.startswith(modifier):
            text = text[len(modifier) :]
    return text


def prettify_code_block(code: str) -> str:
    """Remove the indentation shared by every line after the first."""
    parts = re.split(r"\r?\n", code)
    if len(parts) <= 1:
        return code.strip()
    indent = min(len(part) - len(part.lstrip()) for part in parts[1:])
    return "\n".join([parts[0], *(part[indent:] for part in parts[1:])])
