"""Short call-style titles such as ``getArea(width, height)``."""

import re

from api_documenter.api_item import ApiItem, Parameter
from api_documenter.api_item_kind import PARAMETER_KINDS

LITERAL_TYPE_RE = re.compile(r"""^(?:'.*'|".*"|\d+(?:\.\d*)?|true|false|null|undefined)$""")


def _parameter_title(parameter: Parameter) -> str:
    # Literal types tell overloads such as on('close') and on('data') apart.
    if LITERAL_TYPE_RE.match(parameter.type_text):
        return f"{parameter.name}: {parameter.type_text}"
    return parameter.name


def concise_signature(item: ApiItem) -> str:
    """Return the display name, with parameter names for callables."""
    if item.kind in PARAMETER_KINDS:
        params = ", ".join(_parameter_title(p) for p in item.parameters)
        return f"{item.display_name}({params})"
    return item.display_name
