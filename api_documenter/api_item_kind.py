"""Enumerations describing declaration kinds and release tags."""

from enum import Enum


class ApiItemKind(str, Enum):
    """Kinds of declarations found in an API package description."""

    MODEL = "Model"
    PACKAGE = "Package"
    ENTRY_POINT = "EntryPoint"
    NAMESPACE = "Namespace"
    CLASS = "Class"
    INTERFACE = "Interface"
    ENUM = "Enum"
    ENUM_MEMBER = "EnumMember"
    METHOD = "Method"
    METHOD_SIGNATURE = "MethodSignature"
    PROPERTY = "Property"
    PROPERTY_SIGNATURE = "PropertySignature"
    FUNCTION = "Function"
    VARIABLE = "Variable"
    TYPE_ALIAS = "TypeAlias"
    CONSTRUCTOR = "Constructor"
    CONSTRUCT_SIGNATURE = "ConstructSignature"
    CALL_SIGNATURE = "CallSignature"
    INDEX_SIGNATURE = "IndexSignature"


class ReleaseTag(str, Enum):
    """Release maturity of a declaration."""

    NONE = "None"
    INTERNAL = "Internal"
    ALPHA = "Alpha"
    BETA = "Beta"
    PUBLIC = "Public"


# Containers that never show up in scoped names, paths or breadcrumbs.
ROOT_KINDS = frozenset(
    {ApiItemKind.MODEL, ApiItemKind.PACKAGE, ApiItemKind.ENTRY_POINT}
)

# Kinds recorded in the per-package type table.
TYPE_KINDS = frozenset(
    {
        ApiItemKind.CLASS,
        ApiItemKind.INTERFACE,
        ApiItemKind.ENUM,
        ApiItemKind.TYPE_ALIAS,
    }
)

METHOD_KINDS = frozenset({ApiItemKind.METHOD, ApiItemKind.METHOD_SIGNATURE})

PROPERTY_KINDS = frozenset({ApiItemKind.PROPERTY, ApiItemKind.PROPERTY_SIGNATURE})

# Kinds whose declarations carry a parameter list.
PARAMETER_KINDS = frozenset(
    {
        ApiItemKind.METHOD,
        ApiItemKind.METHOD_SIGNATURE,
        ApiItemKind.FUNCTION,
        ApiItemKind.CONSTRUCTOR,
        ApiItemKind.CONSTRUCT_SIGNATURE,
        ApiItemKind.CALL_SIGNATURE,
        ApiItemKind.INDEX_SIGNATURE,
    }
)

# Kinds whose declarations carry a return type.
RETURN_TYPE_KINDS = frozenset(
    {
        ApiItemKind.METHOD,
        ApiItemKind.METHOD_SIGNATURE,
        ApiItemKind.FUNCTION,
        ApiItemKind.CALL_SIGNATURE,
        ApiItemKind.CONSTRUCT_SIGNATURE,
        ApiItemKind.INDEX_SIGNATURE,
    }
)
