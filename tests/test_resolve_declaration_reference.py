"""Tests for resolving {@link} declaration references."""

import pytest
from factories import make_class, make_function, make_method, make_namespace, make_package

from api_documenter.api_item import ApiItem
from api_documenter.build_type_map import build_type_map
from api_documenter.resolve_declaration_reference import resolve_declaration_reference


@pytest.fixture
def items() -> dict[str, ApiItem]:
    purr = make_method("purr")
    cat = make_class("Cat", purr)
    bark = make_method("bark")
    dog = make_class("Dog", bark)
    adopt = make_function("adopt")
    make_package(make_namespace("Zoo", cat), dog, adopt)
    return {"purr": purr, "cat": cat, "bark": bark, "dog": dog, "adopt": adopt}


@pytest.mark.parametrize(
    ("reference", "expected"),
    [
        ("Dog", "dog"),
        ("Dog.bark", "bark"),
        ("Dog#bark", "bark"),
        ("my-package#Dog", "dog"),
        ("Zoo.Cat.purr()", "purr"),
        ("Zoo~Cat", "cat"),
        ("Dog.(bark:instance)", "bark"),
        ("Dog.(bark:1)", "bark"),
        ("Dog#bark:instance", "bark"),
        ("adopt", "adopt"),
    ],
)
def test_resolves(items: dict[str, ApiItem], reference: str, expected: str) -> None:
    """Verify supported reference spellings."""
    type_map = build_type_map(items["adopt"].get_hierarchy()[0])
    result = resolve_declaration_reference(reference, items["adopt"], type_map)
    assert result.error_message is None
    assert result.item is items[expected]


def test_nearest_scope_wins(items: dict[str, ApiItem]) -> None:
    """Verify a bare name resolves from inside its namespace."""
    type_map = build_type_map(items["purr"].get_hierarchy()[0])
    result = resolve_declaration_reference("Cat", items["purr"], type_map)
    assert result.item is items["cat"]


def test_without_context(items: dict[str, ApiItem]) -> None:
    """Verify references resolve by scoped name when no context is given."""
    type_map = build_type_map(items["dog"].get_hierarchy()[0])
    assert resolve_declaration_reference("Zoo.Cat", None, type_map).item is items["cat"]


@pytest.mark.parametrize(
    ("reference", "message"),
    [
        ("Nope", "'Nope'"),
        ("Dog.growl", "Dog has no member 'growl'"),
        ("  ", "Empty declaration reference"),
    ],
)
def test_failures(items: dict[str, ApiItem], reference: str, message: str) -> None:
    """Verify failures are reported as messages rather than exceptions."""
    type_map = build_type_map(items["adopt"].get_hierarchy()[0])
    result = resolve_declaration_reference(reference, items["adopt"], type_map)
    assert result.item is None
    assert result.error_message is not None
    assert message in result.error_message
