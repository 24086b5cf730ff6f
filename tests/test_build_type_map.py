"""Tests for the scoped-name type table."""

import logging

import pytest
from factories import make_class, make_enum, make_interface, make_method, make_namespace, make_package

from api_documenter.api_item import ApiItem
from api_documenter.api_item_kind import ApiItemKind
from api_documenter.build_inheritance_map import build_inheritance_map
from api_documenter.build_type_map import build_type_map


def test_type_map_uses_scoped_names() -> None:
    """Verify nested declarations are keyed by their dotted scope."""
    dog = make_class("Dog", make_method("bark"))
    cat = make_class("Cat")
    color = make_enum("Color", ("Red", "0"))
    alias = ApiItem(ApiItemKind.TYPE_ALIAS, "Id")
    package = make_package(dog, make_namespace("Zoo", cat, color), alias)

    type_map = build_type_map(package)

    assert type_map == {"Dog": dog, "Id": alias, "Zoo.Cat": cat, "Zoo.Color": color}


def test_type_map_skips_non_type_kinds() -> None:
    """Verify namespaces, methods and enum members are not recorded."""
    package = make_package(make_namespace("Zoo", make_class("Cat", make_method("purr"))))

    assert list(build_type_map(package)) == ["Zoo.Cat"]


def test_duplicate_type_name_last_write_wins(caplog: pytest.LogCaptureFixture) -> None:
    """Verify the later declaration replaces the earlier one and one warning is logged."""
    first = make_class("Result")
    second = make_interface("Result")
    user = make_class("Outcome", extends="Result")
    package = make_package(first, second, user)

    with caplog.at_level(logging.WARNING):
        type_map = build_type_map(package)

    assert type_map["Result"] is second
    duplicates = [r for r in caplog.records if "Duplicate type for Result" in r.getMessage()]
    assert len(duplicates) == 1

    inheritance_map = build_inheritance_map(package, type_map)
    assert inheritance_map[user].parent_class is second
