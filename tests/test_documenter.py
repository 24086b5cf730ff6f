"""End-to-end tests for page building and Markdown output."""

from __future__ import annotations

import pytest
from factories import (
    make_class,
    make_enum,
    make_function,
    make_interface,
    make_method,
    make_namespace,
    make_package,
    make_property,
)

from api_documenter.api_item import ApiItem, ApiModel
from api_documenter.api_item_kind import ApiItemKind, ReleaseTag
from api_documenter.build_inheritance_map import build_inheritance_map
from api_documenter.build_type_map import build_type_map
from api_documenter.doc_node_grammar import DEFAULT_ALLOWED_CHILDREN, DocNodeGrammar
from api_documenter.doc_nodes import DocNodeKind
from api_documenter.documenter import MarkdownDocumenter
from api_documenter.exceptions import DocNodeGrammarError, UnsupportedItemKindError
from api_documenter.page import Page
from api_documenter.page_builder import PageBuilder
from api_documenter.page_context import PageContext
from api_documenter.page_router import PageRouter


def _pages(package: ApiItem) -> dict[str, Page]:
    return {page.path: page for page in MarkdownDocumenter().generate_package(package)}


def test_single_class_page() -> None:
    """Verify the page of a class with one method."""
    pages = _pages(make_package(make_class("Dog", make_method("bark"))))

    assert list(pages) == ["classes/dog.md", "index.md"]
    text = pages["classes/dog.md"].text
    assert text.startswith("[Home](../index.md) &gt; [Dog](./dog.md)\n\n# Class Dog\n\n")
    assert "<b>Signature:</b>\n\n```typescript\nclass Dog\n```\n" in text
    assert "## Methods\n\n|  Method | Description |\n|  --- | --- |\n" in text
    assert "|  [bark()](./dog.md#bark-method) |  |" in text
    assert '## Method Details\n\n<a id="bark-method"></a>\n\n### bark()\n\n' in text
    assert "<b>Returns:</b>\n\n`void`\n\n" in text
    assert "Class Hierarchy" not in text


def test_package_page() -> None:
    """Verify the package page lists its classes and comes last."""
    package = make_package(make_class("Dog"), name="zoo-kit")
    pages = MarkdownDocumenter().generate_package(package)

    assert pages[-1].item is package
    text = pages[-1].text
    assert text.startswith("[Home](./index.md)\n\n# zoo-kit\n\n")
    assert "## Classes\n\n|  Class | Description |" in text
    assert "|  [Dog](./classes/dog.md) |  |" in text
    assert "Signature" not in text


def test_generate_covers_every_package() -> None:
    """Verify generate() returns the pages of all packages."""
    model = ApiModel()
    model.add_package(make_package(make_class("A"), name="first"))
    model.add_package(make_package(make_class("B"), name="second"))

    pages = MarkdownDocumenter().generate(model)

    assert [page.path for page in pages] == [
        "classes/a.md",
        "index.md",
        "classes/b.md",
        "index.md",
    ]


def test_implemented_interface_member() -> None:
    """Verify an implementing member links to the interface member it implements."""
    animal = make_interface("Animal", make_method("speak", kind=ApiItemKind.METHOD_SIGNATURE))
    dog = make_class("Dog", make_method("speak"), implements=("Animal",))
    pages = _pages(make_package(animal, dog))

    text = pages["classes/dog.md"].text
    note = "<i>Implements [speak](../interfaces/animal.md#speak-method)</i>"
    assert f"|  [speak()](./dog.md#speak-method) | {note} |" in text
    assert "## Implements Interfaces\n\n- <b>Dog</b>\n    - [Animal](../interfaces/animal.md)\n" in text
    assert "Implemented By" not in pages["interfaces/animal.md"].text


def test_implemented_by_lists_child_interfaces() -> None:
    """Verify an interface page shows the interfaces extending it."""
    animal = make_interface("Animal")
    pet = make_interface("Pet", extends=("Animal",))
    pages = _pages(make_package(animal, pet))

    text = pages["interfaces/animal.md"].text
    assert "## Implemented By\n\n- <b>Animal</b>\n    - [Pet](./pet.md)\n" in text
    assert "## Implements Interfaces\n\n- <b>Pet</b>\n    - [Animal](./animal.md)\n" in (
        pages["interfaces/pet.md"].text
    )


def test_class_hierarchy() -> None:
    """Verify the class hierarchy diagram around the middle class."""
    pages = _pages(
        make_package(
            make_class("Animal"),
            make_class("Dog", extends="Animal"),
            make_class("Puppy", extends="Dog"),
        )
    )

    text = pages["classes/dog.md"].text
    assert (
        "## Class Hierarchy\n\n"
        "- [Animal](./animal.md)\n"
        "    - <b>Dog</b>\n"
        "        - [Puppy](./puppy.md)\n"
    ) in text


def test_inherited_member_row() -> None:
    """Verify inherited members get a table row but no details section."""
    pages = _pages(
        make_package(
            make_class("Animal", make_method("eat")),
            make_class("Dog", extends="Animal"),
        )
    )

    text = pages["classes/dog.md"].text
    assert (
        "|  [eat()](./animal.md#eat-method) | "
        "<i>Inherited from [eat](./animal.md#eat-method)</i> |"
    ) in text
    assert "Method Details" not in text


def test_overloads_get_distinct_anchors() -> None:
    """Verify each own overload gets its own row and details section."""
    emitter = make_class(
        "Emitter",
        make_method("on", ("event", "'close'")),
        make_method("on", ("event", "'data'"), overload_index=2),
    )
    text = _pages(make_package(emitter))["classes/emitter.md"].text

    assert "|  [on(event: 'close')](./emitter.md#on-method) |  |" in text
    assert "|  [on(event: 'data')](./emitter.md#on-method-2) |  |" in text
    assert '<a id="on-method"></a>' in text
    assert '<a id="on-method-2"></a>' in text
    assert "### on(event: 'data')" in text


def test_property_with_default_value() -> None:
    """Verify property rows and the default value paragraph."""
    speaker = make_class(
        "Speaker",
        make_property("volume", "number", doc="Volume.\n@defaultValue `3`"),
        make_property("beep", "Event", is_event_property=True, is_static=True),
    )
    text = _pages(make_package(speaker))["classes/speaker.md"].text

    assert "## Static Events" in text
    assert "|  [beep](./speaker.md#beep-event-static) | `Event` |  |" in text
    assert "## Properties\n\n|  Property | Type | Description |" in text
    assert "|  [volume](./speaker.md#volume-property) | `number` | Volume. |" in text
    assert "<b>Default Value:</b> `3`" in text
    assert text.index("## Static Events") < text.index("## Properties")


def test_function_page_links_types() -> None:
    """Verify parameter types and {@link} tags resolve to relative links."""
    adopt = make_function("adopt", ("pet", "Dog"), return_type="Dog", doc="Adopts a {@link Dog}.")
    pages = _pages(make_package(make_class("Dog"), adopt))

    text = pages["variables/adopt.md"].text
    assert text.startswith("[Home](../index.md) &gt; [adopt](./adopt.md)\n\n# Function adopt\n\n")
    assert "Adopts a [Dog](../classes/dog.md)" in text
    assert "## Parameters\n\n|  Parameter | Type | Description |" in text
    assert "|  pet | [Dog](../classes/dog.md) |  |" in text
    assert "<b>Returns:</b>\n\n`Dog`" in text
    assert (
        "|  [adopt(pet)](./variables/adopt.md) | Adopts a [Dog](./classes/dog.md)<!-- -->. |"
    ) in pages["index.md"].text


def test_enum_page() -> None:
    """Verify the enumeration members table."""
    pages = _pages(make_package(make_enum("Color", ("Red", "0"), ("Green", "1"))))

    text = pages["enums/color.md"].text
    assert "## Enumeration Members\n\n|  Member | Value | Description |" in text
    assert "|  Red | `0` |  |\n|  Green | `1` |  |" in text
    assert "## Enumerations" in pages["index.md"].text


def test_beta_and_deprecated_notices() -> None:
    """Verify beta and deprecation note boxes and the (BETA) marker."""
    gadget = make_class(
        "Gadget",
        release_tag=ReleaseTag.BETA,
        doc="Old thing.\n@deprecated Use Dog instead.",
    )
    pages = _pages(make_package(gadget))

    text = pages["classes/gadget.md"].text
    assert "> This API is provided as a preview for developers" in text
    assert "> Warning: This API is now obsolete.\n> \n> Use Dog instead.\n" in text
    assert text.index("preview") < text.index("obsolete") < text.index("Old thing.")
    assert "|  [Gadget](./classes/gadget.md) | <b><i>(BETA)</i></b> Old thing. |" in (
        pages["index.md"].text
    )


def test_examples() -> None:
    """Verify example blocks are numbered when there are several."""
    doc = "Widget.\n@example\n```ts\nnew Widget();\n```\n@example\nSecond."
    text = _pages(make_package(make_class("Widget", doc=doc)))["classes/widget.md"].text

    assert "## Example 1\n\n```ts\nnew Widget();\n```\n" in text
    assert "## Example 2\n\nSecond.\n" in text


def test_namespace_pages() -> None:
    """Verify nested page paths and breadcrumbs."""
    pages = _pages(make_package(make_namespace("Zoo", make_class("Cat"))))

    assert list(pages) == ["namespaces/zoo/classes/cat.md", "namespaces/zoo.md", "index.md"]
    cat = pages["namespaces/zoo/classes/cat.md"].text
    assert cat.startswith(
        "[Home](../../../index.md) &gt; [Zoo](../../zoo.md) &gt; [Cat](./cat.md)\n\n"
        "# Class Zoo.Cat\n\n"
    )
    zoo = pages["namespaces/zoo.md"].text
    assert "|  [Cat](./zoo/classes/cat.md) |  |" in zoo
    assert "```typescript\nnamespace Zoo\n```" in zoo


def test_unsupported_kind_raises() -> None:
    """Verify a kind without a body handler is rejected."""
    ctor = ApiItem(ApiItemKind.CONSTRUCTOR, "constructor")
    package = make_package(make_class("Dog", ctor))
    type_map = build_type_map(package)
    context = PageContext(type_map, build_inheritance_map(package, type_map))

    with pytest.raises(UnsupportedItemKindError, match="Constructor"):
        PageBuilder(PageRouter()).build_body(context, ctor)


def test_custom_grammar_is_enforced() -> None:
    """Verify a grammar without tables rejects member tables."""
    allowed = dict(DEFAULT_ALLOWED_CHILDREN)
    allowed[DocNodeKind.SECTION] = allowed[DocNodeKind.SECTION] - {DocNodeKind.TABLE}
    documenter = MarkdownDocumenter(grammar=DocNodeGrammar(allowed))

    with pytest.raises(DocNodeGrammarError, match="Table is not allowed inside Section"):
        documenter.generate_package(make_package(make_class("Dog")))
