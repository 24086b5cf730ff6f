"""Data models for structured documentation comments."""

from dataclasses import dataclass, field

from api_documenter.doc_nodes import DocSection


@dataclass
class DocBlock:
    """A block introduced by a tag such as ``@remarks`` or ``@example``."""

    tag_name: str  # without the leading "@", e.g. "example"
    content: DocSection = field(default_factory=DocSection)


@dataclass
class DocParamBlock(DocBlock):
    """An ``@param`` block documenting one parameter."""

    parameter_name: str = ""


@dataclass
class DocComment:
    """Parsed form of a declaration's doc comment."""

    summary_section: DocSection = field(default_factory=DocSection)
    remarks_block: DocBlock | None = None
    deprecated_block: DocBlock | None = None
    returns_block: DocBlock | None = None
    params: list[DocParamBlock] = field(default_factory=list)
    custom_blocks: list[DocBlock] = field(default_factory=list)
    modifier_tags: set[str] = field(default_factory=set)

    def find_custom_blocks(self, tag_name: str) -> list[DocBlock]:
        """Return custom blocks with the given tag name (case-insensitive)."""
        wanted = tag_name.lstrip("@").upper()
        return [b for b in self.custom_blocks if b.tag_name.upper() == wanted]

    def find_param_block(self, parameter_name: str) -> DocParamBlock | None:
        """Return the ``@param`` block for ``parameter_name`` if documented."""
        for block in self.params:
            if block.parameter_name == parameter_name:
                return block
        return None

    def has_modifier(self, tag_name: str) -> bool:
        """Check for a modifier tag such as ``@beta``."""
        wanted = tag_name.lstrip("@").upper()
        return any(tag.upper() == wanted for tag in self.modifier_tags)
