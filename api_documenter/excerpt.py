"""Helpers for the token-based declaration excerpts of api.json files."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Excerpt:
    """Text covered by an end-exclusive range of excerpt tokens."""

    tokens: tuple[str, ...]
    start_index: int = 0
    end_index: int = 0

    @property
    def text(self) -> str:
        return "".join(self.tokens[self.start_index : self.end_index])

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


def excerpt_tokens(data: dict[str, Any]) -> tuple[str, ...]:
    """Return the token texts of a serialized declaration."""
    return tuple(str(t.get("text", "")) for t in data.get("excerptTokens") or [])


def excerpt_text(tokens: tuple[str, ...], token_range: dict[str, Any] | None) -> str:
    """Return the stripped text for ``token_range`` or ``""`` when absent."""
    if not token_range:
        return ""
    start = int(token_range.get("startIndex", 0))
    end = int(token_range.get("endIndex", start))
    return Excerpt(tokens, start, end).text.strip()
