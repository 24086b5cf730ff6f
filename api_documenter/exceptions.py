"""Exceptions raised while loading declarations and building pages."""


class ApiDocumenterError(Exception):
    """Base class for all documentation generation errors."""


class UnsupportedItemKindError(ApiDocumenterError):
    """Raised when a declaration kind has no page heading or body handler."""

    def __init__(self, kind: str) -> None:
        """Initialize the error.

        Args:
            kind: The declaration kind that could not be handled

        """
        super().__init__(f"Unsupported API item kind: {kind}")
        self.kind = kind


class DocNodeGrammarError(ApiDocumenterError):
    """Raised when a node is appended where the node grammar forbids it."""


class ApiModelLoadError(ApiDocumenterError):
    """Raised when an API package description cannot be loaded."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize the load error.

        Args:
            message: Error description
            path: Path to the file that caused the error

        """
        super().__init__(message)
        self.path = path
