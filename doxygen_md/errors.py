"""Exception types raised while building the documentation site."""


class DoxygenMdError(Exception):
    """Base class for all conversion errors."""

    def __init__(self, message: str, compound_id: str | None = None) -> None:
        """Store the message and the compound it refers to, if any."""
        super().__init__(message)
        self.compound_id = compound_id


class MalformedInput(DoxygenMdError):  # noqa: N818
    """The XML document is not well-formed or its compound has no id."""


class UnsupportedSchema(DoxygenMdError):  # noqa: N818
    """The document is not a compound this tool renders (page, dir, example...)."""

    def __init__(self, message: str, compound_id: str | None, kind: str) -> None:
        """Store the rejected kind alongside the message."""
        super().__init__(message, compound_id)
        self.kind = kind


class DuplicateId(DoxygenMdError):  # noqa: N818
    """Two compounds share the same id."""


class OrphanReference(DoxygenMdError):  # noqa: N818
    """A navigation entry declares a parent that was never rendered."""

    def __init__(self, message: str, compound_id: str, parent_id: str) -> None:
        """Store the missing parent id."""
        super().__init__(message, compound_id)
        self.parent_id = parent_id
