from __future__ import annotations


class ContentError(RuntimeError):
    pass


class FormValidationError(ContentError):
    """Input rejected before any write; carries ``{field: [messages]}``."""

    def __init__(self, field_errors: dict[str, list[str]]):
        self.field_errors = field_errors
        super().__init__(f"Invalid input: {', '.join(sorted(field_errors))}")


class QueryError(ContentError):
    """A read or write against the database failed.

    ``str(exc)`` is safe to show to end users; the underlying database error is
    chained as ``__cause__`` and logged where it is raised.
    """


class NotFoundError(ContentError):
    def __init__(self, label: str, entity_id: str):
        self.label = label
        self.entity_id = entity_id
        super().__init__(f"{label} not found")
