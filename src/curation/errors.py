from __future__ import annotations


class QueryError(ValueError):
    """Base class for caller precondition violations in the listing query pipeline."""


class InvalidPageSizeError(QueryError):
    def __init__(self, page_size: int) -> None:
        super().__init__(f"page_size must be a positive integer, got {page_size!r}")
        self.page_size = page_size


class UnknownSortFieldError(QueryError):
    def __init__(self, field: str) -> None:
        super().__init__(f"Unknown sort field: {field!r}")
        self.field = field


class UnknownEnumValueError(QueryError):
    def __init__(self, kind: str, value: object, allowed: tuple[str, ...]) -> None:
        super().__init__(f"Unknown {kind} {value!r}; expected one of {', '.join(allowed)}")
        self.kind = kind
        self.value = value
        self.allowed = allowed
