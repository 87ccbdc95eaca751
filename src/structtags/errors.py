from typing import Any


class StructTagsError(Exception):
    """Base class for errors raised by structtags."""


class InvalidInputError(StructTagsError, TypeError):
    """Raised when a value handed to the parser is not a record type.

    Records are dataclasses, pydantic models or annotated classes, given
    either as the class itself or as an instance. ``None`` is rejected too.
    """

    def __init__(self, value: Any, reason: str = "expected a record type or instance"):
        self.value_type = (
            value.__name__ if isinstance(value, type) else type(value).__name__
        )
        self.reason = reason
        super().__init__(f"{reason}, got {self.value_type}")
