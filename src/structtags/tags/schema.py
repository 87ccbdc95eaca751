from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from structtags.config import get_bool_strings


class StrMap(Dict[str, str]):
    """A string-to-string mapping with coercing accessors.

    Used both for a field's tag map (tag name -> raw value) and for the
    decoded info of one raw value (sub-key -> sub-value).
    """

    def has(self, key: str) -> bool:
        return key in self

    def get_str(self, key: str, default: str = "") -> str:
        return self.get(key, default)

    def get_int(self, key: str, default: int = 0) -> int:
        """Get the value as an int, or ``default`` if absent or not numeric."""
        value = self.get(key)
        if value is None:
            return default
        try:
            return int(value.strip())
        except ValueError:
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key)
        if value is None:
            return default

        value = value.strip().lower()
        spellings = get_bool_strings()
        if value in spellings["true"]:
            return True
        if value in spellings["false"]:
            return False
        return default

    def keys_list(self) -> List[str]:
        return list(self.keys())

    def copy(self) -> "StrMap":
        return StrMap(self)


TagMap = StrMap
DecodedInfo = StrMap
ParsedTags = Dict[str, StrMap]


class Tag:
    """Marker carrying a raw tag string inside ``typing.Annotated``.

    Example::

        class User:
            age: Annotated[int, Tag('json:"age" default:"23"')]
    """

    __slots__ = ("raw",)

    def __init__(self, raw: str):
        if not isinstance(raw, str):
            raise TypeError(f"tag must be a string, got {type(raw).__name__}")
        self.raw = raw

    def __repr__(self) -> str:
        return f"Tag({self.raw!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return False
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)


class FieldDescriptor(BaseModel):
    """Description of one declared field of a record type."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="The declared attribute name of the field.")
    exported: bool = Field(
        description="Whether the field is public (name does not start with '_')."
    )
    raw_tag: str = Field(
        default="", description="The full raw tag string attached to the field."
    )
