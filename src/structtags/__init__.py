"""structtags: read and decode per-field tags of Python record types."""

from .errors import InvalidInputError, StructTagsError
from .tags import (
    DefineDecoder,
    IniDecoder,
    StrMap,
    Tag,
    TagParser,
    build_positional_decoder,
    parse_tag_value_define,
    parse_tag_value_ini,
    parse_tags_from_type,
    parse_tags_from_value,
)

__all__ = [
    "TagParser",
    "Tag",
    "StrMap",
    "IniDecoder",
    "DefineDecoder",
    "build_positional_decoder",
    "parse_tag_value_define",
    "parse_tag_value_ini",
    "parse_tags_from_type",
    "parse_tags_from_value",
    "InvalidInputError",
    "StructTagsError",
]
