"""
Field tag parsing for record types.

This module extracts ``key:"value"`` tags declared on the fields of
dataclasses, pydantic models and annotated classes, and decodes tag
values into structured mappings.
"""

from .decoders import (
    DefineDecoder,
    IniDecoder,
    TagValueDecoder,
    build_positional_decoder,
    parse_tag_value_define,
    parse_tag_value_ini,
)
from .grammar import extract_field_tags, lookup_tag
from .parser import TagParser, parse_tags_from_type, parse_tags_from_value
from .schema import FieldDescriptor, ParsedTags, StrMap, Tag
from .walker import describe_fields, walk_type

__all__ = [
    "TagParser",
    "parse_tags_from_type",
    "parse_tags_from_value",
    "TagValueDecoder",
    "IniDecoder",
    "DefineDecoder",
    "build_positional_decoder",
    "parse_tag_value_define",
    "parse_tag_value_ini",
    "extract_field_tags",
    "lookup_tag",
    "describe_fields",
    "walk_type",
    "FieldDescriptor",
    "ParsedTags",
    "StrMap",
    "Tag",
]
