import dataclasses
import inspect
import typing
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger
from pydantic import BaseModel

from structtags.config import get_tag_metadata_key
from structtags.errors import InvalidInputError

from .grammar import extract_field_tags
from .schema import FieldDescriptor, ParsedTags, Tag

_NON_RECORD_TYPES = (
    int,
    float,
    complex,
    bool,
    str,
    bytes,
    bytearray,
    list,
    tuple,
    dict,
    set,
    frozenset,
    type,
    object,
)


def is_record_type(cls: Any) -> bool:
    """Check whether ``cls`` is a class whose fields can carry tags."""
    if not isinstance(cls, type):
        return False
    if dataclasses.is_dataclass(cls):
        return True
    if issubclass(cls, BaseModel):
        return cls is not BaseModel
    if cls in _NON_RECORD_TYPES:
        return False
    return any(inspect.get_annotations(base) for base in cls.__mro__[:-1])


def resolve_record_type(value: Any) -> type:
    """
    Resolve the record class to walk for a class or instance.

    Raises:
        InvalidInputError: If ``value`` is None or not a record.
    """
    if value is None:
        raise InvalidInputError(value, "cannot parse tags of None")

    cls = value if isinstance(value, type) else type(value)
    if not is_record_type(cls):
        raise InvalidInputError(value)
    return cls


def _tag_from_annotation(annotation: Any) -> Optional[str]:
    if typing.get_origin(annotation) is not typing.Annotated:
        return None
    for extra in annotation.__metadata__:
        if isinstance(extra, Tag):
            return extra.raw
    return None


def _is_class_var(annotation: Any) -> bool:
    if annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar:
        return True
    return isinstance(annotation, str) and annotation.startswith(
        ("ClassVar", "typing.ClassVar")
    )


def _class_annotations(cls: type) -> Dict[str, Any]:
    """Get annotations in declaration order, base classes first."""
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        logger.warning(
            f"Could not resolve annotations of {cls.__name__}, using raw ones: {e}"
        )

    annotations: Dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        annotations.update(inspect.get_annotations(base))
    return annotations


def _describe_dataclass(cls: type, hints: Dict[str, Any]) -> List[FieldDescriptor]:
    key = get_tag_metadata_key()
    descriptors = []
    for f in dataclasses.fields(cls):
        raw = f.metadata.get(key)
        if raw is None:
            raw = _tag_from_annotation(hints.get(f.name, f.type))
        descriptors.append(
            FieldDescriptor(
                name=f.name, exported=not f.name.startswith("_"), raw_tag=raw or ""
            )
        )
    return descriptors


def _describe_model(cls: type) -> List[FieldDescriptor]:
    key = get_tag_metadata_key()
    descriptors = []
    for name, info in cls.model_fields.items():
        raw = None
        extra = info.json_schema_extra
        if isinstance(extra, dict):
            raw = extra.get(key)
        if raw is None:
            raw = next((m.raw for m in info.metadata if isinstance(m, Tag)), None)
        descriptors.append(
            FieldDescriptor(
                name=name, exported=not name.startswith("_"), raw_tag=raw or ""
            )
        )
    return descriptors


def describe_fields(cls: type) -> List[FieldDescriptor]:
    """
    Describe the declared fields of a record type in declaration order.

    Args:
        cls: A dataclass, pydantic model or annotated class

    Returns:
        One FieldDescriptor per declared field, private ones included.
    """
    if issubclass(cls, BaseModel):
        return _describe_model(cls)

    hints = _class_annotations(cls)
    if dataclasses.is_dataclass(cls):
        return _describe_dataclass(cls, hints)

    descriptors = []
    for name, annotation in hints.items():
        if _is_class_var(annotation):
            continue
        descriptors.append(
            FieldDescriptor(
                name=name,
                exported=not name.startswith("_"),
                raw_tag=_tag_from_annotation(annotation) or "",
            )
        )
    return descriptors


def walk_type(cls: type, tag_names: Iterable[str]) -> ParsedTags:
    """
    Build the per-field tag maps of a record type.

    Private fields are skipped. Every public field gets an entry, empty when
    none of ``tag_names`` is present on it.
    """
    tag_names = tuple(tag_names)
    parsed: ParsedTags = {}

    for field in describe_fields(cls):
        if not field.exported:
            continue

        tag_map, malformed = extract_field_tags(field.raw_tag, tag_names)
        for segment in malformed:
            logger.debug(
                f"Skipped malformed tag segment on {cls.__name__}.{field.name}: {segment!r}"
            )
        parsed[field.name] = tag_map

    return parsed
