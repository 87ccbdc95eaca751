from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple

from loguru import logger

from structtags.config import get_default_value_separator
from structtags.errors import InvalidInputError

from .decoders import IniDecoder, TagValueDecoder
from .schema import ParsedTags, StrMap
from .walker import resolve_record_type, walk_type


class TagParser:
    """Parses the tags of a record type and decodes their values on demand.

    Usage::

        p = TagParser("json", "yaml", "default")
        p.parse(User)
        p.tags()["age"]["json"]        # raw value
        info, ok = p.info("name", "json")

    Each ``parse`` call replaces the previous results. An instance is not
    safe to share between threads without external locking: ``parse``
    rebinds the stored results that the query methods read.
    """

    def __init__(self, *tag_names: str, decoder: Optional[TagValueDecoder] = None):
        self._tag_names: Tuple[str, ...] = tuple(tag_names)
        self._tags: ParsedTags = {}
        self._decoder: TagValueDecoder = IniDecoder(get_default_value_separator())
        if decoder is not None:
            self.set_decoder(decoder)

    @property
    def tag_names(self) -> Tuple[str, ...]:
        return self._tag_names

    @property
    def decoder(self) -> TagValueDecoder:
        return self._decoder

    @decoder.setter
    def decoder(self, strategy: TagValueDecoder) -> None:
        self.set_decoder(strategy)

    def set_decoder(self, strategy: TagValueDecoder) -> None:
        """Replace the strategy used by ``info`` to decode raw values."""
        if not callable(strategy):
            raise TypeError(f"decoder must be callable, got {type(strategy).__name__}")
        self._decoder = strategy

    def parse(self, value: Any) -> None:
        """
        Parse the tags of a record class or instance.

        Raises:
            InvalidInputError: If ``value`` is None or not a record. The
                stored results are reset to empty first.
        """
        try:
            cls = resolve_record_type(value)
        except InvalidInputError as e:
            self._tags = {}
            logger.warning(f"Tag parse rejected: {e}")
            raise

        self._tags = walk_type(cls, self._tag_names)
        logger.debug(f"Parsed tags of {cls.__name__}: {len(self._tags)} fields")

    def tags(self) -> Mapping[str, StrMap]:
        """Get a read-only view of the parsed tags, keyed by field name.

        The tag maps in the view are copies, so writing to them leaves the
        parser's results untouched.
        """
        return MappingProxyType({name: StrMap(m) for name, m in self._tags.items()})

    def get(self, field: str) -> StrMap:
        """Get a copy of one field's tag map, empty if the field is unknown."""
        return StrMap(self._tags.get(field, {}))

    def raw(self, field: str, tag: str) -> Tuple[str, bool]:
        """Get the raw value of ``tag`` on ``field`` and whether it was found."""
        tag_map = self._tags.get(field)
        if tag_map is None or tag not in tag_map:
            return "", False
        return tag_map[tag], True

    def info(self, field: str, tag: str) -> Tuple[StrMap, bool]:
        """
        Decode the value of ``tag`` on ``field`` with the configured decoder.

        Returns:
            Tuple of (info, found). An unknown field or tag gives an empty
            StrMap and False.
        """
        raw, found = self.raw(field, tag)
        if not found:
            return StrMap(), False
        return StrMap(self._decoder(tag, raw)), True


def parse_tags_from_type(cls: Any, tag_names: Iterable[str]) -> ParsedTags:
    """Parse the tags of a record class without keeping a parser around."""
    if not isinstance(cls, type):
        raise InvalidInputError(cls, "expected a record class")
    p = TagParser(*tag_names)
    p.parse(cls)
    return dict(p.tags())


def parse_tags_from_value(value: Any, tag_names: Iterable[str]) -> ParsedTags:
    """Parse the tags of a record instance (or class) in one call."""
    p = TagParser(*tag_names)
    p.parse(value)
    return dict(p.tags())
