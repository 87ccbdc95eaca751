from typing import Dict, FrozenSet


class TagsConfig:
    INI_SEPARATOR: str = ";"
    DEFAULT_VALUE_SEPARATOR: str = ","
    NAME_KEY: str = "name"
    FLAG_VALUE: str = "true"
    SKIP_NAME: str = "-"
    TAG_METADATA_KEY: str = "tag"

    TRUE_STRINGS: FrozenSet[str] = frozenset({"1", "true", "yes", "on"})
    FALSE_STRINGS: FrozenSet[str] = frozenset({"0", "false", "no", "off", ""})

    @classmethod
    def validate_config(cls) -> None:
        """Validate that all configuration values are sensible."""

        for attr in ("INI_SEPARATOR", "DEFAULT_VALUE_SEPARATOR"):
            sep = getattr(cls, attr)
            if not sep:
                raise ValueError(f"{attr} must be a non-empty string")
            if "=" in sep:
                raise ValueError(f"{attr} must not contain '=', got {sep!r}")

        if not cls.NAME_KEY:
            raise ValueError("NAME_KEY must be a non-empty string")

        if not cls.TAG_METADATA_KEY:
            raise ValueError("TAG_METADATA_KEY must be a non-empty string")

        overlap = cls.TRUE_STRINGS & cls.FALSE_STRINGS
        if overlap:
            raise ValueError(
                f"TRUE_STRINGS and FALSE_STRINGS overlap: {sorted(overlap)}"
            )


TagsConfig.validate_config()


def get_ini_separator() -> str:
    """Get the separator between `key=value` pairs of an INI tag value."""
    return TagsConfig.INI_SEPARATOR


def get_default_value_separator() -> str:
    """Get the separator used by the parser's default value decoder."""
    return TagsConfig.DEFAULT_VALUE_SEPARATOR


def get_tag_metadata_key() -> str:
    """Get the field metadata key holding a raw tag string."""
    return TagsConfig.TAG_METADATA_KEY


def get_bool_strings() -> Dict[str, FrozenSet[str]]:
    """Get the accepted spellings for boolean tag values."""
    return {
        "true": TagsConfig.TRUE_STRINGS,
        "false": TagsConfig.FALSE_STRINGS,
    }
