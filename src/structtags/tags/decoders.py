"""
Tag value decoders.

A decoder turns one raw tag value into a finer-grained string mapping. Any
callable taking ``(tag_name, raw_value)`` and returning a ``StrMap`` can be
used; the two built-in strategies are ``IniDecoder`` and ``DefineDecoder``.
"""

from typing import List, Optional, Protocol, Sequence

from structtags.config import TagsConfig, get_ini_separator

from .schema import StrMap


class TagValueDecoder(Protocol):
    """Decodes a raw tag value into a sub-key -> sub-value mapping."""

    def __call__(self, tag_name: str, raw: str) -> StrMap: ...


class IniDecoder:
    """
    INI-style decoder for values like ``name,omitempty`` or ``k=v;k2=v2``.

    Each token is split on its first ``=``. A bare first token becomes the
    value of ``name_key`` (so ``json:"name,omitempty"`` gives
    ``{"name": "name", "omitempty": "true"}``), unless it is a lone ``-``. Any
    other bare token is a flag mapped to ``"true"``.

    Attributes:
        sep: Token separator
        name_key: Sub-key receiving a bare first token
    """

    def __init__(self, sep: Optional[str] = None, name_key: Optional[str] = None):
        self.sep = sep or get_ini_separator()
        self.name_key = name_key or TagsConfig.NAME_KEY

    def __call__(self, tag_name: str, raw: str) -> StrMap:
        info = StrMap()
        tokens = [t.strip() for t in raw.split(self.sep)] if raw else []

        for idx, token in enumerate(tokens):
            if not token:
                continue
            if "=" in token:
                key, value = token.split("=", 1)
                info[key.strip()] = value.strip()
            elif idx == 0:
                # A lone "-" means "no name"; "-," names the field "-"
                if len(tokens) > 1 or token != TagsConfig.SKIP_NAME:
                    info[self.name_key] = token
            else:
                info[token] = TagsConfig.FLAG_VALUE

        return info

    def __repr__(self) -> str:
        return f"IniDecoder(sep={self.sep!r}, name_key={self.name_key!r})"


class DefineDecoder:
    """
    Positional decoder mapping separated tokens onto predefined sub-keys.

    With ``sep=";"`` and ``defines=["desc", "required", "default", "shorts"]``
    the value ``set your name;false;INHERE;n`` decodes to
    ``{"desc": "set your name", "required": "false", "default": "INHERE",
    "shorts": "n"}``.

    Content beyond the last define stays in the last sub-key's value. A
    token written as ``key=value`` names its own sub-key and does not take a
    positional slot. Missing trailing sub-keys are left out.
    """

    def __init__(self, sep: str, defines: Sequence[str]):
        if not sep:
            raise ValueError("separator must be a non-empty string")
        self.sep = sep
        self.defines: List[str] = list(defines)

    def __call__(self, tag_name: str, raw: str) -> StrMap:
        info = StrMap()
        if not raw or not self.defines:
            return info

        tokens = raw.split(self.sep)
        positional: List[str] = []
        for token in tokens:
            token = token.strip()
            named = _split_named(token)
            if named is None:
                positional.append(token)
            else:
                info[named[0]] = named[1]

        free_keys = [k for k in self.defines if k not in info]
        if not free_keys:
            return info

        last = len(free_keys) - 1
        if len(positional) > len(free_keys):
            positional = positional[:last] + [self.sep.join(positional[last:])]

        for key, value in zip(free_keys, positional):
            info[key] = value

        return info

    def __repr__(self) -> str:
        return f"DefineDecoder(sep={self.sep!r}, defines={self.defines!r})"


def _split_named(token: str):
    if "=" not in token:
        return None
    key, value = token.split("=", 1)
    key = key.strip()
    if not key or any(c.isspace() for c in key):
        return None
    return key, value.strip()


def parse_tag_value_ini(tag_name: str, raw: str, sep: Optional[str] = None) -> StrMap:
    """Decode a raw value with the INI strategy."""
    return IniDecoder(sep)(tag_name, raw)


def build_positional_decoder(sep: str, defines: Sequence[str]) -> DefineDecoder:
    """Build a positional-define decoder for ``sep`` and ``defines``."""
    return DefineDecoder(sep, defines)


parse_tag_value_define = build_positional_decoder
