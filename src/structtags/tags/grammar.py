from typing import Iterable, List, Optional, Tuple

from .schema import StrMap


def _is_key_char(char: str) -> bool:
    return char > " " and char not in ':"\x7f'


_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

# escape letter -> (digit count, base)
_CODE_ESCAPES = {"x": (2, 16), "u": (4, 16), "U": (8, 16)}


def _unquote(body: str) -> Optional[str]:
    """Resolve backslash escapes of a quoted tag value, None if invalid."""
    if "\n" in body:
        return None
    if "\\" not in body:
        return body

    out: List[str] = []
    i = 0
    n = len(body)
    while i < n:
        char = body[i]
        if char != "\\":
            out.append(char)
            i += 1
            continue

        if i + 1 >= n:
            return None
        esc = body[i + 1]
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
            i += 2
            continue

        if esc in _CODE_ESCAPES:
            width, base = _CODE_ESCAPES[esc]
            digits = body[i + 2 : i + 2 + width]
        elif "0" <= esc <= "7":
            width, base = 3, 8
            digits = body[i + 1 : i + 1 + width]
        else:
            return None

        allowed = "01234567" if base == 8 else "0123456789abcdefABCDEF"
        if len(digits) != width or any(c not in allowed for c in digits):
            return None
        code = int(digits, base)
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            return None
        if base == 8 and code > 0xFF:
            return None

        out.append(chr(code))
        i += (1 if base == 8 else 2) + width

    return "".join(out)


def scan_tag_segments(raw: str) -> Tuple[List[Tuple[str, str]], List[str]]:
    r"""
    Split a raw field tag string into its ``key:"value"`` segments.

    Grammar:
    <Tag>      ::= <Segment> (" "+ <Segment>)*
    <Segment>  ::= <Key> ":" "\"" <Quoted> "\""
    <Key>      ::= any chars above space except ':', '"' and DEL
    <Quoted>   ::= string body with C-style backslash escapes
                   (\a \b \f \n \r \t \v \\ \' \" \xHH \ooo \uHHHH \UHHHHHHHH)

    Malformed segments are skipped up to the next space (or to the end of
    the string for an unterminated quote) and reported, never raised.

    Args:
        raw: The full tag string of one field

    Returns:
        Tuple of (pairs, malformed) where pairs is the list of (key, value)
        in declaration order and malformed lists the skipped segments.
    """
    pairs: List[Tuple[str, str]] = []
    malformed: List[str] = []
    n = len(raw)
    i = 0

    while i < n:
        # Skip leading spaces
        while i < n and raw[i] == " ":
            i += 1
        if i >= n:
            break

        start = i
        while i < n and _is_key_char(raw[i]):
            i += 1

        if i == start or i + 1 >= n or raw[i] != ":" or raw[i + 1] != '"':
            end = i
            while end < n and raw[end] != " ":
                end += 1
            malformed.append(raw[start:max(end, start + 1)])
            i = max(end, start + 1)
            continue

        key = raw[start:i]
        i += 2
        value_start = i
        while i < n and raw[i] != '"':
            if raw[i] == "\\":
                i += 1
            i += 1

        if i >= n:
            # Unterminated quote swallows the rest of the string
            malformed.append(raw[start:])
            break

        value = _unquote(raw[value_start:i])
        i += 1
        if value is None:
            malformed.append(raw[start:i])
            continue

        pairs.append((key, value))

    return pairs, malformed


def lookup_tag(raw: str, name: str) -> Tuple[str, bool]:
    """Look up the value of ``name`` in a raw tag string.

    Returns ``(value, True)`` for the first occurrence, ``("", False)`` when
    the tag is absent. An empty value that is present is ``("", True)``.
    """
    pairs, _ = scan_tag_segments(raw)
    for key, value in pairs:
        if key == name:
            return value, True
    return "", False


def extract_field_tags(raw: str, tag_names: Iterable[str]) -> Tuple[StrMap, List[str]]:
    """
    Extract the raw values of the wanted tag names from one field's tag string.

    Only tag names actually present in ``raw`` end up in the returned map.
    When a key repeats, the first occurrence wins.

    Args:
        raw: The full tag string of one field
        tag_names: Tag names of interest

    Returns:
        Tuple of (tag_map, malformed) where malformed lists skipped segments.
    """
    wanted = set(tag_names)
    tag_map = StrMap()
    if not raw or not wanted:
        return tag_map, []

    pairs, malformed = scan_tag_segments(raw)
    for key, value in pairs:
        if key in wanted and key not in tag_map:
            tag_map[key] = value

    return tag_map, malformed


def is_tag_string(raw: str) -> bool:
    """Quick check if a string holds at least one well-formed tag segment."""
    pairs, _ = scan_tag_segments(raw)
    return bool(pairs)
