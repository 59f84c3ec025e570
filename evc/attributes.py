import enum
import logging
import re
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

_KEY = re.compile(r"[A-Za-z0-9_-]+")
_UNESCAPED_DOUBLE_QUOTE = re.compile(r'(?<!\\)"')

ALIAS_KEY = "as"


class ValueKind(enum.Enum):
    STRING = "string"
    EXPRESSION = "expression"
    TRUE = "true"


class Attribute:
    """One `key: value` parameter of a render call, in source order."""

    __slots__ = ("key", "kind", "value")

    def __init__(self, key: str, kind: ValueKind, value: str = ""):
        self.key = key
        self.kind = kind
        self.value = value

    def render(self) -> str:
        if self.kind is ValueKind.STRING:
            return f'{self.key}: "{self.value}"'
        if self.kind is ValueKind.EXPRESSION:
            return f"{self.key}: {self.value}"
        return f"{self.key}: true"

    def __eq__(self, other):
        if not isinstance(other, Attribute):
            return NotImplemented
        return (self.key, self.kind, self.value) == (other.key, other.kind, other.value)

    def __repr__(self):
        return f"Attribute({self.key!r}, {self.kind}, {self.value!r})"


class ParsedAttributes:
    __slots__ = ("params", "alias")

    def __init__(self, params: List[Attribute], alias: Optional[str] = None):
        self.params = params
        self.alias = alias

    def params_text(self) -> str:
        return ", ".join(param.render() for param in self.params)

    def call_arguments(self) -> str:
        """`(a: 1, b: true)`, or an empty string when there are no parameters."""
        text = self.params_text()
        return f"({text})" if text else ""


def normalize_key(key: str) -> str:
    # data-test-id -> data_test_id
    return key.replace("-", "_")


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _read_quoted(text: str, pos: int) -> Tuple[Optional[str], int]:
    """
    Reads a quoted value starting at the opening quote in text[pos].
    Returns (content, position after the closing quote), or (None, len(text))
    when the quote is never closed. Backslash-escaped quotes do not close it.
    """
    quote = text[pos]
    i = pos + 1
    while i < len(text):
        char = text[i]
        if char == "\\":
            i += 2
            continue
        if char == quote:
            return text[pos + 1:i], i + 1
        i += 1
    return None, len(text)


def _read_braced(text: str, pos: int) -> Tuple[Optional[str], int]:
    """
    Reads a `{...}` expression starting at text[pos] == '{', balancing nested
    braces. Returns (inner text, position after the closing brace), or
    (None, len(text)) when the braces never balance.
    """
    depth = 0
    for i in range(pos, len(text)):
        char = text[i]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[pos + 1:i], i + 1
    return None, len(text)


def _as_double_quoted(content: str, quote: str) -> str:
    if quote == '"':
        return content
    return _UNESCAPED_DOUBLE_QUOTE.sub(r'\\"', content)


def parse_attributes(attr_string: str) -> ParsedAttributes:
    """
    Parses the raw attribute text of a tag into ordered render parameters.

    Supported value forms:
    - key="text" / key='text'   -> key: "text"
    - key={expression}          -> key: expression   (nested braces allowed)
    - key                       -> key: true
    - as="name"                 -> block variable override, never a parameter

    A value that cannot be read (unbalanced braces, unterminated quote, bare
    word) becomes `true` and ends the attribute list.
    """
    params: List[Attribute] = []
    alias: Optional[str] = None
    text = attr_string
    pos = 0

    while True:
        pos = _skip_whitespace(text, pos)
        if pos >= len(text):
            break

        key_match = _KEY.match(text, pos)
        if not key_match:
            break  # e.g. the '/' of a self-closing tag
        raw_key = key_match.group(0)
        key = normalize_key(raw_key)
        pos = _skip_whitespace(text, key_match.end())

        if pos >= len(text) or text[pos] != "=":
            params.append(Attribute(key, ValueKind.TRUE))
            continue

        pos = _skip_whitespace(text, pos + 1)
        opener = text[pos] if pos < len(text) else ""

        if opener in ('"', "'"):
            content, pos = _read_quoted(text, pos)
            if content is None:
                logger.warning("Unterminated quoted value for attribute '%s', using true", raw_key)
                params.append(Attribute(key, ValueKind.TRUE))
                break
            if raw_key == ALIAS_KEY:
                alias = content
            else:
                params.append(Attribute(key, ValueKind.STRING, _as_double_quoted(content, opener)))
        elif opener == "{":
            expression, pos = _read_braced(text, pos)
            if expression is None:
                logger.warning("Unbalanced braces in value of attribute '%s', using true", raw_key)
                params.append(Attribute(key, ValueKind.TRUE))
                break
            params.append(Attribute(key, ValueKind.EXPRESSION, expression))
        else:
            # Unquoted or missing value
            params.append(Attribute(key, ValueKind.TRUE))
            break

    return ParsedAttributes(params, alias)
