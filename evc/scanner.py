import enum
import re
from typing import Optional

TAG_NAME = r"[A-Z][a-zA-Z0-9_]*(?:::[A-Z][a-zA-Z0-9_]*)*"

# Start of any candidate tag; closing tags carry the leading slash.
_TAG_START = re.compile(r"<(/?)(" + TAG_NAME + r")")


class TagKind(enum.Enum):
    OPEN = "open"
    SELF_CLOSING = "self_closing"
    CLOSE = "close"


class TagToken:
    __slots__ = ("kind", "name", "raw_attributes", "start", "end", "text")

    def __init__(self, kind: TagKind, name: str, raw_attributes: str, start: int, end: int, text: str):
        self.kind = kind
        self.name = name
        self.raw_attributes = raw_attributes
        self.start = start
        self.end = end
        self.text = text

    def __repr__(self):
        return f"TagToken({self.kind.name}, {self.name!r}, {self.start}:{self.end})"


def _find_tag_end(source: str, pos: int) -> int:
    """
    Returns the index of the '>' that ends an opening tag whose attribute
    region starts at `pos`, or -1.

    `{...}` expressions and quoted values after '=' are skipped so a '>' inside
    them does not end the tag. If that scan runs off the end (stray brace or
    quote), the first plain '>' wins.
    """
    depth = 0
    after_equals = False
    i = pos
    length = len(source)
    while i < length:
        char = source[i]
        if depth:
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
        elif char == "{":
            depth = 1
        elif char in ('"', "'") and after_equals:
            close = i + 1
            while close < length and source[close] != char:
                close += 2 if source[close] == "\\" else 1
            if close >= length:
                break
            i = close
        elif char == ">":
            return i
        if not char.isspace():
            after_equals = char == "=" and not depth
        i += 1
    return source.find(">", pos)


def scan_next(source: str, pos: int) -> Optional[TagToken]:
    """Finds the earliest opening, self-closing or closing tag at or after `pos`."""
    for match in _TAG_START.finditer(source, pos):
        start = match.start()
        name = match.group(2)
        name_end = match.end()

        if match.group(1):
            if source.startswith(">", name_end):
                end = name_end + 1
                return TagToken(TagKind.CLOSE, name, "", start, end, source[start:end])
            continue

        if name_end < len(source) and not (source[name_end].isspace() or source[name_end] in "/>"):
            continue  # `<Foo-bar>` and friends are not component tags
        gt = _find_tag_end(source, name_end)
        if gt == -1:
            return None  # no '>' anywhere ahead, so no tag can complete
        end = gt + 1
        attributes = source[name_end:gt].strip()
        kind = TagKind.OPEN
        if attributes.endswith("/"):
            kind = TagKind.SELF_CLOSING
            attributes = attributes[:-1].rstrip()
        return TagToken(kind, name, attributes, start, end, source[start:end])
    return None
