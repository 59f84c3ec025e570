from typing import Tuple


class SourceText:
    """
    Immutable template source with offset -> line/column lookups.

    Lines and columns are 1-based. The column of an offset is its distance from
    the preceding newline, or offset + 1 on the first line.
    """

    __slots__ = ("text",)

    def __init__(self, text: str):
        self.text = text

    def line_at(self, offset: int) -> int:
        return self.text.count("\n", 0, offset) + 1

    def column_at(self, offset: int) -> int:
        last_newline = self.text.rfind("\n", 0, offset)
        if last_newline == -1:
            return offset + 1
        return offset - last_newline

    def location(self, offset: int) -> Tuple[int, int]:
        return self.line_at(offset), self.column_at(offset)


class EvcSyntaxError(ValueError):
    """Raised when the tag structure of a template cannot be resolved."""

    UNMATCHED_CLOSE = "Unmatched closing tag"
    UNCLOSED_OPEN = "Unclosed tag"
    NO_MATCHING_OPEN = "No matching opening tag for"

    def __init__(self, reason: str, tag: str, line: int, column: int):
        self.reason = reason
        self.tag = tag
        self.line = line
        self.column = column
        super().__init__(f"{reason} {tag} at line {line}, column {column}")

    @classmethod
    def at(cls, reason: str, tag: str, source: SourceText, offset: int) -> "EvcSyntaxError":
        line, column = source.location(offset)
        return cls(reason, tag, line, column)
