from typing import List


class InsertionPoint:
    __slots__ = ("index", "filled")

    def __init__(self, index: int):
        self.index = index
        self.filled = False


class OutputBuffer:
    """
    Append-only output with reserved insertion points.

    `reserve()` marks the current end of the output. Text can later be put
    there with `fill()`, once per point, without touching anything appended
    since. Each reservation is its own chunk, so filling one point never shifts
    another.
    """

    __slots__ = ("_chunks",)

    def __init__(self):
        self._chunks: List[str] = []

    def append(self, text: str) -> None:
        if text:
            self._chunks.append(text)

    def reserve(self) -> InsertionPoint:
        self._chunks.append("")
        return InsertionPoint(len(self._chunks) - 1)

    def fill(self, point: InsertionPoint, text: str) -> None:
        if point.filled:
            raise RuntimeError(f"Insertion point {point.index} was already filled")
        self._chunks[point.index] = text
        point.filled = True

    def getvalue(self) -> str:
        return "".join(self._chunks)
