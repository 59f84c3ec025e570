from typing import List, Optional

from .buffer import InsertionPoint


class Frame:
    """
    An open block tag waiting for its closing tag.

    `insertion_point` sits right after the `do` of the emitted block opener;
    `|variable|` is filled in there on close if the block turned out to need it.
    An explicit `as` (`forced_variable`) always binds, even with no slot children.
    """

    __slots__ = ("tag_name", "variable", "forced_variable", "has_child_slot",
                 "insertion_point", "source_offset")

    def __init__(self, tag_name: str, variable: str, insertion_point: InsertionPoint,
                 source_offset: int, forced_variable: bool = False):
        self.tag_name = tag_name
        self.variable = variable
        self.forced_variable = forced_variable
        self.has_child_slot = False
        self.insertion_point = insertion_point
        self.source_offset = source_offset

    def needs_block_variable(self) -> bool:
        return self.has_child_slot or self.forced_variable

    def __repr__(self):
        return f"{type(self).__name__}({self.tag_name!r}, variable={self.variable!r})"


class ComponentFrame(Frame):
    __slots__ = ()


class SlotFrame(Frame):
    __slots__ = ()


class FrameStack:
    """LIFO of open frames, with lookups for slot scoping and tag matching."""

    def __init__(self):
        self._frames: List[Frame] = []

    def __bool__(self) -> bool:
        return bool(self._frames)

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)

    def top(self) -> Optional[Frame]:
        return self._frames[-1] if self._frames else None

    def nearest(self, frame_type: type) -> Optional[Frame]:
        for frame in reversed(self._frames):
            if isinstance(frame, frame_type):
                return frame
        return None

    def remove_nearest_named(self, tag_name: str) -> Optional[Frame]:
        """Removes and returns the most recently opened frame called `tag_name`."""
        for index in range(len(self._frames) - 1, -1, -1):
            if self._frames[index].tag_name == tag_name:
                return self._frames.pop(index)
        return None
