from typing import Optional

from .attributes import ParsedAttributes, parse_attributes
from .buffer import OutputBuffer
from .errors import EvcSyntaxError, SourceText
from .frames import ComponentFrame, Frame, FrameStack, SlotFrame
from .naming import component_identifier, is_slot_name, slot_name, snake_case
from .scanner import TagKind, TagToken, scan_next

BLOCK_END = "<% end %>"


class EvcCompiler:
    """
    EVC Compiler
    Rewrites PascalCase component tags embedded in template text into ERB
    render calls, leaving everything else untouched.

    Features:
    - Self-closing and block components (<Card /> / <Card>...</Card>)
    - Namespaced components (<Ui::Card>)
    - Slots via With-prefixed children (<WithHeader>), nested to any depth
    - Block variables added only when a slot or `as` needs one
    - String, boolean and {expression} attribute values, kebab-case keys
    - Line/column errors for unmatched, mismatched and unclosed tags
    """

    def __init__(self):
        """Initializes the compiler state."""
        self.source: SourceText = SourceText("")
        self.output: OutputBuffer = OutputBuffer()
        self.stack: FrameStack = FrameStack()

    def _fatal_error(self, reason: str, tag: str, offset: int):
        raise EvcSyntaxError.at(reason, tag, self.source, offset)

    # --- Opening tags ---

    def _handle_open(self, token: TagToken):
        attributes = parse_attributes(token.raw_attributes)
        parent_component = self.stack.nearest(ComponentFrame)

        if parent_component is not None and is_slot_name(token.name):
            self._open_slot(token, attributes, parent_component)
        else:
            self._open_component(token, attributes)

    def _open_component(self, token: TagToken, attributes: ParsedAttributes):
        call = f"render {component_identifier(token.name)}.new{attributes.call_arguments()}"

        if token.kind is TagKind.SELF_CLOSING:
            self.output.append(f"<%= {call} %>")
            return

        variable = attributes.alias or snake_case(token.name)
        self.output.append(f"<%= {call} do")
        frame = ComponentFrame(token.name, variable, self.output.reserve(), token.start,
                               forced_variable=attributes.alias is not None)
        self.output.append(" %>")
        self.stack.push(frame)

    def _open_slot(self, token: TagToken, attributes: ParsedAttributes, parent_component: ComponentFrame):
        name = slot_name(token.name)
        parent = self._slot_parent(parent_component)
        call = f"{parent.variable}.with_{name}{attributes.call_arguments()}"

        if token.kind is TagKind.SELF_CLOSING:
            self.output.append(f"<% {call} %>")
            return

        variable = attributes.alias or name
        self.output.append(f"<% {call} do")
        frame = SlotFrame(token.name, variable, self.output.reserve(), token.start,
                          forced_variable=attributes.alias is not None)
        self.output.append(" %>")
        self.stack.push(frame)

    def _slot_parent(self, parent_component: ComponentFrame) -> Frame:
        """
        Picks the frame whose variable a slot call is made on and marks the
        frames that now have to yield a block variable.

        A slot directly inside another slot is called on that slot; otherwise it
        belongs to the nearest component. The nearest component and nearest
        open slot are always marked as having slot children.
        """
        top = self.stack.top()
        parent = top if isinstance(top, SlotFrame) else parent_component

        parent.has_child_slot = True
        parent_component.has_child_slot = True
        nearest_slot = self.stack.nearest(SlotFrame)
        if nearest_slot is not None:
            nearest_slot.has_child_slot = True
        return parent

    # --- Closing tags ---

    def _handle_close(self, token: TagToken):
        if not self.stack:
            self._fatal_error(EvcSyntaxError.UNMATCHED_CLOSE, token.text, token.start)

        frame = self.stack.remove_nearest_named(token.name)
        if frame is None:
            self._fatal_error(EvcSyntaxError.NO_MATCHING_OPEN, token.text, token.start)

        if frame.needs_block_variable():
            self.output.fill(frame.insertion_point, f" |{frame.variable}|")
        self.output.append(BLOCK_END)

    # --- Driver ---

    def compile(self, source: str) -> str:
        """Compiles EVC template source to ERB."""
        # Reset state for fresh compilation
        self.source = SourceText(source)
        self.output = OutputBuffer()
        self.stack = FrameStack()

        pos = 0
        while pos < len(source):
            token = scan_next(source, pos)
            if token is None:
                break

            # Text before the tag passes through untouched
            self.output.append(source[pos:token.start])

            if token.kind is TagKind.CLOSE:
                self._handle_close(token)
            else:
                self._handle_open(token)
            pos = token.end

        self.output.append(source[pos:])

        unclosed: Optional[Frame] = self.stack.top()
        if unclosed is not None:
            self._fatal_error(EvcSyntaxError.UNCLOSED_OPEN, f"<{unclosed.tag_name}>", unclosed.source_offset)

        return self.output.getvalue()


def transpile(source: str) -> str:
    """Compiles one template with a fresh compiler."""
    return EvcCompiler().compile(source)
