"""Core TOON decoding functionality.

The decoder reads the text one logical line at a time and keeps an
explicit stack of open containers (frames). A frame stays open while the
following lines are indented deeper than the line that opened it; there is
no closing token in the format, so frames are popped as soon as a line at
the same or a shallower indentation shows up, and whatever is still open at
the end of input is closed implicitly.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple

from .constants import (
    DOUBLE_QUOTE,
    EMPTY_ARRAY_LITERAL,
    EMPTY_OBJECT_LITERAL,
    LIST_ITEM_MARKER,
    LIST_ITEM_PREFIX,
    NEWLINE,
    ROOT_TABLE_KEY,
    SPACE,
)
from .primitives import KEY_PATTERN, decode_key, parse_cells, parse_scalar, split_cells
from .types import DecodeOptions, JsonValue, ResolvedDecodeOptions

logger = logging.getLogger(__name__)

TABLE_HEADER_RE = re.compile(rf"(?P<key>{KEY_PATTERN})?\[(?P<count>\d+)\]\{{(?P<fields>.*)\}}:", re.DOTALL)
PRIMITIVE_HEADER_RE = re.compile(rf"(?P<key>{KEY_PATTERN})?\[(?P<count>\d+)\]:(?:\s+(?P<cells>.*))?", re.DOTALL)
KEY_LINE_RE = re.compile(rf"(?P<key>{KEY_PATTERN}):(?:\s+(?P<value>.*))?", re.DOTALL)


class ToonDecodeError(ValueError):
    """Raised in strict mode when a line cannot be decoded."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None) -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class FrameKind(Enum):
    OBJECT = "object"
    ARRAY = "array"
    TABLE = "table"


@dataclass
class Frame:
    """One open container while decoding.

    Attributes:
        target: The list or dict receiving children
        kind: How child lines are interpreted
        open_indent: Indentation of the line that opened the frame
        headers: Column names, for TABLE frames
        parent: Container holding ``target`` under ``key``; set only for
            objects opened by a bare ``key:`` line, which turn into a list
            if their first child is a list item
        key: Key of ``target`` inside ``parent``
        expected: Declared ``[N]`` length, for TABLE frames
        line_number: Line that opened the frame
    """

    target: Any
    kind: FrameKind
    open_indent: int
    headers: List[str] = field(default_factory=list)
    parent: Optional[dict] = None
    key: Optional[str] = None
    expected: Optional[int] = None
    line_number: int = 0


def decode(text: str, options: Optional[DecodeOptions] = None) -> JsonValue:
    """Decode TOON text into a JSON-compatible value.

    Args:
        text: TOON-formatted string
        options: Optional decoding options

    Returns:
        The decoded root value; None for an empty document

    Raises:
        ToonDecodeError: In strict mode, on the first line that cannot be
            decoded or on a declared length that does not match
    """
    resolved_options = resolve_decode_options(options)
    return _Decoder(resolved_options).decode(text)


def resolve_decode_options(options: Optional[DecodeOptions]) -> ResolvedDecodeOptions:
    if options is None:
        return ResolvedDecodeOptions()

    return ResolvedDecodeOptions(strict=options.get("strict", False))


def iter_logical_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs, joining lines split inside a quoted field.

    A quoted cell may contain a newline; the physical line then ends with an
    odd number of quotes and continues on the next one.
    """
    pending: List[str] = []
    start = 0
    quotes = 0

    for number, physical in enumerate(text.split(NEWLINE), start=1):
        if not pending:
            start = number
        pending.append(physical)
        quotes += physical.count(DOUBLE_QUOTE)
        if quotes % 2 == 0:
            yield start, NEWLINE.join(pending)
            pending = []
            quotes = 0

    if pending:
        yield start, NEWLINE.join(pending)


def parse_inline_value(text: str) -> JsonValue:
    """Parse the value after ``key:`` or ``- ``, including empty containers."""
    text = text.strip()
    if text == EMPTY_ARRAY_LITERAL:
        return []
    if text == EMPTY_OBJECT_LITERAL:
        return {}
    return parse_scalar(text)


def _is_list_item(content: str) -> bool:
    return content == LIST_ITEM_MARKER or content.startswith(LIST_ITEM_PREFIX)


def _header_key(match: re.Match, root_word: Optional[str] = None) -> Optional[str]:
    """Return the decoded key of a header, or None for a root header."""
    raw_key = match.group("key")
    if raw_key is None or raw_key == root_word:
        return None
    return decode_key(raw_key)


class _Decoder:
    """State of a single decode call."""

    def __init__(self, options: ResolvedDecodeOptions) -> None:
        self.options = options
        self.stack: List[Frame] = []
        self.root: JsonValue = None
        self.has_root = False
        self.line_number = 0
        self.line = ""

    def decode(self, text: str) -> JsonValue:
        for line_number, line in iter_logical_lines(text):
            if not line.strip():
                continue
            self.line_number = line_number
            self.line = line
            indent = len(line) - len(line.lstrip(SPACE))
            self.process(indent, line.strip())

        while self.stack:
            self.close(self.stack.pop())
        return self.root

    # Line classification

    def process(self, indent: int, content: str) -> None:
        self.pop_frames(indent)

        if self.try_table_header(indent, content):
            return
        if self.try_primitive_header(content):
            return
        if self.try_key_line(indent, content):
            return

        top = self.top
        if top is not None and top.kind is FrameKind.TABLE:
            self.add_table_row(top, content)
        elif _is_list_item(content):
            self.add_list_item(indent, content)
        elif top is None and not self.has_root:
            self.set_root(parse_inline_value(content))
        else:
            self.unmatched("unrecognised line")

    def try_table_header(self, indent: int, content: str) -> bool:
        match = TABLE_HEADER_RE.fullmatch(content)
        if not match:
            return False

        fields_text = match.group("fields").strip()
        headers = [decode_key(raw) for raw in split_cells(fields_text)] if fields_text else []
        table: List[Any] = []
        if self.attach(_header_key(match, ROOT_TABLE_KEY), table):
            self.stack.append(
                Frame(
                    table,
                    FrameKind.TABLE,
                    indent,
                    headers=headers,
                    expected=int(match.group("count")),
                    line_number=self.line_number,
                )
            )
        else:
            self.unmatched("table header has no container to attach to")
        return True

    def try_primitive_header(self, content: str) -> bool:
        match = PRIMITIVE_HEADER_RE.fullmatch(content)
        if not match:
            return False

        cells = match.group("cells")
        values = parse_cells(cells) if cells and cells.strip() else []
        expected = int(match.group("count"))
        if self.options.strict and len(values) != expected:
            raise ToonDecodeError(f"expected {expected} values, found {len(values)}", self.line_number, self.line)
        if not self.attach(_header_key(match), values):
            self.unmatched("array header has no container to attach to")
        return True

    def try_key_line(self, indent: int, content: str) -> bool:
        match = KEY_LINE_RE.fullmatch(content)
        if not match:
            return False

        key = decode_key(match.group("key"))
        value_text = match.group("value")
        if value_text is not None and value_text.strip():
            if not self.attach(key, parse_inline_value(value_text)):
                self.unmatched(f"no object to hold key {key!r}")
            return True

        obj: dict = {}
        if self.attach(key, obj):
            parent = self.stack[-1].target if self.stack else self.root
            self.stack.append(Frame(obj, FrameKind.OBJECT, indent, parent=parent, key=key, line_number=self.line_number))
        else:
            self.unmatched(f"no object to hold key {key!r}")
        return True

    def add_table_row(self, frame: Frame, content: str) -> None:
        cells = parse_cells(content)
        if self.options.strict and len(cells) != len(frame.headers):
            raise ToonDecodeError(
                f"expected {len(frame.headers)} cells, found {len(cells)}", self.line_number, self.line
            )
        # Extra cells are dropped, missing trailing cells become None
        row = {header: cells[i] if i < len(cells) else None for i, header in enumerate(frame.headers)}
        frame.target.append(row)

    def add_list_item(self, indent: int, content: str) -> None:
        frame = self.list_frame_for(indent)
        if frame is None:
            self.unmatched("list item outside of a list")
            return

        rest = content[len(LIST_ITEM_MARKER):].strip()
        if not rest:
            frame.target.append({})
            return

        # The dash-line entry sits between the dash column and the item's
        # continuation lines, which start at least one column further in
        item_indent = indent + 1
        table_match = TABLE_HEADER_RE.fullmatch(rest)
        primitive_match = PRIMITIVE_HEADER_RE.fullmatch(rest)

        if (
            KEY_LINE_RE.fullmatch(rest)
            or (table_match and _header_key(table_match, ROOT_TABLE_KEY) is not None)
            or (primitive_match and _header_key(primitive_match) is not None)
        ):
            # An object item; its first entry shares the dash line
            item: dict = {}
            frame.target.append(item)
            self.stack.append(Frame(item, FrameKind.OBJECT, indent, line_number=self.line_number))
            self.process(item_indent, rest)
        elif _is_list_item(rest):
            nested: List[Any] = []
            frame.target.append(nested)
            self.stack.append(Frame(nested, FrameKind.ARRAY, indent, line_number=self.line_number))
            self.process(item_indent, rest)
        elif table_match or primitive_match:
            self.process(item_indent, rest)
        else:
            frame.target.append(parse_inline_value(rest))

    def list_frame_for(self, indent: int) -> Optional[Frame]:
        """Return the ARRAY frame a list item at ``indent`` belongs to, opening it if needed."""
        top = self.top
        if top is None:
            if self.has_root:
                return None
            items: List[Any] = []
            self.set_root(items)
            # Root items sit at the document's own indentation
            top = Frame(items, FrameKind.ARRAY, indent - 1, line_number=self.line_number)
            self.stack.append(top)
            return top

        if top.kind is FrameKind.OBJECT and not top.target and top.parent is not None:
            items = []
            top.parent[top.key] = items
            top.target = items
            top.kind = FrameKind.ARRAY
            top.parent = None
            return top

        if top.kind is FrameKind.ARRAY:
            return top
        return None

    # Stack handling

    @property
    def top(self) -> Optional[Frame]:
        return self.stack[-1] if self.stack else None

    def pop_frames(self, indent: int) -> None:
        while self.stack and self.stack[-1].open_indent >= indent:
            self.close(self.stack.pop())

    def close(self, frame: Frame) -> None:
        if self.options.strict and frame.expected is not None and len(frame.target) != frame.expected:
            raise ToonDecodeError(
                f"expected {frame.expected} rows, found {len(frame.target)}", frame.line_number, None
            )

    def attach(self, key: Optional[str], value: JsonValue) -> bool:
        """Place ``value`` in the current container, or make it (part of) the root.

        Returns:
            False if the current container cannot take a value of this shape
        """
        top = self.top
        if top is None:
            if not self.has_root:
                self.set_root(value if key is None else {key: value})
                return True
            if key is not None and isinstance(self.root, dict):
                self.root[key] = value
                return True
            return False

        if top.kind is FrameKind.OBJECT and key is not None:
            top.target[key] = value
            return True
        if top.kind is FrameKind.ARRAY and key is None:
            top.target.append(value)
            return True
        return False

    def set_root(self, value: JsonValue) -> None:
        self.root = value
        self.has_root = True

    def unmatched(self, reason: str) -> None:
        if self.options.strict:
            raise ToonDecodeError(reason, self.line_number, self.line)
        logger.warning("Skipping line %d (%s): %r", self.line_number, reason, self.line)
