"""Line accumulator used by the encoders."""

from typing import Iterator, List, Tuple

from .constants import LIST_ITEM_PREFIX, NEWLINE, SPACE
from .types import Depth


class LineWriter:
    """Collects ``(depth, content)`` lines and renders them with indentation."""

    def __init__(self, indent_size: int) -> None:
        self.indent_size = indent_size
        self._lines: List[Tuple[Depth, str]] = []

    def push(self, depth: Depth, content: str) -> None:
        self._lines.append((depth, content))

    def push_list_item(self, depth: Depth, nested: "LineWriter") -> None:
        """Append the lines of ``nested`` as one list item at ``depth``.

        The first nested line follows the ``- `` marker, the remaining ones
        move one level past the marker.
        """
        lines = iter(nested)
        first_depth, first = next(lines)
        self.push(depth, LIST_ITEM_PREFIX + first)
        for nested_depth, content in lines:
            self.push(depth + 1 + nested_depth - first_depth, content)

    def __iter__(self) -> Iterator[Tuple[Depth, str]]:
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    def to_string(self) -> str:
        indent = SPACE * self.indent_size
        return NEWLINE.join(indent * depth + content for depth, content in self._lines)
