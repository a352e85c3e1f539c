"""Encoders for different value types."""

from typing import List, Optional

from .constants import COLON, EMPTY_ARRAY_LITERAL, EMPTY_OBJECT_LITERAL, LIST_ITEM_PREFIX, SPACE
from .normalize import (
    detect_tabular_header,
    is_array_of_primitives,
    is_json_array,
    is_json_object,
    is_json_primitive,
)
from .primitives import encode_key, encode_primitive, format_header, join_encoded_values
from .types import Depth, JsonArray, JsonObject, JsonValue, ResolvedEncodeOptions
from .writer import LineWriter


def encode_root(value: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth = 0) -> None:
    """Encode a value that has no key: the document root or a list item body.

    Args:
        value: Normalized JSON value
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
    """
    if is_json_primitive(value):
        writer.push(depth, encode_primitive(value))
    elif is_json_array(value):
        encode_array(value, options, writer, depth, None)
    elif is_json_object(value):
        if not value:
            writer.push(depth, EMPTY_OBJECT_LITERAL)
            return
        for obj_key, obj_value in value.items():
            encode_child(obj_key, obj_value, options, writer, depth)


def encode_child(key: str, value: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth) -> None:
    """Encode a key-value pair.

    Args:
        key: Key name
        value: Value to encode
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
    """
    if is_json_primitive(value):
        writer.push(depth, f"{encode_key(key)}{COLON}{SPACE}{encode_primitive(value)}")
    elif is_json_array(value):
        encode_array(value, options, writer, depth, key)
    elif is_json_object(value):
        encode_object(value, options, writer, depth, key)


def encode_object(obj: JsonObject, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth, key: str) -> None:
    """Encode an object as a keyed header with its entries one level deeper.

    Args:
        obj: Dictionary object
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Key name
    """
    if not obj:
        writer.push(depth, f"{encode_key(key)}{COLON}{SPACE}{EMPTY_OBJECT_LITERAL}")
        return

    writer.push(depth, f"{encode_key(key)}{COLON}")
    for obj_key, obj_value in obj.items():
        encode_child(obj_key, obj_value, options, writer, depth + 1)


def encode_array(arr: JsonArray, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth, key: Optional[str]) -> None:
    """Encode an array to TOON format.

    Args:
        arr: List array
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    # Handle empty array
    if not arr:
        if key is None:
            writer.push(depth, EMPTY_ARRAY_LITERAL)
        else:
            writer.push(depth, f"{encode_key(key)}{COLON}{SPACE}{EMPTY_ARRAY_LITERAL}")
        return

    # Check array type and encode accordingly
    if is_array_of_primitives(arr):
        encode_inline_primitive_array(arr, writer, depth, key)
        return

    tabular_header = detect_tabular_header(arr)
    if tabular_header:
        encode_array_of_objects_as_tabular(arr, tabular_header, writer, depth, key)
    else:
        encode_mixed_array_as_list_items(arr, options, writer, depth, key)


def encode_inline_primitive_array(arr: JsonArray, writer: LineWriter, depth: Depth, key: Optional[str]) -> None:
    """Encode array of primitives on a single line.

    Args:
        arr: Array of primitive values
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    encoded_values = [encode_primitive(item) for item in arr]
    joined = join_encoded_values(encoded_values)
    header = format_header(key, len(arr))
    writer.push(depth, f"{header}{SPACE}{joined}")


def encode_array_of_objects_as_tabular(
    arr: List[JsonObject],
    fields: List[str],
    writer: LineWriter,
    depth: Depth,
    key: Optional[str],
) -> None:
    """Encode array of uniform objects in tabular format.

    Rows look values up by column name, so elements whose keys are in a
    different order than the first element still line up.

    Args:
        arr: Array of uniform objects
        fields: Field names for header
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    header = format_header(key, len(arr), fields)
    writer.push(depth, header)

    for obj in arr:
        row_values = [encode_primitive(obj[field]) for field in fields]
        row = join_encoded_values(row_values)
        writer.push(depth + 1, row)


def encode_mixed_array_as_list_items(
    arr: JsonArray,
    options: ResolvedEncodeOptions,
    writer: LineWriter,
    depth: Depth,
    key: Optional[str],
) -> None:
    """Encode mixed array as list items.

    A keyed list gets a bare ``key:`` line and its items one level deeper;
    a root list starts its items at ``depth``.

    Args:
        arr: Mixed array
        options: Resolved encoding options
        writer: Line writer for output
        depth: Current indentation depth
        key: Optional key name
    """
    if key is not None:
        writer.push(depth, f"{encode_key(key)}{COLON}")
        depth += 1

    for item in arr:
        if is_json_primitive(item):
            writer.push(depth, f"{LIST_ITEM_PREFIX}{encode_primitive(item)}")
        else:
            encode_list_item(item, options, writer, depth)


def encode_list_item(item: JsonValue, options: ResolvedEncodeOptions, writer: LineWriter, depth: Depth) -> None:
    """Encode a container list item as a root value aligned under its dash."""
    nested = LineWriter(options.indent)
    encode_root(item, options, nested, 0)
    writer.push_list_item(depth, nested)
