"""Tests for the line-oriented decoder."""

import logging

import pytest

from toon_codec import ToonDecodeError, decode
from toon_codec.decoder import iter_logical_lines, parse_inline_value


# ---------------------------------------------------------------------------
# reference examples
# ---------------------------------------------------------------------------

def test_decode_flat_object():
    assert decode("name: Ann\nage: 30") == {"name": "Ann", "age": 30}


def test_decode_root_primitive_array():
    assert decode("[3]: 1,2,3") == [1, 2, 3]


def test_decode_root_table():
    text = "table[2]{id,ok}:\n  1,true\n  2,false"
    assert decode(text) == [{"id": 1, "ok": True}, {"id": 2, "ok": False}]


def test_decode_quoted_field_keeps_comma():
    assert decode('"a,b"') == "a,b"
    assert decode('v: "a,b"') == {"v": "a,b"}


def test_decode_keyed_table():
    assert decode("items[2]{x}:\n  1\n  2") == {"items": [{"x": 1}, {"x": 2}]}


# ---------------------------------------------------------------------------
# objects and scalars
# ---------------------------------------------------------------------------

def test_decode_skips_blank_lines():
    assert decode("a: 1\n\n   \nb: 2\n") == {"a": 1, "b": 2}


def test_decode_nested_objects_close_on_dedent():
    text = "a:\n  b:\n    c: 1\n  d: 2\ne: 3"
    assert decode(text) == {"a": {"b": {"c": 1}, "d": 2}, "e": 3}


def test_decode_any_indent_width():
    assert decode("a:\n    b: 1\n    c: 2") == {"a": {"b": 1, "c": 2}}


def test_decode_key_without_children_is_empty_object():
    assert decode("a:") == {"a": {}}


def test_decode_empty_containers():
    assert decode("a: []\nb: {}") == {"a": [], "b": {}}
    assert decode("[]") == []
    assert decode("{}") == {}


def test_decode_quoted_brackets_stay_strings():
    assert decode('a: "[]"\nb: "{x"') == {"a": "[]", "b": "{x"}


def test_decode_empty_document():
    assert decode("") is None
    assert decode("\n  \n") is None


def test_decode_root_scalars():
    assert decode("null") is None
    assert decode("42") == 42
    assert decode("hello") == "hello"


def test_decode_quoted_keys():
    assert decode('"first name": Ann\n"a""b": 1') == {"first name": "Ann", 'a"b': 1}


def test_decode_duplicate_key_last_wins():
    assert decode("a: 1\na: 2") == {"a": 2}


def test_decode_quoted_value_with_newline():
    assert decode('note: "a\nb"\nn: 1') == {"note": "a\nb", "n": 1}


# ---------------------------------------------------------------------------
# arrays and tables
# ---------------------------------------------------------------------------

def test_decode_keyed_primitive_array():
    assert decode('tags[3]: a,"b,c",""') == {"tags": ["a", "b,c", ""]}


def test_decode_primitive_array_without_cells():
    assert decode("tags[0]:") == {"tags": []}


def test_decode_quoted_numbers_in_cells_stay_strings():
    assert decode('[3]: 1,"2",null') == [1, "2", None]


def test_decode_table_row_width_mismatch():
    text = "table[2]{a,b,c}:\n  1,2\n  3,4,5,6"
    assert decode(text) == [{"a": 1, "b": 2, "c": None}, {"a": 3, "b": 4, "c": 5}]


def test_decode_table_with_quoted_cell_spanning_lines():
    assert decode('table[1]{t,n}:\n  "x\ny",2') == [{"t": "x\ny", "n": 2}]


def test_decode_keyed_table_named_table():
    assert decode('"table"[1]{x}:\n  1') == {"table": [{"x": 1}]}


def test_decode_table_then_sibling_key():
    text = "rows[2]{a}:\n  1\n  2\nafter: x"
    assert decode(text) == {"rows": [{"a": 1}, {"a": 2}], "after": "x"}


# ---------------------------------------------------------------------------
# generic lists
# ---------------------------------------------------------------------------

def test_decode_root_generic_list():
    assert decode("- 1\n- a: 1\n  b: 2\n- [2]: 1,2") == [1, {"a": 1, "b": 2}, [1, 2]]


def test_decode_keyed_generic_list():
    assert decode("mixed:\n  - 1\n  - x\n  - k: v") == {"mixed": [1, "x", {"k": "v"}]}


def test_decode_nested_lists():
    assert decode("- - 1\n  - [1]: 2\n- 3") == [[1, [2]], 3]


def test_decode_list_item_object_with_nested_first_entry():
    assert decode("- a:\n    x: 1\n  b: 2") == [{"a": {"x": 1}, "b": 2}]


@pytest.mark.parametrize(
    "text",
    [
        "- a:\n  b: 1\n c: 2\n- 1",
        "- a:\n      b: 1\n   c: 2\n- 1",
        "- a:\n        b: 1\n    c: 2\n- 1",
    ],
    ids=["indent-1", "indent-3", "indent-4"],
)
def test_decode_list_item_sibling_after_nested_first_entry(text):
    assert decode(text, {"strict": True}) == [{"a": {"b": 1}, "c": 2}, 1]


def test_decode_list_item_table_first_entry_at_indent_four():
    text = "- t[2]{x}:\n        1\n        2\n    z: 1"
    assert decode(text, {"strict": True}) == [{"t": [{"x": 1}, {"x": 2}], "z": 1}]


def test_decode_table_inside_list():
    assert decode("- table[2]{x}:\n    1\n    2\n- 5") == [[{"x": 1}, {"x": 2}], 5]


def test_decode_empty_containers_in_list():
    assert decode("- []\n- {}\n- - []") == [[], {}, [[]]]


def test_decode_quoted_dash_is_a_string_item():
    assert decode('- "- x"\n- "-"') == ["- x", "-"]


# ---------------------------------------------------------------------------
# unmatched lines
# ---------------------------------------------------------------------------

def test_decode_skips_unmatched_line_and_logs(caplog):
    with caplog.at_level(logging.WARNING, logger="toon_codec.decoder"):
        result = decode("a: 1\n  ??? nonsense\nb: 2")
    assert result == {"a": 1, "b": 2}
    assert "Skipping line 2" in caplog.text


def test_decode_strict_raises_on_unmatched_line():
    with pytest.raises(ToonDecodeError) as excinfo:
        decode("a: 1\n%%%", {"strict": True})
    assert excinfo.value.line_number == 2
    assert excinfo.value.line == "%%%"


def test_decode_list_item_outside_list():
    assert decode("a: 1\n- x") == {"a": 1}
    with pytest.raises(ToonDecodeError):
        decode("a: 1\n- x", {"strict": True})


def test_decode_key_line_inside_root_array_is_rejected():
    with pytest.raises(ToonDecodeError):
        decode("[2]: 1,2\na: 1", {"strict": True})


def test_decode_strict_checks_primitive_count():
    assert decode("[3]: 1,2") == [1, 2]
    with pytest.raises(ToonDecodeError):
        decode("[3]: 1,2", {"strict": True})


def test_decode_strict_checks_table_row_count():
    with pytest.raises(ToonDecodeError) as excinfo:
        decode("table[2]{x}:\n  1", {"strict": True})
    assert excinfo.value.line_number == 1


def test_decode_strict_checks_row_width():
    with pytest.raises(ToonDecodeError):
        decode("table[1]{a,b}:\n  1", {"strict": True})


def test_list_marker_inside_table_block_is_read_as_row():
    # Open question: the encoder never writes list items under a table
    # header, and the decoder does not try to give them list semantics.
    # A row check comes first, so such a line becomes a one-cell row.
    assert decode("table[1]{a}:\n  1\n  - x") == [{"a": 1}, {"a": "- x"}]


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

def test_iter_logical_lines_joins_open_quotes():
    text = 'a: 1\nb: "x\ny"\nc: 2'
    assert list(iter_logical_lines(text)) == [(1, "a: 1"), (2, 'b: "x\ny"'), (4, "c: 2")]


def test_parse_inline_value():
    assert parse_inline_value(" [] ") == []
    assert parse_inline_value("{}") == {}
    assert parse_inline_value("12") == 12


def test_decode_calls_are_independent():
    text = "a:\n  b: 1"
    first = decode(text)
    second = decode(text)
    assert first == second
    assert first is not second
    assert first["a"] is not second["a"]
