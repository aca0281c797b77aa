# tests/test_render.py
import json


def test_to_dict_field_order(logic):
    (row,) = logic.format_bytes(b"Hi")
    record = row.to_dict()
    assert list(record) == ["offset", "hex", "ascii"]
    assert record == {"offset": "0x0000", "hex": ["48", "69"], "ascii": ["H", "i"]}


def test_rows_to_json_wire_format(logic):
    rows = logic.format_bytes(b"A" * 17)
    text = logic.rows_to_json(rows)
    parsed = json.loads(text)
    assert [list(r) for r in parsed] == [["offset", "hex", "ascii"]] * 2
    assert parsed[1] == {"offset": "0x0010", "hex": ["41"], "ascii": ["A"]}
    assert text.startswith('[{"offset": "0x0000", "hex": ["41"')


def test_rows_to_json_empty(logic):
    assert logic.rows_to_json([]) == "[]"


def test_rows_to_json_indent(logic):
    text = logic.rows_to_json(logic.format_bytes(b"\t"), indent=2)
    assert "\n" in text
    assert json.loads(text) == [{"offset": "0x0000", "hex": ["09"], "ascii": ["\t"]}]


def test_render_rows_empty(logic):
    assert logic.render_rows([]) == ""


def test_render_rows_layout(logic):
    rows = logic.format_bytes(b"Hello, world!\x00\x01\x02" + b"\tend")
    lines = logic.render_rows(rows).split("\n")
    assert len(lines) == 2
    assert lines[0] == (
        "0x0000  48 65 6C 6C 6F 2C 20 77 6F 72 6C 64 21 00 01 02  |Hello, world!...|"
    )
    # short last row is padded so the ascii column lines up
    assert lines[1].index("|") == lines[0].index("|")
    assert lines[1].endswith("|.end|")


def test_render_rows_pads_offsets_to_widest(logic):
    rows = logic.format_bytes(bytes(0x10010))
    lines = logic.render_rows(rows).split("\n")
    assert lines[0].startswith("0x0000   00")
    assert lines[-1].startswith("0x10000  00")
    assert len({line.index("|") for line in lines}) == 1
