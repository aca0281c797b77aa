# tests/test_cli.py
import io
import json
import sys

import pytest

from memory_viewer.cli import main


def test_dump_text(sample_file, capsys):
    assert main(["dump", str(sample_file)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0] == "0x0000  48 65 6C 6C 6F 2C 20 6D 65 6D 6F 72 79 21 00 01  |Hello, memory!..|"
    assert lines[1].endswith("| !\"#$%&'()*+,-./|")
    assert lines[2].startswith("0x0020  09 48 65 6C 6C 6F FF ")
    assert lines[2].endswith("|.Hello.|")


def test_dump_json(sample_file, capsys):
    assert main(["dump", str(sample_file), "--json"]) == 0
    records = json.loads(capsys.readouterr().out)
    assert [r["offset"] for r in records] == ["0x0000", "0x0010", "0x0020"]
    assert records[2] == {
        "offset": "0x0020",
        "hex": ["09", "48", "65", "6C", "6C", "6F", "FF"],
        "ascii": ["\t", "H", "e", "l", "l", "o", "."],
    }


def test_dump_empty_file(tmp_path, capsys):
    empty = tmp_path / "empty.bin"
    empty.write_bytes(b"")
    assert main(["dump", str(empty)]) == 0
    assert capsys.readouterr().out == ""
    assert main(["dump", str(empty), "--json"]) == 0
    assert capsys.readouterr().out.strip() == "[]"


def test_bare_file_means_dump(sample_file, capsys):
    assert main([str(sample_file)]) == 0
    assert capsys.readouterr().out.startswith("0x0000  48 65")


def test_dump_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"AB\x00")))
    assert main(["dump", "-", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {"offset": "0x0000", "hex": ["41", "42", "00"], "ascii": ["A", "B", "."]}
    ]


def test_search_ascii(sample_file, capsys):
    assert main(["search", str(sample_file), "Hello", "--mode", "ascii"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "0x0000  row 0 col 0",
        "0x0021  row 2 col 1",
        "Matches: 2",
    ]


def test_search_hex(sample_file, capsys):
    assert main(["search", str(sample_file), "00 01"]) == 0
    assert capsys.readouterr().out.splitlines() == ["0x000E  row 0 col 14", "Matches: 1"]


def test_search_no_match(sample_file, capsys):
    assert main(["search", str(sample_file), "DE AD BE EF"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Matches: 0"]


def test_extract_hex(sample_file, capsys):
    assert main(["extract", str(sample_file), "0", "4"]) == 0
    assert capsys.readouterr().out == "48 65 6C 6C 6F\n"


def test_extract_ascii_reversed_range(sample_file, capsys):
    assert main(["extract", str(sample_file), "0x26", "0x20", "--as", "ascii"]) == 0
    assert capsys.readouterr().out == "\tHello.\n"


def test_extract_raw(sample_file, tmp_path, capsys):
    out = tmp_path / "sel.bin"
    assert main(["extract", str(sample_file), "14", "100", "--as", "raw", "-o", str(out)]) == 0
    assert out.read_bytes() == sample_file.read_bytes()[14:]
    assert capsys.readouterr().out == f"Wrote 25 bytes to {out}\n"


def test_extract_past_end_fails(sample_file, caplog):
    assert main(["extract", str(sample_file), "500", "600"]) == 1
    assert "Selection starts at 500" in caplog.text


def test_missing_file_fails(tmp_path, caplog):
    assert main(["dump", str(tmp_path / "nope.bin")]) == 1
    assert "nope.bin" in caplog.text


def test_bad_index_is_usage_error(sample_file):
    with pytest.raises(SystemExit) as exc:
        main(["extract", str(sample_file), "zero", "4"])
    assert exc.value.code == 2


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage: memory-viewer" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.startswith("memory-viewer ")


@pytest.mark.parametrize(
    "argv",
    [
        ["-v", "{path}"],
        ["{path}", "-v"],
        ["--verbose", "dump", "{path}"],
        ["dump", "{path}", "--verbose"],
    ],
)
def test_verbose_flag_anywhere(sample_file, capsys, argv):
    argv = [a.format(path=sample_file) for a in argv]
    assert main(argv) == 0
    assert capsys.readouterr().out.startswith("0x0000  48 65")
