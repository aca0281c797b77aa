# memory_viewer/logic.py

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Iterable, NamedTuple

ROW_WIDTH = 16
OFFSET_DIGITS = 4
PLACEHOLDER = "."
SEARCH_MODES = ("hex", "ascii")

GRAPHIC_MIN = 0x21
GRAPHIC_MAX = 0x7E
# space, tab, newline, vertical tab, form feed, carriage return
WHITESPACE = frozenset(b" \t\n\x0b\x0c\r")

CURSOR_STEPS = {
    "left": -1,
    "right": 1,
    "up": -ROW_WIDTH,
    "down": ROW_WIDTH,
}

_HEX_PREFIX = re.compile(r"[0-9A-F]+")


@dataclass(frozen=True)
class Row:
    """One line of the dump: up to ``ROW_WIDTH`` bytes starting at ``offset``."""
    offset: str
    hex: tuple[str, ...]
    ascii: tuple[str, ...]

    def to_dict(self) -> dict:
        return {"offset": self.offset, "hex": list(self.hex), "ascii": list(self.ascii)}


class Match(NamedTuple):
    row: int
    col: int


# ---------------- Formatting ----------------
def format_offset(offset: int) -> str:
    """Render a byte offset as ``0x`` + uppercase hex, at least 4 digits, never truncated."""
    return f"0x{offset:0{OFFSET_DIGITS}X}"

def is_printable(b: int) -> bool:
    return GRAPHIC_MIN <= b <= GRAPHIC_MAX or b in WHITESPACE

def byte_to_ascii(b: int) -> str:
    return chr(b) if is_printable(b) else PLACEHOLDER

def display_char(c: str) -> str:
    """Single-line form of an ascii cell: whitespace other than space becomes ``PLACEHOLDER``."""
    return c if c == " " or not c.isspace() else PLACEHOLDER

def format_bytes(data: bytes | bytearray | memoryview | Iterable[int]) -> list[Row]:
    """Split ``data`` into 16-byte rows with offset, hex and ASCII columns.

    Accepts anything ``bytes()`` accepts. Ints outside 0..255 raise
    ``ValueError`` before any row is built. Empty input gives ``[]``.

    >>> format_bytes(b"A")
    [Row(offset='0x0000', hex=('41',), ascii=('A',))]
    """
    buf = bytes(data)
    rows: list[Row] = []
    for start in range(0, len(buf), ROW_WIDTH):
        chunk = buf[start:start + ROW_WIDTH]
        rows.append(Row(
            offset=format_offset(start),
            hex=tuple(f"{b:02X}" for b in chunk),
            ascii=tuple(byte_to_ascii(b) for b in chunk),
        ))
    return rows


# ---------------- Renderers ----------------
def rows_to_records(rows: Iterable[Row]) -> list[dict]:
    return [row.to_dict() for row in rows]

def rows_to_json(rows: Iterable[Row], indent: int | None = None) -> str:
    """Serialize rows as a JSON array of ``{"offset", "hex", "ascii"}`` records."""
    return json.dumps(rows_to_records(rows), indent=indent)

def render_rows(rows: list[Row]) -> str:
    """Classic one-line-per-row text dump.

    Whitespace other than space is shown as ``.`` here so each row stays on
    one line; the row data itself keeps the literal characters.
    """
    if not rows:
        return ""
    offset_w = max(len(r.offset) for r in rows)
    hex_w = ROW_WIDTH * 3 - 1
    lines = []
    for r in rows:
        text = "".join(display_char(c) for c in r.ascii)
        lines.append(f"{r.offset:<{offset_w}}  {' '.join(r.hex):<{hex_w}}  |{text}|")
    return "\n".join(lines)


# ---------------- Search ----------------
def parse_search_query(text: str, mode: str = "hex") -> list[int]:
    """Turn user input into the byte values to look for.

    hex mode:   "48 65 6c" -> [0x48, 0x65, 0x6C]; tokens are split on spaces and
                read up to the first non-hex character after an optional 0x
                prefix, so "0x41" is 0x41, "4G" is 0x04 and "ZZ" is skipped.
    ascii mode: one value per character.

    Values above 0xFF can never match a byte and are dropped.
    """
    if mode == "hex":
        values = []
        for tok in text.upper().split(" "):
            tok = tok.strip()
            if tok.startswith("0X"):
                tok = tok[2:]
            m = _HEX_PREFIX.match(tok)
            if m:
                values.append(int(m.group(), 16))
    elif mode == "ascii":
        values = [ord(c) for c in text]
    else:
        raise ValueError(f"Unknown search mode: {mode!r} (expected one of {', '.join(SEARCH_MODES)})")
    return [v for v in values if v <= 0xFF]

def find_occurrences(data: bytes, query: bytes | list[int]) -> list[int]:
    """Start index of every (possibly overlapping) occurrence of ``query``."""
    needle = bytes(query)
    if not needle or not data:
        return []
    out: list[int] = []
    i = data.find(needle)
    while i != -1:
        out.append(i)
        i = data.find(needle, i + 1)
    return out

def find_matches(data: bytes, query: bytes | list[int]) -> list[Match]:
    """Cells covered by any occurrence of ``query``, ascending, each listed once."""
    width = len(bytes(query))
    cells: list[Match] = []
    last = -1
    for start in find_occurrences(data, query):
        for index in range(max(start, last + 1), start + width):
            cells.append(index_to_match(index))
            last = index
    return cells

def next_match_index(current: int | None, count: int) -> int | None:
    if count == 0:
        return None
    return 0 if current is None else (current + 1) % count

def prev_match_index(current: int | None, count: int) -> int | None:
    if count == 0:
        return None
    return count - 1 if current is None else (current - 1) % count


# ---------------- Selection ----------------
def index_to_match(index: int) -> Match:
    return Match(index // ROW_WIDTH, index % ROW_WIDTH)

def match_to_index(match: Match) -> int:
    return match.row * ROW_WIDTH + match.col

def selection_bounds(start: int, end: int) -> tuple[int, int]:
    """Inclusive (lo, hi) flat indices, whichever way the selection was dragged."""
    if start < 0 or end < 0:
        raise ValueError("Selection indices must be non-negative.")
    return min(start, end), max(start, end)

def selected_bytes(data: bytes, start: int, end: int) -> bytes:
    lo, hi = selection_bounds(start, end)
    return bytes(data[lo:hi + 1])

def selection_hex(data: bytes, start: int, end: int) -> str:
    return " ".join(f"{b:02X}" for b in selected_bytes(data, start, end))

def selection_ascii(data: bytes, start: int, end: int) -> str:
    return "".join(byte_to_ascii(b) for b in selected_bytes(data, start, end))

def move_cursor(index: int, direction: str, length: int) -> int:
    """Move a flat cursor index one cell (left/right) or one row (up/down).

    The result is clamped to the bytes actually present.
    """
    if length <= 0:
        raise ValueError("Cannot move a cursor over empty data.")
    try:
        step = CURSOR_STEPS[direction.lower()]
    except KeyError:
        raise ValueError(f"Unknown cursor direction: {direction!r}") from None
    return max(0, min(length - 1, index + step))

def click_selection(sel_start: int | None, sel_end: int | None, index: int) -> tuple[int | None, int | None]:
    """Plain click: select just ``index``, or clear when it is already inside the selection."""
    if sel_start is not None and sel_end is not None:
        lo, hi = selection_bounds(sel_start, sel_end)
        if lo <= index <= hi:
            return None, None
    return index, index

def extend_selection(sel_start: int | None, sel_end: int | None, index: int) -> tuple[int, int]:
    """Shift-click: keep the anchor and move the far end; anchor at ``index`` when nothing is selected."""
    return (index if sel_start is None else sel_start), index

def drag_selection(sel_start: int | None, sel_end: int | None, index: int) -> tuple[int | None, int | None]:
    """Drag only extends an anchored selection."""
    if sel_start is None:
        return sel_start, sel_end
    return sel_start, index

def arrow_selection(
    sel_start: int | None,
    sel_end: int | None,
    direction: str,
    length: int,
    extend: bool = False,
) -> tuple[int | None, int | None]:
    """Arrow key: move the cursor end; shift (``extend``) keeps the anchor, otherwise collapse."""
    if sel_end is None or length <= 0:
        return sel_start, sel_end
    new_index = move_cursor(sel_end, direction, length)
    if extend and sel_start is not None:
        return sel_start, new_index
    return new_index, new_index
