# memory_viewer/gui.py

from __future__ import annotations

import logging
import sys
import tkinter as tk
import tkinter.messagebox as mbox
from pathlib import Path
from tkinter import filedialog, ttk

from .__about__ import APP_TITLE
from .gui_menu import build_menubar, show_about_dialog, show_shortcuts_dialog
from .logic import (
    ROW_WIDTH,
    SEARCH_MODES,
    Match,
    Row,
    arrow_selection,
    click_selection,
    display_char,
    drag_selection,
    extend_selection,
    find_matches,
    format_bytes,
    index_to_match,
    match_to_index,
    next_match_index,
    parse_search_query,
    prev_match_index,
    selected_bytes,
    selection_ascii,
    selection_bounds,
    selection_hex,
)

logger = logging.getLogger(__name__)

HEX_SPAN = ROW_WIDTH * 3 - 1   # "XX XX ... XX"
COLUMN_GAP = 2

ARROW_KEYS = {"Left": "left", "Right": "right", "Up": "up", "Down": "down"}


class DumpLayout:
    """Character geometry of the dump text: where each byte's hex and ascii cells sit.

    Line ``r + 1`` holds row ``r``; columns are 0-based Tk text columns.
    """
    def __init__(self, rows: list[Row]) -> None:
        self.offset_width = max((len(r.offset) for r in rows), default=6)
        self.hex_start = self.offset_width + COLUMN_GAP
        self.ascii_start = self.hex_start + HEX_SPAN + COLUMN_GAP

    def render_line(self, row: Row) -> str:
        text = "".join(display_char(c) for c in row.ascii)
        return f"{row.offset:<{self.offset_width}}  {' '.join(row.hex):<{HEX_SPAN}}  {text}"

    def hex_span(self, match: Match, last_col: int | None = None) -> tuple[str, str]:
        """Text index range covering hex cells ``match.col``..``last_col`` on one row."""
        last_col = match.col if last_col is None else last_col
        line = match.row + 1
        return (f"{line}.{self.hex_start + 3 * match.col}",
                f"{line}.{self.hex_start + 3 * last_col + 2}")

    def ascii_span(self, match: Match, last_col: int | None = None) -> tuple[str, str]:
        last_col = match.col if last_col is None else last_col
        line = match.row + 1
        return (f"{line}.{self.ascii_start + match.col}",
                f"{line}.{self.ascii_start + last_col + 1}")

    def cell_at(self, line: int, column: int) -> Match | None:
        """Map a text position back to the byte cell under it, or None for offsets/gaps."""
        if line < 1:
            return None
        rel = column - self.hex_start
        if 0 <= rel < HEX_SPAN:
            return Match(line - 1, rel // 3)
        rel = column - self.ascii_start
        if 0 <= rel < ROW_WIDTH:
            return Match(line - 1, rel)
        return None


class MemoryViewerApp:
    """Tkinter hex viewer wrapped around the pure logic functions."""

    def __init__(self, root: tk.Tk) -> None:
        self.root = root
        root.title(APP_TITLE)
        root.minsize(900, 560)

        self.data = b""
        self.rows: list[Row] = []
        self.layout = DumpLayout([])
        self.matches: list[Match] = []
        self.current_match: int | None = None
        self.sel_start: int | None = None
        self.sel_end: int | None = None

        self.main = ttk.Frame(root, padding=12)
        self.main.grid(row=0, column=0, sticky="nsew")
        root.columnconfigure(0, weight=1)
        root.rowconfigure(0, weight=1)
        self.main.columnconfigure(0, weight=1)
        self.main.rowconfigure(3, weight=1)

        self.file_var = tk.StringVar(value="No file loaded")
        self.search_var = tk.StringVar()
        self.mode_var = tk.StringVar(value="hex")
        self.match_var = tk.StringVar()
        self.selection_var = tk.StringVar(value="No selection")

        build_menubar(self.root, self)
        self._build_toolbar(row=0)
        self._build_selection_bar(row=1)
        ttk.Separator(self.main, orient="horizontal").grid(row=2, column=0, sticky="ew", pady=(6, 8))
        self._build_dump(row=3)

        self.search_var.trace_add("write", lambda *_: self._update_search())
        self._refresh_selection()

    # ----------------- Layout -----------------
    def _build_toolbar(self, row: int) -> None:
        bar = ttk.Frame(self.main)
        bar.grid(row=row, column=0, sticky="ew", pady=(0, 6))

        ttk.Button(bar, text="Open…", command=self._open_file).pack(side="left")
        ttk.Label(bar, textvariable=self.file_var, foreground="#555555").pack(side="left", padx=(8, 16))

        self.search_entry = ttk.Entry(bar, textvariable=self.search_var, width=32)
        self.search_entry.pack(side="left")
        ttk.OptionMenu(
            bar, self.mode_var, self.mode_var.get(), *SEARCH_MODES,
            command=lambda _: self._update_search()
        ).pack(side="left", padx=(6, 10))

        self.prev_btn = ttk.Button(bar, text="◀ Prev", command=self._prev_match)
        self.prev_btn.pack(side="left")
        self.next_btn = ttk.Button(bar, text="Next ▶", command=self._next_match)
        self.next_btn.pack(side="left", padx=(4, 10))
        ttk.Label(bar, textvariable=self.match_var).pack(side="left")

    def _build_selection_bar(self, row: int) -> None:
        bar = ttk.Frame(self.main)
        bar.grid(row=row, column=0, sticky="ew")

        ttk.Label(bar, textvariable=self.selection_var, width=22).pack(side="left")
        self.selection_btns = [
            ttk.Button(bar, text="Copy Hex", command=self._copy_hex),
            ttk.Button(bar, text="Copy ASCII", command=self._copy_ascii),
            ttk.Button(bar, text="Export Raw…", command=self._export_raw),
            ttk.Button(bar, text="Clear", command=self._clear_selection),
        ]
        for btn in self.selection_btns:
            btn.pack(side="left", padx=(0, 4))

    def _build_dump(self, row: int) -> None:
        frame = ttk.Frame(self.main)
        frame.grid(row=row, column=0, sticky="nsew")
        frame.columnconfigure(0, weight=1)
        frame.rowconfigure(0, weight=1)

        self.text = tk.Text(
            frame, font=("TkFixedFont", 11), wrap="none",
            cursor="arrow", takefocus=True, state="disabled",
        )
        yscroll = ttk.Scrollbar(frame, orient="vertical", command=self.text.yview)
        self.text.configure(yscrollcommand=yscroll.set)
        self.text.grid(row=0, column=0, sticky="nsew")
        yscroll.grid(row=0, column=1, sticky="ns")

        self.text.tag_configure("offset", foreground="#777777")
        self.text.tag_configure("match", background="#FACC15", foreground="black")
        self.text.tag_configure("selected", background="#60A5FA", foreground="black")
        self.text.tag_raise("selected")

        self.text.bind("<Button-1>", self._on_click)
        self.text.bind("<Shift-Button-1>", self._on_shift_click)
        self.text.bind("<B1-Motion>", self._on_drag)
        for keysym in ARROW_KEYS:
            self.text.bind(f"<KeyPress-{keysym}>", self._on_arrow)

    # ----------------- Loading -----------------
    def load_bytes(self, data: bytes, label: str = "") -> None:
        self.data = bytes(data)
        self.rows = format_bytes(self.data)
        self.layout = DumpLayout(self.rows)
        self.matches = []
        self.current_match = None
        self.sel_start = self.sel_end = None
        self.file_var.set(f"{label}  ({len(self.data):,} bytes)" if label else f"{len(self.data):,} bytes")
        logger.debug("Rendering %d rows", len(self.rows))

        self.text.configure(state="normal")
        self.text.delete("1.0", "end")
        for r in self.rows:
            self.text.insert("end", self.layout.render_line(r) + "\n")
        for line in range(1, len(self.rows) + 1):
            self.text.tag_add("offset", f"{line}.0", f"{line}.{self.layout.offset_width}")
        self.text.configure(state="disabled")

        self._update_search()
        self._refresh_selection()

    def _open_file(self) -> None:
        path = filedialog.askopenfilename(parent=self.root, title="Open file")
        if path:
            self.open_path(path)

    def open_path(self, path: str) -> bool:
        """Read ``path`` into the viewer; report read errors in a dialog and keep the current view."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            logger.error("Cannot read %s: %s", path, exc)
            mbox.showerror("Open failed", str(exc), parent=self.root)
            return False
        logger.info("Loaded %d bytes from %s", len(data), path)
        self.load_bytes(data, Path(path).name)
        return True

    def _quit(self) -> None:
        self.root.destroy()

    # ----------------- Search -----------------
    def _set_search_mode(self, mode: str) -> None:
        self.mode_var.set(mode)
        self._update_search()

    def _focus_search(self) -> None:
        self.search_entry.focus_set()
        self.search_entry.select_range(0, "end")

    def _update_search(self) -> None:
        query = parse_search_query(self.search_var.get(), self.mode_var.get())
        self.matches = find_matches(self.data, query) if query else []
        self.current_match = None
        if self.search_var.get():
            self.match_var.set(f"{len(self.matches)} matching bytes")
        else:
            self.match_var.set("")
        state = "normal" if self.matches else "disabled"
        self.prev_btn.configure(state=state)
        self.next_btn.configure(state=state)
        self._redraw_matches()

    def _redraw_matches(self) -> None:
        self.text.tag_remove("match", "1.0", "end")
        for m in self.matches:
            self.text.tag_add("match", *self.layout.hex_span(m))
            self.text.tag_add("match", *self.layout.ascii_span(m))

    def _go_to_match(self, index: int | None) -> None:
        if index is None:
            return
        self.current_match = index
        cell = match_to_index(self.matches[index])
        self.sel_start = self.sel_end = cell
        self._refresh_selection()
        self.text.see(self.layout.hex_span(self.matches[index])[0])

    def _next_match(self) -> None:
        self._go_to_match(next_match_index(self.current_match, len(self.matches)))

    def _prev_match(self) -> None:
        self._go_to_match(prev_match_index(self.current_match, len(self.matches)))

    # ----------------- Selection -----------------
    def _has_selection(self) -> bool:
        return self.sel_start is not None and self.sel_end is not None

    def _cell_from_event(self, event) -> int | None:
        line, col = (int(p) for p in self.text.index(f"@{event.x},{event.y}").split("."))
        cell = self.layout.cell_at(line, col)
        if cell is None:
            return None
        index = match_to_index(cell)
        return index if index < len(self.data) else None

    def _on_click(self, event):
        self.text.focus_set()
        index = self._cell_from_event(event)
        if index is not None:
            self.sel_start, self.sel_end = click_selection(self.sel_start, self.sel_end, index)
            self._refresh_selection()
        return "break"

    def _on_shift_click(self, event):
        index = self._cell_from_event(event)
        if index is not None:
            self.sel_start, self.sel_end = extend_selection(self.sel_start, self.sel_end, index)
            self._refresh_selection()
        return "break"

    def _on_drag(self, event):
        index = self._cell_from_event(event)
        if index is not None:
            self.sel_start, self.sel_end = drag_selection(self.sel_start, self.sel_end, index)
            self._refresh_selection()
        return "break"

    def _on_arrow(self, event):
        if not self.data or self.sel_end is None:
            return "break"
        self.sel_start, self.sel_end = arrow_selection(
            self.sel_start, self.sel_end, ARROW_KEYS[event.keysym], len(self.data),
            extend=bool(event.state & 0x0001),  # Shift
        )
        self._refresh_selection()
        self.text.see(self.layout.hex_span(index_to_match(self.sel_end))[0])
        return "break"

    def _clear_selection(self) -> None:
        self.sel_start = self.sel_end = None
        self._refresh_selection()

    def _refresh_selection(self) -> None:
        self.text.tag_remove("selected", "1.0", "end")
        if not self._has_selection() or not self.data:
            self.selection_var.set("No selection")
            for btn in self.selection_btns:
                btn.configure(state="disabled")
            return

        lo, hi = selection_bounds(self.sel_start, self.sel_end)
        hi = min(hi, len(self.data) - 1)
        first, last = index_to_match(lo), index_to_match(hi)
        for row in range(first.row, last.row + 1):
            start = Match(row, first.col if row == first.row else 0)
            end_col = last.col if row == last.row else ROW_WIDTH - 1
            self.text.tag_add("selected", *self.layout.hex_span(start, end_col))
            self.text.tag_add("selected", *self.layout.ascii_span(start, end_col))

        self.selection_var.set(f"Selected {hi - lo + 1} bytes")
        for btn in self.selection_btns:
            btn.configure(state="normal")

    # ----------------- Clipboard / export -----------------
    def copy_value(self, value: str) -> None:
        self.root.clipboard_clear()
        self.root.clipboard_append(value)
        self.root.update()

    def _copy_hex(self) -> None:
        if self._has_selection():
            self.copy_value(selection_hex(self.data, self.sel_start, self.sel_end))

    def _copy_ascii(self) -> None:
        if self._has_selection():
            self.copy_value(selection_ascii(self.data, self.sel_start, self.sel_end))

    def _export_raw(self) -> None:
        if not self._has_selection():
            return
        path = filedialog.asksaveasfilename(
            parent=self.root, title="Export selection",
            initialfile="selection.bin", defaultextension=".bin",
        )
        if not path:
            return
        chunk = selected_bytes(self.data, self.sel_start, self.sel_end)
        try:
            Path(path).write_bytes(chunk)
        except OSError as exc:
            logger.error("Cannot write %s: %s", path, exc)
            mbox.showerror("Export failed", str(exc), parent=self.root)
            return
        logger.info("Exported %d bytes to %s", len(chunk), path)

    # ----------------- Dialogs -----------------
    def _show_about(self):
        show_about_dialog(self, self.root)

    def _show_shortcuts(self):
        show_shortcuts_dialog(self, self.root)


def run(path: str | None = None) -> None:
    root = tk.Tk()
    app = MemoryViewerApp(root)
    if path:
        app.open_path(path)
    root.mainloop()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run(sys.argv[1] if len(sys.argv) > 1 else None)


if __name__ == "__main__":
    main()
