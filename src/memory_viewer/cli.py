# memory_viewer/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .__about__ import __version__
from .logic import (
    SEARCH_MODES,
    find_occurrences,
    format_bytes,
    format_offset,
    index_to_match,
    parse_search_query,
    render_rows,
    rows_to_json,
    selected_bytes,
    selection_ascii,
    selection_bounds,
    selection_hex,
)

logger = logging.getLogger(__name__)

SUBCOMMANDS = ("dump", "search", "extract")
GLOBAL_FLAGS = ("-v", "--verbose")


# ---------- helpers ----------
def _read_input(path: str) -> bytes:
    if path == "-":
        data = sys.stdin.buffer.read()
    else:
        data = Path(path).read_bytes()
    logger.debug("Loaded %d bytes from %s", len(data), "<stdin>" if path == "-" else path)
    return data

def _parse_index(text: str) -> int:
    """Byte index in decimal or with a 0x/0o/0b prefix."""
    val = int(text.strip().replace("_", ""), 0)
    if val < 0:
        raise argparse.ArgumentTypeError(f"index must be non-negative: {text}")
    return val


# ---------- subcommands ----------
def cmd_dump(args: argparse.Namespace) -> int:
    rows = format_bytes(_read_input(args.file))
    logger.debug("Formatted %d rows", len(rows))
    if args.json:
        print(rows_to_json(rows, indent=args.indent))
    elif rows:
        print(render_rows(rows))
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    data = _read_input(args.file)
    query = parse_search_query(args.query, args.mode)
    if not query:
        logger.warning("Query %r contains no searchable bytes", args.query)

    starts = find_occurrences(data, query)
    for start in starts:
        cell = index_to_match(start)
        print(f"{format_offset(start)}  row {cell.row} col {cell.col}")
    print(f"Matches: {len(starts)}")
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    data = _read_input(args.file)
    lo, hi = selection_bounds(args.start, args.end)
    if lo >= len(data):
        raise ValueError(f"Selection starts at {lo} but the input is only {len(data)} bytes.")
    if hi >= len(data):
        logger.info("Selection end %d clamped to %d", hi, len(data) - 1)

    if args.as_ == "hex":
        print(selection_hex(data, lo, hi))
    elif args.as_ == "ascii":
        sys.stdout.write(selection_ascii(data, lo, hi) + "\n")
    else:
        chunk = selected_bytes(data, lo, hi)
        Path(args.output).write_bytes(chunk)
        print(f"Wrote {len(chunk)} bytes to {args.output}")
    return 0


# ---------- parser ----------
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="memory-viewer",
        description="Hex + ASCII byte inspector (CLI)"
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")

    sp = p.add_subparsers(dest="cmd")

    # dump
    pd = sp.add_parser("dump", help="print a file as offset / hex / ascii rows")
    pd.add_argument("file", help="file to read, or '-' for stdin")
    pd.add_argument("--json", action="store_true", help="emit rows as JSON records")
    pd.add_argument("--indent", type=int, default=None, help="JSON indent (default: compact)")
    pd.set_defaults(func=cmd_dump)

    # search
    ps = sp.add_parser("search", help="find a byte sequence in a file")
    ps.add_argument("file", help="file to read, or '-' for stdin")
    ps.add_argument("query", help="hex like '48 65 6C' or text like 'Hello'")
    ps.add_argument(
        "--mode", choices=SEARCH_MODES, default="hex",
        help="how to read the query (default: hex)"
    )
    ps.set_defaults(func=cmd_search)

    # extract
    pe = sp.add_parser("extract", help="copy a byte range as hex, ascii or raw bytes")
    pe.add_argument("file", help="file to read, or '-' for stdin")
    pe.add_argument("start", type=_parse_index, help="first byte index (dec or 0x…)")
    pe.add_argument("end", type=_parse_index, help="last byte index, inclusive (dec or 0x…)")
    pe.add_argument(
        "--as", dest="as_", choices=("hex", "ascii", "raw"), default="hex",
        help="output form (default: hex)"
    )
    pe.add_argument("-o", "--output", default="selection.bin", help="raw output file (default: selection.bin)")
    pe.set_defaults(func=cmd_extract)

    return p


def main(argv: Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    # Global flags are accepted anywhere on the line
    flags = [a for a in argv if a in GLOBAL_FLAGS]
    rest = [a for a in argv if a not in GLOBAL_FLAGS]

    # Back-compat convenience: `memory-viewer firmware.bin` means `dump firmware.bin`
    if rest and rest[0] not in SUBCOMMANDS and (rest[0] == "-" or not rest[0].startswith("-")):
        rest = ["dump"] + rest
    argv = flags + rest

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not getattr(args, "cmd", None):
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
