# memory_viewer/__init__.py

"""Memory Viewer package.

Re-exports the core logic for convenient imports in tests or other code.
"""
from .__about__ import (
    __version__,
    APP_NAME,
    APP_TITLE,
    BUNDLE_ID,
    AUTHOR,
    COPYRIGHT,
    COPYRIGHT_YEAR,
    HOMEPAGE,
)

from .logic import (
    ROW_WIDTH,
    OFFSET_DIGITS,
    PLACEHOLDER,
    SEARCH_MODES,
    Match,
    Row,
    arrow_selection,
    byte_to_ascii,
    click_selection,
    display_char,
    drag_selection,
    extend_selection,
    find_matches,
    find_occurrences,
    format_bytes,
    format_offset,
    index_to_match,
    is_printable,
    match_to_index,
    move_cursor,
    next_match_index,
    parse_search_query,
    prev_match_index,
    render_rows,
    rows_to_json,
    rows_to_records,
    selected_bytes,
    selection_ascii,
    selection_bounds,
    selection_hex,
)

__all__ = [
    # Metadata
    "__version__", "APP_NAME", "APP_TITLE", "BUNDLE_ID",
    "AUTHOR", "COPYRIGHT", "COPYRIGHT_YEAR", "HOMEPAGE",
    # Logic
    "ROW_WIDTH", "OFFSET_DIGITS", "PLACEHOLDER", "SEARCH_MODES",
    "Match", "Row",
    "byte_to_ascii", "display_char", "format_bytes", "format_offset", "is_printable",
    "render_rows", "rows_to_json", "rows_to_records",
    "find_matches", "find_occurrences", "parse_search_query",
    "next_match_index", "prev_match_index",
    "index_to_match", "match_to_index", "move_cursor",
    "selected_bytes", "selection_ascii", "selection_bounds", "selection_hex",
    "click_selection", "extend_selection", "drag_selection", "arrow_selection",
]
