# tests/test_gui_menu.py

import pytest

pytest.importorskip("tkinter")

from memory_viewer.gui_menu import (  # noqa: E402
    MENU_SPEC,
    _binding_variants,
    _platform_keycfg,
    _resolve_shortcut,
    shortcut_lines,
)

# Fixed keycfgs so tests are deterministic
MAC_CFG = _platform_keycfg("Darwin")
WINLINUX_CFG = _platform_keycfg("Linux")


@pytest.mark.parametrize("shortcut,cfg,expected_label,expected_bind", [
    ("MOD+O", MAC_CFG,       "Cmd+O",     "<Command-o>"),
    ("MOD+O", WINLINUX_CFG,  "Ctrl+O",    "<Control-o>"),

    # Modifier order: Cmd/Ctrl, Alt, Shift, then key
    ("SHIFT+MOD+G", MAC_CFG,      "Cmd+Shift+G",      "<Command-Shift-g>"),
    ("CTRL+ALT+SHIFT+X", MAC_CFG, "Ctrl+Opt+Shift+X", "<Control-Option-Shift-x>"),
    ("CMD+ALT+K", MAC_CFG,        "Cmd+Opt+K",        "<Command-Option-k>"),
    ("CTRL+ALT+K", WINLINUX_CFG,  "Ctrl+Alt+K",       "<Control-Alt-k>"),
    ("MOD+CTRL+K", MAC_CFG,       "Ctrl+K",           "<Control-k>"),

    # Named keysyms
    ("ESC", WINLINUX_CFG,         "Esc",           "<Escape>"),
    ("MOD+ENTER", MAC_CFG,        "Cmd+Enter",     "<Command-Return>"),
    ("F3", MAC_CFG,               "F3",            "<F3>"),
    ("SHIFT+F3", WINLINUX_CFG,    "Shift+F3",      "<Shift-F3>"),
    ("MOD+COMMA", MAC_CFG,        "Cmd+,",         "<Command-comma>"),
    ("CTRL+PERIOD", WINLINUX_CFG, "Ctrl+.",        "<Control-period>"),

    # Unknown token: title-cased label, raw keysym
    ("MOD+MYKEY", MAC_CFG,        "Cmd+Mykey",     "<Command-MYKEY>"),
])
def test_resolve_shortcut_variants(shortcut, cfg, expected_label, expected_bind):
    assert _resolve_shortcut(shortcut, cfg) == (expected_label, expected_bind)


def test_resolve_shortcut_letter_case_rules():
    assert _resolve_shortcut("ctrl+a", WINLINUX_CFG) == ("Ctrl+A", "<Control-a>")
    assert _resolve_shortcut("mod + z", MAC_CFG) == ("Cmd+Z", "<Command-z>")


def test_resolve_shortcut_modifiers_only():
    assert _resolve_shortcut("CTRL+SHIFT", WINLINUX_CFG) == ("Ctrl+Shift", "<Control-Shift>")
    assert _resolve_shortcut("", WINLINUX_CFG) == ("", "")


def test_binding_variants():
    assert _binding_variants("<Control-Shift-g>") == ["<Control-Shift-g>", "<Control-Shift-G>"]
    assert _binding_variants("<Shift-F3>") == ["<Shift-F3>"]
    assert _binding_variants("<Escape>") == ["<Escape>"]


def test_shortcut_lines_cover_menu():
    lines = shortcut_lines(MENU_SPEC, WINLINUX_CFG)
    assert "Open…: Ctrl+O" in lines
    assert "Next Match: F3, Ctrl+G" in lines
    assert "Previous Match: Shift+F3, Ctrl+Shift+G" in lines
    assert "Clear Selection: Esc" in lines
    assert not any(line.startswith("About") for line in lines)


def test_menu_commands_exist_on_app():
    gui = pytest.importorskip("memory_viewer.gui")
    for menu in MENU_SPEC:
        for item in menu["items"]:
            if item.get("type") == "separator":
                continue
            assert hasattr(gui.MemoryViewerApp, item["command"]), item["command"]
