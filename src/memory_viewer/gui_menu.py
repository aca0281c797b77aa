# memory_viewer/gui_menu.py

from __future__ import annotations

import platform
import tkinter as tk
import tkinter.messagebox as mbox

from .__about__ import APP_NAME, about_text


# Declarative menu spec.
# "shortcut" is a token string like "MOD+O" or a list of them (e.g., ["F3", "MOD+G"]).
# Tokens: MOD, CTRL, CMD, ALT, SHIFT, a letter, or a named key (ENTER, ESC, F1-F24, ...).
MENU_SPEC = [
    {
        "menu": "File",
        "items": [
            {"label": "Open…", "command": "_open_file", "shortcut": "MOD+O"},
            {"label": "Export Selection…", "command": "_export_raw", "shortcut": "MOD+E"},
            {"type": "separator"},
            {"label": "Quit", "command": "_quit", "shortcut": "MOD+Q"},
        ],
    },
    {
        "menu": "Edit",
        "items": [
            {"label": "Copy Hex", "command": "_copy_hex", "shortcut": "MOD+SHIFT+C"},
            {"label": "Copy ASCII", "command": "_copy_ascii", "shortcut": "MOD+SHIFT+A"},
            {"type": "separator"},
            {"label": "Clear Selection", "command": "_clear_selection", "shortcut": "ESC"},
        ],
    },
    {
        "menu": "Search",
        "items": [
            {"label": "Find…", "command": "_focus_search", "shortcut": "MOD+F"},
            {"label": "Next Match", "command": "_next_match", "shortcut": ["F3", "MOD+G"]},
            {"label": "Previous Match", "command": "_prev_match", "shortcut": ["SHIFT+F3", "MOD+SHIFT+G"]},
            {"type": "separator"},
            {
                "label": "Search Hex",
                "command": "_set_search_mode",
                "command_args": ["hex"],
                "shortcut": "MOD+SHIFT+H",
            },
            {
                "label": "Search ASCII",
                "command": "_set_search_mode",
                "command_args": ["ascii"],
                "shortcut": "MOD+SHIFT+T",
            },
        ],
    },
    {
        "menu": "Help",
        "items": [
            {"label": "About", "command": "_show_about"},
            {"label": "Shortcuts…", "command": "_show_shortcuts"},
        ],
    },
]

_MODIFIERS = ("MOD", "CTRL", "CMD", "ALT", "SHIFT")

# token -> (menu label, Tk keysym)
_KEYSYMS = {
    "ENTER":  ("Enter",  "Return"),
    "RETURN": ("Return", "Return"),
    "ESC":    ("Esc",    "Escape"),
    "ESCAPE": ("Escape", "Escape"),
    "SPACE":  ("Space",  "space"),
    "TAB":    ("Tab",    "Tab"),
    "BACKSPACE": ("Backspace", "BackSpace"),
    "DELETE": ("Delete", "Delete"),
    "HOME":   ("Home",   "Home"),
    "END":    ("End",    "End"),
    "PGUP":   ("PgUp",   "Prior"),
    "PGDN":   ("PgDn",   "Next"),
    "UP":     ("Up",     "Up"),
    "DOWN":   ("Down",   "Down"),
    "LEFT":   ("Left",   "Left"),
    "RIGHT":  ("Right",  "Right"),
    **{f"F{i}": (f"F{i}", f"F{i}") for i in range(1, 25)},
    "COMMA":  (",", "comma"),
    "PERIOD": (".", "period"),
    "SLASH":  ("/", "slash"),
    "SEMICOLON": (";", "semicolon"),
    "MINUS":  ("-", "minus"),
    "EQUAL":  ("=", "equal"),
    "BACKSLASH": ("\\", "backslash"),
}


def _platform_keycfg(system: str | None = None) -> dict[str, str]:
    """Tk modifier names and their menu labels for the running platform."""
    if (system or platform.system()) == "Darwin":
        return {
            "MOD": "Command",     "MOD_LABEL": "Cmd",
            "CTRL": "Control",    "CTRL_LABEL": "Ctrl",
            "CMD": "Command",     "CMD_LABEL": "Cmd",
            "ALT": "Option",      "ALT_LABEL": "Opt",
            "SHIFT": "Shift",     "SHIFT_LABEL": "Shift",
        }
    return {
        "MOD": "Control",     "MOD_LABEL": "Ctrl",
        "CTRL": "Control",    "CTRL_LABEL": "Ctrl",
        "CMD": "Control",     "CMD_LABEL": "Ctrl",  # no Command key off macOS
        "ALT": "Alt",         "ALT_LABEL": "Alt",
        "SHIFT": "Shift",     "SHIFT_LABEL": "Shift",
    }

def _split_shortcut(shortcut: str) -> tuple[list[str], str | None]:
    """Return (modifiers in first-seen order, key token or None)."""
    mods: list[str] = []
    key: str | None = None
    for tok in (t.strip().upper() for t in shortcut.split("+")):
        if not tok:
            continue
        if tok in _MODIFIERS:
            if tok not in mods:
                mods.append(tok)
        else:
            key = tok  # last non-modifier wins
    # an explicit CMD/CTRL replaces the platform MOD
    if "MOD" in mods and ("CMD" in mods or "CTRL" in mods):
        mods.remove("MOD")
    return mods, key

def _resolve_shortcut(shortcut: str, keycfg: dict[str, str]) -> tuple[str, str]:
    """
    Turn 'MOD+SHIFT+G' into a menu accelerator label ('Cmd+Shift+G')
    and a Tk binding sequence ('<Command-Shift-g>').
    """
    mods, key = _split_shortcut(shortcut)
    if "CMD" in mods or "CTRL" in mods:
        order = ("CMD", "CTRL", "ALT", "SHIFT")
    else:
        order = ("MOD", "ALT", "SHIFT")

    labels = [keycfg.get(f"{m}_LABEL", m.title()) for m in order if m in mods]
    binds = [keycfg.get(m, m.title()) for m in order if m in mods]

    if key in _KEYSYMS:
        label, keysym = _KEYSYMS[key]
        labels.append(label)
        binds.append(keysym)
    elif key is not None and len(key) == 1:
        labels.append(key.upper())
        binds.append(key.lower())
    elif key is not None:
        labels.append(key.title())
        binds.append(key)

    return "+".join(labels), (f"<{'-'.join(binds)}>" if binds else "")

def _binding_variants(bind_seq: str) -> list[str]:
    """Both letter cases of a single-letter binding, so Caps Lock/Shift still fire."""
    inner = bind_seq[1:-1].split("-")
    key = inner[-1]
    if len(key) != 1 or not key.isalpha():
        return [bind_seq]
    head = inner[:-1]
    return [f"<{'-'.join(head + [k])}>" for k in (key.lower(), key.upper())]

def _shortcuts_of(item: dict) -> list[str]:
    sc = item.get("shortcut")
    if not sc:
        return []
    return list(sc) if isinstance(sc, (list, tuple)) else [sc]

def shortcut_lines(spec: list[dict], keycfg: dict[str, str]) -> list[str]:
    """'Label: Accel, Accel' for every menu item that has a shortcut."""
    lines = []
    for menu in spec:
        for item in menu.get("items", []):
            shortcuts = _shortcuts_of(item)
            if item.get("type") == "separator" or not shortcuts:
                continue
            accels = [_resolve_shortcut(s, keycfg)[0] for s in shortcuts]
            lines.append(f"{item['label']}: {', '.join(accels)}")
    return lines

def build_menubar(root: tk.Tk, app: object, spec: list[dict] = MENU_SPEC) -> tk.Menu:
    """
    Create and attach a menubar to `root` using `spec`, binding shortcuts to methods on `app`.
    Returns the created menubar.
    """
    keycfg = _platform_keycfg()
    menubar = tk.Menu(root)
    root.config(menu=menubar)

    for menu_def in spec:
        m = tk.Menu(menubar, tearoff=False)
        menubar.add_cascade(label=menu_def["menu"], menu=m)

        for item in menu_def.get("items", []):
            if item.get("type") == "separator":
                m.add_separator()
                continue

            command = getattr(app, item["command"], None) or (lambda *a, **k: None)

            def invoke(fn=command, args=item.get("command_args", []), kwargs=item.get("command_kwargs", {})):
                fn(*args, **kwargs)

            accel = ""
            for idx, s in enumerate(_shortcuts_of(item)):
                label, bind_seq = _resolve_shortcut(s, keycfg)
                if idx == 0:
                    accel = label
                if not bind_seq:
                    continue
                for seq in _binding_variants(bind_seq):
                    root.bind_all(seq, lambda e, inv=invoke: (inv(), "break")[1])

            m.add_command(label=item["label"], command=invoke, accelerator=accel)

    return menubar

def show_about_dialog(app, root):
    mbox.showinfo(f"About {APP_NAME}", about_text(), parent=root)

def show_shortcuts_dialog(app, root):
    """Show a popup with the list of shortcuts from MENU_SPEC."""
    lines = shortcut_lines(MENU_SPEC, _platform_keycfg())
    mbox.showinfo("Keyboard Shortcuts", "\n".join(lines), parent=root)
