"""Helpers for normalizing configured key names into `keyboard` library names."""
from __future__ import annotations

_MOD_ORDER = ("ctrl", "shift", "alt")

_MOD_ALIASES = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "left ctrl": "ctrl",
    "right ctrl": "ctrl",
    "shift": "shift",
    "left shift": "shift",
    "right shift": "shift",
    "alt": "alt",
    "left alt": "alt",
    "right alt": "alt",
    "altgr": "alt",
}

_KEY_ALIASES = {
    "esc": "escape",
    "return": "enter",
    "spacebar": "space",
    "pgup": "page up",
    "pgdn": "page down",
    "del": "delete",
    "ins": "insert",
    "arrow up": "up",
    "arrow down": "down",
    "arrow left": "left",
    "arrow right": "right",
}


def normalize_key_token(token: object) -> str:
    """Normalize one key token (modifier or primary key) to canonical lowercase."""
    if token is None:
        return ""
    raw = str(token)
    if raw == " ":
        return "space"
    t = raw.strip().lower().replace("_", " ")
    t = " ".join(t.split())
    if not t:
        return ""
    if t in _MOD_ALIASES:
        return _MOD_ALIASES[t]
    return _KEY_ALIASES.get(t, t)


def normalize_bind(bind: object) -> str:
    """Normalize a bind string (e.g. 'Control + 1' -> 'ctrl+1'); '' if invalid."""
    if bind is None:
        return ""
    parts = [normalize_key_token(p) for p in str(bind).split("+")]
    parts = [p for p in parts if p]
    if not parts:
        return ""
    mods: set[str] = set()
    primary = ""
    for part in parts:
        if part in _MOD_ORDER:
            mods.add(part)
            continue
        if primary:
            return ""
        primary = part
    if not primary:
        return ""
    ordered = [m for m in _MOD_ORDER if m in mods]
    return "+".join(ordered + [primary])
