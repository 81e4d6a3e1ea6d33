# Folder: rtl_core/block_7_keymap
# File:   b7f1_keymap.py

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

__all__ = ["b7f1_keymap", "normalize_chord", "KEYMAP"]

RULES_VERSION = "1.0"

# chord -> registry step
KEYMAP: Dict[str, str] = {
    "Ctrl-Shift-r": "b3f2_toggle_direction",
    "Cmd-Shift-r": "b3f2_toggle_direction",
    "Mod-Shift-r": "b3f2_toggle_direction",
}

_MOD_ALIASES = {
    "ctrl": "Ctrl", "control": "Ctrl",
    "cmd": "Cmd", "command": "Cmd", "meta": "Cmd",
    "mod": "Mod",
    "shift": "Shift",
    "alt": "Alt", "option": "Alt",
}
_MOD_ORDER = ["Mod", "Ctrl", "Cmd", "Alt", "Shift"]
_SPLIT = re.compile(r"[-+\s]+")


def normalize_chord(chord: str) -> Optional[str]:
    """'ctrl+shift+R' / 'Shift-Ctrl-r' -> 'Ctrl-Shift-r'. None for an unparseable chord."""
    if not isinstance(chord, str) or not chord.strip():
        return None
    parts = [p for p in _SPLIT.split(chord.strip()) if p]
    if not parts:
        return None
    *mods, key = parts
    canon = []
    for m in mods:
        cm = _MOD_ALIASES.get(m.lower())
        if cm is None:
            return None
        if cm not in canon:
            canon.append(cm)
    canon.sort(key=_MOD_ORDER.index)
    key = key.lower() if len(key) == 1 else key
    return "-".join(canon + [key])


def _get(o: Dict[str, Any], path: List[str], default=None):
    cur = o
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def b7f1_keymap(input_json: Dict[str, Any]) -> Dict[str, Any]:
    """
    B7F1 — Direction.Keymap.Resolve
    Input:  { "key": { "chord": str } }
    Output: { "status": "OK|SKIP", "command": { "step": str, "chord": str, "args": {} },
              "diag": { "reason": "ok|unbound|invalid_chord" } }
    """
    raw = _get(input_json, ["key", "chord"])
    chord = normalize_chord(raw)
    if chord is None:
        return {"status": "SKIP", "diag": {"reason": "invalid_chord", "chord": raw}}
    step = KEYMAP.get(chord)
    if step is None:
        return {"status": "SKIP", "diag": {"reason": "unbound", "chord": chord}}
    return {
        "status": "OK",
        "command": {"step": step, "chord": chord, "args": {}},
        "diag": {"reason": "ok", "rules_version": RULES_VERSION},
    }
