"""Go extractors — shared helpers."""

from __future__ import annotations

import re
from pathlib import Path

from depzoom.extractors.go.go_list import GoListSource, decode_records

__all__ = ["GO_MOD", "GoListSource", "decode_records", "read_module_path"]

GO_MOD = "go.mod"

_MODULE_RE = re.compile(r"^\s*module\s+(.+?)\s*$")


def read_module_path(go_mod: Path) -> str | None:
    """Return the module path declared in *go_mod*, or None if it has none.

    Raises OSError if the file cannot be read.
    """
    content = go_mod.read_text(encoding="utf-8", errors="replace")
    for line in content.splitlines():
        m = _MODULE_RE.match(line)
        if not m:
            continue
        value = m.group(1).split("//", 1)[0].strip().strip('"`').strip()
        return value or None
    return None
