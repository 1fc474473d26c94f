"""Read the optional node position cache."""

from __future__ import annotations

import json
from pathlib import Path

from depzoom.model import Position

POSITIONS_FILE = "node_positions.json"


def load_saved_positions(path: Path) -> dict[str, Position]:
    """Return the cached ``{node_id: Position}`` map stored at *path*.

    A missing file gives an empty map.  Invalid JSON raises
    :class:`json.JSONDecodeError`; valid JSON of the wrong shape raises
    :class:`ValueError`.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}

    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected an object mapping node ids to positions")

    positions: dict[str, Position] = {}
    for node_id, pos in data.items():
        try:
            positions[node_id] = Position(x=float(pos["x"]), y=float(pos["y"]))
        except (TypeError, KeyError, ValueError) as e:
            raise ValueError(f"{path}: bad position for {node_id!r}: {e}") from e
    return positions
