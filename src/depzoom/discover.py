"""Discover the Go modules under a project tree."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from depzoom.errors import DiscoveryError
from depzoom.extractors.go import GO_MOD, read_module_path
from depzoom.model import Module

logger = logging.getLogger(__name__)

PALETTE = (
    "#3498db",  # blue
    "#9b59b6",  # purple
    "#f1c40f",  # yellow
    "#e67e22",  # orange
    "#1abc9c",  # turquoise
    "#34495e",  # dark blue
)


def discover_modules(root_dir: Path, ignore: Iterable[str] = ()) -> list[Module]:
    """Return every module under *root_dir*, in walk order.

    Directories are visited in lexical order, a directory's own ``go.mod``
    before those of its sub-directories.  Any path (relative to *root_dir*,
    ``/``-separated) that starts with one of the *ignore* prefixes is pruned
    together with everything below it.  Colours are assigned from
    :data:`PALETTE` in discovery order.
    """
    root = os.path.abspath(root_dir)
    if not os.path.isdir(root):
        raise DiscoveryError(f"Invalid working directory: {root}")

    prefixes = normalize_ignore(ignore)
    modules: list[Module] = []

    def _on_error(err: OSError) -> None:
        raise DiscoveryError(f"Cannot read {err.filename}: {err.strerror}") from err

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        rel_dir = _relative(dirpath, root)
        dirnames[:] = sorted(
            d for d in dirnames if not _is_ignored(_join(rel_dir, d), prefixes)
        )

        if GO_MOD not in filenames or _is_ignored(_join(rel_dir, GO_MOD), prefixes):
            continue

        go_mod = Path(dirpath) / GO_MOD
        try:
            module_path = read_module_path(go_mod)
        except OSError as e:
            raise DiscoveryError(f"Cannot read {go_mod}: {e}") from e

        name = os.path.basename(dirpath)
        module = Module(
            path=rel_dir,
            dir=dirpath,
            name=name,
            module_path=module_path or name,
            color=PALETTE[len(modules) % len(PALETTE)],
        )
        logger.debug("Found module %s in %s", module.module_path, module.path)
        modules.append(module)

    return modules


def normalize_ignore(ignore: Iterable[str]) -> list[str]:
    """Trim entries, use ``/`` separators, and drop empty entries."""
    prefixes = []
    for entry in ignore:
        entry = entry.strip().replace("\\", "/")
        if entry:
            prefixes.append(entry)
    return prefixes


def parse_ignore(value: str | None) -> list[str]:
    """Split a comma-separated ignore list as given on the command line."""
    if not value:
        return []
    return normalize_ignore(value.split(","))


def read_config_ignore(project_dir: Path) -> list[str]:
    """Read the ignore list from .depzoom.toml or pyproject.toml.

    A file that cannot be parsed, or whose ``ignore`` is not a list of
    strings, is logged and skipped.
    """
    import tomllib

    # Try .depzoom.toml first, then [tool.depzoom] in pyproject.toml
    candidates = (
        (project_dir / ".depzoom.toml", ("depzoom",)),
        (project_dir / "pyproject.toml", ("tool", "depzoom")),
    )
    for path, keys in candidates:
        if not path.exists():
            continue
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            continue

        section = data
        for key in keys:
            section = section.get(key, {}) if isinstance(section, dict) else None
        if not isinstance(section, dict):
            logger.warning("Ignoring %s: [%s] is not a table", path, ".".join(keys))
            continue

        ignore = section.get("ignore", [])
        if not isinstance(ignore, list) or not all(isinstance(i, str) for i in ignore):
            logger.warning("Ignoring %s: ignore must be a list of strings", path)
            continue
        return list(ignore)

    return []


def _relative(path: str, root: str) -> str:
    return os.path.relpath(path, root).replace(os.sep, "/")


def _join(rel_dir: str, name: str) -> str:
    return name if rel_dir == "." else f"{rel_dir}/{name}"


def _is_ignored(rel_path: str, prefixes: list[str]) -> bool:
    return any(rel_path.startswith(prefix) for prefix in prefixes)
