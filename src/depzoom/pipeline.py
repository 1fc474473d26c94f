"""Orchestrator: discover → list → build → render."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from depzoom.build import build_graph
from depzoom.discover import discover_modules, read_config_ignore
from depzoom.errors import CollaboratorError
from depzoom.extractors.base import ImportRecordSource
from depzoom.extractors.go import GoListSource
from depzoom.hierarchy import build_hierarchy
from depzoom.model import Graph, ImportRecord, Module
from depzoom.positions import POSITIONS_FILE, load_saved_positions
from depzoom.renderer.html import render_html, render_json

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "dependency_graph.html"


def collect_records(
    modules: list[Module], source: ImportRecordSource
) -> list[ImportRecord]:
    """List every module in turn; modules that fail to list are skipped."""
    records: list[ImportRecord] = []
    for module in modules:
        logger.info("Processing module in directory: %s", module.dir)
        try:
            records.extend(source.list_packages(module))
        except CollaboratorError as e:
            logger.warning("Failed to list packages in %s: %s", module.dir, e)
    return records


def extract_graph(
    project_dir: Path,
    *,
    ignore: Iterable[str] = (),
    source: ImportRecordSource | None = None,
) -> Graph:
    """Discover the modules under *project_dir* and build their package graph."""
    modules = discover_modules(project_dir, ignore)
    if not modules:
        logger.warning("No go.mod found under %s", project_dir)
    logger.debug("Modules: %s", [m.module_path for m in modules])

    records = collect_records(modules, source or GoListSource())
    return build_graph(modules, records)


def run(
    project_dir: Path,
    *,
    output: Path | None = None,
    ignore: Iterable[str] = (),
    name: str | None = None,
    timeout: float | None = None,
    source: ImportRecordSource | None = None,
    open_browser: bool = False,
) -> Path:
    """Run the full depzoom pipeline and return the output path.

    An *output* ending in ``.json`` receives the bare bundle; anything else
    gets the interactive HTML page.
    """
    project_dir = project_dir.resolve()
    ignore = [*ignore, *read_config_ignore(project_dir)]

    graph = extract_graph(
        project_dir,
        ignore=ignore,
        source=source or GoListSource(timeout=timeout),
    )
    hierarchy = build_hierarchy(graph)
    saved_positions = load_saved_positions(project_dir / POSITIONS_FILE)

    out_path = output or (project_dir / DEFAULT_OUTPUT)
    if out_path.suffix == ".json":
        render_json(graph, out_path, saved_positions)
    else:
        render_html(
            graph,
            hierarchy.root,
            out_path,
            title=name or f"{project_dir.name} dependency graph",
            saved_positions=saved_positions,
        )

    logger.info("Generated %s", out_path)

    if open_browser:
        import webbrowser

        webbrowser.open(out_path.as_uri())

    return out_path
