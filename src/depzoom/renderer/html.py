"""Render a dependency Graph to a JSON bundle or a standalone HTML file."""

from __future__ import annotations

import json
from html import escape
from pathlib import Path
from string import Template

from depzoom.model import Graph, HierarchyNode, Module, Position

_TEMPLATE_PATH = Path(__file__).with_name("template.html")


def _module_to_dict(module: Module) -> dict:
    return {
        "path": module.path,
        "dir": module.dir,
        "name": module.name,
        "color": module.color,
        "modulePath": module.module_path,
    }


def _hierarchy_to_dict(node: HierarchyNode) -> dict:
    d: dict = {
        "id": node.id,
        "name": node.name,
        "module": node.module,
        "isPackage": node.is_package,
        "children": [_hierarchy_to_dict(c) for c in node.children],
    }
    if node.imports:
        d["imports"] = node.imports
    if node.imported_by:
        d["importedBy"] = node.imported_by
    return d


def graph_to_bundle(
    graph: Graph, saved_positions: dict[str, Position] | None = None
) -> dict:
    """Serialize *graph* into the bundle consumed by the visualization."""
    bundle: dict = {
        "nodes": [{"id": n.id, "module": n.module} for n in graph.nodes],
        "links": [{"source": e.source, "target": e.target} for e in graph.edges],
        "modules": [_module_to_dict(m) for m in graph.modules],
    }
    if saved_positions:
        bundle["savedPositions"] = {
            node_id: {"x": pos.x, "y": pos.y} for node_id, pos in saved_positions.items()
        }
    return bundle


def render_json(
    graph: Graph,
    output_path: Path,
    saved_positions: dict[str, Position] | None = None,
) -> None:
    """Write the bare bundle to *output_path*."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(graph_to_bundle(graph, saved_positions), indent=2))


def render_html(
    graph: Graph,
    root: HierarchyNode,
    output_path: Path,
    *,
    title: str = "Dependency Graph",
    saved_positions: dict[str, Position] | None = None,
) -> None:
    """Write the interactive HTML visualization to *output_path*."""
    template = Template(_TEMPLATE_PATH.read_text())
    data = graph_to_bundle(graph, saved_positions)
    data["hierarchy"] = _hierarchy_to_dict(root)
    # Keep "</script>" inside package paths from closing the data block.
    data_json = json.dumps(data).replace("</", "<\\/")
    html = template.safe_substitute(TITLE=escape(title), DATA_JSON=data_json)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html)
