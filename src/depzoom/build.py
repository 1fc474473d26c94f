"""Build the internal package dependency graph from import records."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from depzoom.model import Edge, Graph, ImportRecord, Module, Node

logger = logging.getLogger(__name__)


def is_internal(import_path: str, modules: Iterable[Module]) -> bool:
    """Return True if *import_path* belongs to one of *modules*.

    This is a plain string-prefix test, not a path-segment one: a module
    declared as ``example.com/foo`` also claims ``example.com/foobar``.
    """
    return any(import_path.startswith(m.module_path) for m in modules)


def owning_module(import_path: str, modules: Iterable[Module]) -> Module | None:
    """Return the first module, in list order, whose path prefixes *import_path*.

    With nested modules (``example.com/a`` and ``example.com/a/sub``) this is
    not necessarily the most specific one.
    """
    for module in modules:
        if import_path.startswith(module.module_path):
            return module
    return None


def build_graph(modules: list[Module], records: Iterable[ImportRecord]) -> Graph:
    """Return the graph of internal packages and the imports between them.

    Nodes are created once per distinct internal import path, in first-seen
    order.  Imports of anything that is not a node are dropped, and repeated records
    collapse into a single edge per ``(source, target)`` pair.
    """
    records = list(records)
    graph = Graph(modules=list(modules))

    seen_nodes: set[str] = set()
    for record in records:
        if record.import_path in seen_nodes:
            continue
        module = owning_module(record.import_path, graph.modules)
        if module is None:
            continue
        seen_nodes.add(record.import_path)
        graph.nodes.append(Node(id=record.import_path, module=module.module_path))

    # An internal import path that was never listed itself (its module failed
    # to list, say) has no node, so its edges are dropped as well.
    seen_edges: set[tuple[str, str]] = set()
    for record in records:
        if record.import_path not in seen_nodes:
            continue
        for imp in record.imports:
            if imp not in seen_nodes:
                continue
            if (record.import_path, imp) in seen_edges:
                continue
            seen_edges.add((record.import_path, imp))
            graph.edges.append(Edge(source=record.import_path, target=imp))

    logger.debug(
        "Graph: %d packages, %d imports across %d modules",
        len(graph.nodes),
        len(graph.edges),
        len(graph.modules),
    )
    return graph
