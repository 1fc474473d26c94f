"""Project the flat package graph onto a folder/package tree."""

from __future__ import annotations

import logging

from depzoom.errors import ConsistencyError
from depzoom.model import Graph, Hierarchy, HierarchyNode

logger = logging.getLogger(__name__)

ROOT_ID = ""


def build_hierarchy(graph: Graph) -> Hierarchy:
    """Build the path-segment tree of *graph*'s packages.

    Every ``/``-separated prefix of a package id becomes one tree node.
    Prefixes that are packages themselves keep their own module; folder
    nodes take the module of the package that first created them.  After the
    tree is built, each edge is recorded on its endpoints as ``imports`` /
    ``imported_by``.
    """
    root = HierarchyNode(id=ROOT_ID, name="root", module="")
    index: dict[str, HierarchyNode] = {
        node.id: HierarchyNode(
            id=node.id,
            name=node.id.split("/")[-1],
            module=node.module,
            is_package=True,
        )
        for node in graph.nodes
    }

    attached: set[str] = set()
    for node in graph.nodes:
        parent = root
        current_path = ""
        for part in node.id.split("/"):
            if not part:
                continue
            current_path = f"{current_path}/{part}" if current_path else part

            current = index.get(current_path)
            if current is None:
                current = HierarchyNode(id=current_path, name=part, module=node.module)
                index[current_path] = current

            if current_path not in attached:
                attached.add(current_path)
                parent.children.append(current)
            parent = current

    for edge in graph.edges:
        source = index.get(edge.source)
        target = index.get(edge.target)
        if source is None or target is None:
            missing = edge.source if source is None else edge.target
            raise ConsistencyError(
                f"import {edge.source} -> {edge.target} refers to unknown package {missing}"
            )
        source.imports.append(target.id)
        target.imported_by.append(source.id)

    index[ROOT_ID] = root
    logger.debug(
        "Hierarchy: %d nodes (%d packages)",
        len(index) - 1,
        sum(1 for h in index.values() if h.is_package),
    )
    return Hierarchy(root=root, index=index)
