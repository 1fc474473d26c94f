"""Data model for module-aware package dependency graphs."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Module:
    """A Go module discovered under the project root."""

    path: str  # directory relative to the project root, "." for the root
    dir: str  # absolute directory
    name: str
    module_path: str  # declared in go.mod, or the directory name
    color: str


@dataclass(frozen=True)
class ImportRecord:
    """One package as reported by the import listing tool."""

    import_path: str
    imports: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Node:
    """An internal package."""

    id: str
    module: str


@dataclass(frozen=True)
class Edge:
    """*source* imports *target*."""

    source: str
    target: str


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass
class Graph:
    """Internal packages, the imports between them, and their modules."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    modules: list[Module] = field(default_factory=list)


@dataclass
class HierarchyNode:
    """One path prefix of a package import path: a folder or a package."""

    id: str
    name: str
    module: str
    is_package: bool = False
    children: list[HierarchyNode] = field(default_factory=list)
    imports: list[str] = field(default_factory=list)
    imported_by: list[str] = field(default_factory=list)

    @property
    def is_module_root(self) -> bool:
        return bool(self.id) and self.id == self.module

    def walk(self):
        """Yield this node and its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


@dataclass
class Hierarchy:
    """Folder/package tree plus an id index over every node in it."""

    root: HierarchyNode
    index: dict[str, HierarchyNode] = field(default_factory=dict)

    def __getitem__(self, node_id: str) -> HierarchyNode:
        return self.index[node_id]

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.index
