"""Selection and filter state, and the edges/highlights it makes visible."""

from __future__ import annotations

from dataclasses import dataclass, field

from depzoom.hierarchy import ROOT_ID
from depzoom.model import Hierarchy, HierarchyNode

# Filter names
OUTGOING = "outgoing"
INCOMING = "incoming"
CROSS_MODULE_ONLY = "cross_module_only"

# Highlight classes
NONE = "none"
SELECTED = "selected"
IMPORTING = "importing"  # imported by a selected node
IMPORTED = "imported"  # imports a selected node

# Edge styles
ALL = "all"
BACKGROUND = "background"


@dataclass(frozen=True)
class DrawnEdge:
    source: str
    target: str
    style: str  # "all", "outgoing", "incoming", "background"


@dataclass
class RenderSet:
    """What to draw for one selection/filter state."""

    highlight: dict[str, str] = field(default_factory=dict)
    edges: list[DrawnEdge] = field(default_factory=list)


class VisibilityEngine:
    """Interactive view state over a :class:`~depzoom.model.Hierarchy`.

    The state is the ordered set of selected node ids plus three filters.
    :meth:`render` derives everything else from that state alone, so calling
    it repeatedly without changing the state gives equal results.
    """

    def __init__(self, hierarchy: Hierarchy):
        self._hierarchy = hierarchy
        self._selected: dict[str, None] = {}
        self._filters = {OUTGOING: True, INCOMING: True, CROSS_MODULE_ONLY: False}

    @property
    def selected_ids(self) -> tuple[str, ...]:
        return tuple(self._selected)

    @property
    def show_outgoing(self) -> bool:
        return self._filters[OUTGOING]

    @property
    def show_incoming(self) -> bool:
        return self._filters[INCOMING]

    @property
    def cross_module_only(self) -> bool:
        return self._filters[CROSS_MODULE_ONLY]

    def toggle(self, node_id: str, additive: bool = False) -> None:
        """Flip the selection of *node_id*.

        Without *additive* the selection is cleared first, so the node always
        ends up as the only selected one.
        """
        if node_id == ROOT_ID or node_id not in self._hierarchy:
            raise KeyError(node_id)
        if not additive:
            self._selected.clear()
        if node_id in self._selected:
            del self._selected[node_id]
        else:
            self._selected[node_id] = None

    def clear(self) -> None:
        self._selected.clear()

    def set_filter(self, name: str, value: bool) -> None:
        if name not in self._filters:
            raise ValueError(f"unknown filter: {name!r}")
        self._filters[name] = bool(value)

    def toggle_filter(self, name: str) -> bool:
        """Flip filter *name* and return its new value."""
        if name not in self._filters:
            raise ValueError(f"unknown filter: {name!r}")
        self._filters[name] = not self._filters[name]
        return self._filters[name]

    def render(self) -> RenderSet:
        nodes = [h for h in self._hierarchy.root.walk() if h.id != ROOT_ID]
        result = RenderSet(highlight={h.id: NONE for h in nodes})

        if not self._selected:
            for source in nodes:
                for target_id in source.imports:
                    if not self._filtered_out(source.id, target_id):
                        result.edges.append(DrawnEdge(source.id, target_id, ALL))
            return result

        importing: set[str] = set()
        imported: set[str] = set()
        for node_id in self._selected:
            node = self._hierarchy[node_id]
            if self.show_outgoing:
                for target_id in node.imports:
                    if self._filtered_out(node_id, target_id):
                        continue
                    result.edges.append(DrawnEdge(node_id, target_id, OUTGOING))
                    importing.add(target_id)
            if self.show_incoming:
                for source_id in node.imported_by:
                    if self._filtered_out(source_id, node_id):
                        continue
                    result.edges.append(DrawnEdge(source_id, node_id, INCOMING))
                    imported.add(source_id)

        for node_id in importing:
            result.highlight[node_id] = IMPORTING
        for node_id in imported:
            result.highlight[node_id] = IMPORTED
        for node_id in self._selected:
            result.highlight[node_id] = SELECTED

        # Faint context: every edge with no selected endpoint, cross-module or not.
        for source in nodes:
            if source.id in self._selected:
                continue
            for target_id in source.imports:
                if target_id not in self._selected:
                    result.edges.append(DrawnEdge(source.id, target_id, BACKGROUND))

        return result

    def _filtered_out(self, source_id: str, target_id: str) -> bool:
        if not self.cross_module_only:
            return False
        return not is_cross_module(self._hierarchy[source_id], self._hierarchy[target_id])


def is_cross_module(source: HierarchyNode, target: HierarchyNode) -> bool:
    return source.module != target.module
