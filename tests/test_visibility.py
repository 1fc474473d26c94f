"""Tests for selection/filter state and the render set derived from it."""

import pytest

from depzoom.build import build_graph
from depzoom.hierarchy import build_hierarchy
from depzoom.model import ImportRecord
from depzoom.visibility import (
    CROSS_MODULE_ONLY,
    INCOMING,
    OUTGOING,
    DrawnEdge,
    VisibilityEngine,
)

CMD = "example.com/app/cmd"
DB = "example.com/app/db"
LOG = "example.com/lib/log"
UTIL = "example.com/lib/util"


@pytest.fixture
def engine(app_lib_hierarchy):
    return VisibilityEngine(app_lib_hierarchy)


def _edges(render_set):
    return [(e.source, e.target, e.style) for e in render_set.edges]


def test_defaults(engine):
    assert engine.selected_ids == ()
    assert engine.show_outgoing
    assert engine.show_incoming
    assert not engine.cross_module_only


def test_no_selection_draws_every_edge(engine):
    view = engine.render()
    assert _edges(view) == [
        (CMD, DB, "all"),
        (CMD, LOG, "all"),
        (DB, LOG, "all"),
        (UTIL, LOG, "all"),
    ]
    assert set(view.highlight.values()) == {"none"}
    assert "" not in view.highlight
    assert "example.com/app" in view.highlight


def test_no_selection_cross_module_only(engine):
    engine.set_filter(CROSS_MODULE_ONLY, True)
    assert _edges(engine.render()) == [(CMD, LOG, "all"), (DB, LOG, "all")]


def test_outgoing_only_selection(make_module):
    modules = [make_module("example.com/a", "a")]
    records = [
        ImportRecord("example.com/a/x", ["example.com/a/y"]),
        ImportRecord("example.com/a/y", []),
    ]
    engine = VisibilityEngine(build_hierarchy(build_graph(modules, records)))
    engine.set_filter(INCOMING, False)
    engine.toggle("example.com/a/x")

    view = engine.render()
    assert DrawnEdge("example.com/a/x", "example.com/a/y", "outgoing") in view.edges
    assert not [e for e in view.edges if e.style == "incoming"]
    assert view.highlight["example.com/a/y"] == "importing"
    assert view.highlight["example.com/a/x"] == "selected"


def test_selection_draws_both_directions_then_background(engine):
    engine.toggle(DB)
    view = engine.render()

    assert _edges(view) == [
        (DB, LOG, "outgoing"),
        (CMD, DB, "incoming"),
        (CMD, LOG, "background"),
        (UTIL, LOG, "background"),
    ]
    assert view.highlight[DB] == "selected"
    assert view.highlight[LOG] == "importing"
    assert view.highlight[CMD] == "imported"
    assert view.highlight[UTIL] == "none"
    assert view.highlight["example.com/app"] == "none"


def test_cross_module_filter_skips_background(engine):
    engine.toggle(DB)
    engine.set_filter(CROSS_MODULE_ONLY, True)
    view = engine.render()

    # cmd -> db stays inside example.com/app, so only db -> log is highlighted.
    assert _edges(view) == [
        (DB, LOG, "outgoing"),
        (CMD, LOG, "background"),
        (UTIL, LOG, "background"),
    ]
    assert view.highlight[CMD] == "none"
    assert view.highlight[LOG] == "importing"


def test_both_directions_off_leaves_only_background(engine):
    engine.toggle(DB)
    engine.set_filter(OUTGOING, False)
    engine.set_filter(INCOMING, False)
    view = engine.render()

    assert {e.style for e in view.edges} == {"background"}
    assert view.highlight[DB] == "selected"
    assert view.highlight[LOG] == "none"
    assert view.highlight[CMD] == "none"


def test_imported_wins_over_importing(engine):
    # db is a target of cmd (importing) and a source into log (imported).
    engine.toggle(CMD)
    engine.toggle(LOG, additive=True)
    view = engine.render()

    assert view.highlight[CMD] == "selected"
    assert view.highlight[LOG] == "selected"
    assert view.highlight[DB] == "imported"
    assert view.highlight[UTIL] == "imported"
    assert [e for e in view.edges if e.style == "background"] == []


def test_selected_nodes_are_never_reclassified(engine):
    engine.toggle(CMD)
    engine.toggle(DB, additive=True)
    view = engine.render()
    assert view.highlight[CMD] == "selected"
    assert view.highlight[DB] == "selected"
    assert (CMD, DB, "outgoing") in _edges(view)
    assert (CMD, DB, "incoming") in _edges(view)


def test_importing_nodes_are_imports_of_the_selection(engine, app_lib_hierarchy):
    for node_id in (CMD, DB, LOG, UTIL):
        engine.toggle(node_id)
        view = engine.render()
        selected = app_lib_hierarchy[node_id]
        for other, cls in view.highlight.items():
            if cls == "importing":
                assert other in selected.imports
            if cls == "imported":
                assert other in selected.imported_by


def test_render_is_repeatable(engine):
    engine.toggle(DB)
    engine.toggle(LOG, additive=True)
    assert engine.render() == engine.render()

    engine.clear()
    assert engine.render() == engine.render()
    assert {e.style for e in engine.render().edges} == {"all"}


def test_toggle_replaces_selection(engine):
    engine.toggle(CMD)
    engine.toggle(DB)
    assert engine.selected_ids == (DB,)

    # A plain click on the selected node keeps it selected.
    engine.toggle(DB)
    assert engine.selected_ids == (DB,)


def test_additive_toggle_adds_and_removes(engine):
    engine.toggle(CMD)
    engine.toggle(LOG, additive=True)
    assert engine.selected_ids == (CMD, LOG)

    engine.toggle(CMD, additive=True)
    assert engine.selected_ids == (LOG,)


def test_clear(engine):
    engine.toggle(CMD)
    engine.clear()
    assert engine.selected_ids == ()


def test_folders_can_be_selected(engine):
    engine.toggle("example.com/app")
    view = engine.render()
    assert view.highlight["example.com/app"] == "selected"
    assert {e.style for e in view.edges} == {"background"}
    assert len(view.edges) == 4


def test_unknown_ids_are_rejected(engine):
    with pytest.raises(KeyError):
        engine.toggle("example.com/nope")
    with pytest.raises(KeyError):
        engine.toggle("")


def test_filters(engine):
    assert engine.toggle_filter(OUTGOING) is False
    assert not engine.show_outgoing
    assert engine.toggle_filter(OUTGOING) is True

    engine.set_filter(CROSS_MODULE_ONLY, True)
    assert engine.cross_module_only

    with pytest.raises(ValueError):
        engine.set_filter("sideways", True)
    with pytest.raises(ValueError):
        engine.toggle_filter("sideways")
