"""Shared fixtures for depzoom tests."""

from __future__ import annotations

import pytest

from depzoom.build import build_graph
from depzoom.hierarchy import build_hierarchy
from depzoom.model import ImportRecord, Module


def _module(module_path: str, path: str, color: str = "#3498db") -> Module:
    return Module(
        path=path,
        dir=f"/work/{path}",
        name=path.rsplit("/", 1)[-1],
        module_path=module_path,
        color=color,
    )


@pytest.fixture
def make_module():
    return _module


@pytest.fixture
def app_lib_modules() -> list[Module]:
    return [
        _module("example.com/app", "app", "#3498db"),
        _module("example.com/lib", "lib", "#9b59b6"),
    ]


@pytest.fixture
def app_lib_records() -> list[ImportRecord]:
    return [
        ImportRecord(
            "example.com/app/cmd",
            ["example.com/app/db", "example.com/lib/log", "fmt"],
        ),
        ImportRecord("example.com/app/db", ["example.com/lib/log", "database/sql"]),
        ImportRecord("example.com/lib/log", ["os"]),
        ImportRecord("example.com/lib/util", ["example.com/lib/log"]),
    ]


@pytest.fixture
def app_lib_graph(app_lib_modules, app_lib_records):
    return build_graph(app_lib_modules, app_lib_records)


@pytest.fixture
def app_lib_hierarchy(app_lib_graph):
    return build_hierarchy(app_lib_graph)
