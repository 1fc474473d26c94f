"""Tests for the node position cache."""

import json

import pytest

from depzoom.model import Position
from depzoom.positions import load_saved_positions


def test_missing_file_gives_empty_map(tmp_path):
    assert load_saved_positions(tmp_path / "node_positions.json") == {}


def test_reads_positions(tmp_path):
    path = tmp_path / "node_positions.json"
    path.write_text(json.dumps({"example.com/a/x": {"x": 10, "y": 2.5}}))

    assert load_saved_positions(path) == {"example.com/a/x": Position(10.0, 2.5)}


def test_invalid_json_propagates(tmp_path):
    path = tmp_path / "node_positions.json"
    path.write_text("{not json")

    with pytest.raises(json.JSONDecodeError):
        load_saved_positions(path)


@pytest.mark.parametrize(
    "content",
    [
        "[]",
        '{"example.com/a/x": {"x": 1}}',
        '{"example.com/a/x": {"x": "left", "y": 0}}',
        '{"example.com/a/x": 3}',
    ],
)
def test_wrong_shape_raises(tmp_path, content):
    path = tmp_path / "node_positions.json"
    path.write_text(content)

    with pytest.raises(ValueError):
        load_saved_positions(path)
