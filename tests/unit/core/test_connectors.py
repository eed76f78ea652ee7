"""Unit tests for connector geometry."""

import pytest

from orgtree.core.connectors import (
    build_connectors,
    connector_path,
    format_number,
)
from orgtree.core.layout import compute_positions
from orgtree.core.tree import build_forest
from orgtree.core.types import ConnectorStyle, Entity


class TestConnectorPath:
    def test_curve_is_default(self):
        assert connector_path(0, 0, 100, 100) == "M 0 0 C 10 50, 90 50, 100 100"

    def test_curve_degrades_to_vertical_line(self):
        d = connector_path(100, 0, 100, 80, "curve")
        assert d == "M 100 0 C 100 40, 100 40, 100 80"

    def test_curve_right_to_left(self):
        assert connector_path(100, 0, 0, 100) == "M 100 0 C 90 50, 10 50, 0 100"

    def test_step(self):
        d = connector_path(0, 0, 100, 100, ConnectorStyle.STEP)
        assert d == "M 0 0 L 0 50 L 100 50 L 100 100"

    def test_arc_radius_is_distance(self):
        d = connector_path(0, 0, 30, 40, "arc")
        assert d == "M 0 0 A 50 50 0 0 0 30 40"

    def test_arc_sweep_flips_with_direction(self):
        assert connector_path(30, 0, 0, 40, "arc").endswith("0 0 1 0 40")

    def test_arc_coincident_points(self):
        assert connector_path(5, 5, 5, 5, "arc") == "M 5 5 L 5 5"

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            connector_path(0, 0, 1, 1, "zigzag")

    def test_fractional_coordinates(self):
        assert connector_path(0.5, 0, 0.5, 1.25, "step") == "M 0.5 0 L 0.5 0.625 L 0.5 0.625 L 0.5 1.25"


class TestFormatNumber:
    @pytest.mark.parametrize("value,expected", [
        (0, "0"),
        (-0.0, "0"),
        (120.0, "120"),
        (12.5, "12.5"),
        (1 / 3, "0.333"),
        (-40, "-40"),
        (1_250_000, "1250000"),
    ])
    def test_format(self, value, expected):
        assert format_number(value) == expected


class TestBuildConnectors:
    @pytest.fixture
    def positions(self):
        roots = build_forest([Entity(id=i, parent_id=p) for i, p in
                              [(1, None), (2, 1), (3, 1), (4, 2)]])
        return compute_positions(roots, {1, 2}, card_width=240, card_height=120,
                                 h_gap=40, v_gap=90)

    def test_one_connector_per_visible_edge(self, positions):
        connectors = build_connectors(positions, {1, 2})
        assert [(c.parent_id, c.child_id) for c in connectors] == [(1, 2), (2, 4), (1, 3)]

    def test_anchors_parent_bottom_to_child_top(self, positions):
        first = build_connectors(positions, {1, 2}, "step")[0]
        # Parent 1 center x 260, bottom 120; child 2 center x 120, top 210.
        assert first.d == "M 260 120 L 260 165 L 120 165 L 120 210"
        assert first.style == ConnectorStyle.STEP

    def test_requires_parent_in_expanded(self, positions):
        connectors = build_connectors(positions, {1})
        assert [(c.parent_id, c.child_id) for c in connectors] == [(1, 2), (1, 3)]

    def test_roots_have_no_connector(self, positions):
        assert all(c.child_id != 1 for c in build_connectors(positions, {1, 2}))
