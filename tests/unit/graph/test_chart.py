"""Unit tests for the OrgChart facade."""

import json

import pytest

from orgtree.config import OrgTreeConfig
from orgtree.core.errors import HierarchyCycleError, RecordError
from orgtree.core.types import ConnectorStyle, Entity
from orgtree.graph.chart import OrgChart, entity_from_record


@pytest.fixture
def records():
    return {
        "users": [
            {"id": 1, "full_name": "Alice Adams", "manager_id": None, "position": "CEO"},
            {"id": 2, "full_name": "Bob Brown", "manager_id": 1, "position": "CTO"},
            {"id": 3, "fullName": "Cara Cole", "managerId": 1, "position": "CFO"},
            {"id": 4, "name": "Dan Diaz", "parentId": 2, "position": "Engineer"},
            {"id": 5, "name": "Eve Ex", "parent_id": 2, "is_active": False},
            {"name": "No Id"},
        ]
    }


@pytest.fixture
def chart(records):
    c = OrgChart()
    c.load_from_dict(records)
    return c


class TestEntityFromRecord:
    def test_aliases(self):
        entity = entity_from_record({"id": 9, "managerId": 3, "fullName": "Zoe", "code": "Z9"})
        assert entity.parent_id == 3
        assert entity.name == "Zoe"
        assert entity.display_fields == {"code": "Z9"}

    def test_blank_name_falls_back_to_id(self):
        assert entity_from_record({"id": 12}).name == "12"

    def test_inactive_flag(self):
        assert entity_from_record({"id": 1, "isActive": False}).is_active is False


class TestLoading:
    def test_inactive_and_idless_records_skipped(self, chart):
        assert [e.id for e in chart.entities] == [1, 2, 3, 4]

    def test_keep_inactive(self, records):
        chart = OrgChart()
        chart.load_from_dict(records, active_only=False)
        assert 5 in {e.id for e in chart.entities}

    def test_bare_list(self):
        chart = OrgChart()
        chart.load_from_json(json.dumps([{"id": 1}, {"id": 2, "parent_id": 1}]))
        assert [r.id for r in chart.roots] == [1]

    def test_from_file(self, tmp_path, records):
        path = tmp_path / "org.json"
        path.write_text(json.dumps(records))
        assert len(OrgChart.from_file(path).entities) == 4

    @pytest.mark.parametrize("data", [
        {"entities": {"1": {"id": 1}}},
        [1, 2, 3],
        [{"id": 1}, "Bob"],
        "entities",
    ])
    def test_malformed_records_rejected(self, data):
        chart = OrgChart()
        with pytest.raises(RecordError):
            chart.load_from_dict(data)

    def test_add_entity_rebuilds_forest(self, chart):
        assert chart.roots[0].total_descendants == 3
        chart.add_entity(Entity(id=6, parent_id=4, name="Fay"))
        assert chart.roots[0].total_descendants == 4


class TestForest:
    def test_build_is_cached_until_entities_change(self, chart):
        roots = chart.build()
        assert chart.build() is roots
        assert chart.roots is roots

        chart.add_entity(Entity(id=7, name="Gus"))
        assert chart.build() is not roots

    def test_get_entity_keeps_first_duplicate(self):
        chart = OrgChart()
        chart.load_from_dict([{"id": 1, "name": "First"}, {"id": 1, "name": "Second"}])

        assert chart.get_entity(1).name == "First"
        assert chart.get_entity(99) is None
        assert chart.stats()["duplicates"] == [1]

    def test_raise_policy_surfaces_on_build(self):
        config = OrgTreeConfig.model_validate({"layout": {"cycle_policy": "raise"}})
        chart = OrgChart(config)
        chart.load_from_dict([{"id": 1, "manager_id": 2}, {"id": 2, "manager_id": 1}])

        with pytest.raises(HierarchyCycleError) as exc:
            chart.build()
        assert exc.value.cycle == [1, 2]


class TestScene:
    def test_default_expansion_shows_three_levels(self, chart):
        scene = chart.scene(chart.default_expanded())
        assert [n.position.id for n in scene.nodes] == [1, 2, 4, 3]

    def test_scene_nodes_carry_card_data(self, chart):
        scene = chart.scene({1})
        root = scene.nodes[0]

        assert root.name == "Alice Adams"
        assert root.direct_reports == 2
        assert root.total_descendants == 3
        assert root.expanded is True
        assert root.display_fields["position"] == "CEO"
        assert scene.nodes[1].expanded is False

    def test_connectors_and_bounds(self, chart):
        scene = chart.scene({1, 2}, style="step")

        assert len(scene.connectors) == 3
        assert all(c.style == ConnectorStyle.STEP for c in scene.connectors)
        assert scene.bounds.width == 520

    def test_config_drives_geometry(self, records):
        config = OrgTreeConfig.model_validate({"layout": {"card_width": 100, "h_gap": 10}})
        chart = OrgChart(config)
        chart.load_from_dict(records)
        scene = chart.scene({1})

        assert scene.bounds.width == 210

    def test_to_dict(self, chart):
        data = chart.scene({1}, highlighted={1, 3}).to_dict()

        assert data["highlighted"] == [1, 3]
        assert data["nodes"][0]["position"]["x"] == 140
        assert data["connectors"][0]["style"] == "curve"
        json.dumps(data)


class TestSearchAndStats:
    def test_resolve(self, chart):
        assert chart.resolve("3") == 3
        assert chart.resolve("dan") == 4
        assert chart.resolve("Bob Brown") == 2
        assert chart.resolve("nobody") is None

    def test_highlight_and_chain(self, chart):
        assert chart.highlight(4) == {1, 2, 4}
        assert chart.chain(4) == [4, 2, 1]

    def test_reveal(self, chart):
        result = chart.reveal(set(), "engineer")
        assert result.matches == [4]
        assert result.expanded == {1, 2}

    def test_stats(self, chart):
        stats = chart.stats()

        assert stats["total_entities"] == 4
        assert stats["roots"] == 1
        assert stats["max_depth"] == 2
        assert stats["largest_span_of_control"] == 2
        assert stats["largest_span_owner"] == 1
        assert stats["cycles_broken"] == []

    def test_stats_report_broken_cycles(self):
        chart = OrgChart()
        chart.load_from_dict([{"id": 1, "parent_id": 2}, {"id": 2, "parent_id": 1}])
        assert chart.broken_cycles == [1]
        assert chart.stats()["cycles_broken"] == [1]

    def test_to_json(self, chart):
        data = json.loads(chart.to_json())
        assert len(data["entities"]) == 4
        assert data["stats"]["roots"] == 1
