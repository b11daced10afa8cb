"""Tests for the scenario store."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from backend import config
from backend.services import scenarios as store
from backend.services.scenarios import ScenarioLoadError, find_by_id, load_all, parse_scenarios


class TestLoadAll:
    def test_loads_every_record_in_order(self, scenario_file):
        scenarios = load_all(scenario_file)
        assert [s.id for s in scenarios] == ["ring_a", "ring_b"]
        ring_a = scenarios[0]
        assert ring_a.name == "Ring A"
        assert [n.id for n in ring_a.nodes] == ["b1", "s1", "s2"]
        assert ring_a.edges[0].source == "s1"
        assert ring_a.edges[0].target == "b1"
        assert ring_a.checklist == ("Check owner", "Review KYC")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ScenarioLoadError, match="Cannot read"):
            load_all(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(ScenarioLoadError, match="not valid JSON"):
            load_all(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin.json"
        path.write_bytes(b'[{"id": "\xff\xfe"}]')
        with pytest.raises(ScenarioLoadError, match="Cannot read"):
            load_all(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text(json.dumps({"id": "x"}), encoding="utf-8")
        with pytest.raises(ScenarioLoadError, match="JSON list"):
            load_all(path)

    def test_dangling_edge_rejected(self, raw_records):
        raw_records[0]["edges"].append({"from": "s1", "to": "ghost", "type": "payout"})
        with pytest.raises(ScenarioLoadError, match="ring_a"):
            parse_scenarios(json.dumps(raw_records))

    def test_duplicate_node_id_rejected(self, raw_records):
        raw_records[1]["nodes"].append({"id": "u1", "label": "Again", "type": "buyer"})
        with pytest.raises(ScenarioLoadError, match="ring_b"):
            parse_scenarios(json.dumps(raw_records))

    def test_duplicate_scenario_id_rejected(self, raw_records):
        raw_records[1]["id"] = "ring_a"
        with pytest.raises(ScenarioLoadError, match="Duplicate scenario id"):
            parse_scenarios(json.dumps(raw_records))

    def test_missing_field_rejected(self, raw_records):
        del raw_records[0]["nodes"][0]["label"]
        with pytest.raises(ScenarioLoadError):
            parse_scenarios(json.dumps(raw_records))

    def test_unknown_types_are_accepted(self, raw_records):
        raw_records[1]["nodes"].append({"id": "m1", "label": "Mailbox", "type": "email"})
        raw_records[1]["edges"].append({"from": "u1", "to": "m1", "type": "linked_email"})
        scenarios = parse_scenarios(json.dumps(raw_records))
        assert scenarios[1].nodes[-1].type == "email"
        assert scenarios[1].edges[-1].type == "linked_email"

    def test_scenarios_are_immutable(self, scenario_file):
        sc = load_all(scenario_file)[0]
        with pytest.raises(Exception):
            sc.name = "changed"


class TestRemoteSource:
    # mock-ok: no network in unit tests
    @patch("backend.services.scenarios.requests.get")
    def test_fetches_url(self, mock_get, raw_records):
        mock_get.return_value = MagicMock(text=json.dumps(raw_records))
        scenarios = load_all("https://example.test/scenarios.json")
        assert len(scenarios) == 2
        mock_get.assert_called_once_with(
            "https://example.test/scenarios.json", timeout=config.SCENARIOS_TIMEOUT_SECONDS
        )

    @patch("backend.services.scenarios.requests.get")
    def test_unreachable_url(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ScenarioLoadError, match="Cannot fetch"):
            load_all("http://example.test/scenarios.json")

    @patch("backend.services.scenarios.requests.get")
    def test_http_error_status(self, mock_get):
        resp = MagicMock()
        resp.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        mock_get.return_value = resp
        with pytest.raises(ScenarioLoadError, match="404"):
            load_all("http://example.test/scenarios.json")


class TestLookup:
    def test_find_by_id(self, scenarios):
        assert find_by_id(scenarios, "ring_b").name == "Ring B"

    def test_find_by_id_miss(self, scenarios):
        assert find_by_id(scenarios, "missing") is None
        assert find_by_id(scenarios, None) is None

    def test_cached_accessors(self, scenario_file, monkeypatch):
        monkeypatch.setattr(config, "SCENARIOS_SOURCE", str(scenario_file))
        first = store.get_scenarios()
        assert [s.id for s in first] == ["ring_a", "ring_b"]
        # Cached: removing the file does not matter any more
        scenario_file.unlink()
        assert store.get_scenario("ring_a").name == "Ring A"
        store.clear_cache()
        with pytest.raises(ScenarioLoadError):
            store.get_scenarios()


def test_bundled_scenarios_are_valid():
    scenarios = load_all(config.DATA_DIR / "scenarios.json")
    assert len(scenarios) >= 3
    assert len({s.id for s in scenarios}) == len(scenarios)
    assert all(s.checklist for s in scenarios)
