"""
Scenario store: the fixed collection of training scenarios.

The document is a JSON list of {id, name, description, nodes, edges, checklist}
records, read from a local path or an http(s) URL (SCENARIOS_SOURCE).
It is loaded once per process; callers get immutable Scenario models.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

import requests
from pydantic import ValidationError

from backend import config
from backend.models import Scenario

logger = logging.getLogger(__name__)

_cache: list[Scenario] | None = None


class ScenarioLoadError(RuntimeError):
    """The scenario document is unreachable, not JSON, or not a valid scenario list."""


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def _read_source(source: str) -> str:
    if _is_url(source):
        try:
            resp = requests.get(source, timeout=config.SCENARIOS_TIMEOUT_SECONDS)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise ScenarioLoadError(f"Cannot fetch scenarios from {source}: {e}") from e
        return resp.text
    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ScenarioLoadError(f"Cannot read scenarios from {source}: {e}") from e


def parse_scenarios(text: str) -> list[Scenario]:
    """Parse and validate a scenario document. Raises ScenarioLoadError."""
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Scenario document is not valid JSON: {e}") from e
    if not isinstance(raw, list):
        raise ScenarioLoadError("Scenario document must be a JSON list of scenarios")

    scenarios: list[Scenario] = []
    ids: set[str] = set()
    for i, rec in enumerate(raw):
        try:
            sc = Scenario.model_validate(rec)
        except ValidationError as e:
            sid = rec.get("id", f"#{i}") if isinstance(rec, dict) else f"#{i}"
            logger.error("Scenario %s rejected: %s", sid, e)
            raise ScenarioLoadError(f"Scenario {sid} is malformed: {e}") from e
        if sc.id in ids:
            raise ScenarioLoadError(f"Duplicate scenario id {sc.id!r}")
        ids.add(sc.id)
        scenarios.append(sc)
    return scenarios


def load_all(source: str | Path | None = None) -> list[Scenario]:
    """
    Load every scenario from source (defaults to config.SCENARIOS_SOURCE).

    Raises:
        ScenarioLoadError: resource unreachable, unparseable or invalid
            (duplicate ids, edges pointing at nodes outside the scenario).
    """
    src = str(source) if source is not None else config.SCENARIOS_SOURCE
    scenarios = parse_scenarios(_read_source(src))
    logger.info("Loaded %d scenario(s) from %s", len(scenarios), src)
    return scenarios


def find_by_id(scenarios: list[Scenario], scenario_id: str | None) -> Scenario | None:
    for sc in scenarios:
        if sc.id == scenario_id:
            return sc
    return None


def get_scenarios() -> list[Scenario]:
    """Cached load of the configured source."""
    global _cache
    if _cache is None:
        _cache = load_all()
    return list(_cache)


def get_scenario(scenario_id: str) -> Scenario | None:
    return find_by_id(get_scenarios(), scenario_id)


def clear_cache() -> None:
    global _cache
    _cache = None
