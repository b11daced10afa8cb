"""Shared fixtures for the training lab tests."""

import json

import pytest

from backend.models import Scenario
from backend.services import scenarios as store


def _scenario(**overrides) -> dict:
    rec = {
        "id": "ring_a",
        "name": "Ring A",
        "description": "Two sellers paying out to one bank.",
        "nodes": [
            {"id": "b1", "label": "Bank 1", "type": "bank"},
            {"id": "s1", "label": "Seller 1", "type": "seller"},
            {"id": "s2", "label": "Seller 2", "type": "seller"},
        ],
        "edges": [
            {"from": "s1", "to": "b1", "type": "payout"},
            {"from": "s2", "to": "b1", "type": "payout"},
        ],
        "checklist": ["Check owner", "Review KYC"],
    }
    rec.update(overrides)
    return rec


@pytest.fixture()
def bank_scenario() -> Scenario:
    """Bank with two seller payouts (the worked example)."""
    return Scenario.model_validate(_scenario())


@pytest.fixture()
def mixed_scenario() -> Scenario:
    """Every known node type, an unknown node type, a duplicate edge and an unknown edge type."""
    return Scenario.model_validate(_scenario(
        id="mixed",
        name="Mixed",
        description="One of everything.",
        nodes=[
            {"id": "s1", "label": "Seller", "type": "seller"},
            {"id": "u1", "label": "Buyer 1", "type": "buyer"},
            {"id": "u2", "label": "Buyer 2", "type": "buyer"},
            {"id": "bk", "label": "Bank", "type": "bank"},
            {"id": "d1", "label": "Phone", "type": "device"},
            {"id": "c1", "label": "Card", "type": "card"},
            {"id": "x1", "label": "Dispute", "type": "dispute"},
            {"id": "m1", "label": "Mailbox", "type": "email"},
            {"id": "lone", "label": "Lonely seller", "type": "seller"},
        ],
        edges=[
            {"from": "u1", "to": "s1", "type": "order"},
            {"from": "u1", "to": "s1", "type": "order"},
            {"from": "u2", "to": "s1", "type": "order"},
            {"from": "s1", "to": "bk", "type": "payout"},
            {"from": "s1", "to": "d1", "type": "uses_device"},
            {"from": "u1", "to": "d1", "type": "uses_device"},
            {"from": "u1", "to": "c1", "type": "uses_card"},
            {"from": "u2", "to": "c1", "type": "uses_card"},
            {"from": "s1", "to": "c1", "type": "uses_card"},
            {"from": "u1", "to": "x1", "type": "raised"},
            {"from": "m1", "to": "u1", "type": "linked_email"},
        ],
        checklist=["First step", "Second step", "Third step"],
    ))


@pytest.fixture()
def raw_records() -> list[dict]:
    return [
        _scenario(),
        _scenario(
            id="ring_b",
            name="Ring B",
            description="A buyer and a device.",
            nodes=[
                {"id": "u1", "label": "Buyer", "type": "buyer"},
                {"id": "d1", "label": "Device", "type": "device"},
            ],
            edges=[{"from": "u1", "to": "d1", "type": "uses_device"}],
            checklist=[],
        ),
    ]


@pytest.fixture()
def scenario_file(tmp_path, raw_records):
    """Valid two-scenario document on disk."""
    path = tmp_path / "scenarios.json"
    path.write_text(json.dumps(raw_records), encoding="utf-8")
    return path


@pytest.fixture()
def scenarios(scenario_file):
    return store.load_all(scenario_file)


@pytest.fixture(autouse=True)
def _reset_store_cache():
    store.clear_cache()
    yield
    store.clear_cache()
