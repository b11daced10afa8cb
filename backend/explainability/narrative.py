"""
Investigative narrative for the training scenarios.

Three text builders, all template-based and deterministic:
  1. explain_node: what a clicked node's neighbourhood suggests
  2. build_scenario_summary: one paragraph describing the cluster
  3. build_lens_narrative: fixed interpretation for the fraud / AML / T&S lens

Output is plain text (no HTML). Counts come from the graph only; nothing is inferred.
"""
from __future__ import annotations

from collections import Counter
from typing import Callable

from backend.models import Lens, Node, NodeType, Scenario
from backend.services.graph import DisplayGraph

TALLIED_TYPES = (
    NodeType.SELLER,
    NodeType.BUYER,
    NodeType.BANK,
    NodeType.DEVICE,
    NodeType.CARD,
    NodeType.DISPUTE,
)


def neighbor_ids(node_id: str, graph: DisplayGraph) -> list[str]:
    """Far endpoint of every edge touching node_id; repeated once per edge."""
    return [e.other_end(node_id) for e in graph.edges_raw if e.touches(node_id)]


def neighbor_counts(node_id: str, graph: DisplayGraph) -> tuple[dict[NodeType, int], int]:
    """(per-type tallies for the six counted types, total neighbour occurrences)."""
    ids = neighbor_ids(node_id, graph)
    seen = Counter(NodeType.parse(graph.node_type(nid)) for nid in ids)
    return {t: seen.get(t, 0) for t in TALLIED_TYPES}, len(ids)


def _bank_text(label: str, c: dict[NodeType, int]) -> str:
    return (
        f"{label} is a payout / bank node that receives flows from {c[NodeType.SELLER]} seller/merchant node(s) "
        f"and is indirectly linked to {c[NodeType.BUYER]} buyer node(s).\n"
        "Such a central payout node can represent a mule or coordinator account if value flows exceed what would be "
        "expected for a single legitimate business or individual.\n"
        "An investigator should confirm the true owner, review KYC documents, compare inflows/outflows vs declared "
        "income, and check for rapid onward transfers or links to known scam/fraud patterns."
    )


def _device_text(label: str, c: dict[NodeType, int]) -> str:
    return (
        f"{label} is a device shared across {c[NodeType.BUYER]} buyer account(s) "
        f"and {c[NodeType.SELLER]} seller/merchant node(s).\n"
        "Shared devices across multiple identities are strong linkage signals in abuse scenarios, especially when "
        "combined with abnormal order, refund, or dispute patterns.\n"
        "Investigators should correlate this device with IPs, locations, and prior risk events, and assess whether "
        "it appears in other suspicious clusters across the platform or PSP."
    )


def _seller_text(label: str, c: dict[NodeType, int]) -> str:
    return (
        f"{label} is a seller/merchant node connected to {c[NodeType.BUYER]} buyer node(s), "
        f"{c[NodeType.BANK]} payout node(s), {c[NodeType.DEVICE]} device node(s), and {c[NodeType.CARD]} card node(s).\n"
        "Its position in the graph and connection mix can indicate whether it is a potential anchor for a collusive "
        "ring, a victim of hostile activity, or a normal business.\n"
        "Investigators should examine its order/refund ratios, review/complaint patterns, pricing history, and any "
        "prior enforcement or risk flags in combination with this network context."
    )


def _buyer_text(label: str, c: dict[NodeType, int]) -> str:
    return (
        f"{label} is a buyer node linked to {c[NodeType.SELLER]} seller/merchant node(s), "
        f"{c[NodeType.CARD]} card node(s), and {c[NodeType.DEVICE]} device node(s).\n"
        "Multiple links across sellers and shared devices or payment methods increase the likelihood that this buyer "
        "is part of a coordinated abuse pattern rather than a purely legitimate customer.\n"
        "Investigators should review its dispute/chargeback history, geolocation/IP patterns, and linkage to other "
        "known bad actors."
    )


def _card_text(label: str, c: dict[NodeType, int]) -> str:
    return (
        f"{label} is a payment instrument node linked to {c[NodeType.BUYER]} buyer node(s) "
        f"and {c[NodeType.SELLER]} seller/merchant node(s).\n"
        "Cards used across multiple buyers or merchants with abnormal dispute or refund rates can signal synthetic "
        "identity, testing, or friendly fraud patterns.\n"
        "Investigators should verify the issuing BIN, geolocation alignment, historical usage, and whether this "
        "instrument appears in other fraud or AML cases."
    )


def _generic_text(node: Node, total: int) -> str:
    return (
        f'{node.label} is a node of type "{node.type}", connected to {total} other node(s).\n'
        "At this time, there is no specialized template for this node type, but investigators should still review "
        "its connections, volumes, and any prior risk signals in combination with the broader graph."
    )


NODE_TEMPLATES: dict[NodeType, Callable[[str, dict[NodeType, int]], str] | None] = {
    NodeType.BANK: _bank_text,
    NodeType.DEVICE: _device_text,
    NodeType.SELLER: _seller_text,
    NodeType.BUYER: _buyer_text,
    NodeType.CARD: _card_text,
    # No role-specific wording yet; these use the generic template.
    NodeType.DISPUTE: None,
    NodeType.OTHER: None,
    NodeType.UNKNOWN: None,
}


def explain_node(node: Node, graph: DisplayGraph) -> str:
    """
    Explain a node from its one-hop neighbourhood.

    Neighbour counts are per edge occurrence: two edges to the same seller count
    as two sellers. A node with no edges gets the same template with zero counts.
    """
    counts, total = neighbor_counts(node.id, graph)
    template = NODE_TEMPLATES[node.kind]
    if template is None:
        return _generic_text(node, total)
    return template(node.label, counts)


def build_scenario_summary(scenario: Scenario) -> str:
    sellers = scenario.count_type(NodeType.SELLER)
    buyers = scenario.count_type(NodeType.BUYER)
    banks = scenario.count_type(NodeType.BANK)
    devices = scenario.count_type(NodeType.DEVICE)
    return (
        f'Scenario "{scenario.name}" models a synthetic cluster with {sellers} seller/merchant node(s), '
        f"{buyers} buyer node(s), {banks} payout/bank node(s), and {devices} shared device node(s).\n"
        "The edges capture relationships such as orders, payouts, shared devices, and control links, representing "
        "patterns you have seen in real marketplace and PSP abuse cases.\n"
        "This view is intended as a thinking and training aid: it does not represent real customers, but it mirrors "
        "how hostile rings, mule clusters, or competitor attacks can appear in network form."
    )


LENS_NARRATIVES: dict[Lens, str] = {
    Lens.FRAUD: (
        "From a fraud and chargeback perspective, this scenario highlights where financial loss can crystallize: "
        "orders that are cancelled, refunded, or disputed, and payout nodes that aggregate value before it leaves "
        "the platform or PSP.\n"
        "Fraud teams should focus on loss exposure, arbitration win rates, promotion abuse, and controls around "
        "eligibility for refunds/cashback, as well as velocity and abnormal ratios vs peer baselines."
    ),
    Lens.AML: (
        "From an AML / fincrime perspective, this network can resemble mule or pass-through structures where value "
        "is moved between accounts via fake commerce or coordinated buyer-seller behaviour.\n"
        "The key questions are whether the flows align with declared business activity, whether payout nodes behave "
        "like personal vs business accounts, and whether there are links to known scams or higher-risk "
        "jurisdictions.\n"
        "Such patterns can drive scenario refinement and may justify STR/SAR filings when combined with additional "
        "evidence."
    ),
    Lens.TS: (
        "From a trust & safety perspective, this scenario demonstrates abuse of platform rules: fake demand, review "
        "manipulation, hostile seller activity, and coordination to harm competitors or game incentives.\n"
        "Trust & safety teams should align with fraud and AML functions on a shared view of bad-actor networks, to "
        "ensure interventions target the right cluster of accounts rather than isolated symptoms.\n"
        "This lens emphasizes user harm, marketplace integrity, and enforcement policy rather than purely financial "
        "or regulatory outcomes."
    ),
}


def build_lens_narrative(scenario: Scenario | None, lens: str) -> str:
    """Fixed paragraph for the lens; "" for anything that is not fraud, aml or ts."""
    parsed = Lens.parse(lens) if isinstance(lens, str) else None
    if parsed is None:
        return ""
    return LENS_NARRATIVES[parsed]


def checklist_text(items) -> str:
    """Checklist as '- item' lines, the format used by the copy action."""
    return "\n".join(f"- {item}" for item in items).strip()
