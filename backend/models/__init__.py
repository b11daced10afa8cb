"""Scenario records and the enumerations used to dispatch on them."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NodeType(str, Enum):
    SELLER = "seller"
    BUYER = "buyer"
    BANK = "bank"
    DEVICE = "device"
    CARD = "card"
    DISPUTE = "dispute"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "NodeType":
        """Known member for value, or UNKNOWN for anything not in the table."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class EdgeType(str, Enum):
    ORDER = "order"
    PAYOUT = "payout"
    USES_DEVICE = "uses_device"
    USES_CARD = "uses_card"
    CONTROLS = "controls"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "EdgeType":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class Lens(str, Enum):
    FRAUD = "fraud"
    AML = "aml"
    TS = "ts"

    @classmethod
    def parse(cls, value: str) -> "Lens | None":
        try:
            return cls(value)
        except ValueError:
            return None


LENS_LABELS = {
    Lens.FRAUD: "Fraud / chargebacks",
    Lens.AML: "AML / fincrime",
    Lens.TS: "Trust & safety",
}


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    # Raw tag is kept verbatim so unrecognised types reach the fallback templates.
    type: str

    @property
    def kind(self) -> NodeType:
        return NodeType.parse(self.type)


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    type: str

    @property
    def kind(self) -> EdgeType:
        return EdgeType.parse(self.type)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def other_end(self, node_id: str) -> str:
        """Far endpoint as seen from node_id (the edge must touch node_id)."""
        return self.target if self.source == node_id else self.source


class Scenario(BaseModel):
    """
    One synthetic abuse network: nodes, directed edges, description and checklist.
    Edges must only reference nodes of the same scenario.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    checklist: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_references(self) -> "Scenario":
        seen: set[str] = set()
        for n in self.nodes:
            if n.id in seen:
                raise ValueError(f"duplicate node id {n.id!r}")
            seen.add(n.id)
        for i, e in enumerate(self.edges):
            missing = [end for end in (e.source, e.target) if end not in seen]
            if missing:
                raise ValueError(f"edge #{i} ({e.source} -> {e.target}) references unknown node(s): {', '.join(missing)}")
        return self

    def get_node(self, node_id: str) -> Node | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def count_type(self, node_type: NodeType) -> int:
        return sum(1 for n in self.nodes if n.kind is node_type)
