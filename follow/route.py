# follow/route.py
"""
Route data model: an ordered list of nodes the user walks through, plus a set of
detached nodes that are only displayed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .geom import Vec3, as_vec3


class NodeType(Enum):
    NORMAL = "Normal"
    TELEPORT = "Teleport"
    HEART = "Heart"
    HEART_WALL = "HeartWall"

    @classmethod
    def parse(cls, name) -> "NodeType":
        """Accept the serialized name ("HeartWall") or the member name ("HEART_WALL")."""
        if isinstance(name, NodeType):
            return name
        text = str(name or "Normal")
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        raise ValueError(f"unknown node type: {name!r}")


@dataclass(frozen=True)
class Node:
    position: Vec3
    type: NodeType = NodeType.NORMAL
    waypoint_code: Optional[str] = None


@dataclass(frozen=True)
class Route:
    nodes: Tuple[Node, ...] = ()
    detached_nodes: Tuple[Node, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.nodes)


def _node_from_dict(d: dict) -> Node:
    code = d.get("code")
    return Node(
        position=as_vec3(d["pos"]),
        type=NodeType.parse(d.get("type")),
        waypoint_code=str(code) if code else None,
    )


def _node_to_dict(node: Node) -> dict:
    out = {"pos": list(node.position), "type": node.type.value}
    if node.waypoint_code:
        out["code"] = node.waypoint_code
    return out


def route_from_dict(data: dict) -> Route:
    """Build a Route from its JSON mapping ({"nodes": [...], "detached": [...]})."""
    return Route(
        nodes=tuple(_node_from_dict(d) for d in data.get("nodes", [])),
        detached_nodes=tuple(_node_from_dict(d) for d in data.get("detached", [])),
    )


def route_to_dict(route: Route) -> dict:
    return {
        "nodes": [_node_to_dict(n) for n in route.nodes],
        "detached": [_node_to_dict(n) for n in route.detached_nodes],
    }


def load_route_file(path: str) -> Route:
    with open(path, "r", encoding="utf-8") as f:
        return route_from_dict(json.load(f))


def save_route_file(path: str, route: Route) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(route_to_dict(route), f, indent=2)
