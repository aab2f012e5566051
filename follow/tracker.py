# follow/tracker.py
"""
Route follow tracker.

Holds the index of the next node the user has not reached yet, advances it when
the live reference point comes within reach of an upcoming node, and rebuilds the
two display windows (forward path and backtrack trail) after every change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .geom import Vec3, as_vec3, sqr_dist
from .route import Node, NodeType, Route

STYLE_FOLLOW = "follow"
STYLE_HEART = "heart"


class FollowCommand(Enum):
    """Zero-argument actions exposed to the host input group "FollowMode"."""
    SELECT_CLOSEST_NODE = "SelectClosestNode"
    SELECT_PREVIOUS_NODE = "SelectPreviousNode"
    SELECT_NEXT_NODE = "SelectNextNode"
    TOGGLE_ORIENTATION_HELPER = "ToggleOrientationHelper"

    @classmethod
    def from_action_name(cls, name: str) -> "FollowCommand":
        return cls(name)


@dataclass
class DisplayNode:
    """Transient marker for one node; replaced wholesale on every rebuild."""
    position: Vec3
    type: NodeType = NodeType.NORMAL
    selected: bool = False
    reached: bool = False
    visible: bool = True
    detached: bool = False

    @classmethod
    def of(cls, node: Node, **kw) -> "DisplayNode":
        return cls(position=node.position, type=node.type, **kw)


class RouteTracker:
    input_group_name = "FollowMode"

    def __init__(self, route: Route, cfg: dict,
                 notify: Optional[Callable[[str], None]] = None,
                 enabled: bool = True):
        """
        route  -- the Route being followed (read-only)
        cfg    -- flattened follow config, see config.follow_flat
        notify -- called with the waypoint code when a coded Teleport node is reached
        """
        assert route is not None, "route is required"
        assert cfg is not None, "follow config is required"
        self.route = route
        self.cfg = cfg
        self.notify = notify
        self.enabled = enabled
        self.next_node_index = 0 if route.nodes else -1
        self.orientation_helper_visible = bool(cfg["orientation_helper_default"])
        self.route_width = float(cfg["route_width"])

        self.nodes: List[DisplayNode] = []
        self.reached_nodes: List[DisplayNode] = []
        self.detached_nodes: List[DisplayNode] = []
        self.route_style = STYLE_FOLLOW
        self.orientation_segment: Optional[Tuple[Vec3, Vec3]] = None
        self.reference: Optional[Vec3] = None
        self.repopulate_route()

    # ---------------- derived values ----------------

    @property
    def squared_dist_to_reach(self) -> float:
        return float(self.cfg["reach_node_radius"]) ** 2

    @property
    def squared_max_route_length(self) -> float:
        return float(self.cfg["follow_max_route_length"]) ** 2

    @property
    def forward_positions(self) -> List[Vec3]:
        return [n.position for n in self.nodes]

    @property
    def backtrack_positions(self) -> List[Vec3]:
        return [n.position for n in self.reached_nodes]

    @property
    def detached_positions(self) -> List[Vec3]:
        return [n.position for n in self.detached_nodes]

    # ---------------- session ----------------

    def enable(self):
        self.enabled = True
        self.repopulate_route()

    def disable(self):
        self.enabled = False
        self.repopulate_route()

    def reload(self):
        self.repopulate_route()

    def load_route(self, route: Route):
        """Swap in a new route and restart progress from its first node."""
        assert route is not None, "route is required"
        self.route = route
        self.next_node_index = 0 if route.nodes else -1
        self.repopulate_route()

    # ---------------- per-tick ----------------

    def update(self, reference) -> Optional[int]:
        """
        Run reach detection for one tick. Returns the index of the node that was
        reached when the cursor moved, otherwise None.
        """
        reference = as_vec3(reference)
        self.reference = reference
        if self.next_node_index < 0:
            self.orientation_segment = (reference, reference)
            return None

        # Only nodes in the materialized forward window are candidates.
        start = self.next_node_index
        next_nodes = self.route.nodes[start:start + len(self.nodes)]
        if not next_nodes:
            self.orientation_segment = (reference, reference)
            return None
        self.orientation_segment = (reference, next_nodes[0].position)

        best_offset, best_dist = None, None
        for offset, node in enumerate(next_nodes):
            d2 = sqr_dist(node.position, reference)
            if d2 > self.squared_dist_to_reach:
                continue
            if best_dist is None or d2 < best_dist:
                best_offset, best_dist = offset, d2

        if best_offset is None:
            return None
        reached = start + best_offset
        return reached if self.reached_node(reached) else None

    # ---------------- cursor mutations ----------------

    def reached_node(self, reached_node_index: int) -> bool:
        """Mark a node as reached and target the one after it. NoOp at route end."""
        if reached_node_index + 1 >= len(self.route.nodes):
            return False
        if reached_node_index >= 0:
            reached = self.route.nodes[reached_node_index]
            if reached.type is NodeType.TELEPORT and reached.waypoint_code and self.notify is not None:
                self.notify(reached.waypoint_code)
        self.next_node_index = reached_node_index + 1
        self.repopulate_route()
        return True

    def select_next_node(self) -> bool:
        return self.reached_node(self.next_node_index)

    def select_previous_node(self) -> bool:
        if self.next_node_index <= 0:
            return False
        self.next_node_index -= 1
        self.repopulate_route()
        return True

    def select_closest_node(self, reference=None) -> bool:
        """
        Target the node nearest to reference over the whole route; lowest index wins ties.
        Without a reference the last point seen by update is used.
        """
        if reference is None:
            reference = self.reference
        if not self.route.nodes or reference is None:
            return False
        reference = as_vec3(reference)
        best_i, best_d = 0, None
        for i, node in enumerate(self.route.nodes):
            d2 = sqr_dist(node.position, reference)
            if best_d is None or d2 < best_d:
                best_i, best_d = i, d2
        self.next_node_index = best_i
        self.repopulate_route()
        return True

    def toggle_orientation_helper(self) -> bool:
        self.orientation_helper_visible = not self.orientation_helper_visible
        return self.orientation_helper_visible

    def dispatch(self, command: FollowCommand, reference=None):
        """Run one FollowMode command. reference defaults to the last cursor position."""
        if command is FollowCommand.SELECT_CLOSEST_NODE:
            return self.select_closest_node(reference)
        elif command is FollowCommand.SELECT_PREVIOUS_NODE:
            return self.select_previous_node()
        elif command is FollowCommand.SELECT_NEXT_NODE:
            return self.select_next_node()
        elif command is FollowCommand.TOGGLE_ORIENTATION_HELPER:
            return self.toggle_orientation_helper()
        raise ValueError(f"unknown follow command: {command!r}")

    # ---------------- window rebuild ----------------

    def repopulate_route(self):
        """Rebuild every display list from the current cursor."""
        self.nodes = self._build_forward_window()
        self.route_style = self._select_route_style()
        self.detached_nodes = [DisplayNode.of(n, detached=True) for n in self.route.detached_nodes]
        self.reached_nodes = self._build_backtrack_window() if self.cfg["show_follow_backtrack"] else []

    def _build_forward_window(self) -> List[DisplayNode]:
        nodes: List[DisplayNode] = []
        squared_length = 0.0
        previous = None
        for node in self.route.nodes[max(self.next_node_index, 0):]:
            if previous is not None:
                step = sqr_dist(previous.position, node.position)
                if (squared_length + step > self.squared_max_route_length
                        and len(nodes) >= self.cfg["min_display_node_count"]):
                    break
                squared_length += step
            nodes.append(DisplayNode.of(node, selected=previous is None and self.enabled))
            # Teleports end the visible path.
            if node.type is NodeType.TELEPORT:
                break
            previous = node
        return nodes

    def _select_route_style(self) -> str:
        for node in reversed(self.route.nodes[:max(self.next_node_index, 0)]):
            if node.type is NodeType.HEART_WALL:
                return STYLE_FOLLOW
            if node.type is NodeType.HEART:
                return STYLE_HEART
        return STYLE_FOLLOW

    def _build_backtrack_window(self) -> List[DisplayNode]:
        reached: List[DisplayNode] = []
        squared_length = 0.0
        previous = None
        index = min(self.next_node_index, len(self.route.nodes) - 1)
        while index >= 0:
            node = self.route.nodes[index]
            if previous is not None:
                step = sqr_dist(previous.position, node.position)
                if squared_length + step > self.squared_max_route_length:
                    break
                squared_length += step
            # The cursor node only anchors the trail; its marker stays hidden.
            reached.append(DisplayNode.of(node, reached=True, visible=previous is not None))
            previous = node
            index -= 1
        return reached
