# follow/draw.py

from __future__ import annotations

import pygame

from .config import (
    GRID_COLOR, NODE_COLOR, CURSOR_COLOR, TEXT_COLOR, FOLLOW_COLOR, HEART_COLOR,
    BACKTRACK_COLOR, REACHED_COLOR, DETACHED_COLOR, TELEPORT_COLOR, HELPER_COLOR, SELECTED
)
from .geom import world_to_screen
from .route import NodeType
from .tracker import STYLE_HEART

ROUTE_COLORS = {STYLE_HEART: HEART_COLOR}

NODE_RADIUS = 6


def draw_grid(surface, grid_size_px):
    """Draw background grid lines."""
    step = max(4, int(grid_size_px))
    w, h = surface.get_width(), surface.get_height()
    for x in range(0, w, step):
        pygame.draw.line(surface, GRID_COLOR, (x, 0), (x, h))
    for y in range(0, h, step):
        pygame.draw.line(surface, GRID_COLOR, (0, y), (w, y))


def draw_polyline(surface, color, positions, view, width):
    """Draw a world-space polyline; needs at least two points."""
    if len(positions) < 2:
        return
    pts = [world_to_screen(p, view) for p in positions]
    pygame.draw.lines(surface, color, False, pts, max(1, int(round(width))))


def _node_color(dn):
    if dn.detached:
        return DETACHED_COLOR
    if dn.reached:
        return REACHED_COLOR
    if dn.type is NodeType.TELEPORT:
        return TELEPORT_COLOR
    return NODE_COLOR


def draw_display_nodes(surface, display_nodes, view):
    """Draw node markers. Hidden markers are skipped, the targeted one gets a ring."""
    for dn in display_nodes:
        if not dn.visible:
            continue
        pos = world_to_screen(dn.position, view)
        pygame.draw.circle(surface, _node_color(dn), pos, NODE_RADIUS)
        if dn.selected:
            pygame.draw.circle(surface, SELECTED, pos, NODE_RADIUS + 3, 2)


def draw_orientation_helper(surface, segment, view, width):
    """Line from the cursor to the targeted node."""
    if segment is None:
        return
    a, b = (world_to_screen(p, view) for p in segment)
    if a == b:
        return
    pygame.draw.line(surface, HELPER_COLOR, a, b, max(1, int(round(width))))


def draw_cursor(surface, pos_px):
    pygame.draw.circle(surface, CURSOR_COLOR, pos_px, 5)


def draw_status(surface, tracker, font):
    """Progress label in the top-left corner."""
    total = len(tracker.route.nodes)
    idx = tracker.next_node_index
    text = "No route loaded" if total == 0 else f"Next node {idx + 1} / {total}"
    label = font.render(text, True, TEXT_COLOR)
    surface.blit(label, (8, 8))


def draw_console(surface, console, font, now=None):
    """Fading console lines along the bottom edge."""
    lines = list(console.visible_lines(now))
    y = surface.get_height() - 8 - 18 * len(lines)
    for text, alpha in lines:
        label = font.render(text, True, TEXT_COLOR)
        label.set_alpha(alpha)
        surface.blit(label, (8, y))
        y += 18


def draw_tracker(surface, tracker, view):
    """Draw everything the tracker produced for this tick."""
    width = tracker.route_width
    if tracker.reached_nodes:
        draw_polyline(surface, BACKTRACK_COLOR, tracker.backtrack_positions, view, width)
        draw_display_nodes(surface, tracker.reached_nodes, view)
    color = ROUTE_COLORS.get(tracker.route_style, FOLLOW_COLOR)
    draw_polyline(surface, color, tracker.forward_positions, view, width)
    draw_display_nodes(surface, tracker.nodes, view)
    draw_display_nodes(surface, tracker.detached_nodes, view)
    if tracker.orientation_helper_visible:
        draw_orientation_helper(surface, tracker.orientation_segment, view, width)
