# follow-overlay/main.py
import os, sys

# Ensure SDL picks a usable video driver (helps when run from terminals that default to headless)
if os.name == "nt" and not os.environ.get("SDL_VIDEODRIVER"):
    os.environ["SDL_VIDEODRIVER"] = "windows"

import pygame

from follow.config import (
    WINDOW_WIDTH, WINDOW_HEIGHT, FPS, BG_COLOR, load_config, save_config, follow_flat, view_flat,
    route_file_path
)
from follow.console import Console, WaypointNotifier, pump_tk
from follow.draw import draw_grid, draw_tracker, draw_cursor, draw_status, draw_console
from follow.geom import screen_to_world
from follow.route import Route, load_route_file
from follow.storage import load_route, save_route
from follow.tracker import RouteTracker, FollowCommand

APP_TITLE = "ROUTE FOLLOW OVERLAY"

CONTROLS = [
    ("Mouse", "Live cursor position."),
    ("C", "Select closest node"),
    ("Left / B", "Select previous node"),
    ("Right / N", "Select next node"),
    ("H", "Toggle orientation helper"),
    ("E", "Enable / disable follow mode"),
    ("L", "Load route"),
    ("S", "Save route"),
    ("R", "Reload config"),
    ("ESC", "Quit"),
]

# FollowMode input group
KEY_ACTIONS = {
    pygame.K_c: FollowCommand.SELECT_CLOSEST_NODE,
    pygame.K_b: FollowCommand.SELECT_PREVIOUS_NODE,
    pygame.K_LEFT: FollowCommand.SELECT_PREVIOUS_NODE,
    pygame.K_n: FollowCommand.SELECT_NEXT_NODE,
    pygame.K_RIGHT: FollowCommand.SELECT_NEXT_NODE,
    pygame.K_h: FollowCommand.TOGGLE_ORIENTATION_HELPER,
}

# ---------------- pygame init ----------------
pygame.init()
screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
pygame.display.set_caption(APP_TITLE)
clock = pygame.time.Clock()
font = pygame.font.SysFont(None, 20)

console = Console()


def _initial_route(cfg):
    """Route from argv[1], else the configured route_file, else empty."""
    path = sys.argv[1] if len(sys.argv) > 1 else route_file_path(cfg)
    if not path:
        return Route()
    try:
        route = load_route_file(path)
    except (OSError, ValueError, KeyError, IndexError, TypeError) as e:
        console.info_fade("Could not load route {0}: {1}", path, e)
        return Route()
    console.info_fade("Loaded route {0} ({1} nodes).", path, len(route.nodes))
    return route


def main():
    """Main application loop."""
    cfg = load_config()
    view = view_flat(cfg)
    tracker = RouteTracker(_initial_route(cfg), follow_flat(cfg), notify=WaypointNotifier(console))

    running = True
    while running:
        clock.tick(FPS)
        pump_tk()

        mouse_px = pygame.mouse.get_pos()
        reference = screen_to_world(mouse_px, view)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False

                elif event.key in KEY_ACTIONS:
                    tracker.dispatch(KEY_ACTIONS[event.key], reference)

                elif event.key == pygame.K_e:
                    if tracker.enabled:
                        tracker.disable()
                    else:
                        tracker.enable()
                    console.info_fade("Follow mode {0}.", "enabled" if tracker.enabled else "disabled")

                elif event.key == pygame.K_l:
                    try:
                        path, route = load_route()
                    except (OSError, ValueError, KeyError, IndexError, TypeError) as e:
                        console.info_fade("Could not load route: {0}", e)
                        path, route = None, None
                    if route is not None:
                        tracker.load_route(route)
                        cfg["route_file"] = {"value": path}
                        save_config(cfg)
                        console.info_fade("Loaded route {0} ({1} nodes).", path, len(route.nodes))

                elif event.key == pygame.K_s:
                    try:
                        path = save_route(tracker.route)
                    except OSError as e:
                        console.info_fade("Could not save route: {0}", e)
                    else:
                        if path:
                            console.info_fade("Route saved to {0}.", path)

                elif event.key == pygame.K_r:
                    cfg = load_config()
                    view = view_flat(cfg)
                    tracker.cfg = follow_flat(cfg)
                    tracker.route_width = tracker.cfg["route_width"]
                    tracker.reload()
                    console.info_fade("Config reloaded.")

        if tracker.enabled:
            tracker.update(reference)

        screen.fill(BG_COLOR)
        draw_grid(screen, view["pixels_per_unit"] * 10)
        draw_tracker(screen, tracker, view)
        draw_cursor(screen, mouse_px)
        draw_status(screen, tracker, font)
        draw_console(screen, console, font)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
