# follow/config.py
from __future__ import annotations
import copy, json, os
from typing import Optional

# Window
WINDOW_WIDTH  = 900
WINDOW_HEIGHT = 700
FPS           = 60

# Colors (RGB)
BG_COLOR        = (30, 30, 30)
GRID_COLOR      = (50, 50, 50)
NODE_COLOR      = (50, 255, 50)
CURSOR_COLOR    = (252, 3, 248)
TEXT_COLOR      = (255, 255, 255)
FOLLOW_COLOR    = (100, 180, 255)
HEART_COLOR     = (255, 90, 140)
BACKTRACK_COLOR = (130, 130, 130)
REACHED_COLOR   = (90, 90, 90)
DETACHED_COLOR  = (255, 165, 0)
TELEPORT_COLOR  = (255, 215, 0)
HELPER_COLOR    = (255, 255, 255)
SELECTED        = TEXT_COLOR

CONFIG_FILENAME = "config.json"

DEFAULT_CONFIG = {
    "follow": {
        "reach_node_radius":          {"value": 1.5},
        "follow_max_route_length":    {"value": 60.0},
        "min_display_node_count":     {"value": 3},
        "show_follow_backtrack":      {"value": 1},
        "orientation_helper_default": {"value": 1},
        "route_width":                {"value": 3.0},
    },
    "view": {
        "pixels_per_unit": {"value": 8.0},
        "origin_x":        {"value": WINDOW_WIDTH / 2.0},
        "origin_y":        {"value": WINDOW_HEIGHT / 2.0},
    },
    "route_file": {"value": ""},
}

def _flatten(section: dict) -> dict:
    """Extract 'value' from nested dict structure."""
    flat = {}
    for k, v in section.items():
        flat[k] = v.get("value", v) if isinstance(v, dict) and "value" in v else v
    return flat

def _merge_defaults(data: dict, defaults: dict) -> dict:
    """Fill keys missing from data with the default entries."""
    out = copy.deepcopy(defaults)
    for k, v in data.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict) and "value" not in v:
            out[k] = _merge_defaults(v, out[k])
        else:
            out[k] = v
    return out

def _load_json(path: str) -> Optional[dict]:
    """Load JSON file, return None on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError):
        return None

def _save_json(path: str, data: dict) -> None:
    """Save JSON file, creating the parent directory if needed."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

def default_config_path() -> str:
    here = os.path.dirname(__file__)
    return os.path.normpath(os.path.join(here, os.pardir, CONFIG_FILENAME))

def load_config(path: Optional[str] = None) -> dict:
    """Load config from disk, create default if missing."""
    path = path or default_config_path()
    data = _load_json(path)
    if not isinstance(data, dict):
        data = copy.deepcopy(DEFAULT_CONFIG)
        try:
            _save_json(path, data)
        except OSError as e:
            print(f"Could not write default config: {e}")
        return data
    return _merge_defaults(data, DEFAULT_CONFIG)

def save_config(cfg: dict, path: Optional[str] = None) -> bool:
    """Save flattened or raw config back to disk in the wrapped format."""
    path = path or default_config_path()
    def wrap(v): return {"value": v}
    try:
        fol = follow_flat(cfg)
        view = view_flat(cfg)
        raw = {
            "follow": {
                "reach_node_radius":          wrap(float(fol["reach_node_radius"])),
                "follow_max_route_length":    wrap(float(fol["follow_max_route_length"])),
                "min_display_node_count":     wrap(int(fol["min_display_node_count"])),
                "show_follow_backtrack":      wrap(int(bool(fol["show_follow_backtrack"]))),
                "orientation_helper_default": wrap(int(bool(fol["orientation_helper_default"]))),
                "route_width":                wrap(float(fol["route_width"])),
            },
            "view": {k: wrap(float(v)) for k, v in view.items()},
            "route_file": wrap(route_file_path(cfg)),
        }
        _save_json(path, raw)
        print(f"Config saved to {path}")
        return True
    except (OSError, KeyError, TypeError, ValueError, AssertionError) as e:
        print(f"Failed to save config: {e}")
        return False

def follow_flat(cfg: dict) -> dict:
    """Flatten follow section and check the values the tracker relies on."""
    fol = _flatten(_merge_defaults(cfg.get("follow", {}), DEFAULT_CONFIG["follow"]))
    fol["reach_node_radius"] = float(fol["reach_node_radius"])
    fol["follow_max_route_length"] = float(fol["follow_max_route_length"])
    fol["min_display_node_count"] = int(fol["min_display_node_count"])
    fol["show_follow_backtrack"] = bool(int(fol["show_follow_backtrack"]))
    fol["orientation_helper_default"] = bool(int(fol["orientation_helper_default"]))
    fol["route_width"] = float(fol["route_width"])
    assert fol["reach_node_radius"] >= 0.0, "reach_node_radius must be >= 0"
    assert fol["follow_max_route_length"] >= 0.0, "follow_max_route_length must be >= 0"
    assert fol["min_display_node_count"] >= 0, "min_display_node_count must be >= 0"
    assert fol["route_width"] >= 0.0, "route_width must be >= 0"
    return fol

def route_file_path(cfg: dict) -> str:
    """Last route file, or '' when none has been loaded."""
    v = cfg.get("route_file", "")
    if isinstance(v, dict):
        v = v.get("value", "")
    return str(v or "")

def view_flat(cfg: dict) -> dict:
    """Flatten view section."""
    view = _flatten(_merge_defaults(cfg.get("view", {}), DEFAULT_CONFIG["view"]))
    return {k: float(v) for k, v in view.items()}
