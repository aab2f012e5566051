# follow/storage.py
from __future__ import annotations
from tkinter import filedialog

from .console import ensure_tk_root
from .route import load_route_file, save_route_file

def load_route():
    """Pick a route file and load it. Returns (path, route) or (None, None)."""
    ensure_tk_root()
    filename = filedialog.askopenfilename(
        title="Load route",
        filetypes=[("JSON files", "*.json"), ("All files", "*.*")]
    )
    if not filename:
        return None, None
    route = load_route_file(filename)
    print(f"Loaded route {filename}: {len(route.nodes)} nodes, {len(route.detached_nodes)} detached")
    return filename, route

def save_route(route):
    """Save route to a JSON file chosen by the user."""
    ensure_tk_root()
    filename = filedialog.asksaveasfilename(
        title="Save route",
        defaultextension=".json",
        filetypes=[("JSON files", "*.json"), ("All files", "*.*")]
    )
    if not filename:
        return None
    save_route_file(filename, route)
    print(f"Route saved to {filename}")
    return filename
