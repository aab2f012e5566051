# follow/console.py
"""
On-screen console and clipboard helpers for the follow overlay.
"""

from __future__ import annotations

import time

tk_root = None

FADE_SECONDS = 4.0
MAX_LINES = 6


def ensure_tk_root():
    """Create the hidden Tkinter root used for dialogs and the clipboard."""
    global tk_root
    import tkinter as tk
    if tk_root is None or not (hasattr(tk_root, "winfo_exists") and tk_root.winfo_exists()):
        tk_root = tk.Tk()
        tk_root.withdraw()
    return tk_root


def pump_tk():
    """Update Tkinter event loop."""
    global tk_root
    if tk_root is None:
        return
    import tkinter as tk
    try:
        tk_root.update()
    except tk.TclError:
        tk_root = None


def copy_to_clipboard(text: str):
    """Put text on the system clipboard."""
    root = ensure_tk_root()
    root.clipboard_clear()
    root.clipboard_append(text)
    root.update()


class Console:
    """Short-lived status lines drawn over the overlay."""

    def __init__(self, fade_s: float = FADE_SECONDS, max_lines: int = MAX_LINES, clock=time.monotonic):
        self.fade_s = fade_s
        self.max_lines = max_lines
        self.clock = clock
        self.lines = []

    def info_fade(self, fmt: str, *args):
        text = fmt.format(*args)
        print(text)
        self.lines.append((text, self.clock()))
        if len(self.lines) > self.max_lines:
            self.lines.pop(0)
        return text

    def visible_lines(self, now=None):
        """Yield (text, alpha 0..255) for lines that have not faded out yet."""
        now = self.clock() if now is None else now
        self.lines = [(t, t0) for (t, t0) in self.lines if now - t0 < self.fade_s]
        for text, t0 in self.lines:
            remaining = 1.0 - (now - t0) / self.fade_s
            yield text, max(0, min(255, int(255 * remaining)))


class WaypointNotifier:
    """Notification sink handed to the tracker: copies the code and reports it."""

    def __init__(self, console: Console, clipboard=copy_to_clipboard):
        self.console = console
        self.clipboard = clipboard

    def __call__(self, code: str):
        if not code:
            return
        if self.clipboard is not None:
            try:
                self.clipboard(code)
            except Exception as e:
                self.console.info_fade("Clipboard unavailable: {0}", e)
                return
        self.console.info_fade("Waypoint code copied to clipboard: {0}.", code)
