# Console fade and waypoint notification checks (no display or clipboard needed).
from .console import Console, WaypointNotifier


class _Clock:
    def __init__(self):
        self.t = 100.0

    def __call__(self):
        return self.t


def test_info_fade_expires():
    clock = _Clock()
    console = Console(fade_s=2.0, clock=clock)
    assert console.info_fade("Reached {0} of {1}", 3, 7) == "Reached 3 of 7"
    lines = list(console.visible_lines())
    assert lines == [("Reached 3 of 7", 255)]
    clock.t += 1.0
    (_, alpha), = console.visible_lines()
    assert 0 < alpha < 255
    clock.t += 1.5
    assert list(console.visible_lines()) == []


def test_console_keeps_last_lines():
    console = Console(max_lines=2, clock=_Clock())
    for i in range(4):
        console.info_fade("line {0}", i)
    assert [t for t, _ in console.visible_lines()] == ["line 2", "line 3"]


def test_notifier_copies_and_reports():
    copied = []
    console = Console(clock=_Clock())
    notify = WaypointNotifier(console, clipboard=copied.append)
    notify("[&BDAEAAA=]")
    notify("")
    assert copied == ["[&BDAEAAA=]"]
    assert [t for t, _ in console.visible_lines()] == ["Waypoint code copied to clipboard: [&BDAEAAA=]."]


def run():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()


if __name__ == "__main__":
    run()
