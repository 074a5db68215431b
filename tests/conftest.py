"""
Pytest configuration and shared fixtures.

Graph fixtures mirror the small hand-checked scenarios used across the
engine tests; `timers` replaces threading.Timer so playback ticks can be
fired deterministically.
"""

import pytest

from graph import Graph
from algorithms.dijkstra import dijkstra


class FakeTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval, callback):
        self.interval  = interval
        self.callback  = callback
        self.started   = False
        self.cancelled = False
        self.fired     = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.fired = True
        self.callback()


class FakeTimers:
    """Timer factory recording every timer the stepper arms."""

    def __init__(self):
        self.created = []

    def __call__(self, interval, callback):
        timer = FakeTimer(interval, callback)
        self.created.append(timer)
        return timer

    @property
    def pending(self):
        live = [t for t in self.created if t.started and not t.cancelled and not t.fired]
        return live[-1] if live else None

    def fire(self):
        timer = self.pending
        assert timer is not None, "no timer armed"
        timer.fire()


@pytest.fixture
def timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def line_graph() -> Graph:
    """A(0,0) -5-> B(1,0) -3-> C(2,0)."""
    g = Graph(directed=True)
    g.create_node("A", 0, 0)
    g.create_node("B", 1, 0)
    g.create_node("C", 2, 0)
    g.create_edge("A", "B", 5.0)
    g.create_edge("B", "C", 3.0)
    return g


@pytest.fixture
def diamond_graph() -> Graph:
    """Two routes A→D: via B costs 6, via C costs 4."""
    g = Graph(directed=True)
    g.create_node("A", 0, 0)
    g.create_node("B", 1, 0)
    g.create_node("C", 0, 1)
    g.create_node("D", 1, 1)
    g.create_edge("A", "B", 1.0)
    g.create_edge("B", "D", 5.0)
    g.create_edge("A", "C", 2.0)
    g.create_edge("C", "D", 2.0)
    return g


@pytest.fixture
def disconnected_graph() -> Graph:
    g = Graph(directed=True)
    g.create_node("A", 0, 0)
    g.create_node("B", 1, 0)
    g.create_node("C", 5, 5)
    g.create_node("D", 6, 5)
    g.create_edge("A", "B", 1.0)
    g.create_edge("C", "D", 1.0)
    return g


@pytest.fixture
def negative_cycle_graph() -> Graph:
    """A→B→C→A has total weight -2 and is reachable from A; C→D leads out."""
    g = Graph(directed=True)
    for nid in "ABCD":
        g.create_node(nid)
    g.create_edge("A", "B", 1.0)
    g.create_edge("B", "C", -2.0)
    g.create_edge("C", "A", -1.0)
    g.create_edge("C", "D", 1.0)
    return g


@pytest.fixture
def line_result(line_graph):
    """Dijkstra over line_graph: init, A, B, reached C → 4 steps."""
    return dijkstra(line_graph, "A", "C")
