"""
Shared fixtures: fake renderer, fake view and a manual scheduler for
driving the chart lifecycle without a window.
"""

import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from ancestry_chart.data_model import CategoryStat, ChartDataset


class ManualScheduler:
    """Queue deferred callbacks until the test runs them."""

    def __init__(self):
        self.pending = []

    def defer(self, callback):
        self.pending.append(callback)

    def run_all(self):
        while self.pending:
            self.pending.pop(0)()


class FakeHandle:
    def __init__(self, renderer, spec):
        self._renderer = renderer
        self.spec = spec
        self.alive = True

    def destroy(self):
        if self.alive:
            self.alive = False
            self._renderer.live -= 1


class RecordingRenderer:
    """Counts live handles so tests can observe the at-most-one rule."""

    def __init__(self, fail_render=False, fail_export=False):
        self.live = 0
        self.max_live = 0
        self.renders = []
        self.exports = []
        self.fail_render = fail_render
        self.fail_export = fail_export

    def render(self, surface, spec):
        if self.fail_render:
            raise RuntimeError("canvas is gone")
        self.live += 1
        self.max_live = max(self.max_live, self.live)
        self.renders.append(spec)
        return FakeHandle(self, spec)

    def export(self, surface, filepath):
        if self.fail_export:
            raise OSError("disk full")
        self.exports.append(filepath)
        return filepath


class RecordingView:
    def __init__(self):
        self.sections_created = 0
        self.sections_removed = 0
        self.container_visible = False
        self.toggle_label = ""

    def create_section(self, figure_size):
        self.sections_created += 1
        self.container_visible = True
        return object()

    def remove_section(self):
        self.sections_removed += 1
        self.container_visible = False

    def show_container(self):
        self.container_visible = True

    def hide_container(self):
        self.container_visible = False

    def set_toggle_label(self, text):
        self.toggle_label = text


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def dataset():
    return ChartDataset(entries=(
        CategoryStat("Irish", 42.5, 1.2),
        CategoryStat("British", 35.0, 0.8),
        CategoryStat("French", 12.0, 0.5),
    ))
