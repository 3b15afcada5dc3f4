"""
Chart lifecycle controller for the Ancestry Chart Viewer.

Owns the one live chart and the dataset it was built from.  States:

- ``ABSENT``: no chart section exists
- ``VISIBLE``: section shown, chart rendered
- ``HIDDEN``: chart destroyed, container collapsed, dataset kept

Reopening re-renders from the held dataset on the next scheduler pass,
once the container has been laid out.  A new render always destroys
the previous one first, so at most one renderer handle is live.

Every public entry point reports its own failures through the
``AuditLog`` (and the optional ``on_report`` callback) and returns a
falsy value instead of raising.
"""

import os
import warnings
from typing import Callable, Optional, Protocol, Tuple

from matplotlib.figure import Figure

from .audit import AuditLog
from .chart_pie import build_pie_spec
from .colors import generate_colors
from .config import ChartSettings
from .constants import TOGGLE_LABEL_OPEN, TOGGLE_LABEL_CLOSE
from .data_model import ChartDataset, ChartState, PieChartSpec
from .errors import ChartError, ExtractionError, NoDisplayableDataError
from .scheduling import ImmediateScheduler, Scheduler


class ChartView(Protocol):
    """Host-side container for the chart section."""

    def create_section(self, figure_size: Tuple[float, float]) -> Figure:
        """Build container, controls and canvas; return the surface."""

    def remove_section(self) -> None:
        ...

    def show_container(self) -> None:
        ...

    def hide_container(self) -> None:
        ...

    def set_toggle_label(self, text: str) -> None:
        ...


class HeadlessChartView:
    """Chart section without a window, backed by an Agg canvas."""

    def __init__(self):
        self.figure: Optional[Figure] = None
        self.visible = False
        self.toggle_label = ""

    def create_section(self, figure_size: Tuple[float, float]) -> Figure:
        from matplotlib.backends.backend_agg import FigureCanvasAgg
        self.figure = Figure(figsize=figure_size)
        FigureCanvasAgg(self.figure)
        self.visible = True
        return self.figure

    def remove_section(self) -> None:
        self.figure = None
        self.visible = False

    def show_container(self) -> None:
        self.visible = True

    def hide_container(self) -> None:
        self.visible = False

    def set_toggle_label(self, text: str) -> None:
        self.toggle_label = text


class ChartLifecycleController:
    """Create, re-render, toggle, destroy and export the single chart.

    Parameters
    ----------
    renderer
        Object with ``render(surface, spec) -> handle`` and
        ``export(surface, path) -> str``; handles expose ``destroy()``.
    view : ChartView
        Host container for the chart section.
    extract : callable, optional
        ``() -> ChartDataset``; used by :meth:`extract_and_build`.
    loader : RendererLoader, optional
        Extraction waits for the renderer backend to load first.
    scheduler : Scheduler, optional
        Runs deferred re-renders.  Defaults to immediate execution.
    settings : ChartSettings, optional
    audit : AuditLog, optional
    on_report : callable, optional
        ``(message) -> None``; receives every failure message.
    color_rng : random.Random, optional
        Seeds the hues of colours past the base palette.
    """

    def __init__(
        self,
        renderer,
        view: ChartView,
        *,
        extract: Optional[Callable[[], ChartDataset]] = None,
        loader=None,
        scheduler: Optional[Scheduler] = None,
        settings: Optional[ChartSettings] = None,
        audit: Optional[AuditLog] = None,
        on_report: Optional[Callable[[str], None]] = None,
        color_rng=None,
    ):
        self._renderer = renderer
        self._view = view
        self._extract = extract
        self._loader = loader
        self._scheduler = scheduler or ImmediateScheduler()
        self.settings = settings or ChartSettings()
        self.audit = audit or AuditLog()
        self._on_report = on_report
        self._color_rng = color_rng

        self._state = ChartState.ABSENT
        self._dataset: Optional[ChartDataset] = None
        self._spec: Optional[PieChartSpec] = None
        self._surface: Optional[Figure] = None
        self._handle = None
        # Bumped on every transition; stale deferred renders compare unequal
        self._generation = 0
        self.last_error: Optional[Exception] = None

    # ── Read-only state ──────────────────────────────────────────────

    @property
    def state(self) -> ChartState:
        return self._state

    @property
    def dataset(self) -> Optional[ChartDataset]:
        return self._dataset

    @property
    def spec(self) -> Optional[PieChartSpec]:
        return self._spec

    @property
    def has_live_chart(self) -> bool:
        return self._handle is not None

    # ── Internals ────────────────────────────────────────────────────

    def _set_state(self, new_state: ChartState) -> None:
        if new_state is not self._state:
            self.audit.log_transition(self._state, new_state)
        self._state = new_state
        self._generation += 1

    def _report(self, kind: str, message: str) -> None:
        self.audit.log_failure(kind, message)
        if self._on_report is not None:
            self._on_report(message)

    def _report_error(self, exc: Exception) -> None:
        self.last_error = exc
        kind = exc.kind if isinstance(exc, ChartError) else type(exc).__name__
        self._report(kind, str(exc))

    def _release(self) -> None:
        if self._handle is not None:
            handle, self._handle = self._handle, None
            handle.destroy()

    def _acquire(self) -> None:
        """Render the held spec, destroying any previous chart first."""
        self._release()
        self._handle = self._renderer.render(self._surface, self._spec)

    def _teardown(self) -> None:
        self._release()
        if self._surface is not None:
            self._view.remove_section()
            self._surface = None
        self._spec = None
        self._set_state(ChartState.ABSENT)

    def _render_now(self) -> bool:
        try:
            self._acquire()
        except Exception as exc:
            self._teardown()
            self._report("render", f"Chart rendering failed: {exc}")
            self.last_error = exc
            return False
        return True

    def _deferred_render(self, token: int) -> None:
        if token != self._generation or self._state is not ChartState.VISIBLE:
            self.audit.log("RENDER_SKIPPED",
                           "State changed before the deferred render ran")
            return
        self._render_now()

    # ── Operations ───────────────────────────────────────────────────

    def build(self, dataset: Optional[ChartDataset]) -> bool:
        """Replace any existing chart with one built from *dataset*.

        An empty or missing dataset is reported and leaves the current
        chart (if any) untouched.
        """
        if dataset is None or len(dataset) == 0:
            self._report_error(NoDisplayableDataError(
                "No populations to display; chart not built."
            ))
            return False

        self._teardown()
        self._dataset = dataset
        try:
            colors = generate_colors(len(dataset), self._color_rng)
            self._spec = build_pie_spec(
                dataset, colors,
                title=self.settings.title,
                legend_position=self.settings.legend_position,
            )
            self._surface = self._view.create_section(self.settings.figure_size)
        except Exception as exc:
            self._teardown()
            self._report("render", f"Chart section could not be built: {exc}")
            self.last_error = exc
            return False

        self._view.show_container()
        self._view.set_toggle_label(TOGGLE_LABEL_CLOSE)
        if not self._render_now():
            return False
        self._set_state(ChartState.VISIBLE)
        self.audit.log("BUILD", f"Chart built with {len(dataset)} populations",
                       ", ".join(dataset.names))
        return True

    def extract_and_build(self) -> None:
        """Extract a fresh dataset and build from it.

        Waits for the renderer backend when a loader is configured.
        Check :attr:`state` (or the audit log) for the outcome.
        """
        if self._loader is None:
            self._extract_and_build_now()
            return
        self._loader.ensure_loaded(
            self._extract_and_build_now, self._report_error,
        )

    def _extract_and_build_now(self) -> bool:
        if self._extract is None:
            self._report_error(ExtractionError("No results table source."))
            return False
        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                dataset = self._extract()
        except (ChartError, OSError) as exc:
            self._report_error(exc)
            return False
        for w in caught:
            self.audit.log("WARNING", str(w.message))
        self.audit.log_data_load(
            "results table", f"{len(dataset)} populations selected",
        )
        return self.build(dataset)

    def toggle(self) -> bool:
        """Collapse a visible chart or reopen a hidden one.

        Returns ``False`` (reported no-op) when no chart exists.
        """
        if self._state is ChartState.VISIBLE:
            self._release()
            self._view.hide_container()
            self._view.set_toggle_label(TOGGLE_LABEL_OPEN)
            self._set_state(ChartState.HIDDEN)
            return True

        if self._state is ChartState.HIDDEN:
            self._view.show_container()
            self._view.set_toggle_label(TOGGLE_LABEL_CLOSE)
            self._set_state(ChartState.VISIBLE)
            token = self._generation
            self._scheduler.defer(lambda: self._deferred_render(token))
            return True

        self.audit.log("TOGGLE_SKIPPED", "No chart to toggle")
        return False

    def export(self, filepath: Optional[str] = None) -> Optional[str]:
        """Save the visible chart as PNG; returns the written path.

        Without a live chart this is a reported no-op returning ``None``.
        """
        if self._state is not ChartState.VISIBLE or self._handle is None:
            self.audit.log("EXPORT_SKIPPED", "No visible chart to export")
            return None
        target = filepath or os.path.join(os.getcwd(),
                                          self.settings.export_filename)
        try:
            written = self._renderer.export(self._surface, target)
        except (OSError, ValueError) as exc:
            self._report("export", f"Failed to export: {exc}")
            self.last_error = exc
            return None
        self.audit.log_export(written)
        return written

    def reset(self) -> None:
        """Drop the chart and the held dataset (a new page was loaded)."""
        self._teardown()
        self._dataset = None
        self.last_error = None
        self.audit.log("RESET", "Chart and dataset cleared")

    def rebuild_on_demand(self) -> None:
        """Run trigger: re-render the held dataset, or extract afresh.

        Runs on the next scheduler pass so that the host has finished
        updating the results table.
        """
        self._scheduler.defer(self._rebuild)

    def _rebuild(self) -> None:
        if self._dataset is None:
            self.extract_and_build()
        elif self._state is ChartState.VISIBLE:
            self._render_now()
        elif self._state is ChartState.HIDDEN:
            self.toggle()
        else:
            self.build(self._dataset)
