"""
Chart renderer for the Ancestry Chart Viewer.

``MatplotlibRenderer`` draws a ``PieChartSpec`` onto a matplotlib
``Figure`` and returns a handle whose ``destroy()`` clears the figure
and disconnects the hover tooltip.  ``RendererLoader`` performs the
one-time import of the drawing backend as a deferred step with a single
completion signal; later requests complete immediately.
"""

import importlib
from typing import Callable, List, Optional, Tuple

from matplotlib.figure import Figure

from .chart_pie import render_pie, wedge_at
from .config import ChartSettings
from .constants import DARK_COLORS
from .data_model import PieChartSpec
from .errors import RendererUnavailableError
from .export import export_png
from .scheduling import ImmediateScheduler, Scheduler


class PieRenderHandle:
    """Resources held by one rendered chart."""

    def __init__(self, renderer: 'MatplotlibRenderer', fig: Figure,
                 spec: PieChartSpec, wedges: list):
        self._renderer = renderer
        self.fig = fig
        self.spec = spec
        self.wedges = wedges
        self.alive = True
        self._annotation = None
        self._cid = None

        if wedges and spec.tooltip_formatter is not None:
            ax = wedges[0].axes
            self._annotation = ax.annotate(
                "", xy=(0, 0), xytext=(12, 12),
                textcoords='offset points',
                color=DARK_COLORS['fg_bright'], fontsize=9,
                bbox=dict(boxstyle='round,pad=0.4',
                          facecolor=DARK_COLORS['tooltip_bg'],
                          edgecolor='none'),
            )
            self._annotation.set_visible(False)
            self._cid = fig.canvas.mpl_connect(
                'motion_notify_event', self._on_motion,
            )

    def _on_motion(self, event):
        if not self.alive or self._annotation is None:
            return
        index = None
        if event.inaxes is self._annotation.axes:
            index = wedge_at(self.wedges, event)
        if index is None:
            if self._annotation.get_visible():
                self._annotation.set_visible(False)
                self.fig.canvas.draw_idle()
            return
        self._annotation.xy = (event.xdata, event.ydata)
        self._annotation.set_text("\n".join(self.spec.tooltip_formatter(index)))
        self._annotation.set_visible(True)
        self.fig.canvas.draw_idle()

    def destroy(self) -> None:
        """Release the chart: disconnect events and clear the figure."""
        if not self.alive:
            return
        self.alive = False
        if self._cid is not None:
            self.fig.canvas.mpl_disconnect(self._cid)
            self._cid = None
        self._annotation = None
        self.wedges = []
        self.fig.clf()
        self.fig.canvas.draw_idle()
        self._renderer._release(self)


class MatplotlibRenderer:
    """Draws pie specs onto matplotlib figures."""

    def __init__(self, settings: Optional[ChartSettings] = None):
        self.settings = settings or ChartSettings()
        self._live: List[PieRenderHandle] = []

    @property
    def live_count(self) -> int:
        return len(self._live)

    def render(self, surface: Figure, spec: PieChartSpec) -> PieRenderHandle:
        wedges = render_pie(surface, spec, for_export=False)
        handle = PieRenderHandle(self, surface, spec, wedges)
        self._live.append(handle)
        surface.canvas.draw_idle()
        return handle

    def export(self, surface: Figure, filepath: str) -> str:
        return export_png(
            surface, filepath,
            dpi=self.settings.export_dpi,
            width_inches=self.settings.export_width_inches,
        )

    def _release(self, handle: PieRenderHandle) -> None:
        if handle in self._live:
            self._live.remove(handle)


class RendererLoader:
    """One-time, deferred import of the drawing backend.

    Parameters
    ----------
    scheduler : Scheduler
        Runs the import as a deferred step.
    backend_module : str
        Module imported to make the backend available, e.g.
        ``"matplotlib.backends.backend_qtagg"`` in the GUI.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None,
                 backend_module: str = "matplotlib.backends.backend_agg"):
        self._scheduler = scheduler or ImmediateScheduler()
        self._backend_module = backend_module
        self._loaded = False
        self._loading = False
        self._waiting: List[Tuple[Callable[[], None],
                                  Callable[[Exception], None]]] = []

    @property
    def loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(
        self,
        on_ready: Callable[[], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        """Call *on_ready* once the backend is importable.

        Already loaded: *on_ready* runs synchronously.  A failed load is
        reported to *on_error*; the next request tries again.
        """
        if self._loaded:
            on_ready()
            return
        self._waiting.append((on_ready, on_error))
        if self._loading:
            return
        self._loading = True
        self._scheduler.defer(self._load)

    def _load(self) -> None:
        waiting, self._waiting = self._waiting, []
        try:
            importlib.import_module(self._backend_module)
        except ImportError as exc:
            self._loading = False
            error = RendererUnavailableError(
                f"Charting backend {self._backend_module!r} is unavailable: "
                f"{exc}"
            )
            for _, on_error in waiting:
                on_error(error)
            return
        self._loaded = True
        self._loading = False
        for on_ready, _ in waiting:
            on_ready()
