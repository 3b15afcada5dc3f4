"""
Chart section widget for the Ancestry Chart Viewer.

Hosts the collapsible chart container (a matplotlib FigureCanvas) and
the toggle / save buttons.  It implements the ``ChartView`` side of the
lifecycle controller: the controller decides when the section exists,
when it is visible and which label the toggle shows.
"""

import os

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFileDialog,
    QMessageBox,
)

import matplotlib
matplotlib.use('QtAgg')
from matplotlib.figure import Figure
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas

from .constants import DARK_COLORS, TOGGLE_LABEL_CLOSE, SAVE_LABEL


class ChartSectionWidget(QWidget):
    """Collapsible chart container with toggle and save controls."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._controller = None
        self._fig = None
        self._canvas = None

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(4, 4, 4, 4)
        self._layout.setSpacing(4)

        # ── Container (holds the canvas) ─────────────────────────────
        self._container = QWidget()
        self._container.setMinimumSize(800, 600)
        self._container_layout = QVBoxLayout(self._container)
        self._container_layout.setContentsMargins(0, 0, 0, 0)
        self._layout.addWidget(self._container, 1)

        # ── Button row ───────────────────────────────────────────────
        button_row = QHBoxLayout()
        button_row.addStretch()

        self._btn_toggle = QPushButton(TOGGLE_LABEL_CLOSE)
        self._btn_toggle.clicked.connect(lambda *_: self._on_toggle())
        button_row.addWidget(self._btn_toggle)

        self._btn_save = QPushButton(SAVE_LABEL)
        self._btn_save.clicked.connect(lambda *_: self._on_save())
        button_row.addWidget(self._btn_save)

        button_row.addStretch()
        self._layout.addLayout(button_row)

        self.setVisible(False)

    def bind(self, controller) -> None:
        self._controller = controller

    @property
    def canvas(self):
        return self._canvas

    # ── ChartView ────────────────────────────────────────────────────

    def create_section(self, figure_size) -> Figure:
        self.remove_section()
        self._fig = Figure(figsize=figure_size)
        self._fig.set_facecolor(DARK_COLORS['bg_alt'])
        self._canvas = FigureCanvas(self._fig)
        self._container_layout.addWidget(self._canvas)
        self.setVisible(True)
        return self._fig

    def remove_section(self) -> None:
        if self._canvas is not None:
            self._container_layout.removeWidget(self._canvas)
            self._canvas.deleteLater()
        self._canvas = None
        self._fig = None
        self.setVisible(False)

    def show_container(self) -> None:
        self._container.setVisible(True)

    def hide_container(self) -> None:
        self._container.setVisible(False)

    def set_toggle_label(self, text: str) -> None:
        self._btn_toggle.setText(text)

    # ── Slots ────────────────────────────────────────────────────────

    def _on_toggle(self):
        if self._controller is not None:
            self._controller.toggle()

    def _on_save(self):
        if self._controller is None:
            return
        default = os.path.join(os.path.expanduser("~"),
                               self._controller.settings.export_filename)
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Chart as PNG",
            default, "PNG Files (*.png);;All Files (*)",
        )
        if not path:
            return
        written = self._controller.export(path)
        if written:
            self.window().statusBar().showMessage(
                f"Saved to {os.path.basename(written)}", 3000
            )
        else:
            QMessageBox.warning(
                self, "Nothing Saved",
                "The chart is hidden or could not be saved.",
            )
