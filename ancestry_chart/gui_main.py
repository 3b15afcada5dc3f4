"""
Main window for the Ancestry Chart Viewer.

Shows the results page (top) and the chart section (bottom) in a
vertical splitter, with a Run button, a menu bar and a status bar.
"""

import os
import tempfile

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QSplitter,
    QTextBrowser, QPushButton, QFileDialog, QMessageBox, QScrollArea,
)
from PySide6.QtGui import QAction
from PySide6.QtCore import Qt

from . import APP_NAME, APP_VERSION
from .audit import AuditLog
from .config import ChartSettings
from .constants import PLOT_STYLE_DARK, RUN_LABEL
from .controller import ChartLifecycleController
from .errors import ExtractionError
from .example_data import generate_example_page
from .gui_chart_panel import ChartSectionWidget
from .pipeline import dataset_from_html
from .renderer import MatplotlibRenderer, RendererLoader
from .scheduling import QtScheduler
from .table_extractor import read_results_page
from .theme import apply_plot_style


class ChartViewerWindow(QMainWindow):
    """Main window for the Ancestry Chart Viewer."""

    def __init__(self, settings: ChartSettings = None):
        super().__init__()
        self._settings = settings or ChartSettings()
        self._html = None
        self._source = "<none>"

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1000, 900)

        apply_plot_style(PLOT_STYLE_DARK)
        self._setup_ui()
        self._setup_controller()
        self._setup_menu()

        self.statusBar().showMessage("Ready: open a results page to begin")

    # ── UI setup ─────────────────────────────────────────────────────

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(4, 4, 4, 4)
        main_layout.setSpacing(4)

        splitter = QSplitter(Qt.Orientation.Vertical)

        # Top: results page and Run button
        top = QWidget()
        top_layout = QVBoxLayout(top)
        top_layout.setContentsMargins(0, 0, 0, 0)
        self._page_view = QTextBrowser()
        self._page_view.setOpenLinks(False)
        top_layout.addWidget(self._page_view, 1)

        run_row = QHBoxLayout()
        self._btn_run = QPushButton(RUN_LABEL)
        self._btn_run.clicked.connect(lambda *_: self._on_run())
        run_row.addWidget(self._btn_run)
        run_row.addStretch()
        top_layout.addLayout(run_row)

        # Bottom: chart section in a scroll area
        self._chart_section = ChartSectionWidget()
        scroll = QScrollArea()
        scroll.setWidget(self._chart_section)
        scroll.setWidgetResizable(True)

        splitter.addWidget(top)
        splitter.addWidget(scroll)
        splitter.setSizes([300, 700])
        main_layout.addWidget(splitter)

    def _setup_controller(self):
        scheduler = QtScheduler()
        self._audit = AuditLog()
        self._controller = ChartLifecycleController(
            MatplotlibRenderer(self._settings),
            self._chart_section,
            extract=self._extract,
            loader=RendererLoader(
                scheduler, "matplotlib.backends.backend_qtagg",
            ),
            scheduler=scheduler,
            settings=self._settings,
            audit=self._audit,
            on_report=lambda msg: self.statusBar().showMessage(msg, 8000),
        )
        self._chart_section.bind(self._controller)

    def _setup_menu(self):
        menubar = self.menuBar()

        # ── File menu ────────────────────────────────────────────────
        file_menu = menubar.addMenu("File")

        act_open = QAction("Open Results Page...", self)
        act_open.triggered.connect(lambda *_: self._open_page())
        file_menu.addAction(act_open)

        act_save = QAction("Save Chart...", self)
        act_save.triggered.connect(lambda *_: self._chart_section._on_save())
        file_menu.addAction(act_save)

        file_menu.addSeparator()

        act_exit = QAction("Exit", self)
        act_exit.triggered.connect(self.close)
        file_menu.addAction(act_exit)

        # ── Examples menu ────────────────────────────────────────────
        examples_menu = menubar.addMenu("Examples")

        act_example = QAction("Load Example Results Page", self)
        act_example.triggered.connect(lambda *_: self._load_example())
        examples_menu.addAction(act_example)

        # ── Help menu ────────────────────────────────────────────────
        help_menu = menubar.addMenu("Help")

        act_log = QAction("Show Audit Log", self)
        act_log.triggered.connect(lambda *_: self._show_audit_log())
        help_menu.addAction(act_log)

        act_about = QAction("About", self)
        act_about.triggered.connect(lambda *_: self._show_about())
        help_menu.addAction(act_about)

    # ── Page loading ─────────────────────────────────────────────────

    def _extract(self):
        if self._html is None:
            raise ExtractionError("No results page loaded.")
        return dataset_from_html(self._html, self._settings, self._source)

    def load_page(self, filepath: str) -> None:
        """Show the results page at *filepath* and chart its table."""
        try:
            html = read_results_page(filepath)
        except OSError as exc:
            QMessageBox.critical(
                self, "Open Error", f"Could not read results page:\n\n{exc}",
            )
            return
        self._show_html(html, os.path.basename(filepath))

    def _show_html(self, html: str, source: str) -> None:
        self._html = html
        self._source = source
        self._page_view.setHtml(html)
        self._audit.log_data_load(source, f"{len(html):,} characters")
        self.statusBar().showMessage(f"Loaded {source}")
        self._controller.reset()
        self._controller.extract_and_build()

    def _open_page(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "Open Results Page",
            "", "HTML Files (*.html *.htm);;All Files (*)",
        )
        if path:
            self.load_page(path)

    def _load_example(self):
        out = os.path.join(tempfile.gettempdir(), 'ancestry_example',
                           'results.html')
        generate_example_page(out)
        self.load_page(out)

    # ── Slots ────────────────────────────────────────────────────────

    def _on_run(self):
        """Slot: Run clicked; re-render, or extract when nothing is held."""
        if self._html is None:
            QMessageBox.warning(
                self, "No Results Page",
                "Please open a results page before running.",
            )
            return
        self._controller.rebuild_on_demand()

    def _show_audit_log(self):
        dialog = QMessageBox(self)
        dialog.setWindowTitle("Audit Log")
        dialog.setText("Chart actions and reported failures:")
        dialog.setDetailedText(self._audit.export_text())
        dialog.exec()

    def _show_about(self):
        QMessageBox.about(
            self,
            f"About {APP_NAME}",
            f"<h3>{APP_NAME} v{APP_VERSION}</h3>"
            f"<p>Summarises the ancestry results table as a pie chart of "
            f"mean population proportions with their standard deviation "
            f"across samples.</p>"
            f"<p>Populations below 1% are hidden; if none reach 1%, the "
            f"threshold drops to 0.1%.</p>",
        )
