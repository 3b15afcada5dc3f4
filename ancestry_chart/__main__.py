"""
Entry point for the Ancestry Chart Viewer.

Usage:
    python -m ancestry_chart [results.html]
    python -m ancestry_chart results.html --export chart.png [--print-log]
"""

import argparse
import importlib.util
import os
import sys
import traceback

# (import name, pip name, needed headless)
_REQUIREMENTS = (
    ("numpy", "numpy", True),
    ("matplotlib", "matplotlib", True),
    ("PySide6", "PySide6", False),
)


def _check_dependencies(gui: bool = True):
    """Exit with an install hint when a required package is missing."""
    missing = [
        pip_name for module, pip_name, headless in _REQUIREMENTS
        if (gui or headless) and importlib.util.find_spec(module) is None
    ]
    if missing:
        print(
            f"Missing required packages: {', '.join(missing)}\n"
            f"Install with: pip install {' '.join(missing)}",
            file=sys.stderr,
        )
        sys.exit(1)


def _exception_hook(exc_type, exc_value, exc_tb):
    """Print uncaught errors and, with a running app, show them too."""
    details = ''.join(traceback.format_exception(exc_type, exc_value, exc_tb))
    print(f"[AncestryChart] uncaught: {details}", file=sys.stderr)

    from PySide6.QtWidgets import QApplication, QMessageBox
    if QApplication.instance() is None:
        return
    QMessageBox.critical(
        None, "Ancestry Chart Error",
        f"{exc_type.__name__}: {exc_value}\n\n"
        f"The chart may be incomplete. Details were printed to the console.",
    )


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="ancestry_chart",
        description="Chart the population summary of an ancestry results page.",
    )
    parser.add_argument("page", nargs="?",
                        help="saved results page (HTML)")
    parser.add_argument("--export", metavar="PNG",
                        help="render headless and save the chart to PNG")
    parser.add_argument("--print-log", action="store_true",
                        help="print the audit log after a headless run")
    return parser.parse_args(argv)


def run_headless(page: str, export_path: str, print_log: bool = False) -> int:
    """Extract, build and export without a window; returns an exit code."""
    from .controller import ChartLifecycleController, HeadlessChartView
    from .data_model import ChartState
    from .pipeline import dataset_from_file
    from .renderer import MatplotlibRenderer, RendererLoader

    controller = ChartLifecycleController(
        MatplotlibRenderer(),
        HeadlessChartView(),
        extract=lambda: dataset_from_file(page, controller.settings),
        loader=RendererLoader(),
    )
    controller.extract_and_build()
    written = None
    if controller.state is ChartState.VISIBLE:
        written = controller.export(export_path)
    if print_log:
        print(controller.audit.export_text())
    if written is None:
        return 1
    print(f"Saved chart to {written}")
    return 0


def _launch_gui(page=None) -> int:
    # The Qt binding and matplotlib backend must be fixed before any widget import
    os.environ.setdefault("QT_API", "pyside6")
    import matplotlib
    matplotlib.use('QtAgg')

    from PySide6.QtGui import QFont, QFontDatabase
    from PySide6.QtWidgets import QApplication

    from .constants import FONT_FAMILIES
    from .gui_main import ChartViewerWindow
    from .theme import get_dark_stylesheet

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    available = set(QFontDatabase.families())
    family = next((f for f in FONT_FAMILIES if f in available), None)
    font = QFont(family) if family else QFont()
    font.setPointSize(10)
    app.setFont(font)
    app.setStyleSheet(get_dark_stylesheet())

    window = ChartViewerWindow()
    window.show()
    if page:
        window.load_page(page)
    return app.exec()


def main(argv=None):
    """Launch the Ancestry Chart Viewer GUI, or run headless with --export."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)

    if args.export:
        if not args.page:
            print("--export requires a results page", file=sys.stderr)
            sys.exit(2)
        _check_dependencies(gui=False)
        sys.exit(run_headless(args.page, args.export, args.print_log))

    _check_dependencies()
    sys.excepthook = _exception_hook
    sys.exit(_launch_gui(args.page))


if __name__ == "__main__":
    main()
