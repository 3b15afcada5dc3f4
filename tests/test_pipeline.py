"""
End-to-end tests: results page to displayed chart.
"""

import pytest

from ancestry_chart.__main__ import main, run_headless
from ancestry_chart.chart_pie import format_label
from ancestry_chart.config import ChartSettings
from ancestry_chart.errors import NoDisplayableDataError
from ancestry_chart.example_data import generate_example_page, render_results_page
from ancestry_chart.pipeline import dataset_from_file, dataset_from_html


@pytest.fixture
def three_population_page():
    return render_results_page(
        ["Irish", "British", "French"],
        [[41.3, 34.2, 0.0], [43.7, 35.8, 0.0]],
        [42.5, 35.0, 0.0],
    )


class TestDatasetFromHtml:

    def test_irish_british_french(self, three_population_page):
        dataset = dataset_from_html(three_population_page)
        assert dataset.names == ["Irish", "British"]
        assert dataset.means == [42.5, 35.0]
        assert dataset.std_devs == pytest.approx([1.2, 0.8])
        assert [format_label(s) for s in dataset] == [
            "Irish (42.5% ± 1.2)", "British (35.0% ± 0.8)",
        ]

    def test_fallback_tier(self):
        page = render_results_page(["A", "B", "C"], [[0.5, 0.3, 0.05]], [0.5, 0.3, 0.05])
        assert dataset_from_html(page).names == ["A", "B"]

    def test_nothing_displayable(self):
        page = render_results_page(["A", "B"], [[0.05, 0.02]], [0.05, 0.02])
        with pytest.raises(NoDisplayableDataError):
            dataset_from_html(page)

    def test_settings_thresholds(self, three_population_page):
        settings = ChartSettings(primary_threshold=40.0, fallback_threshold=10.0)
        assert dataset_from_html(three_population_page, settings).names == ["Irish"]


class TestExamplePage:

    def test_fourteen_populations_over_one_percent(self):
        dataset = dataset_from_html(generate_example_page())
        assert len(dataset) == 14
        assert dataset.means == sorted(dataset.means, reverse=True)
        assert min(dataset.means) >= 1.0
        assert dataset.names[0] == "Irish"

    def test_reproducible(self):
        assert generate_example_page(seed=7) == generate_example_page(seed=7)

    def test_written_to_disk(self, tmp_path):
        path = tmp_path / "nested" / "results.html"
        generate_example_page(str(path))
        assert len(dataset_from_file(str(path))) == 14


class TestHeadlessCommandLine:

    def test_run_headless_exports(self, tmp_path, capsys):
        page = tmp_path / "results.html"
        generate_example_page(str(page))
        out = tmp_path / "chart.png"
        assert run_headless(str(page), str(out)) == 0
        assert out.is_file()
        assert "Saved chart" in capsys.readouterr().out

    def test_run_headless_bad_page(self, tmp_path, capsys):
        page = tmp_path / "empty.html"
        page.write_text("<html><body>No results yet</body></html>")
        assert run_headless(str(page), str(tmp_path / "chart.png")) == 1
        assert "[AncestryChart] extraction:" in capsys.readouterr().err

    def test_run_headless_missing_page(self, tmp_path):
        assert run_headless(str(tmp_path / "nope.html"), str(tmp_path / "c.png")) == 1

    def test_main_export_requires_page(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["--export", "chart.png"])
        assert info.value.code == 2

    def test_main_export(self, tmp_path):
        page = tmp_path / "results.html"
        generate_example_page(str(page))
        with pytest.raises(SystemExit) as info:
            main([str(page), "--export", str(tmp_path / "c.png"), "--print-log"])
        assert info.value.code == 0
