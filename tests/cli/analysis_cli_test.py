import json

from click.testing import CliRunner

from cli import analysis
from tests import test_helpers


def test_run(tmp_path):
    election_path, covid_path, population_path = test_helpers.write_source_files(tmp_path)
    output_path = tmp_path / "COVID.png"
    report_path = tmp_path / "report.json"

    runner = CliRunner()
    result = runner.invoke(
        analysis.run,
        [
            "--election-csv",
            str(election_path),
            "--population-csv",
            str(population_path),
            "--covid-url",
            str(covid_path),
            "--output-path",
            str(output_path),
            "--dpi",
            "20",
            "--no-smooth",
            "--report-path",
            str(report_path),
        ],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "Snapshot date: 2020-03-02" in result.output
    assert "Trump: 1 states, 100 cases" in result.output
    assert "cases ~ trump_vote_share + population (n=2)" in result.output
    assert output_path.exists()
    assert json.loads(report_path.read_text())["election_year"] == 2016


def test_run_strict_joins_fails(tmp_path):
    election_path, covid_path, population_path = test_helpers.write_source_files(tmp_path)

    result = CliRunner().invoke(
        analysis.run,
        [
            "--election-csv",
            str(election_path),
            "--population-csv",
            str(population_path),
            "--covid-url",
            str(covid_path),
            "--output-path",
            str(tmp_path / "COVID.png"),
            "--strict-joins",
        ],
    )

    assert result.exit_code != 0
    assert not (tmp_path / "COVID.png").exists()
