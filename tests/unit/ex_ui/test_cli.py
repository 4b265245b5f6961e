"""CLI behavior tests using Typer's CliRunner."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

import ex_ui.cli as cli
from ex_ui.tui.components.headless import HeadlessUI

pytestmark = pytest.mark.unit_ui

runner = CliRunner()

PROGRAM = "\n".join(
    [
        "title\tCO₂ Data Explorer",
        "defaultView\t?Gas=GHGs",
        "switcher",
        "\tchartId\tGas Radio\tAccounting Radio",
        "\t488\tCO₂\tProduction-based",
        "\t4331\tCO₂\tConsumption-based",
        "\t4147\tGHGs\tProduction-based",
    ]
)


@pytest.fixture
def ui(monkeypatch) -> HeadlessUI:
    headless = HeadlessUI()
    monkeypatch.setattr(cli.ctx_store, "ui", headless)
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)
    monkeypatch.delenv("EX_CONFIG_PATH", raising=False)
    monkeypatch.delenv("EX_BOOLEAN_PAIRS", raising=False)
    return headless


@pytest.fixture
def matrix_file(tmp_path, emissions_matrix_code):
    path = tmp_path / "emissions.csv"
    path.write_text(emissions_matrix_code, encoding="utf-8")
    return path


@pytest.fixture
def program_file(tmp_path):
    path = tmp_path / "co2.tsv"
    path.write_text(PROGRAM, encoding="utf-8")
    return path


def test_matrix_show_applies_choices_in_order(ui, matrix_file) -> None:
    result = runner.invoke(
        cli.app,
        [
            "matrix",
            "show",
            str(matrix_file),
            "--set",
            "Accounting=Consumption-based",
            "--set",
            "Gas=GHGs",
        ],
    )
    assert result.exit_code == 0, result.output
    table = ui.recorded_tables[-1]
    assert table.title == "emissions.csv (chart 4147)"
    assert [row[0] for row in table.rows] == ["Gas", "Accounting"]
    assert table.rows[1][2] == "Production-based"
    assert ui.messages("success") == [
        "Selected chart 4147 ?Gas=GHGs&Accounting=Production-based"
    ]


def test_matrix_show_reports_rejected_values(ui, matrix_file) -> None:
    result = runner.invoke(cli.app, ["matrix", "show", str(matrix_file), "-s", "Gas=Neon"])
    assert result.exit_code == 0, result.output
    assert ui.messages("warning") == ["Ignored: 'Neon' is not an option of 'Gas'"]
    assert ui.messages("success")[0].startswith("Selected chart 488")


def test_matrix_show_rejects_malformed_assignment(ui, matrix_file) -> None:
    result = runner.invoke(cli.app, ["matrix", "show", str(matrix_file), "--set", "Gas"])
    assert result.exit_code != 0


def test_matrix_show_missing_id_column(ui, tmp_path) -> None:
    path = tmp_path / "broken.csv"
    path.write_text("country Radio\nusa\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["matrix", "show", str(path)])
    assert result.exit_code == 1
    assert "chartId" in ui.messages("error")[0]


def test_matrix_show_reports_json_errors_with_json_logs(ui, tmp_path) -> None:
    path = tmp_path / "broken.csv"
    path.write_text("country Radio\nusa\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["--json-logs", "matrix", "show", str(path)])
    assert result.exit_code == 1
    payload = json.loads(ui.messages("error")[0])
    assert payload["error_type"] == "MissingIdColumnError"
    assert payload["error_context"]["header"] == ["country Radio"]


def test_matrix_show_reads_files_with_bom(ui, tmp_path, emissions_matrix_code) -> None:
    path = tmp_path / "export.csv"
    path.write_text(emissions_matrix_code, encoding="utf-8-sig")
    result = runner.invoke(cli.app, ["matrix", "ids", str(path)])
    assert result.exit_code == 0, result.output
    assert ui.recorded_tables[-1].rows == [["488"], ["4331"], ["4147"]]


def test_matrix_show_unreadable_file(ui, tmp_path) -> None:
    result = runner.invoke(cli.app, ["matrix", "show", str(tmp_path / "absent.csv")])
    assert result.exit_code == 1
    assert ui.messages("error")[0].startswith("Cannot read")


def test_matrix_show_empty_file(ui, tmp_path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    result = runner.invoke(cli.app, ["matrix", "show", str(path)])
    assert result.exit_code == 0
    assert ui.messages("warning") == [
        "The matrix has no choice groups.",
        "The matrix has no rows.",
    ]


def test_matrix_show_program_uses_default_view(ui, program_file) -> None:
    result = runner.invoke(cli.app, ["matrix", "show", "--program", str(program_file)])
    assert result.exit_code == 0, result.output
    assert ui.messages("success")[0].startswith("Selected chart 4147")


def test_matrix_ids(ui, tmp_path, country_matrix_code) -> None:
    path = tmp_path / "countries.csv"
    path.write_text(country_matrix_code, encoding="utf-8")
    result = runner.invoke(cli.app, ["matrix", "ids", str(path)])
    assert result.exit_code == 0, result.output
    assert ui.recorded_tables[-1].rows == [["21"], ["24"], ["26"], ["29"], ["33"], ["55"], ["56"]]


def test_matrix_urls(ui, matrix_file) -> None:
    result = runner.invoke(cli.app, ["matrix", "urls", str(matrix_file)])
    assert result.exit_code == 0, result.output
    rows = ui.recorded_tables[-1].rows
    assert [row[0] for row in rows] == ["488", "4331", "4147"]
    assert rows[2][1] == "?Gas=GHGs&Accounting=Production-based"


def test_config_changes_id_column(ui, tmp_path) -> None:
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"id_column": "grapherId"}), encoding="utf-8")
    path = tmp_path / "matrix.tsv"
    path.write_text("grapherId\tcountry Radio\n9\tusa\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["--config", str(config), "matrix", "ids", str(path)])
    assert result.exit_code == 0, result.output
    assert ui.recorded_tables[-1].rows == [["9"]]


def test_invalid_config_exits(ui, tmp_path, matrix_file) -> None:
    config = tmp_path / "settings.json"
    config.write_text("{", encoding="utf-8")
    result = runner.invoke(cli.app, ["-c", str(config), "matrix", "ids", str(matrix_file)])
    assert result.exit_code == 1
    assert "not valid JSON" in ui.messages("error")[0]


def test_program_check_ok(ui, program_file) -> None:
    result = runner.invoke(cli.app, ["program", "check", str(program_file)])
    assert result.exit_code == 0, result.output
    assert ui.messages("success") == ["co2.tsv: no problems found"]


def test_program_check_reports_invalid_cells(ui, tmp_path) -> None:
    path = tmp_path / "typo.tsv"
    path.write_text("titel\tExplorer\nisPublished\tmaybe\n", encoding="utf-8")
    result = runner.invoke(cli.app, ["program", "check", str(path)])
    assert result.exit_code == 1
    table = ui.recorded_tables[-1]
    assert [row[:3] for row in table.rows] == [["1", "1", "titel"], ["2", "2", "maybe"]]
    assert table.rows[0][4].startswith("title")
    assert ui.messages("error") == ["2 invalid cell(s)"]


def test_program_info(ui, program_file) -> None:
    result = runner.invoke(cli.app, ["program", "info", str(program_file)])
    assert result.exit_code == 0, result.output
    fields = dict(ui.recorded_tables[-1].rows)
    assert fields["Title"] == "CO₂ Data Explorer"
    assert fields["Charts"] == "488, 4331, 4147"
    assert fields["Published"] == "no"
    assert fields["Google Sheet"] == "-"


def test_no_command_prints_help(ui) -> None:
    result = runner.invoke(cli.app, [])
    assert "matrix" in result.output
