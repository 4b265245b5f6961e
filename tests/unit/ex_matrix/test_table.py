"""Tests for decision matrix table parsing."""

import pytest

from ex_common.errors import MissingIdColumnError
from ex_matrix.grammar import ChoiceKind, split_column_header
from ex_matrix.settings import MatrixSettings
from ex_matrix.table import parse_table, required_chart_ids


pytestmark = pytest.mark.unit_matrix


def test_required_chart_ids_keep_row_order(country_matrix_code: str) -> None:
    assert required_chart_ids(country_matrix_code) == [21, 24, 26, 29, 33, 55, 56]


def test_required_chart_ids_are_distinct() -> None:
    assert required_chart_ids("chartId,a\n5,x\n3,y\n5,z") == [5, 3]


def test_groups_follow_header_order(country_matrix_code: str) -> None:
    table = parse_table(country_matrix_code)
    assert table.group_names == ["country", "indicator", "interval", "perCapita"]
    assert table.group("country").options == ("usa", "france", "spain")
    assert table.group("interval").options == ("annual", "monthly")
    assert all(group.kind is ChoiceKind.radio for group in table.groups)


def test_blank_cells_are_not_options(country_matrix_code: str) -> None:
    table = parse_table(country_matrix_code)
    assert "" not in table.group("perCapita").options
    assert table.rows[2].get("perCapita") is None


def test_missing_id_column_is_fatal() -> None:
    with pytest.raises(MissingIdColumnError) as excinfo:
        parse_table("country Radio,indicator Radio\nusa,GDP\nfrance,Life expectancy")
    assert excinfo.value.context["id_column"] == "chartId"


def test_empty_text_gives_empty_table() -> None:
    table = parse_table("")
    assert table.is_empty
    assert table.groups == ()


def test_header_only_table_has_groups_without_options() -> None:
    table = parse_table("chartId,country Radio")
    assert table.is_empty
    assert table.group("country").options == ()


def test_rows_with_invalid_ids_are_skipped(caplog) -> None:
    table = parse_table("chartId,country\n1,usa\nabc,france\n,spain\n4,italy")
    assert table.chart_ids == [1, 4]
    assert [row.index for row in table.rows] == [0, 1]
    assert "Skipping decision matrix row" in caplog.text


def test_kind_defaults_to_checkbox_for_boolean_pairs() -> None:
    table = parse_table("chartId,Per capita,Region\n1,true,north\n2,false,south\n3,,east")
    assert table.group("Per capita").kind is ChoiceKind.checkbox
    assert table.group("Region").kind is ChoiceKind.radio


def test_explicit_kind_wins_over_observed_options() -> None:
    table = parse_table("chartId,Per capita Radio,Metric dropdown\n1,yes,a\n2,no,b")
    assert table.group("Per capita").kind is ChoiceKind.radio
    assert table.group("Metric").kind is ChoiceKind.dropdown


def test_custom_id_column_and_boolean_pairs() -> None:
    settings = MatrixSettings(id_column="grapherId", boolean_pairs=[("Show", "Hide")])
    table = parse_table("grapherId\tLabels\n7\tshow\n8\thide", settings)
    assert table.chart_ids == [7, 8]
    assert table.group("Labels").kind is ChoiceKind.checkbox


def test_duplicate_columns_keep_the_first(caplog) -> None:
    table = parse_table("chartId,country Radio,country Dropdown\n1,usa,france")
    assert table.group_names == ["country"]
    assert table.rows[0].get("country") == "usa"


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Device Radio", ("Device", ChoiceKind.radio)),
        ("Device checkbox", ("Device", ChoiceKind.checkbox)),
        ("Life expectancy", ("Life expectancy", None)),
        ("Radio", ("Radio", None)),
    ],
)
def test_split_column_header(header, expected) -> None:
    assert split_column_header(header) == expected


def test_parsing_is_deterministic(country_matrix_code: str) -> None:
    first = parse_table(country_matrix_code)
    second = parse_table(country_matrix_code)
    assert first == second


def test_table_required_chart_ids_match_text_helper() -> None:
    code = "chartId,a\n5,x\n3,y\n5,z"
    assert parse_table(code).required_chart_ids == required_chart_ids(code) == [5, 3]
    assert parse_table(code).chart_ids == [5, 3, 5]
