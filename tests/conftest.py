from collections import defaultdict

import pytest
from rich.console import Console
from rich.table import Table

from ex_matrix.grammar import ExplorerBoolean

KNOWN_MARKERS = {"unit_common", "unit_matrix", "unit_ui"}

COUNTRY_MATRIX = f"""chartId,country Radio,indicator Radio,interval Radio,perCapita Radio
21,usa,GDP,annual,{ExplorerBoolean.false.value}
24,usa,GDP,annual,Per million
26,usa,GDP,monthly,
29,usa,Life expectancy,,
33,france,Life expectancy,,
55,spain,GDP,,{ExplorerBoolean.false.value}
56,spain,GDP,,Per million"""

EMISSIONS_MATRIX = """chartId,Gas Radio,Accounting Radio
488,CO₂,Production-based
4331,CO₂,Consumption-based
4147,GHGs,Production-based"""


@pytest.fixture
def country_matrix_code() -> str:
    return COUNTRY_MATRIX


@pytest.fixture
def emissions_matrix_code() -> str:
    return EMISSIONS_MATRIX


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print statistics by marker at the end of the test session."""
    _ = (exitstatus, config)
    marker_stats = defaultdict(lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0})

    for outcome in ["passed", "failed", "skipped"]:
        for report in terminalreporter.stats.get(outcome, []):
            if report.when == "call" or (report.when == "setup" and report.outcome == "skipped"):
                for marker in KNOWN_MARKERS:
                    if marker in report.keywords:
                        stats = marker_stats[marker]
                        stats[outcome] += 1
                        stats["total"] += 1

    if not marker_stats:
        return

    table = Table(title="Test Statistics by Marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")

    for marker in sorted(marker_stats):
        stats = marker_stats[marker]
        table.add_row(
            marker,
            str(stats["total"]),
            str(stats["passed"]),
            str(stats["failed"]),
            str(stats["skipped"]),
        )

    console = Console()
    console.print("\n")
    console.print(table)
