# graphanalytics/modules/presenter.py
"""
Output side of the reports: log lines, rich tables and a JSON dump.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text

from graphanalytics.modules.reports import Report

RULE = "=" * 48


def format_title(title: str) -> List[Tuple[str, str]]:
    return [("info", ""), ("info", RULE), ("info", title), ("info", RULE)]


def format_report(report: Report) -> List[Tuple[str, str]]:
    """(level, line) pairs: a title block, one summary line per entry, one debug line per value."""
    lines = format_title(report.title)
    for rank, pair in enumerate(report.entries, start=1):
        lines.append(("info", f"{rank}: {pair.key} - {pair.count} {report.description}"))
        for value in pair.values:
            lines.append(("debug", f"  --> {value}"))
    return lines


def log_report(log, report: Report):
    for level, line in format_report(report):
        getattr(log, level)(line)


def log_reports(log, reports: List[Report]):
    for report in reports:
        log_report(log, report)


def report_table(report: Report) -> Table:
    table = Table(title=Text(report.title), show_lines=False)
    table.add_column("#", justify="right", style="bold")
    table.add_column("Name", style="cyan")
    table.add_column(report.description, justify="right")
    table.add_column("Values", style="dim")
    for rank, pair in enumerate(report.entries, start=1):
        table.add_row(str(rank), Text(pair.key), str(pair.count), Text("\n".join(pair.values)))
    if not report.entries:
        table.caption = "no entries"
    return table


def print_tables(console: Console, reports: List[Report]):
    for report in reports:
        console.print(report_table(report))


def reports_to_dict(reports: List[Report], graph_path: str = "", max_results: int = 0) -> Dict[str, Any]:
    return {
        "graph": graph_path,
        "max_results": max_results,
        "reports": [
            {
                "title": report.title,
                "description": report.description,
                "total": report.total,
                "entries": [
                    {"rank": rank, "key": pair.key, "count": pair.count, "values": list(pair.values)}
                    for rank, pair in enumerate(report.entries, start=1)
                ],
            }
            for report in reports
        ],
    }


def write_json(path: str, reports: List[Report], graph_path: str = "", max_results: int = 0):
    dirp = os.path.dirname(path)
    if dirp:
        os.makedirs(dirp, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(reports_to_dict(reports, graph_path, max_results), fh, indent=2, ensure_ascii=False)
