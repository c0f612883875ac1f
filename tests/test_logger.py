import io
import json

import pytest
from rich.console import Console

from graphanalytics.modules import logger as _logger
from graphanalytics.modules.config import AnalyticsConfig
from graphanalytics.modules.presenter import RULE, format_report, log_reports, reports_to_dict
from graphanalytics.modules.reports import analyze_graph


def buffer_console():
    return Console(file=io.StringIO(), color_system=None, width=200, markup=False)


class TestLogger:
    def test_level_filtering(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        log = _logger.Logger(level="warning", log_file=str(log_file), log_to_console=False)
        log.info("hidden")
        log.warning("shown")
        log.error("also shown")

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert "[graphanalytics] [WARNING] shown" in lines[0]
        assert "[ERROR] also shown" in lines[1]

    def test_json_format(self, tmp_path):
        log_file = tmp_path / "run.log"
        log = _logger.Logger(level="debug", log_file=str(log_file), log_format="json", log_to_console=False)
        log.debug("hello")

        record = json.loads(log_file.read_text(encoding="utf-8"))
        assert record["level"] == "DEBUG"
        assert record["message"] == "hello"
        assert record["logger"] == "graphanalytics"

    def test_console_sink(self):
        console = buffer_console()
        log = _logger.Logger(console=console, color_output=False)
        log.info("1: libfoo - 1 direct dependents")
        assert "[INFO] 1: libfoo - 1 direct dependents" in console.file.getvalue()

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            _logger.Logger(level="loud")

    def test_unwritable_file_disables_sink(self, tmp_path, capsys):
        log = _logger.Logger(log_file=str(tmp_path), log_to_console=False)
        log.info("first")
        log.info("second")
        assert log.log_file is None
        assert capsys.readouterr().err.count("file logging disabled") == 1

    def test_from_config_with_overrides(self, tmp_path):
        conf = tmp_path / "g.conf"
        conf.write_text("[logging]\nlevel = error\nlog_format = json\n", encoding="utf-8")
        log = _logger.Logger.from_config(AnalyticsConfig(path=str(conf)), level="debug", log_file=None)
        assert log.min_level == _logger.Logger.LEVELS["debug"]
        assert log.log_format == "json"

    def test_init_once(self):
        first = _logger.init_best_effort(level="debug", log_to_console=False)
        second = _logger.init_best_effort(level="error")
        assert first is second
        assert _logger.get_logger() is first
        _logger.reset()
        assert _logger.get_logger() is not first


class TestPresenter:
    def test_format_report(self, scenario_graph):
        lines = format_report(analyze_graph(scenario_graph)[0])
        assert lines == [
            ("info", ""),
            ("info", RULE),
            ("info", "[DIRECT] Most common unresolved dependencies"),
            ("info", RULE),
            ("info", "1: libfoo - 1 direct dependents"),
            ("debug", "  --> bar-1.0.src.rpm"),
        ]

    def test_details_only_at_debug(self, scenario_graph):
        console = buffer_console()
        log = _logger.Logger(console=console, color_output=False, level="info")
        log_reports(log, analyze_graph(scenario_graph))
        out = console.file.getvalue()
        assert "1: bar-1.0.src.rpm - 1 unmet dependencies" in out
        assert "-->" not in out

    def test_reports_to_dict(self, scenario_graph):
        data = reports_to_dict(analyze_graph(scenario_graph), graph_path="g.dot", max_results=10)
        assert data["graph"] == "g.dot"
        assert len(data["reports"]) == 4
        assert data["reports"][0]["entries"] == [
            {"rank": 1, "key": "libfoo", "count": 1, "values": ["bar-1.0.src.rpm"]}
        ]
        assert data["reports"][3]["description"] == "total unmet dependencies"
