import pytest

from graphanalytics.modules.config import CONFIG_ENV, AnalyticsConfig, ConfigError, default_locations


class TestAnalyticsConfig:
    @pytest.fixture
    def conf_file(self, tmp_path):
        path = tmp_path / "graphanalytics.conf"
        path.write_text(
            "[analytics]\nmax_results = 3\nworkers = 2\n\n[logging]\nlevel = debug\nlog_format = json\n",
            encoding="utf-8",
        )
        return path

    def test_defaults_without_file(self, tmp_path):
        cfg = AnalyticsConfig(locations=[str(tmp_path / "missing.conf")])
        assert cfg.loaded_from is None
        assert cfg.max_results == 10
        assert cfg.workers == 4
        assert cfg.get("logging", "level") == "info"
        assert cfg.getboolean("logging", "color_output") is True

    def test_first_existing_location_wins(self, tmp_path, conf_file):
        cfg = AnalyticsConfig(locations=[str(tmp_path / "missing.conf"), str(conf_file)])
        assert cfg.loaded_from == str(conf_file)
        assert cfg.max_results == 3
        assert cfg.workers == 2
        assert cfg.get("logging", "log_format") == "json"
        # untouched keys keep their defaults
        assert cfg.get("logging", "log_to_console") == "true"

    def test_explicit_path(self, conf_file):
        cfg = AnalyticsConfig(path=str(conf_file))
        assert cfg.loaded_from == str(conf_file)
        assert cfg["analytics"]["max_results"] == "3"
        assert "logging" in cfg

    def test_explicit_path_must_exist(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            AnalyticsConfig(path=str(tmp_path / "missing.conf"))

    def test_invalid_integer(self, tmp_path):
        path = tmp_path / "bad.conf"
        path.write_text("[analytics]\nmax_results = lots\n", encoding="utf-8")
        cfg = AnalyticsConfig(path=str(path))
        with pytest.raises(ConfigError, match="max_results"):
            cfg.max_results

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "bad.conf"
        path.write_text("max_results = 3\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            AnalyticsConfig(path=str(path))

    def test_env_variable_checked_first(self, monkeypatch, conf_file):
        monkeypatch.setenv(CONFIG_ENV, str(conf_file))
        assert default_locations()[0] == str(conf_file)
        assert AnalyticsConfig().loaded_from == str(conf_file)

    def test_unknown_section(self, tmp_path):
        cfg = AnalyticsConfig(locations=[])
        with pytest.raises(KeyError):
            cfg["nope"]
        assert cfg.get("nope", "key", fallback="x") == "x"
