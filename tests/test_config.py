"""Tests for configuration loading."""

from pathlib import Path

from studyflow.config import DATA_DIR, Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.conf")
        assert config == Config()
        assert config.work_minutes == 25
        assert config.break_minutes == 5
        assert config.due_soon_days == 7
        assert config.dashboard_refresh_seconds == 2

    def test_parses_values(self, tmp_path):
        path = tmp_path / "studyflow.conf"
        path.write_text(
            "# timer\n"
            "WORK_MINUTES=50\n"
            "BREAK_MINUTES = 10  # longer break\n"
            'DATA_DIR="~/notes/studyflow" # quoted\n'
            "\n"
            "not a setting\n"
            "DUE_SOON_DAYS=3\n"
        )
        config = load_config(path)
        assert config.work_minutes == 50
        assert config.break_minutes == 10
        assert config.due_soon_days == 3
        assert config.data_dir == "~/notes/studyflow"

    def test_invalid_numbers_keep_defaults(self, tmp_path, caplog):
        path = tmp_path / "studyflow.conf"
        path.write_text("WORK_MINUTES=abc\nBREAK_MINUTES=0\n")
        config = load_config(path)
        assert config.work_minutes == 25
        assert config.break_minutes == 5
        assert "WORK_MINUTES" in caplog.text

    def test_data_path(self):
        assert Config().data_path == DATA_DIR
        assert Config(data_dir="~/sf").data_path == Path.home() / "sf"
