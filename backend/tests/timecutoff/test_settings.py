"""Tests for environment-driven settings."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from timecutoff.config import Settings
from timecutoff.models.enums import CutoffAction, TimeFormat
from timecutoff.schemas.filter_config import TimeCutoffConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.upper().startswith("TIME_CUTOFF_"):
            monkeypatch.delenv(key)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.filter_config().old_cutoff == 86400

    def test_unset_filter_options_defer_to_config_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.old_cutoff is None
        assert settings.new_action is None
        assert settings.filter_config() == TimeCutoffConfig()

    def test_log_level_is_case_insensitive(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TIME_CUTOFF_LOG_LEVEL", " warning ")
        assert Settings(_env_file=None).log_level == "WARNING"

    def test_unknown_log_level_fails_at_load(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TIME_CUTOFF_LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIME_CUTOFF_OLD_CUTOFF", "2h")
        monkeypatch.setenv("TIME_CUTOFF_OLD_ACTION", "drop")
        monkeypatch.setenv("TIME_CUTOFF_NEW_LOG", "false")
        monkeypatch.setenv("TIME_CUTOFF_SOURCE_TIME_FORMAT", "epoch")

        config = Settings(_env_file=None).filter_config()

        assert config.old_cutoff == 7200
        assert config.old_action == CutoffAction.DROP
        assert config.new_log is False
        assert config.source_time_format == TimeFormat.EPOCH

    def test_reads_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("TIME_CUTOFF_NEW_CUTOFF=45\nTIME_CUTOFF_LOG_LEVEL=DEBUG\n")

        settings = Settings(_env_file=env_file)

        assert settings.log_level == "DEBUG"
        assert settings.filter_config().new_cutoff == 45

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIME_CUTOFF_OLD_ACTION", "drop")

        config = Settings(_env_file=None).filter_config(
            old_action="pass", new_cutoff="1m", source_time_key=None
        )

        assert config.old_action == CutoffAction.PASS
        assert config.new_cutoff == 60
        assert config.source_time_key == "source_time"

    def test_invalid_cutoff_fails_when_building_config(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TIME_CUTOFF_OLD_CUTOFF", "-1h")
        settings = Settings(_env_file=None)

        with pytest.raises(ValidationError):
            settings.filter_config()

    def test_invalid_action_fails_at_load(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TIME_CUTOFF_NEW_ACTION", "explode")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
