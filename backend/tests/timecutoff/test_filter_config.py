"""Tests for the filter configuration schema."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from timecutoff.models.enums import CutoffAction, TimeFormat
from timecutoff.schemas.filter_config import TimeCutoffConfig, parse_duration


class TestDefaults:
    def test_defaults(self) -> None:
        config = TimeCutoffConfig()
        assert config.old_cutoff == 86400
        assert config.old_action == CutoffAction.PASS
        assert config.old_log is True
        assert config.new_cutoff == 86400
        assert config.new_action == CutoffAction.PASS
        assert config.new_log is True
        assert config.source_time_key == "source_time"
        assert config.source_time_format == TimeFormat.ISO8601


class TestParseDuration:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, 0.0),
            (120, 120.0),
            (1.5, 1.5),
            ("30", 30.0),
            ("90s", 90.0),
            ("15m", 900.0),
            ("1.5h", 5400.0),
            ("1d", 86400.0),
            (" 2h ", 7200.0),
            (timedelta(minutes=2), 120.0),
        ],
    )
    def test_valid(self, value: object, expected: float) -> None:
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["soon", "1w", "", "h", "1 hour", True, None])
    def test_invalid(self, value: object) -> None:
        with pytest.raises(ValueError, match="Invalid duration"):
            parse_duration(value)


class TestValidation:
    def test_cutoff_strings_are_parsed(self) -> None:
        config = TimeCutoffConfig(old_cutoff="1h", new_cutoff="5m")
        assert config.old_cutoff == 3600
        assert config.new_cutoff == 300

    @pytest.mark.parametrize("field", ["old_cutoff", "new_cutoff"])
    @pytest.mark.parametrize("value", [-1, "-5m"])
    def test_negative_cutoff_rejected(self, field: str, value: object) -> None:
        with pytest.raises(ValidationError):
            TimeCutoffConfig(**{field: value})

    def test_unparseable_cutoff_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Invalid duration"):
            TimeCutoffConfig(old_cutoff="yesterday")

    @pytest.mark.parametrize("field", ["old_action", "new_action"])
    def test_unknown_action_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            TimeCutoffConfig(**{field: "explode"})

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TimeCutoffConfig(source_time_format="rfc2822")

    def test_empty_source_time_key_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TimeCutoffConfig(source_time_key="")

    def test_unknown_option_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TimeCutoffConfig(old_cuttoff=10)

    def test_string_values_accepted(self) -> None:
        config = TimeCutoffConfig(
            old_action="replace_timestamp",
            new_action="drop",
            old_log="false",
            new_log="yes",
            source_time_format="epoch_float",
        )
        assert config.old_action == CutoffAction.REPLACE_TIMESTAMP
        assert config.new_action == CutoffAction.DROP
        assert config.old_log is False
        assert config.new_log is True
        assert config.source_time_format == TimeFormat.EPOCH_FLOAT

    def test_frozen(self) -> None:
        config = TimeCutoffConfig()
        with pytest.raises(ValidationError):
            config.old_action = CutoffAction.DROP  # type: ignore[misc]
