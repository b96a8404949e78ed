"""Tests for config section models."""

from __future__ import annotations

from datetime import time

import pytest
from pydantic import ValidationError

from tutorpal.config.models import ScheduleConfig, StorageConfig


class TestStorageConfig:
    def test_default_path(self) -> None:
        assert StorageConfig().path == "data/tutorpal.json"


class TestScheduleConfig:
    def test_default_window(self) -> None:
        window = ScheduleConfig().window()
        assert window.lower == time(8, 0)
        assert window.upper == time(22, 0)
        assert window.include_lower and window.include_upper

    def test_parses_time_strings(self) -> None:
        config = ScheduleConfig.model_validate({"earliest": "07:30", "latest": "21:00"})
        assert config.earliest == time(7, 30)

    def test_window_must_be_ordered(self) -> None:
        with pytest.raises(ValidationError, match="must be before"):
            ScheduleConfig(earliest=time(18, 0), latest=time(9, 0))

    def test_exclusive_edges(self) -> None:
        config = ScheduleConfig(include_earliest=False, include_latest=False)
        assert not config.window().contains(time(8, 0))
        assert config.window().contains(time(8, 1))

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            ScheduleConfig().latest = time(23, 0)  # type: ignore[misc]
