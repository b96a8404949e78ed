"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tutorpal.toml only contains overrides.
"""

from __future__ import annotations

from datetime import time

from pydantic import BaseModel, model_validator

from tutorpal.domain.ranges import Bounds


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    path: str = "data/tutorpal.json"


class ScheduleConfig(BaseModel):
    """[schedule] section — the teaching window lessons must fit inside."""

    model_config = {"frozen": True}

    earliest: time = time(8, 0)
    latest: time = time(22, 0)
    include_earliest: bool = True
    include_latest: bool = True

    @model_validator(mode="after")
    def _window_is_ordered(self) -> ScheduleConfig:
        if self.earliest >= self.latest:
            msg = f"schedule.earliest ({self.earliest}) must be before schedule.latest ({self.latest})"
            raise ValueError(msg)
        return self

    def window(self) -> Bounds[time]:
        return Bounds(
            self.earliest,
            self.latest,
            include_lower=self.include_earliest,
            include_upper=self.include_latest,
        )
