"""Settings payloads persisted on policy overrides, one shape per policy key.

Payloads are JSON objects with camelCase keys (``{"gapTime": "PT12H"}``);
snake_case names are accepted too. Unknown keys are rejected so that a typo
in stored configuration fails loudly instead of silently falling back.
"""

import re
from datetime import time, timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator

# "[-][d.]hh:mm:ss[.fffffff]", the TimeSpan form stored by earlier deployments.
_DAYS_CLOCK_DURATION = re.compile(
    r"^(?P<sign>-)?(?:(?P<days>\d+)\.)?(?P<hours>\d{1,2}):(?P<minutes>\d{2}):(?P<seconds>\d{2}(?:\.\d+)?)$"
)


def coerce_duration(v):
    """Translate ``[d.]hh:mm:ss`` strings to timedelta; leave other inputs to pydantic."""
    if isinstance(v, str):
        match = _DAYS_CLOCK_DURATION.match(v.strip())
        if match:
            try:
                value = timedelta(
                    days=int(match["days"] or 0),
                    hours=int(match["hours"]),
                    minutes=int(match["minutes"]),
                    seconds=float(match["seconds"]),
                )
                return -value if match["sign"] else value
            except OverflowError as e:
                raise ValueError(f"duration out of range: {v!r}") from e
    return v


class PolicySettings(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class NoOverlapSettings(PolicySettings):
    pass


class GapSettings(PolicySettings):
    gap_time: timedelta = Field(..., alias="gapTime", ge=timedelta(0))

    @field_validator("gap_time", mode="before")
    @classmethod
    def parse_gap_time(cls, v):
        return coerce_duration(v)


class MaxDurationSettings(PolicySettings):
    max_duration: timedelta = Field(..., alias="maxDuration", ge=timedelta(0))

    @field_validator("max_duration", mode="before")
    @classmethod
    def parse_max_duration(cls, v):
        return coerce_duration(v)


class AdvanceNoticeSettings(PolicySettings):
    advance_time: timedelta = Field(..., alias="advanceTime", ge=timedelta(0))

    @field_validator("advance_time", mode="before")
    @classmethod
    def parse_advance_time(cls, v):
        return coerce_duration(v)


class OpeningHoursSettings(PolicySettings):
    open: time
    close: time
