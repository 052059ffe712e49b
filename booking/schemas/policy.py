from datetime import time, timedelta

from pydantic import BaseModel, ConfigDict, Field

from booking.domain.policy_key import PolicyKey


class PolicyOverride(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    policy_key: str
    settings_json: str


class PolicyOverrideCreate(BaseModel):
    policy_key: PolicyKey
    settings: dict = Field(
        default_factory=dict,
        description='Policy parameters, e.g. {"gapTime": "PT12H"} for the gap policy',
    )


class PolicyOverrideUpdate(BaseModel):
    settings: dict = Field(default_factory=dict)


class EffectivePolicy(BaseModel):
    """A policy a booking for the location is evaluated against.

    Durations serialize as ISO 8601 (``"P2D"``), times of day as ``"HH:MM:SS"``.
    """

    key: PolicyKey
    source: str = Field(..., description='"custom" for overrides, "default" for type defaults')
    parameters: dict[str, timedelta | time]
