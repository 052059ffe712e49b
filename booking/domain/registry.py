"""Turns persisted ``(policy_key, settings_json)`` pairs into live policies.

The registry is a static table built once at import time. Each entry pairs a
settings model (how to parse the payload) with a policy class (how to build
the policy from parsed settings).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from booking.domain.policies import (
    AdvanceNoticePolicy,
    BookingPolicy,
    GapPolicy,
    MaxDurationPolicy,
    NoOverlapPolicy,
    OpeningHoursPolicy,
)
from booking.domain.policy_key import PolicyKey
from booking.errors import ConfigurationError, UnknownPolicyKeyError
from booking.schemas.policy_settings import (
    AdvanceNoticeSettings,
    GapSettings,
    MaxDurationSettings,
    NoOverlapSettings,
    OpeningHoursSettings,
)


@dataclass(frozen=True, slots=True)
class PolicyEntry:
    settings_model: type[BaseModel]
    policy_class: type[BookingPolicy]


def _load_payload(payload: Any) -> dict:
    """Normalize a settings payload (JSON text, bytes, mapping or empty) to a dict."""
    if payload is None:
        return {}
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Policy settings are not valid UTF-8: {e}") from e
    if isinstance(payload, str):
        if not payload.strip():
            return {}
        try:
            payload = json.loads(payload)
        except ValueError as e:
            raise ConfigurationError(f"Policy settings are not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Policy settings must be a JSON object, got {type(payload).__name__}"
        )
    return payload


def to_policy_key(value: PolicyKey | str) -> PolicyKey:
    try:
        return PolicyKey(value)
    except ValueError as e:
        raise UnknownPolicyKeyError(f"Unknown policy key: {value!r}") from e


class PolicyRegistry:
    def __init__(self, entries: dict[PolicyKey, PolicyEntry]):
        self._entries = dict(entries)

    @property
    def keys(self) -> list[PolicyKey]:
        return list(self._entries)

    def _entry(self, key: PolicyKey | str) -> PolicyEntry:
        policy_key = to_policy_key(key)
        entry = self._entries.get(policy_key)
        if entry is None:
            raise UnknownPolicyKeyError(
                f"No policy registered for key {policy_key.value!r}"
            )
        return entry

    def parse_settings(self, key: PolicyKey | str, payload: Any) -> BaseModel:
        """Parse a settings payload into the settings model registered for ``key``.

        Raises:
            UnknownPolicyKeyError: If ``key`` is not registered
            ConfigurationError: If the payload does not match the expected shape
        """
        entry = self._entry(key)
        data = _load_payload(payload)
        try:
            return entry.settings_model.model_validate(data)
        except (ValidationError, OverflowError) as e:
            raise ConfigurationError(
                f"Invalid settings for policy {to_policy_key(key).value!r}: {e}"
            ) from e

    def build(self, key: PolicyKey | str, payload: Any) -> BookingPolicy:
        settings = self.parse_settings(key, payload)
        return self._entry(key).policy_class.from_settings(settings)

    def create(self, override) -> BookingPolicy:
        """Materialize a persisted override (anything with ``policy_key`` and ``settings_json``)."""
        return self.build(override.policy_key, override.settings_json)


policy_registry = PolicyRegistry(
    {
        PolicyKey.ADVANCE_NOTICE: PolicyEntry(AdvanceNoticeSettings, AdvanceNoticePolicy),
        PolicyKey.GAP: PolicyEntry(GapSettings, GapPolicy),
        PolicyKey.MAX_DURATION: PolicyEntry(MaxDurationSettings, MaxDurationPolicy),
        PolicyKey.NO_OVERLAP: PolicyEntry(NoOverlapSettings, NoOverlapPolicy),
        PolicyKey.OPENING_HOURS: PolicyEntry(OpeningHoursSettings, OpeningHoursPolicy),
    }
)
