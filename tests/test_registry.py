from datetime import time, timedelta

import pytest

from booking.domain.policies import (
    AdvanceNoticePolicy,
    GapPolicy,
    MaxDurationPolicy,
    NoOverlapPolicy,
    OpeningHoursPolicy,
)
from booking.domain.policy_key import PolicyKey
from booking.domain.registry import PolicyEntry, PolicyRegistry, policy_registry
from booking.errors import ConfigurationError, UnknownPolicyKeyError
from booking.schemas.policy_settings import GapSettings


# ============================================================================
# CREATE FROM OVERRIDES
# ============================================================================


def test_registry_covers_every_policy_key():
    """Test the static table registers every built-in policy kind."""
    assert set(policy_registry.keys) == set(PolicyKey)


def test_create_advance_notice_from_override(make_override):
    """Test an advance-notice override becomes a parameterized policy."""
    policy = policy_registry.create(
        make_override("advance-notice", '{"advanceTime": "P2D"}')
    )
    assert policy == AdvanceNoticePolicy(advance_time=timedelta(days=2))


def test_create_gap_from_override(make_override):
    """Test a gap override becomes a parameterized policy."""
    policy = policy_registry.create(make_override("gap", '{"gapTime": "PT12H"}'))
    assert policy == GapPolicy(gap_time=timedelta(hours=12))


def test_create_max_duration_from_override(make_override):
    """Test a max-duration override accepts seconds as a number."""
    policy = policy_registry.create(make_override("max-duration", '{"maxDuration": 14400}'))
    assert policy == MaxDurationPolicy(max_duration=timedelta(hours=4))


def test_create_opening_hours_from_override(make_override):
    """Test an opening-hours override parses times of day."""
    policy = policy_registry.create(
        make_override("opening-hours", '{"open": "08:00", "close": "20:00:00"}')
    )
    assert policy == OpeningHoursPolicy(open_time=time(8, 0), close_time=time(20, 0))


@pytest.mark.parametrize("payload", ["{}", "", None, "   "])
def test_create_no_overlap_from_empty_settings(make_override, payload):
    """Test no-overlap needs no settings at all."""
    assert policy_registry.create(make_override("no-overlap", payload)) == NoOverlapPolicy()


def test_create_accepts_policy_key_enum_and_mapping_payload(make_override):
    """Test keys may be enum members and payloads already-decoded mappings."""
    override = make_override(PolicyKey.GAP, {"gap_time": "PT1H"})
    assert policy_registry.create(override) == GapPolicy(gap_time=timedelta(hours=1))


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("2.00:00:00", timedelta(days=2)),
        ("12:00:00", timedelta(hours=12)),
        ("1.06:30:00", timedelta(days=1, hours=6, minutes=30)),
        ("P1DT2H", timedelta(days=1, hours=2)),
        (3600, timedelta(hours=1)),
    ],
)
def test_duration_formats(raw, expected):
    """Test durations accept day.clock, clock, ISO 8601 and seconds."""
    settings = policy_registry.parse_settings("gap", {"gapTime": raw})
    assert settings.gap_time == expected


def test_parse_settings_is_idempotent():
    """Test parsing the same payload twice yields equal, independent results."""
    first = policy_registry.parse_settings("gap", '{"gapTime": "PT3H"}')
    second = policy_registry.parse_settings("gap", '{"gapTime": "PT3H"}')
    assert isinstance(first, GapSettings)
    assert first == second


# ============================================================================
# FAILURES
# ============================================================================


def test_unknown_policy_key_fails(make_override):
    """Test a key outside the closed set is reported, not defaulted."""
    with pytest.raises(UnknownPolicyKeyError):
        policy_registry.create(make_override("minimum-spend", "{}"))


def test_known_but_unregistered_key_fails(make_override):
    """Test a registry without an entry for a valid key refuses it."""
    registry = PolicyRegistry({PolicyKey.GAP: PolicyEntry(GapSettings, GapPolicy)})
    with pytest.raises(UnknownPolicyKeyError):
        registry.create(make_override("no-overlap", "{}"))


def test_unknown_policy_key_is_a_configuration_error():
    """Test lookup failures belong to the configuration error family."""
    assert issubclass(UnknownPolicyKeyError, ConfigurationError)


@pytest.mark.parametrize(
    "policy_key,payload",
    [
        ("gap", "{not json"),
        ("gap", "[1, 2]"),
        ("gap", "{}"),  # missing gapTime
        ("gap", '{"gapTime": "soon"}'),
        ("gap", '{"gapTime": "-1.00:00:00"}'),  # negative
        ("gap", '{"gapTime": "PT1H", "extra": 1}'),
        ("advance-notice", '{"gapTime": "PT1H"}'),  # wrong field for the key
        ("opening-hours", '{"open": "25:00", "close": "10:00"}'),
        ("opening-hours", '{"open": "08:00"}'),
        ("no-overlap", '{"strict": true}'),
    ],
)
def test_malformed_settings_raise_configuration_error(make_override, policy_key, payload):
    """Test malformed payloads fail loudly instead of falling back to defaults."""
    with pytest.raises(ConfigurationError):
        policy_registry.create(make_override(policy_key, payload))


@pytest.mark.parametrize(
    "raw",
    ["9999999999.00:00:00", "-999999999.23:59:59.999999", "P99999999999D", 1e20],
)
def test_out_of_range_duration_is_a_configuration_error(raw):
    """Test durations too large for timedelta fail like any other bad setting."""
    with pytest.raises(ConfigurationError):
        policy_registry.build("gap", {"gapTime": raw})


def test_invalid_utf8_payload_is_a_configuration_error(make_override):
    """Test undecodable bytes are reported as bad configuration."""
    with pytest.raises(ConfigurationError):
        policy_registry.create(make_override("gap", b'{"gapTime": "\xff"}'))
