from enum import Enum


class PolicyKey(str, Enum):
    """Stable identifiers of the built-in booking policy kinds.

    Used as the join key between persisted overrides and the policy registry,
    and as the dedup key when merging overrides with type defaults.
    """

    ADVANCE_NOTICE = "advance-notice"
    GAP = "gap"
    MAX_DURATION = "max-duration"
    NO_OVERLAP = "no-overlap"
    OPENING_HOURS = "opening-hours"
