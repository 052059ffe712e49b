import json
from typing import Any

from sqlalchemy.orm import Session

import booking.repositories.location as location_repo
import booking.repositories.policy_override as override_repo
from booking.db.models.policy_override import PolicyOverride as PolicyOverrideModel
from booking.domain.registry import policy_registry, to_policy_key
from booking.errors import (
    ConfigurationError,
    DomainValidationError,
    DuplicateResourceError,
    NotFoundError,
)


def _serialize_settings(policy_key: str, settings: dict[str, Any] | None) -> str:
    """
    Validate a settings payload against the policy's expected shape and serialize it.

    Validation runs through the same registry that materializes overrides at
    booking time, so anything stored here can later be turned into a policy.

    Raises:
        DomainValidationError: If the payload does not fit the policy
    """
    payload = settings or {}
    try:
        policy_registry.parse_settings(policy_key, payload)
    except ConfigurationError as e:
        raise DomainValidationError(str(e)) from e
    return json.dumps(payload)


def _normalize_policy_key(policy_key) -> str:
    try:
        return to_policy_key(policy_key).value
    except ConfigurationError as e:
        raise DomainValidationError(str(e)) from e


def _ensure_location(db: Session, location_id: int) -> None:
    if not location_repo.get_location_by_id(db, location_id):
        raise NotFoundError(f"Location with id {location_id} not found")


def _get_override_of_location(
    db: Session, location_id: int, override_id: int
) -> PolicyOverrideModel:
    override = override_repo.get_policy_override_by_id(db, override_id)
    if not override or override.location_id != location_id:
        raise NotFoundError("Policy override not found")
    return override


def list_policy_overrides(db: Session, location_id: int) -> list[PolicyOverrideModel]:
    _ensure_location(db, location_id)
    return override_repo.get_policy_overrides_by_location_id(db, location_id)


def create_policy_override(
    db: Session,
    location_id: int,
    policy_key: str,
    settings: dict[str, Any] | None = None,
) -> PolicyOverrideModel:
    """
    Create a policy override with business logic validation.

    - Validates location exists
    - Validates settings fit the policy key
    - Validates the location does not already override this policy key

    Raises:
        NotFoundError: If location doesn't exist
        DomainValidationError: If settings don't fit the policy key
        DuplicateResourceError: If the policy key is already overridden
    """
    _ensure_location(db, location_id)
    policy_key = _normalize_policy_key(policy_key)
    settings_json = _serialize_settings(policy_key, settings)

    existing = override_repo.get_policy_override_by_location_and_key(
        db, location_id, policy_key
    )
    if existing:
        raise DuplicateResourceError(
            f"Location {location_id} already overrides policy {policy_key}"
        )

    return override_repo.create_policy_override(
        db,
        location_id=location_id,
        policy_key=policy_key,
        settings_json=settings_json,
    )


def update_policy_override(
    db: Session,
    location_id: int,
    override_id: int,
    settings: dict[str, Any] | None = None,
) -> PolicyOverrideModel:
    """Replace the settings of an existing override (the policy key never changes)."""
    _ensure_location(db, location_id)
    override = _get_override_of_location(db, location_id, override_id)
    settings_json = _serialize_settings(override.policy_key, settings)
    return override_repo.update_policy_override_settings(
        db, override_id=override_id, settings_json=settings_json
    )


def delete_policy_override(db: Session, location_id: int, override_id: int) -> None:
    _ensure_location(db, location_id)
    _get_override_of_location(db, location_id, override_id)
    override_repo.delete_policy_override(db, override_id)
