from sqlalchemy.orm import Session

from booking.db.models.policy_override import PolicyOverride as PolicyOverrideModel
from booking.errors import NotFoundError


def get_policy_override_by_id(
    db: Session, override_id: int
) -> PolicyOverrideModel | None:
    """Get a policy override by ID."""
    return (
        db.query(PolicyOverrideModel)
        .filter(PolicyOverrideModel.id == override_id)
        .first()
    )


def get_policy_overrides_by_location_id(
    db: Session, location_id: int
) -> list[PolicyOverrideModel]:
    """Get all policy overrides for a specific location."""
    return (
        db.query(PolicyOverrideModel)
        .filter(PolicyOverrideModel.location_id == location_id)
        .order_by(PolicyOverrideModel.id)
        .all()
    )


def get_policy_override_by_location_and_key(
    db: Session, location_id: int, policy_key: str
) -> PolicyOverrideModel | None:
    """Get the override of one policy kind for a location. Used to check for duplicates."""
    return (
        db.query(PolicyOverrideModel)
        .filter(
            PolicyOverrideModel.location_id == location_id,
            PolicyOverrideModel.policy_key == policy_key,
        )
        .first()
    )


def create_policy_override(
    db: Session,
    location_id: int,
    policy_key: str,
    settings_json: str,
) -> PolicyOverrideModel:
    """Create a new policy override in the database. Pure data access - no business logic."""
    db_override = PolicyOverrideModel(
        location_id=location_id,
        policy_key=policy_key,
        settings_json=settings_json,
    )
    db.add(db_override)
    db.commit()
    db.refresh(db_override)
    return db_override


def update_policy_override_settings(
    db: Session, override_id: int, settings_json: str
) -> PolicyOverrideModel:
    """Replace the settings payload of a policy override."""
    override = get_policy_override_by_id(db, override_id)
    if not override:
        raise NotFoundError("Policy override not found")

    override.settings_json = settings_json
    db.commit()
    db.refresh(override)
    return override


def delete_policy_override(db: Session, override_id: int) -> None:
    """Delete a policy override from the database. Pure data access - no business logic."""
    override = get_policy_override_by_id(db, override_id)
    if not override:
        raise NotFoundError("Policy override not found")

    db.delete(override)
    db.commit()
