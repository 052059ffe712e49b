from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from booking.api.deps import get_db
from booking.schemas.policy import (
    PolicyOverride,
    PolicyOverrideCreate,
    PolicyOverrideUpdate,
)
from booking.services.policy_override import (
    create_policy_override,
    delete_policy_override,
    list_policy_overrides,
    update_policy_override,
)

router = APIRouter(
    prefix="/locations/{location_id}/policy-overrides", tags=["policy overrides"]
)


@router.get("", response_model=list[PolicyOverride])
def get_policy_overrides(
    location_id: int,
    db: Session = Depends(get_db),
):
    """
    Get the policy overrides of a location.
    """
    return [
        PolicyOverride.model_validate(o) for o in list_policy_overrides(db, location_id)
    ]


@router.post("", response_model=PolicyOverride, status_code=status.HTTP_201_CREATED)
def create_new_policy_override(
    location_id: int,
    override_data: PolicyOverrideCreate,
    db: Session = Depends(get_db),
):
    """
    Override one default policy of the location. The settings are validated
    against the policy's expected shape before they are stored.
    """
    override = create_policy_override(
        db,
        location_id=location_id,
        policy_key=override_data.policy_key,
        settings=override_data.settings,
    )
    return PolicyOverride.model_validate(override)


@router.put("/{override_id}", response_model=PolicyOverride)
def update_policy_override_by_id(
    location_id: int,
    override_id: int,
    override_data: PolicyOverrideUpdate,
    db: Session = Depends(get_db),
):
    """
    Replace the settings of a policy override.
    """
    override = update_policy_override(
        db,
        location_id=location_id,
        override_id=override_id,
        settings=override_data.settings,
    )
    return PolicyOverride.model_validate(override)


@router.delete("/{override_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_policy_override_by_id(
    location_id: int,
    override_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete a policy override; the location falls back to its type default.
    """
    delete_policy_override(db, location_id=location_id, override_id=override_id)
