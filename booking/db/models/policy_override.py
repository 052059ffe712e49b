from sqlalchemy import Column, ForeignKey, Integer, String, Text, UniqueConstraint

from booking.db.base import Base


class PolicyOverride(Base):
    __tablename__ = "policy_overrides"
    __table_args__ = (
        UniqueConstraint(
            "location_id", "policy_key", name="uq_policy_overrides_location_policy_key"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False, index=True)
    policy_key = Column(String(50), nullable=False)
    # Opaque JSON payload; its shape depends on policy_key.
    settings_json = Column(Text, nullable=False, default="{}")
