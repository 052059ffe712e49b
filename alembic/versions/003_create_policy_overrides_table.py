"""create policy overrides table

Revision ID: 003
Revises: 002
Create Date: 2025-02-04 09:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create policy_overrides table
    op.create_table(
        "policy_overrides",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("location_id", sa.Integer(), nullable=False),
        sa.Column("policy_key", sa.String(50), nullable=False),
        sa.Column("settings_json", sa.Text(), nullable=False, server_default="{}"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"]),
        # Unique constraint: a location overrides each policy kind at most once
        sa.UniqueConstraint(
            "location_id", "policy_key", name="uq_policy_overrides_location_policy_key"
        ),
        # CHECK constraint: only the built-in policy keys can be overridden
        sa.CheckConstraint(
            "policy_key IN ('advance-notice', 'gap', 'max-duration', 'no-overlap', 'opening-hours')",
            name="ck_policy_overrides_policy_key_known",
        ),
    )
    op.create_index("ix_policy_overrides_id", "policy_overrides", ["id"], unique=False)
    op.create_index(
        "ix_policy_overrides_location_id",
        "policy_overrides",
        ["location_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_policy_overrides_location_id", table_name="policy_overrides")
    op.drop_index("ix_policy_overrides_id", table_name="policy_overrides")
    op.drop_table("policy_overrides")
