"""create locations table

Revision ID: 001
Revises:
Create Date: 2025-02-03 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create locations table
    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("address", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("open_time", sa.Time(), nullable=False),
        sa.Column("close_time", sa.Time(), nullable=False),
        sa.Column("location_type", sa.String(50), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        # CHECK constraint: capacity must be positive
        sa.CheckConstraint("capacity > 0", name="ck_locations_capacity_positive"),
    )
    op.create_index("ix_locations_id", "locations", ["id"], unique=False)
    op.create_index(
        "ix_locations_location_type", "locations", ["location_type"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_locations_location_type", table_name="locations")
    op.drop_index("ix_locations_id", table_name="locations")
    op.drop_table("locations")
