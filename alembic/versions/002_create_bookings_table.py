"""create bookings table

Revision ID: 002
Revises: 001
Create Date: 2025-02-03 11:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create bookings table
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("location_id", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"]),
        # CHECK constraint: bookings are non-empty half-open intervals
        sa.CheckConstraint(
            "start_time < end_time", name="ck_bookings_start_before_end"
        ),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"], unique=False)
    op.create_index("ix_bookings_location_id", "bookings", ["location_id"], unique=False)
    op.create_index(
        "ix_bookings_location_id_start_time",
        "bookings",
        ["location_id", "start_time"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_bookings_location_id_start_time", table_name="bookings")
    op.drop_index("ix_bookings_location_id", table_name="bookings")
    op.drop_index("ix_bookings_id", table_name="bookings")
    op.drop_table("bookings")
