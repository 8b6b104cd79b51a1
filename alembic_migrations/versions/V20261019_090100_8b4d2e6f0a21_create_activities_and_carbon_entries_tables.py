"""create_activities_and_carbon_entries_tables

Revision ID: 8b4d2e6f0a21
Revises: 3f1a7c2e9b10
Create Date: 2026-10-19 09:01:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "8b4d2e6f0a21"
down_revision = "3f1a7c2e9b10"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "activities",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False, comment="Owner of the activity"),
        sa.Column(
            "category",
            sa.String(length=50),
            nullable=False,
            comment="Activity category (transport, food, energy)",
        ),
        sa.Column(
            "activity_type",
            sa.String(length=100),
            nullable=False,
            comment="Activity type within the category (e.g., car, beef, electricity)",
        ),
        sa.Column("amount", sa.Float(), nullable=False, comment="Quantity in the category unit"),
        sa.Column(
            "unit",
            sa.String(length=20),
            nullable=False,
            comment="Unit of amount (miles, kg, kWh)",
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "occurred_at",
            sa.DateTime(),
            nullable=False,
            comment="When the activity happened",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_activities_user_occurred",
        "activities",
        ["user_id", "occurred_at"],
        unique=False,
    )
    op.create_index(
        "ix_activities_user_category_occurred",
        "activities",
        ["user_id", "category", "occurred_at"],
        unique=False,
    )

    op.create_table(
        "carbon_entries",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False, comment="Owner of the entry"),
        sa.Column(
            "activity_id",
            sa.Uuid(),
            nullable=True,
            comment="Activity the entry was derived from",
        ),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column(
            "emissions",
            sa.Float(),
            nullable=False,
            comment="Emissions in kg CO2e, rounded to 2 decimal places",
        ),
        sa.Column("occurred_at", sa.DateTime(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["activity_id"], ["activities.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("activity_id"),
    )
    op.create_index(
        "ix_carbon_entries_user_occurred",
        "carbon_entries",
        ["user_id", "occurred_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_carbon_entries_user_occurred", table_name="carbon_entries")
    op.drop_table("carbon_entries")
    op.drop_index("ix_activities_user_category_occurred", table_name="activities")
    op.drop_index("ix_activities_user_occurred", table_name="activities")
    op.drop_table("activities")
