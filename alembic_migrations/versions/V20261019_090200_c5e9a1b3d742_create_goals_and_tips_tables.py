"""create_goals_and_tips_tables

Revision ID: c5e9a1b3d742
Revises: 8b4d2e6f0a21
Create Date: 2026-10-19 09:02:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "c5e9a1b3d742"
down_revision = "8b4d2e6f0a21"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "goals",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "target_emissions",
            sa.Float(),
            nullable=False,
            comment="Emission ceiling in kg CO2e",
        ),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            comment="Start of the window progress is measured over",
        ),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_goals_user_created", "goals", ["user_id", "created_at"], unique=False)

    op.create_table(
        "tips",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("category", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("impact", sa.String(length=20), nullable=False, comment="low, medium or high"),
        sa.Column(
            "savings",
            sa.Float(),
            nullable=False,
            comment="Estimated savings in kg CO2e",
        ),
        sa.Column(
            "difficulty",
            sa.String(length=20),
            nullable=False,
            comment="easy, medium or hard",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("category", "title", name="uq_tips_category_title"),
    )
    op.create_index("ix_tips_category_savings", "tips", ["category", "savings"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_tips_category_savings", table_name="tips")
    op.drop_table("tips")
    op.drop_index("ix_goals_user_created", table_name="goals")
    op.drop_table("goals")
