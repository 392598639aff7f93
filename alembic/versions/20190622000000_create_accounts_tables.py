"""Create users, sessions and pre_registered_users tables.

Revision ID: 20190622000000
Revises:
Create Date: 2019-06-22

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20190622000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

EPOCH_NOW = sa.text("EXTRACT(EPOCH FROM now())::integer")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="USER"),
        sa.Column("created_at", sa.Integer(), nullable=False, server_default=EPOCH_NOW),
        sa.Column("updated_at", sa.Integer(), nullable=False, server_default=EPOCH_NOW),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("role IN ('USER', 'ADMIN')", name="ck_users_role"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.Integer(), nullable=False, server_default=EPOCH_NOW),
        sa.Column("updated_at", sa.Integer(), nullable=False, server_default=EPOCH_NOW),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index(op.f("ix_sessions_user_id"), "sessions", ["user_id"], unique=False)

    op.create_table(
        "pre_registered_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.Integer(), nullable=False, server_default=EPOCH_NOW),
        sa.Column("updated_at", sa.Integer(), nullable=False, server_default=EPOCH_NOW),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_pre_registered_users_email"),
        "pre_registered_users",
        ["email"],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_pre_registered_users_email"), table_name="pre_registered_users")
    op.drop_table("pre_registered_users")
    op.drop_index(op.f("ix_sessions_user_id"), table_name="sessions")
    op.drop_table("sessions")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
