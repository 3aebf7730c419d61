"""Initial schema - permission catalog and permission assignments.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("resource", sa.String(100), nullable=False),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("scope", sa.String(20), nullable=False, server_default="global"),
        sa.Column("default_priority", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_permission_resource_action", "permission", ["resource", "action"], unique=True)

    # one table for role, group, user, model and object rows
    op.create_table(
        "permission_assignment",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("level", sa.String(10), nullable=False),
        sa.Column("subject_id", sa.UUID(), nullable=False),
        sa.Column("permission_id", sa.UUID(), sa.ForeignKey("permission.id"), nullable=False),
        sa.Column("is_granted", sa.Boolean(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("model_type", sa.String(100), nullable=True),
        sa.Column("object_type", sa.String(100), nullable=True),
        sa.Column("object_id", sa.UUID(), nullable=True),
        sa.Column("context_key", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.UUID(), nullable=True),
        sa.Column("updated_by", sa.UUID(), nullable=True),
        sa.CheckConstraint(
            "level IN ('role', 'group', 'user', 'model', 'object')",
            name="ck_permission_assignment_level",
        ),
        sa.CheckConstraint(
            "expires_at IS NULL OR level = 'user'",
            name="ck_permission_assignment_expiry_user_only",
        ),
    )
    op.create_index(
        "ix_permission_assignment_tuple",
        "permission_assignment",
        ["level", "subject_id", "permission_id", "context_key"],
        unique=True,
    )
    op.create_index(
        "ix_permission_assignment_permission",
        "permission_assignment",
        ["permission_id"],
    )


def downgrade() -> None:
    op.drop_table("permission_assignment")
    op.drop_table("permission")
