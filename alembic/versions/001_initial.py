"""users, videos, favorites, password_reset_tokens

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("username", sa.String(150), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("passwordHash", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updatedAt", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "videos",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("externalId", sa.String(64), nullable=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("url", sa.String(1024), nullable=False),
        sa.Column("thumbnail", sa.String(1024), nullable=True),
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_videos_url", "videos", ["url"], unique=True)

    op.create_table(
        "user_favorite_videos",
        sa.Column("userId", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("videoId", sa.Uuid(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(["userId"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["videoId"], ["videos.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("userId", "videoId"),
    )

    op.create_table(
        "password_reset_tokens",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("tokenHash", sa.String(64), nullable=False),
        sa.Column("userId", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("expiresAt", sa.DateTime(timezone=True), nullable=False),
        sa.Column("createdAt", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["userId"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_password_reset_tokens_tokenHash", "password_reset_tokens", ["tokenHash"], unique=True)
    op.create_index("ix_password_reset_tokens_userId", "password_reset_tokens", ["userId"])


def downgrade() -> None:
    op.drop_index("ix_password_reset_tokens_userId", table_name="password_reset_tokens")
    op.drop_index("ix_password_reset_tokens_tokenHash", table_name="password_reset_tokens")
    op.drop_table("password_reset_tokens")
    op.drop_table("user_favorite_videos")
    op.drop_index("ix_videos_url", table_name="videos")
    op.drop_table("videos")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
