"""create registered_clients

Revision ID: 3b1f0c7e9a42
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b1f0c7e9a42"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "registered_clients",
        sa.Column("id", sa.String(length=100), primary_key=True),
        sa.Column("client_id", sa.String(length=100), nullable=False, unique=True),
        sa.Column("client_id_issued_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("client_secret", sa.String(length=200), nullable=True),
        sa.Column(
            "client_secret_expires_at", sa.DateTime(timezone=True), nullable=True
        ),
        sa.Column("client_name", sa.String(length=200), nullable=False),
        sa.Column(
            "client_authentication_methods",
            postgresql.ARRAY(sa.String()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "authorization_grant_types",
            postgresql.ARRAY(sa.String()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "redirect_uris",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "scopes",
            postgresql.ARRAY(sa.String()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "client_settings",
            postgresql.JSONB(),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "token_settings",
            postgresql.JSONB(),
            nullable=False,
            server_default="{}",
        ),
    )


def downgrade() -> None:
    op.drop_table("registered_clients")
