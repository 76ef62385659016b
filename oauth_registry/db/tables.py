"""SQLAlchemy table definitions.

These map to the frozen domain models in oauth_registry/models/. Repos
convert between SQLAlchemy rows and domain objects; the rows never leave
the repo layer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import Mapped, mapped_column

from oauth_registry.db.engine import Base


class RegisteredClientRow(Base):
    __tablename__ = "registered_clients"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    client_id: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    client_id_issued_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    client_secret: Mapped[str | None] = mapped_column(String(200), nullable=True)
    client_secret_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    client_authentication_methods: Mapped[list[str]] = mapped_column(
        ARRAY(String), nullable=False, default=[]
    )
    authorization_grant_types: Mapped[list[str]] = mapped_column(
        ARRAY(String), nullable=False, default=[]
    )
    redirect_uris: Mapped[list[str]] = mapped_column(
        ARRAY(Text), nullable=False, default=[]
    )
    scopes: Mapped[list[str]] = mapped_column(ARRAY(String), nullable=False, default=[])
    client_settings: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, default=dict
    )
    token_settings: Mapped[dict[str, Any]] = mapped_column(
        JSONB, nullable=False, default=dict
    )
