"""PostgreSQL implementation of RegisteredClientRepo."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from oauth_registry.db.tables import RegisteredClientRow
from oauth_registry.models.client_types import (
    AuthorizationGrantType,
    ClientAuthenticationMethod,
)
from oauth_registry.models.errors import RegisteredClientAlreadyExistsError
from oauth_registry.models.registered_client import RegisteredClient
from oauth_registry.models.settings import ClientSettings, TokenSettings


class PgRegisteredClientRepo:
    """Async counterpart of InMemoryRegisteredClientRepo."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, client: RegisteredClient) -> None:
        stmt = select(RegisteredClientRow.id).where(
            RegisteredClientRow.client_id == client.client_id
        )
        owner_id = (await self._session.execute(stmt)).scalar_one_or_none()
        if owner_id is not None and owner_id != client.id:
            raise RegisteredClientAlreadyExistsError(client.client_id)

        await self._session.merge(_client_to_row(client))
        await self._session.flush()

    async def find_by_id(self, id: str) -> RegisteredClient | None:
        if not id:
            raise ValueError("id cannot be empty")
        row = await self._session.get(RegisteredClientRow, id)
        if row is None:
            return None
        return _row_to_client(row)

    async def find_by_client_id(self, client_id: str) -> RegisteredClient | None:
        if not client_id:
            raise ValueError("client_id cannot be empty")
        stmt = select(RegisteredClientRow).where(
            RegisteredClientRow.client_id == client_id
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_client(row)


def _client_to_row(client: RegisteredClient) -> RegisteredClientRow:
    return RegisteredClientRow(
        id=client.id,
        client_id=client.client_id,
        client_id_issued_at=client.client_id_issued_at,
        client_secret=client.client_secret,
        client_secret_expires_at=client.client_secret_expires_at,
        client_name=client.client_name,
        client_authentication_methods=sorted(
            m.value for m in client.client_authentication_methods
        ),
        authorization_grant_types=sorted(
            g.value for g in client.authorization_grant_types
        ),
        redirect_uris=sorted(client.redirect_uris),
        scopes=sorted(client.scopes),
        client_settings=client.client_settings.to_dict(),
        token_settings=client.token_settings.to_dict(),
    )


def _row_to_client(row: RegisteredClientRow) -> RegisteredClient:
    # Rebuild through the builder so rows edited by hand are re-validated
    return (
        RegisteredClient.with_id(row.id)
        .client_id(row.client_id)
        .client_id_issued_at(row.client_id_issued_at)
        .client_secret(row.client_secret)
        .client_secret_expires_at(row.client_secret_expires_at)
        .client_name(row.client_name)
        .client_authentication_methods(
            lambda methods: methods.update(
                ClientAuthenticationMethod(m)
                for m in row.client_authentication_methods or ()
            )
        )
        .authorization_grant_types(
            lambda grants: grants.update(
                AuthorizationGrantType(g) for g in row.authorization_grant_types or ()
            )
        )
        .redirect_uris(lambda uris: uris.update(row.redirect_uris or ()))
        .scopes(lambda scopes: scopes.update(row.scopes or ()))
        .client_settings(ClientSettings(row.client_settings or {}))
        .token_settings(TokenSettings(row.token_settings or {}))
        .build()
    )
