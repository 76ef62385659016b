"""Serializable snapshot of a RegisteredClient.

The snapshot is a plain pydantic model, so it can be dumped to JSON and read
back by whatever registry stores clients. Set-valued fields are emitted as
sorted lists, which makes the JSON of two equal clients byte-identical.
Rebuilding goes through RegisteredClientBuilder, so a tampered snapshot is
rejected with the same errors as any other bad input.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from oauth_registry.models.client_types import (
    AuthorizationGrantType,
    ClientAuthenticationMethod,
)
from oauth_registry.models.registered_client import RegisteredClient
from oauth_registry.models.settings import ClientSettings, TokenSettings


class RegisteredClientSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    client_id: str
    client_id_issued_at: datetime | None = None
    client_secret: str | None = Field(default=None, repr=False)
    client_secret_expires_at: datetime | None = None
    client_name: str
    token_endpoint_auth_methods: list[str] = Field(default_factory=list)
    grant_types: list[str] = Field(default_factory=list)
    redirect_uris: list[str] = Field(default_factory=list)
    scopes: list[str] = Field(default_factory=list)
    client_settings: dict[str, Any] = Field(default_factory=dict)
    token_settings: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_client(cls, client: RegisteredClient) -> RegisteredClientSnapshot:
        return cls(
            id=client.id,
            client_id=client.client_id,
            client_id_issued_at=client.client_id_issued_at,
            client_secret=client.client_secret,
            client_secret_expires_at=client.client_secret_expires_at,
            client_name=client.client_name,
            token_endpoint_auth_methods=sorted(
                m.value for m in client.client_authentication_methods
            ),
            grant_types=sorted(g.value for g in client.authorization_grant_types),
            redirect_uris=sorted(client.redirect_uris),
            scopes=sorted(client.scopes),
            client_settings=client.client_settings.to_dict(),
            token_settings=client.token_settings.to_dict(),
        )

    def to_client(self) -> RegisteredClient:
        return (
            RegisteredClient.with_id(self.id)
            .client_id(self.client_id)
            .client_id_issued_at(self.client_id_issued_at)
            .client_secret(self.client_secret)
            .client_secret_expires_at(self.client_secret_expires_at)
            .client_name(self.client_name)
            .client_authentication_methods(
                lambda methods: methods.update(
                    ClientAuthenticationMethod(m)
                    for m in self.token_endpoint_auth_methods
                )
            )
            .authorization_grant_types(
                lambda grants: grants.update(
                    AuthorizationGrantType(g) for g in self.grant_types
                )
            )
            .redirect_uris(lambda uris: uris.update(self.redirect_uris))
            .scopes(lambda scopes: scopes.update(self.scopes))
            .client_settings(ClientSettings(self.client_settings))
            .token_settings(TokenSettings(self.token_settings))
            .build()
        )

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str | bytes) -> RegisteredClientSnapshot:
        return cls.model_validate_json(data)
