from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from oauth_registry.models.client_types import (
    AuthorizationGrantType,
    ClientAuthenticationMethod,
)
from oauth_registry.models.registered_client import (
    RegisteredClient,
    RegisteredClientBuilder,
)
from oauth_registry.models.settings import ClientSettings, TokenSettings

ISSUED_AT = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def full_builder(
    id: str = "registration-1", client_id: str = "client-1"
) -> RegisteredClientBuilder:
    """Builder with every field populated."""
    return (
        RegisteredClient.with_id(id)
        .client_id(client_id)
        .client_id_issued_at(ISSUED_AT)
        .client_secret("secret-value")
        .client_secret_expires_at(ISSUED_AT + timedelta(days=30))
        .client_name("Client One")
        .client_authentication_method(ClientAuthenticationMethod.CLIENT_SECRET_BASIC)
        .client_authentication_method(ClientAuthenticationMethod.CLIENT_SECRET_POST)
        .authorization_grant_type(AuthorizationGrantType.AUTHORIZATION_CODE)
        .authorization_grant_type(AuthorizationGrantType.REFRESH_TOKEN)
        .authorization_grant_type(AuthorizationGrantType.CLIENT_CREDENTIALS)
        .redirect_uri("https://client.example/cb")
        .redirect_uri("https://client.example/authorized")
        .scope("openid")
        .scope("scope1")
        .client_settings(
            ClientSettings.builder().setting("require-proof-key", True).build()
        )
        .token_settings(
            TokenSettings.builder()
            .setting("access-token-time-to-live", 300)
            .setting("audiences", ["api", "admin"])
            .build()
        )
    )


def minimal_builder(client_id: str = "abc") -> RegisteredClientBuilder:
    return (
        RegisteredClient.with_id("registration-min")
        .client_id(client_id)
        .authorization_grant_type(AuthorizationGrantType.CLIENT_CREDENTIALS)
    )


@pytest.fixture
def registered_client() -> RegisteredClient:
    return full_builder().build()
