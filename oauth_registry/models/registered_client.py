"""Registered client record and its validating builder.

A RegisteredClient describes an OAuth 2.0 client known to the authorization
server (RFC 6749 section 2). Instances are only produced by
RegisteredClientBuilder.build(), which enforces every invariant up front and
applies defaults. The record re-checks the same invariants on construction,
so one made directly or through dataclasses.replace() can't be malformed
either:

    client = (
        RegisteredClient.with_id("reg-1")
        .client_id("web-app")
        .client_secret("s3cret")
        .authorization_grant_type(AuthorizationGrantType.AUTHORIZATION_CODE)
        .redirect_uri("https://client.example/cb")
        .scope("openid")
        .build()
    )

To change a record, derive a new builder from it:

    renamed = RegisteredClient.from_client(client).client_name("Web").build()
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TypeVar

from oauth_registry.models.client_types import (
    AuthorizationGrantType,
    ClientAuthenticationMethod,
)
from oauth_registry.models.errors import MissingRequiredFieldError
from oauth_registry.models.settings import (
    AbstractSettings,
    ClientSettings,
    TokenSettings,
)
from oauth_registry.services.validators import validate_redirect_uris, validate_scopes

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=AbstractSettings)


@dataclass(frozen=True, slots=True)
class RegisteredClient:
    id: str
    client_id: str
    client_id_issued_at: datetime | None
    # Never rendered by repr() so the secret can't leak into logs
    client_secret: str | None = field(repr=False)
    client_secret_expires_at: datetime | None
    client_name: str
    client_authentication_methods: frozenset[ClientAuthenticationMethod]
    authorization_grant_types: frozenset[AuthorizationGrantType]
    redirect_uris: frozenset[str]
    scopes: frozenset[str]
    client_settings: ClientSettings
    token_settings: TokenSettings

    def __post_init__(self) -> None:
        # Also guards the generated __init__ and dataclasses.replace()
        for name in (
            "client_authentication_methods",
            "authorization_grant_types",
            "redirect_uris",
            "scopes",
        ):
            if not isinstance(getattr(self, name), frozenset):
                raise TypeError(f"{name} must be a frozenset")
        if not isinstance(self.client_settings, ClientSettings):
            raise TypeError("client_settings must be a ClientSettings")
        if not isinstance(self.token_settings, TokenSettings):
            raise TypeError("token_settings must be a TokenSettings")

        if not self.id:
            raise ValueError("id cannot be empty")
        for name in (
            "client_id",
            "client_name",
            "authorization_grant_types",
            "client_authentication_methods",
        ):
            if not getattr(self, name):
                raise MissingRequiredFieldError(name)
        if (
            AuthorizationGrantType.AUTHORIZATION_CODE in self.authorization_grant_types
            and not self.redirect_uris
        ):
            raise MissingRequiredFieldError("redirect_uris")
        validate_scopes(self.scopes)
        validate_redirect_uris(self.redirect_uris)

    @property
    def is_public(self) -> bool:
        return self.client_authentication_methods == {ClientAuthenticationMethod.NONE}

    @staticmethod
    def with_id(id: str) -> RegisteredClientBuilder:
        if not id:
            raise ValueError("id cannot be empty")
        return RegisteredClientBuilder(id)

    @staticmethod
    def from_client(registered_client: RegisteredClient) -> RegisteredClientBuilder:
        if registered_client is None:
            raise ValueError("registered_client cannot be None")
        return RegisteredClientBuilder.from_client(registered_client)


def _copy_settings(settings: S) -> S:
    return type(settings).with_settings(settings.settings).build()


class RegisteredClientBuilder:
    """Mutable accumulator for a RegisteredClient.

    Not thread-safe. A failed build() leaves every field untouched, so the
    builder can be corrected and built again.
    """

    def __init__(self, id: str) -> None:
        if not id:
            raise ValueError("id cannot be empty")
        self._id = id
        self._client_id: str | None = None
        self._client_id_issued_at: datetime | None = None
        self._client_secret: str | None = None
        self._client_secret_expires_at: datetime | None = None
        self._client_name: str | None = None
        self._client_authentication_methods: set[ClientAuthenticationMethod] = set()
        self._authorization_grant_types: set[AuthorizationGrantType] = set()
        self._redirect_uris: set[str] = set()
        self._scopes: set[str] = set()
        self._client_settings: ClientSettings | None = None
        self._token_settings: TokenSettings | None = None

    @classmethod
    def from_client(
        cls, registered_client: RegisteredClient
    ) -> RegisteredClientBuilder:
        builder = cls(registered_client.id)
        builder._client_id = registered_client.client_id
        builder._client_id_issued_at = registered_client.client_id_issued_at
        builder._client_secret = registered_client.client_secret
        builder._client_secret_expires_at = registered_client.client_secret_expires_at
        builder._client_name = registered_client.client_name
        builder._client_authentication_methods = set(
            registered_client.client_authentication_methods
        )
        builder._authorization_grant_types = set(
            registered_client.authorization_grant_types
        )
        builder._redirect_uris = set(registered_client.redirect_uris)
        builder._scopes = set(registered_client.scopes)
        builder._client_settings = _copy_settings(registered_client.client_settings)
        builder._token_settings = _copy_settings(registered_client.token_settings)
        return builder

    # --- scalar fields ----------------------------------------------------

    def id(self, id: str) -> RegisteredClientBuilder:
        if not id:
            raise ValueError("id cannot be empty")
        self._id = id
        return self

    def client_id(self, client_id: str) -> RegisteredClientBuilder:
        self._client_id = client_id
        return self

    def client_id_issued_at(
        self, issued_at: datetime | None
    ) -> RegisteredClientBuilder:
        self._client_id_issued_at = issued_at
        return self

    def client_secret(self, client_secret: str | None) -> RegisteredClientBuilder:
        self._client_secret = client_secret
        return self

    def client_secret_expires_at(
        self, expires_at: datetime | None
    ) -> RegisteredClientBuilder:
        self._client_secret_expires_at = expires_at
        return self

    def client_name(self, client_name: str | None) -> RegisteredClientBuilder:
        self._client_name = client_name
        return self

    def client_settings(
        self, client_settings: ClientSettings
    ) -> RegisteredClientBuilder:
        self._client_settings = client_settings
        return self

    def token_settings(self, token_settings: TokenSettings) -> RegisteredClientBuilder:
        self._token_settings = token_settings
        return self

    # --- set-valued fields ------------------------------------------------
    # Singular methods add one entry; plural methods pass the live set to a
    # callback that may add, replace or remove entries in place.

    def client_authentication_method(
        self, method: ClientAuthenticationMethod
    ) -> RegisteredClientBuilder:
        self._client_authentication_methods.add(method)
        return self

    def client_authentication_methods(
        self, consumer: Callable[[set[ClientAuthenticationMethod]], None]
    ) -> RegisteredClientBuilder:
        consumer(self._client_authentication_methods)
        return self

    def authorization_grant_type(
        self, grant_type: AuthorizationGrantType
    ) -> RegisteredClientBuilder:
        self._authorization_grant_types.add(grant_type)
        return self

    def authorization_grant_types(
        self, consumer: Callable[[set[AuthorizationGrantType]], None]
    ) -> RegisteredClientBuilder:
        consumer(self._authorization_grant_types)
        return self

    def redirect_uri(self, redirect_uri: str) -> RegisteredClientBuilder:
        self._redirect_uris.add(redirect_uri)
        return self

    def redirect_uris(
        self, consumer: Callable[[set[str]], None]
    ) -> RegisteredClientBuilder:
        consumer(self._redirect_uris)
        return self

    def scope(self, scope: str) -> RegisteredClientBuilder:
        self._scopes.add(scope)
        return self

    def scopes(self, consumer: Callable[[set[str]], None]) -> RegisteredClientBuilder:
        consumer(self._scopes)
        return self

    # --- build ------------------------------------------------------------

    def build(self) -> RegisteredClient:
        """Validate the accumulated fields and return a frozen RegisteredClient.

        Checks run in a fixed order: client_id, grant types, redirect URIs
        required by the authorization_code grant, then defaulting of the
        client name and authentication methods, then scope and redirect URI
        syntax. The first failure raises a RegisteredClientError subclass.
        """
        if not self._client_id:
            raise self._missing("client_id")
        if not self._authorization_grant_types:
            raise self._missing("authorization_grant_types")
        if (
            AuthorizationGrantType.AUTHORIZATION_CODE in self._authorization_grant_types
            and not self._redirect_uris
        ):
            raise self._missing("redirect_uris")

        client_name = self._client_name or self._id
        authentication_methods = self._client_authentication_methods or {
            ClientAuthenticationMethod.CLIENT_SECRET_BASIC
        }

        validate_scopes(self._scopes)
        validate_redirect_uris(self._redirect_uris)

        client = RegisteredClient(
            id=self._id,
            client_id=self._client_id,
            client_id_issued_at=self._client_id_issued_at,
            client_secret=self._client_secret,
            client_secret_expires_at=self._client_secret_expires_at,
            client_name=client_name,
            client_authentication_methods=frozenset(authentication_methods),
            authorization_grant_types=frozenset(self._authorization_grant_types),
            redirect_uris=frozenset(self._redirect_uris),
            scopes=frozenset(self._scopes),
            client_settings=(
                _copy_settings(self._client_settings)
                if self._client_settings is not None
                else ClientSettings()
            ),
            token_settings=(
                _copy_settings(self._token_settings)
                if self._token_settings is not None
                else TokenSettings()
            ),
        )
        logger.debug(
            "Built registered client id=%s client_id=%s",
            client.id,
            client.client_id,
            extra={"registration_id": client.id, "client_id": client.client_id},
        )
        return client

    def _missing(self, field_name: str) -> MissingRequiredFieldError:
        logger.warning(
            "Rejected registration id=%s: %s cannot be empty",
            self._id,
            field_name,
            extra={
                "registration_id": self._id,
                "client_id": self._client_id,
                "field": field_name,
            },
        )
        return MissingRequiredFieldError(field_name)
