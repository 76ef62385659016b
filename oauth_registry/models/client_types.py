from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

# Both token types are open-ended: the well-known values below are exposed as
# class attributes, but any non-empty value (e.g. an extension grant URN) can
# be constructed. Equality and hashing are by value only.


@dataclass(frozen=True, slots=True)
class AuthorizationGrantType:
    value: str

    AUTHORIZATION_CODE: ClassVar[AuthorizationGrantType]
    REFRESH_TOKEN: ClassVar[AuthorizationGrantType]
    CLIENT_CREDENTIALS: ClassVar[AuthorizationGrantType]
    PASSWORD: ClassVar[AuthorizationGrantType]
    JWT_BEARER: ClassVar[AuthorizationGrantType]

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("grant type value cannot be empty")

    def __str__(self) -> str:
        return self.value


AuthorizationGrantType.AUTHORIZATION_CODE = AuthorizationGrantType("authorization_code")
AuthorizationGrantType.REFRESH_TOKEN = AuthorizationGrantType("refresh_token")
AuthorizationGrantType.CLIENT_CREDENTIALS = AuthorizationGrantType("client_credentials")
AuthorizationGrantType.PASSWORD = AuthorizationGrantType("password")
AuthorizationGrantType.JWT_BEARER = AuthorizationGrantType(
    "urn:ietf:params:oauth:grant-type:jwt-bearer"
)


@dataclass(frozen=True, slots=True)
class ClientAuthenticationMethod:
    value: str

    CLIENT_SECRET_BASIC: ClassVar[ClientAuthenticationMethod]
    CLIENT_SECRET_POST: ClassVar[ClientAuthenticationMethod]
    CLIENT_SECRET_JWT: ClassVar[ClientAuthenticationMethod]
    PRIVATE_KEY_JWT: ClassVar[ClientAuthenticationMethod]
    NONE: ClassVar[ClientAuthenticationMethod]

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("authentication method value cannot be empty")

    def __str__(self) -> str:
        return self.value


ClientAuthenticationMethod.CLIENT_SECRET_BASIC = ClientAuthenticationMethod(
    "client_secret_basic"
)
ClientAuthenticationMethod.CLIENT_SECRET_POST = ClientAuthenticationMethod(
    "client_secret_post"
)
ClientAuthenticationMethod.CLIENT_SECRET_JWT = ClientAuthenticationMethod(
    "client_secret_jwt"
)
ClientAuthenticationMethod.PRIVATE_KEY_JWT = ClientAuthenticationMethod(
    "private_key_jwt"
)
ClientAuthenticationMethod.NONE = ClientAuthenticationMethod("none")
