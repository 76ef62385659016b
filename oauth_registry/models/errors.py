from __future__ import annotations


class RegisteredClientError(ValueError):
    """Base class for a registered client that failed validation."""


class MissingRequiredFieldError(RegisteredClientError):
    def __init__(self, field: str) -> None:
        super().__init__(f"{field} cannot be empty")
        self.field = field


class InvalidScopeError(RegisteredClientError):
    def __init__(self, scope: str) -> None:
        super().__init__(f'scope "{scope}" contains invalid characters')
        self.scope = scope


class InvalidRedirectUriError(RegisteredClientError):
    def __init__(self, redirect_uri: str) -> None:
        super().__init__(
            f'redirect_uri "{redirect_uri}" is not a valid redirect URI '
            "or contains fragment"
        )
        self.redirect_uri = redirect_uri


class RegisteredClientAlreadyExistsError(Exception):
    pass
