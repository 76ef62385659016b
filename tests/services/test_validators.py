from __future__ import annotations

import pytest

from oauth_registry.models.errors import InvalidRedirectUriError, InvalidScopeError
from oauth_registry.services.validators import (
    is_valid_redirect_uri,
    is_valid_scope,
    validate_redirect_uris,
    validate_scopes,
)

# ---- scopes ----


@pytest.mark.parametrize(
    "scope",
    ["openid", "read:messages", "message.write", "!", "a[b]", "~tilde", "#hash"],
)
def test_is_valid_scope_accepts_scope_token_characters(scope: str) -> None:
    assert is_valid_scope(scope) is True


@pytest.mark.parametrize(
    "scope",
    ["read write", 'say"hi"', "back\\slash", "tab\there", "café", "new\nline"],
)
def test_is_valid_scope_rejects_disallowed_characters(scope: str) -> None:
    assert is_valid_scope(scope) is False


def test_is_valid_scope_treats_none_as_valid() -> None:
    assert is_valid_scope(None) is True


def test_is_valid_scope_range_boundaries() -> None:
    assert is_valid_scope("\x21") is True
    assert is_valid_scope("\x22") is False
    assert is_valid_scope("\x23\x5b") is True
    assert is_valid_scope("\x5c") is False
    assert is_valid_scope("\x5d\x7e") is True
    assert is_valid_scope("\x7f") is False
    assert is_valid_scope("\x20") is False


def test_validate_scopes_reports_offending_scope() -> None:
    with pytest.raises(InvalidScopeError) as exc_info:
        validate_scopes(["openid", "bad scope", "profile"])
    assert exc_info.value.scope == "bad scope"
    assert 'scope "bad scope" contains invalid characters' in str(exc_info.value)


def test_validate_scopes_accepts_empty_collection() -> None:
    validate_scopes([])


def test_validate_scopes_stops_at_first_invalid() -> None:
    with pytest.raises(InvalidScopeError) as exc_info:
        validate_scopes(["first bad", "second bad"])
    assert exc_info.value.scope == "first bad"


# ---- redirect URIs ----


@pytest.mark.parametrize(
    "uri",
    [
        "https://client.example/cb",
        "https://client.example:8443/cb?x=1&y=2",
        "http://127.0.0.1:8080/authorized",
        "http://[::1]:8080/cb",
        "com.example.app:/oauth2redirect",
        "https://client.example/a%20b",
        "/relative/callback",
        "file:///tmp/cb",
        "//client.example/cb",
    ],
)
def test_is_valid_redirect_uri_accepts_well_formed_uris(uri: str) -> None:
    assert is_valid_redirect_uri(uri) is True


@pytest.mark.parametrize(
    "uri",
    [
        "https://client.example/cb#fragment",
        "https://client.example/cb#",
        "#only-fragment",
    ],
)
def test_is_valid_redirect_uri_rejects_fragments(uri: str) -> None:
    assert is_valid_redirect_uri(uri) is False


@pytest.mark.parametrize(
    "uri",
    [
        "https://client.example/c b",
        "https://client.example/cb?q=<x>",
        "https://client.example/%zz",
        "https://[::1/cb",
        "https://client.example:port/cb",
        "1http://client.example/cb",
        "https://client.example/a[b]",
        "https://client.example/back\\slash",
        "http:",
        "https:",
        "https:#frag-only",
        "https://",
        "//",
    ],
)
def test_is_valid_redirect_uri_rejects_malformed_uris(uri: str) -> None:
    assert is_valid_redirect_uri(uri) is False


def test_validate_redirect_uris_reports_offending_uri() -> None:
    with pytest.raises(InvalidRedirectUriError) as exc_info:
        validate_redirect_uris(["https://ok.example/cb", "https://bad.example/cb#x"])
    assert exc_info.value.redirect_uri == "https://bad.example/cb#x"
    assert "contains fragment" in str(exc_info.value)


def test_parse_failure_and_fragment_share_error_type() -> None:
    for uri in ("https://client.example/c b", "https://client.example/cb#frag"):
        with pytest.raises(InvalidRedirectUriError):
            validate_redirect_uris([uri])
