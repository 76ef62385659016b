from __future__ import annotations

import logging
import re
import string
from collections.abc import Iterable
from urllib.parse import urlsplit

from oauth_registry.models.errors import InvalidRedirectUriError, InvalidScopeError

logger = logging.getLogger(__name__)

# scope-token = 1*( %x21 / %x23-5B / %x5D-7E )   (RFC 6749 section 3.3)
_SCOPE_CHAR_RANGES = ((0x21, 0x21), (0x23, 0x5B), (0x5D, 0x7E))

# RFC 3986 unreserved + reserved characters, plus "%" for escapes
_URI_CHARS = frozenset(
    string.ascii_letters + string.digits + "-._~:/?#[]@!$&'()*+,;=%"
)
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME = re.compile(r"[A-Za-z][A-Za-z0-9+.-]*")


def is_valid_scope(scope: str | None) -> bool:
    if scope is None:
        return True
    return all(
        any(low <= ord(ch) <= high for low, high in _SCOPE_CHAR_RANGES) for ch in scope
    )


def validate_scopes(scopes: Iterable[str]) -> None:
    """Raise InvalidScopeError for the first scope outside the scope-token grammar."""
    for scope in scopes:
        if not is_valid_scope(scope):
            logger.warning("Rejected scope=%r", scope)
            raise InvalidScopeError(scope)


def _is_uri_char(ch: str) -> bool:
    if ch in _URI_CHARS:
        return True
    # Non-ASCII is tolerated as long as it is visible (IRI-style redirect URIs)
    return ord(ch) > 0x7F and ch.isprintable() and not ch.isspace()


def _is_well_formed_uri(uri: str) -> bool:
    if not all(_is_uri_char(ch) for ch in uri):
        return False
    if _BAD_PERCENT_ESCAPE.search(uri):
        return False

    try:
        parts = urlsplit(uri)
        # .port validates the port component lazily
        parts.port  # noqa: B018
    except ValueError:
        return False

    # "[" / "]" are only legal around an IP literal in the authority
    if any(c in "[]" for c in parts.path + parts.query + parts.fragment):
        return False

    if parts.scheme:
        if not _SCHEME.fullmatch(parts.scheme):
            return False
        rest = uri[len(parts.scheme) + 1 :]
        # "https:" alone has no scheme-specific part
        if not rest.split("#", 1)[0]:
            return False
    else:
        rest = uri
        # A relative reference can't have ":" in its first path segment
        first_segment = parts.path.split("/", 1)[0]
        if not parts.netloc and ":" in first_segment:
            return False
    # "//" must be followed by an authority, a path, a query or a fragment
    return rest != "//"


def is_valid_redirect_uri(redirect_uri: str) -> bool:
    # An empty fragment ("https://x/cb#") still counts as a fragment component
    return _is_well_formed_uri(redirect_uri) and "#" not in redirect_uri


def validate_redirect_uris(redirect_uris: Iterable[str]) -> None:
    """Raise InvalidRedirectUriError for the first malformed or fragment-bearing URI."""
    for redirect_uri in redirect_uris:
        if not is_valid_redirect_uri(redirect_uri):
            logger.warning("Rejected redirect_uri=%r", redirect_uri)
            raise InvalidRedirectUriError(redirect_uri)
