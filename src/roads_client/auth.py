"""
Query authentication for Google Maps web services.

Two schemes are supported:
  - API key: ``key=<api key>`` is added to the query.
  - Client ID + signing secret (Maps for Work): ``client=<id>`` is added and
    the path plus query are signed with HMAC-SHA1, appended as ``signature``.

An optional ``channel`` is added for usage reporting with either scheme.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlencode

QueryParams = Sequence[tuple[str, str]]


class MissingCredentialsError(ValueError):
    """Neither an API key nor a client ID and signing secret is configured."""


@dataclass(frozen=True)
class Credentials:
    """Credentials used to authenticate requests."""

    api_key: str | None = None
    client_id: str | None = None
    signature: str | None = None  # URL-safe base64 signing secret
    channel: str | None = None

    def __repr__(self) -> str:
        return (
            f"Credentials(api_key={'***' if self.api_key else None}, "
            f"client_id={self.client_id!r}, signature={'***' if self.signature else None}, "
            f"channel={self.channel!r})"
        )


def sign_url(path: str, query: str, secret: str) -> str:
    """
    Sign ``path?query`` and return the query with ``&signature=`` appended.

    Raises:
        binascii.Error: If ``secret`` is not valid URL-safe base64.
    """
    key = base64.urlsafe_b64decode(secret)
    digest = hmac.new(key, f"{path}?{query}".encode(), hashlib.sha1).digest()
    signature = base64.urlsafe_b64encode(digest).decode()
    return f"{query}&signature={signature}"


def generate_auth_query(
    credentials: Credentials,
    path: str,
    params: QueryParams,
    is_post: bool = False,
) -> str:
    """
    Build the final, authenticated query string for a request.

    Args:
        credentials: Key or client credentials.
        path: URL path being requested (e.g. ``/v1/snapToRoads``); it is part
            of the signed payload.
        params: Ordered query parameters. Repeated names are kept. Not mutated.
        is_post: POST requests cannot carry a URL signature, so client-ID
            credentials are only used for GET.

    Returns:
        URL-encoded query string, without a leading ``?``.

    Raises:
        MissingCredentialsError: If no usable credentials are configured.
    """
    query = list(params)
    if credentials.channel:
        query.append(("channel", credentials.channel))

    if credentials.api_key:
        query.append(("key", credentials.api_key))
        return urlencode(query)

    if credentials.client_id and credentials.signature and not is_post:
        query.append(("client", credentials.client_id))
        return sign_url(path, urlencode(query), credentials.signature)

    msg = "maps: API Key or Maps for Work credentials missing"
    raise MissingCredentialsError(msg)
