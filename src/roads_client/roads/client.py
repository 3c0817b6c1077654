"""Roads API client: base URL, credentials, transport and decoding."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, TypeVar
from urllib.parse import parse_qsl, urlencode

import requests
from pydantic import BaseModel

from roads_client import auth
from roads_client.config import DEFAULT_BASE_URL, Settings, get_settings
from roads_client.roads import snap_to_road, speed_limits
from roads_client.services.http import create_session
from roads_client.services.http import session as default_session

if TYPE_CHECKING:
    from roads_client.cancellation import Context
    from roads_client.schemas import (
        SnapToRoadRequest,
        SnapToRoadResponse,
        SpeedLimitsRequest,
        SpeedLimitsResponse,
    )

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_SECRET_PARAMS = {"key", "signature", "client"}


def _redact(query: str) -> str:
    pairs = parse_qsl(query, keep_blank_values=True)
    return urlencode([(k, "***" if k in _SECRET_PARAMS else v) for k, v in pairs])


_SECRET_IN_TEXT = re.compile(r"(?<=[?&])(" + "|".join(sorted(_SECRET_PARAMS)) + r")=[^&\s'\"]*")


def redact_secrets(text: str) -> str:
    """Mask ``key``, ``signature`` and ``client`` query values anywhere in ``text``.

    Exception messages from requests embed the full signed URL.
    """
    return _SECRET_IN_TEXT.sub(r"\1=***", text)


class Client:
    """
    Client for the Google Roads API.

    Args:
        credentials: API key or client ID credentials.
        base_url: Service root. Override to point at a test server.
        session: ``requests.Session`` used for every call (default: shared
            module session).
    """

    def __init__(
        self,
        credentials: auth.Credentials,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.credentials = credentials
        self.base_url = base_url or DEFAULT_BASE_URL
        self.session = session if session is not None else default_session

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> Client:
        """Build a client from ``ROADS_*`` settings."""
        settings = settings or get_settings()
        credentials = auth.Credentials(
            api_key=settings.api_key.get_secret_value() if settings.api_key else None,
            client_id=settings.client_id,
            signature=(
                settings.client_secret.get_secret_value() if settings.client_secret else None
            ),
            channel=settings.channel,
        )
        return cls(
            credentials,
            base_url=settings.base_url,
            session=create_session(timeout=settings.timeout),
        )

    def __repr__(self) -> str:
        return f"Client(base_url={self.base_url!r}, credentials={self.credentials!r})"

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def snap_to_road(
        self, request: SnapToRoadRequest, ctx: Context | None = None
    ) -> SnapToRoadResponse:
        """Snap a path to the most likely roads travelled. See ``roads.snap_to_road``."""
        return snap_to_road.snap_to_road(self, request, ctx)

    def speed_limits(
        self, request: SpeedLimitsRequest, ctx: Context | None = None
    ) -> SpeedLimitsResponse:
        """Look up posted speed limits. See ``roads.speed_limits``."""
        return speed_limits.speed_limits(self, request, ctx)

    # -------------------------------------------------------------------------
    # Collaborators
    # -------------------------------------------------------------------------

    def url_for(self, path: str) -> str:
        return self.base_url.rstrip("/") + path

    def generate_auth_query(
        self, path: str, params: auth.QueryParams, is_post: bool = False
    ) -> str:
        return auth.generate_auth_query(self.credentials, path, params, is_post)

    def http_do(self, request: requests.Request) -> requests.Response:
        """Send a request. Raises ``requests.HTTPError`` on 4xx/5xx."""
        prepared = self.session.prepare_request(request)
        resp = self.session.send(prepared)
        resp.raise_for_status()
        return resp

    def get(self, path: str, params: auth.QueryParams, model: type[M]) -> M:
        """
        Authenticate, send a GET to ``path`` and decode the JSON body as ``model``.

        Errors from signing, transport and decoding propagate unchanged.
        Signing failures happen before any request is sent.
        """
        query = self.generate_auth_query(path, params, is_post=False)
        url = self.url_for(path)
        logger.debug("GET %s?%s", url, _redact(query))

        resp = self.http_do(requests.Request("GET", f"{url}?{query}"))
        return model.model_validate_json(resp.content)
