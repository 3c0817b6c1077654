"""
Shared HTTP session for Roads API calls.

Provides a pre-configured ``requests.Session`` with a default timeout and a
project User-Agent. Retries are switched off: a failed call surfaces to the
caller as-is.

Usage::

    from roads_client.services.http import session

    resp = session.get("https://roads.googleapis.com/v1/snapToRoads?...")
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from roads_client import __version__

#: No retries of any kind, including on connect errors and 5xx.
NO_RETRY = Retry(total=0, connect=0, read=0, redirect=None, status=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = f"roads-client/{__version__}"


def create_session(timeout: float = DEFAULT_TIMEOUT) -> requests.Session:
    """
    Build a ``requests.Session`` with retries disabled.

    Args:
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT

    # Inject a default timeout so an abandoned call cannot hang its thread forever.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        # Session.request passes timeout=None explicitly when the caller gave none.
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s


#: Module-level session, shared by clients that don't bring their own.
session: requests.Session = create_session()
