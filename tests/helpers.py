"""Helpers for building stub responses and inspecting sent requests."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import Mock
from urllib.parse import parse_qsl, urlsplit

import requests

TEST_BASE_URL = "https://roads.example.test/"


def make_response(body: Any, status_code: int = 200) -> requests.Response:
    """Build a ``requests.Response`` with a JSON (or raw bytes) body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body if isinstance(body, bytes) else json.dumps(body).encode()
    resp.headers["Content-Type"] = "application/json"
    return resp


def sent_query(send: Mock) -> list[tuple[str, str]]:
    """Decoded query pairs of the single request passed to ``send``."""
    prepared = send.call_args.args[0]
    return parse_qsl(urlsplit(prepared.url).query, keep_blank_values=True)


def sent_path(send: Mock) -> str:
    prepared = send.call_args.args[0]
    return urlsplit(prepared.url).path
