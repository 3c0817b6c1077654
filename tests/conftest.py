"""Shared fixtures: a stub transport that never touches the network."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from roads_client import Client, Credentials
from tests.helpers import TEST_BASE_URL, make_response


@pytest.fixture
def stub_session() -> requests.Session:
    """A real session whose ``send`` is a Mock returning an empty JSON object."""
    session = requests.Session()
    session.send = Mock(return_value=make_response({}))  # type: ignore[method-assign]
    return session


@pytest.fixture
def client(stub_session: requests.Session) -> Client:
    return Client(Credentials(api_key="test-key"), base_url=TEST_BASE_URL, session=stub_session)
