import json
from unittest.mock import Mock

import pytest
import requests

from dockyard.client import DockyardClient, TokenStore


def _make_response(status=200, body=None, content_type="application/json", url="http://gateway.test/api"):
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.headers["content-type"] = content_type
    if body is None:
        response._content = b""
    elif isinstance(body, (bytes, str)):
        response._content = body.encode() if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode()
    return response


@pytest.fixture
def make_response():
    return _make_response


@pytest.fixture
def session():
    session = Mock(spec=requests.Session)
    session.request.return_value = _make_response(body={"success": True, "data": {}})
    return session


@pytest.fixture
def token_store():
    return TokenStore()


@pytest.fixture
def api_client(session, token_store):
    return DockyardClient(
        "http://gateway.test/",
        api_key="key-123",
        token_store=token_store,
        session=session,
    )
