import json
from unittest.mock import MagicMock

import pytest

from qbodata.api import DataService
from qbodata.config import Credentials, QBConfig

QBO_ENV_VARS = (
    "QBO_CONSUMER_KEY",
    "QBO_CONSUMER_SECRET",
    "QBO_ACCESS_TOKEN",
    "QBO_ACCESS_TOKEN_SECRET",
    "QBO_REALM_ID",
    "QBO_API_ROOT",
    "QBO_TIMEOUT",
    "QBO_USER_AGENT",
)


@pytest.fixture(autouse=True)
def clean_qbo_env(monkeypatch):
    """No test sees credentials from the developer's shell."""
    for name in QBO_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials():
    return Credentials(
        consumer_key="ck",
        consumer_secret="cs",
        access_token="at",
        access_token_secret="ats",
        realm_id="123",
    )


@pytest.fixture
def config(credentials):
    return QBConfig(credentials=credentials)


@pytest.fixture
def service(config):
    return DataService(config)


def make_response(status_code=200, payload=None, text=None, url="https://quickbooks.api.intuit.com"):
    """Build a requests.Response stand-in the way the API tests expect it."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.url = url
    if payload is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
        resp.text = text or ""
    else:
        resp.json.return_value = payload
        resp.text = text if text is not None else json.dumps(payload)
    resp.content = resp.text.encode("utf-8")
    return resp


@pytest.fixture
def response_factory():
    return make_response
