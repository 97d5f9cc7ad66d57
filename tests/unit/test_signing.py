"""Tests for qbodata.signing."""

import base64
import hashlib
import hmac
import re
from urllib.parse import parse_qsl, quote, unquote, urlsplit

from qbodata.signing import RequestSigner


URL = "https://quickbooks.api.intuit.com/v3/company/123/query?query=select%20%2A%20from%20Invoice"


def test_headers_carry_oauth1_authorization(credentials):
    headers = RequestSigner(credentials).headers("GET", URL)

    auth = headers["Authorization"]
    assert auth.startswith("OAuth ")
    assert 'oauth_consumer_key="ck"' in auth
    assert 'oauth_token="at"' in auth
    assert 'oauth_signature_method="HMAC-SHA1"' in auth
    assert "oauth_signature=" in auth
    assert "oauth_nonce=" in auth
    assert "oauth_timestamp=" in auth


def test_headers_never_contain_secrets(credentials):
    auth = RequestSigner(credentials).authorization("POST", URL)

    assert '"cs"' not in auth
    assert '"ats"' not in auth


def test_fixed_json_headers(credentials):
    headers = RequestSigner(credentials).headers("GET", URL)

    assert headers["Accept"] == "application/json"
    assert headers["Content-Type"] == "application/json"
    assert "User-Agent" not in headers


def test_user_agent_override(credentials):
    headers = RequestSigner(credentials, user_agent="acme-sync/2.0").headers("GET", URL)
    assert headers["User-Agent"] == "acme-sync/2.0"


def test_each_request_gets_a_fresh_nonce(credentials):
    signer = RequestSigner(credentials)
    assert signer.authorization("GET", URL) != signer.authorization("GET", URL)


def _oauth_params(auth_header):
    return {k: unquote(v) for k, v in re.findall(r'(\w+)="([^"]*)"', auth_header)}


def _rfc5849_signature(method, url, oauth_params, consumer_secret, token_secret):
    def enc(value):
        return quote(value, safe="~-._")

    parts = urlsplit(url)
    params = parse_qsl(parts.query, keep_blank_values=True)
    params += [(k, v) for k, v in oauth_params.items() if k != "oauth_signature"]
    normalized = "&".join(f"{k}={v}" for k, v in sorted((enc(k), enc(v)) for k, v in params))
    base_uri = f"{parts.scheme}://{parts.netloc}{parts.path}"
    base_string = "&".join([method.upper(), enc(base_uri), enc(normalized)])
    key = f"{enc(consumer_secret)}&{enc(token_secret)}"
    digest = hmac.new(key.encode(), base_string.encode(), hashlib.sha1).digest()
    return base64.b64encode(digest).decode()


def test_signature_matches_hmac_sha1_base_string(credentials):
    params = _oauth_params(RequestSigner(credentials).authorization("GET", URL))

    assert params["oauth_version"] == "1.0"
    assert params["oauth_signature"] == _rfc5849_signature("GET", URL, params, "cs", "ats")


def test_signature_covers_method_and_query(credentials):
    url = "https://quickbooks.api.intuit.com/v3/company/123/invoice?operation=update"
    params = _oauth_params(RequestSigner(credentials).authorization("post", url))

    assert params["oauth_signature"] == _rfc5849_signature("POST", url, params, "cs", "ats")
    assert params["oauth_signature"] != _rfc5849_signature("GET", url, params, "cs", "ats")
