from __future__ import annotations

from typing import Dict, Optional

from authlib.oauth1 import SIGNATURE_HMAC_SHA1, SIGNATURE_TYPE_HEADER, ClientAuth

from .config import Credentials

JSON_CONTENT_TYPE = "application/json"


class RequestSigner:
    """One-legged OAuth1 (HMAC-SHA1) signer for QuickBooks requests.

    Only the method and URL (including its query string) are signed; the
    JSON body is never part of the signature base string.
    """

    def __init__(self, credentials: Credentials, user_agent: Optional[str] = None) -> None:
        self.credentials = credentials
        self.user_agent = user_agent

    def _client_auth(self) -> ClientAuth:
        return ClientAuth(
            self.credentials.consumer_key,
            client_secret=self.credentials.consumer_secret,
            token=self.credentials.access_token,
            token_secret=self.credentials.access_token_secret,
            signature_method=SIGNATURE_HMAC_SHA1,
            signature_type=SIGNATURE_TYPE_HEADER,
        )

    def authorization(self, method: str, url: str) -> str:
        """Return the ``Authorization: OAuth ...`` header value for a request."""
        _, signed, _ = self._client_auth().sign(method.upper(), url, {}, None)
        return signed["Authorization"]

    def headers(self, method: str, url: str) -> Dict[str, str]:
        headers = {
            "Authorization": self.authorization(method, url),
            "Accept": JSON_CONTENT_TYPE,
            "Content-Type": JSON_CONTENT_TYPE,
        }
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        return headers
