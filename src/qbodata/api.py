from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import requests

from .cdc import flatten_cdc
from .config import Credentials, QBConfig
from .data import Entity, QueryResponse
from .exceptions import MalformedResponseError, TransportError, ValidationError
from .faults import has_fault, map_fault
from .signing import RequestSigner
from .upload import build_upload_body
from .urls import UrlBuilder

_logger = logging.getLogger(__name__)

Body = Union[Dict[str, Any], List[Any], str, bytes, None]


# ----------------------------------------------------------------------
# Main API client
# ----------------------------------------------------------------------
class DataService:
    """QuickBooks Online v3 data service signed with one-legged OAuth1.

    Every operation is a single blocking HTTP round trip. The entity name
    set with :meth:`set_entity` selects the resource for
    create/read/update/delete/query/upload. Not safe for concurrent use
    from several threads.
    """

    def __init__(self, cfg: Optional[QBConfig] = None) -> None:
        self.cfg = cfg or QBConfig.from_env()
        self.session = requests.Session()
        self.urls = UrlBuilder(
            realm_id=self.cfg.credentials.realm_id,
            api_root=self.cfg.api_root,
            api_version=self.cfg.api_version,
        )
        self.entity: str = ""
        self.user_agent: Optional[str] = self.cfg.user_agent

    @property
    def credentials(self) -> Credentials:
        return self.cfg.credentials

    # --------------------------- Setters -----------------------------

    def set_entity(self, entity: str) -> DataService:
        self.entity = entity
        return self

    def set_user_agent(self, user_agent: Optional[str] = None) -> DataService:
        self.user_agent = user_agent
        return self

    # --------------------------- URLs --------------------------------

    def api_url(self) -> str:
        return self.urls.base_url()

    def request_url(self, slug: str) -> str:
        return self.urls.resource_url(slug)

    # --------------------------- Public methods ----------------------

    def create(self, payload: Dict[str, Any]) -> Entity:
        """Create a record of the current entity type."""
        response = self.request("POST", self.urls.resource_url(self._require_entity()), payload)
        return self._entity_from(response)

    def read(self, entity_id: Union[int, str]) -> Entity:
        """Fetch one record of the current entity type by Id."""
        response = self.request("GET", self.urls.entity_url(self._require_entity(), entity_id))
        return self._entity_from(response)

    def update(self, payload: Dict[str, Any]) -> Entity:
        """Update a record; ``payload`` must carry ``Id`` and the current ``SyncToken``."""
        url = self.urls.operation_url(self._require_entity(), "update")
        response = self.request("POST", url, payload)
        return self._entity_from(response)

    def delete(self, payload: Dict[str, Any]) -> None:
        url = self.urls.operation_url(self._require_entity(), "delete")
        self.request("POST", url, payload)
        return None

    def query(self, query: Optional[str] = None, minor_version: Optional[int] = None) -> QueryResponse:
        """Run a query; defaults to ``select * from <entity>``."""
        if query is None:
            query = f"select * from {self._require_entity()}"

        url = self.urls.query_url(query, minor_version)
        response = self.request("GET", url)

        if not isinstance(response, dict) or not isinstance(response.get("QueryResponse"), dict):
            raise MalformedResponseError('The QuickBooks response should contain a "QueryResponse" node')
        return QueryResponse(response["QueryResponse"])

    def cdc(self, entities: Iterable[str], changed_since: datetime) -> Dict[str, List[Entity]]:
        """Return every record of ``entities`` changed since ``changed_since``, keyed by type."""
        entities = list(entities)
        if not entities:
            raise ValidationError("cdc() needs at least one entity name.")

        url = self.urls.cdc_url(entities, changed_since)
        response = self.request("GET", url)
        if not isinstance(response, dict):
            raise MalformedResponseError("Invalid CDC response.")
        return flatten_cdc(response)

    def upload(
        self,
        file_name: str,
        content_type: str,
        content: bytes,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Entity:
        """Upload an attachment; faults arrive inside ``AttachableResponse[0]``."""
        entity = self._require_entity()
        body, multipart_type = build_upload_body(file_name, content_type, content, metadata)

        response = self.request(
            "POST",
            self.urls.upload_url(),
            body,
            {"Content-Type": multipart_type},
            check_fault=False,
        )

        if not isinstance(response, dict) or "AttachableResponse" not in response:
            raise MalformedResponseError('The QuickBooks response should contain an "AttachableResponse" node')

        items = response["AttachableResponse"]
        if not items:
            raise MalformedResponseError("The QuickBooks AttachableResponse is empty")
        item = items[0]

        if has_fault(item):
            raise map_fault(item)

        return self._entity_from(item, entity)

    # --------------------------- Headers -----------------------------

    def headers(self, method: str, url: str) -> Dict[str, str]:
        """Signed Authorization header plus the JSON Accept/Content-Type defaults."""
        return RequestSigner(self.credentials, self.user_agent).headers(method, url)

    # --------------------------- HTTP --------------------------------

    def request(
        self,
        method: str,
        url: str,
        body: Body = None,
        headers: Optional[Mapping[str, str]] = None,
        *,
        check_fault: bool = True,
    ) -> Any:
        """Send one signed request and return the decoded JSON body.

        Dicts and lists are JSON-encoded; str/bytes bodies go out as-is.
        Headers passed by the caller win over the defaults. A top-level
        ``Fault`` node raises :class:`FaultException` whatever the status
        code; ``check_fault=False`` leaves 2xx bodies to the caller.
        """
        merged = self.headers(method, url)
        merged.update(headers or {})

        if isinstance(body, (dict, list)):
            body = json.dumps(body)

        _logger.debug("%s %s", method, url)
        try:
            r = self.session.request(
                method,
                url,
                data=body,
                headers=merged,
                timeout=self.cfg.timeout,
            )
        except requests.RequestException as e:
            _logger.warning("Request error for %s %s: %s", method, url, e)
            raise TransportError(f"Request to {url} failed: {e}", body=str(e)) from e

        if 200 <= r.status_code < 300:
            decoded = self._decode_success(r)
            if check_fault and has_fault(decoded):
                _logger.error("Fault in HTTP %s response for %s", r.status_code, url)
                raise map_fault(decoded, status_code=r.status_code)
            return decoded

        return self._raise_for_error(r)

    # --------------------------- Internal helpers --------------------

    def _require_entity(self) -> str:
        if not self.entity:
            raise ValidationError("No entity set; call set_entity() first.")
        return self.entity

    def _entity_from(self, response: Any, entity: Optional[str] = None) -> Entity:
        name = entity or self.entity
        if not isinstance(response, dict) or not isinstance(response.get(name), dict):
            raise MalformedResponseError(f'The QuickBooks response should contain a "{name}" node')
        return Entity(response[name])

    @staticmethod
    def _decode_success(r: requests.Response) -> Any:
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Expected a JSON body with status code [{r.status_code}], got: {r.text[:200]}"
            ) from e

    @staticmethod
    def _raise_for_error(r: requests.Response) -> Any:
        status_code = r.status_code
        text = r.text
        http_error = requests.HTTPError(f"{status_code} Error for url: {r.url}", response=r)

        try:
            detail = r.json()
        except ValueError:
            detail = None

        _logger.error("HTTP %s error for %s: %s", status_code, r.url, detail if detail is not None else text)

        if has_fault(detail):
            raise map_fault(detail, status_code=status_code) from http_error

        raise TransportError(
            f"Received error [{text}] with status code [{status_code}] when sending request.",
            status_code=status_code,
            body=text,
        ) from http_error
