from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional
from urllib.parse import quote

from .exceptions import ValidationError

DEFAULT_API_ROOT = "https://quickbooks.api.intuit.com"
API_VERSION = 3


def _encode(value: str) -> str:
    # Percent-encode everything outside the unreserved set (space -> %20, * -> %2A).
    return quote(value, safe="")


def validate_minor_version(minor_version: object) -> int:
    """Return ``minor_version`` unchanged if it is a non-negative int."""
    if isinstance(minor_version, bool) or not isinstance(minor_version, int):
        raise ValidationError(
            f'Invalid type for "minor_version" : expected "int", got "{type(minor_version).__name__}".'
        )
    if minor_version < 0:
        raise ValidationError(f"minor_version must be non-negative, got {minor_version}.")
    return minor_version


def format_changed_since(changed_since: datetime) -> str:
    """ISO-8601 with seconds precision and a numeric offset; naive values are UTC."""
    if not isinstance(changed_since, datetime):
        raise ValidationError(
            f'Invalid type for "changed_since" : expected "datetime", got "{type(changed_since).__name__}".'
        )
    if changed_since.tzinfo is None:
        changed_since = changed_since.replace(tzinfo=timezone.utc)
    return changed_since.isoformat(timespec="seconds")


@dataclass(frozen=True)
class UrlBuilder:
    """Composes QuickBooks v3 resource URLs for one company (realm)."""

    realm_id: str
    api_root: str = DEFAULT_API_ROOT
    api_version: int = API_VERSION

    def base_url(self) -> str:
        return f"{self.api_root.rstrip('/')}/v{self.api_version}"

    def company_url(self) -> str:
        return f"{self.base_url()}/company/{self.realm_id}/"

    def resource_url(self, slug: str) -> str:
        return self.company_url() + slug.lower()

    def entity_url(self, entity: str, entity_id: object) -> str:
        return f"{self.resource_url(entity)}/{entity_id}"

    def operation_url(self, entity: str, operation: str) -> str:
        return f"{self.resource_url(entity)}?operation={operation}"

    def query_url(self, query: str, minor_version: Optional[int] = None) -> str:
        url = f"{self.resource_url('query')}?query={_encode(query)}"
        if minor_version is not None:
            url += f"&minorversion={validate_minor_version(minor_version)}"
        return url

    def cdc_url(self, entities: Iterable[str], changed_since: datetime) -> str:
        entities_value = _encode(",".join(entities))
        changed_since_value = _encode(format_changed_since(changed_since))
        return f"{self.resource_url('cdc')}?entities={entities_value}&changedSince={changed_since_value}"

    def upload_url(self) -> str:
        return self.resource_url("upload")
