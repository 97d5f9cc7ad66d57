from __future__ import annotations

import logging
from typing import Any, Dict, List

from .data import Entity
from .exceptions import MalformedResponseError

_logger = logging.getLogger(__name__)


def flatten_cdc(raw: Dict[str, Any]) -> Dict[str, List[Entity]]:
    """Flatten a change-data-capture response into ``{entity_type: [Entity, ...]}``.

    ``raw`` is shaped like::

        {"CDCResponse": [{"QueryResponse": [{"Customer": [...]}, {"Invoice": [...]}]}]}

    One entity type may show up in several ``QueryResponse`` objects; its
    records are concatenated in traversal order. Keys appear in the order
    they were first seen. A type present with an empty list still gets a
    key; a type that never appears gets none. Scalar paging fields next
    to the record lists are not entity types and are skipped.
    """
    try:
        query_response = raw["CDCResponse"][0]["QueryResponse"]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponseError("Invalid CDC response.") from None
    if not isinstance(query_response, list):
        raise MalformedResponseError("Invalid CDC response.")

    result: Dict[str, List[Entity]] = {}
    for batch in query_response:
        if not isinstance(batch, dict):
            raise MalformedResponseError("Invalid CDC response.")
        for entity_type, records in batch.items():
            # startPosition/maxResults/totalCount ride along as scalars
            if not isinstance(records, list):
                continue
            bucket = result.setdefault(entity_type, [])
            for record in records:
                if not isinstance(record, dict):
                    raise MalformedResponseError(f"Invalid CDC response: non-object {entity_type} record.")
                bucket.append(Entity(record))

    _logger.debug(
        "CDC flattened: %s",
        ", ".join(f"{k}={len(v)}" for k, v in result.items()) or "no changes",
    )
    return result
