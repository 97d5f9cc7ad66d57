"""
Translate QuickBooks ``Fault`` envelopes into :class:`FaultException`.

A fault body looks like::

    {"Fault": {"Error": [{"Message": "...", "Detail": "...", "code": "6240"}],
               "type": "ValidationFault"}}

The same envelope is used by every endpoint, except that the upload
endpoint nests it one level down, under ``AttachableResponse[0]``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from .exceptions import FaultException

_logger = logging.getLogger(__name__)


def has_fault(body: Any) -> bool:
    """True when ``body`` is a decoded JSON object carrying a ``Fault`` node."""
    return isinstance(body, dict) and body.get("Fault") is not None


def map_fault(body: Dict[str, Any], *, status_code: Optional[int] = None) -> FaultException:
    """Build (but do not raise) the exception describing ``body["Fault"]``."""
    fault = body.get("Fault") if isinstance(body, dict) else None
    if not isinstance(fault, dict):
        _logger.warning("Fault node is not an object: %r", fault)
        fault = {}
    errors = fault.get("Error") or []
    if not isinstance(errors, list):
        errors = [errors]

    message = "Fault response : " + json.dumps(errors, separators=(",", ":"))
    _logger.debug("Mapped fault with %d error(s), type=%s", len(errors), fault.get("type"))

    return FaultException(
        message,
        errors,
        fault_type=fault.get("type"),
        status_code=status_code,
    )
