from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    """Discriminant shared by every error raised from this package."""

    VALIDATION = "validation"
    FAULT = "fault"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    # Only seen on a bare QuickbooksError raised by caller code
    GENERIC = "generic"


class QuickbooksError(Exception):
    """Base class for all qbodata errors. Branch on ``kind`` or on the subclass."""

    kind: ErrorKind = ErrorKind.GENERIC


class ValidationError(QuickbooksError, ValueError):
    """Raised before any request is sent when an argument is unusable."""

    kind = ErrorKind.VALIDATION


class MissingCredentialsError(ValidationError):
    """Raised when the required QuickBooks env vars are not present."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__("Missing required environment variables: " + ", ".join(missing))


class TransportError(QuickbooksError):
    """Non-2xx response without a Fault node, or a network-level failure."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class MalformedResponseError(QuickbooksError):
    """A response lacked a node the operation depends on."""

    kind = ErrorKind.MALFORMED_RESPONSE


@dataclass(frozen=True)
class Error:
    """One line item of a QuickBooks ``Fault.Error`` array."""

    message: str
    detail: str
    code: int
    element: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Error:
        if not isinstance(data, dict):
            # A bare string or number in the Error array becomes the message
            return cls(message="" if data is None else str(data), detail="", code=0)
        return cls(
            message=data.get("Message", ""),
            detail=data.get("Detail", ""),
            code=_coerce_code(data.get("code")),
            element=data.get("element"),
        )


def _coerce_code(value: Any) -> int:
    # The API sends codes as numeric strings ("6240"); anything unparseable is 0.
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class FaultException(QuickbooksError):
    """The API answered with a ``Fault`` envelope (business-level failure)."""

    kind = ErrorKind.FAULT

    def __init__(
        self,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        *,
        fault_type: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.errors: List[Error] = [Error.from_dict(e) for e in (errors or [])]
        self.fault_type = fault_type
        self.status_code = status_code

    @property
    def codes(self) -> List[int]:
        return [e.code for e in self.errors]
