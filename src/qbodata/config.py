from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .env_loader import load_env_files
from .exceptions import MissingCredentialsError
from .urls import API_VERSION, DEFAULT_API_ROOT

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Credentials:
    """OAuth1 consumer/token pairs plus the company (realm) they act on."""

    consumer_key: str
    consumer_secret: str
    access_token: str
    access_token_secret: str
    realm_id: str

    def __repr__(self) -> str:
        # Never leak secrets into logs or tracebacks.
        return f"Credentials(consumer_key={self.consumer_key!r}, realm_id={self.realm_id!r})"


# ----------------------------------------------------------------------
# Configuration dataclass
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class QBConfig:
    """Configuration for a QuickBooks Online data service."""

    credentials: Credentials

    # Base API host (not the versioned URL); point at the sandbox host for testing
    api_root: str = DEFAULT_API_ROOT
    api_version: int = API_VERSION

    # Handed to requests unchanged; this layer defines no timeout of its own
    timeout: float = DEFAULT_TIMEOUT

    user_agent: Optional[str] = None

    @classmethod
    def from_env(cls) -> QBConfig:
        """Load configuration from environment variables (and .env if present)."""
        load_env_files(quiet=True)

        values = {
            "QBO_CONSUMER_KEY": os.getenv("QBO_CONSUMER_KEY"),
            "QBO_CONSUMER_SECRET": os.getenv("QBO_CONSUMER_SECRET"),
            "QBO_ACCESS_TOKEN": os.getenv("QBO_ACCESS_TOKEN"),
            "QBO_ACCESS_TOKEN_SECRET": os.getenv("QBO_ACCESS_TOKEN_SECRET"),
            "QBO_REALM_ID": os.getenv("QBO_REALM_ID"),
        }
        missing = [k for k, v in values.items() if not v]
        if missing:
            raise MissingCredentialsError(missing)

        return cls(
            credentials=Credentials(
                consumer_key=values["QBO_CONSUMER_KEY"],
                consumer_secret=values["QBO_CONSUMER_SECRET"],
                access_token=values["QBO_ACCESS_TOKEN"],
                access_token_secret=values["QBO_ACCESS_TOKEN_SECRET"],
                realm_id=values["QBO_REALM_ID"],
            ),
            api_root=os.getenv("QBO_API_ROOT", DEFAULT_API_ROOT),
            timeout=float(os.getenv("QBO_TIMEOUT", DEFAULT_TIMEOUT)),
            user_agent=os.getenv("QBO_USER_AGENT") or None,
        )
