from __future__ import annotations

import logging
from typing import Iterable, Optional

_DEFAULT_FMT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"

# Third-party loggers that drown qbodata's own DEBUG output
_NOISY_LOGGERS = ("urllib3.connection", "urllib3.connectionpool", "authlib")


def configure_logging(
    level: Optional[int],
    *,
    noisy: Iterable[str] = _NOISY_LOGGERS,
) -> None:
    """Configure root logging once; later calls only adjust the level."""
    lvl = level if level is not None else logging.WARNING
    root = logging.getLogger()

    if root.handlers:
        root.setLevel(lvl)
    else:
        logging.basicConfig(level=lvl, format=_DEFAULT_FMT, datefmt=_DEFAULT_DATEFMT)

    # Third-party request logging stays at WARNING or above.
    for name in noisy:
        lib_logger = logging.getLogger(name)
        if lib_logger.level == logging.NOTSET or lib_logger.level < logging.WARNING:
            lib_logger.setLevel(logging.WARNING)
