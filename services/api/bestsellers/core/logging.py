from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger.

    Safe to call more than once (tests build several apps); the handler is
    only added the first time and later calls just adjust the level.
    """
    root = logging.getLogger()
    if not any(getattr(h, "_bestsellers", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._bestsellers = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
