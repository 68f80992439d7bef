# =============================================================================
# imagegate/utils/logger.py - Process logger with key=value extras
# =============================================================================
# Usage: logger.info("event_name", extra={"model": "...", "n": 2})
# Extras are appended to the line so event records stay greppable.
# =============================================================================

import logging
import sys

from imagegate.core.config import get_settings

# Attributes every LogRecord has; anything else came in through `extra=`.
_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        if not extras:
            return base
        pairs = " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        return f"{base} | {pairs}"


def resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _build_logger() -> logging.Logger:
    log = logging.getLogger("imagegate")
    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ExtraFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        log.addHandler(handler)
    log.setLevel(resolve_level(get_settings().log_level))
    log.propagate = False
    return log


logger = _build_logger()
