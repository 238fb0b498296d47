"""Diagnostic tracer: one structured log record per request lifecycle stage.

Records go to the ``dynamo_readonly.trace`` logger. The MCP transport owns
stdout, so :func:`configure_logging` always points the root handler at
stderr.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

logger = logging.getLogger("dynamo_readonly.trace")

REQUEST_BUILT = "request.built"
RESPONSE_RECEIVED = "response.received"
PAGE_DRAINED = "page.drained"
ERROR_RAISED = "error.raised"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr, force=True)
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(max(logging.getLevelName(level), logging.INFO))


def trace(stage: str, operation: str, **fields: Any) -> None:
    """Emit one trace event. Never raises and never alters ``fields``."""
    level = logging.WARNING if stage == ERROR_RAISED else logging.INFO
    try:
        if logger.isEnabledFor(level):
            payload = json.dumps(fields, default=str, sort_keys=True)
            logger.log(level, "%s op=%s %s", stage, operation, payload)
    except Exception:  # noqa: BLE001 - tracing must not affect the traced call
        logger.debug("trace event dropped for op=%s stage=%s", operation, stage)
