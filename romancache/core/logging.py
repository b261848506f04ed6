from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping, MutableMapping
from uuid import uuid4


_RUN_ID: ContextVar[str | None] = ContextVar("run_id", default=None)


class JsonFormatter(logging.Formatter):
    """Serialize log records into single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        run_id = _RUN_ID.get()
        if run_id:
            payload["run_id"] = run_id
        structured = getattr(record, "structured_data", None)
        if isinstance(structured, Mapping):
            payload.update(structured)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class StructuredAdapter(logging.LoggerAdapter):
    """Logger adapter that folds bound fields and call-site extras into ``structured_data``."""

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        fields: Dict[str, Any] = dict(self.extra or {})
        extra = kwargs.get("extra")
        if isinstance(extra, dict):
            fields.update({k: v for k, v in extra.items() if k != "structured_data"})
            nested = extra.get("structured_data")
            if isinstance(nested, Mapping):
                fields.update(nested)
        kwargs["extra"] = {"structured_data": fields}
        return msg, kwargs


_STRUCTURED_ATTR = "_romancache_configured"


def configure_logging(*, level: int | str = logging.INFO, environment: str = "dev") -> None:
    """Install the JSON handler on the root logger once (idempotent).

    In ``dev`` and ``test`` an INFO request is promoted to DEBUG; ``prod``
    never goes below INFO.
    """
    root = logging.getLogger()
    if bool(getattr(root, _STRUCTURED_ATTR, False)):
        return

    numeric_level = logging.getLevelName(level) if isinstance(level, str) else level
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    if environment in ("dev", "test"):
        effective_level = logging.DEBUG if numeric_level == logging.INFO else numeric_level
    elif environment == "prod":
        effective_level = max(numeric_level, logging.INFO)
    else:
        effective_level = numeric_level

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(effective_level)
    setattr(root, _STRUCTURED_ATTR, True)


def get_logger(name: str, **defaults: Any) -> StructuredAdapter:
    """Return a structured logger adapter with ``defaults`` bound to every record."""

    return StructuredAdapter(logging.getLogger(name), defaults)


def get_run_id() -> str | None:
    return _RUN_ID.get()


@contextmanager
def run_context(run_id: str | None = None) -> Iterator[str]:
    """Bind a run id to every record emitted inside the block."""

    rid = run_id or uuid4().hex[:12]
    token = _RUN_ID.set(rid)
    try:
        yield rid
    finally:
        _RUN_ID.reset(token)


__all__ = [
    "JsonFormatter",
    "StructuredAdapter",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "run_context",
]
