"""
===============================================================================
MÓDULO: Logger estructurado (JSON) de la API de RRHH
===============================================================================

Responsabilidades:
  - Emitir una línea JSON por evento (parseable por el colector de logs).
  - Adjuntar la correlación del request (request_id / method / path).
  - Enmascarar credenciales (password, hashes, tokens, Authorization) que
    lleguen por `extra`, y recortar valores enormes.

Colaboradores:
  - hr_admin/context.py (correlación)
  - LOG_LEVEL / LOG_JSON (mismas variables que crosscutting/config.py)

Notas:
  - Se lee el entorno y no Settings: el logger existe antes de que la
    configuración se valide en el lifespan.
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict

LOGGER_NAME = "hr-admin-api"
MASK = "[REDACTED]"

# Atributos estándar de LogRecord: todo lo demás vino por `extra`.
_STANDARD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "message",
    "asctime",
    "taskName",
}


class _Redactor:
    """Enmascara claves sensibles y acota tamaño/profundidad."""

    SENSITIVE_FRAGMENTS = ("password", "secret", "token", "authorization", "credential")

    def __init__(self, max_str: int = 4_000, max_depth: int = 4):
        self._max_str = max_str
        self._max_depth = max_depth

    def is_sensitive(self, key: str | None) -> bool:
        if not key:
            return False
        lowered = key.lower()
        return any(fragment in lowered for fragment in self.SENSITIVE_FRAGMENTS)

    def sanitize(self, value: Any, *, key: str | None = None, depth: int = 0) -> Any:
        if self.is_sensitive(key):
            return MASK
        if depth > self._max_depth:
            return "[TRUNCATED]"
        if isinstance(value, str):
            return value if len(value) <= self._max_str else value[: self._max_str] + "..."
        if isinstance(value, dict):
            return {
                str(k): self.sanitize(v, key=str(k), depth=depth + 1)
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple, set, frozenset)):
            return [self.sanitize(v, key=key, depth=depth + 1) for v in value]
        if value is None or isinstance(value, (bool, int, float)):
            return value
        # UUID, Decimal, date, Enum...
        return str(value)


class JSONFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__()
        self._redactor = _Redactor()

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update(get_context_dict())

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                entry[key] = self._redactor.sanitize(value, key=key)

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["error"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "stack": "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def setup_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Configura el logger de la app una sola vez (reimports no duplican handlers)."""
    log = logging.getLogger(name)
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    log.setLevel(level if isinstance(level, int) else logging.INFO)

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if _env_flag("LOG_JSON", True):
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
            )
        log.addHandler(handler)

    return log


logger = setup_logger()
