"""
Request logging.

``configure_logging`` sets up the root handler once; ``AuditMiddleware`` writes
one JSON ``AUDIT_LOG`` / ``AUDIT_ERROR`` line per request to the catalog
resources.
"""

import json
import logging
import time
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from fastapi import Request
from jose import JWTError
from starlette.middleware.base import BaseHTTPMiddleware

from .jwt import decode_access_token

logger = logging.getLogger("bookcatalog.audit")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

AUDITED_RESOURCES: Tuple[str, ...] = ("/books", "/authors", "/publishers", "/genres")
SENSITIVE_KEYS = ("password", "token", "secret", "key")
REDACTED = "[REDACTED]"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def sanitize(data: dict) -> dict:
    return {
        key: REDACTED if any(s in key.lower() for s in SENSITIVE_KEYS) else value
        for key, value in data.items()
    }


def user_id_from(request: Request) -> str:
    auth = request.headers.get("authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return "anonymous"
    try:
        return str(decode_access_token(token).get("sub") or "anonymous")
    except JWTError:
        return "anonymous"


class AuditMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, prefix: str = "", resources: Iterable[str] = AUDITED_RESOURCES):
        super().__init__(app)
        self.paths = tuple(prefix + r for r in resources)

    def _audited(self, path: str) -> bool:
        return path.startswith(self.paths)

    async def dispatch(self, request: Request, call_next):
        if not self._audited(request.url.path):
            return await call_next(request)

        start = time.perf_counter()
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "userId": user_id_from(request),
            "method": request.method,
            "url": request.url.path,
            "query": sanitize(dict(request.query_params)),
            "ip": request.client.host if request.client else None,
            "userAgent": request.headers.get("user-agent"),
        }

        status_code: Optional[int] = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        except Exception as exc:
            entry["error"] = {"type": type(exc).__name__, "message": str(exc)}
            raise
        finally:
            entry["responseStatus"] = status_code
            entry["duration"] = f"{(time.perf_counter() - start) * 1000:.0f}ms"
            if status_code is None or status_code >= 400:
                logger.warning("AUDIT_ERROR: %s", json.dumps(entry, default=str))
            else:
                logger.info("AUDIT_LOG: %s", json.dumps(entry, default=str))
