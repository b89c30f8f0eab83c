from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import Request

# Catalog changes and rejected credentials go to their own "audit" channel.
audit_logger = logging.getLogger("audit")
audit_logger.setLevel(logging.INFO)

if not audit_logger.handlers:
    _handler = logging.StreamHandler()
    _handler.setFormatter(logging.Formatter("[AUDIT] %(asctime)s %(levelname)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"))
    audit_logger.addHandler(_handler)


def _client_of(request: Request) -> dict[str, Any]:
    forwarded = request.headers.get("x-forwarded-for")
    return {
        "at": datetime.now(timezone.utc).isoformat(),
        "ip": forwarded.split(",")[0].strip() if forwarded else (request.client.host if request.client else "unknown"),
        "agent": request.headers.get("user-agent", "unknown"),
        "route": f"{request.method} {request.url.path}",
    }


def log_catalog_action(action: str, request: Request, details: dict[str, Any] | None = None) -> None:
    """Record a write to the shared catalog, e.g. "prompt_created" or "category_deleted"."""
    entry = {"action": action, **_client_of(request), **({"details": details} if details else {})}
    audit_logger.info(f"catalog {entry}")


def log_suspicious_access(reason: str, request: Request, details: dict[str, Any] | None = None) -> None:
    """Record a request that presented credentials we refused."""
    entry = {"reason": reason, **_client_of(request), **({"details": details} if details else {})}
    audit_logger.warning(f"suspicious {entry}")
