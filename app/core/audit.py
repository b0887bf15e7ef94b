# app/core/audit.py
"""
Audit logging for destructive actions (deletes, image removal).
Writes one JSON object per line to <LOG_DIR>/audit.log.
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request

from app.core.config import get_settings
from app.models.user import User

audit_logger = logging.getLogger("audit")
audit_logger.setLevel(logging.INFO)
audit_logger.propagate = False  # Don't duplicate to root logger


def _ensure_handler() -> None:
    if audit_logger.handlers:
        return
    log_dir = get_settings().log_dir
    os.makedirs(log_dir, exist_ok=True)
    file_handler = logging.FileHandler(os.path.join(log_dir, "audit.log"), encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(file_handler)


def client_ip(request: Optional[Request]) -> str:
    if request is None:
        return "unknown"
    # Behind a reverse proxy
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def log_action(
    action: str,
    resource_type: str,
    resource_id: str,
    user: Optional[User] = None,
    request: Optional[Request] = None,
    details: Optional[dict] = None,
    status: str = "success",
) -> None:
    """
    Log a security-relevant action to the audit log.

    Args:
        action: The action performed (e.g., "DELETE")
        resource_type: Type of resource affected (e.g., "client", "image")
        resource_id: Identifier of the affected resource
        user: The User who performed the action (optional)
        request: FastAPI Request, used for the client IP (optional)
        details: Additional context dictionary (optional)
        status: "success" or "failure"
    """
    _ensure_handler()
    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action.upper(),
        "resource_type": resource_type,
        "resource_id": str(resource_id),
        "user": user.email if user else "anonymous",
        "user_role": user.role if user else "unknown",
        "ip_address": client_ip(request),
        "status": status,
    }
    if details:
        log_entry["details"] = details

    audit_logger.info(json.dumps(log_entry, ensure_ascii=False))
