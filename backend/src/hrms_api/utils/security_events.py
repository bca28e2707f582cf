"""Security event logging for access control decisions.

This module provides a dedicated security logger for tracking security-relevant
events such as denied operations, role changes and hierarchy edits. These events
are logged separately from application logs for audit and compliance purposes.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID


class SecurityEventType(str, Enum):
    """Types of security events that are logged."""

    # Authorization decisions
    ACCESS_DENIED_PERMISSION = "access_denied_permission"
    ACCESS_DENIED_TENANT = "access_denied_tenant"
    ACCESS_DENIED_INACTIVE = "access_denied_inactive"

    # Data integrity degradations
    HIERARCHY_DEGRADED = "hierarchy_degraded"
    ROLE_REFERENCE_ORPHANED = "role_reference_orphaned"

    # Role and permission events
    ROLE_ASSIGNED = "role_assigned"
    ROLE_DELETED = "role_deleted"
    ROLE_PERMISSIONS_CHANGED = "role_permissions_changed"

    # Hierarchy events
    MANAGER_ASSIGNED = "manager_assigned"


# Dedicated security logger, routed to its own handler by the deployment
security_logger = logging.getLogger("security")


def log_security_event(
    event_type: SecurityEventType,
    principal_id: UUID | str | None = None,
    tenant_id: UUID | str | None = None,
    target_id: UUID | str | None = None,
    target_tenant_id: UUID | str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Log a security event.

    Args:
        event_type: The type of security event
        principal_id: The ID of the principal performing the action
        tenant_id: The tenant of the acting principal
        target_id: The ID of the principal, role or record being affected
        target_tenant_id: The tenant owning the target, when known
        details: Additional event-specific details
        success: Whether the operation succeeded
    """
    event_data: dict[str, Any] = {
        "event_type": event_type.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "success": success,
        "actor": {
            "principal_id": str(principal_id) if principal_id else None,
            "tenant_id": str(tenant_id) if tenant_id else None,
        },
    }

    if target_id or target_tenant_id:
        event_data["target"] = {
            "id": str(target_id) if target_id else None,
            "tenant_id": str(target_tenant_id) if target_tenant_id else None,
        }

    if details:
        event_data["details"] = details

    if success:
        security_logger.info(
            f"Security event: {event_type.value}",
            extra={"security_event": event_data},
        )
    else:
        security_logger.warning(
            f"Security event (failed): {event_type.value}",
            extra={"security_event": event_data},
        )
