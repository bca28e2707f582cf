"""Domain-specific exceptions for the HRMS API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hrms_api.models.domain.access import AccessDecision


class HrmsAPIError(Exception):
    """Base exception for all HRMS API errors."""

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(HrmsAPIError):
    """Base class for resource not found errors."""

    pass


class PrincipalNotFoundError(NotFoundError):
    """Raised when a principal cannot be found."""

    def __init__(self, principal_id: str | None = None) -> None:
        message = "Principal not found"
        details = {"principal_id": str(principal_id)} if principal_id else {}
        super().__init__(message, details)


class RoleNotFoundError(NotFoundError):
    """Raised when a role cannot be found."""

    def __init__(self, role_id: str | None = None, role_code: str | None = None) -> None:
        message = "Role not found"
        details: dict[str, Any] = {}
        if role_id:
            details["role_id"] = str(role_id)
        if role_code:
            details["role_code"] = role_code
        super().__init__(message, details)


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(HrmsAPIError):
    """Base class for resource conflict errors."""

    pass


class CannotDeleteSystemRoleError(ConflictError):
    """Raised when trying to delete a system role."""

    def __init__(self, role_code: str | None = None) -> None:
        message = "Cannot delete system role"
        details = {"role_code": role_code} if role_code else {}
        super().__init__(message, details)


class CannotModifySystemRoleError(ConflictError):
    """Raised when a tenant tries to change the permissions of a system role."""

    def __init__(self, role_code: str | None = None) -> None:
        message = "Cannot modify system role permissions"
        details = {"role_code": role_code} if role_code else {}
        super().__init__(message, details)


class RoleInUseError(ConflictError):
    """Raised when deleting a role that principals still reference."""

    def __init__(self, role_code: str | None = None, principal_count: int = 0) -> None:
        message = "Role is assigned to principals"
        details: dict[str, Any] = {"principal_count": principal_count}
        if role_code:
            details["role_code"] = role_code
        super().__init__(message, details)


class HierarchyCycleError(ConflictError):
    """Raised when a manager assignment would close a reporting loop."""

    def __init__(self, principal_id: str | None = None, manager_id: str | None = None) -> None:
        message = "Manager assignment would create a reporting cycle"
        details: dict[str, Any] = {}
        if principal_id:
            details["principal_id"] = str(principal_id)
        if manager_id:
            details["manager_id"] = str(manager_id)
        super().__init__(message, details)


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(HrmsAPIError):
    """Base class for validation errors."""

    pass


class UnknownPermissionError(ValidationError):
    """Raised when permission codes are not part of the catalog."""

    def __init__(self, codes: Iterable[str]) -> None:
        self.codes = sorted(set(codes))
        super().__init__(
            f"Unknown permission(s): {', '.join(self.codes)}",
            {"codes": self.codes},
        )


class UnknownOperationError(ValidationError):
    """Raised when an operation has no declared permission requirement."""

    def __init__(self, operation: str) -> None:
        super().__init__("Operation has no permission mapping", {"operation": operation})


class TenantMismatchError(ValidationError):
    """Raised when a write would link records of two different tenants."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__("Records belong to different tenants", details)


# =============================================================================
# Permission Errors (403)
# =============================================================================


class AccessDeniedError(HrmsAPIError):
    """Raised when the authorization gate denies an operation.

    The decision keeps the machine-readable reason for audit logging; callers
    only ever see the generic message.
    """

    def __init__(self, decision: "AccessDecision") -> None:
        self.decision = decision
        reason = decision.reason.value if decision.reason else None
        super().__init__("Access denied", {"reason": reason})
