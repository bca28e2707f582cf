"""FastAPI dependencies enforcing permission requirements at the route.

Every route declares what it needs through one of these factories; the
authorization gate behind them is the only place a decision is made.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status

from hrms_api.dependencies import get_access_service
from hrms_api.exceptions import PrincipalNotFoundError
from hrms_api.models.domain.access import ScopeFilter, ScopeTier
from hrms_api.security.auth import get_current_principal_id
from hrms_api.services.access_service import AccessContext, AccessService


async def get_access_context(
    principal_id: Annotated[UUID, Depends(get_current_principal_id)],
    access_service: Annotated[AccessService, Depends(get_access_service)],
) -> AccessContext:
    """Load the access context of the authenticated principal.

    Raises:
        HTTPException: If the token subject is not a known principal
    """
    try:
        return await access_service.get_context(principal_id)
    except PrincipalNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        ) from e


def require_permission(*codes: str) -> Callable[..., Awaitable[AccessContext]]:
    """Require one of the given permissions.

    Args:
        *codes: Permission codes; holding any one of them is enough

    Returns:
        Dependency yielding the authorized AccessContext
    """

    async def dependency(
        context: Annotated[AccessContext, Depends(get_access_context)],
    ) -> AccessContext:
        context.require(codes)
        return context

    return dependency


def require_operation(operation: str) -> Callable[..., Awaitable[AccessContext]]:
    """Require the permissions registered for an operation."""

    async def dependency(
        context: Annotated[AccessContext, Depends(get_access_context)],
    ) -> AccessContext:
        context.require_operation(operation)
        return context

    return dependency


def require_scope(
    resource: str,
    tier: ScopeTier | None = None,
) -> Callable[..., Awaitable[ScopeFilter]]:
    """Authorize and resolve a scope tier on a resource.

    Without a fixed tier the ``scope`` query parameter picks one, falling
    back to the broadest tier the principal holds.
    """

    async def dependency(
        context: Annotated[AccessContext, Depends(get_access_context)],
        scope: ScopeTier | None = None,
    ) -> ScopeFilter:
        return context.scope(resource, tier or scope)

    return dependency
