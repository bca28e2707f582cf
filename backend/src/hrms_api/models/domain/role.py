"""Role domain model."""

from uuid import UUID

from pydantic import BaseModel


class Role(BaseModel):
    """Named bundle of permission codes."""

    id: UUID
    code: str
    name: str
    description: str | None = None
    is_system: bool = False
    # None for global system roles shared by every tenant
    tenant_id: UUID | None = None
    permissions: list[str] = []

    class Config:
        """Pydantic config."""

        from_attributes = True
