"""Org chart domain model."""

from uuid import UUID

from pydantic import BaseModel


class OrgChartNode(BaseModel):
    """Display node of the organizational chart."""

    id: UUID
    full_name: str
    position: str | None = None
    department: str | None = None
    profile_photo_url: str | None = None
    work_email: str | None = None
    children: list["OrgChartNode"] = []
