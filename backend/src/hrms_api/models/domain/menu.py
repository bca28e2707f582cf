"""Navigation menu domain model."""

from pydantic import BaseModel


class MenuItem(BaseModel):
    """Sidebar entry; ``permission`` of None means visible to everyone."""

    key: str
    label: str
    path: str | None = None
    permission: str | None = None
    section: str | None = None
    sort_order: int = 0
    is_active: bool = True
    children: list["MenuItem"] = []
