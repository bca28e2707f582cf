"""Company (tenant) ORM model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from hrms_api.models.orm.base import Base, TimestampMixin, UUIDMixin


class CompanyORM(Base, UUIDMixin, TimestampMixin):
    """Company database model; the tenant isolation boundary."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
