"""Company ORM: persists the aggregate root that owns Owners.

Invariants:
    - id is an integer primary key assigned on insert
    - name is non-nullable
    - version is compared on every UPDATE (optimistic concurrency)
    - owners cascade: removing an Owner from the collection deletes the row

Design Decisions:
    - version_id_generator=False: the Store bumps the version explicitly on every
      update, so a reconciliation that only touches owners still emits a
      version-checked UPDATE on the company row
    - No Owner -> Company relationship: company_id is a lookup column only
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from registry.db.base import Base


class Company(Base):
    """Company aggregate root."""
    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    owners: Mapped[list["Owner"]] = relationship(
        "Owner", cascade="all, delete-orphan", lazy="selectin",
        order_by="Owner.id",
    )

    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": False,
    }
