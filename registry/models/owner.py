"""Owner ORM: persists a person owning part of a Company.

Invariants:
    - Always belongs to exactly one Company (company_id FK, non-nullable)
    - social_security_number is stored in full; redaction happens on views only
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from registry.db.base import Base


class Owner(Base):
    """Owner entity."""
    __tablename__ = "owners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    social_security_number: Mapped[str] = mapped_column(String(32), nullable=False)
