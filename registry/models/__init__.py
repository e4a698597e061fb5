"""ORM Models: SQLAlchemy declarative models for the Company aggregate.

Invariants:
    - All models inherit from Base (db/base.py)
    - Company is the aggregate root; Owner rows are scoped by company_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from registry.models.company import Company  # noqa: F401
from registry.models.owner import Owner  # noqa: F401
