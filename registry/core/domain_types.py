"""Domain Types: identity wrappers and enums shared across the registry.

Invariants:
    - CompanyId and OwnerId wrap Store-assigned integers
    - UNSET_ID (0) marks an Owner that has not been persisted yet
    - Role values match the `role` claim carried in access tokens

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CompanyId = NewType("CompanyId", int)
OwnerId = NewType("OwnerId", int)

UNSET_ID = 0


def is_unset(entity_id: int | None) -> bool:
    """True when an id denotes a not-yet-persisted entity."""
    return entity_id is None or entity_id == UNSET_ID


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Caller roles issued at login."""
    ADMIN = "Admin"
    USER = "User"
