"""Owner Reconciliation: pure planning of the writes that make a stored owner set
match a submitted one.

Invariants:
    - Every existing id absent from the incoming set lands in `remove_ids`
    - Every incoming owner lands in exactly one of `updates` or `inserts`
    - An incoming owner goes to `updates` only if its id is one of the existing ids
    - Incoming owners with an unset id, a foreign id, or an unknown id are `inserts`
      (the Store decides whether an insert adopts a foreign row)
    - Two incoming owners with the same non-zero id are rejected before planning

Design Decisions:
    - Matching is by id only, with no ownership check: a foreign id is adopted into
      the target company instead of being rejected
    - Plan is a frozen dataclass; the Store applies it inside one transaction
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from registry.core.domain_types import is_unset
from registry.core.errors import InputValidationError
from registry.core.repository_protocols import OwnerLike


@dataclass(frozen=True)
class OwnerReconciliationPlan:
    remove_ids: frozenset[int] = frozenset()
    updates: tuple[OwnerLike, ...] = ()
    inserts: tuple[OwnerLike, ...] = ()


def duplicate_owner_ids(incoming: Iterable[OwnerLike]) -> list[int]:
    """Persisted ids that appear more than once in a submitted owner set."""
    counts = Counter(o.id for o in incoming if not is_unset(o.id))
    return sorted(owner_id for owner_id, n in counts.items() if n > 1)


def check_unique_owner_ids(incoming: Iterable[OwnerLike]) -> None:
    """Raise InputValidationError if the submitted set collides on ids."""
    duplicates = duplicate_owner_ids(incoming)
    if duplicates:
        raise InputValidationError(
            f"Owner ids must be unique within a company: {duplicates}",
            field="owners",
        )


def plan_owner_reconciliation(
    existing_ids: Iterable[int], incoming: Sequence[OwnerLike] | None,
) -> OwnerReconciliationPlan:
    """Compute removals, in-place updates and inserts for an owner update."""
    incoming = list(incoming or [])
    check_unique_owner_ids(incoming)

    existing = set(existing_ids)
    incoming_ids = {o.id for o in incoming if not is_unset(o.id)}

    updates = tuple(o for o in incoming if not is_unset(o.id) and o.id in existing)
    inserts = tuple(o for o in incoming if is_unset(o.id) or o.id not in existing)
    return OwnerReconciliationPlan(
        remove_ids=frozenset(existing - incoming_ids),
        updates=updates,
        inserts=inserts,
    )
