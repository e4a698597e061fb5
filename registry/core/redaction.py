"""SSN Redaction: strips Social Security Numbers from outward views.

Invariants:
    - Without the elevated role every OwnerView leaves with social_security_number=None
    - With the elevated role views pass through unchanged
    - Inputs are never mutated; redaction returns copies
"""

from registry.core.repository_protocols import CallerContext
from registry.schemas.company import CompanyView, OwnerView


def redact_owner(view: OwnerView, caller: CallerContext) -> OwnerView:
    if caller.has_elevated_role():
        return view
    return view.model_copy(update={"social_security_number": None})


def redact_company(view: CompanyView, caller: CallerContext) -> CompanyView:
    if caller.has_elevated_role():
        return view
    return view.model_copy(
        update={"owners": [redact_owner(o, caller) for o in view.owners]},
    )


def redact_companies(
    views: list[CompanyView], caller: CallerContext,
) -> list[CompanyView]:
    return [redact_company(v, caller) for v in views]
