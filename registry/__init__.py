"""Company Registry: Company/Owner aggregate API with owner reconciliation and SSN redaction.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
