"""Core Layer: pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Functions are deterministic given their inputs

Design Decisions:
    - Functional core separated from imperative shell: reconciliation planning and
      redaction live here, the Store and Service apply them
"""
