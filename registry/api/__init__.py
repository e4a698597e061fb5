"""API Layer: FastAPI routes, dependencies and the fault translator.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes delegate to services and never catch RegistryError themselves
"""
