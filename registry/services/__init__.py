"""Services Layer: use-case orchestration over the Store and external services.

Invariants:
    - Services never build HTTP responses; they return views or raise RegistryError
    - No per-request state is cached on service instances
"""
