"""Infrastructure Layer: database sessions, the SQL store, external services, logging."""
