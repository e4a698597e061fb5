"""Root conftest: shared test configuration."""

import os

# Ensure tests never touch a real database or a real signing key
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("JWT_SECRET", "test-signing-key")
os.environ.setdefault("SSN_VALIDATOR_LATENCY_MS", "0")
os.environ.setdefault("LOG_FORMAT", "text")
