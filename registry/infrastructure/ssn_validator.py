"""SSN Validator: stand-in for the downstream Social Security Number check.

Invariants:
    - Blank or whitespace-only input raises BadRequestError before any round trip
    - Any failure inside the round trip leaves as ExternalServiceError
    - Never returns None: the answer is True or False

Design Decisions:
    - The downstream service is simulated (latency + coin flip); the answer carries
      no meaning, only the async call shape and the failure classification do
    - Random source injectable so tests get deterministic answers
"""

import asyncio
import logging
import random

from registry.core.errors import BadRequestError, ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "ssn-validation"


class SimulatedSsnValidator:
    """SsnValidator that fakes a network call."""

    def __init__(self, latency_ms: int = 100, rng: random.Random | None = None):
        self._latency_s = max(latency_ms, 0) / 1000
        self._rng = rng or random.Random()

    async def validate(self, ssn: str) -> bool:
        if not ssn or not ssn.strip():
            raise BadRequestError("Social Security Number must be provided.")
        try:
            return await self._round_trip(ssn.strip())
        except Exception as e:
            logger.error(f"SSN validation round trip failed: {e}", exc_info=True)
            raise ExternalServiceError(
                SERVICE_NAME, "SSN validation is unavailable", cause=e,
            ) from e

    async def _round_trip(self, ssn: str) -> bool:
        await asyncio.sleep(self._latency_s)
        return self._rng.randrange(2) == 0
