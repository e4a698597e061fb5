"""SSN Validator: input guard, deterministic answers and failure classification."""

import random

import pytest

from registry.core.errors import BadRequestError, ExternalServiceError
from registry.infrastructure.ssn_validator import SimulatedSsnValidator


@pytest.mark.parametrize("ssn", ["", "   ", "\t"])
async def test_blank_ssn_is_bad_request(ssn):
    with pytest.raises(BadRequestError):
        await SimulatedSsnValidator(latency_ms=0).validate(ssn)


async def test_answer_is_boolean_and_seedable():
    first = SimulatedSsnValidator(latency_ms=0, rng=random.Random(7))
    second = SimulatedSsnValidator(latency_ms=0, rng=random.Random(7))
    answers = [await first.validate("123-45-6789") for _ in range(5)]
    assert answers == [await second.validate("123-45-6789") for _ in range(5)]
    assert all(isinstance(a, bool) for a in answers)


async def test_round_trip_failure_becomes_external_service_error(monkeypatch):
    validator = SimulatedSsnValidator(latency_ms=0)

    async def unreachable(ssn):
        raise ConnectionError("connection reset by peer")

    monkeypatch.setattr(validator, "_round_trip", unreachable)
    with pytest.raises(ExternalServiceError) as exc_info:
        await validator.validate("123-45-6789")
    assert isinstance(exc_info.value.cause, ConnectionError)
    assert "connection reset" not in exc_info.value.message
