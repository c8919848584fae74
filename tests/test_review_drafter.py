"""Tests for the retry controller and fallback selection.

Uses the scripted FakeGenerationClient from conftest, so every attempt's
output (or failure) is fixed up front.
"""

import random

import pytest

from revtags.application import (
    ConfigError,
    DraftOutcome,
    InputError,
    ReviewDrafter,
    UpstreamFatalError,
    new_request,
)
from revtags.domain import PROFILES, ProfileId, is_acceptable
from revtags.infrastructure.llm import GenerationServiceError, GenerationTimeout

from conftest import FakeGenerationClient

NAILS = PROFILES[ProfileId.NAILS]
SOLAR = PROFILES[ProfileId.SOLAR]
DETAILING = PROFILES[ProfileId.AUTO_DETAILING]

GOOD_NAILS = "Love the color on my nails and Maria was careful the whole time."
BAD = "Maria did great."


class TestNewRequest:

    @pytest.mark.parametrize("employee", [None, "", "   "])
    def test_missing_employee(self, employee):
        with pytest.raises(InputError, match="Missing employee"):
            new_request(employee)

    def test_strips_fields(self):
        request = new_request("  Maria ", business="  ", service_notes=" gel ", business_type=" Nails ")
        assert request.employee == "Maria"
        assert request.business is None
        assert request.service_notes == "gel"
        assert request.business_type == "Nails"


class TestAccepted:

    def test_first_acceptable_candidate_wins(self):
        client = FakeGenerationClient([GOOD_NAILS, GOOD_NAILS])
        result = ReviewDrafter(client).draft(new_request("Maria", business_type="nails"), random.Random(1))

        assert result.outcome == DraftOutcome.ACCEPTED
        assert result.review == GOOD_NAILS
        assert result.attempts == 1
        assert len(client.calls) == 1

    def test_output_is_sanitized(self):
        raw = "Love the color on my nails; Maria was careful — the whole time. Extra sentence here."
        client = FakeGenerationClient([raw])
        result = ReviewDrafter(client).draft(new_request("Maria", business_type="nails"), random.Random(1))
        assert result.review == "Love the color on my nails Maria was careful the whole time."

    def test_retries_until_acceptable(self):
        client = FakeGenerationClient([BAD, "", GOOD_NAILS])
        result = ReviewDrafter(client).draft(new_request("Maria", business_type="nails"), random.Random(1))

        assert result.outcome == DraftOutcome.ACCEPTED
        assert result.attempts == 3

    def test_temperature_rises_per_attempt(self):
        client = FakeGenerationClient([BAD, BAD, GOOD_NAILS])
        ReviewDrafter(client).draft(new_request("Maria", business_type="nails"), random.Random(1))
        assert [call["temperature"] for call in client.calls] == [1.0, 1.05, 1.1]

    def test_timeout_costs_one_attempt(self):
        client = FakeGenerationClient([GenerationTimeout(8.0), GOOD_NAILS])
        result = ReviewDrafter(client).draft(new_request("Maria", business_type="nails"), random.Random(1))
        assert result.outcome == DraftOutcome.ACCEPTED
        assert result.attempts == 2

    def test_classifies_from_notes(self):
        text = "Really glad I talked to Maria about solar pricing."
        client = FakeGenerationClient([text])
        result = ReviewDrafter(client).draft(
            new_request("Maria", service_notes="asked for a solar quote"), random.Random(1)
        )
        assert result.profile_id == ProfileId.SOLAR
        assert result.review == text


class TestFallback:

    def test_exhaustion_returns_fallback(self):
        client = FakeGenerationClient([BAD] * NAILS.max_attempts)
        result = ReviewDrafter(client).draft(new_request("Maria", business_type="nails"), random.Random(5))

        assert result.outcome == DraftOutcome.FALLBACK
        assert result.attempts == NAILS.max_attempts
        assert len(client.calls) == NAILS.max_attempts
        assert result.review in {t.format(employee="Maria") for t in NAILS.fallback_pool}
        assert "Maria" in result.review
        assert "nail" in result.review.lower()
        assert is_acceptable(result.review, NAILS, "Maria")

    def test_fallback_after_mixed_failures(self):
        responses = [GenerationServiceError("boom", status_code=500)] + [BAD] * (SOLAR.max_attempts - 1)
        client = FakeGenerationClient(responses)
        result = ReviewDrafter(client).draft(new_request("Maria", business_type="solar"), random.Random(2))
        assert result.outcome == DraftOutcome.FALLBACK
        assert is_acceptable(result.review, SOLAR, "Maria")

    def test_timeout_on_last_attempt_still_falls_back(self):
        responses = [BAD] * (DETAILING.max_attempts - 1) + [GenerationTimeout(8.0)]
        client = FakeGenerationClient(responses)
        result = ReviewDrafter(client).draft(new_request("Maria"), random.Random(4))

        assert result.outcome == DraftOutcome.FALLBACK
        assert len(client.calls) == DETAILING.max_attempts
        assert is_acceptable(result.review, DETAILING, "Maria")

    def test_fallback_choice_covers_pool(self):
        seen = set()
        for seed in range(60):
            client = FakeGenerationClient()
            result = ReviewDrafter(client).draft(new_request("Maria"), random.Random(seed))
            seen.add(result.review)
        assert seen == {t.format(employee="Maria") for t in DETAILING.fallback_pool}

    def test_name_with_periods_still_returns_fallback(self):
        client = FakeGenerationClient()
        result = ReviewDrafter(client).draft(new_request("J.R.", business_type="nails"), random.Random(0))
        assert result.outcome == DraftOutcome.FALLBACK
        assert "J" in result.review


class TestFailures:

    def test_missing_credential(self):
        client = FakeGenerationClient(configured=False)
        with pytest.raises(ConfigError, match="OPENAI_API_KEY_REAL"):
            ReviewDrafter(client).draft(new_request("Maria"))
        assert client.calls == []

    def test_every_attempt_upstream_error(self):
        body = '{"error": "invalid api key"}'
        client = FakeGenerationClient([GenerationServiceError(body, status_code=401)] * DETAILING.max_attempts)
        with pytest.raises(UpstreamFatalError) as exc_info:
            ReviewDrafter(client).draft(new_request("Maria"), random.Random(0))
        assert exc_info.value.message == body
        assert len(client.calls) == DETAILING.max_attempts
