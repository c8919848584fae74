"""
Review Drafter - Retry Controller & Fallback Selector
======================================================

START -> (generate -> sanitize -> validate) x up to N -> ACCEPTED | FALLBACK

- The first acceptable candidate wins
- Timeouts and upstream errors cost one attempt and are retried
- Exhaustion returns a pre-vetted fallback text for the profile
- Only a request where every attempt failed at the service is an error

Everything that varies per request (attempt number, temperature, random
source) is local to draft(); a ReviewDrafter holds no per-request state.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Protocol

from ..domain import (
    PROFILES,
    DomainProfile,
    GenerationRequest,
    ProfileId,
    build_prompt,
    classify,
    find_violations,
    is_acceptable,
    sanitize,
)
from ..infrastructure.llm import GenerationServiceError
from .errors import ConfigError, InputError, UpstreamFatalError

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """What the drafter needs from a generation client."""

    @property
    def is_configured(self) -> bool: ...

    def generate(self, prompt: str, temperature: float, max_tokens: Optional[int] = None) -> str: ...


class DraftOutcome(Enum):
    ACCEPTED = "accepted"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class DraftResult:
    """Final text plus how it was obtained."""
    review: str
    profile_id: ProfileId
    outcome: DraftOutcome
    attempts: int


def new_request(
    employee: Optional[str],
    business: Optional[str] = None,
    service_notes: Optional[str] = None,
    business_type: Optional[str] = None,
) -> GenerationRequest:
    """
    Build a GenerationRequest from raw field values.

    Raises:
        InputError: employee is missing or blank.
    """
    employee = (employee or "").strip()
    if not employee:
        raise InputError("Missing employee")

    return GenerationRequest(
        employee=employee,
        business=(business or "").strip() or None,
        service_notes=(service_notes or "").strip() or None,
        business_type=(business_type or "").strip() or None,
    )


class ReviewDrafter:
    """
    Runs the constrained-generation pipeline for one request at a time.

    USAGE:
        drafter = ReviewDrafter(GenerationClient())
        result = drafter.draft(new_request("Maria", business_type="nails"))
        print(result.review)
    """

    def __init__(
        self,
        client: TextGenerator,
        profiles: Mapping[ProfileId, DomainProfile] = PROFILES,
    ):
        self._client = client
        self._profiles = profiles

    def draft(self, request: GenerationRequest, rng: Optional[random.Random] = None) -> DraftResult:
        """
        Produce a validated review for the request.

        Args:
            request: The draft request.
            rng: Random source for this request; a fresh one when omitted.

        Raises:
            ConfigError: the generation client has no credential.
            UpstreamFatalError: the service failed on every attempt.
        """
        if not self._client.is_configured:
            raise ConfigError("Missing OPENAI_API_KEY_REAL")

        rng = rng or random.Random()
        profile = self._profiles[classify(request.business_type, request.service_notes)]
        last_error: Optional[GenerationServiceError] = None
        candidates = 0

        for attempt in range(profile.max_attempts):
            sentence_target = profile.sentence_policy.choose(rng)
            prompt = build_prompt(request, profile, sentence_target, rng)
            temperature = profile.temperature_for(attempt)

            try:
                raw = self._client.generate(prompt, temperature)
            except GenerationServiceError as e:
                last_error = e
                logger.warning(
                    f"[{profile.id.value}] attempt {attempt + 1}/{profile.max_attempts} failed: {e.message[:200]}"
                )
                continue

            candidates += 1
            text = sanitize(raw, sentence_target)
            violations = find_violations(text, profile, request.employee)
            if not violations:
                logger.info(f"[{profile.id.value}] accepted on attempt {attempt + 1}")
                return DraftResult(text, profile.id, DraftOutcome.ACCEPTED, attempt + 1)

            logger.debug(f"[{profile.id.value}] attempt {attempt + 1} rejected: {', '.join(violations)}")

        if candidates == 0 and last_error is not None:
            logger.error(f"[{profile.id.value}] all {profile.max_attempts} attempts failed upstream")
            raise UpstreamFatalError(last_error.message)

        logger.info(f"[{profile.id.value}] no acceptable draft after {profile.max_attempts} attempts, using fallback")
        return DraftResult(
            self._select_fallback(profile, request.employee, rng),
            profile.id,
            DraftOutcome.FALLBACK,
            profile.max_attempts,
        )

    def _select_fallback(self, profile: DomainProfile, employee: str, rng: random.Random) -> str:
        """
        Pick a fallback uniformly at random.

        The registry guarantees every entry validates for an ordinary name;
        a name carrying sentence punctuation can still break one, so the
        remaining entries are tried before giving up on validation.
        """
        templates = list(profile.fallback_pool)
        rng.shuffle(templates)

        for template in templates:
            text = sanitize(profile.render_fallback(template, employee), profile.max_sentences)
            if is_acceptable(text, profile, employee):
                return text

        logger.warning(f"[{profile.id.value}] no fallback validates for employee {employee!r}")
        return sanitize(profile.render_fallback(templates[0], employee), profile.max_sentences)
