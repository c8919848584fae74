"""
Domain Models
=============

Plain data for the draft pipeline. No I/O, no framework imports.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ProfileId(Enum):
    """Business categories the drafter knows how to write for."""
    AUTO_DETAILING = "auto_detailing"
    SOLAR = "solar"
    NAILS = "nails"


DEFAULT_PROFILE_ID = ProfileId.AUTO_DETAILING


@dataclass(frozen=True)
class SentencePolicy:
    """
    How many sentences an attempt asks for.

    one_sentence_weight is the probability of asking for one sentence;
    1.0 and 0.0 are the fixed policies.
    """
    one_sentence_weight: float

    @classmethod
    def fixed(cls, sentences: int) -> "SentencePolicy":
        if sentences not in (1, 2):
            raise ValueError(f"Unsupported sentence target: {sentences}")
        return cls(1.0 if sentences == 1 else 0.0)

    @classmethod
    def weighted(cls, one_sentence_weight: float) -> "SentencePolicy":
        return cls(one_sentence_weight)

    @property
    def targets(self) -> Tuple[int, ...]:
        """Sentence targets this policy can produce."""
        if self.one_sentence_weight >= 1.0:
            return (1,)
        if self.one_sentence_weight <= 0.0:
            return (2,)
        return (1, 2)

    def choose(self, rng: random.Random) -> int:
        if len(self.targets) == 1:
            return self.targets[0]
        return 1 if rng.random() < self.one_sentence_weight else 2


@dataclass(frozen=True)
class DomainProfile:
    """Rules and phrasing context for one business category."""
    id: ProfileId
    label: str
    required_keywords_any: Tuple[str, ...]
    banned_openers: Tuple[str, ...]
    banned_phrases: Tuple[str, ...]
    sentence_policy: SentencePolicy
    angles: Tuple[str, ...]
    fallback_pool: Tuple[str, ...]
    required_mention_any: Tuple[str, ...] = ()
    min_sentences: int = 1
    max_sentences: int = 2
    min_words: Optional[int] = None
    max_attempts: int = 5
    base_temperature: float = 0.95
    temperature_step: float = 0.05
    max_temperature: float = 1.25

    def temperature_for(self, attempt: int) -> float:
        """Temperature for a zero-based attempt number."""
        return round(min(self.base_temperature + attempt * self.temperature_step, self.max_temperature), 2)

    def render_fallback(self, template: str, employee: str) -> str:
        return template.format(employee=employee)


@dataclass(frozen=True)
class GenerationRequest:
    """One draft request, already stripped of surrounding whitespace."""
    employee: str
    business: Optional[str] = None
    service_notes: Optional[str] = None
    business_type: Optional[str] = None
