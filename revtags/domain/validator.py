"""
Validator - Per-Profile Acceptability Predicate
===============================================

WHY PURE FUNCTION: takes the text, the profile and the employee name and
nothing else. The rule set lives on the DomainProfile, never at the call site.

find_violations() explains a rejection (used for logging);
is_acceptable() is the boolean gate the retry loop uses.
"""

import re
from functools import lru_cache
from typing import List, Tuple

from .models import DomainProfile
from .sanitizer import split_sentences

# Characters that, right after the employee's name, make an opener like
# "Maria did..." / "Maria, thank you" / "Maria's work"
NAME_OPENER_FOLLOWERS = (" ", ",", "'", "’")


@lru_cache(maxsize=None)
def _mention_pattern(mentions: Tuple[str, ...]) -> "re.Pattern":
    """Whole-word match, plural allowed: 'car' matches 'cars' but not 'careful'."""
    alternatives = "|".join(re.escape(mention.strip()) for mention in mentions)
    return re.compile(rf"\b(?:{alternatives})s?\b", re.IGNORECASE)


def _starts_with_name(text_lower: str, employee: str) -> bool:
    name = employee.strip().lower()
    if not name:
        return False
    return any(text_lower.startswith(name + follower) for follower in NAME_OPENER_FOLLOWERS)


def find_violations(text: str, profile: DomainProfile, employee: str) -> List[str]:
    """
    Check sanitized text against a profile's rules.

    Returns:
        List of violation messages. Empty list means the text is acceptable.
    """
    if not text or not text.strip():
        return ["empty text"]

    violations: List[str] = []
    text_lower = text.strip().lower()

    sentence_count = len(split_sentences(text))
    if not profile.min_sentences <= sentence_count <= profile.max_sentences:
        violations.append(
            f"{sentence_count} sentences, expected "
            f"{profile.min_sentences}-{profile.max_sentences}"
        )

    if _starts_with_name(text_lower, employee):
        violations.append("opens with the employee's name")

    for opener in profile.banned_openers:
        if text_lower.startswith(opener.lower()):
            violations.append(f"banned opener: {opener!r}")
            break

    for phrase in profile.banned_phrases:
        if phrase.lower() in text_lower:
            violations.append(f"banned phrase: {phrase!r}")

    if profile.required_keywords_any and not any(
        keyword.lower() in text_lower for keyword in profile.required_keywords_any
    ):
        violations.append("missing topical keyword")

    if profile.required_mention_any and not _mention_pattern(profile.required_mention_any).search(text):
        violations.append("missing required mention")

    if profile.min_words is not None:
        word_count = len(text.split())
        if word_count < profile.min_words:
            violations.append(f"{word_count} words, expected at least {profile.min_words}")

    return violations


def is_acceptable(text: str, profile: DomainProfile, employee: str) -> bool:
    return not find_violations(text, profile, employee)
