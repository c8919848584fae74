"""Tests for the per-profile acceptability predicate."""

from dataclasses import replace

import pytest

from revtags.domain import PROFILES, ProfileId, find_violations, is_acceptable

DETAILING = PROFILES[ProfileId.AUTO_DETAILING]
SOLAR = PROFILES[ProfileId.SOLAR]
NAILS = PROFILES[ProfileId.NAILS]


class TestOpeners:

    @pytest.mark.parametrize("profile", list(PROFILES.values()), ids=lambda p: p.id.value)
    def test_story_opener_rejected(self, profile):
        assert "after " in profile.banned_openers
        text = "After a long day my car got a detail and solar nails from Maria."
        assert not is_acceptable(text, profile, "Maria")

    def test_banned_opener_is_case_insensitive(self):
        text = "JUST HAD my car detailed and the interior looks clean again."
        assert "banned opener: 'just had'" in find_violations(text, DETAILING, "Maria")

    @pytest.mark.parametrize("opener", ["Maria did", "Maria, thank you for", "Maria's work on", "maria cleaned"])
    def test_name_opener_rejected(self, opener):
        text = f"{opener} my car and the interior is clean again."
        assert "opens with the employee's name" in find_violations(text, DETAILING, "Maria")

    def test_name_prefix_of_longer_word_allowed(self):
        text = "Mariachi music played while my car got a clean interior."
        assert "opens with the employee's name" not in find_violations(text, DETAILING, "Maria")


class TestContentRules:

    def test_solar_requires_keyword(self):
        assert not is_acceptable("Really glad I talked to Maria about pricing.", SOLAR, "Maria")

    def test_solar_keyword_accepted(self):
        assert is_acceptable("Really glad I talked to Maria about solar pricing.", SOLAR, "Maria")

    def test_detailing_requires_mention(self):
        text = "The interior is clean and Maria explained every step along the way."
        assert find_violations(text, DETAILING, "Maria") == ["missing required mention"]

    @pytest.mark.parametrize("text", [
        "The interior was clean and Maria was careful with everything.",
        "The interior was clean and Maria took real care with everything.",
        "Maria cleaned the interior and even covered an old scar in the leather.",
    ])
    def test_mention_needs_whole_word(self, text):
        assert "missing required mention" in find_violations(text, DETAILING, "Sam")

    @pytest.mark.parametrize("text", [
        "Both cars came back clean and Maria explained every step.",
        "The car's interior is clean and Maria explained every step.",
        "Our SUV has not looked this clean and Maria explained every step.",
    ])
    def test_mention_accepts_plural_and_case(self, text):
        assert "missing required mention" not in find_violations(text, DETAILING, "Sam")

    def test_banned_phrase_anywhere(self):
        text = "Maria cleaned my car and I highly recommend the interior work."
        assert "banned phrase: 'highly recommend'" in find_violations(text, DETAILING, "Sam")

    def test_minimum_words(self):
        assert not is_acceptable("Clean car, thanks.", DETAILING, "Maria")

    def test_empty_text(self):
        assert find_violations("", NAILS, "Maria") == ["empty text"]
        assert find_violations("   ", NAILS, "Maria") == ["empty text"]


class TestSentenceBounds:

    def test_nails_allows_exactly_one(self):
        two = "My nails look great and Maria was careful. The color is perfect too."
        assert not is_acceptable(two, NAILS, "Maria")
        assert is_acceptable("My nails look great and Maria was careful with the color.", NAILS, "Maria")

    def test_detailing_rejects_three(self):
        text = "My car is clean. Maria did well. The interior smells fresh now."
        assert not is_acceptable(text, DETAILING, "Sam")

    def test_rules_come_from_profile(self):
        relaxed = replace(DETAILING, required_mention_any=(), min_words=None)
        assert is_acceptable("Interior is spotless.", relaxed, "Maria")
