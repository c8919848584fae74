"""
Prompt Builder
==============

Renders the user-role instruction for one generation attempt.

The angle is drawn from the profile's pool with the caller's random source,
so repeated drafts for the same profile read differently while tests can
pin the draw with a seeded random.Random.
"""

import random
from typing import Iterable, Optional

from .models import DomainProfile, GenerationRequest

PLACEHOLDER = "(none)"

STORY_OPENERS = ("After", "Last week", "When I", "On my way")

PROMPT_TEMPLATE = """Write a short customer review for {employee}, who works in {label}.

Hard rules:
- Exactly {sentence_rule}.
- Do not use semicolons, colons, hyphens or dashes.
- Do not start the review with "{employee}".
- Do not open with a story or time setup such as {story_openers}.
- Never name the business.
- Do not use these phrases: {banned_phrases}.
- {keyword_rule}
{mention_rule}
Angle to write from: {angle}

Business (context only, never name it): {business}
Service notes (light color only, do not copy their wording): {service_notes}"""


def _quoted(values: Iterable[str]) -> str:
    return ", ".join(f'"{value.strip()}"' for value in values)


def _or_placeholder(value: Optional[str]) -> str:
    value = (value or "").strip()
    return value or PLACEHOLDER


def build_prompt(
    request: GenerationRequest,
    profile: DomainProfile,
    sentence_target: int,
    rng: random.Random,
) -> str:
    """
    Build the instruction for one attempt.

    Args:
        request: The draft request.
        profile: Profile selected for the request.
        sentence_target: Exact sentence count to ask for (1 or 2).
        rng: Request-scoped random source used to pick the angle.
    """
    sentence_rule = "1 sentence" if sentence_target == 1 else f"{sentence_target} sentences"

    if profile.required_keywords_any:
        keyword_rule = f"Include at least one of these words: {_quoted(profile.required_keywords_any)}."
    else:
        keyword_rule = f"Keep it clearly about {profile.label}."

    mention_rule = ""
    if profile.required_mention_any:
        mention_rule = f"- Mention at least one of: {_quoted(profile.required_mention_any)}.\n"

    return PROMPT_TEMPLATE.format(
        employee=request.employee,
        label=profile.label,
        sentence_rule=sentence_rule,
        story_openers=_quoted(STORY_OPENERS),
        banned_phrases=_quoted(profile.banned_phrases),
        keyword_rule=keyword_rule,
        mention_rule=mention_rule,
        angle=rng.choice(profile.angles),
        business=_or_placeholder(request.business),
        service_notes=_or_placeholder(request.service_notes),
    )
