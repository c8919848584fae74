"""
Domain Classifier
=================

Maps a raw business-type hint (and, failing that, the service notes) to a
ProfileId. Pure and total: every input resolves to exactly one profile.
"""

import re
from typing import Optional

from .models import DEFAULT_PROFILE_ID, ProfileId

BUSINESS_TYPE_SYNONYMS = {
    "detail": ProfileId.AUTO_DETAILING,
    "detailing": ProfileId.AUTO_DETAILING,
    "auto-detailing": ProfileId.AUTO_DETAILING,
    "auto_detailing": ProfileId.AUTO_DETAILING,
    "auto detailing": ProfileId.AUTO_DETAILING,
    "car detailing": ProfileId.AUTO_DETAILING,
    "nail": ProfileId.NAILS,
    "nails": ProfileId.NAILS,
    "nail_salon": ProfileId.NAILS,
    "nail-salon": ProfileId.NAILS,
    "nail salon": ProfileId.NAILS,
    "solar": ProfileId.SOLAR,
    "solar_sales": ProfileId.SOLAR,
    "solar-sales": ProfileId.SOLAR,
    "solar sales": ProfileId.SOLAR,
}

SOLAR_NOTE_PATTERN = re.compile(
    r"\b(solar|panels?|quote|pricing|bill|savings|financing|install(?:ation)?"
    r"|estimate|utility|roof|monthly|kw)\b",
    re.IGNORECASE,
)


def classify(business_type: Optional[str], service_notes: Optional[str] = None) -> ProfileId:
    """
    Resolve the profile for a request.

    An explicit hint wins; unknown hints fall back to the default profile.
    Without a hint, solar vocabulary in the notes selects the solar profile.
    """
    hint = (business_type or "").strip().lower()

    if hint:
        return BUSINESS_TYPE_SYNONYMS.get(hint, DEFAULT_PROFILE_ID)

    if service_notes and SOLAR_NOTE_PATTERN.search(service_notes):
        return ProfileId.SOLAR

    return DEFAULT_PROFILE_ID
