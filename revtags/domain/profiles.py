"""
Domain Profile Registry
=======================

ARCHITECTURAL DECISION:
- One table of per-business rules instead of one code path per business type
- Built once at import and read-only afterwards
- build_registry() refuses a profile whose fallback texts would not pass
  its own validator, so the fallback path can never fail at request time

EXTENSIBILITY:
- To add a business type: add a ProfileId, a DomainProfile below and its
  synonyms in classifier.BUSINESS_TYPE_SYNONYMS
"""

from types import MappingProxyType
from typing import Iterable, Mapping

from .models import DEFAULT_PROFILE_ID, DomainProfile, ProfileId, SentencePolicy
from .sanitizer import sanitize
from .validator import find_violations

# Name substituted into fallback templates when checking them at build time
SAMPLE_EMPLOYEE = "Alex"


class RegistryError(ValueError):
    """A profile breaks one of the registry invariants."""
    pass


# Repetitive and narrative openers the model leans on
COMMON_BANNED_OPENERS = (
    "just had",
    "just got",
    "great experience",
    "had a great",
    "had an amazing",
    "after ",
    "last week",
    "last month",
    "yesterday",
    "today",
    "this morning",
    "when i",
    "on my way",
    "i recently",
    "i just",
    "i had",
    "so ",
    "wow",
)

# Stock review phrasing
COMMON_BANNED_PHRASES = (
    "highly recommend",
    "can't recommend",
    "cannot recommend",
    "top notch",
    "topnotch",
    "exceeded my expectations",
    "above and beyond",
    "went the extra mile",
    "look no further",
    "second to none",
    "five stars",
    "5 stars",
    "10/10",
    "game changer",
    "gamechanger",
    "hassle free",
    "hasslefree",
    "world class",
    "worldclass",
    "like new",
    "brand new",
)


AUTO_DETAILING = DomainProfile(
    id=ProfileId.AUTO_DETAILING,
    label="auto detailing",
    required_keywords_any=("detail", "clean", "interior", "exterior", "shine", "wash", "spotless"),
    required_mention_any=("car", "vehicle", "truck", "suv"),
    banned_openers=COMMON_BANNED_OPENERS + ("my car was", "dropped off"),
    banned_phrases=COMMON_BANNED_PHRASES + ("showroom",),
    sentence_policy=SentencePolicy.weighted(0.75),
    angles=(
        "how the car looked when it was handed back",
        "the interior and the small spots that usually get missed",
        "how easy drop off and pick up were",
        "the care taken with the paint",
        "how the car smelled and felt inside afterwards",
    ),
    fallback_pool=(
        "My car has not looked this clean in years and {employee} was easy to work with.",
        "Really happy with how clean the interior of my vehicle turned out, thanks to {employee}.",
        "The detail work on my truck was careful and thorough. {employee} took time to explain everything.",
        "Picked up my car and the paint has a real shine to it now. Thanks again {employee}.",
    ),
    min_words=8,
    max_attempts=5,
    base_temperature=0.95,
    temperature_step=0.05,
    max_temperature=1.2,
)

SOLAR = DomainProfile(
    id=ProfileId.SOLAR,
    label="residential solar",
    required_keywords_any=("solar", "panel"),
    banned_openers=COMMON_BANNED_OPENERS + ("thinking about", "we were"),
    banned_phrases=COMMON_BANNED_PHRASES + ("no pressure", "saved a ton", "best decision"),
    sentence_policy=SentencePolicy.fixed(2),
    angles=(
        "how clearly the numbers and savings were explained",
        "not feeling rushed while comparing options",
        "how questions about the roof and install were handled",
        "how the monthly bill comparison was laid out",
        "how responsive the follow up was",
    ),
    fallback_pool=(
        "Really glad I talked to {employee} about solar before making any decisions.",
        "Talking through solar options with {employee} made the numbers easy to follow.",
        "Good conversation with {employee} about going solar for our home. The pricing was laid out clearly.",
        "Appreciated how patient {employee} was with all my questions about the panels and monthly savings.",
    ),
    min_words=8,
    max_attempts=6,
    base_temperature=0.9,
    temperature_step=0.05,
    max_temperature=1.15,
)

NAILS = DomainProfile(
    id=ProfileId.NAILS,
    label="nail salon",
    required_keywords_any=("nail", "manicure", "pedicure"),
    banned_openers=COMMON_BANNED_OPENERS + ("got my nails", "treated myself"),
    banned_phrases=COMMON_BANNED_PHRASES + ("pampered", "self care", "selfcare"),
    sentence_policy=SentencePolicy.fixed(1),
    angles=(
        "how the color and shape came out",
        "how relaxing the visit felt",
        "the attention paid to the cuticles",
        "how well the nails have held up since",
        "how welcoming the appointment felt",
    ),
    fallback_pool=(
        "Love how my nails turned out, {employee} was careful with every detail.",
        "Really happy with my gel nails, {employee} took time and got the shape just right.",
        "My nails look clean and even and {employee} made the whole visit relaxing.",
        "Such a relaxing nail appointment with {employee}, the color came out perfect.",
    ),
    min_sentences=1,
    max_sentences=1,
    min_words=8,
    max_attempts=8,
    base_temperature=1.0,
    temperature_step=0.05,
    max_temperature=1.25,
)


def _check_profile(profile: DomainProfile) -> None:
    if not profile.min_sentences <= profile.max_sentences:
        raise RegistryError(f"{profile.id.value}: min_sentences exceeds max_sentences")

    for target in profile.sentence_policy.targets:
        if not profile.min_sentences <= target <= profile.max_sentences:
            raise RegistryError(
                f"{profile.id.value}: sentence target {target} is outside "
                f"{profile.min_sentences}-{profile.max_sentences}"
            )

    if profile.id != DEFAULT_PROFILE_ID and not profile.required_keywords_any:
        raise RegistryError(f"{profile.id.value}: required_keywords_any must not be empty")

    if profile.max_attempts < 1:
        raise RegistryError(f"{profile.id.value}: max_attempts must be at least 1")

    if not profile.angles:
        raise RegistryError(f"{profile.id.value}: angles must not be empty")

    if not profile.fallback_pool:
        raise RegistryError(f"{profile.id.value}: fallback_pool must not be empty")

    for template in profile.fallback_pool:
        text = profile.render_fallback(template, SAMPLE_EMPLOYEE)
        if sanitize(text, profile.max_sentences) != text:
            raise RegistryError(f"{profile.id.value}: fallback is changed by sanitizing: {template!r}")
        violations = find_violations(text, profile, SAMPLE_EMPLOYEE)
        if violations:
            raise RegistryError(
                f"{profile.id.value}: fallback fails validation ({', '.join(violations)}): {template!r}"
            )


def build_registry(profiles: Iterable[DomainProfile]) -> Mapping[ProfileId, DomainProfile]:
    """
    Check every profile and freeze them into a read-only mapping.

    Raises:
        RegistryError: a profile is inconsistent, a ProfileId is missing
            or defined twice.
    """
    registry = {}
    for profile in profiles:
        if profile.id in registry:
            raise RegistryError(f"Duplicate profile: {profile.id.value}")
        _check_profile(profile)
        registry[profile.id] = profile

    missing = [profile_id.value for profile_id in ProfileId if profile_id not in registry]
    if missing:
        raise RegistryError(f"Missing profiles: {', '.join(missing)}")

    return MappingProxyType(registry)


PROFILES = build_registry((AUTO_DETAILING, SOLAR, NAILS))


def get_profile(profile_id: ProfileId) -> DomainProfile:
    return PROFILES[profile_id]
