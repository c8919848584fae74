# Domain Layer
# ============
# Pure draft rules, no I/O:
# - models.py: ProfileId, DomainProfile, GenerationRequest
# - profiles.py: the read-only profile registry
# - classifier.py: business type / notes -> ProfileId
# - prompt_builder.py, sanitizer.py, validator.py: one pipeline stage each

from .models import DEFAULT_PROFILE_ID, DomainProfile, GenerationRequest, ProfileId, SentencePolicy
from .profiles import PROFILES, RegistryError, build_registry, get_profile
from .classifier import classify
from .prompt_builder import build_prompt
from .sanitizer import sanitize, split_sentences
from .validator import find_violations, is_acceptable

__all__ = [
    "DEFAULT_PROFILE_ID",
    "DomainProfile",
    "GenerationRequest",
    "ProfileId",
    "SentencePolicy",
    "PROFILES",
    "RegistryError",
    "build_registry",
    "get_profile",
    "classify",
    "build_prompt",
    "sanitize",
    "split_sentences",
    "find_violations",
    "is_acceptable",
]
