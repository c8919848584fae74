# Application Layer
# =================
# Orchestration only: the retry loop and fallback selection live here,
# the rules they apply live in the domain layer.

from .errors import ConfigError, InputError, ReviewDraftError, UpstreamFatalError
from .review_drafter import DraftOutcome, DraftResult, ReviewDrafter, new_request

__all__ = [
    "ConfigError",
    "InputError",
    "ReviewDraftError",
    "UpstreamFatalError",
    "DraftOutcome",
    "DraftResult",
    "ReviewDrafter",
    "new_request",
]
