# RevTags - AI Review Drafting
# ============================
# Drafts short, human-sounding reviews for a named employee and guarantees
# every returned text passes its business type's rules.
#
# ARCHITECTURE LAYERS:
# - Presentation:   FastAPI JSON API (web/)
# - Application:    Retry loop and fallback selection (application/)
# - Domain:         Profiles, classification, prompt, sanitize, validate (domain/)
# - Infrastructure: Text-generation client and settings (infrastructure/)
#
# The generation provider can be swapped without touching the domain rules.
