# Infrastructure Layer
# ====================
# Contains all external service integrations:
# - llm/: text-generation service client (OpenAI-compatible chat completions)
# - config/: Environment and settings management
#
# This layer can be replaced entirely without affecting domain/application layers.
