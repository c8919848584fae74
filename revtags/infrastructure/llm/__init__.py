from .generation_client import GenerationClient, GenerationServiceError, GenerationTimeout

__all__ = ["GenerationClient", "GenerationServiceError", "GenerationTimeout"]
