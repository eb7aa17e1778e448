from .gemini_provider import GeminiProvider, ProviderError, ProviderErrorKind

__all__ = ["GeminiProvider", "ProviderError", "ProviderErrorKind"]
