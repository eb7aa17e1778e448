"""BigO Lens: code complexity estimates from Gemini."""

__version__ = "1.0.0"
