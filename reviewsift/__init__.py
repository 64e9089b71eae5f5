"""ReviewSift — LLM-backed authenticity checks for restaurant reviews."""

__version__ = "1.0.0"
