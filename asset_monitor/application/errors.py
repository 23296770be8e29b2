"""Errors raised at the boundary with external services.

Infrastructure adapters convert transport failures into these types so use
cases can turn them into user-facing messages.
"""


class QuoteError(RuntimeError):
    """Raised when a quote or price history cannot be fetched or parsed."""


class NewsError(RuntimeError):
    """Raised when the news feed cannot be fetched or parsed."""


class AnalysisError(RuntimeError):
    """Raised when the chat-completion endpoint fails."""

    default_message = "Request failed. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class AnalysisNotConfiguredError(AnalysisError):
    default_message = (
        "OpenAI API key not configured. "
        "Please add your API key in Settings."
    )


class InvalidApiKeyError(AnalysisError):
    default_message = (
        "Invalid API key. Please check your OpenAI API key in Settings."
    )


class RateLimitedError(AnalysisError):
    default_message = "Rate limited. Please wait a moment and try again."


__all__ = [
    "QuoteError",
    "NewsError",
    "AnalysisError",
    "AnalysisNotConfiguredError",
    "InvalidApiKeyError",
    "RateLimitedError",
]
