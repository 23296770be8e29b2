"""Port for text analysis through a chat-completion endpoint."""

from typing import Protocol


class AnalysisProviderPort(Protocol):
    """Port exposing a single prompt/response exchange."""

    @property
    def is_configured(self) -> bool:
        """Return True when credentials are available."""

    def complete(self, prompt: str, system_prompt: str | None = None) -> str:
        """Return the trimmed assistant reply.

        Raises:
            AnalysisError: If the endpoint rejects or fails the request.
        """


__all__ = ["AnalysisProviderPort"]
