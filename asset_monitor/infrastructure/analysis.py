"""Chat-completion client built on the OpenAI SDK."""

from openai import (
    APIStatusError,
    AuthenticationError,
    OpenAI,
    OpenAIError,
    RateLimitError,
)

from asset_monitor.application.errors import (
    AnalysisError,
    AnalysisNotConfiguredError,
    InvalidApiKeyError,
    RateLimitedError,
)
from asset_monitor.application.ports.analysis import AnalysisProviderPort
from asset_monitor.infrastructure.logging.logger import get_app_logger


MAX_TOKENS = 1500
TEMPERATURE = 0.7
TIMEOUT_SECONDS = 60.0


class OpenAIAnalysisProvider(AnalysisProviderPort):
    """Send one prompt per request and return the assistant's reply."""

    def __init__(
        self,
        api_key: str | None,
        model: str,
        client: OpenAI | None = None,
        logger=None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: API key; the provider is unconfigured without one.
            model: Chat model name.
            client: Optional pre-built SDK client.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._api_key = api_key
        self._model = model
        self._client = client
        self._logger = logger or get_app_logger()

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def complete(self, prompt: str, system_prompt: str | None = None) -> str:
        """Return the trimmed reply to ``prompt``.

        Raises:
            AnalysisNotConfiguredError: Without an API key.
            InvalidApiKeyError: On HTTP 401.
            RateLimitedError: On HTTP 429.
            AnalysisError: On any other failure or an empty reply.
        """
        if not self.is_configured:
            raise AnalysisNotConfiguredError()
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        try:
            response = self._get_client().chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except AuthenticationError as exc:
            raise InvalidApiKeyError() from exc
        except RateLimitError as exc:
            raise RateLimitedError() from exc
        except APIStatusError as exc:
            self._logger.error(f"Analysis request failed: HTTP {exc.status_code}")
            raise AnalysisError() from exc
        except OpenAIError as exc:
            self._logger.error(f"Analysis request failed: {exc}")
            raise AnalysisError() from exc

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as exc:
            raise AnalysisError("Failed to parse AI response") from exc
        if not content:
            raise AnalysisError("Failed to parse AI response")
        return content.strip()

    def _get_client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(api_key=self._api_key, timeout=TIMEOUT_SECONDS)
        return self._client


__all__ = ["OpenAIAnalysisProvider"]
