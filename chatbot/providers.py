"""Provider clients behind a single invoke(prompt) -> reply contract."""

import logging
from abc import ABC, abstractmethod

import openai
from openai import OpenAI

from chatbot import config
from chatbot.errors import (
    AuthenticationError,
    ConfigurationError,
    ProviderError,
    QuotaExceededError,
    TransientError,
    UnknownError,
)
from chatbot.models import ModelDescriptor, ProviderName

logger = logging.getLogger(__name__)


class ProviderClient(ABC):
    """A client bound to one model of one provider."""

    def __init__(self, descriptor: ModelDescriptor):
        self.descriptor = descriptor

    @abstractmethod
    def invoke(self, prompt_text: str) -> str:
        """Send a rendered prompt and return the reply text."""

    @property
    def name(self) -> str:
        return self.descriptor.display_name


class OpenAICompatibleClient(ProviderClient):
    """Client for providers that expose an OpenAI-compatible chat API."""

    base_url: str = ""
    token_limit_param = "max_tokens"

    def __init__(
        self,
        descriptor: ModelDescriptor,
        api_key: str,
        temperature: float = config.TEMPERATURE,
        max_output_tokens: int = config.MAX_OUTPUT_TOKENS,
    ):
        super().__init__(descriptor)
        if not api_key:
            raise ConfigurationError(f"{descriptor.provider.value} API key is empty")
        if not 0.0 <= temperature <= 2.0:
            raise ConfigurationError(f"Temperature out of range: {temperature}")
        if max_output_tokens <= 0:
            raise ConfigurationError(f"Max output tokens must be positive: {max_output_tokens}")

        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        try:
            # Retrying is left to the user, so the SDK must not retry either
            self._client = OpenAI(api_key=api_key, base_url=self.base_url, max_retries=0)
        except openai.OpenAIError as e:
            raise ConfigurationError(f"Could not create {descriptor.provider.value} client: {e}") from e

    def invoke(self, prompt_text: str) -> str:
        logger.info(f"[LLM] Request to {self.descriptor.model_identifier} ({len(prompt_text)} chars)")
        params = {
            "model": self.descriptor.model_identifier,
            "messages": [{"role": "user", "content": prompt_text}],
            "temperature": self.temperature,
            self.token_limit_param: self.max_output_tokens,
        }
        try:
            response = self._client.chat.completions.create(**params)
        except openai.OpenAIError as e:
            raise translate_error(e) from e

        if not response.choices:
            raise UnknownError(f"{self.name} returned no choices")
        reply = response.choices[0].message.content or ""
        logger.info(f"[LLM] Response from {self.descriptor.model_identifier} ({len(reply)} chars)")
        return reply


class GoogleClient(OpenAICompatibleClient):
    """Gemini models through Google's OpenAI-compatible endpoint."""

    base_url = config.GOOGLE_API_URL


class GroqClient(OpenAICompatibleClient):
    """Groq-hosted models."""

    base_url = config.GROQ_API_URL
    token_limit_param = "max_completion_tokens"


# Google answers a bad key with HTTP 400 INVALID_ARGUMENT instead of 401
INVALID_KEY_MARKERS = ("API key not valid", "API_KEY_INVALID")

CLIENT_FACTORIES = {
    ProviderName.GOOGLE: GoogleClient,
    ProviderName.GROQ: GroqClient,
}


def create_client(descriptor: ModelDescriptor, api_key: str) -> ProviderClient:
    """Build the client for the descriptor's provider family."""
    try:
        factory = CLIENT_FACTORIES[descriptor.provider]
    except KeyError:
        raise ConfigurationError(f"Unsupported provider: {descriptor.provider.value}") from None
    return factory(descriptor, api_key)


def translate_error(error: openai.OpenAIError) -> ProviderError:
    """Map an SDK exception onto the chatbot's provider error kinds."""
    message = str(error)
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return AuthenticationError(message)
    if isinstance(error, openai.RateLimitError):
        return QuotaExceededError(message)
    if isinstance(error, openai.APIStatusError) and _mentions_invalid_key(error):
        return AuthenticationError(message)
    if isinstance(error, (openai.APIConnectionError, openai.InternalServerError)):
        return TransientError(message)
    return UnknownError(message)


def _mentions_invalid_key(error: openai.APIStatusError) -> bool:
    text = f"{error} {error.body}"
    return any(marker in text for marker in INVALID_KEY_MARKERS)
