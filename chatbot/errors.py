"""Exception hierarchy for the chatbot."""


class ChatbotError(Exception):
    """Base class for all chatbot errors."""


class ConfigurationError(ChatbotError):
    """A model selection or client construction was rejected."""


class ModelNotFoundError(ConfigurationError):
    """The menu choice does not name a known model."""

    def __init__(self, choice):
        self.choice = choice
        super().__init__(f"Invalid selection: {choice!r}")


class CredentialNotConfiguredError(ConfigurationError):
    """The provider credential is missing or still a placeholder."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"{provider} API key not configured")


class ProviderError(ChatbotError):
    """A provider call failed."""

    category = "unknown"


class AuthenticationError(ProviderError):
    """The provider rejected the credential."""

    category = "authentication"


class QuotaExceededError(ProviderError):
    """The provider rate or usage limit was hit."""

    category = "quota"


class TransientError(ProviderError):
    """Network or backend fault; safe to try again or switch model."""

    category = "transient"


class UnknownError(ProviderError):
    """Any other provider failure."""
