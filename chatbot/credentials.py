"""Decide whether a provider credential is present and usable."""

from collections.abc import Mapping

from chatbot.errors import CredentialNotConfiguredError
from chatbot.models import ModelDescriptor, ProviderName

PLACEHOLDER_MARKERS = ("your_", "_key_here")


def is_placeholder(value: str) -> bool:
    """Return True for sample values copied from .env.example."""
    return any(marker in value for marker in PLACEHOLDER_MARKERS)


class CredentialValidator:
    """Checks descriptors against the credentials read at startup."""

    def __init__(self, credentials: Mapping[str, str | None]):
        self._credentials = dict(credentials)

    def is_configured(self, descriptor: ModelDescriptor) -> bool:
        value = self._credentials.get(descriptor.credential_ref)
        if not isinstance(value, str) or not value.strip():
            return False
        return not is_placeholder(value)

    def credential_for(self, descriptor: ModelDescriptor) -> str:
        if not self.is_configured(descriptor):
            raise CredentialNotConfiguredError(descriptor.provider.value)
        return self._credentials[descriptor.credential_ref].strip()

    def configured_providers(self, models) -> list[ProviderName]:
        """Provider families with at least one usable model, in menu order."""
        providers = []
        for model in models:
            if self.is_configured(model) and model.provider not in providers:
                providers.append(model.provider)
        return providers

    def unconfigured_providers(self, models) -> list[ProviderName]:
        providers = []
        for model in models:
            if not self.is_configured(model) and model.provider not in providers:
                providers.append(model.provider)
        return providers
