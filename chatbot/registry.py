"""Static catalog of the models the chatbot can talk to."""

from chatbot.errors import ConfigurationError, ModelNotFoundError
from chatbot.models import ModelDescriptor, ProviderName

DEFAULT_MODELS = [
    ModelDescriptor(
        id=1,
        display_name="Gemini 1.5 Pro",
        provider=ProviderName.GOOGLE,
        model_identifier="gemini-1.5-pro",
        credential_ref="GOOGLE_API_KEY",
    ),
    ModelDescriptor(
        id=2,
        display_name="Gemini 2.0 Flash",
        provider=ProviderName.GOOGLE,
        model_identifier="gemini-2.0-flash",
        credential_ref="GOOGLE_API_KEY",
    ),
    ModelDescriptor(
        id=3,
        display_name="Llama 3.1 70B",
        provider=ProviderName.GROQ,
        model_identifier="llama-3.1-70b-versatile",
        credential_ref="GROQ_API_KEY",
    ),
    ModelDescriptor(
        id=4,
        display_name="Llama 3.1 8B",
        provider=ProviderName.GROQ,
        model_identifier="llama-3.1-8b-instant",
        credential_ref="GROQ_API_KEY",
    ),
    ModelDescriptor(
        id=5,
        display_name="Mixtral 8x7B",
        provider=ProviderName.GROQ,
        model_identifier="mixtral-8x7b-32768",
        credential_ref="GROQ_API_KEY",
    ),
]


class ModelRegistry:
    """Ordered, read-only lookup of model descriptors by id."""

    def __init__(self, models: list[ModelDescriptor] | None = None):
        models = DEFAULT_MODELS if models is None else models
        self._models: dict[int, ModelDescriptor] = {}
        for model in models:
            if model.id in self._models:
                raise ConfigurationError(f"Duplicate model id: {model.id}")
            self._models[model.id] = model

    def list(self) -> tuple[ModelDescriptor, ...]:
        """Return all descriptors in declaration order."""
        return tuple(self._models.values())

    def get(self, model_id: int) -> ModelDescriptor:
        try:
            return self._models[model_id]
        except KeyError:
            raise ModelNotFoundError(model_id) from None

    def resolve(self, choice: str) -> ModelDescriptor:
        """Turn raw menu input such as ' 3 ' into a descriptor."""
        choice = choice.strip()
        try:
            model_id = int(choice)
        except ValueError:
            raise ModelNotFoundError(choice) from None
        return self.get(model_id)
