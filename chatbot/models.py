"""Pydantic models for the model catalog and conversation turns."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ProviderName(str, Enum):
    """Supported provider families."""

    GOOGLE = "Google"
    GROQ = "Groq"


class ModelDescriptor(BaseModel):
    """A provider/model combination offered in the menu."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: int = Field(gt=0)
    display_name: str
    provider: ProviderName
    model_identifier: str
    credential_ref: str

    @property
    def label(self) -> str:
        return f"{self.display_name} ({self.provider.value})"


class Turn(BaseModel):
    """One human message and the assistant reply to it."""

    model_config = ConfigDict(frozen=True)

    human_text: str
    assistant_text: str
