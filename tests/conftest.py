"""Shared fixtures: scripted console, fake provider clients, catalog."""

import pytest

from chatbot.credentials import CredentialValidator
from chatbot.errors import ProviderError
from chatbot.providers import ProviderClient
from chatbot.registry import ModelRegistry
from chatbot.session import ConversationSession

GROQ_KEY = "gsk_test_0123456789"
GOOGLE_KEY = "AIza_test_0123456789"


class ScriptedConsole:
    """Console fake that replays queued input and captures output."""

    def __init__(self, inputs=None):
        self.inputs = list(inputs or [])
        self.prompts = []
        self.output = []

    def read(self, prompt):
        self.prompts.append(prompt)
        if not self.inputs:
            raise EOFError
        return self.inputs.pop(0)

    def show(self, text=""):
        self.output.append(text)

    @property
    def text(self):
        return "\n".join(self.output)


class FakeClient(ProviderClient):
    """Provider client that answers from a script instead of the network."""

    def __init__(self, descriptor, api_key=None, replies=None):
        super().__init__(descriptor)
        self.api_key = api_key
        self.replies = list(replies or [])
        self.prompts = []

    def invoke(self, prompt_text):
        self.prompts.append(prompt_text)
        if self.replies:
            reply = self.replies.pop(0)
            if isinstance(reply, ProviderError):
                raise reply
            return reply
        return f"Reply {len(self.prompts)}"


class FakeClientFactory:
    """Records every client it builds so tests can script them."""

    def __init__(self):
        self.clients = []
        self.replies = []

    def __call__(self, descriptor, api_key):
        client = FakeClient(descriptor, api_key, replies=self.replies)
        self.clients.append(client)
        return client


@pytest.fixture
def registry():
    return ModelRegistry()


@pytest.fixture
def groq_only():
    return CredentialValidator({"GOOGLE_API_KEY": None, "GROQ_API_KEY": GROQ_KEY})


@pytest.fixture
def all_configured():
    return CredentialValidator({"GOOGLE_API_KEY": GOOGLE_KEY, "GROQ_API_KEY": GROQ_KEY})


@pytest.fixture
def client_factory():
    return FakeClientFactory()


@pytest.fixture
def console():
    return ScriptedConsole()


@pytest.fixture
def session(registry, all_configured, client_factory, console):
    return ConversationSession(
        registry, all_configured, client_factory=client_factory, console=console
    )
