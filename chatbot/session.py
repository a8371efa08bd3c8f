"""Conversation session: model selection, commands and the chat loop."""

import logging
from enum import Enum
from typing import Callable

from pydantic import BaseModel, ConfigDict

from chatbot import config
from chatbot.console import Console
from chatbot.credentials import CredentialValidator
from chatbot.errors import (
    AuthenticationError,
    ConfigurationError,
    CredentialNotConfiguredError,
    ModelNotFoundError,
    ProviderError,
    QuotaExceededError,
    TransientError,
)
from chatbot.memory import ConversationMemory
from chatbot.models import ModelDescriptor
from chatbot.providers import ProviderClient, create_client
from chatbot.registry import ModelRegistry

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit", "bye"}
SWITCH_COMMAND = "switch"
CLEAR_COMMAND = "clear"
MODELS_COMMAND = "models"

SEPARATOR = "=" * 50

ClientFactory = Callable[[ModelDescriptor, str], ProviderClient]


class Phase(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    AWAITING_INPUT = "awaiting_input"
    TERMINATED = "terminated"


class LoopAction(Enum):
    """Outcome of handling one line of input."""

    CONTINUE = "continue"
    TERMINATE = "terminate"


class SessionState(BaseModel):
    """Snapshot of the session. Transitions replace it, never mutate it.

    The active model, its client and its memory always change together:
    a successful selection builds a new state with a fresh memory.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    phase: Phase = Phase.UNINITIALIZED
    descriptor: ModelDescriptor | None = None
    client: ProviderClient | None = None
    memory: ConversationMemory | None = None

    def with_phase(self, phase: Phase) -> "SessionState":
        return self.model_copy(update={"phase": phase})


class ConversationSession:
    """Runs one chat session against the model chosen by the user."""

    def __init__(
        self,
        registry: ModelRegistry,
        validator: CredentialValidator,
        client_factory: ClientFactory = create_client,
        console: Console | None = None,
        prompt_template: str | None = None,
    ):
        self.registry = registry
        self.validator = validator
        self.client_factory = client_factory
        self.console = console or Console()
        self.prompt_template = prompt_template or config.load_prompt_template()
        self.state = SessionState()

    @property
    def memory(self) -> ConversationMemory | None:
        return self.state.memory

    @property
    def model(self) -> ModelDescriptor | None:
        return self.state.descriptor

    # Transitions

    def select_model(self, choice: str | int) -> SessionState:
        """Bind the session to the chosen model with an empty memory.

        Raises ConfigurationError (or a subclass) if the choice is unknown,
        its credential is not configured, or the client cannot be built.
        The current state is left untouched in that case.
        """
        descriptor = self.registry.resolve(str(choice))
        api_key = self.validator.credential_for(descriptor)
        client = self.client_factory(descriptor, api_key)

        self.state = SessionState(
            phase=Phase.READY,
            descriptor=descriptor,
            client=client,
            memory=ConversationMemory(),
        )
        logger.info(f"[SESSION] Selected {descriptor.label}")
        return self.state

    def terminate(self) -> None:
        self.state = self.state.with_phase(Phase.TERMINATED)
        logger.info("[SESSION] Terminated")

    def clear_memory(self) -> None:
        if self.state.memory is not None:
            self.state.memory.clear()
            self.console.show("\n🧹 Memory cleared! Starting fresh conversation.")

    def build_prompt(self, text: str) -> str:
        history = self.state.memory.render() if self.state.memory is not None else ""
        return self.prompt_template.format(history=history, input=text)

    def send_message(self, text: str) -> str:
        """Invoke the active model and record the exchange if it succeeds."""
        state = self.state
        if state.client is None or state.memory is None:
            raise ConfigurationError("No model selected")

        reply = state.client.invoke(self.build_prompt(text))
        state.memory.record(text, reply)
        return reply

    # Interactive loop

    def choose_model(self) -> bool:
        """Prompt until a model is selected.

        While switching away from an active model, an empty answer keeps the
        current model and memory; False is returned in that case.
        """
        switching = self.state.descriptor is not None
        models = self.registry.list()
        prompt = f"\nEnter model number ({models[0].id}-{models[-1].id})"
        if switching:
            prompt += ", or press Enter to keep the current model"
        prompt += ": "

        while True:
            self.show_model_menu()
            choice = self._read(prompt)
            if switching and not choice.strip():
                self.console.show(f"Keeping {self.state.descriptor.label}")
                return False

            try:
                self.select_model(choice)
            except ModelNotFoundError:
                self.console.show("❌ Invalid selection. Please try again.")
            except CredentialNotConfiguredError as e:
                self._report_missing_credential(e.provider)
            except ConfigurationError as e:
                logger.info(f"[SESSION] Could not initialize model {choice.strip()!r}: {e}")
                self.console.show(f"❌ Error initializing model: {e}")
            else:
                self.console.show(f"\n✅ Selected: {self.state.descriptor.label}")
                return True

    def handle_turn(self, raw_input: str) -> LoopAction:
        """Dispatch one line of user input."""
        if self.state.phase is Phase.TERMINATED:
            return LoopAction.TERMINATE

        text = raw_input.strip()
        command = text.lower()

        if command in QUIT_COMMANDS:
            self.console.show("\n🤖 Goodbye! Thanks for chatting with me!")
            self.terminate()
            return LoopAction.TERMINATE
        if command == SWITCH_COMMAND:
            self.choose_model()
            return LoopAction.CONTINUE
        if command == CLEAR_COMMAND:
            self.clear_memory()
            return LoopAction.CONTINUE
        if command == MODELS_COMMAND:
            self.show_model_menu()
            return LoopAction.CONTINUE
        if not text:
            self.console.show(
                "Please enter a message or use commands: 'switch', 'clear', 'models', 'quit'"
            )
            return LoopAction.CONTINUE

        self._chat(text)
        return LoopAction.CONTINUE

    def run(self) -> SessionState:
        """Select a model if needed, then read and handle input until quit."""
        self.show_welcome()
        try:
            if self.state.phase is Phase.UNINITIALIZED:
                self.choose_model()
            self.console.show("\n🚀 Starting chat session...")
            self.show_commands()

            while self.state.phase is not Phase.TERMINATED:
                raw_input = self._read(f"\n💬 You [{self.state.descriptor.display_name}]: ")
                if self.handle_turn(raw_input) is LoopAction.TERMINATE:
                    break
        except EOFError:
            self.console.show()
            self.terminate()
        return self.state

    def _chat(self, text: str) -> None:
        name = self.state.descriptor.display_name if self.state.descriptor else "Assistant"
        self.console.show(f"\n🤔 {name} is thinking...")
        try:
            reply = self.send_message(text)
        except ProviderError as e:
            self._report_provider_error(e)
            return
        except ConfigurationError as e:
            self.console.show(f"\n❌ Error: {e}. Type 'switch' to choose a model.")
            return

        self.console.show(f"\n🤖 {name}: {reply}")
        self.show_memory_stats()

    def _read(self, prompt: str) -> str:
        waiting = self.state.phase is Phase.READY
        if waiting:
            self.state = self.state.with_phase(Phase.AWAITING_INPUT)
        try:
            return self.console.read(prompt)
        finally:
            if waiting:
                self.state = self.state.with_phase(Phase.READY)

    # Display

    def show_welcome(self) -> None:
        self.console.show("🤖 Multi-Model Chatbot with Memory")
        self.console.show(SEPARATOR)
        self.console.show("Welcome! This chatbot supports multiple AI models:")
        self.console.show("• Google Gemini models")
        self.console.show("• Groq models (Llama, Mixtral)")
        self.console.show("• Conversation memory for context retention")
        self.console.show(SEPARATOR)

    def show_commands(self) -> None:
        self.console.show("Commands:")
        self.console.show("• Type your message to chat")
        self.console.show("• 'switch' - Change AI model")
        self.console.show("• 'clear' - Clear conversation memory")
        self.console.show("• 'models' - Show available models")
        self.console.show("• 'quit', 'exit', or 'bye' - End conversation")
        self.console.show(SEPARATOR)

    def show_model_menu(self) -> None:
        self.console.show("\n🤖 Select AI Model:")
        self.console.show(SEPARATOR)
        for model in self.registry.list():
            status = "✅" if self.validator.is_configured(model) else "❌"
            current = "  <- current" if model == self.state.descriptor else ""
            self.console.show(f"{model.id}. {status} {model.label}{current}")
        self.console.show("\n❌ = API key not configured")
        self.console.show("✅ = Ready to use")
        self.console.show(SEPARATOR)

    def show_memory_stats(self) -> None:
        if self.state.memory is None:
            return
        count = self.state.memory.turn_count()
        noun = "turn" if count == 1 else "turns"
        self.console.show(
            f"📊 Memory: {count} {noun} stored"
            f" | Model: {self.state.descriptor.display_name}"
        )

    def _report_missing_credential(self, provider: str) -> None:
        self.console.show(f"❌ {provider} API key not configured!")
        url = config.API_KEY_URLS.get(provider)
        if url:
            self.console.show(f"Get your API key from: {url}")
        self.console.show("Add it to the .env file and restart the application.")

    def _report_provider_error(self, error: ProviderError) -> None:
        descriptor = self.state.descriptor
        logger.info(f"[SESSION] {error.category} error from {descriptor.model_identifier}: {error}")
        self.console.show(f"\n❌ Error: {error}")

        if isinstance(error, AuthenticationError):
            self.console.show(f"Please check your {descriptor.provider.value} API key in the .env file")
        elif isinstance(error, QuotaExceededError):
            self.console.show(
                "You may have reached your API quota limit. Try switching to another model."
            )
        elif isinstance(error, TransientError):
            self.console.show(
                "The provider could not be reached. Try again, or type 'switch' to use another model."
            )
