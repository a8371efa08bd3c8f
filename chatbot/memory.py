"""In-process conversation history injected into every prompt."""

from chatbot.models import Turn

HUMAN_PREFIX = "Human"
AI_PREFIX = "AI"


class ConversationMemory:
    """Ordered store of completed turns, oldest first.

    History is never truncated or summarised. If the prompt grows past a
    model's context window the provider call fails and the error surfaces
    to the user like any other provider error.
    """

    def __init__(self):
        self._turns: list[Turn] = []

    def record(self, human_text: str, assistant_text: str) -> None:
        self._turns.append(Turn(human_text=human_text, assistant_text=assistant_text))

    def clear(self) -> None:
        self._turns = []

    def render(self) -> str:
        """Render the history block for the prompt template."""
        lines = []
        for turn in self._turns:
            lines.append(f"{HUMAN_PREFIX}: {turn.human_text}")
            lines.append(f"{AI_PREFIX}: {turn.assistant_text}")
        return "\n".join(lines)

    def turn_count(self) -> int:
        return len(self._turns)

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    def __len__(self) -> int:
        return len(self._turns)
