"""Terminal input and output used by the session."""

try:
    import readline  # noqa: F401  line editing and history for input()
except ImportError:
    pass


class Console:
    """Line-oriented console on top of input() and print()."""

    def read(self, prompt: str) -> str:
        return input(prompt)

    def show(self, text: str = "") -> None:
        print(text, flush=True)
