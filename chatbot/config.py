"""Application configuration."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = Path(__file__).parent

# Provider credentials, read once at startup
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GROQ_API_KEY = os.getenv("GROQ_API_KEY")

# OpenAI-compatible endpoints of each provider family
GOOGLE_API_URL = os.getenv(
    "GOOGLE_API_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
)
GROQ_API_URL = os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1")

# Generation parameters are fixed for every model
TEMPERATURE = 0.7
MAX_OUTPUT_TOKENS = 2048

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

PROMPT_TEMPLATE_PATH = PACKAGE_DIR / "prompt_template.txt"

API_KEY_URLS = {
    "Google": "https://aistudio.google.com/app/apikey",
    "Groq": "https://console.groq.com/keys",
}


def load_credentials() -> dict[str, str | None]:
    """Return the credential values keyed by environment variable name."""
    return {
        "GOOGLE_API_KEY": GOOGLE_API_KEY,
        "GROQ_API_KEY": GROQ_API_KEY,
    }


def load_prompt_template() -> str:
    """Load the prompt template from file."""
    return PROMPT_TEMPLATE_PATH.read_text(encoding="utf-8").strip()
