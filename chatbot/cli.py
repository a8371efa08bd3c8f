"""Command-line entry point: startup checks, logging and exit codes."""

import argparse
import logging

from chatbot import config
from chatbot.credentials import CredentialValidator
from chatbot.errors import ConfigurationError
from chatbot.registry import ModelRegistry
from chatbot.session import ConversationSession

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Chat with Google Gemini and Groq models from the terminal"
    )
    parser.add_argument("--model", type=int, help="Model number to start with (skips the menu)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def resolve_log_level(name: str) -> int:
    """Map a LOG_LEVEL name to a logging level, falling back to WARNING."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def check_api_keys(registry: ModelRegistry, validator: CredentialValidator) -> bool:
    """Warn about unconfigured providers. Returns False if none is usable."""
    models = registry.list()
    if not validator.configured_providers(models):
        print("⚠️  Warning: No API keys configured!")
        print("Please configure at least one API key:")
        print(f"• Google Gemini: Get from {config.API_KEY_URLS['Google']}")
        print(f"• Groq: Get from {config.API_KEY_URLS['Groq']}")
        print("Add them to the .env file and restart the application.")
        return False

    for provider in validator.unconfigured_providers(models):
        print(f"⚠️  {provider.value} API key not configured ({provider.value} models will be unavailable)")
    return True


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else resolve_log_level(config.LOG_LEVEL),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("🚀 Starting Multi-Model Chatbot...")
    registry = ModelRegistry()
    validator = CredentialValidator(config.load_credentials())
    if not check_api_keys(registry, validator):
        return 1

    try:
        session = ConversationSession(registry, validator)
        if args.model is not None:
            try:
                session.select_model(args.model)
            except ConfigurationError as e:
                print(f"❌ Cannot start with model {args.model}: {e}")
        session.run()
    except KeyboardInterrupt:
        print("\n\n👋 Chatbot shutting down gracefully...")
        return 0
    except Exception:
        logger.exception("Failed to start chatbot")
        return 1
    return 0
