"""Ghostbook entry point."""

import asyncio
import logging
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv, set_key

from .cli import run_cli


def run_setup(env_path: Path | None = None) -> Path:
    """Prompt for the bot token and store it in a .env file."""
    path = env_path or Path.cwd() / ".env"
    token = input("Telegram bot token: ").strip()

    path.touch(exist_ok=True)
    set_key(str(path), "TELEGRAM_TOKEN", token)
    return path


def main() -> None:
    """Main entry point."""
    load_dotenv(find_dotenv(usecwd=True))

    if len(sys.argv) > 1:
        command = sys.argv[1]

        if command == "bot":
            from .logging import configure_logger
            from .telegram import TelegramBot

            logging.basicConfig(
                format="%(asctime)s %(name)s %(levelname)s %(message)s",
                level=logging.INFO,
            )
            configure_logger()

            try:
                bot = TelegramBot(refresh_commands="--refresh" in sys.argv[2:])
            except ValueError:
                print("❌ Error: TELEGRAM_TOKEN is not set. Run `ghostbook setup`.")
                sys.exit(1)
            bot.run()
            return

        if command == "setup":
            path = run_setup()
            print(f"✓ Saved {path}")
            return

    asyncio.run(run_cli())


if __name__ == "__main__":
    main()
