"""Telegram bot integration for Ghostbook."""

import logging
import os
from typing import Any

from telegram import BotCommand, CallbackQuery, Message, Update
from telegram.constants import MessageEntityType, ParseMode
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
)

from ..journal import Evidence
from ..logging import JSONLLogger, get_logger
from ..session import (
    Actor,
    EventOutcome,
    JournalEvent,
    JournalSession,
    SessionConfig,
    SessionManager,
    SetCeiling,
    ToggleEvidence,
)
from .surface import CEILING_PREFIX, EVIDENCE_PREFIX, TelegramJournalSurface

logger = logging.getLogger(__name__)


WELCOME_MESSAGE = """
👻 *Ghostbook*

A shared ghost hunting journal.

*Commands:*
/journal - Open a journal (invite others with @mentions, up to three)
/help - Show this message

Tap an evidence to cycle it between unknown, found and ruled out.
Pick the difficulty's evidence count in the first row.
"""

CLOSED_MESSAGE = "This journal is closed."
UNKNOWN_ACTION_MESSAGE = "Unknown action."

BOT_COMMANDS = [
    BotCommand("journal", "Creates a ghost hunting journal"),
    BotCommand("help", "Shows how to use the journal"),
]


def parse_callback_data(
    data: str, actor: Actor, interaction: Any = None
) -> JournalEvent:
    """Turn a journal button's callback data into an event.

    Raises ValueError if the data doesn't belong to a journal button.
    """
    if data.startswith(EVIDENCE_PREFIX):
        evidence = Evidence(data[len(EVIDENCE_PREFIX) :])
        return ToggleEvidence(actor, evidence, interaction=interaction)

    if data.startswith(CEILING_PREFIX):
        ceiling = int(data[len(CEILING_PREFIX) :])
        return SetCeiling(actor, ceiling, interaction=interaction)

    raise ValueError(f"Unknown callback data: {data!r}")


def parse_invites(message: Message) -> list[str]:
    """Collect invited users from the mentions in a command message."""
    invites: list[str] = []
    entities = message.parse_entities(
        [MessageEntityType.MENTION, MessageEntityType.TEXT_MENTION]
    )
    for entity, text in entities.items():
        if entity.type == MessageEntityType.TEXT_MENTION and entity.user is not None:
            invites.append(str(entity.user.id))
        elif entity.type == MessageEntityType.MENTION:
            invites.append(text)
    return invites


class TelegramBot:
    """Telegram bot serving ghost hunting journals."""

    def __init__(
        self,
        token: str | None = None,
        session_config: SessionConfig | None = None,
        refresh_commands: bool = False,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.token = token or os.getenv("TELEGRAM_TOKEN")
        if not self.token:
            raise ValueError("TELEGRAM_TOKEN not set")

        self.session_config = session_config or SessionConfig.from_env()
        self.refresh_commands = refresh_commands
        self.sessions = SessionManager()
        self.json_logger = json_logger or get_logger()
        self._app: Application | None = None

    async def _handle_help(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /start and /help commands."""
        assert update.message is not None

        await update.message.reply_text(
            WELCOME_MESSAGE,
            parse_mode=ParseMode.MARKDOWN,
        )

    async def _handle_journal(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /journal command."""
        assert update.message is not None
        assert update.effective_user is not None

        message = update.message
        user = update.effective_user

        surface = TelegramJournalSurface(
            context.bot,
            message.chat_id,
            chat_type=message.chat.type,
            reply_to_message_id=message.message_id,
        )
        session = JournalSession(
            surface,
            Actor(str(user.id), user.username),
            parse_invites(message),
            config=self.session_config,
            json_logger=self.json_logger,
        )

        self.json_logger.log(
            "telegram_journal",
            session_id=session.session_id,
            chat_id=str(message.chat_id),
            actor_id=str(user.id),
        )

        if await session.start() and surface.key is not None:
            self.sessions.register(surface.key, session)

    async def _handle_callback(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Route a journal button press to its session."""
        query = update.callback_query
        assert query is not None

        session = None
        if query.message is not None:
            session = self.sessions.get((query.message.chat.id, query.message.message_id))

        if session is None:
            await _answer(query, CLOSED_MESSAGE)
            return

        actor = Actor(str(query.from_user.id), query.from_user.username)
        try:
            event = parse_callback_data(query.data or "", actor, interaction=query)
        except ValueError:
            await _answer(query, UNKNOWN_ACTION_MESSAGE)
            return

        outcome = await session.handle(event)
        if outcome is EventOutcome.REJECTED:
            await _answer(query, UNKNOWN_ACTION_MESSAGE)
        elif outcome is EventOutcome.DISCARDED:
            await _answer(query, CLOSED_MESSAGE)

    async def _post_init(self, application: Application) -> None:
        """Called after Application.initialize()."""
        if self.refresh_commands:
            logger.info("Started synchronizing commands.")
            await application.bot.set_my_commands(BOT_COMMANDS)
            logger.info("Successfully synchronized commands.")

    async def _post_stop(self, application: Application) -> None:
        """Called after Application.stop(), while the bot can still send requests."""
        count = await self.sessions.terminate_all()
        if count:
            logger.info(f"Closed {count} open journal(s)")

    def build_app(self) -> Application:
        """Build the Telegram application."""
        self._app = (
            Application.builder()
            .token(self.token)
            .concurrent_updates(True)
            .post_init(self._post_init)
            .post_stop(self._post_stop)
            .build()
        )

        self._app.add_handler(CommandHandler("start", self._handle_help))
        self._app.add_handler(CommandHandler("help", self._handle_help))
        self._app.add_handler(CommandHandler("journal", self._handle_journal))
        self._app.add_handler(CallbackQueryHandler(self._handle_callback))

        return self._app

    def run(self) -> None:
        """Run the bot (blocking)."""
        app = self.build_app()

        logger.info("Starting Telegram bot...")
        app.run_polling(allowed_updates=Update.ALL_TYPES)


async def _answer(query: CallbackQuery, text: str) -> None:
    try:
        await query.answer(text)
    except TelegramError:
        logger.debug("Could not answer callback query", exc_info=True)
