"""Telegram rendering of a journal session."""

import logging
from typing import Any

from telegram import Bot, CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message, ReplyParameters
from telegram.constants import ChatMemberStatus, ChatType
from telegram.error import BadRequest, TelegramError

from ..errors import RenderDispatchFailed
from ..journal import CEILING_VALUES, EVIDENCE_LABELS
from ..session import JournalSurface, RenderPayload, format_journal
from ..session.render import STATE_MARKERS, evidence_count_label

logger = logging.getLogger(__name__)

MAX_BUTTONS_PER_ROW = 4
EVIDENCE_PREFIX = "ev:"
CEILING_PREFIX = "ceil:"
SELECTED_MARKER = "• "


def build_keyboard(payload: RenderPayload) -> InlineKeyboardMarkup:
    """Build the journal controls: evidence count row, then evidence buttons."""
    ceiling_row = [
        InlineKeyboardButton(
            (SELECTED_MARKER if count == payload.ceiling else "") + evidence_count_label(count),
            callback_data=f"{CEILING_PREFIX}{count}",
        )
        for count in CEILING_VALUES
    ]

    buttons = [
        InlineKeyboardButton(
            f"{STATE_MARKERS[payload.states[evidence]]} {label}",
            callback_data=f"{EVIDENCE_PREFIX}{evidence.value}",
        )
        for evidence, label in EVIDENCE_LABELS.items()
    ]
    rows = [ceiling_row]
    rows.extend(
        buttons[i : i + MAX_BUTTONS_PER_ROW] for i in range(0, len(buttons), MAX_BUTTONS_PER_ROW)
    )
    return InlineKeyboardMarkup(rows)


def _is_not_modified(error: BadRequest) -> bool:
    return "message is not modified" in str(error).lower()


class TelegramJournalSurface(JournalSurface):
    """A journal shown as a Telegram message with an inline keyboard."""

    def __init__(
        self,
        bot: Bot,
        chat_id: int,
        chat_type: str = ChatType.PRIVATE,
        reply_to_message_id: int | None = None,
    ) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self.chat_type = chat_type
        self.reply_to_message_id = reply_to_message_id
        self.message: Message | None = None

    @property
    def key(self) -> tuple[int, int] | None:
        """Routing key for callback queries on the journal message."""
        if self.message is None:
            return None
        return (self.chat_id, self.message.message_id)

    def _reply_parameters(self) -> ReplyParameters | None:
        if self.reply_to_message_id is None:
            return None
        return ReplyParameters(
            message_id=self.reply_to_message_id,
            allow_sending_without_reply=True,
        )

    async def can_render(self) -> bool:
        if self.chat_type == ChatType.PRIVATE:
            return True

        member = await self.bot.get_chat_member(self.chat_id, self.bot.id)
        if member.status in (ChatMemberStatus.LEFT, ChatMemberStatus.BANNED):
            return False
        if member.status == ChatMemberStatus.RESTRICTED:
            return bool(getattr(member, "can_send_messages", False))
        if self.chat_type == ChatType.CHANNEL:
            return member.status == ChatMemberStatus.OWNER or bool(
                getattr(member, "can_post_messages", False)
            )
        return True

    async def render(self, payload: RenderPayload, interaction: Any = None) -> None:
        text = format_journal(payload)
        markup = build_keyboard(payload)

        try:
            if self.message is None:
                self.message = await self.bot.send_message(
                    chat_id=self.chat_id,
                    text=text,
                    reply_markup=markup,
                    reply_parameters=self._reply_parameters(),
                )
            else:
                await self.bot.edit_message_text(
                    text=text,
                    chat_id=self.chat_id,
                    message_id=self.message.message_id,
                    reply_markup=markup,
                )
        except BadRequest as e:
            if not _is_not_modified(e):
                raise RenderDispatchFailed(str(e)) from e
        except TelegramError as e:
            raise RenderDispatchFailed(str(e)) from e

        if isinstance(interaction, CallbackQuery):
            try:
                await interaction.answer()
            except TelegramError:
                logger.debug("Could not answer callback query", exc_info=True)

    async def notify(
        self,
        actor_id: str,
        message: str,
        *,
        ephemeral: bool = True,
        interaction: Any = None,
    ) -> None:
        # Only callback query answers are private; chat replies are seen by all.
        if isinstance(interaction, CallbackQuery):
            await interaction.answer(message, show_alert=ephemeral)
            return

        await self.bot.send_message(
            chat_id=self.chat_id,
            text=message,
            reply_parameters=self._reply_parameters(),
        )

    async def delete_surface(self) -> None:
        if self.message is None:
            return
        message_id = self.message.message_id
        self.message = None
        await self.bot.delete_message(chat_id=self.chat_id, message_id=message_id)
