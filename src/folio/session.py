"""Chat session: transcript state for the persona chatbot.

The session owns the transcript for one page visit. It is append-only,
lives in memory and is discarded with the session.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from folio.errors import GenerationFailed, InputError
from folio.prompts import chat_greeting
from folio.providers.models import ConversationTurn

if TYPE_CHECKING:
    from folio.client import GenerativeTextClient

logger = logging.getLogger(__name__)

FALLBACK_REPLY = (
    "I apologize, but I encountered a technical difficulty while processing your "
    "request. Please try asking again."
)

_DEFAULT = object()


class ChatSession:
    """Drive ``continue_chat`` and keep the visible transcript.

    On failure the user turn stays in the transcript, followed by a fixed
    apology turn, and ``last_error`` holds the user-facing message. Only one
    reply may be pending at a time.
    """

    def __init__(
        self,
        client: GenerativeTextClient,
        *,
        greeting: str | None | object = _DEFAULT,
        fallback_reply: str = FALLBACK_REPLY,
    ) -> None:
        self.client = client
        if greeting is _DEFAULT:
            greeting = chat_greeting(client.profile)
        self._initial: tuple[ConversationTurn, ...] = (
            (ConversationTurn(role="assistant", text=greeting),)  # type: ignore[arg-type]
            if greeting
            else ()
        )
        self.fallback_reply = fallback_reply
        self._transcript = self._initial
        self._pending = False
        self.last_error: str | None = None

    @property
    def transcript(self) -> tuple[ConversationTurn, ...]:
        return self._transcript

    @property
    def is_pending(self) -> bool:
        return self._pending

    async def send(self, message: str) -> ConversationTurn:
        """Send ``message`` and return the assistant turn that was appended.

        Raises:
            InputError: The message is blank or a reply is still pending.
        """
        text = message.strip() if isinstance(message, str) else ""
        if not text:
            raise InputError("Cannot send an empty message")
        if self._pending:
            raise InputError(
                "A reply is already pending",
                hint="Wait for the current reply before sending again.",
            )

        self._pending = True
        self.last_error = None
        try:
            reply = await self.client.continue_chat(self._transcript, text)
        except GenerationFailed as exc:
            logger.info("Chat turn failed; appending fallback reply")
            self.last_error = exc.user_message
            fallback = ConversationTurn(role="assistant", text=self.fallback_reply)
            self._transcript = (
                *self._transcript,
                ConversationTurn(role="user", text=text),
                fallback,
            )
            return fallback
        finally:
            self._pending = False

        self._transcript = reply.transcript
        return reply.reply_turn

    def reset(self) -> None:
        """Drop the conversation and restore the greeting."""
        self._transcript = self._initial
        self.last_error = None
