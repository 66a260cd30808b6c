"""Generative text client: project summaries and persona chat.

Both operations build a ``GenerationRequest``, send it through a provider
(which retries via the invoker) and hand back text. Every failure, whatever
its cause, surfaces as ``GenerationFailed`` carrying a fixed user-facing
message; the internal error stays chained for diagnostics.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from folio.errors import APIError, GenerationFailed, InputError
from folio.portfolio import DEFAULT_PROFILE, Profile, Project
from folio.prompts import (
    persona_system_instruction,
    summary_prompt,
    summary_system_instruction,
)
from folio.providers.gemini import GeminiProvider
from folio.providers.mock import MockProvider
from folio.providers.models import ConversationTurn, GenerationRequest

if TYPE_CHECKING:
    from collections.abc import Sequence

    from folio.config import Config
    from folio.providers.base import Provider

logger = logging.getLogger(__name__)

SUMMARY_FAILED_MESSAGE = "Failed to generate summary. Please check the API status."
CHAT_FAILED_MESSAGE = (
    "Sorry, I'm currently unable to access the portfolio knowledge base. "
    "Please try asking again later."
)


@dataclass(frozen=True)
class ChatReply:
    """A successful chat exchange.

    ``history`` is the outbound turn sequence (previous turns plus the new
    user message) and is the authoritative history after this call. Callers
    append the assistant turn themselves, or use ``transcript``.
    """

    text: str
    history: tuple[ConversationTurn, ...]

    @property
    def reply_turn(self) -> ConversationTurn:
        """The model reply as an assistant turn."""
        return ConversationTurn(role="assistant", text=self.text)

    @property
    def transcript(self) -> tuple[ConversationTurn, ...]:
        """History followed by the reply turn."""
        return (*self.history, self.reply_turn)


def _coerce_project(project: Project | Mapping[str, Any]) -> Project:
    if isinstance(project, Project):
        return project
    if not isinstance(project, Mapping):
        raise InputError(
            f"Expected a Project or mapping, got {type(project).__name__}",
        )
    try:
        return Project.model_validate(dict(project))
    except ValidationError as exc:
        raise InputError(
            f"Invalid project: {exc.errors()[0].get('msg')}",
            hint="A project needs a title, a desc and optional tags.",
        ) from exc


def _coerce_turn(turn: ConversationTurn | Mapping[str, Any]) -> ConversationTurn:
    if isinstance(turn, ConversationTurn):
        return turn
    if isinstance(turn, Mapping):
        return ConversationTurn(role=turn.get("role"), text=turn.get("text", ""))  # type: ignore[arg-type]
    raise InputError(f"Expected a ConversationTurn, got {type(turn).__name__}")


class GenerativeTextClient:
    """Client for the two generative features of the portfolio."""

    def __init__(self, provider: Provider, *, profile: Profile = DEFAULT_PROFILE) -> None:
        self.provider = provider
        self.profile = profile
        self._summary_instruction = summary_system_instruction(profile)
        self._persona_instruction = persona_system_instruction(profile)

    @classmethod
    def from_config(
        cls, config: Config, *, profile: Profile = DEFAULT_PROFILE
    ) -> GenerativeTextClient:
        """Build a client with the provider selected by ``config``."""
        provider: Provider = MockProvider() if config.use_mock else GeminiProvider(config)
        return cls(provider, profile=profile)

    @property
    def summary_instruction(self) -> str:
        """System instruction sent with every summary request."""
        return self._summary_instruction

    @property
    def persona_instruction(self) -> str:
        """System instruction sent with every chat request."""
        return self._persona_instruction

    async def generate_project_summary(self, project: Project | Mapping[str, Any]) -> str:
        """Generate a three-paragraph case-study summary for ``project``.

        Returns the model text verbatim; line breaks are left for the caller
        to render.

        Raises:
            InputError: ``project`` is not a valid project record.
            GenerationFailed: The call failed or returned no text.
        """
        record = _coerce_project(project)
        request = GenerationRequest(
            system_instruction=self._summary_instruction,
            turns=(ConversationTurn(role="user", text=summary_prompt(record)),),
        )
        try:
            result = await self.provider.generate(request)
        except APIError as exc:
            logger.warning("Summary generation failed for %r: %s", record.title, exc)
            raise GenerationFailed(
                SUMMARY_FAILED_MESSAGE, operation="summary", hint=exc.hint
            ) from exc
        return result.text

    async def continue_chat(
        self,
        history: Sequence[ConversationTurn | Mapping[str, Any]],
        message: str,
    ) -> ChatReply:
        """Send ``history`` plus a new user ``message`` and return the reply.

        The full history is sent on every call; it is never truncated.
        ``history`` itself is not modified.

        Raises:
            InputError: ``message`` is empty or a turn is invalid.
            GenerationFailed: The call failed or returned no text.
        """
        if not isinstance(message, str) or not message.strip():
            raise InputError(
                "Chat message must be a non-empty string",
                hint="Strip whitespace and skip sending empty input.",
            )
        turns = (
            *(_coerce_turn(t) for t in history),
            ConversationTurn(role="user", text=message),
        )
        request = GenerationRequest(
            system_instruction=self._persona_instruction,
            turns=turns,
        )
        logger.debug("Chat request with %d turn(s)", len(turns))
        try:
            result = await self.provider.generate(request)
        except APIError as exc:
            logger.warning("Chat reply failed after %d turn(s): %s", len(turns), exc)
            raise GenerationFailed(
                CHAT_FAILED_MESSAGE, operation="chat", hint=exc.hint
            ) from exc
        return ChatReply(text=result.text, history=turns)

    async def aclose(self) -> None:
        await self.provider.aclose()

    async def __aenter__(self) -> GenerativeTextClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
