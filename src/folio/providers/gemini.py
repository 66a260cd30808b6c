"""Gemini REST provider implementation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from folio.errors import MalformedResponseError
from folio.providers.models import GenerationResult
from folio.transport import Invoker

if TYPE_CHECKING:
    from folio.config import Config
    from folio.providers.models import ConversationTurn, GenerationRequest

logger = logging.getLogger(__name__)

# Gemini speaks "model" where the transcript says "assistant".
_WIRE_ROLES: dict[str, str] = {"user": "user", "assistant": "model"}

_USAGE_KEYS: dict[str, str] = {
    "promptTokenCount": "input_tokens",
    "candidatesTokenCount": "output_tokens",
    "totalTokenCount": "total_tokens",
}


def build_payload(request: GenerationRequest) -> dict[str, Any]:
    """Render a request into the ``generateContent`` JSON body."""
    return {
        "contents": [_turn_to_content(turn) for turn in request.turns],
        "systemInstruction": {"parts": [{"text": request.system_instruction}]},
    }


def _turn_to_content(turn: ConversationTurn) -> dict[str, Any]:
    return {"role": _WIRE_ROLES[turn.role], "parts": [{"text": turn.text}]}


def extract_text(data: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or raise.

    Strict: a missing level, a wrong type or an empty string all raise
    ``MalformedResponseError``; nothing is substituted.
    """
    if not isinstance(data, dict):
        raise MalformedResponseError("Response body is not a JSON object")
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise MalformedResponseError(
            "Response has no candidates",
            hint=_block_hint(data),
        )
    candidate = candidates[0]
    content = candidate.get("content") if isinstance(candidate, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts:
        raise MalformedResponseError(
            "Response candidate has no content parts",
            hint=_finish_hint(candidate),
        )
    first = parts[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str) or not text:
        raise MalformedResponseError("Response candidate has no text")
    return text


def _block_hint(data: dict[str, Any]) -> str | None:
    feedback = data.get("promptFeedback")
    if isinstance(feedback, dict) and feedback.get("blockReason"):
        return f"Prompt was blocked: {feedback['blockReason']}"
    return None


def _finish_hint(candidate: Any) -> str | None:
    if isinstance(candidate, dict) and candidate.get("finishReason"):
        return f"Candidate finished with {candidate['finishReason']}"
    return None


def _extract_usage(data: dict[str, Any]) -> dict[str, int]:
    raw = data.get("usageMetadata")
    if not isinstance(raw, dict):
        return {}
    usage: dict[str, int] = {}
    for wire_key, key in _USAGE_KEYS.items():
        value = raw.get(wire_key)
        if isinstance(value, int):
            usage[key] = value
    return usage


class GeminiProvider:
    """Google Gemini ``generateContent`` provider over plain HTTP."""

    name = "gemini"

    def __init__(self, config: Config, *, invoker: Invoker | None = None) -> None:
        """Create provider from configuration; ``invoker`` is injectable."""
        self.config = config
        self._invoker = invoker or Invoker(
            policy=config.retry,
            timeout_s=config.request_timeout_s,
        )

    @property
    def invoker(self) -> Invoker:
        return self._invoker

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.config.api_key:
            headers["x-goog-api-key"] = self.config.api_key
        return headers

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Send the request through the invoker and extract the reply text."""
        payload = build_payload(request)
        logger.debug(
            "Gemini generate model=%s turns=%d", self.config.model, len(request.turns)
        )
        response = await self._invoker.invoke(
            self.config.resolved_endpoint,
            payload,
            headers=self._headers(),
        )

        # Extraction runs once, after the retry loop; it is never retried.
        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                "Response body is not valid JSON",
                status_code=response.status_code,
            ) from exc

        text = extract_text(data)
        candidate = data["candidates"][0]
        finish_reason = candidate.get("finishReason")
        return GenerationResult(
            text=text,
            finish_reason=finish_reason if isinstance(finish_reason, str) else None,
            usage=_extract_usage(data),
            raw=data,
        )

    async def aclose(self) -> None:
        await self._invoker.aclose()
