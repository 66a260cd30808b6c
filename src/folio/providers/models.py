"""Domain models for the provider transport layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, get_args

from folio.errors import InputError

Role = Literal["user", "assistant"]

_ROLES: frozenset[str] = frozenset(get_args(Role))


@dataclass(frozen=True)
class ConversationTurn:
    """One message in a conversation, tagged with its speaker role."""

    role: Role
    text: str

    def __post_init__(self) -> None:
        if self.role not in _ROLES:
            raise InputError(
                f"Unknown turn role: {self.role!r}",
                hint="Use 'user' or 'assistant'.",
            )
        if not isinstance(self.text, str):
            raise InputError("Turn text must be a string")


@dataclass(frozen=True)
class GenerationRequest:
    """A system instruction plus the ordered turns sent in one call.

    Built fresh per call and never retained afterwards.
    """

    system_instruction: str
    turns: tuple[ConversationTurn, ...]

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the request stays immutable.
        object.__setattr__(self, "turns", tuple(self.turns))
        if not self.turns:
            raise InputError("A generation request needs at least one turn")
        if not self.system_instruction or not self.system_instruction.strip():
            raise InputError("A generation request needs a system instruction")


@dataclass(frozen=True)
class GenerationResult:
    """Text extracted from a successful generation call."""

    text: str
    finish_reason: str | None = None
    usage: dict[str, int] = field(default_factory=dict)
    raw: dict[str, Any] | None = field(default=None, repr=False, compare=False)
