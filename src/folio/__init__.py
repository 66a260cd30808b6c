"""folio: generative text features for a personal portfolio.

Public API:
    - GenerativeTextClient: project summaries and persona chat
    - ChatSession: transcript state for the chatbot
    - Invoker / RetryPolicy: resilient HTTP calls
    - Config: Configuration dataclass
"""

from __future__ import annotations

import logging

from folio.client import ChatReply, GenerativeTextClient
from folio.config import Config
from folio.errors import (
    APIError,
    ConfigurationError,
    ExhaustedRetriesError,
    FolioError,
    GenerationFailed,
    HttpError,
    InputError,
    MalformedResponseError,
    TransportError,
)
from folio.portfolio import DEFAULT_PROFILE, Profile, Project, Skill, load_profile
from folio.providers.models import ConversationTurn, GenerationRequest, GenerationResult
from folio.retry import RetryPolicy
from folio.session import ChatSession
from folio.transport import Invoker

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("folio-genai")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("folio").addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_PROFILE",
    "APIError",
    "ChatReply",
    "ChatSession",
    "Config",
    "ConfigurationError",
    "ConversationTurn",
    "ExhaustedRetriesError",
    "FolioError",
    "GenerationFailed",
    "GenerationRequest",
    "GenerationResult",
    "GenerativeTextClient",
    "HttpError",
    "InputError",
    "Invoker",
    "MalformedResponseError",
    "Profile",
    "Project",
    "RetryPolicy",
    "Skill",
    "TransportError",
    "load_profile",
]
