#!/usr/bin/env python3
"""Recipe: Talk to the portfolio persona chatbot.

Problem:
    Visitors ask free-form questions about the portfolio owner; answers should
    stay in persona and the transcript should survive a failed call.

When to use:
    - You are tuning the persona profile (bio, focus).
    - You want to watch how the full history is resent on every turn.

Run:
    python -m cookbook getting-started/persona-chat --message "What do you build?" --message "Which stack?"

Success check:
    - The transcript starts with the greeting and alternates You/Assistant.
    - A failed turn shows the apology reply and the error line below it.
"""

from __future__ import annotations

import argparse
import asyncio

from cookbook.utils.presentation import (
    print_header,
    print_kv_rows,
    print_learning_hints,
    print_section,
    print_transcript,
)
from cookbook.utils.runtime import (
    add_runtime_args,
    build_config_or_exit,
    load_profile_or_exit,
)
from folio import ChatSession, Config, GenerativeTextClient, Profile

DEFAULT_MESSAGES = (
    "What kind of projects do you work on?",
    "Which technologies do you reach for first?",
)


async def main_async(
    messages: list[str], *, config: Config, profile: Profile
) -> int:
    errors: list[str] = []
    async with GenerativeTextClient.from_config(config, profile=profile) as client:
        session = ChatSession(client)
        for message in messages:
            await session.send(message)
            if session.last_error:
                errors.append(session.last_error)

    print_section("Transcript")
    print_transcript(session.transcript)

    print_section("Session")
    print_kv_rows(
        [
            ("Turns", len(session.transcript)),
            ("Failed turns", len(errors)),
        ]
    )
    for err in errors:
        print_kv_rows([("Error", err)])

    print_learning_hints(
        [
            "Next: edit the bio/focus in a profile file and pass --profile to reshape the persona.",
            "Next: long sessions resend every turn; watch request size grow with --verbose.",
        ]
    )
    return 1 if errors else 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Send messages to the persona chatbot and print the transcript.",
    )
    parser.add_argument(
        "--message",
        action="append",
        default=None,
        help="Message to send (repeatable). Defaults to two sample questions.",
    )
    add_runtime_args(parser)
    args = parser.parse_args()
    config = build_config_or_exit(args)
    profile = load_profile_or_exit(args)
    messages = [m for m in (args.message or DEFAULT_MESSAGES) if m.strip()]
    print_header("Persona chat", config=config)
    raise SystemExit(asyncio.run(main_async(messages, config=config, profile=profile)))


if __name__ == "__main__":
    main()
