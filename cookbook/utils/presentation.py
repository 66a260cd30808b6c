"""Shared output helpers for cookbook recipe terminal presentation.

These helpers aim for:
- scan-friendly sectioning
- compact, consistent key/value rows
- paragraphs and line breaks preserved as the model wrote them
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cookbook.utils.runtime import print_run_mode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from folio import Config, ConversationTurn


def print_header(title: str, *, config: Config) -> None:
    """Print recipe title with a consistent runtime mode line."""
    print(title)
    print("=" * len(title))
    print_run_mode(config)


def print_section(title: str) -> None:
    """Print a named section heading."""
    print(f"\n{title}")
    print("-" * len(title))


def print_kv_rows(rows: list[tuple[str, object]]) -> None:
    """Print compact key/value rows using a uniform bullet style."""
    for key, value in rows:
        rendered = str(value)
        # Preserve readability for multi-line values (indent continuation lines).
        lines = rendered.splitlines() or [""]
        print(f"- {key}: {lines[0]}")
        for cont in lines[1:]:
            print(f"  {' ' * len(key)}  {cont}")


def print_block(text: str) -> None:
    """Print text indented, keeping blank lines between paragraphs."""
    for line in text.strip().splitlines() or [""]:
        print(f"  {line}" if line else "")


def print_transcript(turns: Iterable[ConversationTurn]) -> None:
    """Print a chat transcript, one speaker label per turn."""
    for turn in turns:
        speaker = "You" if turn.role == "user" else "Assistant"
        print(f"\n{speaker}:")
        print_block(turn.text)


def print_learning_hints(hints: list[str], *, title: str = "Next steps") -> None:
    """Print short coaching bullets that explain what to do next."""
    if not hints:
        return
    print_section(title)
    for hint in hints:
        print(f"- {hint}")
