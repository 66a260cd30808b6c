#!/usr/bin/env python3
"""Recipe: Generate case-study summaries for portfolio projects.

Problem:
    Project cards carry a one-line description; visitors who want more need a
    short, consistent case study per project.

When to use:
    - You are checking summary quality for every project on the page.
    - You want to see how failures surface to the page (one message, no
      partial text).

Run:
    python -m cookbook getting-started/project-summaries --project "Real-time Analytics Dashboard"

Success check:
    - Each project prints three paragraphs separated by blank lines.
    - A failing call prints the user-facing error instead of a traceback.
"""

from __future__ import annotations

import argparse
import asyncio

from cookbook.utils.presentation import (
    print_block,
    print_header,
    print_kv_rows,
    print_learning_hints,
    print_section,
)
from cookbook.utils.runtime import (
    add_runtime_args,
    build_config_or_exit,
    load_profile_or_exit,
)
from folio import Config, GenerationFailed, GenerativeTextClient, Profile


async def main_async(
    *, config: Config, profile: Profile, only: str | None = None
) -> int:
    projects = [profile.project(only)] if only else list(profile.projects)
    failures = 0

    async with GenerativeTextClient.from_config(config, profile=profile) as client:
        # Each card is independent; run them side by side like the page does.
        results = await asyncio.gather(
            *(client.generate_project_summary(p) for p in projects),
            return_exceptions=True,
        )

    for project, result in zip(projects, results, strict=True):
        print_section(project.title)
        print_kv_rows([("Technologies", ", ".join(project.tags))])
        if isinstance(result, GenerationFailed):
            failures += 1
            print_kv_rows([("Error", result.user_message)])
            continue
        if isinstance(result, BaseException):
            raise result
        print()
        print_block(result)

    print_learning_hints(
        [
            (
                "Next: rerun with --no-mock to see real summaries."
                if config.use_mock
                else "Next: compare summaries across models with --model."
            ),
            (
                "Next: check GEMINI_API_KEY and network access, then retry."
                if failures
                else "Next: load your own projects with --profile path/to/profile.toml."
            ),
        ]
    )
    return 1 if failures else 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate a case-study summary for each portfolio project.",
    )
    parser.add_argument(
        "--project",
        default=None,
        help="Only summarize the project with this title.",
    )
    add_runtime_args(parser)
    args = parser.parse_args()
    config = build_config_or_exit(args)
    profile = load_profile_or_exit(args)
    if args.project:
        try:
            profile.project(args.project)
        except KeyError as exc:
            parser.error(str(exc))
    print_header("Project summaries", config=config)
    raise SystemExit(asyncio.run(main_async(config=config, profile=profile, only=args.project)))


if __name__ == "__main__":
    main()
