"""Shared runtime helpers for cookbook recipes."""

from __future__ import annotations

import argparse
import logging
import sys

from folio import DEFAULT_PROFILE, Config, Profile, load_profile
from folio.config import DEFAULT_MODEL
from folio.errors import ConfigurationError


def add_runtime_args(parser: argparse.ArgumentParser) -> None:
    """Add common model/runtime arguments to a recipe parser."""
    parser.add_argument(
        "--model",
        default=DEFAULT_MODEL,
        help="Gemini model id.",
    )
    parser.add_argument(
        "--mock",
        action=argparse.BooleanOptionalAction,
        default=True,
        help=("Run in mock mode (default: enabled). Use --no-mock for real API calls."),
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="Optional API key override. Usually read from GEMINI_API_KEY.",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="Optional profile TOML file (defaults to the built-in profile).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log retry attempts and request shapes to stderr.",
    )


def build_config_or_exit(args: argparse.Namespace) -> Config:
    """Build Config from parsed args, exiting with a concise actionable error."""
    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        return Config(
            model=args.model,
            use_mock=bool(args.mock),
            api_key=args.api_key,
        )
    except ConfigurationError as exc:
        hint = f" Hint: {exc.hint}" if exc.hint else ""
        print(f"Configuration error: {exc}.{hint}", file=sys.stderr)
        raise SystemExit(2) from exc


def load_profile_or_exit(args: argparse.Namespace) -> Profile:
    """Load the profile named by ``--profile`` or fall back to the default."""
    if not getattr(args, "profile", None):
        return DEFAULT_PROFILE
    try:
        return load_profile(args.profile)
    except ConfigurationError as exc:
        hint = f" Hint: {exc.hint}" if exc.hint else ""
        print(f"Profile error: {exc}.{hint}", file=sys.stderr)
        raise SystemExit(2) from exc


def print_run_mode(config: Config) -> None:
    """Print a compact runtime mode line for recipe users."""
    mode = "mock" if config.use_mock else "real-api"
    print(
        f"Mode: {mode} | model={config.model} | max_attempts={config.retry.max_attempts}"
    )
