"""Run folio recipes: ``python -m cookbook <recipe> [recipe args]``.

A recipe is named by its path under ``cookbook/``, with or without the
``.py`` suffix, e.g. ``getting-started/persona-chat``. Arguments after the
recipe name are handed to the recipe unchanged.
"""

from __future__ import annotations

import argparse
from pathlib import Path
import runpy
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

ROOT = Path(__file__).resolve().parent
HELPER_DIRS = frozenset({"utils", "__pycache__"})
START_HERE = "getting-started/project-summaries"


def _is_recipe(path: Path) -> bool:
    rel = path.relative_to(ROOT)
    return (
        path.suffix == ".py"
        and not path.name.startswith("__")
        and not HELPER_DIRS.intersection(rel.parts)
    )


def list_recipes() -> list[str]:
    """Recipe names (paths relative to the cookbook, without ``.py``)."""
    return sorted(
        p.relative_to(ROOT).with_suffix("").as_posix()
        for p in ROOT.rglob("*.py")
        if _is_recipe(p)
    )


def resolve_recipe(name: str) -> Path:
    """Map a recipe name to its file, rejecting anything outside the cookbook."""
    rel = name.removeprefix("cookbook/").removesuffix(".py") + ".py"
    path = (ROOT / rel).resolve()
    if path.is_file() and path.is_relative_to(ROOT) and _is_recipe(path):
        return path
    raise FileNotFoundError(f"Recipe not found: {name!r}. Use --list to see recipes.")


def describe(path: Path) -> str:
    """The ``Recipe:`` line of a recipe's module docstring, if any."""
    with path.open(encoding="utf-8") as fh:
        for _, line in zip(range(10), fh):
            text = line.strip().lstrip('"')
            if text.startswith("Recipe:"):
                return text.removeprefix("Recipe:").strip().rstrip(".")
    return ""


def parse_args(argv: Sequence[str]) -> tuple[argparse.Namespace, list[str]]:
    """Split ``argv`` into runner options and the recipe's own arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m cookbook",
        description="Runnable recipes for the folio portfolio client.",
    )
    parser.add_argument("recipe", nargs="?", help="recipe to run")
    parser.add_argument("--list", action="store_true", help="list recipes and exit")

    args = list(argv)
    cut = next((i + 1 for i, a in enumerate(args) if not a.startswith("-")), len(args))
    return parser.parse_args(args[:cut]), args[cut:]


def run(path: Path, recipe_args: Sequence[str]) -> int:
    """Execute ``path`` as ``__main__`` and return its exit status."""
    saved = sys.argv
    sys.argv = [str(path), *recipe_args]
    try:
        runpy.run_path(str(path), run_name="__main__")
    except SystemExit as exc:
        if exc.code is None or isinstance(exc.code, int):
            return exc.code or 0
        print(exc.code, file=sys.stderr)
        return 1
    finally:
        sys.argv = saved
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args, recipe_args = parse_args(sys.argv[1:] if argv is None else argv)

    if args.list or not args.recipe:
        for name in list_recipes():
            marker = "  <- start here" if name == START_HERE else ""
            print(f"  {name:<40s} {describe(resolve_recipe(name))}{marker}")
        return 0

    try:
        path = resolve_recipe(args.recipe)
    except FileNotFoundError as exc:
        print(exc, file=sys.stderr)
        return 2
    return run(path, recipe_args)


if __name__ == "__main__":
    raise SystemExit(main())
