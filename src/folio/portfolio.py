"""Portfolio data: owner profile, skills and projects.

Profiles are plain pydantic models so they can be loaded from a TOML file and
validated in one step. ``DEFAULT_PROFILE`` mirrors the published site.
"""

from __future__ import annotations

from pathlib import Path
import tomllib
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from folio.errors import ConfigurationError


class Skill(BaseModel):
    """One skill card."""

    model_config = ConfigDict(frozen=True)

    icon: str = ""
    name: str
    detail: str = ""


class Project(BaseModel):
    """A portfolio project: the input to summary generation."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    desc: str = Field(min_length=1)
    #: Order is preserved; it is the order shown on the page and in prompts.
    tags: tuple[str, ...] = ()

    @field_validator("title", "desc")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class Profile(BaseModel):
    """The portfolio owner and everything shown about them."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    title: str = Field(min_length=1)
    bio: str = ""
    #: Free-text professional focus used in the chat persona.
    focus: str = ""
    skills: tuple[Skill, ...] = ()
    projects: tuple[Project, ...] = ()

    @field_validator("name", "title")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @property
    def first_name(self) -> str:
        return self.name.split()[0]

    def project(self, title: str) -> Project:
        """Return the project with ``title`` (case-insensitive)."""
        key = title.strip().lower()
        for p in self.projects:
            if p.title.lower() == key:
                return p
        raise KeyError(f"Unknown project: {title!r}")


DEFAULT_PROFILE = Profile(
    name="Nitesh Kumar",
    title="Senior Full-Stack Engineer",
    bio=(
        "Specializing in the Next.js App Router, React Server Components (RSC), "
        "and robust, data-driven cloud architectures. I deliver high-performance, "
        "scalable web solutions that meet modern industry standards. Passionate "
        "about leveraging AI for better developer experience and user interaction."
    ),
    focus=(
        "Your portfolio contains projects in Next.js, React, and TypeScript, and "
        "your professional goals are focused on full-stack development and cloud "
        "architecture."
    ),
    skills=(
        Skill(icon="React", name="Next.js & React", detail="App Router, RSC, SSG, SSR, Incremental Adoption."),
        Skill(icon="TypeScript", name="TypeScript", detail="Ensuring type safety and maintainability for large-scale applications."),
        Skill(icon="Database", name="Database & ORM", detail="PostgreSQL, MongoDB, Prisma, Drizzle ORM."),
        Skill(icon="Cloud", name="Cloud & DevOps", detail="Vercel, AWS, Docker, CI/CD pipelines."),
        Skill(icon="AI", name="AI Integration", detail="Gemini API integration for personalized and dynamic experiences."),
        Skill(icon="Testing", name="Testing", detail="Unit, integration (Jest, Vitest), and E2E (Playwright) testing."),
    ),
    projects=(
        Project(
            title="Serverless E-Commerce Platform",
            desc=(
                "A modern Next.js 16 storefront using Partial Pre-Rendering (PPR) "
                "for instant product page loads. Integrated with Stripe and Vercel's "
                "Edge functions."
            ),
            tags=("Next.js 16", "PPR", "Stripe", "TypeScript"),
        ),
        Project(
            title="Real-time Analytics Dashboard",
            desc=(
                "Built with React and WebSockets. Utilizes Recoil for global state "
                "management and D3.js for complex data visualizations. Focus on "
                "performance and accessibility."
            ),
            tags=("React", "D3.js", "WebSockets", "Tailwind CSS"),
        ),
        Project(
            title="AI Content Generation Tool",
            desc=(
                "A full-stack application leveraging the Gemini API for creative text "
                "generation. Features Server Actions for secure, fast form handling "
                "and database persistence."
            ),
            tags=("Next.js Server Actions", "Gemini API", "PostgreSQL", "Auth.js"),
        ),
    ),
)


def profile_from_mapping(data: dict[str, Any], *, source: str = "<mapping>") -> Profile:
    """Validate a raw mapping into a Profile."""
    try:
        return Profile.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(p) for p in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid profile in {source}: {loc or 'profile'}: {first.get('msg')}",
            hint="A profile needs name and title; projects need title and desc.",
        ) from exc


def load_profile(path: str | Path) -> Profile:
    """Load a profile from a TOML file.

    Top-level keys map to Profile fields; skills and projects are arrays of
    tables (``[[projects]]``).
    """
    p = Path(path).expanduser()
    try:
        with p.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as exc:
        raise ConfigurationError(
            f"Profile file not found: {p}",
            hint="Pass an existing .toml file or omit it to use the default profile.",
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(
            f"Profile file is not valid TOML: {p}: {exc}",
        ) from exc
    return profile_from_mapping(data, source=str(p))
