"""Prompt and system-instruction builders.

System instructions depend only on the profile, so they are constant for a
given client and feature.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from folio.portfolio import Profile, Project


def summary_system_instruction(profile: Profile) -> str:
    """Technical-writer persona used for project summaries."""
    return (
        f"You are an expert technical writer and product marketer for a {profile.title}. "
        "Your goal is to turn technical descriptions into compelling, professional "
        "case studies."
    )


def summary_prompt(project: Project) -> str:
    """Fixed-format request for a three-paragraph executive summary."""
    return (
        "Generate a 3-paragraph executive summary (around 150 words total) for this "
        "software project to be used in a professional case study. Focus on the value "
        "proposition, the technology used, and the measurable outcome. "
        f"Project Details: Title: {project.title}, Description: {project.desc}, "
        f"Technologies: {', '.join(project.tags)}. "
        "Format the output with line breaks between paragraphs."
    )


def persona_system_instruction(profile: Profile) -> str:
    """Owner persona for the chat; forbids revealing it is automated."""
    focus = f" {profile.focus}" if profile.focus else ""
    return (
        f"You are the professional AI persona of {profile.title} {profile.name}.{focus} "
        f'Your bio is: "{profile.bio}". '
        "Respond to the user's questions concisely and professionally, maintaining "
        f"the persona of {profile.name}. DO NOT mention you are an AI model."
    )


def chat_greeting(profile: Profile) -> str:
    return (
        f"Hello! I am {profile.first_name}'s portfolio AI assistant. Ask me anything "
        f"about {profile.first_name}'s skills, projects, or professional goals."
    )
