"""Dish name suggestion strategies.

A strategy turns an optional dish description and the preference record into
exactly three names. The description-driven strategy may fail; it is always
wrapped in FallbackNameGenerator with the template generator behind it, so
suggest_names never raises and never returns fewer than three names.
"""

import logging
from typing import Callable, Protocol

from .claude_service import GenerationError, _log_namer
from .preferences import PROMPT_KEYWORD_COUNT, GenerationContext, PreferenceRecord, build_generation_context
from .template_generator import TemplateNameGenerator

logger = logging.getLogger(__name__)

NAME_COUNT = 3

SYSTEM_PROMPT = """
You name home-cooked dishes. Given a description of a dish, reply with exactly 3 creative names for it.

Rules:
- Each name is 2 to 5 words long.
- Line 1 is elegant and poetic, line 2 is playful and fun, line 3 is descriptive and plain.
- One name per line. No numbering, no quotes, no explanations, no other text.
""".strip()


class NameStrategy(Protocol):
    """Anything that can suggest dish names."""

    def suggest(self, description: str | None, record: PreferenceRecord) -> list[str]:
        ...


def build_preference_context(context: GenerationContext) -> str:
    """Summarize learned taste for the prompt. Empty before the first acceptance."""
    if not context.has_preferences:
        return ""

    lines = ["The cook has liked names like these before:"]
    if context.favorite_keywords:
        lines.append(f"- Favorite words: {', '.join(context.favorite_keywords)}")
    if context.recent_names:
        lines.append(f"- Recently chosen names: {'; '.join(context.recent_names)}")
    if context.favorite_tone:
        lines.append(f"- Most often picks the {context.favorite_tone} name")
    lines.append("Lean toward this taste without copying these names.")
    return "\n".join(lines)


def build_user_prompt(description: str, context: GenerationContext) -> str:
    sections = [f"DISH DESCRIPTION:\n{description.strip()}"]
    preference_context = build_preference_context(context)
    if preference_context:
        sections.append(preference_context)
    return "\n\n".join(sections)


def parse_names(text: str) -> list[str]:
    """First three non-empty lines, whitespace trimmed."""
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line][:NAME_COUNT]


class DescriptionNameGenerator:
    """Names written by a text-generation call from the dish description."""

    def __init__(self, generate_text: Callable[[str, str], str]):
        self.generate_text = generate_text

    def suggest(self, description: str | None, record: PreferenceRecord) -> list[str]:
        """Raises GenerationError when no usable set of three names comes back."""
        if not description or not description.strip():
            raise GenerationError("No dish description available")

        context = build_generation_context(record, PROMPT_KEYWORD_COUNT)
        text = self.generate_text(SYSTEM_PROMPT, build_user_prompt(description, context))
        names = parse_names(text)
        if len(names) < NAME_COUNT:
            raise GenerationError(f"Expected {NAME_COUNT} names, got {len(names)}: {names}")
        return names


class FallbackNameGenerator:
    """Try `primary`; on any failure use `fallback`, which must not fail."""

    def __init__(self, primary: NameStrategy, fallback: NameStrategy):
        self.primary = primary
        self.fallback = fallback

    def suggest(self, description: str | None, record: PreferenceRecord) -> list[str]:
        try:
            return self.primary.suggest(description, record)
        except Exception as e:
            _log_namer(
                f"{type(self.primary).__name__} failed, using {type(self.fallback).__name__}: "
                f"{type(e).__name__}: {e}",
                "warning",
            )
            return self.fallback.suggest(description, record)


def build_name_strategy(generate_text: Callable[[str, str], str] | None) -> NameStrategy:
    """Description-driven names with template fallback, or template names only."""
    template = TemplateNameGenerator()
    if generate_text is None:
        return template
    return FallbackNameGenerator(DescriptionNameGenerator(generate_text), template)


def suggest_names(
    description: str | None,
    record: PreferenceRecord,
    strategy: NameStrategy | None = None,
) -> list[str]:
    """Return exactly three dish names. Never raises."""
    strategy = strategy or TemplateNameGenerator()
    try:
        names = list(strategy.suggest(description, record))
    except Exception as e:
        logger.warning(f"{type(strategy).__name__} raised {type(e).__name__}: {e}")
        names = []

    if len(names) != NAME_COUNT or not all(isinstance(name, str) and name.strip() for name in names):
        logger.warning(f"Unusable names {names!r}, using templates")
        names = TemplateNameGenerator().generate(record)
    return names
