"""Template-based dish names.

Builds three names by random composition from the lexicon pools, one per
tone: elegant, playful and descriptive. Learned favourite keywords can
replace parts of the playful and descriptive names. This generator needs
nothing but the standard library so it can always back up the Claude path.
"""

import random

from .lexicon import ADJECTIVES, DESCRIPTORS, FOOD_TYPES, NOUNS, PLAYFUL_PREFIXES
from .preferences import TEMPLATE_KEYWORD_COUNT, PreferenceRecord, build_generation_context

# Chance of swapping in a favourite keyword: random() must exceed the threshold
PLAYFUL_KEYWORD_THRESHOLD = 0.5
DESCRIPTIVE_KEYWORD_THRESHOLD = 0.3


class TemplateNameGenerator:
    """Random composition of lexicon words, biased by learned keywords."""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def suggest(self, description: str | None, record: PreferenceRecord) -> list[str]:
        """Template names ignore the dish description."""
        return self.generate(record)

    def generate(self, record: PreferenceRecord | None = None) -> list[str]:
        """Return exactly three names: elegant, playful, descriptive."""
        context = build_generation_context(record or PreferenceRecord(), TEMPLATE_KEYWORD_COUNT)
        favorites = list(context.favorite_keywords)

        return [
            self._elegant(),
            self._playful(context.has_preferences, favorites),
            self._descriptive(context.has_preferences, favorites),
        ]

    def _elegant(self) -> str:
        adjective = self.rng.choice(ADJECTIVES)
        noun = self.rng.choice(NOUNS)
        return f"The {adjective} {noun}"

    def _playful(self, has_preferences: bool, favorites: list[str]) -> str:
        prefix = self.rng.choice(PLAYFUL_PREFIXES)
        descriptor = self.rng.choice(DESCRIPTORS)
        food = self.rng.choice(FOOD_TYPES)

        if has_preferences and favorites and self.rng.random() > PLAYFUL_KEYWORD_THRESHOLD:
            return f"{prefix} {self.rng.choice(favorites)}"
        return f"{prefix} {descriptor} {food}"

    def _descriptive(self, has_preferences: bool, favorites: list[str]) -> str:
        first = self.rng.choice(ADJECTIVES)
        second = self.rng.choice(ADJECTIVES)
        food = self.rng.choice(FOOD_TYPES)

        while second == first:
            second = self.rng.choice(ADJECTIVES)

        if has_preferences and len(favorites) > 1 and self.rng.random() > DESCRIPTIVE_KEYWORD_THRESHOLD:
            return f"{self.rng.choice(favorites)} {self.rng.choice(NOUNS)}"
        return f"{first} {second} {food}"
