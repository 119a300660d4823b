"""Preference record and the generation context derived from it."""

from dataclasses import dataclass, field

from .lexicon import TONES

# Favourite keywords handed to each generator
TEMPLATE_KEYWORD_COUNT = 3
PROMPT_KEYWORD_COUNT = 5
PROMPT_RECENT_NAMES = 5


@dataclass
class PreferenceRecord:
    """Cumulative naming taste learned from accepted names.

    `keywords` counts only ever grow. Instances are treated as values: the
    learner returns a new record instead of mutating the one it was given.
    """

    selected_names: list[str] = field(default_factory=list)
    keywords: dict[str, int] = field(default_factory=dict)
    tone_preferences: dict[str, int] = field(default_factory=dict)

    @property
    def has_preferences(self) -> bool:
        return len(self.selected_names) > 0

    def to_dict(self) -> dict:
        """Serialize to the stored JSON shape."""
        return {
            "selectedNames": list(self.selected_names),
            "keywords": dict(self.keywords),
            "tonePreferences": dict(self.tone_preferences),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PreferenceRecord":
        """Build a record from stored JSON.

        Raises:
            ValueError: If the payload does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Preference data must be an object, got {type(data).__name__}")

        names = data.get("selectedNames", [])
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ValueError("selectedNames must be a list of strings")

        return cls(
            selected_names=list(names),
            keywords=_parse_counts(data.get("keywords", {}), "keywords"),
            tone_preferences=_parse_counts(data.get("tonePreferences", {}), "tonePreferences"),
        )


def _parse_counts(value, label: str) -> dict[str, int]:
    if not isinstance(value, dict):
        raise ValueError(f"{label} must be an object")
    counts = {}
    for key, count in value.items():
        # bool is an int subclass; reject it explicitly
        if not isinstance(key, str) or isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError(f"{label} entry {key!r} must map to a positive integer")
        counts[key] = count
    return counts


@dataclass(frozen=True)
class GenerationContext:
    """Preference summary handed to the generators."""

    has_preferences: bool
    favorite_keywords: tuple[str, ...]
    recent_names: tuple[str, ...] = ()
    favorite_tone: str | None = None


def title_case(word: str) -> str:
    """Upper-case the first letter, leaving the rest untouched."""
    return word[:1].upper() + word[1:]


def top_keywords(record: PreferenceRecord, k: int) -> list[str]:
    """Return up to `k` title-cased keywords, most frequent first.

    Ties keep the order in which the keywords were first learned.
    """
    if k <= 0:
        return []
    ranked = sorted(record.keywords.items(), key=lambda item: item[1], reverse=True)
    return [title_case(word) for word, _ in ranked[:k]]


def favorite_tone(record: PreferenceRecord) -> str | None:
    """Most often accepted tone, or None before any tone was learned."""
    known = [(tone, record.tone_preferences[tone]) for tone in TONES if tone in record.tone_preferences]
    if not known:
        return None
    return max(known, key=lambda item: item[1])[0]


def build_generation_context(record: PreferenceRecord, k: int) -> GenerationContext:
    """Summarize a record for a generator that wants `k` favourite keywords."""
    if not record.has_preferences:
        return GenerationContext(has_preferences=False, favorite_keywords=())

    return GenerationContext(
        has_preferences=True,
        favorite_keywords=tuple(top_keywords(record, k)),
        recent_names=tuple(record.selected_names[-PROMPT_RECENT_NAMES:]),
        favorite_tone=favorite_tone(record),
    )
