"""Learning naming taste from accepted names."""

import logging

from .lexicon import TONES
from .preferences import PreferenceRecord

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset({"the", "and", "with", "for"})
MIN_KEYWORD_LENGTH = 4


def extract_keywords(name: str) -> list[str]:
    """Lower-cased words of a name worth remembering.

    Keeps words of four or more characters that are not stop words.
    Repeated words are kept once per occurrence.
    """
    words = name.lower().split()
    return [w for w in words if len(w) >= MIN_KEYWORD_LENGTH and w not in STOP_WORDS]


def record_acceptance(
    name: str,
    record: PreferenceRecord,
    suggestions: list[str] | None = None,
) -> PreferenceRecord:
    """Return a new record that has learned from `name` being chosen.

    `suggestions` is the set the name was picked from. When the name is one of
    them its slot position tells which tone was preferred. The other
    suggestions are not learned from.
    """
    keywords = dict(record.keywords)
    for word in extract_keywords(name):
        keywords[word] = keywords.get(word, 0) + 1

    tone_preferences = dict(record.tone_preferences)
    if suggestions and name in suggestions:
        slot = suggestions.index(name)
        if slot < len(TONES):
            tone = TONES[slot]
            tone_preferences[tone] = tone_preferences.get(tone, 0) + 1

    updated = PreferenceRecord(
        selected_names=[*record.selected_names, name],
        keywords=keywords,
        tone_preferences=tone_preferences,
    )
    logger.info(f"Learned from '{name}': {len(keywords)} keywords, {len(updated.selected_names)} names")
    return updated
