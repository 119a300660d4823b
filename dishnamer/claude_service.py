"""Claude API integration: dish description and free-text generation.

Both calls are single-shot. Every failure is re-raised as a NamerServiceError
subclass so callers only have one family of exceptions to absorb.
"""

import base64
import logging

from anthropic import Anthropic, APIError

from .config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Created on first use so the app starts without an API key
_client: Anthropic | None = None

DESCRIBE_PROMPT = (
    "Describe the dish in this photo in two or three sentences. Mention the main "
    "ingredients, colors, cooking style and how it is plated. Describe only the food."
)

# Claude accepts these media types for image blocks
MEDIA_TYPE_ALIASES = {
    "image/jpg": "image/jpeg",
}
SUPPORTED_MEDIA_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}


class NamerServiceError(Exception):
    """Base class for failures of an external naming capability."""

    pass


class DescribeError(NamerServiceError):
    """Raised when the image cannot be described."""

    pass


class GenerationError(NamerServiceError):
    """Raised when text generation fails or produces unusable output."""

    pass


# =============================================================================
# Logging
# =============================================================================


def _log_namer(message: str, level: str = "info"):
    """Log naming messages, mirrored to stdout for platform log capture."""
    print(f"[NAMER] {message}", flush=True)
    if level == "debug":
        logger.debug(message)
    elif level == "warning":
        logger.warning(message)
    elif level == "error":
        logger.error(message)
    else:
        logger.info(message)


# =============================================================================
# Client
# =============================================================================


def get_client() -> Anthropic:
    """Return the shared Anthropic client, creating it on first use."""
    global _client
    if _client is None:
        if not settings.claude_enabled:
            raise GenerationError("ANTHROPIC_API_KEY is not configured")
        _client = Anthropic(
            api_key=settings.anthropic_api_key,
            max_retries=settings.anthropic_max_retries,
        )
    return _client


# =============================================================================
# Response Helpers
# =============================================================================


def _extract_text_from_response(response) -> str:
    """Extract text content from Claude response."""
    for block in response.content:
        if hasattr(block, "text"):
            return block.text
    block_types = [type(b).__name__ for b in response.content]
    _log_namer(f"No text in response, block types: {block_types}", "warning")
    return ""


def normalize_media_type(media_type: str | None) -> str | None:
    """Map an upload content type onto one Claude accepts, or None."""
    if not media_type:
        return None
    media_type = media_type.strip().lower()
    media_type = MEDIA_TYPE_ALIASES.get(media_type, media_type)
    return media_type if media_type in SUPPORTED_MEDIA_TYPES else None


# =============================================================================
# Capabilities
# =============================================================================


def describe_image(image_bytes: bytes, media_type: str) -> str:
    """Ask Claude for a short textual description of a dish photo.

    Raises:
        DescribeError: On empty input, unsupported type, API failure or an
            empty answer.
    """
    if not image_bytes:
        raise DescribeError("Image is empty")
    claude_media_type = normalize_media_type(media_type)
    if claude_media_type is None:
        raise DescribeError(f"Unsupported image type: {media_type}")

    try:
        response = get_client().messages.create(
            model=settings.claude_model,
            max_tokens=settings.claude_max_tokens,
            timeout=settings.generation_timeout,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": claude_media_type,
                                "data": base64.b64encode(image_bytes).decode("utf-8"),
                            },
                        },
                        {"type": "text", "text": DESCRIBE_PROMPT},
                    ],
                }
            ],
        )
    except (APIError, GenerationError) as e:
        raise DescribeError(f"{type(e).__name__}: {e}") from e

    description = _extract_text_from_response(response).strip()
    if not description:
        raise DescribeError("Claude returned an empty description")

    _log_namer(f"Described image ({len(image_bytes)} bytes): {description[:80]}", "debug")
    return description


def generate_text(system_prompt: str, user_prompt: str) -> str:
    """Single-turn text generation.

    Raises:
        GenerationError: On API failure (including timeouts) or an empty answer.
    """
    try:
        response = get_client().messages.create(
            model=settings.claude_model,
            max_tokens=settings.claude_max_tokens,
            timeout=settings.generation_timeout,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
    except APIError as e:
        raise GenerationError(f"{type(e).__name__}: {e}") from e

    text = _extract_text_from_response(response)
    if not text.strip():
        raise GenerationError("Claude returned no text")

    _log_namer(
        f"Generated text: {response.usage.input_tokens} in, "
        f"{response.usage.output_tokens} out",
        "debug",
    )
    return text
