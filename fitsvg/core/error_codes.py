"""
Structured error codes for measurement and render failures.
Recoverable paths log these keys; only INVALID_OPTIONS and RENDER_FAILED reach the caller.
"""

from __future__ import annotations

# Known error keys
FONT_UNAVAILABLE = "font_unavailable"
MEASUREMENT_FAILED = "measurement_failed"
BACKGROUND_UNAVAILABLE = "background_unavailable"
INVALID_OPTIONS = "invalid_options"
RENDER_FAILED = "render_failed"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    FONT_UNAVAILABLE: "Font could not be loaded; text size was estimated without it.",
    MEASUREMENT_FAILED: "Font measurement failed; text size was estimated instead.",
    BACKGROUND_UNAVAILABLE: "Background image could not be fetched; default background used.",
    INVALID_OPTIONS: "Request options could not be parsed. Send a JSON object.",
    RENDER_FAILED: "Image generation failed. Check text and options.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)


class InvalidOptionsError(ValueError):
    """Options payload is not parseable at all (not JSON, not a mapping)."""

    error_key = INVALID_OPTIONS


class RenderError(RuntimeError):
    """Unexpected failure while composing or serializing an image."""

    error_key = RENDER_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.user_message = user_message(self.error_key)
