"""Mini README: Optional text-generation collaborator.

``InsightGenerator`` sends a compact JSON view of recent operations to the
Gemini API and returns its Markdown report. It never raises: a missing key
or a failed request yields a fixed explanatory message.
"""

from .generator import (
    INSIGHTS_FAILED_MESSAGE,
    INSIGHTS_UNAVAILABLE_MESSAGE,
    MISSING_KEY_MESSAGE,
    InsightGenerator,
    build_prompt,
)

__all__ = [
    "INSIGHTS_FAILED_MESSAGE",
    "INSIGHTS_UNAVAILABLE_MESSAGE",
    "MISSING_KEY_MESSAGE",
    "InsightGenerator",
    "build_prompt",
]
