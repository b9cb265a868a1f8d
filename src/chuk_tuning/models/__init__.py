"""
Pydantic models for the tuning engine.

This module provides:
- EngineSettings: numeric knobs shared by every value
- FormattingContext: inflection sizes and reference pitch for display
"""

from chuk_tuning.models.settings import EngineSettings


def __getattr__(name: str):
    """Lazy import for the context to avoid circular dependencies."""
    if name == "FormattingContext":
        from chuk_tuning.models.context import FormattingContext

        return FormattingContext
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "EngineSettings",
    # Context (lazy loaded)
    "FormattingContext",
]
