"""
Engine settings - numeric knobs shared by every value.

These are deliberately few: the size of the tracked prime basis and the
bounds that decide when a computation overflows or stops being exact.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from chuk_tuning.constants import (
    ABSURD_EXPONENT,
    DEFAULT_NUMBER_OF_COMPONENTS,
    MAX_POW_DENOMINATOR,
    ErrorMessages,
)

# Size of the prime table in core.primes
MAX_NUMBER_OF_COMPONENTS = 1000


class EngineSettings(BaseModel):
    """Process-wide numeric configuration."""

    number_of_components: int = Field(
        default=DEFAULT_NUMBER_OF_COMPONENTS,
        description="Number of primes tracked in exponent vectors (9 = primes 2..23)",
    )
    absurd_exponent: int = Field(
        default=ABSURD_EXPONENT,
        gt=0,
        description="Largest allowed exponent of two; other primes scale by size",
    )
    max_pow_denominator: int = Field(
        default=MAX_POW_DENOMINATOR,
        gt=1,
        description="Rational exponents with larger denominators are treated as irrational",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("number_of_components")
    @classmethod
    def validate_number_of_components(cls, v: int) -> int:
        """Ensure the basis fits the prime table."""
        if not 1 <= v <= MAX_NUMBER_OF_COMPONENTS:
            raise ValueError(
                ErrorMessages.INVALID_NUMBER_OF_COMPONENTS.format(
                    limit=MAX_NUMBER_OF_COMPONENTS, value=v
                )
            )
        return v
