"""
Formatting context - the data needed to spell values.

Aspiring nodes and absolute pitches cannot be displayed without knowing how
large the up (^) and lift (/) inflections are and which pitch C4 is. The
engine never calls into the context; it only reads these fields.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Any, Union

from pydantic import BaseModel, Field, InstanceOf, field_validator

from chuk_tuning.constants import DEFAULT_LIFT_CENTS, DEFAULT_UP_CENTS
from chuk_tuning.core.monzo import TimeMonzo
from chuk_tuning.core.real import TimeReal


class FormattingContext(BaseModel):
    """Inflection sizes and reference pitch used when realizing nodes."""

    up: float = Field(
        default=DEFAULT_UP_CENTS,
        description="Size of the up inflection (^) in cents",
    )
    lift: float = Field(
        default=DEFAULT_LIFT_CENTS,
        description="Size of the lift inflection (/) in cents",
    )
    c4: Union[InstanceOf[TimeMonzo], InstanceOf[TimeReal]] = Field(
        default_factory=lambda: TimeMonzo.unity(),
        description="Value of the absolute pitch C4 (unity or a frequency)",
    )
    title: str = Field(default="", description="Optional name of the context")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("up", "lift")
    @classmethod
    def validate_inflection(cls, v: float) -> float:
        """Ensure inflection sizes are finite."""
        if not math.isfinite(v):
            raise ValueError(f"Inflection size must be finite: {v}")
        return v

    @field_validator("c4", mode="before")
    @classmethod
    def parse_c4(cls, v: Any) -> Any:
        """Accept numbers and strings like '261.6 Hz' or '3/2'."""
        if isinstance(v, (TimeMonzo, TimeReal)):
            return v
        if isinstance(v, float):
            v = repr(v)
        if isinstance(v, (int, Fraction)):
            return TimeMonzo.from_fraction(v)
        if isinstance(v, str):
            text = v.strip()
            if text.endswith("Hz"):
                return TimeMonzo.from_fractional_frequency(Fraction(text[:-2].strip()))
            return TimeMonzo.from_fraction(Fraction(text))
        raise ValueError(f"Invalid reference pitch: {v!r}")

    @property
    def up_value(self) -> TimeMonzo:
        """The up inflection as a value."""
        return TimeMonzo.from_cents(self.up)

    @property
    def lift_value(self) -> TimeMonzo:
        """The lift inflection as a value."""
        return TimeMonzo.from_cents(self.lift)
