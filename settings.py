"""Configuration for the validation tooling.

The codec and the text value take no configuration; these settings
only steer how the counterexample search samples the contract.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from bounds import RADIX


class SearchConfig(BaseModel):
    """How many and which inputs the counterexample search generates."""

    seed: int = 0
    samples: int = Field(
        default=500,
        ge=1,
        le=100_000,
        description="Random inputs per operation, on top of the edge values",
    )
    radixes: list[int] = Field(
        default_factory=lambda: list(range(RADIX.lo, RADIX.hi + 1)),
        min_length=1,
    )
    probe_invalid_radixes: bool = Field(
        default=True,
        description="Also try radixes outside [2, 36] (fallback / rejection paths)",
    )
    text_alphabet: str = Field(
        default="abcAB\u212akK\u00fc\u00dc\U0001f600",
        min_length=1,
        description="Characters random texts are drawn from",
    )
    max_text_length: int = Field(default=8, ge=0, le=256)

    @field_validator("radixes")
    @classmethod
    def radixes_in_range(cls, v: list[int]) -> list[int]:
        bad = [r for r in v if not RADIX.contains(r)]
        if bad:
            raise ValueError(
                f"radixes must lie in [{RADIX.lo}, {RADIX.hi}], got {bad}"
            )
        return v
