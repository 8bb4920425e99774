"""Search and deflation settings shared by the root finder and the driver."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ITERATIONS = 150
DEFAULT_LOOPS = 3
DEFAULT_TOLERANCE = 1e-13


class RootOptions(BaseModel):
    """Tolerance budget for :func:`polyroots.find_one_root` and
    :func:`polyroots.roots`.

    ``real_range`` and ``imag_range`` are hints only: they bound the window
    the random search samples from when the estimate is zero or non-finite,
    and are never enforced as clamps on the estimate itself.
    """

    model_config = ConfigDict(frozen=True)

    iterations: int = Field(default=DEFAULT_ITERATIONS, gt=0)
    loops: int = Field(default=DEFAULT_LOOPS, gt=0)
    tolerance: float = Field(default=DEFAULT_TOLERANCE, gt=0)
    real_range: Optional[tuple[float, float]] = None
    imag_range: Optional[tuple[float, float]] = None

    # Deflation
    max_denominator: int = Field(default=100000, gt=0)
    snap_digits: int = Field(default=12, ge=0)
    remainder_tolerance: float = Field(default=1e-6, gt=0)

    @field_validator("real_range", "imag_range")
    @classmethod
    def _ordered(cls, value):
        if value is not None and value[0] > value[1]:
            raise ValueError(f"range must be (low, high), got {value}")
        return value

    @classmethod
    def build(cls, options: Optional["RootOptions"] = None, **overrides) -> "RootOptions":
        """Return *options* (or the defaults) with *overrides* applied and validated."""
        if options is None:
            return cls(**overrides)
        if not overrides:
            return options
        return cls(**{**options.model_dump(), **overrides})
