"""Mini README: Tunable monetary parameters read by every calculation.

The package exposes ``RateSettings``, the single configuration record the
operator edits (job base values, weekend helper bonuses, fuel cost) and
``DEFAULT_RATES`` used when nothing has been saved yet.
"""

from .settings import DEFAULT_RATES, RateSettings

__all__ = ["DEFAULT_RATES", "RateSettings"]
