"""
Wave height per forecast hour.

Uses the marine feed when its hourly grid lines up with the forecast grid,
otherwise estimates wave height from wind speed. The estimate is tuned for a
short-fetch enclosed bay (Port Phillip), which is why it saturates at 1.5 m.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

from sailcast.data.frames import HourlyFrame, MarineFrame

KPH_TO_KTS = 0.539957
DEFAULT_WAVE_PERIOD_S = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def round_half_up_tenths(value: float) -> float:
    """Round to one decimal place, halves away from zero, using the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def kph_to_kts(speed_kph: float) -> float:
    return speed_kph * KPH_TO_KTS


def estimate_wave_height_kts(speed_kts: float) -> float:
    """
    Estimate significant wave height (m) from wind speed in knots.

    Piecewise linear, monotonically non-decreasing:

    ======== =========================
    knots    height (m)
    ======== =========================
    < 5      0.1
    < 10     0.2
    < 15     0.3 + (kt - 10) * 0.04
    < 20     0.5 + (kt - 15) * 0.06
    < 30     0.8 + (kt - 20) * 0.07
    >= 30    1.5
    ======== =========================
    """
    if speed_kts < 5:
        height = 0.1
    elif speed_kts < 10:
        height = 0.2
    elif speed_kts < 15:
        height = 0.3 + (speed_kts - 10) * 0.04
    elif speed_kts < 20:
        height = 0.5 + (speed_kts - 15) * 0.06
    elif speed_kts < 30:
        height = 0.8 + (speed_kts - 20) * 0.07
    else:
        height = 1.5
    return round(height, 2)


def estimate_wave_height(speed_kph: float) -> float:
    """Estimate wave height (m) from wind speed in km/h."""
    return estimate_wave_height_kts(kph_to_kts(speed_kph))


def marine_is_aligned(hourly: HourlyFrame, marine: Optional[MarineFrame]) -> bool:
    """
    True when marine values can be used by position against ``hourly``.

    Requires a wave height series, equal grid lengths, and identical
    timestamps at the first, middle and last positions.
    """
    if marine is None or marine.wave_height is None:
        return False
    n = len(hourly.time)
    if n == 0 or len(marine.time) != n:
        return False
    return all(hourly.time[i] == marine.time[i] for i in {0, n // 2, n - 1})


def uses_marine_values(hourly: HourlyFrame, marine: Optional[MarineFrame]) -> bool:
    """True when ``merge_waves`` takes at least one height from ``marine``."""
    return marine_is_aligned(hourly, marine) and any(
        height is not None for height in marine.wave_height
    )


def merge_waves(
    hourly: HourlyFrame,
    marine: Optional[MarineFrame],
) -> List[Tuple[float, int]]:
    """
    Return ``(wave_height_m, wave_period_s)`` for every hourly position.

    Marine values win where available; any position without a marine height
    gets the wind-speed estimate and the default period.
    """
    use_marine = marine_is_aligned(hourly, marine)
    waves: List[Tuple[float, int]] = []

    for i, wind in enumerate(hourly.wind_speed):
        height = marine.wave_height[i] if use_marine else None
        if height is not None:
            period = marine.wave_period[i] if marine.wave_period is not None else None
            waves.append((
                round(height, 2),
                round_half_up(period) if period is not None else DEFAULT_WAVE_PERIOD_S,
            ))
        else:
            waves.append((estimate_wave_height(wind or 0), DEFAULT_WAVE_PERIOD_S))

    return waves
