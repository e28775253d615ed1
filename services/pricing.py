"""Time-of-day pricing for generated slots.

A band table maps each hour of the booking horizon to an offset from the
ground's base price. Bands are half-open ``[start_hour, end_hour)`` and must
tile the horizon exactly.
"""
from collections import namedtuple
from datetime import time
from typing import List, Sequence, Tuple

PricingBand = namedtuple("PricingBand", ["start_hour", "end_hour", "offset"])

DEFAULT_BANDS = (
    PricingBand(0, 6, -100),    # night
    PricingBand(6, 12, 0),      # morning
    PricingBand(12, 17, 100),   # afternoon
    PricingBand(17, 22, 200),   # evening
    PricingBand(22, 24, -100),  # late night
)


def parse_bands(raw: str) -> Tuple[PricingBand, ...]:
    """
    Parse "0-6:-100,6-12:0" into bands. Empty input gives DEFAULT_BANDS.
    """
    raw = (raw or "").strip()
    if not raw:
        return DEFAULT_BANDS

    bands = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            hours, offset = chunk.split(":")
            start, end = hours.split("-")
            bands.append(PricingBand(int(start), int(end), int(offset)))
        except ValueError:
            raise ValueError(f"Invalid pricing band {chunk!r}, expected start-end:offset")
    return tuple(sorted(bands, key=lambda b: b.start_hour))


def validate_bands(bands: Sequence[PricingBand], start_hour: int, end_hour: int) -> None:
    if not 0 <= start_hour < end_hour <= 24:
        raise ValueError(f"Invalid booking horizon {start_hour}-{end_hour}")
    if not bands:
        raise ValueError("At least one pricing band is required")

    cursor = None
    for band in bands:
        if band.start_hour >= band.end_hour:
            raise ValueError(f"Empty pricing band {band.start_hour}-{band.end_hour}")
        if cursor is not None and band.start_hour != cursor:
            raise ValueError(f"Pricing bands are not contiguous at hour {cursor}")
        cursor = band.end_hour

    if bands[0].start_hour > start_hour or bands[-1].end_hour < end_hour:
        raise ValueError(f"Pricing bands do not cover hours {start_hour}-{end_hour}")


def band_for_hour(hour: int, bands: Sequence[PricingBand]) -> PricingBand:
    for band in bands:
        if band.start_hour <= hour < band.end_hour:
            return band
    raise ValueError(f"No pricing band covers hour {hour}")


def price_for_hour(hour: int, base_price: int, bands: Sequence[PricingBand] = DEFAULT_BANDS) -> int:
    return max(base_price + band_for_hour(hour, bands).offset, 0)


def hourly_windows(start_hour: int, end_hour: int) -> List[Tuple[time, time]]:
    """One (start, end) pair per hour; an end of hour 24 is stored as 00:00."""
    return [(time(hour), time((hour + 1) % 24)) for hour in range(start_hour, end_hour)]


def minutes_of_day(value: time, is_end: bool = False) -> int:
    minutes = value.hour * 60 + value.minute
    # 00:00 as an end boundary means midnight at the end of the day
    if is_end and minutes == 0:
        return 24 * 60
    return minutes
