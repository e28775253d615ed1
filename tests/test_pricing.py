from datetime import time

import pytest

from services.pricing import (
    DEFAULT_BANDS,
    PricingBand,
    hourly_windows,
    minutes_of_day,
    parse_bands,
    price_for_hour,
    validate_bands,
)


@pytest.mark.parametrize("hour,expected", [
    (0, 400), (5, 400),
    (6, 500), (11, 500),
    (12, 600), (16, 600),
    (17, 700), (21, 700),
    (22, 400), (23, 400),
])
def test_default_bands_price_by_start_hour(hour, expected):
    assert price_for_hour(hour, 500) == expected


def test_price_never_negative():
    assert price_for_hour(3, 50) == 0


def test_default_bands_cover_full_day():
    validate_bands(DEFAULT_BANDS, 0, 24)


def test_parse_bands_from_config_string():
    bands = parse_bands("6-12:0, 0-6:-50 ,12-24:150")
    assert bands == (
        PricingBand(0, 6, -50),
        PricingBand(6, 12, 0),
        PricingBand(12, 24, 150),
    )


def test_parse_bands_empty_gives_defaults():
    assert parse_bands("") == DEFAULT_BANDS


def test_parse_bands_rejects_garbage():
    with pytest.raises(ValueError):
        parse_bands("morning:100")


def test_validate_bands_rejects_gap():
    with pytest.raises(ValueError):
        validate_bands((PricingBand(0, 6, 0), PricingBand(7, 24, 0)), 0, 24)


def test_validate_bands_rejects_overlap():
    with pytest.raises(ValueError):
        validate_bands((PricingBand(0, 8, 0), PricingBand(6, 24, 0)), 0, 24)


def test_validate_bands_rejects_short_cover():
    with pytest.raises(ValueError):
        validate_bands((PricingBand(6, 22, 0),), 5, 24)


def test_hourly_windows_wrap_midnight():
    windows = hourly_windows(22, 24)
    assert windows == [(time(22), time(23)), (time(23), time(0))]


def test_minutes_of_day_treats_midnight_end_as_end_of_day():
    assert minutes_of_day(time(0)) == 0
    assert minutes_of_day(time(0), is_end=True) == 24 * 60
    assert minutes_of_day(time(9, 30), is_end=True) == 570
