"""Radio parameter and alert threshold management."""

from __future__ import annotations

import math
from dataclasses import replace

from .models import LoraParams, Thresholds

_ALLOWED_FREQUENCIES = frozenset(
    {433_000_000, 865_000_000, 866_000_000, 867_000_000, 868_000_000, 915_000_000}
)
_ALLOWED_BANDWIDTHS = frozenset(
    {7_800, 10_400, 15_600, 20_800, 31_250, 41_700, 62_500, 125_000, 250_000}
)


def default_params() -> LoraParams:
    """Default radio settings: 865 MHz, SF7, 125 kHz, 4/5, 17 dBm."""
    return LoraParams(
        fr=865_000_000,
        sf=7,
        bw=125_000,
        cr=5,
        tp=17,
        sw=0x34,
        pl=8,
        crc=True,
    )


def default_thresholds() -> Thresholds:
    """Default alert limits."""
    return Thresholds(
        low_temperature=5.0,
        high_temperature=35.0,
        low_humidity=30.0,
        high_humidity=80.0,
        low_soil_moisture=200.0,
        high_soil_moisture=800.0,
    )


def validate_params(params: LoraParams) -> bool:
    """Return whether the radio settings are within the supported ranges."""
    return (
        params.fr in _ALLOWED_FREQUENCIES
        and 6 <= params.sf <= 12
        and params.bw in _ALLOWED_BANDWIDTHS
        and 5 <= params.cr <= 8
        and 2 <= params.tp <= 20
        and 6 <= params.pl <= 65535
    )


def validate_thresholds(thresholds: Thresholds) -> bool:
    """Return whether every low limit is below its high limit and within range."""
    t = thresholds
    if t.low_temperature >= t.high_temperature:
        return False
    if t.low_humidity >= t.high_humidity or t.low_humidity < 0 or t.high_humidity > 100:
        return False
    if (
        t.low_soil_moisture >= t.high_soil_moisture
        or t.low_soil_moisture < 0
        or t.high_soil_moisture > 1023
    ):
        return False
    return True


def calculate_range(params: LoraParams) -> float:
    """Rough line-of-sight range estimate in metres."""
    base_range = 1000.0
    sf_multiplier = 2 ** ((params.sf - 7) * 0.5)
    bw_multiplier = math.sqrt(125_000 / params.bw)
    power_multiplier = 10 ** ((params.tp - 14) / 20.0)
    return base_range * sf_multiplier * bw_multiplier * power_multiplier


class ConfigManager:
    """Holds the current radio settings and alert thresholds."""

    def __init__(self) -> None:
        self._params = default_params()
        self._thresholds = default_thresholds()

    @property
    def params(self) -> LoraParams:
        return self._params

    @property
    def thresholds(self) -> Thresholds:
        return self._thresholds

    def set_params(self, params: LoraParams) -> None:
        """Replace the radio settings; raise ValueError if they are invalid."""
        if not validate_params(params):
            raise ValueError(f"invalid radio parameters: {params!r}")
        self._params = params

    def set_thresholds(self, thresholds: Thresholds) -> None:
        """Replace the alert limits; raise ValueError if they are invalid."""
        if not validate_thresholds(thresholds):
            raise ValueError(f"invalid thresholds: {thresholds!r}")
        self._thresholds = thresholds

    def optimal_params_for_range(self, range_m: float) -> LoraParams:
        """Current settings adjusted for the required range in metres."""
        if range_m < 1000:
            return replace(self._params, sf=7, bw=250_000, tp=14)
        if range_m < 5000:
            return replace(self._params, sf=9, bw=125_000, tp=17)
        return replace(self._params, sf=12, bw=62_500, tp=20)

    def reset_to_defaults(self) -> None:
        self._params = default_params()
        self._thresholds = default_thresholds()