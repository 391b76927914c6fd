"""Plain data records shared by the radio protocol, configuration and node logic."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LoraParams:
    """Radio settings. A value of -1 means the setting has not been given."""

    tp: int = -1  # transmission power, dBm
    sf: int = -1  # spreading factor
    cr: int = -1  # coding rate denominator (4/cr)
    pl: int = -1  # preamble length
    sw: int = -1  # sync word
    fr: int = -1  # frequency, Hz
    bw: int = -1  # bandwidth, Hz

    # Local-only flags; never sent in configuration messages.
    crc: bool = True
    invert_iq: bool = False
    ldro: bool = False


@dataclass(frozen=True)
class Thresholds:
    """Alert limits. Soil moisture is a raw ADC value in 0..1023."""

    low_temperature: float
    high_temperature: float
    low_humidity: float
    high_humidity: float
    low_soil_moisture: float
    high_soil_moisture: float


@dataclass(frozen=True)
class SensorData:
    """One reading: degrees Celsius, percent humidity, raw soil ADC value."""

    temperature: float
    humidity: float
    soil_moisture: float