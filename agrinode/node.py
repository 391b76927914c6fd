"""Field node: reads its sensors, reports readings and obeys configuration messages."""

from __future__ import annotations

import itertools
from dataclasses import dataclass

from .config import ConfigManager
from .models import SensorData
from .protocol import (
    MessageType,
    Radio,
    decode_params,
    decode_thresholds,
    receive_message,
    send_data,
)

LOCAL_ADDRESS = 0x03
DESTINATION_ADDRESSES = (0x01, 0x02, 0x03, 0x04, 0x05)
ADC_MAX = 1023.0
INITIAL_RANGE_M = 30.0


@dataclass
class SensorReader:
    """Sensor source holding the latest values; hardware readers override the reads."""

    temperature: float = float("nan")
    humidity: float = float("nan")
    soil_raw: int = 0

    def read_temperature(self) -> float:
        """Air temperature in degrees Celsius."""
        return self.temperature

    def read_humidity(self) -> float:
        """Relative humidity in percent."""
        return self.humidity

    def read_soil_raw(self) -> int:
        """Raw 10-bit soil probe reading, 0..1023."""
        return self.soil_raw


def read_sensor_data(sensor: SensorReader) -> SensorData:
    """Take one reading; the soil value is inverted so wetter reads higher."""
    return SensorData(
        temperature=sensor.read_temperature(),
        humidity=sensor.read_humidity(),
        soil_moisture=ADC_MAX - sensor.read_soil_raw(),
    )


class LocalNode:
    """A sensor node that rotates its reports across the known receivers."""

    def __init__(self, radio: Radio, sensor: SensorReader) -> None:
        self.radio = radio
        self.sensor = sensor
        self.config = ConfigManager()
        self.range_m = INITIAL_RANGE_M
        self.local_address = LOCAL_ADDRESS
        self.destination_address = DESTINATION_ADDRESSES[0]
        self.sensor_data = SensorData(-100.0, -100.0, -100.0)
        self._destinations = itertools.cycle(DESTINATION_ADDRESSES)

    def next_destination(self) -> int:
        return next(self._destinations)

    def send_message(self) -> bool:
        """Read the sensors and send the reading; False if that failed."""
        try:
            self.sensor_data = read_sensor_data(self.sensor)
            self.destination_address = self.next_destination()
            send_data(self.radio, self.sensor_data, self.local_address, self.destination_address)
        except (ValueError, OSError, RuntimeError):
            return False
        return True

    def receive_message(self) -> bool:
        """Handle one incoming packet; False if there was nothing for this node.

        Configuration that does not validate is ignored.
        """
        message = receive_message(self.radio, self.local_address)
        if message is None:
            return False

        try:
            if message.type is MessageType.CONFIG:
                self.config.set_params(decode_params(message.words))
            elif message.type is MessageType.THRESHOLDS:
                self.config.set_thresholds(decode_thresholds(message.words))
            elif message.type is MessageType.SENDFAIL:
                self.range_m *= 1.1
                self.config.set_params(self.config.optimal_params_for_range(self.range_m))
        except ValueError:
            pass
        return True