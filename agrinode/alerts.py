"""Sixteen-bit alert codes and their display colours and descriptions."""

from __future__ import annotations

from enum import IntFlag


class Alert(IntFlag):
    NONE = 0x0000
    LOW_TEMP = 0x0001
    HIGH_TEMP = 0x0002
    LOW_HUMIDITY = 0x0004
    HIGH_HUMIDITY = 0x0008
    LOW_SOIL_MOISTURE = 0x0010
    HIGH_SOIL_MOISTURE = 0x0020
    LOW_BATTERY = 0x0040
    SENSOR_FAILURE = 0x0080
    COMM_FAILURE = 0x0100
    CONFIG_ERROR = 0x0200
    LOW_SIGNAL = 0x0400
    MULTIPLE = 0x0800
    # 0x1000..0x8000 are reserved.


_MASK = 0xFFFF

# Single alerts, highest priority first: (bit, colour, description).
_PRIORITY = (
    (Alert.SENSOR_FAILURE, "#FF0000", "Sensor Failure"),
    (Alert.COMM_FAILURE, "#C0C0C0", "Comm Failure"),
    (Alert.CONFIG_ERROR, "#FF1493", "Config Error"),
    (Alert.LOW_BATTERY, "#B22222", "Low Battery"),
    (Alert.HIGH_TEMP, "#FF4500", "High Temp"),
    (Alert.LOW_TEMP, "#00BFFF", "Low Temp"),
    (Alert.HIGH_HUMIDITY, "#006400", "High Humidity"),
    (Alert.LOW_HUMIDITY, "#ADD8E6", "Low Humidity"),
    (Alert.HIGH_SOIL_MOISTURE, "#228B22", "High Soil Moisture"),
    (Alert.LOW_SOIL_MOISTURE, "#A0522D", "Low Soil Moisture"),
    (Alert.LOW_SIGNAL, "#9932CC", "Low Signal"),
    (Alert.MULTIPLE, "#800080", "Multiple Alerts"),
    (Alert.NONE, "#000000", "No Alert"),
)

# Known combinations, checked in order before single alerts.
_COMBOS = (
    (Alert.SENSOR_FAILURE | Alert.COMM_FAILURE, "#8B0000", "System Failure"),
    (Alert.SENSOR_FAILURE | Alert.LOW_BATTERY, "#DC143C", "Critical Low Power"),
    (Alert.COMM_FAILURE | Alert.LOW_BATTERY, "#696969", "Communication Down"),
    (Alert.HIGH_TEMP | Alert.LOW_HUMIDITY, "#FF8C00", "Hot Dry Summer"),
    (
        Alert.HIGH_TEMP | Alert.LOW_HUMIDITY | Alert.LOW_SOIL_MOISTURE,
        "#FF6347",
        "Drought Conditions",
    ),
    (Alert.HIGH_TEMP | Alert.HIGH_HUMIDITY, "#8B4513", "Hot Humid Weather"),
    (Alert.LOW_TEMP | Alert.HIGH_HUMIDITY, "#4682B4", "Cold Wet Winter"),
    (Alert.LOW_TEMP | Alert.LOW_HUMIDITY, "#5F9EA0", "Cold Dry Winter"),
    (Alert.LOW_SOIL_MOISTURE | Alert.LOW_HUMIDITY, "#D2691E", "Dry Soil & Air"),
    (
        Alert.HIGH_SOIL_MOISTURE | Alert.HIGH_HUMIDITY,
        "#2E8B57",
        "Wet Conditions - Disease Risk",
    ),
    (Alert.LOW_BATTERY | Alert.HIGH_TEMP, "#CD853F", "Hot Weather - Low Battery"),
    (Alert.LOW_BATTERY | Alert.LOW_TEMP, "#708090", "Cold Weather - Low Battery"),
    (
        Alert.HIGH_TEMP | Alert.HIGH_HUMIDITY | Alert.HIGH_SOIL_MOISTURE,
        "#32CD32",
        "Optimal Growth - Disease Risk",
    ),
    (
        Alert.LOW_TEMP | Alert.HIGH_HUMIDITY | Alert.HIGH_SOIL_MOISTURE,
        "#20B2AA",
        "Cool Wet Conditions",
    ),
    (
        Alert.HIGH_TEMP | Alert.LOW_HUMIDITY | Alert.LOW_SOIL_MOISTURE,
        "#B22222",
        "Severe Drought",
    ),
)


def _matching_combo(code: int):
    return next((combo for combo in _COMBOS if code & combo[0] == combo[0]), None)


def color_for(code: int) -> str:
    """Hex colour for an alert code; combinations take precedence over single alerts."""
    code = int(code) & _MASK
    if code == Alert.NONE:
        return "#000000"
    combo = _matching_combo(code)
    if combo is not None:
        return combo[1]
    return next((color for bit, color, _ in _PRIORITY if code & bit), "#FFFFFF")


def description_for(code: int) -> str:
    """Human-readable description of an alert code."""
    code = int(code) & _MASK
    if code == Alert.NONE:
        return "No Alert"
    combo = _matching_combo(code)
    if combo is not None:
        return combo[2]
    return " + ".join(desc for bit, _, desc in reversed(_PRIORITY) if code & bit)


def is_alert_active(code: int, alert: int) -> bool:
    return (int(code) & int(alert) & _MASK) != 0


def add_alert(code: int, alert: int) -> Alert:
    return Alert((int(code) | int(alert)) & _MASK)


def remove_alert(code: int, alert: int) -> Alert:
    return Alert(int(code) & ~int(alert) & _MASK)


def alert_count(code: int) -> int:
    """Number of bits set in the 16-bit alert code."""
    return bin(int(code) & _MASK).count("1")