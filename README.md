# agrinode

Logic for a field sensor node in a small LoRa agricultural network: the
records it works with, its radio and alert configuration, the packet
format it speaks, and the node loop that ties them together.

## Modules

- `agrinode.models`: frozen dataclasses `LoraParams` (radio settings, with
  -1 meaning "not given"), `Thresholds` (alert limits) and `SensorData`
  (one reading: degrees Celsius, percent humidity, soil moisture).
- `agrinode.config`: `default_params()`, `default_thresholds()`,
  `validate_params()`, `validate_thresholds()` and `calculate_range()`,
  a rough range estimate in metres. `ConfigManager` holds the current
  settings in its `params` and `thresholds` properties; `set_params()` and
  `set_thresholds()` raise `ValueError` for values that do not validate,
  `optimal_params_for_range()` returns the current settings adjusted for a
  range in metres, and `reset_to_defaults()` restores the defaults.
- `agrinode.alerts`: the 16-bit `Alert` flags, `color_for()` and
  `description_for()`, which turn an alert code into a hex colour and a
  readable label, and `is_alert_active()`, `add_alert()`, `remove_alert()`
  and `alert_count()`. Known combinations, such as hot and dry weather, are
  matched before single alerts and get a colour and label of their own;
  otherwise the colour comes from the highest-priority alert set and the
  label lists every alert set, joined with " + ".
- `agrinode.protocol`: the packet format. Each packet starts with the
  message type (`MessageType`), the receiver address and the sender
  address; the payload is read as little-endian 16-bit words.
  `encode_data()`, `encode_config()` and `encode_thresholds()` build
  payloads; `decode_data()`, `decode_thresholds()` and `decode_params()`
  read them back and raise `ValueError` if too few words are given.
  `send_data()`, `send_config()`, `send_thresholds()` and `send_fail()`
  write packets to a `Radio`; `receive_message()` reads one and returns a
  `Message`, or `None` if there was no packet, it was malformed, or it was
  addressed neither to the local address nor to the broadcast address
  `0xFF`.
- `agrinode.node`: `SensorReader` holds temperature, humidity and a raw
  soil reading; `read_sensor_data()` turns it into `SensorData`, inverting
  the soil value (`1023 - raw`). `LocalNode` (address `0x03`) sends its
  readings to addresses `0x01` to `0x05` in turn with `send_message()`,
  and with `receive_message()` applies configuration and threshold
  messages and, on a send-failure message, widens its range by 10% and
  switches to the matching radio settings. Settings that do not validate
  are ignored.

`Radio` is an in-memory packet radio: `deliver()` queues incoming
packets for `parse_packet()` and `read()`, and packets finished with
`end_packet()` are collected in its `sent` list. Subclass it, or
`SensorReader`, to drive real hardware through the same calls.

## Installation

```
pip install .
```

With the test dependencies:

```
pip install .[test]
```

## Example

```python
from agrinode.alerts import Alert, color_for, description_for
from agrinode.config import ConfigManager, calculate_range
from agrinode.node import LocalNode, SensorReader
from agrinode.protocol import Radio, receive_message

code = Alert.HIGH_TEMP | Alert.LOW_HUMIDITY
print(color_for(code), description_for(code))   # #FF8C00 Hot Dry Summer

manager = ConfigManager()
manager.set_params(manager.optimal_params_for_range(3000))
print(calculate_range(manager.params))

radio = Radio()
node = LocalNode(radio, SensorReader(temperature=24.5, humidity=55.0, soil_raw=400))
node.send_message()
print(radio.sent[0].hex())
```

## What it does not do

The package has no radio or sensor drivers, no command-line program and
no central node: it does not store, display or forward the readings it
receives. Connecting it to hardware means supplying your own `Radio` and
`SensorReader` subclasses.

## Running the tests

```
pytest
```