from dataclasses import replace

import pytest

from agrinode.config import default_params, default_thresholds
from agrinode.models import LoraParams, SensorData, Thresholds
from agrinode.protocol import (
    BROADCAST_ADDRESS,
    Message,
    MessageType,
    Radio,
    decode_data,
    decode_params,
    decode_thresholds,
    encode_config,
    encode_data,
    encode_thresholds,
    receive_message,
    send_config,
    send_data,
    send_fail,
    send_thresholds,
)


def _relay(source: Radio, target: Radio) -> None:
    for packet in source.sent:
        target.deliver(packet)


def test_data_round_trip_over_radio():
    tx, rx = Radio(), Radio()
    reading = SensorData(temperature=25.5, humidity=60.5, soil_moisture=0.0)
    assert send_data(tx, reading, 0x03, 0x01) is True
    _relay(tx, rx)
    message = receive_message(rx, 0x01)
    assert message.type is MessageType.DATA
    assert (message.receiver, message.sender) == (0x01, 0x03)
    decoded = decode_data(message.words)
    assert decoded.temperature == pytest.approx(25.5)
    assert decoded.humidity == pytest.approx(60.5)
    assert decoded.soil_moisture == 0.0


def test_data_soil_percentage_scales_to_adc_range():
    decoded = decode_data(
        Radio_words(encode_data(SensorData(temperature=0.0, humidity=0.0, soil_moisture=100.0)))
    )
    assert decoded.soil_moisture == 1023.0


def Radio_words(payload: bytes):
    radio = Radio()
    radio.deliver(bytes([int(MessageType.DATA), 0x01, 0x02]) + payload)
    return receive_message(radio, 0x01).words


def test_encode_data_is_four_bytes():
    assert len(encode_data(SensorData(20.0, 50.0, 10.0))) == 4


def test_encode_data_rejects_temperature_below_range():
    with pytest.raises(ValueError):
        encode_data(SensorData(temperature=-50.0, humidity=50.0, soil_moisture=10.0))


def test_encode_data_rejects_nan():
    with pytest.raises(ValueError):
        encode_data(SensorData(temperature=float("nan"), humidity=50.0, soil_moisture=10.0))


def test_decode_data_needs_two_words():
    with pytest.raises(ValueError):
        decode_data((1,))


def test_config_round_trip_of_defaults():
    tx, rx = Radio(), Radio()
    params = default_params()
    assert send_config(tx, params, 0x00, 0x03)
    _relay(tx, rx)
    message = receive_message(rx, 0x03)
    assert message.type is MessageType.CONFIG
    assert decode_params(message.words) == params


def test_config_bandwidth_travels_in_whole_kilohertz():
    params = replace(default_params(), bw=62_500)
    words = Radio_words(encode_config(params))
    assert decode_params(words).bw == 62_000


def test_encode_config_layout_starts_with_scalar_fields():
    params = default_params()
    encoded = encode_config(params)
    assert len(encoded) == 10
    assert list(encoded[:4]) == [params.tp, params.sf, params.cr, params.sw]


def test_decode_params_needs_five_words():
    with pytest.raises(ValueError):
        decode_params((1, 2, 3, 4))


def test_decoded_params_keep_local_flags_at_defaults():
    decoded = decode_params(Radio_words(encode_config(default_params())))
    assert decoded.crc == LoraParams().crc
    assert decoded.invert_iq == LoraParams().invert_iq


def test_thresholds_round_trip_over_radio():
    tx, rx = Radio(), Radio()
    limits = Thresholds(10.0, 30.0, 40.0, 70.0, 20.0, 90.0)
    assert send_thresholds(tx, limits, 0x00, BROADCAST_ADDRESS)
    _relay(tx, rx)
    message = receive_message(rx, 0x03)
    assert message.type is MessageType.THRESHOLDS
    decoded = decode_thresholds(message.words)
    assert decoded.low_temperature == pytest.approx(10.0)
    assert decoded.high_temperature == pytest.approx(30.0)
    assert decoded.low_humidity == pytest.approx(40.0)
    assert decoded.high_humidity == pytest.approx(70.0)
    assert decoded.low_soil_moisture == pytest.approx(20.0)
    assert decoded.high_soil_moisture == pytest.approx(90.0)


def test_encode_thresholds_is_six_words():
    assert len(encode_thresholds(default_thresholds())) == 12


def test_decode_thresholds_needs_six_words():
    with pytest.raises(ValueError):
        decode_thresholds((1, 2, 3, 4, 5))


def test_send_fail_header_only():
    tx = Radio()
    assert send_fail(tx, 0x03, 0x01)
    assert tx.sent == [bytes([int(MessageType.SENDFAIL), 0x01, 0x03])]


def test_header_only_packet_is_not_received():
    tx, rx = Radio(), Radio()
    send_fail(tx, 0x03, 0x01)
    _relay(tx, rx)
    assert receive_message(rx, 0x01) is None


def test_receive_nothing_returns_none():
    assert receive_message(Radio(), 0x01) is None


def test_receive_rejects_other_address():
    rx = Radio()
    rx.deliver(bytes([int(MessageType.DATA), 0x02, 0x03]) + encode_data(SensorData(1.0, 1.0, 1.0)))
    assert receive_message(rx, 0x01) is None


@pytest.mark.parametrize("type_byte", [0, 5, 200])
def test_receive_rejects_unknown_type(type_byte):
    rx = Radio()
    rx.deliver(bytes([type_byte, 0x01, 0x03, 0, 0]))
    assert receive_message(rx, 0x01) is None


def test_receive_rejects_odd_payload():
    rx = Radio()
    rx.deliver(bytes([int(MessageType.DATA), 0x01, 0x03, 1, 2, 3]))
    assert receive_message(rx, 0x01) is None


def test_receive_accepts_broadcast():
    rx = Radio()
    rx.deliver(bytes([int(MessageType.DATA), BROADCAST_ADDRESS, 0x03, 0x34, 0x12]))
    message = receive_message(rx, 0x01)
    assert message == Message(MessageType.DATA, BROADCAST_ADDRESS, 0x03, (0x1234,))


def test_write_without_begin_raises():
    with pytest.raises(RuntimeError):
        Radio().write(1)


def test_end_without_begin_raises():
    with pytest.raises(RuntimeError):
        Radio().end_packet()