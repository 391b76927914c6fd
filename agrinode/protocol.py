"""Wire format for sensor, configuration and threshold messages.

Every packet starts with a three-byte header: message type, receiver
address, sender address. The payload that follows is read as
little-endian 16-bit words.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from enum import IntEnum

from .models import LoraParams, SensorData, Thresholds

BROADCAST_ADDRESS = 0xFF
MIN_PACKET = 4
HEADER_SIZE = 3


class MessageType(IntEnum):
    NONE = 0
    DATA = 1
    CONFIG = 2
    THRESHOLDS = 3
    SENDFAIL = 4


class Radio:
    """In-memory packet radio.

    Incoming packets are queued with ``deliver``; packets finished with
    ``end_packet`` are collected in ``sent``. Subclasses may drive real
    hardware through the same five calls.
    """

    def __init__(self) -> None:
        self._incoming: deque[bytes] = deque()
        self._packet = b""
        self._pos = 0
        self._outgoing: bytearray | None = None
        self.sent: list[bytes] = []

    def deliver(self, packet: bytes) -> None:
        """Queue a packet to be picked up by ``parse_packet``."""
        self._incoming.append(bytes(packet))

    def parse_packet(self) -> int:
        """Start reading the next incoming packet; return its size, or 0 if none."""
        if not self._incoming:
            self._packet = b""
            self._pos = 0
            return 0
        self._packet = self._incoming.popleft()
        self._pos = 0
        return len(self._packet)

    def read(self) -> int:
        """Next byte of the current packet, or -1 when it is exhausted."""
        if self._pos >= len(self._packet):
            return -1
        value = self._packet[self._pos]
        self._pos += 1
        return value

    def begin_packet(self) -> int:
        self._outgoing = bytearray()
        return 1

    def write(self, value: int | bytes) -> int:
        """Append a byte, or a run of bytes, to the packet being built."""
        if self._outgoing is None:
            raise RuntimeError("begin_packet() must be called before write()")
        if isinstance(value, int):
            self._outgoing.append(value & 0xFF)
            return 1
        data = bytes(value)
        self._outgoing.extend(data)
        return len(data)

    def end_packet(self) -> int:
        """Finish the packet being built and transmit it."""
        if self._outgoing is None:
            raise RuntimeError("begin_packet() must be called before end_packet()")
        self.sent.append(bytes(self._outgoing))
        self._outgoing = None
        return 1


@dataclass(frozen=True)
class Message:
    """A received packet addressed to this node."""

    type: MessageType
    receiver: int
    sender: int
    words: tuple[int, ...]


def receive_message(radio: Radio, local_address: int) -> Message | None:
    """Read one packet from the radio; None if absent, malformed or not for us."""
    packet_size = radio.parse_packet()
    if packet_size < MIN_PACKET:
        return None

    type_byte = radio.read()
    if not 1 <= type_byte <= 4:
        return None
    message_type = MessageType(type_byte)

    receiver = radio.read()
    sender = radio.read()
    if receiver not in (local_address, BROADCAST_ADDRESS):
        return None

    payload_bytes = packet_size - HEADER_SIZE
    if payload_bytes <= 0 or payload_bytes % 2:
        return None

    words = tuple(
        (radio.read() & 0xFF) | ((radio.read() & 0xFF) << 8)
        for _ in range(payload_bytes // 2)
    )
    return Message(message_type, receiver, sender, words)


def _require_words(words: tuple[int, ...] | list[int], count: int, what: str) -> None:
    if len(words) < count:
        raise ValueError(f"{what} payload needs {count} words, got {len(words)}")


def decode_data(words) -> SensorData:
    """Unpack a sensor reading; soil moisture stays a raw ADC value."""
    _require_words(words, 2, "data")
    packed = ((words[1] & 0xFFFF) << 16) | (words[0] & 0xFFFF)
    temperature = packed & 0x7FF
    humidity = (packed >> 11) & 0x3FF
    soil = (packed >> 21) & 0x3FF
    return SensorData(
        temperature=(temperature - 400) / 10.0,
        humidity=humidity / 10.0,
        soil_moisture=float(soil),
    )


def decode_thresholds(words) -> Thresholds:
    _require_words(words, 6, "thresholds")
    return Thresholds(
        low_temperature=(words[0] & 0x7FF) / 10.0 - 40.0,
        high_temperature=(words[1] & 0x7FF) / 10.0 - 40.0,
        low_humidity=(words[2] & 0x3FF) / 10.0,
        high_humidity=(words[3] & 0x3FF) / 10.0,
        low_soil_moisture=(words[4] & 0x3FF) / 10.0,
        high_soil_moisture=(words[5] & 0x3FF) / 10.0,
    )


def decode_params(words) -> LoraParams:
    _require_words(words, 5, "config")
    return LoraParams(
        tp=words[0] & 0xFF,
        sf=(words[0] >> 8) & 0xFF,
        cr=words[1] & 0xFF,
        sw=(words[1] >> 8) & 0xFF,
        pl=words[2] & 0xFFFF,
        fr=(words[3] & 0xFFFF) * 1_000_000,
        bw=(words[4] & 0xFFFF) * 1_000,
    )


def _field(value: float, name: str) -> int:
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"{name} is not a finite number: {value!r}")
    result = int(value)
    if result < 0:
        raise ValueError(f"{name} is out of range: {value!r}")
    return result


def encode_data(data: SensorData) -> bytes:
    """Pack a reading into four bytes.

    On this side soil moisture is scaled as a percentage to 0..1023.
    """
    soil = _field(data.soil_moisture * 1023.0 / 100.0, "soil moisture")
    humidity = _field(data.humidity * 10.0, "humidity")
    temperature = _field(data.temperature * 10.0 + 400, "temperature")
    packed = ((soil << 21) | (humidity << 11) | temperature) & 0xFFFFFFFF
    return packed.to_bytes(4, "little")


def encode_config(params: LoraParams) -> bytes:
    """Pack radio settings; frequency travels in MHz and bandwidth in kHz."""
    fr = int(params.fr / 1e6) & 0xFFFF
    bw = int(params.bw / 1e3) & 0xFFFF
    return (
        bytes(v & 0xFF for v in (params.tp, params.sf, params.cr, params.sw))
        + (params.pl & 0xFFFF).to_bytes(2, "little")
        + fr.to_bytes(2, "little")
        + bw.to_bytes(2, "little")
    )


def encode_thresholds(thresholds: Thresholds) -> bytes:
    t = thresholds
    values = (
        t.low_temperature * 10.0 + 400,
        t.high_temperature * 10.0 + 400,
        t.low_humidity * 10.0,
        t.high_humidity * 10.0,
        t.low_soil_moisture * 10.0,
        t.high_soil_moisture * 10.0,
    )
    return b"".join((int(v) & 0xFFFF).to_bytes(2, "little") for v in values)


def _send(
    radio: Radio,
    message_type: MessageType,
    payload: bytes,
    sender_address: int,
    receiver_address: int,
) -> bool:
    radio.begin_packet()
    radio.write(int(message_type))
    radio.write(receiver_address)
    radio.write(sender_address)
    if payload:
        radio.write(payload)
    return radio.end_packet() > 0


def send_data(radio: Radio, data: SensorData, sender_address: int, receiver_address: int) -> bool:
    return _send(radio, MessageType.DATA, encode_data(data), sender_address, receiver_address)


def send_config(
    radio: Radio, params: LoraParams, sender_address: int, receiver_address: int
) -> bool:
    return _send(radio, MessageType.CONFIG, encode_config(params), sender_address, receiver_address)


def send_thresholds(
    radio: Radio, thresholds: Thresholds, sender_address: int, receiver_address: int
) -> bool:
    return _send(
        radio,
        MessageType.THRESHOLDS,
        encode_thresholds(thresholds),
        sender_address,
        receiver_address,
    )


def send_fail(radio: Radio, sender_address: int, receiver_address: int) -> bool:
    return _send(radio, MessageType.SENDFAIL, b"", sender_address, receiver_address)