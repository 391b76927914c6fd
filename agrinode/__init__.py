"""Sensor node logic for a LoRa agricultural monitoring network: records, configuration, alerts, packet format and node loop."""

__version__ = "0.1.0"