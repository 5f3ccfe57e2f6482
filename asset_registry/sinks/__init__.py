"""Output sinks for exporting registry events and state."""

from asset_registry.sinks.console import ConsoleSink
from asset_registry.sinks.json_file import JsonFileSink
from asset_registry.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
