"""Telemetry sinks.

The invoker reports one event per logical API call. Sinks are fire-and-forget:
``safe_record`` logs and drops any exception a sink raises so telemetry can
never fail or delay an API call.
"""

import logging
from collections.abc import Mapping
from typing import Protocol

logger = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Receives an event name plus string properties."""

    def record(self, event_name: str, properties: Mapping[str, str]) -> None: ...


class NullTelemetrySink:
    """Discards every event. Used when telemetry is disabled."""

    def record(self, event_name: str, properties: Mapping[str, str]) -> None:
        return None


class LoggingTelemetrySink:
    """Writes events to a dedicated logger at DEBUG level."""

    def __init__(self, logger_name: str = "gh_commands.telemetry.events") -> None:
        self._logger = logging.getLogger(logger_name)

    def record(self, event_name: str, properties: Mapping[str, str]) -> None:
        rendered = " ".join(f"{key}={value}" for key, value in sorted(properties.items()))
        self._logger.debug("%s %s", event_name, rendered)


def safe_record(sink: TelemetrySink, event_name: str, properties: Mapping[str, str]) -> None:
    """Send an event to ``sink`` without letting sink failures escape."""
    try:
        sink.record(event_name, dict(properties))
    except Exception as e:  # noqa: BLE001
        logger.warning("Telemetry sink failed for %s: %s", event_name, e)
