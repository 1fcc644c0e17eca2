"""Event types published while scanning, and parsers for their payloads."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class EventType(enum.StrEnum):
    APP_UPDATE_AVAILABLE = "xeol-app-update-available"
    UPDATE_EOL_DATABASE = "xeol-update-eol-database"
    EOL_SCANNING_STARTED = "xeol-eol-scanning-started"
    EOL_SCANNING_FINISHED = "xeol-eol-scanning-finished"
    ATTESTATION_VERIFIED = "xeol-attestation-signature-passed"
    ATTESTATION_VERIFICATION_SKIPPED = "xeol-attestation-verification-skipped"
    NON_ROOT_COMMAND_FINISHED = "xeol-non-root-command-finished"


@dataclass
class Event:
    type: EventType | str
    value: Any = None


@dataclass
class StagedProgress:
    """Progress of a task that moves through named stages."""

    stage: str = ""
    current: int = 0
    size: int = 0
    completed: bool = False

    def increment(self) -> None:
        self.current += 1

    def set_completed(self) -> None:
        self.completed = True


class BadPayloadError(ValueError):
    """An event did not carry the payload its type promises."""

    def __init__(self, event_type: EventType | str, field: str, value: Any) -> None:
        self.type = event_type
        self.field = field
        self.value = value
        super().__init__(f"event='{event_type}' has bad event payload field='{field}': '{value}'")


def _check_event_type(actual: EventType | str, expected: EventType) -> None:
    if actual != expected:
        raise BadPayloadError(expected, "Type", actual)


def parse_app_update_available(event: Event) -> str:
    """The new application version announced by the event."""
    _check_event_type(event.type, EventType.APP_UPDATE_AVAILABLE)
    if not isinstance(event.value, str):
        raise BadPayloadError(event.type, "Value", event.value)
    return event.value


def parse_non_root_command_finished(event: Event) -> str:
    """The result text of a finished non-root command."""
    _check_event_type(event.type, EventType.NON_ROOT_COMMAND_FINISHED)
    if not isinstance(event.value, str):
        raise BadPayloadError(event.type, "Value", event.value)
    return event.value


def parse_update_eol_database(event: Event) -> StagedProgress:
    """The progress tracker of a database update."""
    _check_event_type(event.type, EventType.UPDATE_EOL_DATABASE)
    if not isinstance(event.value, StagedProgress):
        raise BadPayloadError(event.type, "Value", event.value)
    return event.value