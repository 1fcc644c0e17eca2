import pytest

from xeol.events import (
    BadPayloadError,
    Event,
    EventType,
    StagedProgress,
    parse_app_update_available,
    parse_non_root_command_finished,
    parse_update_eol_database,
)


def test_parse_app_update_available():
    assert parse_app_update_available(Event(EventType.APP_UPDATE_AVAILABLE, "v1.2.3")) == "v1.2.3"


def test_parse_accepts_plain_string_type():
    assert parse_app_update_available(Event("xeol-app-update-available", "v2")) == "v2"


def test_wrong_event_type():
    with pytest.raises(BadPayloadError) as info:
        parse_app_update_available(Event(EventType.NON_ROOT_COMMAND_FINISHED, "v1"))
    assert info.value.field == "Type"
    assert info.value.type == EventType.APP_UPDATE_AVAILABLE
    assert info.value.value == EventType.NON_ROOT_COMMAND_FINISHED


def test_wrong_value_type_message():
    with pytest.raises(BadPayloadError) as info:
        parse_app_update_available(Event(EventType.APP_UPDATE_AVAILABLE, 5))
    assert info.value.field == "Value"
    assert str(info.value) == "event='xeol-app-update-available' has bad event payload field='Value': '5'"


def test_parse_non_root_command_finished():
    assert parse_non_root_command_finished(Event(EventType.NON_ROOT_COMMAND_FINISHED, "done")) == "done"
    with pytest.raises(BadPayloadError):
        parse_non_root_command_finished(Event(EventType.NON_ROOT_COMMAND_FINISHED, None))


def test_parse_update_eol_database():
    progress = StagedProgress(stage="checking for update", size=2)
    assert parse_update_eol_database(Event(EventType.UPDATE_EOL_DATABASE, progress)) is progress
    with pytest.raises(BadPayloadError):
        parse_update_eol_database(Event(EventType.UPDATE_EOL_DATABASE, "not progress"))
    with pytest.raises(BadPayloadError):
        parse_update_eol_database(Event(EventType.APP_UPDATE_AVAILABLE, progress))


def test_staged_progress():
    progress = StagedProgress()
    progress.increment()
    progress.increment()
    assert progress.current == 2
    assert not progress.completed
    progress.set_completed()
    assert progress.completed


def test_bad_payload_is_value_error():
    with pytest.raises(ValueError):
        parse_non_root_command_finished(Event(EventType.UPDATE_EOL_DATABASE, "x"))