"""Tests for src/session/intents.py — local validation before sending."""

import pytest

from src.session.intents import (
    NOT_CONNECTED,
    IntentDispatcher,
    IntentRejected,
    validate_room_id,
    validate_username,
)


@pytest.fixture
def dispatcher(channel):
    channel.connect()
    return IntentDispatcher(channel, code_factory=lambda: "ab12cd")


class TestValidators:
    def test_username_stripped(self):
        assert validate_username("  alice ") == "alice"

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_username(self, name):
        with pytest.raises(IntentRejected, match="Enter your name!"):
            validate_username(name)

    def test_long_username(self):
        with pytest.raises(IntentRejected, match="at most 30"):
            validate_username("x" * 31)

    def test_room_id_normalized(self):
        assert validate_room_id(" ab12cd ") == "AB12CD"

    def test_blank_room_id(self):
        with pytest.raises(IntentRejected):
            validate_room_id("  ")

    def test_rejection_is_value_error(self):
        assert issubclass(IntentRejected, ValueError)


class TestCreateRoom:
    def test_sends_generated_code(self, sio, dispatcher):
        assert dispatcher.create_room("alice") == ("alice", "AB12CD")
        assert sio.emitted == [("create-room", {"roomID": "AB12CD", "username": "alice"})]

    def test_blank_name_sends_nothing(self, sio, dispatcher):
        with pytest.raises(IntentRejected):
            dispatcher.create_room(" ")
        assert sio.emitted == []

    def test_default_codes_are_six_characters(self, sio, channel):
        channel.connect()
        _, room_id = IntentDispatcher(channel).create_room("alice")
        assert len(room_id) == 6


class TestJoinRoom:
    def test_sends_normalized_room(self, sio, dispatcher):
        assert dispatcher.join_room(" bob ", "xy34zw") == ("bob", "XY34ZW")
        assert sio.emitted == [("join-room", {"roomID": "XY34ZW", "username": "bob"})]

    @pytest.mark.parametrize("username,room_id", [
        ("", "XY34ZW"),
        ("bob", ""),
        (None, None),
    ])
    def test_missing_fields(self, sio, dispatcher, username, room_id):
        with pytest.raises(IntentRejected, match="Enter name and Room ID!"):
            dispatcher.join_room(username, room_id)
        assert sio.emitted == []


class TestRoomIntents:
    def test_request_draw(self, sio, dispatcher):
        dispatcher.request_draw("AB12CD")
        assert sio.emitted == [("generate-number", "AB12CD")]

    def test_request_reset(self, sio, dispatcher):
        dispatcher.request_reset("AB12CD")
        assert sio.emitted == [("reset-game", "AB12CD")]

    def test_unknown_room(self, sio, dispatcher):
        with pytest.raises(IntentRejected, match="not in a room"):
            dispatcher.request_draw(None)
        assert sio.emitted == []


class TestTransportDown:
    def test_not_connected_is_user_facing(self, sio, channel):
        dispatcher = IntentDispatcher(channel)
        with pytest.raises(IntentRejected, match=NOT_CONNECTED):
            dispatcher.request_draw("AB12CD")
        assert sio.emitted == []
