"""Tests for src/room/models.py — wire models and payload validation."""

import pytest
from pydantic import ValidationError

from src.room.models import (
    GameWon,
    NumberDrawn,
    PayloadError,
    Player,
    RoomSnapshot,
    parse_model,
)


# ── Player ──────────────────────────────────────────────────────────────

class TestPlayer:
    def test_valid_player(self, make_room):
        data = make_room(called=[3, 42])["players"][0]
        player = Player.model_validate(data)
        assert player.username == "alice"
        assert len(player.ticket) == 15
        assert player.marks == frozenset({3, 42})

    def test_ticket_must_have_fifteen_numbers(self):
        with pytest.raises(ValidationError):
            Player(username="alice", ticket=tuple(range(1, 15)))

    def test_ticket_numbers_distinct(self):
        ticket = (1,) * 2 + tuple(range(2, 15))
        with pytest.raises(ValidationError, match="distinct"):
            Player(username="alice", ticket=ticket)

    def test_ticket_numbers_in_range(self):
        ticket = tuple(range(80, 95))
        with pytest.raises(ValidationError, match="between 1 and 90"):
            Player(username="alice", ticket=ticket)

    def test_marks_must_be_on_ticket(self):
        with pytest.raises(ValidationError, match="not on alice's ticket"):
            Player(username="alice", ticket=tuple(range(1, 16)), marks=frozenset({16}))

    def test_is_frozen(self):
        player = Player(username="alice", ticket=tuple(range(1, 16)))
        with pytest.raises(ValidationError):
            player.username = "mallory"


# ── RoomSnapshot ────────────────────────────────────────────────────────

class TestRoomSnapshot:
    def test_wire_aliases(self, make_room):
        room = RoomSnapshot.model_validate(make_room(called=[7, 42]))
        assert room.room_id == "AB12CD"
        assert room.numbers_called == (7, 42)
        assert [p.username for p in room.players] == ["alice"]

    def test_room_id_alias_upper_case_d(self, make_room):
        data = make_room()
        data["roomID"] = data.pop("roomId")
        assert RoomSnapshot.model_validate(data).room_id == "AB12CD"

    def test_room_id_normalized(self):
        room = RoomSnapshot.model_validate({"roomId": "  ab12cd "})
        assert room.room_id == "AB12CD"

    def test_room_id_optional(self):
        room = RoomSnapshot.model_validate({"players": [], "numbersCalled": []})
        assert room.room_id is None

    def test_repeated_call_rejected(self):
        with pytest.raises(ValidationError, match="must not repeat"):
            RoomSnapshot.model_validate({"numbersCalled": [4, 4]})

    def test_out_of_range_call_rejected(self):
        with pytest.raises(ValidationError):
            RoomSnapshot.model_validate({"numbersCalled": [0]})

    def test_unknown_fields_ignored(self, make_room):
        data = make_room()
        data["host"] = "alice"
        room = RoomSnapshot.model_validate(data)
        assert not hasattr(room, "host")


# ── Draw payloads ───────────────────────────────────────────────────────

class TestDrawPayloads:
    def test_number_drawn(self, make_room):
        drawn = NumberDrawn.model_validate({"number": 42, "roomData": make_room(called=[42])})
        assert drawn.number == 42
        assert drawn.room.numbers_called == (42,)

    def test_game_won(self, make_room):
        won = GameWon.model_validate({
            "number": 42,
            "roomData": make_room(called=[42]),
            "username": "bob",
        })
        assert won.username == "bob"

    def test_game_won_requires_username(self, make_room):
        with pytest.raises(ValidationError):
            GameWon.model_validate({"number": 42, "roomData": make_room()})


class TestParseModel:
    def test_wraps_validation_error(self):
        with pytest.raises(PayloadError, match="Malformed 'new-number' payload") as info:
            parse_model(NumberDrawn, "new-number", {"number": 91, "roomData": {}})
        assert info.value.event == "new-number"
        assert "number" in info.value.detail

    def test_payload_error_is_value_error(self):
        assert issubclass(PayloadError, ValueError)
