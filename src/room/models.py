"""
Housie Live - Room Models

Pydantic models that mirror the room engine's wire payloads. Every model is
frozen: a pushed snapshot replaces the previous one wholesale and is never
patched in place.
"""

from __future__ import annotations

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

TICKET_SIZE = 15
LOWEST_NUMBER = 1
HIGHEST_NUMBER = 90


class PayloadError(ValueError):
    """Raised when an inbound push cannot be parsed into a known shape."""

    def __init__(self, event: str, detail: str) -> None:
        super().__init__(f"Malformed '{event}' payload: {detail}")
        self.event = event
        self.detail = detail


def _check_range(values: tuple[int, ...] | frozenset[int], what: str) -> None:
    for value in values:
        if not (LOWEST_NUMBER <= value <= HIGHEST_NUMBER):
            raise ValueError(
                f"{what} contains {value}, must be between "
                f"{LOWEST_NUMBER} and {HIGHEST_NUMBER}."
            )


class Player(BaseModel):
    """One seat in a room: a dealt ticket and the numbers marked on it."""

    username: str = Field(min_length=1)
    ticket: tuple[int, ...] = Field(min_length=TICKET_SIZE, max_length=TICKET_SIZE)
    marks: frozenset[int] = frozenset()

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("ticket")
    @classmethod
    def _ticket_numbers(cls, ticket: tuple[int, ...]) -> tuple[int, ...]:
        if len(set(ticket)) != len(ticket):
            raise ValueError("Ticket numbers must be distinct.")
        _check_range(ticket, "Ticket")
        return ticket

    @model_validator(mode="after")
    def _marks_on_ticket(self) -> Player:
        stray = self.marks - set(self.ticket)
        if stray:
            raise ValueError(
                f"Marks {sorted(stray)} are not on {self.username}'s ticket."
            )
        return self


class RoomSnapshot(BaseModel):
    """Mirrors the engine's full room state (``room-data`` / ``game-reset``)."""

    room_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("roomId", "roomID", "room_id"),
    )
    players: tuple[Player, ...] = ()
    numbers_called: tuple[int, ...] = Field(
        default=(),
        validation_alias=AliasChoices("numbersCalled", "numbers_called"),
    )

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}

    @field_validator("room_id")
    @classmethod
    def _normalize_room_id(cls, room_id: str | None) -> str | None:
        if room_id is None:
            return None
        return room_id.strip().upper() or None

    @field_validator("numbers_called")
    @classmethod
    def _draw_history(cls, numbers: tuple[int, ...]) -> tuple[int, ...]:
        if len(set(numbers)) != len(numbers):
            raise ValueError("Called numbers must not repeat.")
        _check_range(numbers, "Called numbers")
        return numbers


class NumberDrawn(BaseModel):
    """Payload of ``new-number``."""

    number: int = Field(ge=LOWEST_NUMBER, le=HIGHEST_NUMBER)
    room: RoomSnapshot = Field(validation_alias=AliasChoices("roomData", "room"))

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}


class GameWon(BaseModel):
    """Payload of ``game-over``: the winning draw and who claimed it."""

    number: int = Field(ge=LOWEST_NUMBER, le=HIGHEST_NUMBER)
    room: RoomSnapshot = Field(validation_alias=AliasChoices("roomData", "room"))
    username: str = Field(min_length=1)

    model_config = {"frozen": True, "extra": "ignore", "populate_by_name": True}


def parse_model(model: type[BaseModel], event: str, raw: object) -> BaseModel:
    """Validate *raw* into *model*, re-raising failures as PayloadError."""
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ())) or "payload"
        raise PayloadError(event, f"{location}: {first.get('msg')}") from exc
