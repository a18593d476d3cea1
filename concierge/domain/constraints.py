"""Game setup configuration and its validation rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from concierge.domain.models import (
    HOTEL_REPUTATION_MAX,
    HOTEL_REPUTATION_MIN,
    RoomQuality,
)
from concierge.utils.config import Settings


DEFAULT_NUM_ROOMS = 25
DEFAULT_ROSTER_SIZE = 100
DEFAULT_STARTING_REPUTATION = 50

# (basic, plus, deluxe) room counts offered on the setup screen.
HOTEL_SIZE_PRESETS: dict[str, tuple[int, int, int]] = {
    "small": (6, 3, 1),
    "medium": (15, 7, 3),
    "large": (20, 12, 6),
}


@dataclass(frozen=True)
class GameConfig:
    num_rooms: int = DEFAULT_NUM_ROOMS
    hotel_name: str = "Hotel"
    room_qualities: Optional[tuple[RoomQuality, ...]] = None
    roster_size: int = DEFAULT_ROSTER_SIZE
    starting_reputation: int = DEFAULT_STARTING_REPUTATION

    @classmethod
    def from_settings(cls, settings: Settings, **overrides) -> "GameConfig":
        values = {
            "num_rooms": settings.default_num_rooms,
            "hotel_name": settings.default_hotel_name,
            "roster_size": settings.guest_roster_size,
            "starting_reputation": settings.starting_reputation,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

    @classmethod
    def from_preset(
        cls,
        size: str,
        hotel_name: str = "Hotel",
        settings: Optional[Settings] = None,
    ) -> "GameConfig":
        """Build a config whose rooms follow one of the setup-screen sizes.

        Rooms are numbered BASIC first, then PLUS, then DELUXE.
        """
        if size not in HOTEL_SIZE_PRESETS:
            raise ValueError(
                f"Unknown hotel size '{size}'. Expected one of {sorted(HOTEL_SIZE_PRESETS)}"
            )
        basic, plus, deluxe = HOTEL_SIZE_PRESETS[size]
        qualities = (
            (RoomQuality.BASIC,) * basic
            + (RoomQuality.PLUS,) * plus
            + (RoomQuality.DELUXE,) * deluxe
        )
        if settings is None:
            return cls(
                num_rooms=len(qualities),
                hotel_name=hotel_name,
                room_qualities=qualities,
            )
        return cls.from_settings(
            settings,
            num_rooms=len(qualities),
            hotel_name=hotel_name,
            room_qualities=qualities,
        )


def validate_game_config(config: GameConfig) -> None:
    if config.num_rooms <= 0:
        raise ValueError("num_rooms must be > 0")
    if not config.hotel_name or not config.hotel_name.strip():
        raise ValueError("hotel_name must be non-empty")
    if config.roster_size < 0:
        raise ValueError("roster_size must be >= 0")
    if not HOTEL_REPUTATION_MIN <= config.starting_reputation <= HOTEL_REPUTATION_MAX:
        raise ValueError(
            f"starting_reputation must be between {HOTEL_REPUTATION_MIN} "
            f"and {HOTEL_REPUTATION_MAX}"
        )
    if config.room_qualities is not None:
        _validate_room_qualities(config.room_qualities, config.num_rooms)


def _validate_room_qualities(room_qualities: Sequence[RoomQuality], num_rooms: int) -> None:
    if len(room_qualities) != num_rooms:
        raise ValueError(
            f"room_qualities has {len(room_qualities)} entries but num_rooms={num_rooms}"
        )
    for quality in room_qualities:
        if quality not in tuple(RoomQuality):
            raise ValueError(f"room_qualities contains unknown quality {quality!r}")
