"""Hotel room inventory, occupancy, and reputation."""

from __future__ import annotations

from typing import Optional, Sequence

from concierge.domain.errors import InvalidStateError, NotFoundError
from concierge.domain.models import (
    Guest,
    Room,
    RoomQuality,
    VacancyCount,
    clamp_reputation,
)
from concierge.utils.logger import get_logger


logger = get_logger(__name__)

EVICTION_REPUTATION_PENALTY = 3


class Hotel:
    """Owns a fixed set of rooms and the occupancy links into the guest roster.

    Every occupancy change goes through `check_in_guest` / `check_out_guest`,
    which write `Room.occupant_uid` and `Guest.room_number` together.
    """

    def __init__(
        self,
        name: str,
        num_rooms: int,
        room_qualities: Optional[Sequence[RoomQuality]] = None,
        reputation: int = 50,
    ) -> None:
        if num_rooms <= 0:
            raise ValueError("num_rooms must be > 0")
        if room_qualities is None:
            qualities = [RoomQuality.BASIC] * num_rooms
        else:
            qualities = [RoomQuality(quality) for quality in room_qualities]
            if len(qualities) != num_rooms:
                raise ValueError(
                    f"room_qualities has {len(qualities)} entries but num_rooms={num_rooms}"
                )

        self._name = name
        self._rooms: tuple[Room, ...] = tuple(
            Room(room_number=index + 1, quality=quality)
            for index, quality in enumerate(qualities)
        )
        self._reputation = clamp_reputation(reputation)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def rooms(self) -> tuple[Room, ...]:
        return self._rooms

    @property
    def num_rooms(self) -> int:
        return len(self._rooms)

    @property
    def reputation(self) -> int:
        return self._reputation

    @reputation.setter
    def reputation(self, value: int) -> None:
        self._reputation = clamp_reputation(value)

    def adjust_reputation(self, delta: int) -> int:
        """Apply a signed change and return the clamped result."""
        self.reputation = self._reputation + delta
        return self._reputation

    def get_room(self, room_number: int) -> Room:
        if not 1 <= room_number <= len(self._rooms):
            raise NotFoundError(
                f"No room {room_number}; valid room numbers are 1..{len(self._rooms)}"
            )
        return self._rooms[room_number - 1]

    def has_vacant_room(self, min_quality: RoomQuality) -> bool:
        return any(
            room.quality >= min_quality and not room.is_occupied
            for room in self._rooms
        )

    def get_vacant_rooms(self, min_quality: RoomQuality) -> list[Room]:
        return [
            room
            for room in self._rooms
            if room.quality >= min_quality and not room.is_occupied
        ]

    def get_rooms_of_quality(self, quality: RoomQuality) -> list[Room]:
        return [room for room in self._rooms if room.quality == quality]

    def get_vacant_rooms_of_quality(self, quality: RoomQuality) -> list[Room]:
        return [
            room
            for room in self._rooms
            if room.quality == quality and not room.is_occupied
        ]

    def occupied_rooms(self) -> list[Room]:
        return [room for room in self._rooms if room.is_occupied]

    def vacancy_summary(self) -> dict[RoomQuality, VacancyCount]:
        return {
            quality: VacancyCount(
                vacant=len(self.get_vacant_rooms_of_quality(quality)),
                total=len(self.get_rooms_of_quality(quality)),
            )
            for quality in RoomQuality
        }

    def check_in_guest(self, guest: Guest, room: Room) -> None:
        if not any(owned is room for owned in self._rooms):
            raise InvalidStateError(
                f"Room {room.room_number} does not belong to hotel '{self._name}'"
            )
        if room.is_occupied:
            raise InvalidStateError(
                f"Room {room.room_number} is already occupied by guest {room.occupant_uid}"
            )
        if guest.room_number is not None:
            raise InvalidStateError(
                f"Guest {guest.uid} is already checked into room {guest.room_number}"
            )

        room.occupant_uid = guest.uid
        guest.room_number = room.room_number
        logger.debug("Guest checked in | guest=%s | room=%s", guest.uid, room.room_number)

    def check_out_guest(self, guest: Guest) -> None:
        if guest.room_number is None:
            raise InvalidStateError("Cannot check out a guest who does not have a room.")

        room = self.get_room(guest.room_number)
        room.occupant_uid = None
        guest.room_number = None
        guest.reservation = None
        logger.debug("Guest checked out | guest=%s | room=%s", guest.uid, room.room_number)

    def evict_guest(self, guest: Guest) -> None:
        self.check_out_guest(guest)
        self.adjust_reputation(-EVICTION_REPUTATION_PENALTY)
