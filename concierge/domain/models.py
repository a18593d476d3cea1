"""Domain models for the hotel simulation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


HOTEL_REPUTATION_MIN = 0
HOTEL_REPUTATION_MAX = 100


class RoomQuality(IntEnum):
    BASIC = 0
    PLUS = 1
    DELUXE = 2


ROOM_QUALITY_NAMES = ("Basic", "Plus", "Deluxe")


class MembershipLevel(IntEnum):
    NOT_REGISTERED = 0
    BASIC = 1
    PLUS = 2
    ELITE = 3


MEMBERSHIP_LEVEL_NAMES = ("Not Registered", "Basic", "Plus", "Elite")


class RequestType(str, Enum):
    CHECK_IN = "Check-In"
    RESERVATION = "Reservation"


class RequestStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


class Decision(str, Enum):
    ACCEPT = "accept"
    DECLINE = "decline"


def clamp_reputation(value: int) -> int:
    return max(HOTEL_REPUTATION_MIN, min(HOTEL_REPUTATION_MAX, int(value)))


@dataclass(frozen=True)
class Reservation:
    """A booking of a room quality for the half-open day range [in, out)."""

    guest_uid: int
    room_quality: RoomQuality
    check_in_day: int
    check_out_day: int

    def __post_init__(self) -> None:
        if self.check_in_day >= self.check_out_day:
            raise ValueError(
                "check_in_day must be earlier than check_out_day "
                f"(got {self.check_in_day} -> {self.check_out_day})"
            )

    @property
    def room_quality_name(self) -> str:
        return ROOM_QUALITY_NAMES[self.room_quality]


@dataclass(eq=False)
class Room:
    """A hotel room. Only `Hotel` writes `occupant_uid`."""

    room_number: int
    quality: RoomQuality
    occupant_uid: Optional[int] = None

    @property
    def quality_name(self) -> str:
        return ROOM_QUALITY_NAMES[self.quality]

    @property
    def is_occupied(self) -> bool:
        return self.occupant_uid is not None


@dataclass(eq=False)
class Guest:
    """A person on the game roster.

    `room_number` mirrors the hotel's occupancy and is written by `Hotel`
    only. A guest holds at most one reservation at a time.
    """

    uid: int
    name: str
    membership_level: MembershipLevel
    times_stayed: int = 0
    room_number: Optional[int] = None
    reservation: Optional[Reservation] = None
    reappearance_cooldown: int = 0

    @property
    def membership_level_name(self) -> str:
        return MEMBERSHIP_LEVEL_NAMES[self.membership_level]

    @property
    def is_current_guest(self) -> bool:
        return self.room_number is not None

    def increment_times_stayed(self) -> None:
        self.times_stayed += 1

    def upgrade_membership(self) -> None:
        if self.membership_level < MembershipLevel.ELITE:
            self.membership_level = MembershipLevel(self.membership_level + 1)


@dataclass(frozen=True)
class VacancyCount:
    vacant: int
    total: int


@dataclass(frozen=True)
class ResolvedRequest:
    """Outcome record for a request the player accepted or declined."""

    day: int
    request_type: RequestType
    guest_uid: int
    status: RequestStatus
    room_number: Optional[int] = None
