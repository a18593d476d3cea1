"""Guest requests and the effects of accepting or declining them.

The request set is closed: `GuestRequest` is the union of `CheckInRequest`
and `ReservationRequest`. Each variant exposes the same capability set
(type tag, prompt text, button labels, `can_accept`, `accept`, `decline`)
and moves once from PENDING to ACCEPTED or DECLINED.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Optional, Union

from concierge.domain.errors import InvalidStateError
from concierge.domain.models import (
    ROOM_QUALITY_NAMES,
    MembershipLevel,
    RequestStatus,
    RequestType,
    Reservation,
    Room,
    RoomQuality,
)
from concierge.utils.logger import get_logger
from concierge.utils.randomness import pick

if TYPE_CHECKING:
    from concierge.services.game_service import ConciergeGame


logger = get_logger(__name__)

WALK_IN_ACCEPT_REPUTATION = 8
RESERVED_CHECK_IN_ACCEPT_REPUTATION = 2
RESERVED_CHECK_IN_DECLINE_PENALTY = 8
RESERVATION_DECLINE_PENALTY = 3

# Extra penalty for turning away a guest who holds a reservation.
MEMBERSHIP_DECLINE_PENALTY: dict[MembershipLevel, int] = {
    MembershipLevel.NOT_REGISTERED: 0,
    MembershipLevel.BASIC: 3,
    MembershipLevel.PLUS: 5,
    MembershipLevel.ELITE: 9,
}


@dataclass(eq=False)
class _StayRequest:
    guest_uid: int
    guest_name: str
    room_quality: RoomQuality
    check_in_day: int
    check_out_day: int
    status: RequestStatus = field(default=RequestStatus.PENDING, init=False)

    request_type: ClassVar[RequestType]
    accept_label: ClassVar[str] = "Accept"
    decline_label: ClassVar[str] = "Decline"

    def __post_init__(self) -> None:
        if self.check_in_day >= self.check_out_day:
            raise ValueError("check_in_day must be earlier than check_out_day")

    @property
    def room_quality_name(self) -> str:
        return ROOM_QUALITY_NAMES[self.room_quality]

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING

    def _ensure_pending(self) -> None:
        if not self.is_pending:
            raise InvalidStateError(
                f"{self.request_type.value} request from guest {self.guest_uid} "
                f"is already {self.status.value}"
            )


@dataclass(eq=False)
class CheckInRequest(_StayRequest):
    has_reservation: bool = False

    request_type: ClassVar[RequestType] = RequestType.CHECK_IN

    @property
    def prompt_text(self) -> str:
        return (
            f"{self.guest_name} would like to check into a "
            f"{self.room_quality_name} room "
            f"from day {self.check_in_day} to {self.check_out_day}."
        )

    def _effective_quality(self, game: "ConciergeGame") -> Optional[RoomQuality]:
        if not self.has_reservation:
            return self.room_quality
        reservation = game.get_guest(self.guest_uid).reservation
        return reservation.room_quality if reservation is not None else None

    def can_accept(self, game: "ConciergeGame") -> bool:
        if not self.is_pending:
            return False
        guest = game.get_guest(self.guest_uid)
        if guest.room_number is not None:
            return False
        if not self.has_reservation and guest.reservation is not None:
            return False
        quality = self._effective_quality(game)
        return quality is not None and game.hotel.has_vacant_room(quality)

    def accept(self, game: "ConciergeGame") -> Room:
        """Check the guest into a random vacant room of the booked quality.

        All preconditions are checked before any state changes.
        """
        self._ensure_pending()
        hotel = game.hotel
        guest = game.get_guest(self.guest_uid)
        if guest.room_number is not None:
            raise InvalidStateError(
                f"Guest {guest.uid} is already checked into room {guest.room_number}"
            )

        if self.has_reservation:
            reservation = guest.reservation
            reputation_delta = RESERVED_CHECK_IN_ACCEPT_REPUTATION
        else:
            if guest.reservation is not None:
                raise InvalidStateError(
                    f"Guest {guest.uid} already holds a reservation; walk-in check-in refused"
                )
            reservation = Reservation(
                guest_uid=guest.uid,
                room_quality=self.room_quality,
                check_in_day=self.check_in_day,
                check_out_day=self.check_out_day,
            )
            reputation_delta = WALK_IN_ACCEPT_REPUTATION

        if reservation is None:
            raise InvalidStateError("Guest missing reservation for check-in")

        vacant_rooms = hotel.get_vacant_rooms(reservation.room_quality)
        if not vacant_rooms:
            raise InvalidStateError(
                f"No vacant {reservation.room_quality_name} room (or better) "
                f"for guest {guest.uid}"
            )
        room = pick(game.rng, vacant_rooms)

        hotel.adjust_reputation(reputation_delta)
        guest.reservation = reservation
        hotel.check_in_guest(guest, room)
        guest.increment_times_stayed()
        self.status = RequestStatus.ACCEPTED
        logger.debug(
            "Check-in accepted | guest=%s | room=%s | reserved=%s",
            guest.uid,
            room.room_number,
            self.has_reservation,
        )
        return room

    def decline(self, game: "ConciergeGame") -> None:
        self._ensure_pending()
        if self.has_reservation:
            guest = game.get_guest(self.guest_uid)
            penalty = (
                RESERVED_CHECK_IN_DECLINE_PENALTY
                + MEMBERSHIP_DECLINE_PENALTY[guest.membership_level]
            )
            game.hotel.adjust_reputation(-penalty)
            if guest.room_number is None and guest.reservation is not None:
                game.cancel_reservation(guest)
        self.status = RequestStatus.DECLINED


@dataclass(eq=False)
class ReservationRequest(_StayRequest):
    request_type: ClassVar[RequestType] = RequestType.RESERVATION

    @property
    def prompt_text(self) -> str:
        return (
            f"{self.guest_name} would like to make a reservation for a "
            f"{self.room_quality_name} room "
            f"from day {self.check_in_day} to {self.check_out_day}."
        )

    def can_accept(self, game: "ConciergeGame") -> bool:
        if not self.is_pending:
            return False
        guest = game.get_guest(self.guest_uid)
        return guest.room_number is None and guest.reservation is None

    def accept(self, game: "ConciergeGame") -> None:
        self._ensure_pending()
        guest = game.get_guest(self.guest_uid)
        if guest.room_number is not None or guest.reservation is not None:
            raise InvalidStateError(
                f"Guest {guest.uid} already holds a room or a reservation"
            )

        reservation = Reservation(
            guest_uid=guest.uid,
            room_quality=self.room_quality,
            check_in_day=self.check_in_day,
            check_out_day=self.check_out_day,
        )
        game.add_future_reservation(reservation)
        guest.reservation = reservation
        self.status = RequestStatus.ACCEPTED
        logger.debug(
            "Reservation booked | guest=%s | days=%s-%s",
            guest.uid,
            reservation.check_in_day,
            reservation.check_out_day,
        )

    def decline(self, game: "ConciergeGame") -> None:
        self._ensure_pending()
        game.hotel.adjust_reputation(-RESERVATION_DECLINE_PENALTY)
        self.status = RequestStatus.DECLINED


GuestRequest = Union[CheckInRequest, ReservationRequest]
