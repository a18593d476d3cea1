"""The Concierge game aggregate: hotel, guest roster, requests, and days."""

from __future__ import annotations

import random
from typing import Optional

from concierge.domain.constraints import GameConfig, validate_game_config
from concierge.domain.errors import InvalidStateError, NotFoundError
from concierge.domain.models import (
    Decision,
    Guest,
    Reservation,
    ResolvedRequest,
)
from concierge.services.guest_service import (
    GuestGenerator,
    start_reappearance_cooldown,
    tick_guest,
)
from concierge.services.hotel_service import Hotel
from concierge.services.request_service import CheckInRequest, GuestRequest
from concierge.utils.config import Settings, get_settings
from concierge.utils.logger import get_logger


logger = get_logger(__name__)


class ConciergeGame:
    """One self-contained simulation instance.

    The host reads state through the properties below and changes it only
    through `resolve_request`, `advance_day`, and `evict_guest`. Every random
    decision draws from `rng`, so equal seeds with equal commands replay the
    same game.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._config = config or GameConfig.from_settings(self._settings)
        validate_game_config(self._config)

        self.rng = rng or random.Random(self._settings.random_seed)
        self._current_day = 0
        self._hotel = Hotel(
            name=self._config.hotel_name,
            num_rooms=self._config.num_rooms,
            room_qualities=self._config.room_qualities,
            reputation=self._config.starting_reputation,
        )
        self._request_queue: list[GuestRequest] = []
        self._future_reservations: list[Reservation] = []
        self._resolution_log: list[ResolvedRequest] = []

        generator = GuestGenerator(self.rng)
        self._guests: tuple[Guest, ...] = tuple(
            generator.generate_guest(uid) for uid in range(self._config.roster_size)
        )
        self._guests_by_uid = {guest.uid: guest for guest in self._guests}

        logger.info(
            "Game created | hotel=%s | rooms=%s | guests=%s",
            self._hotel.name,
            self._hotel.num_rooms,
            len(self._guests),
        )

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def current_day(self) -> int:
        return self._current_day

    @property
    def hotel(self) -> Hotel:
        return self._hotel

    @property
    def guests(self) -> tuple[Guest, ...]:
        return self._guests

    @property
    def request_queue(self) -> tuple[GuestRequest, ...]:
        return tuple(self._request_queue)

    @property
    def future_reservations(self) -> tuple[Reservation, ...]:
        return tuple(self._future_reservations)

    @property
    def resolution_log(self) -> tuple[ResolvedRequest, ...]:
        return tuple(self._resolution_log)

    def get_guest(self, uid: int) -> Guest:
        guest = self._guests_by_uid.get(uid)
        if guest is None:
            raise NotFoundError(f"No guest found with uid: {uid}.")
        return guest

    def current_guests(self) -> list[Guest]:
        """Guests holding a room, in room-number order."""
        return [
            self.get_guest(room.occupant_uid)
            for room in self._hotel.occupied_rooms()
            if room.occupant_uid is not None
        ]

    def add_request(self, request: GuestRequest) -> None:
        self._request_queue.append(request)

    def add_future_reservation(self, reservation: Reservation) -> None:
        self._future_reservations.append(reservation)

    def cancel_reservation(self, guest: Guest) -> None:
        """Drop a guest's unused reservation and start their cooldown."""
        reservation = guest.reservation
        if reservation is None:
            return
        if guest.room_number is not None:
            raise InvalidStateError(
                f"Guest {guest.uid} is staying in room {guest.room_number}; "
                "check them out instead of cancelling the reservation"
            )
        if reservation in self._future_reservations:
            self._future_reservations.remove(reservation)
        guest.reservation = None
        start_reappearance_cooldown(guest, self.rng)

    def resolve_request(self, index: int, decision: Decision) -> ResolvedRequest:
        """Accept or decline the queued request at `index` and dequeue it.

        A request that fails to resolve stays queued and nothing changes.
        """
        if not 0 <= index < len(self._request_queue):
            raise NotFoundError(
                f"No request at index {index}; queue holds {len(self._request_queue)}"
            )
        request = self._request_queue[index]
        decision = Decision(decision)

        room_number: Optional[int] = None
        if decision is Decision.ACCEPT:
            if not request.can_accept(self):
                raise InvalidStateError(
                    f"{request.request_type.value} request from guest "
                    f"{request.guest_uid} cannot be accepted"
                )
            room = request.accept(self)
            if room is not None:
                room_number = room.room_number
        else:
            request.decline(self)

        del self._request_queue[index]
        record = ResolvedRequest(
            day=self._current_day,
            request_type=request.request_type,
            guest_uid=request.guest_uid,
            status=request.status,
            room_number=room_number,
        )
        self._resolution_log.append(record)
        logger.info(
            "Request resolved | day=%s | type=%s | guest=%s | status=%s | reputation=%s",
            self._current_day,
            request.request_type.value,
            request.guest_uid,
            record.status.value,
            self._hotel.reputation,
        )
        return record

    def evict_guest(self, uid: int) -> None:
        guest = self.get_guest(uid)
        self._hotel.evict_guest(guest)
        start_reappearance_cooldown(guest, self.rng)
        logger.info(
            "Guest evicted | day=%s | guest=%s | reputation=%s",
            self._current_day,
            uid,
            self._hotel.reputation,
        )

    def advance_day(self) -> list[GuestRequest]:
        """Run one tick and return the new day's request queue."""
        self._current_day += 1
        self._request_queue = []

        for guest in self._guests:
            request = tick_guest(guest, self)
            if request is not None:
                self.add_request(request)
        generated_count = len(self._request_queue)

        for index in range(len(self._future_reservations) - 1, -1, -1):
            reservation = self._future_reservations[index]
            if reservation.check_in_day != self._current_day:
                continue
            guest = self.get_guest(reservation.guest_uid)
            self.add_request(
                CheckInRequest(
                    guest_uid=guest.uid,
                    guest_name=guest.name,
                    room_quality=reservation.room_quality,
                    check_in_day=reservation.check_in_day,
                    check_out_day=reservation.check_out_day,
                    has_reservation=True,
                )
            )
            del self._future_reservations[index]

        logger.info(
            "Day advanced | day=%s | requests=%s | matured=%s | reputation=%s",
            self._current_day,
            len(self._request_queue),
            len(self._request_queue) - generated_count,
            self._hotel.reputation,
        )
        return list(self._request_queue)

    tick = advance_day
