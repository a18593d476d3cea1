"""Host-facing game session workflow for the HTTP API and dashboard."""

from __future__ import annotations

import random
from threading import RLock
from typing import Any, Optional

from concierge.domain.constraints import GameConfig
from concierge.domain.models import (
    HOTEL_REPUTATION_MAX,
    HOTEL_REPUTATION_MIN,
    ROOM_QUALITY_NAMES,
    Decision,
    Guest,
    Reservation,
)
from concierge.services.game_service import ConciergeGame
from concierge.services.request_service import CheckInRequest, GuestRequest
from concierge.utils.config import Settings, get_settings
from concierge.utils.logger import get_logger


logger = get_logger(__name__)


class SessionValidationError(Exception):
    """Raised when session setup inputs are invalid."""


class GameSessionService:
    """Coordinates setup -> review requests -> resolve -> next day.

    Holds the single game the host application plays. The lock serialises
    commands coming from concurrent HTTP handlers; the game itself is
    single-threaded.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        game: Optional[ConciergeGame] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._lock = RLock()
        self._game = game or ConciergeGame(settings=self._settings)

    @property
    def game(self) -> ConciergeGame:
        with self._lock:
            return self._game

    def new_game(
        self,
        *,
        hotel_name: Optional[str] = None,
        size: Optional[str] = None,
        num_rooms: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> dict[str, Any]:
        if size is not None and num_rooms is not None:
            raise SessionValidationError("Provide either size or num_rooms, not both")
        name = hotel_name if hotel_name is not None else self._settings.default_hotel_name
        if not name.strip():
            raise SessionValidationError("hotel_name must be non-empty")

        rng = random.Random(seed if seed is not None else self._settings.random_seed)
        try:
            if size is not None:
                config = GameConfig.from_preset(size, hotel_name=name, settings=self._settings)
            else:
                config = GameConfig.from_settings(
                    self._settings,
                    num_rooms=num_rooms,
                    hotel_name=name,
                )
            game = ConciergeGame(config, rng=rng, settings=self._settings)
        except ValueError as exc:
            raise SessionValidationError(str(exc)) from exc

        with self._lock:
            self._game = game
        logger.info(
            "New session game | hotel=%s | size=%s | rooms=%s | seed=%s",
            name,
            size,
            game.hotel.num_rooms,
            seed,
        )
        return self.status()

    def rename_hotel(self, name: str) -> dict[str, Any]:
        if not name.strip():
            raise SessionValidationError("hotel name must be non-empty")
        with self._lock:
            self._game.hotel.name = name
        return self.status()

    def status(self) -> dict[str, Any]:
        with self._lock:
            game = self._game
            hotel = game.hotel
            summary = hotel.vacancy_summary()
            return {
                "hotel_name": hotel.name,
                "day": game.current_day,
                "reputation": hotel.reputation,
                "reputation_min": HOTEL_REPUTATION_MIN,
                "reputation_max": HOTEL_REPUTATION_MAX,
                "rooms": [
                    {
                        "quality": ROOM_QUALITY_NAMES[quality],
                        "vacant": count.vacant,
                        "total": count.total,
                    }
                    for quality, count in summary.items()
                ],
                "pending_request_count": len(game.request_queue),
                "future_reservation_count": len(game.future_reservations),
            }

    def list_requests(self) -> list[dict[str, Any]]:
        with self._lock:
            game = self._game
            return [
                self._request_row(index, request, game)
                for index, request in enumerate(game.request_queue)
            ]

    def resolve_request(self, index: int, decision: Decision) -> dict[str, Any]:
        with self._lock:
            game = self._game
            record = game.resolve_request(index, decision)
            return {
                "day": record.day,
                "request_type": record.request_type.value,
                "guest_uid": record.guest_uid,
                "status": record.status.value,
                "room_number": record.room_number,
                "reputation": game.hotel.reputation,
            }

    def advance_day(self) -> dict[str, Any]:
        with self._lock:
            game = self._game
            requests = game.advance_day()
            matured = sum(
                1
                for request in requests
                if isinstance(request, CheckInRequest) and request.has_reservation
            )
            return {
                "day": game.current_day,
                "request_count": len(requests),
                "matured_reservation_count": matured,
                "reputation": game.hotel.reputation,
            }

    def get_guest(self, uid: int) -> dict[str, Any]:
        with self._lock:
            return self._guest_card(self._game.get_guest(uid))

    def list_current_guests(self) -> list[dict[str, Any]]:
        with self._lock:
            return [self._guest_card(guest) for guest in self._game.current_guests()]

    def list_reservations(self) -> list[dict[str, Any]]:
        with self._lock:
            game = self._game
            rows = [
                self._reservation_row(reservation, game.get_guest(reservation.guest_uid))
                for reservation in game.future_reservations
            ]
        return sorted(rows, key=lambda row: (row["check_in_day"], row["guest_uid"]))

    def evict_guest(self, uid: int) -> dict[str, Any]:
        with self._lock:
            game = self._game
            game.evict_guest(uid)
            return {"guest_uid": uid, "reputation": game.hotel.reputation}

    def _request_row(
        self,
        index: int,
        request: GuestRequest,
        game: ConciergeGame,
    ) -> dict[str, Any]:
        guest = game.get_guest(request.guest_uid)
        return {
            "index": index,
            "request_type": request.request_type.value,
            "guest_uid": guest.uid,
            "guest_name": guest.name,
            "prompt_text": request.prompt_text,
            "accept_label": request.accept_label,
            "decline_label": request.decline_label,
            "room_quality": request.room_quality_name,
            "check_in_day": request.check_in_day,
            "check_out_day": request.check_out_day,
            "has_reservation": (
                request.has_reservation if isinstance(request, CheckInRequest) else None
            ),
            "can_accept": request.can_accept(game),
        }

    def _guest_card(self, guest: Guest) -> dict[str, Any]:
        reservation = guest.reservation
        return {
            "uid": guest.uid,
            "name": guest.name,
            "membership_level": guest.membership_level_name,
            "times_stayed": guest.times_stayed,
            "room_number": guest.room_number,
            "is_current_guest": guest.is_current_guest,
            "reservation": (
                self._reservation_row(reservation, guest) if reservation is not None else None
            ),
        }

    @staticmethod
    def _reservation_row(reservation: Reservation, guest: Guest) -> dict[str, Any]:
        return {
            "guest_uid": guest.uid,
            "guest_name": guest.name,
            "room_quality": reservation.room_quality_name,
            "check_in_day": reservation.check_in_day,
            "check_out_day": reservation.check_out_day,
        }
