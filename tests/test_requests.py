from __future__ import annotations

import random

import pytest

from concierge.domain.constraints import GameConfig
from concierge.domain.errors import InvalidStateError, NotFoundError
from concierge.domain.models import (
    Decision,
    MembershipLevel,
    RequestStatus,
    RequestType,
    Reservation,
    RoomQuality,
)
from concierge.services.game_service import ConciergeGame
from concierge.services.request_service import CheckInRequest, ReservationRequest


def _build_game(
    qualities=(RoomQuality.BASIC, RoomQuality.PLUS, RoomQuality.DELUXE),
    reputation: int = 50,
) -> ConciergeGame:
    config = GameConfig(
        num_rooms=len(qualities),
        hotel_name="Test Hotel",
        room_qualities=tuple(qualities),
        roster_size=4,
        starting_reputation=reputation,
    )
    return ConciergeGame(config, rng=random.Random(1))


def _walk_in(game: ConciergeGame, uid: int, quality: RoomQuality) -> CheckInRequest:
    guest = game.get_guest(uid)
    return CheckInRequest(
        guest_uid=uid,
        guest_name=guest.name,
        room_quality=quality,
        check_in_day=game.current_day,
        check_out_day=game.current_day + 2,
    )


def _reserved_check_in(
    game: ConciergeGame,
    uid: int,
    quality: RoomQuality,
    check_in_day: int = 5,
    check_out_day: int = 8,
) -> CheckInRequest:
    guest = game.get_guest(uid)
    guest.reservation = Reservation(
        guest_uid=uid,
        room_quality=quality,
        check_in_day=check_in_day,
        check_out_day=check_out_day,
    )
    return CheckInRequest(
        guest_uid=uid,
        guest_name=guest.name,
        room_quality=quality,
        check_in_day=check_in_day,
        check_out_day=check_out_day,
        has_reservation=True,
    )


def _reservation_request(game: ConciergeGame, uid: int) -> ReservationRequest:
    return ReservationRequest(
        guest_uid=uid,
        guest_name=game.get_guest(uid).name,
        room_quality=RoomQuality.PLUS,
        check_in_day=10,
        check_out_day=13,
    )


# --- Prompts and labels ---

def test_check_in_prompt_text() -> None:
    request = CheckInRequest(
        guest_uid=0,
        guest_name="A. Dorning",
        room_quality=RoomQuality.PLUS,
        check_in_day=1,
        check_out_day=3,
    )
    assert request.request_type is RequestType.CHECK_IN
    assert request.prompt_text == "A. Dorning would like to check into a Plus room from day 1 to 3."
    assert (request.accept_label, request.decline_label) == ("Accept", "Decline")
    assert request.status is RequestStatus.PENDING


def test_reservation_prompt_text() -> None:
    request = ReservationRequest(
        guest_uid=0,
        guest_name="B. Vice",
        room_quality=RoomQuality.DELUXE,
        check_in_day=6,
        check_out_day=9,
    )
    assert request.request_type is RequestType.RESERVATION
    assert request.prompt_text == (
        "B. Vice would like to make a reservation for a Deluxe room from day 6 to 9."
    )


@pytest.mark.parametrize("check_in_day, check_out_day", [(3, 3), (4, 2)])
def test_request_with_empty_stay_raises(check_in_day: int, check_out_day: int) -> None:
    with pytest.raises(ValueError):
        CheckInRequest(
            guest_uid=0,
            guest_name="C. Rouse",
            room_quality=RoomQuality.BASIC,
            check_in_day=check_in_day,
            check_out_day=check_out_day,
        )


# --- Walk-in check-in ---

def test_accept_walk_in_checks_guest_into_requested_quality(scripted_rng) -> None:
    game = _build_game()
    guest = game.get_guest(0)
    stays_before = guest.times_stayed
    request = _walk_in(game, 0, RoomQuality.PLUS)
    game.add_request(request)
    game.rng = scripted_rng([0.0])

    record = game.resolve_request(0, Decision.ACCEPT)

    assert record.status is RequestStatus.ACCEPTED
    assert record.room_number == 2
    assert guest.room_number == 2
    assert game.hotel.get_room(2).occupant_uid == guest.uid
    assert guest.reservation == Reservation(
        guest_uid=0,
        room_quality=RoomQuality.PLUS,
        check_in_day=0,
        check_out_day=2,
    )
    assert guest.times_stayed == stays_before + 1
    assert game.hotel.reputation == 58
    assert game.request_queue == ()
    assert game.resolution_log == (record,)


def test_walk_in_without_vacancy_cannot_be_accepted() -> None:
    game = _build_game(qualities=(RoomQuality.BASIC,))
    request = _walk_in(game, 0, RoomQuality.DELUXE)
    game.add_request(request)

    assert not request.can_accept(game)
    with pytest.raises(InvalidStateError):
        game.resolve_request(0, Decision.ACCEPT)

    assert game.request_queue == (request,)
    assert request.is_pending
    assert game.get_guest(0).room_number is None
    assert game.get_guest(0).reservation is None
    assert game.hotel.reputation == 50


def test_direct_accept_without_vacancy_changes_nothing() -> None:
    game = _build_game(qualities=(RoomQuality.BASIC,))
    game.hotel.check_in_guest(game.get_guest(1), game.hotel.get_room(1))
    request = _walk_in(game, 0, RoomQuality.BASIC)

    with pytest.raises(InvalidStateError):
        request.accept(game)

    assert request.is_pending
    assert game.get_guest(0).reservation is None
    assert game.hotel.reputation == 50


def test_walk_in_refused_while_guest_holds_reservation() -> None:
    game = _build_game()
    game.get_guest(0).reservation = Reservation(
        guest_uid=0,
        room_quality=RoomQuality.BASIC,
        check_in_day=9,
        check_out_day=11,
    )
    request = _walk_in(game, 0, RoomQuality.BASIC)

    assert not request.can_accept(game)
    with pytest.raises(InvalidStateError):
        request.accept(game)


def test_decline_walk_in_has_no_reputation_effect() -> None:
    game = _build_game()
    game.add_request(_walk_in(game, 0, RoomQuality.BASIC))

    record = game.resolve_request(0, Decision.DECLINE)

    assert record.status is RequestStatus.DECLINED
    assert record.room_number is None
    assert game.hotel.reputation == 50


# --- Reservation-backed check-in ---

def test_accept_reserved_check_in_uses_reservation_quality() -> None:
    game = _build_game()
    request = _reserved_check_in(game, 1, RoomQuality.DELUXE)
    game.add_request(request)

    record = game.resolve_request(0, Decision.ACCEPT)

    assert record.room_number == 3
    assert game.get_guest(1).room_number == 3
    assert game.get_guest(1).reservation.check_out_day == 8
    assert game.hotel.reputation == 52


def test_reserved_check_in_without_reservation_cannot_be_accepted() -> None:
    game = _build_game()
    request = CheckInRequest(
        guest_uid=0,
        guest_name=game.get_guest(0).name,
        room_quality=RoomQuality.BASIC,
        check_in_day=1,
        check_out_day=2,
        has_reservation=True,
    )

    assert not request.can_accept(game)
    with pytest.raises(InvalidStateError, match="missing reservation"):
        request.accept(game)


@pytest.mark.parametrize(
    "membership_level, expected_reputation",
    [
        (MembershipLevel.NOT_REGISTERED, 42),
        (MembershipLevel.BASIC, 39),
        (MembershipLevel.PLUS, 37),
        (MembershipLevel.ELITE, 33),
    ],
)
def test_decline_reserved_check_in_penalty_scales_with_membership(
    membership_level: MembershipLevel,
    expected_reputation: int,
) -> None:
    game = _build_game()
    guest = game.get_guest(0)
    guest.membership_level = membership_level
    game.add_request(_reserved_check_in(game, 0, RoomQuality.BASIC))

    game.resolve_request(0, Decision.DECLINE)

    assert game.hotel.reputation == expected_reputation


def test_decline_reserved_check_in_cancels_reservation(scripted_rng) -> None:
    game = _build_game()
    guest = game.get_guest(0)
    game.add_request(_reserved_check_in(game, 0, RoomQuality.PLUS))
    game.rng = scripted_rng([0.0])

    game.resolve_request(0, Decision.DECLINE)

    assert guest.reservation is None
    assert guest.room_number is None
    assert guest.reappearance_cooldown == 5


def test_decline_penalty_clamps_at_zero() -> None:
    game = _build_game(reputation=10)
    game.get_guest(0).membership_level = MembershipLevel.ELITE
    game.add_request(_reserved_check_in(game, 0, RoomQuality.BASIC))

    game.resolve_request(0, Decision.DECLINE)

    assert game.hotel.reputation == 0


# --- Reservation requests ---

def test_accept_reservation_books_future_stay() -> None:
    game = _build_game()
    guest = game.get_guest(2)
    game.add_request(_reservation_request(game, 2))

    record = game.resolve_request(0, Decision.ACCEPT)

    expected = Reservation(
        guest_uid=2,
        room_quality=RoomQuality.PLUS,
        check_in_day=10,
        check_out_day=13,
    )
    assert record.status is RequestStatus.ACCEPTED
    assert record.room_number is None
    assert guest.reservation == expected
    assert game.future_reservations == (expected,)
    assert guest.room_number is None
    assert game.hotel.reputation == 50


def test_reservation_refused_when_guest_already_booked() -> None:
    game = _build_game()
    game.get_guest(2).reservation = Reservation(
        guest_uid=2,
        room_quality=RoomQuality.BASIC,
        check_in_day=4,
        check_out_day=5,
    )
    request = _reservation_request(game, 2)
    game.add_request(request)

    assert not request.can_accept(game)
    with pytest.raises(InvalidStateError):
        game.resolve_request(0, Decision.ACCEPT)
    assert game.future_reservations == ()


def test_decline_reservation_costs_three() -> None:
    game = _build_game()
    game.add_request(_reservation_request(game, 2))

    game.resolve_request(0, Decision.DECLINE)

    assert game.hotel.reputation == 47
    assert game.future_reservations == ()
    assert game.get_guest(2).reservation is None


# --- Resolution bookkeeping ---

def test_request_cannot_be_resolved_twice() -> None:
    game = _build_game()
    request = _reservation_request(game, 3)
    game.add_request(request)
    game.resolve_request(0, Decision.DECLINE)

    with pytest.raises(NotFoundError):
        game.resolve_request(0, Decision.DECLINE)
    with pytest.raises(InvalidStateError):
        request.accept(game)
    assert not request.can_accept(game)
    assert game.hotel.reputation == 47


def test_resolve_removes_only_the_chosen_request() -> None:
    game = _build_game()
    first = _reservation_request(game, 0)
    second = _walk_in(game, 1, RoomQuality.BASIC)
    third = _reservation_request(game, 2)
    for request in (first, second, third):
        game.add_request(request)

    game.resolve_request(1, "decline")

    assert game.request_queue == (first, third)
    assert [entry.guest_uid for entry in game.resolution_log] == [1]
