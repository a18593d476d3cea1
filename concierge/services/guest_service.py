"""Guest generation and the per-day guest behaviour rules."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Optional

from concierge.domain.models import Guest, MembershipLevel, Room, RoomQuality
from concierge.services.request_service import (
    CheckInRequest,
    GuestRequest,
    ReservationRequest,
)
from concierge.utils.logger import get_logger
from concierge.utils.randomness import pick, random_offset, roll

if TYPE_CHECKING:
    from concierge.services.game_service import ConciergeGame


logger = get_logger(__name__)

REAPPEARANCE_COOLDOWN_MIN = 5
REAPPEARANCE_COOLDOWN_SPAN = 10
INITIAL_COOLDOWN_SPAN = 10

RESERVATION_REQUEST_PROBABILITY = 0.4
CHECK_IN_REQUEST_PROBABILITY = 0.4

RESERVATION_LEAD_MIN_DAYS = 3
RESERVATION_LEAD_SPAN = 15
STAY_MIN_NIGHTS = 1
STAY_SPAN = 7

MAX_INITIAL_TIMES_STAYED = 30

FIRST_INITIALS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

GUEST_SURNAMES = (
    "Dorning", "Lampkins", "Rockwood", "Vice", "Lyness", "Bludworth", "Gooder",
    "Pattison", "Speller", "Alkins", "Claytor", "Wand", "Safford", "Shute",
    "Beeton", "Hendrickson", "Rouse", "Clymer", "Willmott", "Bankes", "Higley",
    "Bowne", "Northway", "Seller", "Holway", "Shackleton", "Lemmond", "Pallett",
    "Leamons", "Roderick", "Pennings", "Gibbon", "Shattuck", "Wooldridge",
    "Sumter", "Trainer", "Huntington", "Haxby", "Hutt", "Colman", "Boord",
    "Jefferys", "Holeman", "Pringle", "Southwood", "Moak", "Rawley", "Fly",
    "Mugge", "Bellus", "Trevett", "Atwell", "Arnott", "Hipkins", "Heddings",
    "Yeatman", "Haggett", "Tew", "Coxey", "Downham", "Titley", "Ernest",
    "Pilgram", "Buzzard", "Broadaway", "Noe", "Dexter", "Hunnicutt", "Lester",
    "Pullen", "Rutland", "Dickman", "Pride", "Godel", "Birkes", "Kimm",
    "Liggett", "Meachum", "Allsup", "Havis", "Cleaton", "Neave", "Spray",
    "Tuck", "Flair", "Carpenter", "Boram", "Flesher", "Iams", "Devereux",
    "Bayman", "Goodwill", "Odham", "Duckett", "Hulse", "Rhoades", "Claypole",
    "Harsha", "Braddy", "Masser", "Marking", "Durall", "Throop", "Henton",
    "Crutcher", "Stanwick", "Harlan", "Ayling", "Thatch", "Weaks", "Purington",
    "Gaskin", "Grimmett", "Crow", "Gorrell", "Wayland", "Harlowe", "Lyford",
    "Letcher", "Howden", "Dison", "Knuckles", "Gibb", "Teel", "Haseley",
    "Paske", "Britcher", "Theodore", "Angel", "Keller", "Fugit", "Fleeman",
    "Mitchelson", "Grand", "Ryals", "Fall", "Clement", "Grahm", "Stokely",
    "Farrer", "Swindlehurst", "Harlin", "Prim", "Eddings", "Scarbro", "Musto",
    "Hodgins", "Flemmings", "Cornett", "Rover",
)


def choose_room_quality(rng: random.Random) -> RoomQuality:
    return pick(rng, tuple(RoomQuality))


def choose_membership_level(rng: random.Random) -> MembershipLevel:
    return pick(rng, tuple(MembershipLevel))


def start_reappearance_cooldown(guest: Guest, rng: random.Random) -> None:
    guest.reappearance_cooldown = REAPPEARANCE_COOLDOWN_MIN + random_offset(
        rng, REAPPEARANCE_COOLDOWN_SPAN
    )


class GuestGenerator:
    """Produces randomized guest identities for the game roster."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def generate_guest(self, uid: int) -> Guest:
        name = f"{self.generate_first_initial()}. {self.generate_last_name()}"
        membership_level = choose_membership_level(self._rng)
        times_stayed = random_offset(self._rng, MAX_INITIAL_TIMES_STAYED)
        return Guest(
            uid=uid,
            name=name,
            membership_level=membership_level,
            times_stayed=times_stayed,
            reappearance_cooldown=random_offset(self._rng, INITIAL_COOLDOWN_SPAN),
        )

    def generate_first_initial(self) -> str:
        return pick(self._rng, FIRST_INITIALS)

    def generate_last_name(self) -> str:
        return pick(self._rng, GUEST_SURNAMES)


def tick_guest(guest: Guest, game: "ConciergeGame") -> Optional[GuestRequest]:
    """Advance one guest by one day and return the request they raise, if any.

    Stages run in order: checkout, reservation lapse, re-engagement gating,
    then candidate generation. At most one candidate is returned.
    """
    rng = game.rng
    current_day = game.current_day

    reservation = guest.reservation
    if (
        guest.room_number is not None
        and reservation is not None
        and current_day == reservation.check_out_day
    ):
        start_reappearance_cooldown(guest, rng)
        game.hotel.check_out_guest(guest)
        logger.debug("Guest checkout | guest=%s | day=%s", guest.uid, current_day)

    reservation = guest.reservation
    if (
        guest.room_number is None
        and reservation is not None
        and reservation.check_in_day < current_day
    ):
        game.cancel_reservation(guest)
        logger.debug(
            "Reservation lapsed | guest=%s | check_in_day=%s | day=%s",
            guest.uid,
            reservation.check_in_day,
            current_day,
        )

    candidates: list[GuestRequest] = []

    if guest.room_number is None and guest.reservation is None:
        if guest.reappearance_cooldown > 0:
            guest.reappearance_cooldown -= 1
        if guest.reappearance_cooldown > 0:
            return None
        candidates.extend(_stay_requests(guest, current_day, rng))

    candidates.extend(_contextual_requests(guest, game))

    if not candidates:
        return None
    chosen = pick(rng, candidates)
    logger.debug(
        "Guest request | guest=%s | type=%s | day=%s",
        guest.uid,
        chosen.request_type.value,
        current_day,
    )
    return chosen


def _stay_requests(guest: Guest, current_day: int, rng: random.Random) -> list[GuestRequest]:
    requests: list[GuestRequest] = []

    if roll(rng, RESERVATION_REQUEST_PROBABILITY):
        check_in_day = current_day + RESERVATION_LEAD_MIN_DAYS + random_offset(
            rng, RESERVATION_LEAD_SPAN
        )
        check_out_day = check_in_day + STAY_MIN_NIGHTS + random_offset(rng, STAY_SPAN)
        requests.append(
            ReservationRequest(
                guest_uid=guest.uid,
                guest_name=guest.name,
                room_quality=choose_room_quality(rng),
                check_in_day=check_in_day,
                check_out_day=check_out_day,
            )
        )

    if roll(rng, CHECK_IN_REQUEST_PROBABILITY):
        check_in_day = current_day
        check_out_day = check_in_day + STAY_MIN_NIGHTS + random_offset(rng, STAY_SPAN)
        requests.append(
            CheckInRequest(
                guest_uid=guest.uid,
                guest_name=guest.name,
                room_quality=choose_room_quality(rng),
                check_in_day=check_in_day,
                check_out_day=check_out_day,
                has_reservation=False,
            )
        )

    return requests


def contextual_triggers(guest: Guest, room: Optional[Room]) -> list[str]:
    """Name the in-stay situations that could prompt a guest to ask for more."""
    triggers: list[str] = []
    if (
        guest.membership_level >= MembershipLevel.ELITE
        and room is not None
        and room.quality == RoomQuality.BASIC
    ):
        triggers.append("upgrade")
    if room is not None and room.quality == RoomQuality.BASIC:
        triggers.append("maintenance")
    if room is not None and room.quality == RoomQuality.DELUXE:
        triggers.append("spa")
    if guest.membership_level == MembershipLevel.ELITE:
        triggers.append("outrageous")
    return triggers


def _contextual_requests(guest: Guest, game: "ConciergeGame") -> list[GuestRequest]:
    room = game.hotel.get_room(guest.room_number) if guest.room_number is not None else None
    triggers = contextual_triggers(guest, room)
    if triggers:
        logger.debug("Contextual triggers | guest=%s | triggers=%s", guest.uid, triggers)
    # TODO: emit upgrade/maintenance/spa/elite request variants once their accept and decline effects are designed.
    return []
