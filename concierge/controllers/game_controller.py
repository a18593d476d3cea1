"""HTTP controller layer for playing a Concierge game."""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator, model_validator

from concierge.controllers.dependencies import get_session_service
from concierge.domain.errors import InvalidStateError, NotFoundError
from concierge.domain.models import HOTEL_REPUTATION_MAX, HOTEL_REPUTATION_MIN, Decision
from concierge.services.session_service import GameSessionService, SessionValidationError
from concierge.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["game"])


class NewGameRequest(BaseModel):
    """Setup screen input validated before entering service layer."""

    hotel_name: Optional[str] = Field(default=None, min_length=1, max_length=80)
    size: Optional[Literal["small", "medium", "large"]] = None
    num_rooms: Optional[int] = Field(default=None, gt=0, le=500)
    seed: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_room_source(self) -> "NewGameRequest":
        if self.size is not None and self.num_rooms is not None:
            raise ValueError("provide either size or num_rooms, not both")
        return self


class RenameHotelRequest(BaseModel):
    name: str = Field(min_length=1, max_length=80)

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class VacancyRow(BaseModel):
    quality: str
    vacant: int = Field(ge=0)
    total: int = Field(ge=0)


class StatusResponse(BaseModel):
    hotel_name: str
    day: int = Field(ge=0)
    reputation: int = Field(ge=HOTEL_REPUTATION_MIN, le=HOTEL_REPUTATION_MAX)
    reputation_min: int
    reputation_max: int
    rooms: list[VacancyRow]
    pending_request_count: int = Field(ge=0)
    future_reservation_count: int = Field(ge=0)


class RequestRow(BaseModel):
    index: int = Field(ge=0)
    request_type: str
    guest_uid: int = Field(ge=0)
    guest_name: str
    prompt_text: str
    accept_label: str
    decline_label: str
    room_quality: str
    check_in_day: int = Field(ge=0)
    check_out_day: int = Field(gt=0)
    has_reservation: Optional[bool] = None
    can_accept: bool


class ResolveRequestBody(BaseModel):
    decision: Decision


class ResolveResponse(BaseModel):
    day: int = Field(ge=0)
    request_type: str
    guest_uid: int = Field(ge=0)
    status: str
    room_number: Optional[int] = Field(default=None, gt=0)
    reputation: int = Field(ge=HOTEL_REPUTATION_MIN, le=HOTEL_REPUTATION_MAX)


class AdvanceDayResponse(BaseModel):
    day: int = Field(gt=0)
    request_count: int = Field(ge=0)
    matured_reservation_count: int = Field(ge=0)
    reputation: int = Field(ge=HOTEL_REPUTATION_MIN, le=HOTEL_REPUTATION_MAX)


class ReservationRow(BaseModel):
    guest_uid: int = Field(ge=0)
    guest_name: str
    room_quality: str
    check_in_day: int = Field(ge=0)
    check_out_day: int = Field(gt=0)


class GuestResponse(BaseModel):
    uid: int = Field(ge=0)
    name: str
    membership_level: str
    times_stayed: int = Field(ge=0)
    room_number: Optional[int] = Field(default=None, gt=0)
    is_current_guest: bool
    reservation: Optional[ReservationRow] = None


class EvictResponse(BaseModel):
    guest_uid: int = Field(ge=0)
    reputation: int = Field(ge=HOTEL_REPUTATION_MIN, le=HOTEL_REPUTATION_MAX)


def _to_http_exception(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidStateError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post(
    "/games",
    response_model=StatusResponse,
    status_code=status.HTTP_201_CREATED,
)
async def new_game(
    payload: NewGameRequest,
    service: GameSessionService = Depends(get_session_service),
) -> StatusResponse:
    """Start a fresh game, replacing the current one."""
    try:
        result = service.new_game(
            hotel_name=payload.hotel_name,
            size=payload.size,
            num_rooms=payload.num_rooms,
            seed=payload.seed,
        )
        return StatusResponse(**result)
    except SessionValidationError as exc:
        raise _to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected game setup failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to start game",
        ) from exc


@router.get("/status", response_model=StatusResponse)
async def get_status(
    service: GameSessionService = Depends(get_session_service),
) -> StatusResponse:
    return StatusResponse(**service.status())


@router.patch("/hotel", response_model=StatusResponse)
async def rename_hotel(
    payload: RenameHotelRequest,
    service: GameSessionService = Depends(get_session_service),
) -> StatusResponse:
    try:
        return StatusResponse(**service.rename_hotel(payload.name))
    except SessionValidationError as exc:
        raise _to_http_exception(exc) from exc


@router.get("/requests", response_model=list[RequestRow])
async def list_requests(
    service: GameSessionService = Depends(get_session_service),
) -> list[RequestRow]:
    return [RequestRow(**row) for row in service.list_requests()]


@router.post("/requests/{index}/resolve", response_model=ResolveResponse)
async def resolve_request(
    index: int,
    payload: ResolveRequestBody,
    service: GameSessionService = Depends(get_session_service),
) -> ResolveResponse:
    """Accept or decline one of today's requests; it leaves the queue on success."""
    try:
        return ResolveResponse(**service.resolve_request(index, payload.decision))
    except (NotFoundError, InvalidStateError) as exc:
        logger.warning(
            "Rejected resolve | index=%s | decision=%s | reason=%s",
            index,
            payload.decision.value,
            exc,
        )
        raise _to_http_exception(exc) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected request resolution failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to resolve request",
        ) from exc


@router.post("/advance_day", response_model=AdvanceDayResponse)
async def advance_day(
    service: GameSessionService = Depends(get_session_service),
) -> AdvanceDayResponse:
    try:
        return AdvanceDayResponse(**service.advance_day())
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected day advance failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to advance day",
        ) from exc


@router.get("/guests/current", response_model=list[GuestResponse])
async def list_current_guests(
    service: GameSessionService = Depends(get_session_service),
) -> list[GuestResponse]:
    return [GuestResponse(**row) for row in service.list_current_guests()]


@router.get("/guests/{uid}", response_model=GuestResponse)
async def get_guest(
    uid: int,
    service: GameSessionService = Depends(get_session_service),
) -> GuestResponse:
    try:
        return GuestResponse(**service.get_guest(uid))
    except NotFoundError as exc:
        raise _to_http_exception(exc) from exc


@router.post("/guests/{uid}/evict", response_model=EvictResponse)
async def evict_guest(
    uid: int,
    service: GameSessionService = Depends(get_session_service),
) -> EvictResponse:
    try:
        return EvictResponse(**service.evict_guest(uid))
    except (NotFoundError, InvalidStateError) as exc:
        logger.warning("Rejected eviction | guest=%s | reason=%s", uid, exc)
        raise _to_http_exception(exc) from exc


@router.get("/reservations", response_model=list[ReservationRow])
async def list_reservations(
    service: GameSessionService = Depends(get_session_service),
) -> list[ReservationRow]:
    return [ReservationRow(**row) for row in service.list_reservations()]
