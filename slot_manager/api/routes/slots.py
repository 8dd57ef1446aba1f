# slot_manager/api/routes/slots.py
"""Slot management API routes (the settings panel actions)."""

from fastapi import APIRouter, Depends, HTTPException

from slot_manager.api.container import get_container
from slot_manager.api.schemas.slots import (
    AcquireRequest,
    AcquireResponse,
    ResizeRequest,
    RosterEntryResponse,
    RosterResponse,
    SlotPoolResponse,
    SlotResponse,
)
from slot_manager.container import Container
from slot_manager.core.errors import (
    SlotCapacityExhaustedError,
    SlotError,
    SlotInvalidArgumentError,
    SlotOutOfRangeError,
)
from slot_manager.hooks.dispatcher import HostEventType

router = APIRouter(prefix="/slots", tags=["slots"])


def _http_error(error: SlotError) -> HTTPException:
    if isinstance(error, SlotOutOfRangeError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, SlotCapacityExhaustedError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, SlotInvalidArgumentError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


def _pool_response(container: Container) -> SlotPoolResponse:
    pool = container.pool
    slots = pool.snapshot()
    used = sum(1 for s in slots if not s.is_free())
    return SlotPoolResponse(
        capacity=len(slots),
        used=used,
        available=len(slots) - used,
        slots=[
            SlotResponse(slot=s.slot_id, key=s.key, last_used=s.last_used)
            for s in slots
        ],
    )


@router.get("/", response_model=SlotPoolResponse)
def get_slots(container: Container = Depends(get_container)):
    """Current occupancy of every slot."""
    return _pool_response(container)


@router.get("/roster", response_model=RosterResponse)
def get_roster(container: Container = Depends(get_container)):
    """Used/available counts plus the characters holding slots."""
    roster = container.roster.render()
    return RosterResponse(
        used=roster.used,
        available=roster.available,
        characters=[
            RosterEntryResponse(slot=e.slot, name=e.name, avatar=e.avatar)
            for e in roster.characters
        ],
    )


@router.post("/resize", response_model=SlotPoolResponse)
def resize_slots(
    request: ResizeRequest,
    container: Container = Depends(get_container),
):
    """Update the slot count (configured default when omitted)."""
    try:
        container.dispatcher.dispatch(
            HostEventType.UPDATE_SLOT_COUNT,
            {"total_slots": request.total_slots},
        )
    except SlotError as e:
        raise _http_error(e)
    return _pool_response(container)


@router.post("/acquire", response_model=AcquireResponse)
def acquire_slot(
    request: AcquireRequest,
    container: Container = Depends(get_container),
):
    try:
        slots = container.dispatcher.dispatch(
            HostEventType.GENERATE_BEFORE_COMBINE_PROMPTS,
            {"char": request.key},
        )
    except SlotError as e:
        raise _http_error(e)
    return AcquireResponse(slot=slots[0], key=request.key)


@router.post("/release-all", response_model=SlotPoolResponse)
def release_all_slots(container: Container = Depends(get_container)):
    container.dispatcher.dispatch(HostEventType.RELEASE_ALL_SLOTS)
    return _pool_response(container)


@router.post("/{index}/release", response_model=SlotPoolResponse)
def release_slot(
    index: int,
    container: Container = Depends(get_container),
):
    try:
        container.dispatcher.dispatch(HostEventType.RELEASE_SLOT, {"slot": index})
    except SlotError as e:
        raise _http_error(e)
    return _pool_response(container)
