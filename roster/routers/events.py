from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from roster.domain.models import Event, PaymentStatus, RosterModel
from roster.services.event_service import EventService
from roster.services.responses import ApiResponse

router = APIRouter(prefix="/events", tags=["events"])


class ParticipantSelection(RosterModel):
    user_ids: list[str]


class PaymentStatusUpdate(RosterModel):
    payment_status: PaymentStatus


def _get_event_service(request: Request) -> EventService:
    svc = getattr(getattr(request.app, "state", None), "event_service", None)
    if not svc:
        raise RuntimeError("EventService not configured")
    return svc


def _respond(result: ApiResponse) -> JSONResponse:
    return JSONResponse(result.to_payload(), status_code=result.status_code)


@router.get("")
def list_events(request: Request, search: Optional[str] = None):
    return _respond(_get_event_service(request).list_events(search))


@router.post("")
def create_event(event: Event, request: Request):
    return _respond(_get_event_service(request).save_event(event))


@router.get("/{event_id}")
def get_event(event_id: str, request: Request):
    return _respond(_get_event_service(request).get_event(event_id))


@router.put("/{event_id}")
def update_event(event_id: str, event: Event, request: Request):
    return _respond(_get_event_service(request).save_event(event.model_copy(update={"id": event_id})))


@router.delete("/{event_id}")
def delete_event(event_id: str, request: Request):
    return _respond(_get_event_service(request).delete_event(event_id))


@router.put("/{event_id}/participants")
def set_participants(event_id: str, selection: ParticipantSelection, request: Request):
    return _respond(_get_event_service(request).set_participants(event_id, selection.user_ids))


@router.post("/{event_id}/participants/{user_id}")
def add_participant(event_id: str, user_id: str, request: Request):
    return _respond(_get_event_service(request).add_participant(event_id, user_id))


@router.delete("/{event_id}/participants/{user_id}")
def remove_participant(event_id: str, user_id: str, request: Request):
    return _respond(_get_event_service(request).remove_participant(event_id, user_id))


@router.put("/{event_id}/participants/{user_id}/payment-status")
def update_payment_status(event_id: str, user_id: str, update: PaymentStatusUpdate, request: Request):
    return _respond(
        _get_event_service(request).update_payment_status(event_id, user_id, update.payment_status)
    )
