"""
Travel requests, returned as the whole aggregate: destinations, passengers,
every booked component and the status history.
"""

from typing import Any, Iterable

from fastapi import APIRouter, Query, status

from ....core.dependencies import DbSession, EntityId
from ....mappers.serializer import serialize
from ....models.enums import TravelStatus
from ....models.travel import TravelRequest
from ....schemas.travel import TravelRequestCreate, TravelRequestUpdate
from ....services.travel_service import TravelRequestService
from ....validators.request_validators import parse_date, parse_enum
from ...helpers import envelope

router = APIRouter()


async def render_requests(service: TravelRequestService, requests: Iterable[TravelRequest]) -> list[dict[str, Any]]:
    """Each passenger carries `personDetails`, or null when the person is gone."""
    requests = list(requests)
    people = await service.passenger_details(requests)
    out = []
    for travel_request in requests:
        passengers = []
        for passenger in travel_request.passengers:
            person = people.get((passenger.person_type, passenger.person_id))
            passengers.append(serialize(passenger, extra={"personDetails": person.to_dict() if person else None}))
        out.append(serialize(travel_request, exclude={"passengers"}, extra={"passengers": passengers}))
    return out


async def render_request(service: TravelRequestService, travel_request: TravelRequest) -> dict[str, Any]:
    return (await render_requests(service, [travel_request]))[0]


@router.get("")
async def list_requests(
    db: DbSession,
    status: str | None = None,
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
) -> dict[str, Any]:
    service = TravelRequestService(db)
    requests = await service.list(
        status=parse_enum(status, TravelStatus, "status"),
        start_date=parse_date(start_date, "startDate"),
        end_date=parse_date(end_date, "endDate"),
    )
    return envelope(await render_requests(service, requests))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_request(body: TravelRequestCreate, db: DbSession) -> dict[str, Any]:
    service = TravelRequestService(db)
    travel_request = await service.create(
        body.to_fields(drop_none=True),
        destinations=body.nested_payload().get("destinations", ()),
    )
    return envelope(await render_request(service, travel_request))


@router.get("/{id}")
async def get_request(id: EntityId, db: DbSession) -> dict[str, Any]:
    service = TravelRequestService(db)
    return envelope(await render_request(service, await service.get(id)))


@router.put("/{id}")
async def update_request(id: EntityId, body: TravelRequestUpdate, db: DbSession) -> dict[str, Any]:
    service = TravelRequestService(db)
    travel_request = await service.update(id, body.to_fields())
    return envelope(await render_request(service, travel_request))


@router.delete("/{id}")
async def delete_request(id: EntityId, db: DbSession) -> dict[str, Any]:
    await TravelRequestService(db).delete(id)
    return {"success": True, "message": "Travel request deleted successfully"}
