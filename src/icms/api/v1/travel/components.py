"""
Booking components of a travel request.

All component tables expose the same CRUD; `component_router` builds it from
the service that owns the table and the create body. Update bodies are the
create body with every field optional.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Type

from fastapi import APIRouter, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ....core.dependencies import DbSession, EntityId
from ....mappers.serializer import serialize, serialize_many
from ....models.enums import BookingStatus, CommunicationStatus
from ....models.travel import CarWithDriver, EmbassyService, Flight, MeetAssist, PrivateJet, RentalCar, Train, TravelEvent
from ....schemas.base import CamelModel, make_partial
from ....schemas.travel import (
    CarWithDriverCreate,
    CommunicationCreate,
    EmbassyServiceCreate,
    EventCreate,
    FlightCreate,
    HotelCreate,
    HotelRoomIn,
    MeetAssistCreate,
    PassengerCreate,
    PrivateJetCreate,
    RentalCarCreate,
    TrainCreate,
)
from ....services.travel_service import CommunicationService, HotelService, PassengerService, TravelComponentService
from ....validators.request_validators import parse_enum
from ...helpers import envelope, optional_id


def booking(model: type, label: str) -> Callable[[AsyncSession], TravelComponentService]:
    def make(db: AsyncSession) -> TravelComponentService:
        return TravelComponentService(db, model, label)
    return make


@dataclass
class Component:
    label: str
    service: Callable[[AsyncSession], TravelComponentService]
    create_schema: Type[CamelModel]
    # None when the table has no status column
    status_enum: Type[Enum] | None = BookingStatus


async def render_components(service: TravelComponentService, rows: list) -> list[dict[str, Any]]:
    if isinstance(service, CommunicationService):
        recipients = await service.recipients(rows)
        return [serialize(row, extra=recipients[row.id]) for row in rows]
    return serialize_many(rows)


def component_router(component: Component) -> APIRouter:
    router = APIRouter()
    Create = component.create_schema
    Update = make_partial(Create, Create.__name__.replace("Create", "Update"))

    @router.get("")
    async def list_components(
        db: DbSession,
        travel_request_id: str | None = Query(None, alias="travelRequestId"),
        status: str | None = None,
    ) -> dict[str, Any]:
        filters = {}
        if component.status_enum is not None:
            filters["status"] = parse_enum(status, component.status_enum, "status")
        service = component.service(db)
        rows = await service.list(optional_id(travel_request_id, "travelRequestId"), **filters)
        return envelope(await render_components(service, rows))

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_component(body: Create, db: DbSession) -> dict[str, Any]:  # type: ignore[valid-type]
        service = component.service(db)
        row = await service.create(body.to_fields(drop_none=True), nested=body.nested_payload())
        return envelope((await render_components(service, [row]))[0])

    @router.get("/{id}")
    async def get_component(id: EntityId, db: DbSession) -> dict[str, Any]:
        service = component.service(db)
        return envelope((await render_components(service, [await service.get(id)]))[0])

    @router.put("/{id}")
    async def update_component(id: EntityId, body: Update, db: DbSession) -> dict[str, Any]:  # type: ignore[valid-type]
        service = component.service(db)
        row = await service.update(id, body.to_fields())
        return envelope((await render_components(service, [row]))[0])

    @router.delete("/{id}")
    async def delete_component(id: EntityId, db: DbSession) -> dict[str, Any]:
        await component.service(db).delete(id)
        return {"success": True, "message": f"{component.label} deleted successfully"}

    return router


COMPONENTS = {
    "flights": Component("Flight", booking(Flight, "Flight"), FlightCreate),
    "hotels": Component("Hotel", HotelService, HotelCreate),
    "trains": Component("Train", booking(Train, "Train"), TrainCreate),
    "private-jets": Component("Private jet", booking(PrivateJet, "Private jet"), PrivateJetCreate),
    "rental-cars-self-drive": Component("Rental car", booking(RentalCar, "Rental car"), RentalCarCreate),
    "cars-with-driver": Component("Car with driver", booking(CarWithDriver, "Car with driver"), CarWithDriverCreate),
    "events": Component("Event", booking(TravelEvent, "Event"), EventCreate),
    "embassy-services": Component("Embassy service", booking(EmbassyService, "Embassy service"), EmbassyServiceCreate),
    "meet-assist": Component("Meet and assist", booking(MeetAssist, "Meet and assist"), MeetAssistCreate),
    "passengers": Component("Passenger", PassengerService, PassengerCreate, status_enum=None),
    "communications": Component("Communication", CommunicationService, CommunicationCreate, CommunicationStatus),
}


# ======================================================================
# Hotel rooms
# ======================================================================

hotel_rooms_router = APIRouter()


@hotel_rooms_router.get("/{id}/rooms")
async def list_hotel_rooms(id: EntityId, db: DbSession) -> dict[str, Any]:
    return envelope(serialize_many(await HotelService(db).list_rooms(id)))


@hotel_rooms_router.post("/{id}/rooms", status_code=status.HTTP_201_CREATED)
async def add_hotel_room(id: EntityId, body: HotelRoomIn, db: DbSession) -> dict[str, Any]:
    """Guest assignments in the body are created with the room."""
    room = await HotelService(db).add_room(
        id, body.to_fields(drop_none=True), assignments=body.nested_payload().get("assignments", ())
    )
    return envelope(serialize(room))
