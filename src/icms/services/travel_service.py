"""
Travel requests and their booking components.

A request moves along REQUEST -> PLANNING -> CONFIRMING -> EXECUTING ->
COMPLETED one step at a time and may be CANCELLED from any non-terminal
state. Each change is written to the status history in the same transaction
as the status itself.

Components (flights, hotels, trains, ...) share one service class. Nested
children in a create body (flight passengers, hotel rooms with their guest
assignments, event participants) are built from the model's owned
relationships and inserted together with their parent.
"""

import logging
from typing import Any, Iterable, Type

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.unit_of_work import unit_of_work
from ..exceptions.base import DomainException, NotFoundException
from ..models.enums import TravelStatus
from ..models.travel import Hotel, HotelRoom, TravelDestination, TravelRequest, TravelStatusHistory, TripCommunication
from ..repositories.travel_repository import (
    HotelRoomRepository,
    TravelComponentRepository,
    TravelRequestRepository,
    TravelStatusHistoryRepository,
    TripPassengerRepository,
)
from ..utils.dates import epoch_millis
from .person_resolver import PersonDetails, PersonResolver

logger = logging.getLogger(__name__)

REQUEST_NOT_FOUND = "Travel request not found"

# relationship name -> child rows, as sent in a create body
NestedRows = dict[str, list[dict[str, Any]]]

NEXT_STATUS = {
    TravelStatus.REQUEST: TravelStatus.PLANNING,
    TravelStatus.PLANNING: TravelStatus.CONFIRMING,
    TravelStatus.CONFIRMING: TravelStatus.EXECUTING,
    TravelStatus.EXECUTING: TravelStatus.COMPLETED,
}


def generate_request_number() -> str:
    return f"TR-{epoch_millis()}"


def check_transition(current: TravelStatus, target: TravelStatus) -> None:
    """
    Raises:
        DomainException: `target` is not reachable from `current` (422).
    """
    if target == current:
        return
    if current.is_terminal:
        raise DomainException(
            f"Travel request is {current.value} and its status can no longer change",
            code="INVALID_STATUS_TRANSITION",
        )
    if target == TravelStatus.CANCELLED or NEXT_STATUS.get(current) == target:
        return
    raise DomainException(
        f"Cannot change travel request status from {current.value} to {target.value}",
        code="INVALID_STATUS_TRANSITION",
    )


def build_owned(model: type, relationship: str, rows: Iterable[dict[str, Any]]) -> list:
    """ORM children for `model.<relationship>`, recursing into their own owned collections."""
    target = sa_inspect(model).relationships[relationship].mapper.class_
    nested_keys = set(sa_inspect(target).relationships.keys())
    children = []
    for row in rows:
        values = dict(row)
        nested = {key: build_owned(target, key, values.pop(key)) for key in nested_keys & set(values)}
        children.append(target(**values, **nested))
    return children


# ======================================================================
# Requests
# ======================================================================

class TravelRequestService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.requests = TravelRequestRepository(db)
        self.history = TravelStatusHistoryRepository(db)
        self.persons = PersonResolver(db)

    async def list(self, **filters: Any) -> list[TravelRequest]:
        return await self.requests.search(**filters)

    async def get(self, request_id: int) -> TravelRequest:
        return await self.requests.get_by_id_or_raise(request_id, message=REQUEST_NOT_FOUND)

    async def passenger_details(self, requests: Iterable[TravelRequest]) -> dict[tuple, PersonDetails]:
        refs = [(p.person_type, p.person_id) for r in requests for p in r.passengers]
        return await self.persons.resolve_many(refs)

    async def create(self, fields: dict[str, Any], destinations: Iterable[dict[str, Any]] = ()) -> TravelRequest:
        """New requests always start at REQUEST with a fresh `TR-<epoch-ms>` number."""
        values = {k: v for k, v in fields.items() if v is not None and k not in ("status", "request_number")}
        stops = [
            TravelDestination(**{"sequence_order": i, **stop}) for i, stop in enumerate(destinations)
        ]
        opening = TravelStatusHistory(
            from_status=None,
            to_status=TravelStatus.REQUEST,
            changed_by_id=values.get("created_by_id"),
            notes="Travel request created",
        )
        async with unit_of_work(self.db, "TravelRequest"):
            travel_request = await self.requests.create(
                **values,
                request_number=generate_request_number(),
                status=TravelStatus.REQUEST,
                destinations=stops,
                status_history=[opening],
            )

        logger.info(
            "travel.request.created",
            extra={"id": travel_request.id, "request_number": travel_request.request_number},
        )
        return travel_request

    async def update(self, request_id: int, fields: dict[str, Any]) -> TravelRequest:
        """`request_number` is never changed. A status change is validated and recorded."""
        travel_request = await self.get(request_id)
        changes = dict(fields)
        changes.pop("request_number", None)
        changed_by = changes.pop("changed_by_id", None)
        change_notes = changes.pop("status_change_notes", None)

        target = changes.get("status")
        previous = travel_request.status
        status_changed = target is not None and target != previous
        if status_changed:
            check_transition(previous, target)

        async with unit_of_work(self.db, "TravelRequest"):
            if status_changed:
                await self.history.create(
                    travel_request_id=travel_request.id,
                    from_status=previous,
                    to_status=target,
                    changed_by_id=changed_by or changes.get("created_by_id") or travel_request.created_by_id,
                    notes=change_notes,
                )
            travel_request = await self.requests.update(travel_request, **changes)

        if status_changed:
            logger.info(
                "travel.request.status_changed",
                extra={"id": request_id, "from": previous.value, "to": TravelStatus(target).value},
            )
            await self.db.refresh(travel_request)
        return travel_request

    async def delete(self, request_id: int) -> None:
        """Every owned component goes with the request."""
        travel_request = await self.get(request_id)
        async with unit_of_work(self.db, "TravelRequest"):
            await self.requests.delete(travel_request)
        logger.info("travel.request.deleted", extra={"id": request_id})


# ======================================================================
# Components
# ======================================================================

class TravelComponentService:
    """CRUD for one component table of the travel aggregate."""

    def __init__(self, db: AsyncSession, model: Type, label: str, repository: TravelComponentRepository | None = None):
        self.db = db
        self.model = model
        self.label = label
        self.components = repository or TravelComponentRepository(model, db, entity_name=label)
        self.requests = TravelRequestRepository(db)

    @property
    def not_found_message(self) -> str:
        return f"{self.label} not found"

    async def _require_request(self, request_id: int) -> None:
        if not await self.requests.exists(request_id):
            raise NotFoundException("Travel request", request_id, message=REQUEST_NOT_FOUND)

    async def list(self, travel_request_id: int | None = None, **filters: Any) -> list:
        return await self.components.list_by(travel_request_id=travel_request_id, **filters)

    async def get(self, component_id: int):
        return await self.components.get_by_id_or_raise(component_id, message=self.not_found_message)

    async def create(self, fields: dict[str, Any], nested: NestedRows | None = None):
        values = {k: v for k, v in fields.items() if v is not None}
        await self._require_request(values.get("travel_request_id"))
        await self.validate(values)
        children = {name: build_owned(self.model, name, rows) for name, rows in (nested or {}).items()}

        async with unit_of_work(self.db, self.model.__name__):
            component = await self.components.create(**values, **children)

        logger.info(
            "travel.component.created",
            extra={
                "component": self.label,
                "id": component.id,
                "travel_request_id": component.travel_request_id,
                "children": {name: len(rows) for name, rows in children.items()},
            },
        )
        return component

    async def update(self, component_id: int, fields: dict[str, Any]):
        component = await self.get(component_id)
        request_id = fields.get("travel_request_id")
        if request_id is not None and request_id != component.travel_request_id:
            await self._require_request(request_id)
        async with unit_of_work(self.db, self.model.__name__):
            component = await self.components.update(component, **fields)
        return component

    async def delete(self, component_id: int) -> None:
        component = await self.get(component_id)
        async with unit_of_work(self.db, self.model.__name__):
            await self.components.delete(component)
        logger.info("travel.component.deleted", extra={"component": self.label, "id": component_id})

    async def validate(self, values: dict[str, Any]) -> None:
        """Extra checks before insert; none by default."""


class PassengerService(TravelComponentService):
    """Passengers must point at a person that exists."""

    def __init__(self, db: AsyncSession):
        repository = TripPassengerRepository(db)
        super().__init__(db, repository.model, "Passenger", repository)
        self.persons = PersonResolver(db)

    async def validate(self, values: dict[str, Any]) -> None:
        await self.persons.resolve_or_raise(values["person_type"], values["person_id"])


class HotelService(TravelComponentService):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Hotel, "Hotel")
        self.rooms = HotelRoomRepository(db)

    async def list_rooms(self, hotel_id: int) -> list[HotelRoom]:
        await self.get(hotel_id)
        return await self.rooms.list_for_parent(hotel_id)

    async def get_room(self, hotel_id: int, room_id: int) -> HotelRoom:
        room = await self.rooms.get_by_id(room_id)
        if room is None or room.hotel_id != hotel_id:
            raise NotFoundException("Hotel room", room_id, message="Room not found")
        return room

    async def add_room(self, hotel_id: int, fields: dict[str, Any], assignments: Iterable[dict[str, Any]] = ()) -> HotelRoom:
        await self.get(hotel_id)
        guests = build_owned(HotelRoom, "assignments", assignments)
        async with unit_of_work(self.db, "HotelRoom"):
            room = await self.rooms.create(**fields, hotel_id=hotel_id, assignments=guests)
        return room

    async def update_room(self, hotel_id: int, room_id: int, fields: dict[str, Any]) -> HotelRoom:
        room = await self.get_room(hotel_id, room_id)
        async with unit_of_work(self.db, "HotelRoom"):
            room = await self.rooms.update(room, **fields)
        return room

    async def delete_room(self, hotel_id: int, room_id: int) -> None:
        room = await self.get_room(hotel_id, room_id)
        async with unit_of_work(self.db, "HotelRoom"):
            await self.rooms.delete(room)


class CommunicationService(TravelComponentService):
    """Communication log. Reads carry the resolved recipient name and contact."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, TripCommunication, "Communication")
        self.persons = PersonResolver(db)

    async def list(self, travel_request_id: int | None = None, **filters: Any) -> list[TripCommunication]:
        return await self.components.list_by(
            order_by=(TripCommunication.sent_at.desc(), TripCommunication.id.desc()),
            travel_request_id=travel_request_id,
            **filters,
        )

    async def recipients(self, communications: Iterable[TripCommunication]) -> dict[int, dict[str, str]]:
        """`{communication id: {"recipientName", "recipientContact"}}`, "Unknown" when unresolved."""
        out = {}
        for comm in communications:
            person = await self.persons.resolve(comm.recipient_person_type, comm.recipient_person_id)
            out[comm.id] = {
                "recipientName": person.name if person and person.name else "Unknown",
                "recipientContact": (person.contact if person else None) or "",
            }
        return out
