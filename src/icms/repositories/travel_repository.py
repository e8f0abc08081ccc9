from datetime import datetime
from typing import Type

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.enums import TravelStatus
from ..models.travel import HotelRoom, TravelRequest, TravelStatusHistory, TripPassenger
from .base_repository import BaseRepository, ModelType
from .owned_repository import OwnedRepository


class TravelRequestRepository(BaseRepository[TravelRequest]):
    entity_name = "Travel request"
    duplicate_message = "A travel request with this request number already exists"

    def __init__(self, db: AsyncSession):
        super().__init__(TravelRequest, db)

    async def search(
        self,
        status: TravelStatus | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[TravelRequest]:
        conditions = []
        if status:
            conditions.append(TravelRequest.status == status)
        if start_date is not None:
            conditions.append(TravelRequest.trip_start_date >= start_date)
        if end_date is not None:
            conditions.append(TravelRequest.trip_end_date <= end_date)
        return await self.find_all(*conditions, order_by=(TravelRequest.created_at.desc(), TravelRequest.id.desc()))


class TravelComponentRepository(OwnedRepository[ModelType]):
    """One class serves every component table; the model is chosen per route."""

    parent_field = "travel_request_id"

    def __init__(self, model: Type[ModelType], db: AsyncSession, entity_name: str | None = None):
        super().__init__(model, db)
        self.entity_name = entity_name


class TripPassengerRepository(TravelComponentRepository[TripPassenger]):
    duplicate_message = "Passenger already added to this travel request"

    def __init__(self, db: AsyncSession):
        super().__init__(TripPassenger, db, entity_name="Passenger")


class HotelRoomRepository(OwnedRepository[HotelRoom]):
    entity_name = "Hotel room"
    parent_field = "hotel_id"
    default_order = (HotelRoom.created_at, HotelRoom.id)

    def __init__(self, db: AsyncSession):
        super().__init__(HotelRoom, db)


class TravelStatusHistoryRepository(OwnedRepository[TravelStatusHistory]):
    parent_field = "travel_request_id"
    default_order = (TravelStatusHistory.changed_at.desc(),)

    def __init__(self, db: AsyncSession):
        super().__init__(TravelStatusHistory, db)
