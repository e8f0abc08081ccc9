"""
Travel request aggregate.

`TravelRequest` owns every booking component; deleting a request removes all
of them. Components carry a `BookingStatus` that starts at PENDING, while the
request itself moves through the `TravelStatus` lifecycle.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship
from sqlalchemy.sql import func

from ..database.base import Base, IdMixin, TimestampMixin, enum_type
from .enums import BookingStatus, CommunicationStatus, CommunicationType, PersonType, TravelStatus


def _owned(target: str, order_by=None):
    return relationship(
        target,
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=order_by,
    )


class TravelRequest(IdMixin, TimestampMixin, Base):
    __tablename__ = "travel_requests"

    # `TR-<epoch-ms>`, assigned once at creation
    request_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    created_by_id: Mapped[int | None] = mapped_column(Integer)
    trip_start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), index=True)
    trip_end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    status: Mapped[TravelStatus] = mapped_column(
        enum_type(TravelStatus), default=TravelStatus.REQUEST, nullable=False, index=True
    )
    notes: Mapped[str | None] = mapped_column(Text)

    destinations: Mapped[list["TravelDestination"]] = _owned(
        "TravelDestination", lambda: TravelDestination.sequence_order
    )
    passengers: Mapped[list["TripPassenger"]] = _owned("TripPassenger", lambda: TripPassenger.created_at)
    flights: Mapped[list["Flight"]] = _owned("Flight", lambda: Flight.departure_date)
    hotels: Mapped[list["Hotel"]] = _owned("Hotel", lambda: Hotel.check_in_date)
    trains: Mapped[list["Train"]] = _owned("Train", lambda: Train.departure_date)
    private_jets: Mapped[list["PrivateJet"]] = _owned("PrivateJet", lambda: PrivateJet.departure_date)
    rental_cars: Mapped[list["RentalCar"]] = _owned("RentalCar", lambda: RentalCar.pickup_date)
    cars_with_driver: Mapped[list["CarWithDriver"]] = _owned("CarWithDriver", lambda: CarWithDriver.pickup_date)
    events: Mapped[list["TravelEvent"]] = _owned("TravelEvent", lambda: TravelEvent.event_date)
    embassy_services: Mapped[list["EmbassyService"]] = _owned("EmbassyService")
    meet_assists: Mapped[list["MeetAssist"]] = _owned("MeetAssist", lambda: MeetAssist.service_date)
    communications: Mapped[list["TripCommunication"]] = _owned(
        "TripCommunication", lambda: TripCommunication.sent_at.desc()
    )
    status_history: Mapped[list["TravelStatusHistory"]] = _owned(
        "TravelStatusHistory", lambda: TravelStatusHistory.changed_at.desc()
    )

    def __repr__(self) -> str:
        return f"<TravelRequest(id={self.id!r}, number={self.request_number!r}, status={self.status!r})>"


# ======================================================================
# Component mixins
# ======================================================================

class TravelChildMixin:
    @declared_attr
    def travel_request_id(cls) -> Mapped[int]:
        return mapped_column(ForeignKey("travel_requests.id", ondelete="CASCADE"), nullable=False, index=True)


class BookingMixin(TravelChildMixin):
    booking_reference: Mapped[str | None] = mapped_column(String(100))
    status: Mapped[BookingStatus] = mapped_column(
        enum_type(BookingStatus), default=BookingStatus.PENDING, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)


class PersonRefMixin:
    person_type: Mapped[PersonType] = mapped_column(enum_type(PersonType), nullable=False)
    person_id: Mapped[int] = mapped_column(Integer, nullable=False)


# ======================================================================
# People and places
# ======================================================================

class TravelDestination(IdMixin, TravelChildMixin, TimestampMixin, Base):
    __tablename__ = "travel_destinations"

    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    arrival_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    departure_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    sequence_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)


class TripPassenger(IdMixin, TravelChildMixin, PersonRefMixin, TimestampMixin, Base):
    __tablename__ = "trip_passengers"

    is_main_passenger: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    notification_preference: Mapped[str] = mapped_column(String(20), default="ALL", nullable=False)
    receive_flight_details: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    receive_hotel_details: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    receive_event_details: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    receive_itinerary: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    __table_args__ = (
        UniqueConstraint("travel_request_id", "person_type", "person_id", name="uq_trip_passengers_person"),
    )


# ======================================================================
# Transport
# ======================================================================

class Flight(IdMixin, BookingMixin, TimestampMixin, Base):
    __tablename__ = "trip_flights"

    airline: Mapped[str | None] = mapped_column(String(100))
    flight_number: Mapped[str | None] = mapped_column(String(20))
    departure_airport: Mapped[str | None] = mapped_column(String(100))
    arrival_airport: Mapped[str | None] = mapped_column(String(100))
    departure_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    departure_time: Mapped[str | None] = mapped_column(String(10))
    arrival_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    arrival_time: Mapped[str | None] = mapped_column(String(10))
    # `class` on the wire
    flight_class: Mapped[str | None] = mapped_column(String(30))
    price: Mapped[float | None] = mapped_column(Float)
    terminal: Mapped[str | None] = mapped_column(String(20))
    gate: Mapped[str | None] = mapped_column(String(20))
    seat_numbers: Mapped[str | None] = mapped_column(String(100))
    baggage_allowance: Mapped[str | None] = mapped_column(String(100))
    meal_preference: Mapped[str | None] = mapped_column(String(50))
    aircraft_model: Mapped[str | None] = mapped_column(String(100))
    trip_type: Mapped[str | None] = mapped_column(String(30))
    special_requests: Mapped[str | None] = mapped_column(Text)

    passengers: Mapped[list["FlightPassenger"]] = _owned("FlightPassenger")


class FlightPassenger(IdMixin, PersonRefMixin, TimestampMixin, Base):
    __tablename__ = "trip_flight_passengers"

    flight_id: Mapped[int] = mapped_column(ForeignKey("trip_flights.id", ondelete="CASCADE"), nullable=False, index=True)
    seat_number: Mapped[str | None] = mapped_column(String(10))
    meal_preference: Mapped[str | None] = mapped_column(String(50))
    special_assistance: Mapped[str | None] = mapped_column(String(255))


class Train(IdMixin, BookingMixin, TimestampMixin, Base):
    __tablename__ = "trip_trains"

    train_number: Mapped[str | None] = mapped_column(String(30))
    route: Mapped[str | None] = mapped_column(String(255))
    departure_station: Mapped[str | None] = mapped_column(String(150))
    arrival_station: Mapped[str | None] = mapped_column(String(150))
    departure_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    departure_time: Mapped[str | None] = mapped_column(String(10))
    arrival_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    arrival_time: Mapped[str | None] = mapped_column(String(10))
    train_class: Mapped[str | None] = mapped_column(String(30))


class PrivateJet(IdMixin, BookingMixin, TimestampMixin, Base):
    __tablename__ = "trip_private_jets"

    aircraft_type: Mapped[str | None] = mapped_column(String(100))
    operator: Mapped[str | None] = mapped_column(String(150))
    tail_number: Mapped[str | None] = mapped_column(String(20))
    departure_airport: Mapped[str | None] = mapped_column(String(100))
    arrival_airport: Mapped[str | None] = mapped_column(String(100))
    departure_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    departure_time: Mapped[str | None] = mapped_column(String(10))
    arrival_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    arrival_time: Mapped[str | None] = mapped_column(String(10))
    passenger_capacity: Mapped[int | None] = mapped_column(Integer)
    amenities: Mapped[str | None] = mapped_column(Text)
    catering_details: Mapped[str | None] = mapped_column(Text)


class RentalCar(IdMixin, BookingMixin, TimestampMixin, Base):
    """Self-drive rental."""
    __tablename__ = "trip_rental_cars"

    rental_company: Mapped[str | None] = mapped_column(String(150))
    car_type: Mapped[str | None] = mapped_column(String(50))
    car_model: Mapped[str | None] = mapped_column(String(100))
    pickup_location: Mapped[str | None] = mapped_column(String(255))
    pickup_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    pickup_time: Mapped[str | None] = mapped_column(String(10))
    return_location: Mapped[str | None] = mapped_column(String(255))
    return_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    return_time: Mapped[str | None] = mapped_column(String(10))
    driver_person_type: Mapped[PersonType | None] = mapped_column(enum_type(PersonType))
    driver_person_id: Mapped[int | None] = mapped_column(Integer)
    additional_drivers: Mapped[list | None] = mapped_column(JSON)
    insurance_type: Mapped[str | None] = mapped_column(String(50))


class CarWithDriver(IdMixin, BookingMixin, TimestampMixin, Base):
    __tablename__ = "trip_cars_with_driver"

    rental_company: Mapped[str | None] = mapped_column(String(150))
    car_type: Mapped[str | None] = mapped_column(String(50))
    driver_name: Mapped[str | None] = mapped_column(String(150))
    driver_phone: Mapped[str | None] = mapped_column(String(50))
    number_of_passengers: Mapped[int | None] = mapped_column(Integer)
    pickup_location: Mapped[str | None] = mapped_column(String(255))
    pickup_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    pickup_time: Mapped[str | None] = mapped_column(String(10))
    return_location: Mapped[str | None] = mapped_column(String(255))
    return_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    return_time: Mapped[str | None] = mapped_column(String(10))


# ======================================================================
# Accommodation
# ======================================================================

class Hotel(IdMixin, BookingMixin, TimestampMixin, Base):
    __tablename__ = "trip_hotels"

    hotel_name: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    phone: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    check_in_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    check_out_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    confirmation_number: Mapped[str | None] = mapped_column(String(100))

    rooms: Mapped[list["HotelRoom"]] = _owned("HotelRoom", lambda: HotelRoom.created_at)


class HotelRoom(IdMixin, TimestampMixin, Base):
    __tablename__ = "trip_hotel_rooms"

    hotel_id: Mapped[int] = mapped_column(ForeignKey("trip_hotels.id", ondelete="CASCADE"), nullable=False, index=True)
    unit_category: Mapped[str | None] = mapped_column(String(50))
    room_number: Mapped[str | None] = mapped_column(String(20))
    bathrooms: Mapped[int | None] = mapped_column(Integer)
    has_pantry: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    guest_numbers: Mapped[int | None] = mapped_column(Integer)
    bed_type: Mapped[str | None] = mapped_column(String(50))
    connected_to_room: Mapped[str | None] = mapped_column(String(20))
    price_per_night: Mapped[float | None] = mapped_column(Float)

    assignments: Mapped[list["RoomAssignment"]] = _owned("RoomAssignment")


class RoomAssignment(IdMixin, PersonRefMixin, TimestampMixin, Base):
    __tablename__ = "trip_room_assignments"

    room_id: Mapped[int] = mapped_column(ForeignKey("trip_hotel_rooms.id", ondelete="CASCADE"), nullable=False, index=True)


# ======================================================================
# Services
# ======================================================================

class TravelEvent(IdMixin, BookingMixin, TimestampMixin, Base):
    __tablename__ = "trip_events"

    event_type: Mapped[str | None] = mapped_column(String(50))
    event_name: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    location: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(String(255))
    city: Mapped[str | None] = mapped_column(String(100))
    country: Mapped[str | None] = mapped_column(String(100))
    event_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    start_time: Mapped[str | None] = mapped_column(String(10))
    end_time: Mapped[str | None] = mapped_column(String(10))
    price_per_person: Mapped[float | None] = mapped_column(Float)
    total_price: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)
    contact_person: Mapped[str | None] = mapped_column(String(150))
    contact_phone: Mapped[str | None] = mapped_column(String(50))
    contact_email: Mapped[str | None] = mapped_column(String(255))
    dress_code: Mapped[str | None] = mapped_column(String(100))

    participants: Mapped[list["EventParticipant"]] = _owned("EventParticipant")


class EventParticipant(IdMixin, PersonRefMixin, TimestampMixin, Base):
    __tablename__ = "trip_event_participants"

    event_id: Mapped[int] = mapped_column(ForeignKey("trip_events.id", ondelete="CASCADE"), nullable=False, index=True)


class EmbassyService(IdMixin, TravelChildMixin, TimestampMixin, Base):
    __tablename__ = "trip_embassy_services"

    submission_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    arrival_contact_person: Mapped[str | None] = mapped_column(String(150))
    arrival_contact_phone: Mapped[str | None] = mapped_column(String(50))
    arrival_contact_email: Mapped[str | None] = mapped_column(String(255))
    same_departure_contact: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    departure_contact_person: Mapped[str | None] = mapped_column(String(150))
    departure_contact_phone: Mapped[str | None] = mapped_column(String(50))
    departure_contact_email: Mapped[str | None] = mapped_column(String(255))
    passengers_arrival_count: Mapped[int | None] = mapped_column(Integer)
    passengers_departure_count: Mapped[int | None] = mapped_column(Integer)
    arrival_time: Mapped[str | None] = mapped_column(String(10))
    departure_time: Mapped[str | None] = mapped_column(String(10))
    status: Mapped[BookingStatus] = mapped_column(
        enum_type(BookingStatus), default=BookingStatus.PENDING, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)


class MeetAssist(IdMixin, BookingMixin, TimestampMixin, Base):
    __tablename__ = "trip_meet_assist"

    service_type: Mapped[str | None] = mapped_column(String(50))
    service_provider: Mapped[str | None] = mapped_column(String(150))
    airport: Mapped[str | None] = mapped_column(String(20))
    airport_name: Mapped[str | None] = mapped_column(String(150))
    terminal: Mapped[str | None] = mapped_column(String(20))
    flight_number: Mapped[str | None] = mapped_column(String(20))
    service_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    service_time: Mapped[str | None] = mapped_column(String(10))
    meeting_point: Mapped[str | None] = mapped_column(String(255))
    greeter_name: Mapped[str | None] = mapped_column(String(150))
    greeter_phone: Mapped[str | None] = mapped_column(String(50))
    number_of_passengers: Mapped[int | None] = mapped_column(Integer)
    vip_level: Mapped[str | None] = mapped_column(String(30))
    includes_fast_track: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    includes_lounge: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    includes_porterage: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    includes_buggy: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    price_per_person: Mapped[float | None] = mapped_column(Float)
    total_price: Mapped[float | None] = mapped_column(Float)
    currency: Mapped[str] = mapped_column(String(3), default="USD", nullable=False)


# ======================================================================
# Audit
# ======================================================================

class TripCommunication(IdMixin, TravelChildMixin, TimestampMixin, Base):
    __tablename__ = "trip_communications"

    recipient_person_type: Mapped[PersonType | None] = mapped_column(enum_type(PersonType))
    recipient_person_id: Mapped[int | None] = mapped_column(Integer)
    communication_type: Mapped[CommunicationType] = mapped_column(enum_type(CommunicationType), nullable=False)
    content_type: Mapped[str | None] = mapped_column(String(100))
    subject: Mapped[str | None] = mapped_column(String(255))
    message: Mapped[str | None] = mapped_column(Text)
    html_content: Mapped[str | None] = mapped_column(Text)
    status: Mapped[CommunicationStatus] = mapped_column(
        enum_type(CommunicationStatus), default=CommunicationStatus.PENDING, nullable=False
    )
    external_message_id: Mapped[str | None] = mapped_column(String(100))
    error_message: Mapped[str | None] = mapped_column(Text)
    sent_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TravelStatusHistory(IdMixin, TravelChildMixin, Base):
    __tablename__ = "travel_status_history"

    from_status: Mapped[TravelStatus | None] = mapped_column(enum_type(TravelStatus))
    to_status: Mapped[TravelStatus] = mapped_column(enum_type(TravelStatus), nullable=False)
    changed_by_id: Mapped[int | None] = mapped_column(Integer)
    notes: Mapped[str | None] = mapped_column(Text)
    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
